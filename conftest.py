"""Project conftest"""

import pytest

from fixtures.common import *  # noqa: F403


@pytest.fixture(autouse=True)
def default_settings(settings):  # noqa: PT004
    """Set default settings for all tests"""
    settings.ENROLPROFILE_STUDENT_ROLE = "student"
    settings.ENROLPROFILE_PROFILE_FIELD_CATEGORY = "Profile field"
