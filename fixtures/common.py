"""Common fixtures"""
# pylint: disable=unused-argument, redefined-outer-name

import pytest
from rest_framework.test import APIClient

from courses.factories import RoleFactory
from enrolprofile.api import set_up_profile_fields
from users.factories import UserFactory


@pytest.fixture
def user(db):
    """Creates a user"""
    return UserFactory.create()


@pytest.fixture
def staff_user(db):
    """Staff user fixture"""
    return UserFactory.create(is_staff=True)


@pytest.fixture
def user_drf_client(user):
    """DRF API test client that is authenticated with the user"""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_drf_client(admin_user):
    """DRF API test client with admin user"""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def student_role(db):
    """The role granted by cohort enrollment methods"""
    return RoleFactory.create(shortname="student", name="Student")


@pytest.fixture
def profile_fields(db):
    """Creates the item profile fields and the enrolled until field"""
    set_up_profile_fields()
