"""
Django App
"""

from django.apps import AppConfig


class EnrolprofileConfig(AppConfig):
    """AppConfig for enrolprofile"""

    name = "enrolprofile"

    def ready(self):
        from enrolprofile import signals  # noqa: F401
