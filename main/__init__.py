"""Project package for the profile enrolment service"""

from main.celery import app as celery_app

__all__ = ("celery_app",)
