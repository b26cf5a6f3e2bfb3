"""
Django App
"""

from django.apps import AppConfig


class CohortsConfig(AppConfig):
    """AppConfig for Cohorts"""

    name = "cohorts"
