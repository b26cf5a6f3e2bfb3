"""Exceptions for the enrolprofile app"""


class TaskDataValidationError(ValueError):
    """Raised if a task payload is missing a required field"""


class CohortNotFoundError(Exception):
    """Raised if a task expects an item to already have a cohort but it doesn't"""


class PresetNotFoundError(Exception):
    """Raised if a preset being changed doesn't exist"""
