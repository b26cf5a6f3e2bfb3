"""Factories for enrolment presets"""

import factory
from factory.django import DjangoModelFactory

from enrolprofile.models import Preset


class PresetFactory(DjangoModelFactory):
    """
    Factory for Presets

    Creating presets this way doesn't send any preset signals.
    """

    name = factory.Sequence(lambda number: f"Preset {number}")
    category = None
    course = None
    tag = None

    class Meta:
        model = Preset
