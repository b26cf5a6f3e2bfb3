"""Factory for Users"""

from factory import Faker, Sequence, SubFactory
from factory.django import DjangoModelFactory
from factory.fuzzy import FuzzyText

from users.constants import PROFILE_FIELD_DATATYPE_AUTOCOMPLETE
from users.models import ProfileField, ProfileFieldCategory, ProfileFieldData, User


class UserFactory(DjangoModelFactory):
    """Factory for Users"""

    username = Sequence(lambda number: f"user{number}")
    email = Sequence(lambda number: f"user{number}@example.com")
    name = Faker("name")
    password = FuzzyText(length=8)
    is_superuser = False
    is_staff = False

    is_active = True

    class Meta:
        model = User


class ProfileFieldCategoryFactory(DjangoModelFactory):
    """Factory for ProfileFieldCategory"""

    name = Sequence(lambda number: f"Profile field category {number}")

    class Meta:
        model = ProfileFieldCategory


class ProfileFieldFactory(DjangoModelFactory):
    """Factory for ProfileField"""

    shortname = Sequence(lambda number: f"field{number}")
    name = Faker("word")
    datatype = PROFILE_FIELD_DATATYPE_AUTOCOMPLETE
    category = SubFactory(ProfileFieldCategoryFactory)
    param1 = ""
    param2 = "1"

    class Meta:
        model = ProfileField


class ProfileFieldDataFactory(DjangoModelFactory):
    """Factory for ProfileFieldData"""

    user = SubFactory(UserFactory)
    field = SubFactory(ProfileFieldFactory)
    data = ""

    class Meta:
        model = ProfileFieldData
