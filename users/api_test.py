"""Tests for the users API"""

import pytest

from users.api import (
    add_profile_field_item,
    delete_profile_field_item,
    delete_profile_fields,
    get_or_create_profile_field,
    get_profile_field,
    get_user_profile_field_data,
    rename_profile_field_data,
    set_user_profile_field_data,
    update_profile_field_item,
)
from users.constants import PROFILE_FIELD_DATATYPE_DATETIME
from users.factories import (
    ProfileFieldDataFactory,
    ProfileFieldFactory,
    UserFactory,
)
from users.models import ProfileField, ProfileFieldData

pytestmark = pytest.mark.django_db


@pytest.fixture
def course_field():
    """An autocomplete profile field with a few allowed values"""
    return ProfileFieldFactory.create(shortname="course", param1="Biology\nPhysics")


def test_add_profile_field_item_sorted(course_field):
    """Adding a value keeps the allowed values sorted"""
    assert add_profile_field_item("course", "Chemistry") is True
    course_field.refresh_from_db()
    assert course_field.param1 == "Biology\nChemistry\nPhysics"


def test_add_profile_field_item_existing(course_field):
    """Adding a value that's already allowed changes nothing"""
    assert add_profile_field_item("course", "Physics") is False
    course_field.refresh_from_db()
    assert course_field.param1 == "Biology\nPhysics"


def test_add_profile_field_item_empty_field():
    """The first value of a field is stored on its own"""
    field = ProfileFieldFactory.create(shortname="tag", param1="")
    assert add_profile_field_item("tag", "online") is True
    field.refresh_from_db()
    assert field.param1 == "online"


def test_profile_field_items_missing_field():
    """Changes to a profile field that doesn't exist are no-ops"""
    assert add_profile_field_item("missing", "value") is False
    assert delete_profile_field_item("missing", "value") is False
    assert update_profile_field_item("missing", "value", "other") is False
    assert rename_profile_field_data("missing", "value", "other") == 0


@pytest.mark.parametrize(
    "item, expected_changed, expected_param1",  # noqa: PT006
    [
        ("Biology", True, "Physics"),
        ("Chemistry", False, "Biology\nPhysics"),
    ],
)
def test_delete_profile_field_item(
    course_field, item, expected_changed, expected_param1
):
    """Deleting a value only changes the field if the value was allowed"""
    assert delete_profile_field_item("course", item) is expected_changed
    course_field.refresh_from_db()
    assert course_field.param1 == expected_param1


def test_update_profile_field_item(course_field):
    """Replacing a value re-sorts the allowed values"""
    assert update_profile_field_item("course", "Biology", "Zoology") is True
    course_field.refresh_from_db()
    assert course_field.param1 == "Physics\nZoology"


def test_update_profile_field_item_to_existing_value(course_field):
    """Replacing a value with one that's already allowed doesn't duplicate it"""
    assert update_profile_field_item("course", "Biology", "Physics") is True
    course_field.refresh_from_db()
    assert course_field.param1 == "Physics"


def test_rename_profile_field_data(course_field):
    """Only exact tokens are replaced, at the same position"""
    users = UserFactory.create_batch(4)
    ProfileFieldDataFactory.create(user=users[0], field=course_field, data="Physics, Biology")
    ProfileFieldDataFactory.create(user=users[1], field=course_field, data="Biology")
    ProfileFieldDataFactory.create(
        user=users[2], field=course_field, data="Marine Biology, Physics"
    )
    ProfileFieldDataFactory.create(user=users[3], field=course_field, data="Physics")

    assert rename_profile_field_data("course", "Biology", "Life sciences") == 2

    assert get_user_profile_field_data(users[0], "course") == [
        "Physics",
        "Life sciences",
    ]
    assert get_user_profile_field_data(users[1], "course") == ["Life sciences"]
    assert get_user_profile_field_data(users[2], "course") == [
        "Marine Biology",
        "Physics",
    ]
    assert get_user_profile_field_data(users[3], "course") == ["Physics"]


def test_rename_profile_field_data_other_field(course_field):
    """Data stored for other fields is left alone"""
    other_field = ProfileFieldFactory.create(shortname="category")
    user = UserFactory.create()
    ProfileFieldDataFactory.create(user=user, field=other_field, data="Biology")

    assert rename_profile_field_data("course", "Biology", "Life sciences") == 0
    assert get_user_profile_field_data(user, "category") == ["Biology"]


def test_get_or_create_profile_field():
    """An existing field is returned untouched"""
    field, created = get_or_create_profile_field(
        "enrolleduntil",
        "Keep enrolment until",
        PROFILE_FIELD_DATATYPE_DATETIME,
        param1="2023",
        param2="2050",
    )
    assert created is True
    assert field.param1 == "2023"

    same_field, created = get_or_create_profile_field(
        "enrolleduntil", "Other name", PROFILE_FIELD_DATATYPE_DATETIME
    )
    assert created is False
    assert same_field == field
    assert same_field.name == "Keep enrolment until"


def test_set_user_profile_field_data(user, course_field):
    """A user's selection is stored joined and can be overwritten"""
    set_user_profile_field_data(user, "course", ["Biology", "Physics"])
    assert ProfileFieldData.objects.get(user=user, field=course_field).data == (
        "Biology, Physics"
    )

    set_user_profile_field_data(user, "course", ["Physics"])
    assert get_user_profile_field_data(user, "course") == ["Physics"]
    assert get_user_profile_field_data(user, "category") == []


def test_delete_profile_fields(user, course_field):
    """Deleting profile fields deletes the users' data for them too"""
    keep = ProfileFieldFactory.create(shortname="interests")
    ProfileFieldDataFactory.create(user=user, field=course_field, data="Biology")
    ProfileFieldDataFactory.create(user=user, field=keep, data="Reading")

    assert delete_profile_fields(["course", "tag"]) == 1

    assert get_profile_field("course") is None
    assert list(ProfileField.objects.all()) == [keep]
    assert ProfileFieldData.objects.filter(user=user).count() == 1


def test_rename_profile_field_data_to_selected_value(course_field):
    """A selection that already includes the new value doesn't get it twice"""
    user, other_user = UserFactory.create_batch(2)
    ProfileFieldDataFactory.create(user=user, field=course_field, data="Physics, Biology")
    ProfileFieldDataFactory.create(
        user=other_user, field=course_field, data="Biology, Chemistry"
    )

    assert rename_profile_field_data("course", "Biology", "Physics") == 2

    assert get_user_profile_field_data(user, "course") == ["Physics"]
    assert get_user_profile_field_data(other_user, "course") == [
        "Physics",
        "Chemistry",
    ]
