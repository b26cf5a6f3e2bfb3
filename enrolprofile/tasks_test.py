"""Tests for enrolprofile tasks"""

import pytest
from celery.result import EagerResult

from cohorts.api import get_cohort_by_item
from cohorts.models import Cohort, CohortEnrollmentMethod
from courses.factories import CourseFactory
from courses.models import Role
from enrolprofile import tasks
from enrolprofile.constants import ItemType
from enrolprofile.exceptions import CohortNotFoundError, TaskDataValidationError
from enrolprofile.factories import PresetFactory

pytestmark = [pytest.mark.django_db, pytest.mark.usefixtures("profile_fields")]


def test_tasks_run_in_process(mocker):
    """Queued tasks run in-process during tests, without a broker"""
    patched_rename_item = mocker.patch("enrolprofile.api.rename_item")

    result = tasks.rename_item.delay(3, "course", "Physics")

    assert isinstance(result, EagerResult)
    patched_rename_item.assert_called_once_with(3, "course", "Physics")


def test_add_item(mocker, student_role):
    """add_item passes the payload and the student role to the API"""
    patched_add_item = mocker.patch("enrolprofile.api.add_item")

    tasks.add_item.delay(3, "course", "Physics", [3])

    patched_add_item.assert_called_once_with(3, "course", "Physics", [3], student_role)


def test_add_item_creates_role(mocker):
    """The student role is created if it doesn't exist"""
    patched_add_item = mocker.patch("enrolprofile.api.add_item")

    tasks.add_item.delay(3, "course", "Physics")

    role = Role.objects.get(shortname="student")
    patched_add_item.assert_called_once_with(3, "course", "Physics", [], role)


@pytest.mark.parametrize(
    "task, kwargs",  # noqa: PT006
    [
        (tasks.add_item, {"item_id": None, "item_type": "tag", "item_name": "x"}),
        (tasks.rename_item, {"item_id": 1, "item_type": "", "item_name": "x"}),
        (tasks.remove_item, {"item_id": 1, "item_type": "tag", "item_name": None}),
        (
            tasks.remove_enrolment_method,
            {"item_id": 1, "item_type": "tag", "course_id": None},
        ),
        (
            tasks.update_course_category,
            {
                "course_id": None,
                "category_id": 1,
                "old_category_id": 2,
                "category_name": "x",
            },
        ),
    ],
)
def test_invalid_payload(task, kwargs):
    """Tasks with a missing payload field fail"""
    with pytest.raises(TaskDataValidationError):
        task.delay(**kwargs)


def test_add_item_rolls_back(mocker, student_role):
    """A failing task leaves no partial changes behind"""
    course = CourseFactory.create()
    mocker.patch("enrolprofile.api.add_profile_field_item", side_effect=ValueError)

    with pytest.raises(ValueError):  # noqa: PT011
        tasks.add_item.delay(course.id, "course", course.title, [course.id])

    assert Cohort.objects.count() == 0


def test_rename_and_remove_item(student_role):
    """Tasks run the reconciler end to end"""
    course = CourseFactory.create(title="Physics")
    tasks.add_item.delay(course.id, "course", "Physics", [course.id])

    tasks.rename_item.delay(course.id, "course", "Astrophysics")
    assert get_cohort_by_item(ItemType.COURSE, course.id).name == "Astrophysics"

    tasks.remove_enrolment_method.delay(course.id, "course", course.id)
    assert CohortEnrollmentMethod.objects.count() == 0

    tasks.remove_item.delay(course.id, "course", "Astrophysics")
    assert get_cohort_by_item(ItemType.COURSE, course.id) is None


def test_update_course_category(mocker, student_role):
    """update_course_category passes the payload and the student role to the API"""
    patched_update = mocker.patch("enrolprofile.api.update_course_category")

    tasks.update_course_category.delay(5, 2, None, "Science")

    patched_update.assert_called_once_with(5, 2, None, "Science", student_role)


def test_update_preset_data(student_role):
    """update_preset_data updates the preset's enrollment methods"""
    course, other_course = CourseFactory.create_batch(2)
    preset = PresetFactory.create(name="Bundle", course=str(course.id))
    tasks.add_item.delay(preset.id, "preset", "Bundle", [course.id])

    tasks.update_preset_data.delay(
        preset.id,
        "preset",
        "Bundle",
        None,
        None,
        str(other_course.id),
        str(course.id),
        None,
        None,
    )

    assert set(
        CohortEnrollmentMethod.objects.filter(
            cohort__item_type=ItemType.PRESET
        ).values_list("course_id", flat=True)
    ) == {other_course.id}


def test_update_preset_data_without_cohort(student_role):
    """update_preset_data fails for a preset that was never set up"""
    preset = PresetFactory.create(course="1")
    with pytest.raises(CohortNotFoundError):
        tasks.update_preset_data.delay(
            preset.id, "preset", preset.name, None, None, "1", None, None, None
        )


def test_update_preset_data_missing_field():
    """The previous and new selections must be part of the payload"""
    with pytest.raises(TypeError):
        tasks.update_preset_data.delay(1, "preset", "Bundle", None, None, None)
