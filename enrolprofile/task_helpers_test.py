"""Tests for enrolprofile task helpers"""

import pytest

from enrolprofile import task_helpers
from enrolprofile.constants import ItemType

pytestmark = pytest.mark.django_db


def test_queue_add_item(mocker, django_capture_on_commit_callbacks):
    """The task is only queued once the transaction commits"""
    patched_delay = mocker.patch("enrolprofile.tasks.add_item.delay")

    with django_capture_on_commit_callbacks() as callbacks:
        task_helpers.queue_add_item(4, ItemType.TAG, "online", {9, 2})
        patched_delay.assert_not_called()

    assert len(callbacks) == 1
    callbacks[0]()
    patched_delay.assert_called_once_with(
        item_id=4, item_type="tag", item_name="online", course_ids=[2, 9]
    )


@pytest.mark.parametrize(
    "helper, args, task_name, expected_kwargs",  # noqa: PT006
    [
        (
            task_helpers.queue_rename_item,
            (1, ItemType.CATEGORY, "Science"),
            "rename_item",
            {"item_id": 1, "item_type": "category", "item_name": "Science"},
        ),
        (
            task_helpers.queue_remove_item,
            (2, ItemType.COURSE, "Physics"),
            "remove_item",
            {"item_id": 2, "item_type": "course", "item_name": "Physics"},
        ),
        (
            task_helpers.queue_remove_enrolment_method,
            (3, ItemType.TAG, 7),
            "remove_enrolment_method",
            {"item_id": 3, "item_type": "tag", "course_id": 7},
        ),
        (
            task_helpers.queue_update_course_category,
            (7, 2, 1, "Science"),
            "update_course_category",
            {
                "course_id": 7,
                "category_id": 2,
                "old_category_id": 1,
                "category_name": "Science",
            },
        ),
        (
            task_helpers.queue_update_preset_data,
            (5, "Bundle", {"categories": "1", "oldtags": "2"}),
            "update_preset_data",
            {
                "item_id": 5,
                "item_type": "preset",
                "item_name": "Bundle",
                "categories": "1",
                "oldcategories": None,
                "courses": None,
                "oldcourses": None,
                "tags": None,
                "oldtags": "2",
            },
        ),
    ],
)
def test_queue_helpers(  # noqa: PLR0913
    mocker, django_capture_on_commit_callbacks, helper, args, task_name, expected_kwargs
):
    """Each helper queues its task with the event payload"""
    patched_delay = mocker.patch(f"enrolprofile.tasks.{task_name}.delay")

    with django_capture_on_commit_callbacks(execute=True):
        helper(*args)

    patched_delay.assert_called_once_with(**expected_kwargs)
