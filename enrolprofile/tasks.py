"""
Tasks for the enrolprofile app

Every task runs inside a single database transaction. Any failure rolls the
whole task back and propagates to celery so the task can be retried.
"""

import logging

from django.db import transaction

from enrolprofile.constants import TASK_ITEM_FIELDS, TASK_PRESET_DATA_FIELDS
from main.celery import app

log = logging.getLogger(__name__)

PRESET_SET_FIELDS = tuple(
    field for field in TASK_PRESET_DATA_FIELDS if field not in TASK_ITEM_FIELDS
)


@app.task(acks_late=True)
def add_item(item_id, item_type, item_name, course_ids=None):
    """
    Task to set up an item's cohort, rule and profile field value, and enroll
    the cohort in the given courses.
    """
    from courses.api import get_student_role
    from enrolprofile import api

    api.validate_task_data(
        {"item_id": item_id, "item_type": item_type, "item_name": item_name},
        TASK_ITEM_FIELDS,
    )

    with transaction.atomic():
        role = get_student_role()
        cohort = api.add_item(item_id, item_type, item_name, course_ids or [], role)

    log.info(
        "Added %s %s ('%s') as cohort %s", item_type, item_id, item_name, cohort.id
    )


@app.task(acks_late=True)
def rename_item(item_id, item_type, item_name):
    """Task to propagate an item's new name to its cohort, rule and profile field"""
    from enrolprofile import api

    api.validate_task_data(
        {"item_id": item_id, "item_type": item_type, "item_name": item_name},
        TASK_ITEM_FIELDS,
    )

    with transaction.atomic():
        api.rename_item(item_id, item_type, item_name)


@app.task(acks_late=True)
def remove_item(item_id, item_type, item_name):
    """Task to tear down a deleted item's cohort, rule, enrollment methods and profile field value"""
    from courses.api import get_student_role
    from enrolprofile import api

    api.validate_task_data(
        {"item_id": item_id, "item_type": item_type, "item_name": item_name},
        TASK_ITEM_FIELDS,
    )

    with transaction.atomic():
        role = get_student_role()
        api.remove_item(item_id, item_type, item_name, role)

    log.info("Removed %s %s ('%s')", item_type, item_id, item_name)


@app.task(acks_late=True)
def remove_enrolment_method(item_id, item_type, course_id):
    """Task to remove an item's enrollment method from a single course"""
    from courses.api import get_student_role
    from enrolprofile import api

    api.validate_task_data(
        {"item_id": item_id, "item_type": item_type, "course_id": course_id},
        ("item_id", "item_type", "course_id"),
    )

    with transaction.atomic():
        role = get_student_role()
        api.remove_enrollment_method(item_id, item_type, role, course_id=course_id)


@app.task(acks_late=True)
def update_course_category(course_id, category_id, old_category_id, category_name):
    """Task to move a course's category enrollment method after the course changed category"""
    from courses.api import get_student_role
    from enrolprofile import api

    api.validate_task_data({"course_id": course_id}, ("course_id",))

    with transaction.atomic():
        role = get_student_role()
        api.update_course_category(
            course_id, category_id, old_category_id, category_name, role
        )


@app.task(acks_late=True)
def update_preset_data(  # noqa: PLR0913
    item_id,
    item_type,
    item_name,
    categories,
    oldcategories,
    courses,
    oldcourses,
    tags,
    oldtags,
):
    """Task to update a preset's enrollment methods after its selection changed"""
    from courses.api import get_student_role
    from enrolprofile import api

    api.validate_task_data(
        {
            "item_id": item_id,
            "item_type": item_type,
            "item_name": item_name,
            "categories": categories,
            "oldcategories": oldcategories,
            "courses": courses,
            "oldcourses": oldcourses,
            "tags": tags,
            "oldtags": oldtags,
        },
        TASK_PRESET_DATA_FIELDS,
        nullable_fields=PRESET_SET_FIELDS,
    )

    with transaction.atomic():
        role = get_student_role()
        api.update_preset(
            item_id,
            categories,
            oldcategories,
            courses,
            oldcourses,
            tags,
            oldtags,
            role,
        )
