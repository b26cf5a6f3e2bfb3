"""Task helper functions for enrolprofile"""

import logging
from functools import partial

from django.db import transaction

from enrolprofile import tasks
from enrolprofile.constants import ItemType

log = logging.getLogger(__name__)


def _enqueue(task, **kwargs):
    """Queues a task once the current transaction commits"""
    log.info("Queueing %s with %s", task.name, kwargs)
    transaction.on_commit(partial(task.delay, **kwargs))


def queue_add_item(item_id, item_type, item_name, course_ids=None):
    """
    Queue a task to set up an item and enroll its cohort in courses

    Args:
        item_id (int): the item id
        item_type (ItemType): the item type
        item_name (str): the item's name
        course_ids (iterable of int or None): the courses to enroll the cohort in
    """
    _enqueue(
        tasks.add_item,
        item_id=item_id,
        item_type=ItemType(item_type).value,
        item_name=item_name,
        course_ids=sorted(course_ids or []),
    )


def queue_rename_item(item_id, item_type, item_name):
    """Queue a task to propagate an item's new name"""
    _enqueue(
        tasks.rename_item,
        item_id=item_id,
        item_type=ItemType(item_type).value,
        item_name=item_name,
    )


def queue_remove_item(item_id, item_type, item_name):
    """Queue a task to tear down a deleted item"""
    _enqueue(
        tasks.remove_item,
        item_id=item_id,
        item_type=ItemType(item_type).value,
        item_name=item_name,
    )


def queue_remove_enrolment_method(item_id, item_type, course_id):
    """Queue a task to remove an item's enrollment method from a course"""
    _enqueue(
        tasks.remove_enrolment_method,
        item_id=item_id,
        item_type=ItemType(item_type).value,
        course_id=course_id,
    )


def queue_update_course_category(course_id, category_id, old_category_id, category_name):
    """Queue a task to move a course between category cohorts"""
    _enqueue(
        tasks.update_course_category,
        course_id=course_id,
        category_id=category_id,
        old_category_id=old_category_id,
        category_name=category_name,
    )


def queue_update_preset_data(preset_id, preset_name, data):
    """
    Queue a task to update a preset's enrollment methods

    Args:
        preset_id (int): the preset id
        preset_name (str): the preset name
        data (dict): the new and previous categories, courses and tags of the preset
    """
    _enqueue(
        tasks.update_preset_data,
        item_id=preset_id,
        item_type=ItemType.PRESET.value,
        item_name=preset_name,
        categories=data.get("categories"),
        oldcategories=data.get("oldcategories"),
        courses=data.get("courses"),
        oldcourses=data.get("oldcourses"),
        tags=data.get("tags"),
        oldtags=data.get("oldtags"),
    )
