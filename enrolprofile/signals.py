"""
Signals for enrolprofile

Listens to changes of categories, courses, tags and presets, and queues the
tasks that keep cohorts, rules, enrollment methods and profile fields in sync.
"""

import logging

from django.db.models.signals import m2m_changed, post_delete, post_save, pre_save
from django.dispatch import Signal, receiver

from courses.api import resolve_course_ids
from courses.models import Category, Course, Tag
from enrolprofile import task_helpers
from enrolprofile.constants import ItemType
from enrolprofile.models import Preset, split_ids

log = logging.getLogger(__name__)

# Sent with preset_id, preset_name, oldname, categories, oldcategories,
# courses, oldcourses, tags and oldtags
preset_created = Signal()
preset_updated = Signal()
# Sent with preset_id and preset_name
preset_deleted = Signal()

PREVIOUS_VALUES_ATTR = "_enrolprofile_previous"


def _stash_previous_values(instance, fields):
    previous = None
    if instance.pk is not None:
        previous = (
            type(instance).objects.filter(pk=instance.pk).values(*fields).first()
        )
    setattr(instance, PREVIOUS_VALUES_ATTR, previous)


def _get_previous_values(instance):
    return getattr(instance, PREVIOUS_VALUES_ATTR, None)


@receiver(pre_save, sender=Category, dispatch_uid="enrolprofile_category_pre_save")
def stash_category(sender, instance, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Remember the stored name of a category before it changes"""
    _stash_previous_values(instance, ("name",))


@receiver(post_save, sender=Category, dispatch_uid="enrolprofile_category_post_save")
def handle_category_saved(sender, instance, created, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Set up a new category, or propagate a category rename"""
    if created:
        task_helpers.queue_add_item(instance.id, ItemType.CATEGORY, instance.name)
        return

    previous = _get_previous_values(instance)
    if previous is not None and previous["name"] != instance.name:
        task_helpers.queue_rename_item(instance.id, ItemType.CATEGORY, instance.name)


@receiver(post_delete, sender=Category, dispatch_uid="enrolprofile_category_post_delete")
def handle_category_deleted(sender, instance, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Tear down a deleted category"""
    task_helpers.queue_remove_item(instance.id, ItemType.CATEGORY, instance.name)


@receiver(pre_save, sender=Course, dispatch_uid="enrolprofile_course_pre_save")
def stash_course(sender, instance, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Remember the stored title and category of a course before it changes"""
    _stash_previous_values(instance, ("title", "category_id"))


@receiver(post_save, sender=Course, dispatch_uid="enrolprofile_course_post_save")
def handle_course_saved(sender, instance, created, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """
    Set up a new course and enroll its category cohort, or propagate a title
    or category change of an existing course.
    """
    if created:
        task_helpers.queue_add_item(
            instance.id, ItemType.COURSE, instance.title, [instance.id]
        )
        if instance.category_id:
            task_helpers.queue_add_item(
                instance.category_id,
                ItemType.CATEGORY,
                instance.category.name,
                [instance.id],
            )
        return

    previous = _get_previous_values(instance)
    if previous is None:
        return

    if previous["title"] != instance.title:
        task_helpers.queue_rename_item(instance.id, ItemType.COURSE, instance.title)

    if previous["category_id"] != instance.category_id:
        task_helpers.queue_update_course_category(
            instance.id,
            instance.category_id,
            previous["category_id"],
            instance.category.name if instance.category_id else None,
        )


@receiver(post_delete, sender=Course, dispatch_uid="enrolprofile_course_post_delete")
def handle_course_deleted(sender, instance, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Tear down a deleted course"""
    task_helpers.queue_remove_item(instance.id, ItemType.COURSE, instance.title)


@receiver(pre_save, sender=Tag, dispatch_uid="enrolprofile_tag_pre_save")
def stash_tag(sender, instance, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Remember the stored name of a tag before it changes"""
    _stash_previous_values(instance, ("name",))


@receiver(post_save, sender=Tag, dispatch_uid="enrolprofile_tag_post_save")
def handle_tag_saved(sender, instance, created, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """
    Propagate a tag rename. New tags are set up once they're added to a course.
    """
    if created:
        return

    previous = _get_previous_values(instance)
    if previous is not None and previous["name"] != instance.name:
        task_helpers.queue_rename_item(instance.id, ItemType.TAG, instance.name)


@receiver(post_delete, sender=Tag, dispatch_uid="enrolprofile_tag_post_delete")
def handle_tag_deleted(sender, instance, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Tear down a deleted tag"""
    task_helpers.queue_remove_item(instance.id, ItemType.TAG, instance.name)


def _course_tag_pairs(instance, reverse, pk_set):
    """Yields (course, tag) pairs for a change of Course.tags from either side"""
    if reverse:
        for course in Course.objects.filter(pk__in=pk_set):
            yield course, instance
    else:
        for tag in Tag.objects.filter(pk__in=pk_set):
            yield instance, tag


@receiver(
    m2m_changed, sender=Course.tags.through, dispatch_uid="enrolprofile_course_tags_changed"
)
def handle_course_tags_changed(  # noqa: PLR0913
    sender,  # pylint: disable=unused-argument  # noqa: ARG001
    instance,
    action,
    reverse,
    model,  # pylint: disable=unused-argument  # noqa: ARG001
    pk_set,
    **kwargs,  # pylint: disable=unused-argument  # noqa: ARG001
):
    """
    Enroll a tag's cohort in courses it's added to, and remove it from courses
    it's removed from.
    """
    if action == "pre_clear":
        # the cleared ids are not passed to post_clear
        related = instance.courses if reverse else instance.tags
        instance._enrolprofile_cleared = set(  # noqa: SLF001
            related.values_list("id", flat=True)
        )
        return

    if action == "post_clear":
        pk_set = getattr(instance, "_enrolprofile_cleared", set())
        action = "post_remove"

    if action == "post_add":
        for course, tag in _course_tag_pairs(instance, reverse, pk_set):
            task_helpers.queue_add_item(tag.id, ItemType.TAG, tag.name, [course.id])
    elif action == "post_remove":
        if reverse:
            for course_id in pk_set:
                task_helpers.queue_remove_enrolment_method(
                    instance.id, ItemType.TAG, course_id
                )
        else:
            for tag_id in pk_set:
                task_helpers.queue_remove_enrolment_method(
                    tag_id, ItemType.TAG, instance.id
                )


@receiver(preset_created, sender=Preset, dispatch_uid="enrolprofile_preset_created")
def handle_preset_created(sender, preset_id, preset_name, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Set up a new preset and enroll its cohort in every course it includes"""
    course_ids = resolve_course_ids(
        category_ids=split_ids(kwargs.get("categories")),
        course_ids=split_ids(kwargs.get("courses")),
        tag_ids=split_ids(kwargs.get("tags")),
    )
    task_helpers.queue_add_item(preset_id, ItemType.PRESET, preset_name, course_ids)


@receiver(preset_updated, sender=Preset, dispatch_uid="enrolprofile_preset_updated")
def handle_preset_updated(sender, preset_id, preset_name, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Propagate a preset rename, then update its enrollment methods"""
    oldname = kwargs.get("oldname")
    if oldname is not None and oldname != preset_name:
        task_helpers.queue_rename_item(preset_id, ItemType.PRESET, preset_name)
    task_helpers.queue_update_preset_data(preset_id, preset_name, kwargs)


@receiver(preset_deleted, sender=Preset, dispatch_uid="enrolprofile_preset_deleted")
def handle_preset_deleted(sender, preset_id, preset_name, **kwargs):  # pylint: disable=unused-argument  # noqa: ARG001
    """Tear down a deleted preset"""
    task_helpers.queue_remove_item(preset_id, ItemType.PRESET, preset_name)
