"""
Enrolment preset models
"""

from django.db import models
from mitol.common.models import TimestampedModel, TimestampedModelQuerySet

from courses.api import resolve_course_ids
from enrolprofile.constants import (
    PRESET_IDS_SEPARATOR,
    PRESET_ITEM_FIELDS,
    PRESET_ITEM_TYPES,
    ItemType,
)


def split_ids(value):
    """
    Parses a comma separated list of ids

    Args:
        value (str or iterable or None): the stored value

    Returns:
        list of int: the ids, in order, without duplicates
    """
    if not value:
        return []
    if isinstance(value, str):
        value = [part for part in value.split(PRESET_IDS_SEPARATOR) if part.strip()]
    return list(dict.fromkeys(int(part) for part in value))


def join_ids(ids):
    """
    Serializes ids to the stored comma separated format

    Returns:
        str or None: the joined ids, or None if there are none
    """
    ids = split_ids(ids)
    if not ids:
        return None
    return PRESET_IDS_SEPARATOR.join(str(item_id) for item_id in ids)


class PresetQuerySet(TimestampedModelQuerySet):  # pylint: disable=missing-docstring
    def referencing(self, item_type, item_id):
        """Applies a filter for Presets that include the given category, course or tag"""
        field_name = PRESET_ITEM_FIELDS[ItemType(item_type)]
        return self.filter(
            **{f"{field_name}__regex": rf"(^|,){int(item_id)}(,|$)"}
        )


class Preset(TimestampedModel):
    """
    A named union of categories, courses and tags.

    The ids of each kind are stored as a comma separated list, or null if empty.
    """

    name = models.CharField(max_length=255)
    category = models.TextField(null=True, blank=True)  # noqa: DJ001
    course = models.TextField(null=True, blank=True)  # noqa: DJ001
    tag = models.TextField(null=True, blank=True)  # noqa: DJ001

    objects = PresetQuerySet.as_manager()

    def __str__(self):
        return f"Preset name={self.name}"

    def get_item_ids(self, item_type):
        """Returns the ids of the given item type included in this preset"""
        return split_ids(getattr(self, PRESET_ITEM_FIELDS[ItemType(item_type)]))

    def set_item_ids(self, item_type, ids):
        """Replaces the ids of the given item type included in this preset"""
        setattr(self, PRESET_ITEM_FIELDS[ItemType(item_type)], join_ids(ids))

    def remove_item_id(self, item_type, item_id):
        """
        Removes a single id from this preset, without saving

        Returns:
            bool: True if the id was included
        """
        ids = self.get_item_ids(item_type)
        if item_id not in ids:
            return False
        ids.remove(item_id)
        self.set_item_ids(item_type, ids)
        return True

    @property
    def category_ids(self):
        return self.get_item_ids(ItemType.CATEGORY)

    @property
    def course_ids(self):
        return self.get_item_ids(ItemType.COURSE)

    @property
    def tag_ids(self):
        return self.get_item_ids(ItemType.TAG)

    @property
    def is_empty(self):
        """True if the preset doesn't include any category, course or tag"""
        return not any(self.get_item_ids(item_type) for item_type in PRESET_ITEM_TYPES)

    @property
    def resolved_course_ids(self):
        """The ids of all courses this preset currently denotes"""
        return resolve_course_ids(
            category_ids=self.category_ids,
            course_ids=self.course_ids,
            tag_ids=self.tag_ids,
        )
