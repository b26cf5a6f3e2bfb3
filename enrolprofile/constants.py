"""Constants for the enrolprofile app"""

from django.db import models


class ItemType(models.TextChoices):
    """Kinds of items that get a synchronized cohort"""

    TAG = "tag", "Tag"
    COURSE = "course", "Course"
    CATEGORY = "category", "Category"
    PRESET = "preset", "Preset"


# item types a preset can be composed of, in processing order
PRESET_ITEM_TYPES = (ItemType.CATEGORY, ItemType.COURSE, ItemType.TAG)

# the Preset model field holding the ids of each item type
PRESET_ITEM_FIELDS = {
    ItemType.CATEGORY: "category",
    ItemType.COURSE: "course",
    ItemType.TAG: "tag",
}

# the user profile field whose allowed values mirror the names of each item type
ITEM_PROFILE_FIELDS = {
    ItemType.COURSE: "course",
    ItemType.CATEGORY: "category",
    ItemType.TAG: "tag",
    ItemType.PRESET: "preset",
}

# the display name of each item profile field
ITEM_PROFILE_FIELD_NAMES = {
    ItemType.COURSE: "Course",
    ItemType.CATEGORY: "Category",
    ItemType.TAG: "Tag",
    ItemType.PRESET: "Preset",
}

# the profile field sort order used when the fields are created
ITEM_PROFILE_FIELD_SORTORDER = {
    ItemType.CATEGORY: 0,
    ItemType.COURSE: 1,
    ItemType.TAG: 2,
    ItemType.PRESET: 4,
}

FIELD_ENROLLED_UNTIL = "enrolleduntil"
FIELD_ENROLLED_UNTIL_NAME = "Keep enrolment until"
FIELD_ENROLLED_UNTIL_MIN_YEAR = "2023"
FIELD_ENROLLED_UNTIL_MAX_YEAR = "2050"
FIELD_ENROLLED_UNTIL_SORTORDER = 3

PRESET_IDS_SEPARATOR = ","

# required payload fields of each task
TASK_ITEM_FIELDS = ("item_id", "item_type", "item_name")
TASK_PRESET_DATA_FIELDS = (
    *TASK_ITEM_FIELDS,
    "categories",
    "oldcategories",
    "courses",
    "oldcourses",
    "tags",
    "oldtags",
)

PRESET_MUST_SELECT_ENTITIES_MSG = (
    "You must select at least one of the following entities: categories, courses, tags"
)
