"""
API for the enrolprofile app

Keeps cohorts, cohort rules, cohort enrollment methods and the item profile
fields in sync with categories, courses, tags and presets.
"""

import logging
from collections import namedtuple

from django.conf import settings

from cohorts.api import (
    add_enrollment_method,
    delete_all_cohorts,
    delete_cohort,
    delete_rule,
    ensure_rule,
    get_cohort_by_item,
    get_enrollment_course_ids,
    get_or_create_cohort,
    remove_enrollment_methods,
    rename_cohort,
    rename_rule,
)
from courses.api import (
    get_categories,
    get_course_tags,
    get_courses,
    get_courses_by_categories,
    get_courses_by_tags,
    resolve_course_ids,
)
from courses.models import Category, Course, Tag
from enrolprofile import signals
from enrolprofile.constants import (
    FIELD_ENROLLED_UNTIL,
    FIELD_ENROLLED_UNTIL_MAX_YEAR,
    FIELD_ENROLLED_UNTIL_MIN_YEAR,
    FIELD_ENROLLED_UNTIL_NAME,
    FIELD_ENROLLED_UNTIL_SORTORDER,
    ITEM_PROFILE_FIELD_NAMES,
    ITEM_PROFILE_FIELD_SORTORDER,
    ITEM_PROFILE_FIELDS,
    ItemType,
)
from enrolprofile.exceptions import (
    CohortNotFoundError,
    PresetNotFoundError,
    TaskDataValidationError,
)
from enrolprofile.models import Preset, join_ids, split_ids
from users.api import (
    add_profile_field_item,
    delete_profile_field_item,
    delete_profile_fields,
    get_or_create_profile_field,
    get_or_create_profile_field_category,
    rename_profile_field_data,
    update_profile_field_item,
)
from users.constants import (
    PROFILE_FIELD_DATATYPE_AUTOCOMPLETE,
    PROFILE_FIELD_DATATYPE_DATETIME,
    PROFILE_FIELD_OPTIONS_SEPARATOR,
)

log = logging.getLogger(__name__)

Item = namedtuple("Item", ["item_type", "item_id", "name"])  # noqa: PYI024

# the model and name attribute of each item type
ITEM_MODELS = {
    ItemType.CATEGORY: (Category, "name"),
    ItemType.COURSE: (Course, "title"),
    ItemType.TAG: (Tag, "name"),
    ItemType.PRESET: (Preset, "name"),
}


def validate_task_data(data, required_fields, nullable_fields=()):
    """
    Validates a task payload

    Args:
        data (dict): the task payload
        required_fields (iterable of str): fields that must be present and non-empty
        nullable_fields (iterable of str): fields that must be present but may be empty

    Raises:
        TaskDataValidationError: if a field is missing
    """
    for field in required_fields:
        if field in nullable_fields:
            if field not in data:
                msg = f"Missing required field: {field}"
                raise TaskDataValidationError(msg)
        elif data.get(field) in (None, ""):
            msg = f"Missing required field: {field}"
            raise TaskDataValidationError(msg)


def get_item_description(item_type):
    """Returns the description used for cohorts of an item type"""
    return f"{ItemType(item_type).label} related"


def get_items(item_type):
    """
    Lists the current items of a type

    Args:
        item_type (ItemType): the item type

    Returns:
        list of Item: the items
    """
    item_type = ItemType(item_type)
    if item_type == ItemType.CATEGORY:
        return [Item(item_type, category.id, category.name) for category in get_categories()]
    if item_type == ItemType.COURSE:
        return [Item(item_type, course.id, course.title) for course in get_courses()]
    if item_type == ItemType.TAG:
        return [Item(item_type, tag.id, tag.name) for tag in get_course_tags()]
    return [
        Item(item_type, preset.id, preset.name)
        for preset in Preset.objects.order_by("name")
    ]


def get_item_courses(item_type, item_id):
    """
    Returns the ids of the courses an item currently denotes

    Args:
        item_type (ItemType): the item type
        item_id (int): the item id

    Returns:
        set of int: the course ids
    """
    item_type = ItemType(item_type)
    if item_type == ItemType.CATEGORY:
        return get_courses_by_categories([item_id])
    if item_type == ItemType.TAG:
        return get_courses_by_tags([item_id])
    if item_type == ItemType.COURSE:
        return {item_id}
    preset = Preset.objects.filter(id=item_id).first()
    return preset.resolved_course_ids if preset is not None else set()


def resolve_preset_courses(categories, courses, tags):
    """
    Resolves the raw category, course and tag ids of a preset to course ids

    Args:
        categories (str or iterable or None): category ids
        courses (str or iterable or None): course ids
        tags (str or iterable or None): tag ids

    Returns:
        set of int: the course ids
    """
    return resolve_course_ids(
        category_ids=split_ids(categories),
        course_ids=split_ids(courses),
        tag_ids=split_ids(tags),
    )


def is_item_name_in_use(item_type, name, exclude_item_id=None):
    """Returns True if an item of the given type other than exclude_item_id has this name"""
    model, name_field = ITEM_MODELS[ItemType(item_type)]
    items = model.objects.filter(**{name_field: name})
    if exclude_item_id is not None:
        items = items.exclude(id=exclude_item_id)
    return items.exists()


def _existing_course_ids(course_ids):
    if not course_ids:
        return set()
    return set(Course.objects.filter(id__in=course_ids).values_list("id", flat=True))


def _referencing_presets(item_type, item_id):
    if ItemType(item_type) == ItemType.PRESET:
        return Preset.objects.none()
    return Preset.objects.referencing(item_type, item_id)


def sync_preset_course(preset, course_id, role):
    """
    Adds or removes a preset's enrollment method for a single course depending
    on whether the preset currently includes the course

    Args:
        preset (Preset): the preset
        course_id (int): the course id
        role (Role): the role granted by the enrollment method

    Returns:
        bool or None: True if the course is enrolled, False if not, None if the preset has no cohort
    """
    cohort = get_cohort_by_item(ItemType.PRESET, preset.id)
    if cohort is None:
        return None

    if course_id in preset.resolved_course_ids:
        add_enrollment_method(cohort, course_id, role)
        return True
    remove_enrollment_methods(cohort, role, [course_id])
    return False


def reconcile_preset(preset, role):
    """
    Makes a preset's enrollment methods match exactly the courses it currently denotes

    Args:
        preset (Preset): the preset
        role (Role): the role granted by the enrollment methods

    Returns:
        (set of int, set of int) or None:
            the added and removed course ids, or None if the preset has no cohort
    """
    cohort = get_cohort_by_item(ItemType.PRESET, preset.id)
    if cohort is None:
        return None

    resolved = preset.resolved_course_ids
    existing = get_enrollment_course_ids(cohort, role)
    removed = existing - resolved
    added = resolved - existing

    if removed:
        remove_enrollment_methods(cohort, role, removed)
    for course_id in added:
        add_enrollment_method(cohort, course_id, role)
    return added, removed


def add_item(item_id, item_type, item_name, course_ids, role):
    """
    Sets up an item: its cohort, cohort rule, profile field value and the
    enrollment methods for the given courses. Presets including the item get
    enrollment methods for the same courses.

    Args:
        item_id (int): the item id
        item_type (ItemType): the item type
        item_name (str): the item's current name
        course_ids (iterable of int): courses to add enrollment methods to
        role (Role): the role granted by the enrollment methods

    Returns:
        Cohort: the item's cohort
    """
    item_type = ItemType(item_type)
    profile_field = ITEM_PROFILE_FIELDS[item_type]

    cohort = get_or_create_cohort(
        item_type, item_id, item_name, description=get_item_description(item_type)
    )
    ensure_rule(cohort, profile_field, FIELD_ENROLLED_UNTIL)
    add_profile_field_item(profile_field, item_name)

    # courses may have been deleted since the task was queued
    course_ids = _existing_course_ids(course_ids)
    for course_id in course_ids:
        add_enrollment_method(cohort, course_id, role)

    for preset in _referencing_presets(item_type, item_id):
        preset_cohort = get_cohort_by_item(ItemType.PRESET, preset.id)
        if preset_cohort is None:
            continue
        for course_id in course_ids & preset.resolved_course_ids:
            add_enrollment_method(preset_cohort, course_id, role)

    return cohort


def rename_item(item_id, item_type, new_name):
    """
    Renames an item's cohort and rule, and replaces the old name with the new
    one in the profile field and in every user's stored selection.

    Args:
        item_id (int): the item id
        item_type (ItemType): the item type
        new_name (str): the item's new name

    Returns:
        bool: True if anything was renamed
    """
    item_type = ItemType(item_type)
    cohort = get_cohort_by_item(item_type, item_id)
    if cohort is None or cohort.name == new_name:
        return False

    old_name = cohort.name
    profile_field = ITEM_PROFILE_FIELDS[item_type]

    rename_cohort(cohort, new_name)
    rename_rule(cohort, new_name)

    if is_item_name_in_use(item_type, old_name, exclude_item_id=item_id):
        # another item still answers to the old name, so it has to stay selectable
        add_profile_field_item(profile_field, new_name)
    else:
        update_profile_field_item(profile_field, old_name, new_name)
        rename_profile_field_data(profile_field, old_name, new_name)

    log.info("Renamed %s %s from '%s' to '%s'", item_type, item_id, old_name, new_name)
    return True


def remove_enrollment_method(item_id, item_type, role, course_id=None):
    """
    Removes an item's enrollment method from a course, or from all courses if
    course_id is None. Presets including the item lose their enrollment method
    for the course unless they still include it some other way.

    Args:
        item_id (int): the item id
        item_type (ItemType): the item type
        role (Role): the role granted by the enrollment methods
        course_id (int or None): the course id
    """
    item_type = ItemType(item_type)
    cohort = get_cohort_by_item(item_type, item_id)
    if cohort is not None:
        remove_enrollment_methods(
            cohort, role, None if course_id is None else [course_id]
        )

    for preset in _referencing_presets(item_type, item_id):
        if course_id is None:
            reconcile_preset(preset, role)
        else:
            sync_preset_course(preset, course_id, role)


def remove_item(item_id, item_type, item_name, role):
    """
    Tears down an item: its enrollment methods, rule, cohort and profile field
    value. Presets including the item have it stripped and their enrollment
    methods recomputed.

    Args:
        item_id (int): the item id
        item_type (ItemType): the item type
        item_name (str): the item's name at the time it was deleted
        role (Role): the role granted by the enrollment methods
    """
    item_type = ItemType(item_type)
    cohort = get_cohort_by_item(item_type, item_id)
    if cohort is not None:
        remove_enrollment_methods(cohort, role)
        delete_rule(cohort)
        delete_cohort(cohort)

    names = {item_name}
    if cohort is not None:
        names.add(cohort.name)
    for name in names:
        if not is_item_name_in_use(item_type, name, exclude_item_id=item_id):
            delete_profile_field_item(ITEM_PROFILE_FIELDS[item_type], name)

    for preset in _referencing_presets(item_type, item_id):
        preset.remove_item_id(item_type, item_id)
        preset.save()
        reconcile_preset(preset, role)
        log.info("Removed %s %s from preset %d", item_type, item_id, preset.id)


def update_course_category(course_id, category_id, old_category_id, category_name, role):
    """
    Moves a course's category enrollment method from its old category cohort
    to its new one, and updates presets including either category.

    Args:
        course_id (int): the course id
        category_id (int or None): the course's new category id
        old_category_id (int or None): the course's previous category id
        category_name (str or None): the new category's name
        role (Role): the role granted by the enrollment methods
    """
    if old_category_id:
        old_cohort = get_cohort_by_item(ItemType.CATEGORY, old_category_id)
        if old_cohort is not None:
            remove_enrollment_methods(old_cohort, role, [course_id])

    if category_id:
        cohort = get_cohort_by_item(ItemType.CATEGORY, category_id)
        if cohort is None and category_name:
            add_item(category_id, ItemType.CATEGORY, category_name, [course_id], role)
        elif cohort is not None and _existing_course_ids([course_id]):
            add_enrollment_method(cohort, course_id, role)

    presets = {}
    for changed_category_id in (old_category_id, category_id):
        if not changed_category_id:
            continue
        for preset in Preset.objects.referencing(ItemType.CATEGORY, changed_category_id):
            presets[preset.id] = preset
    for preset in presets.values():
        sync_preset_course(preset, course_id, role)


def update_preset(  # noqa: PLR0913
    preset_id,
    categories,
    oldcategories,
    courses,
    oldcourses,
    tags,
    oldtags,
    role,
):
    """
    Updates a preset's enrollment methods after its categories, courses or tags changed.

    Both the old and the new selections are resolved to course ids, and the
    courses are diffed directly, so a course stays enrolled as long as any
    remaining category, course or tag still includes it.

    Args:
        preset_id (int): the preset id
        categories, oldcategories (str or None): new and previous category ids
        courses, oldcourses (str or None): new and previous course ids
        tags, oldtags (str or None): new and previous tag ids
        role (Role): the role granted by the enrollment methods

    Returns:
        (set of int, set of int): the added and removed course ids

    Raises:
        CohortNotFoundError: if the preset has no cohort
    """
    cohort = get_bound_cohort(ItemType.PRESET, preset_id)

    new_course_ids = resolve_preset_courses(categories, courses, tags)
    old_course_ids = resolve_preset_courses(oldcategories, oldcourses, oldtags)
    existing = get_enrollment_course_ids(cohort, role)

    removed = (old_course_ids | existing) - new_course_ids
    added = new_course_ids - existing

    if removed:
        remove_enrollment_methods(cohort, role, removed)
    for course_id in added:
        add_enrollment_method(cohort, course_id, role)

    log.info(
        "Updated preset %s: %d courses added, %d courses removed",
        preset_id,
        len(added),
        len(removed),
    )
    return added, removed


def set_up_items(role):
    """
    Sets up cohorts, rules, profile field values and enrollment methods for
    every existing category, course, tag and preset.

    Args:
        role (Role): the role granted by the enrollment methods

    Returns:
        dict: the number of items set up per item type
    """
    counts = {}
    for item_type in (ItemType.CATEGORY, ItemType.COURSE, ItemType.TAG, ItemType.PRESET):
        items = get_items(item_type)
        for item in items:
            add_item(
                item.item_id,
                item.item_type,
                item.name,
                get_item_courses(item.item_type, item.item_id),
                role,
            )
        counts[item_type] = len(items)
    return counts


def get_bound_cohort(item_type, item_id):
    """
    Returns the cohort bound to an item

    Raises:
        CohortNotFoundError: if the item has no cohort
    """
    cohort = get_cohort_by_item(item_type, item_id)
    if cohort is None:
        msg = f"Cohort not found for item type {item_type} id {item_id}"
        raise CohortNotFoundError(msg)
    return cohort


def _preset_event_data(preset, previous=None):
    """Builds the payload of a preset event from the preset's current and previous selection"""
    previous = previous or {}
    return {
        "preset_id": preset.id,
        "preset_name": preset.name,
        "oldname": previous.get("name"),
        "categories": preset.category,
        "oldcategories": previous.get("category"),
        "courses": preset.course,
        "oldcourses": previous.get("course"),
        "tags": preset.tag,
        "oldtags": previous.get("tag"),
    }


def create_preset(name, categories=None, courses=None, tags=None):
    """
    Creates a preset and sends preset_created

    Args:
        name (str): the preset name
        categories (iterable of int or None): the category ids
        courses (iterable of int or None): the course ids
        tags (iterable of int or None): the tag ids

    Returns:
        Preset: the new preset
    """
    preset = Preset.objects.create(
        name=name,
        category=join_ids(categories),
        course=join_ids(courses),
        tag=join_ids(tags),
    )
    signals.preset_created.send(sender=Preset, **_preset_event_data(preset))
    return preset


def change_preset(preset, name=None, categories=None, courses=None, tags=None):
    """
    Changes a preset's name or selection and sends preset_updated with the previous values.
    Arguments left as None keep their current value.

    Returns:
        Preset: the updated preset
    """
    previous = {
        "name": preset.name,
        "category": preset.category,
        "course": preset.course,
        "tag": preset.tag,
    }
    if name is not None:
        preset.name = name
    for item_type, ids in (
        (ItemType.CATEGORY, categories),
        (ItemType.COURSE, courses),
        (ItemType.TAG, tags),
    ):
        if ids is not None:
            preset.set_item_ids(item_type, ids)
    preset.save()
    signals.preset_updated.send(sender=Preset, **_preset_event_data(preset, previous))
    return preset


def delete_preset(preset_id):
    """
    Deletes a preset and sends preset_deleted

    Args:
        preset_id (int): the preset id

    Raises:
        PresetNotFoundError: if the preset doesn't exist
    """
    preset = Preset.objects.filter(id=preset_id).first()
    if preset is None:
        msg = f"Preset {preset_id} does not exist"
        raise PresetNotFoundError(msg)

    name = preset.name
    preset.delete()
    signals.preset_deleted.send(sender=Preset, preset_id=preset_id, preset_name=name)


def get_engine_profile_fields():
    """Returns the shortnames of every profile field managed by enrolprofile"""
    return [*ITEM_PROFILE_FIELDS.values(), FIELD_ENROLLED_UNTIL]


def clean_up():
    """
    Deletes every cohort enrollment method, rule, cohort and the enrolprofile profile fields

    Returns:
        dict: the number of deleted records per kind
    """
    counts = delete_all_cohorts()
    counts["profile_fields"] = delete_profile_fields(get_engine_profile_fields())
    return counts


def set_up_profile_fields():
    """
    Creates the profile field category, the item autocomplete fields pre-filled
    with the current item names, and the enrolled until date field.
    Existing fields are left untouched.

    Returns:
        dict: whether each profile field was created, keyed by shortname
    """
    category = get_or_create_profile_field_category(
        settings.ENROLPROFILE_PROFILE_FIELD_CATEGORY
    )
    created = {}
    for item_type, shortname in ITEM_PROFILE_FIELDS.items():
        names = sorted({item.name for item in get_items(item_type)})
        _, created[shortname] = get_or_create_profile_field(
            shortname,
            ITEM_PROFILE_FIELD_NAMES[item_type],
            PROFILE_FIELD_DATATYPE_AUTOCOMPLETE,
            category=category,
            param1=PROFILE_FIELD_OPTIONS_SEPARATOR.join(names),
            # multiple values can be selected
            param2="1",
            sortorder=ITEM_PROFILE_FIELD_SORTORDER[item_type],
        )

    _, created[FIELD_ENROLLED_UNTIL] = get_or_create_profile_field(
        FIELD_ENROLLED_UNTIL,
        FIELD_ENROLLED_UNTIL_NAME,
        PROFILE_FIELD_DATATYPE_DATETIME,
        category=category,
        param1=FIELD_ENROLLED_UNTIL_MIN_YEAR,
        param2=FIELD_ENROLLED_UNTIL_MAX_YEAR,
        sortorder=FIELD_ENROLLED_UNTIL_SORTORDER,
    )
    return created
