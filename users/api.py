"""Users API: custom profile field storage"""

import logging

from users.constants import (
    PROFILE_FIELD_DATA_SEPARATOR,
    PROFILE_FIELD_OPTIONS_SEPARATOR,
)
from users.models import ProfileField, ProfileFieldCategory, ProfileFieldData

log = logging.getLogger(__name__)


def get_profile_field(shortname):
    """Returns the profile field with the given shortname, or None"""
    return ProfileField.objects.filter(shortname=shortname).first()


def get_profile_field_options(field):
    """
    Returns the allowed values of an autocomplete profile field

    Args:
        field (ProfileField): the profile field

    Returns:
        list of str: the allowed values, in stored order
    """
    if not field.param1:
        return []
    return field.param1.split(PROFILE_FIELD_OPTIONS_SEPARATOR)


def _save_profile_field_options(field, options):
    field.param1 = PROFILE_FIELD_OPTIONS_SEPARATOR.join(sorted(options))
    field.save(update_fields=["param1", "updated_on"])


def add_profile_field_item(shortname, item):
    """
    Adds a value to the allowed values of a profile field, keeping the list sorted.

    Args:
        shortname (str): the profile field shortname
        item (str): the value to add

    Returns:
        bool: True if the field was changed
    """
    field = get_profile_field(shortname)
    if field is None:
        return False

    options = get_profile_field_options(field)
    if item in options:
        return False

    _save_profile_field_options(field, [*options, item])
    return True


def delete_profile_field_item(shortname, item):
    """
    Removes a value from the allowed values of a profile field.

    Args:
        shortname (str): the profile field shortname
        item (str): the value to remove

    Returns:
        bool: True if the field was changed
    """
    field = get_profile_field(shortname)
    if field is None:
        return False

    options = get_profile_field_options(field)
    if item not in options:
        return False

    options.remove(item)
    _save_profile_field_options(field, options)
    return True


def update_profile_field_item(shortname, old_item, new_item):
    """
    Replaces a value in the allowed values of a profile field.

    Args:
        shortname (str): the profile field shortname
        old_item (str): the value to replace
        new_item (str): the replacement value

    Returns:
        bool: True if the field was changed
    """
    field = get_profile_field(shortname)
    if field is None:
        return False

    options = get_profile_field_options(field)
    if old_item not in options:
        return False

    options[options.index(old_item)] = new_item
    # allowed values must stay unique
    _save_profile_field_options(field, list(dict.fromkeys(options)))
    return True


def rename_profile_field_data(shortname, old_item, new_item):
    """
    Rewrites every user's stored selection for a profile field, replacing
    old_item with new_item at the same position. If a selection already
    includes new_item, old_item is dropped instead.

    Args:
        shortname (str): the profile field shortname
        old_item (str): the value to replace
        new_item (str): the replacement value

    Returns:
        int: the number of user records that were updated
    """
    field = get_profile_field(shortname)
    if field is None:
        return 0

    updated = 0
    candidates = ProfileFieldData.objects.filter(field=field, data__icontains=old_item)
    for user_data in candidates.iterator():
        values = user_data.data.split(PROFILE_FIELD_DATA_SEPARATOR)
        if old_item not in values:
            continue
        if new_item in values:
            values.remove(old_item)
        else:
            values[values.index(old_item)] = new_item
        user_data.data = PROFILE_FIELD_DATA_SEPARATOR.join(values)
        user_data.save(update_fields=["data", "updated_on"])
        updated += 1

    log.info(
        "Renamed '%s' to '%s' in %d user records for profile field %s",
        old_item,
        new_item,
        updated,
        shortname,
    )
    return updated


def get_or_create_profile_field_category(name):
    """Returns the profile field category with the given name, creating it if needed"""
    category, _ = ProfileFieldCategory.objects.get_or_create(name=name)
    return category


def get_or_create_profile_field(shortname, name, datatype, **extras):
    """
    Returns the profile field with the given shortname, creating it if needed.

    Args:
        shortname (str): the profile field shortname
        name (str): the display name
        datatype (str): one of the profile field datatypes
        extras (dict): other ProfileField attributes used on creation

    Returns:
        (ProfileField, bool): the field and whether it was created
    """
    return ProfileField.objects.get_or_create(
        shortname=shortname, defaults={"name": name, "datatype": datatype, **extras}
    )


def set_user_profile_field_data(user, shortname, values):
    """
    Stores a user's selection for a profile field

    Args:
        user (User): the user
        shortname (str): the profile field shortname
        values (list of str): the selected values

    Returns:
        ProfileFieldData: the stored data
    """
    field = ProfileField.objects.get(shortname=shortname)
    user_data, _ = ProfileFieldData.objects.update_or_create(
        user=user,
        field=field,
        defaults={"data": PROFILE_FIELD_DATA_SEPARATOR.join(values)},
    )
    return user_data


def get_user_profile_field_data(user, shortname):
    """Returns a user's selected values for a profile field"""
    user_data = ProfileFieldData.objects.filter(
        user=user, field__shortname=shortname
    ).first()
    if user_data is None or not user_data.data:
        return []
    return user_data.data.split(PROFILE_FIELD_DATA_SEPARATOR)


def delete_profile_fields(shortnames):
    """
    Deletes profile fields along with every user's data for them

    Args:
        shortnames (iterable of str): the profile field shortnames

    Returns:
        int: the number of deleted profile fields
    """
    fields = ProfileField.objects.filter(shortname__in=list(shortnames))
    ProfileFieldData.objects.filter(field__in=fields).delete()
    deleted, _ = fields.delete()
    return deleted
