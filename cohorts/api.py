"""API for the cohorts app"""

import logging

from django.db import transaction

from cohorts.constants import (
    CONDITION_OPERATOR_DATE_IN_THE_FUTURE,
    CONDITION_OPERATOR_TEXT_IS_EQUAL_TO,
    PROFILE_FIELD_CONDITION_PREFIX,
)
from cohorts.models import Cohort, CohortEnrollmentMethod, CohortRule, RuleCondition

log = logging.getLogger(__name__)


def get_cohort_by_item(item_type, item_id):
    """
    Returns the cohort bound to an item

    Args:
        item_type (str): the item type
        item_id (int): the item id

    Returns:
        Cohort or None: the bound cohort, or None if the item has no cohort yet
    """
    return Cohort.objects.for_item(item_type, item_id).first()


def get_or_create_cohort(item_type, item_id, name, description=""):
    """
    Returns the cohort bound to an item, creating it if it doesn't exist yet

    Args:
        item_type (str): the item type
        item_id (int): the item id
        name (str): the cohort name to use on creation
        description (str): the cohort description to use on creation

    Returns:
        Cohort: the bound cohort
    """
    cohort, created = Cohort.objects.get_or_create(
        item_type=item_type,
        item_id=item_id,
        defaults={"name": name, "idnumber": name, "description": description},
    )
    if created:
        log.info("Created cohort '%s' for %s %s", name, item_type, item_id)
    return cohort


def rename_cohort(cohort, name):
    """Updates the cohort label, leaving its idnumber and item metadata alone"""
    cohort.name = name
    cohort.save(update_fields=["name", "updated_on"])


def delete_cohort(cohort):
    """Deletes a cohort"""
    log.info(
        "Deleting cohort '%s' for %s %s", cohort.name, cohort.item_type, cohort.item_id
    )
    cohort.delete()


def get_enrollment_course_ids(cohort, role):
    """Returns the ids of all courses the cohort has an enrollment method in"""
    return set(
        CohortEnrollmentMethod.objects.filter(cohort=cohort, role=role).values_list(
            "course_id", flat=True
        )
    )


def add_enrollment_method(cohort, course_id, role):
    """
    Adds a cohort enrollment method to a course if it doesn't exist already

    Args:
        cohort (Cohort): the cohort whose members should be enrolled
        course_id (int): the course id
        role (Role): the role granted to cohort members

    Returns:
        bool: True if a new enrollment method was created
    """
    _, created = CohortEnrollmentMethod.objects.get_or_create(
        cohort=cohort, course_id=course_id, role=role
    )
    return created


def remove_enrollment_methods(cohort, role, course_ids=None):
    """
    Removes the cohort's enrollment methods, either from all courses or from the given ones

    Args:
        cohort (Cohort): the cohort
        role (Role): the role granted by the enrollment methods
        course_ids (iterable of int or None): courses to remove methods from, or None for all

    Returns:
        int: the number of enrollment methods that were removed
    """
    methods = CohortEnrollmentMethod.objects.filter(cohort=cohort, role=role)
    if course_ids is not None:
        methods = methods.filter(course_id__in=course_ids)
    deleted, _ = methods.delete()
    return deleted


def get_rule(cohort):
    """Returns the rule of a cohort, or None"""
    return CohortRule.objects.filter(cohort=cohort).first()


@transaction.atomic
def ensure_rule(cohort, profile_field, expiry_profile_field):
    """
    Makes sure a cohort has a rule that adds users whose profile field matches
    the cohort name and whose expiry profile field is empty or in the future.

    Args:
        cohort (Cohort): the cohort
        profile_field (str): shortname of the profile field to match the cohort name against
        expiry_profile_field (str): shortname of the profile field holding the enrolment expiry

    Returns:
        CohortRule: the cohort's rule
    """
    rule = get_rule(cohort)
    if rule is not None:
        return rule

    rule = CohortRule.objects.create(
        cohort=cohort,
        name=cohort.name,
        description=cohort.description,
        enabled=False,
    )
    RuleCondition.objects.create(
        rule=rule,
        field=f"{PROFILE_FIELD_CONDITION_PREFIX}{profile_field}",
        operator=CONDITION_OPERATOR_TEXT_IS_EQUAL_TO,
        value=cohort.name,
        sortorder=0,
    )
    RuleCondition.objects.create(
        rule=rule,
        field=f"{PROFILE_FIELD_CONDITION_PREFIX}{expiry_profile_field}",
        operator=CONDITION_OPERATOR_DATE_IN_THE_FUTURE,
        value="0",
        sortorder=1,
    )

    rule.enabled = True
    rule.save(update_fields=["enabled", "updated_on"])
    log.info("Created rule '%s' for cohort %d", rule.name, cohort.id)
    return rule


def rename_rule(cohort, name):
    """
    Renames a cohort's rule and updates the value its name condition compares against

    Args:
        cohort (Cohort): the cohort
        name (str): the new name

    Returns:
        CohortRule or None: the updated rule, or None if the cohort has no rule
    """
    rule = get_rule(cohort)
    if rule is None:
        return None

    rule.name = name
    rule.save(update_fields=["name", "updated_on"])
    rule.conditions.filter(operator=CONDITION_OPERATOR_TEXT_IS_EQUAL_TO).update(
        value=name
    )
    return rule


def delete_rule(cohort):
    """Deletes a cohort's rule along with its conditions"""
    rule = get_rule(cohort)
    if rule is None:
        return
    rule.conditions.all().delete()
    rule.delete()


@transaction.atomic
def delete_all_cohorts():
    """
    Deletes every cohort enrollment method, rule, rule condition and cohort

    Returns:
        dict: the number of deleted enrollment methods, rules and cohorts
    """
    enrollment_methods, _ = CohortEnrollmentMethod.objects.all().delete()
    RuleCondition.objects.all().delete()
    rules, _ = CohortRule.objects.all().delete()
    cohorts, _ = Cohort.objects.all().delete()
    log.info(
        "Deleted %d enrollment methods, %d rules and %d cohorts",
        enrollment_methods,
        rules,
        cohorts,
    )
    return {
        "enrollment_methods": enrollment_methods,
        "rules": rules,
        "cohorts": cohorts,
    }
