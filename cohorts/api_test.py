"""Tests for the cohorts API"""

import pytest
from django.db import IntegrityError

from cohorts.api import (
    add_enrollment_method,
    delete_all_cohorts,
    delete_cohort,
    delete_rule,
    ensure_rule,
    get_cohort_by_item,
    get_enrollment_course_ids,
    get_or_create_cohort,
    get_rule,
    remove_enrollment_methods,
    rename_cohort,
    rename_rule,
)
from cohorts.constants import (
    CONDITION_OPERATOR_DATE_IN_THE_FUTURE,
    CONDITION_OPERATOR_TEXT_IS_EQUAL_TO,
)
from cohorts.factories import (
    CohortEnrollmentMethodFactory,
    CohortFactory,
    CohortRuleFactory,
)
from cohorts.models import Cohort, CohortEnrollmentMethod, CohortRule, RuleCondition
from courses.factories import CourseFactory, RoleFactory

pytestmark = pytest.mark.django_db


def test_get_or_create_cohort():
    """A cohort is created once per item and found by its metadata"""
    cohort = get_or_create_cohort("course", 5, "Physics", description="Course related")
    assert cohort.name == "Physics"
    assert cohort.idnumber == "Physics"
    assert cohort.description == "Course related"

    assert get_or_create_cohort("course", 5, "Other name") == cohort
    assert get_cohort_by_item("course", 5) == cohort
    assert get_cohort_by_item("category", 5) is None
    assert Cohort.objects.count() == 1


def test_cohort_unique_per_item():
    """Two cohorts can't be bound to the same item"""
    CohortFactory.create(item_type="tag", item_id=3)
    with pytest.raises(IntegrityError):
        CohortFactory.create(item_type="tag", item_id=3)


def test_rename_cohort():
    """Renaming changes the label but not the idnumber or the item metadata"""
    cohort = CohortFactory.create(item_type="tag", item_id=3, name="remote")
    rename_cohort(cohort, "online")
    cohort.refresh_from_db()
    assert cohort.name == "online"
    assert cohort.idnumber == "remote"
    assert (cohort.item_type, cohort.item_id) == ("tag", 3)


def test_enrollment_methods():
    """Enrollment methods are added once and removed per course or all at once"""
    role = RoleFactory.create(shortname="student")
    other_role = RoleFactory.create(shortname="teacher")
    cohort = CohortFactory.create()
    courses = CourseFactory.create_batch(3)

    for course in courses:
        assert add_enrollment_method(cohort, course.id, role) is True
    assert add_enrollment_method(cohort, courses[0].id, role) is False
    add_enrollment_method(cohort, courses[0].id, other_role)

    assert get_enrollment_course_ids(cohort, role) == {course.id for course in courses}

    assert remove_enrollment_methods(cohort, role, [courses[0].id]) == 1
    assert get_enrollment_course_ids(cohort, role) == {courses[1].id, courses[2].id}
    assert remove_enrollment_methods(cohort, role, [courses[0].id]) == 0

    assert remove_enrollment_methods(cohort, role) == 2
    assert get_enrollment_course_ids(cohort, role) == set()
    assert get_enrollment_course_ids(cohort, other_role) == {courses[0].id}


def test_ensure_rule():
    """A new rule is enabled and matches the cohort name and the expiry date"""
    cohort = CohortFactory.create(name="Physics", description="Course related")
    rule = ensure_rule(cohort, "course", "enrolleduntil")

    assert rule.enabled is True
    assert rule.name == "Physics"
    assert rule.description == "Course related"
    assert [
        (condition.field, condition.operator, condition.value)
        for condition in rule.conditions.all()
    ] == [
        ("profile_field_course", CONDITION_OPERATOR_TEXT_IS_EQUAL_TO, "Physics"),
        ("profile_field_enrolleduntil", CONDITION_OPERATOR_DATE_IN_THE_FUTURE, "0"),
    ]


def test_ensure_rule_existing():
    """A cohort that already has a rule keeps it as is"""
    rule = CohortRuleFactory.create(enabled=False)
    assert ensure_rule(rule.cohort, "course", "enrolleduntil") == rule
    rule.refresh_from_db()
    assert rule.enabled is False
    assert rule.conditions.count() == 0


def test_rename_rule():
    """Renaming a rule updates its name condition but not the expiry condition"""
    cohort = CohortFactory.create(name="Physics")
    ensure_rule(cohort, "course", "enrolleduntil")

    rule = rename_rule(cohort, "Astrophysics")

    assert rule.name == "Astrophysics"
    assert [condition.value for condition in rule.conditions.all()] == [
        "Astrophysics",
        "0",
    ]
    assert rename_rule(CohortFactory.create(), "Anything") is None


def test_delete_rule_and_cohort():
    """Deleting a rule deletes its conditions, deleting a cohort deletes its methods"""
    method = CohortEnrollmentMethodFactory.create()
    cohort = method.cohort
    ensure_rule(cohort, "course", "enrolleduntil")

    delete_rule(cohort)
    assert get_rule(cohort) is None
    assert RuleCondition.objects.count() == 0
    delete_rule(cohort)

    delete_cohort(cohort)
    assert Cohort.objects.count() == 0
    assert CohortEnrollmentMethod.objects.count() == 0


def test_delete_all_cohorts():
    """Everything cohort related is deleted and counted"""
    methods = CohortEnrollmentMethodFactory.create_batch(2)
    for method in methods:
        ensure_rule(method.cohort, "course", "enrolleduntil")
    CohortFactory.create()

    assert delete_all_cohorts() == {"enrollment_methods": 2, "rules": 2, "cohorts": 3}
    assert Cohort.objects.count() == 0
    assert CohortRule.objects.count() == 0
    assert RuleCondition.objects.count() == 0
