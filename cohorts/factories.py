"""Factories for cohorts"""

import factory
from factory import SubFactory
from factory.django import DjangoModelFactory

from cohorts.models import Cohort, CohortEnrollmentMethod, CohortRule
from courses.factories import CourseFactory, RoleFactory


class CohortFactory(DjangoModelFactory):
    """Factory for Cohorts"""

    name = factory.Sequence(lambda number: f"Cohort {number}")
    idnumber = factory.SelfAttribute("name")
    item_type = "course"
    item_id = factory.Sequence(lambda number: number + 1)

    class Meta:
        model = Cohort


class CohortRuleFactory(DjangoModelFactory):
    """Factory for CohortRules"""

    cohort = SubFactory(CohortFactory)
    name = factory.SelfAttribute("cohort.name")
    enabled = True

    class Meta:
        model = CohortRule


class CohortEnrollmentMethodFactory(DjangoModelFactory):
    """Factory for CohortEnrollmentMethods"""

    cohort = SubFactory(CohortFactory)
    course = SubFactory(CourseFactory)
    role = SubFactory(RoleFactory, shortname="student")

    class Meta:
        model = CohortEnrollmentMethod
