"""Factories for creating course data in tests"""

import factory
from factory import SubFactory, fuzzy
from factory.django import DjangoModelFactory

from courses.models import Category, Course, Role, Tag


class CategoryFactory(DjangoModelFactory):
    """Factory for Categories"""

    name = factory.Sequence(lambda number: f"Category {number}")
    visible = True

    class Meta:
        model = Category


class TagFactory(DjangoModelFactory):
    """Factory for Tags"""

    name = factory.Sequence(lambda number: f"tag{number}")

    class Meta:
        model = Tag


class CourseFactory(DjangoModelFactory):
    """Factory for Courses"""

    title = fuzzy.FuzzyText(prefix="Course ")
    readable_id = factory.Sequence(lambda number: f"course-v1:edX+C{number}")
    visible = True
    category = SubFactory(CategoryFactory)

    @factory.post_generation
    def tags(self, create, extracted, **kwargs):  # noqa: ARG002
        if not create or not extracted:
            return
        self.tags.add(*extracted)

    class Meta:
        model = Course
        skip_postgeneration_save = True


class RoleFactory(DjangoModelFactory):
    """Factory for Roles"""

    shortname = factory.Sequence(lambda number: f"role{number}")
    name = factory.LazyAttribute(lambda role: role.shortname.capitalize())

    class Meta:
        model = Role
        django_get_or_create = ("shortname",)
