"""Tests for the courses API"""

import pytest

from courses.api import (
    get_categories,
    get_course_tags,
    get_courses,
    get_courses_by_categories,
    get_courses_by_tags,
    get_student_role,
    resolve_course_ids,
)
from courses.factories import CategoryFactory, CourseFactory, RoleFactory, TagFactory
from courses.models import Role

pytestmark = pytest.mark.django_db


def test_get_student_role(settings):
    """The student role is created the first time it's needed"""
    settings.ENROLPROFILE_STUDENT_ROLE = "learner"
    role = get_student_role()
    assert role.shortname == "learner"
    assert get_student_role() == role
    assert Role.objects.count() == 1


def test_get_student_role_existing():
    """An existing role is returned as is"""
    role = RoleFactory.create(shortname="student", name="Learner")
    assert get_student_role() == role


def test_get_courses_by_categories():
    """Only courses directly in the categories are returned"""
    category, other_category = CategoryFactory.create_batch(2)
    courses = CourseFactory.create_batch(2, category=category)
    CourseFactory.create(category=other_category)
    CourseFactory.create(category=None)

    assert get_courses_by_categories([category.id]) == {
        course.id for course in courses
    }
    assert get_courses_by_categories([]) == set()


def test_get_courses_by_tags():
    """Courses with any of the tags are returned once"""
    tag, other_tag, unused_tag = TagFactory.create_batch(3)
    both = CourseFactory.create(tags=[tag, other_tag])
    single = CourseFactory.create(tags=[other_tag])
    CourseFactory.create()

    assert get_courses_by_tags([tag.id, other_tag.id]) == {both.id, single.id}
    assert get_courses_by_tags([unused_tag.id]) == set()
    assert get_courses_by_tags([]) == set()


def test_resolve_course_ids():
    """Categories, courses and tags resolve to the union of their courses"""
    category = CategoryFactory.create()
    tag = TagFactory.create()
    in_category = CourseFactory.create(category=category)
    tagged = CourseFactory.create(tags=[tag])
    in_both = CourseFactory.create(category=category, tags=[tag])
    direct = CourseFactory.create()
    CourseFactory.create()

    assert resolve_course_ids(
        category_ids=[category.id],
        course_ids=[direct.id, in_category.id, 9999],
        tag_ids=[tag.id],
    ) == {in_category.id, tagged.id, in_both.id, direct.id}


def test_resolve_course_ids_empty():
    """Nothing selected resolves to no courses"""
    CourseFactory.create()
    assert resolve_course_ids() == set()


def test_visible_items():
    """Hidden categories and courses are left out, tags need a course"""
    visible_category = CategoryFactory.create(name="B")
    CategoryFactory.create(name="A", visible=False)
    visible_course = CourseFactory.create(title="Course B", category=visible_category)
    CourseFactory.create(title="Course A", visible=False, category=visible_category)
    used_tag = TagFactory.create()
    TagFactory.create()
    visible_course.tags.add(used_tag)

    assert list(get_categories()) == [visible_category]
    assert list(get_courses()) == [visible_course]
    assert list(get_course_tags()) == [used_tag]
    assert list(get_course_tags(visible_course.id)) == [used_tag]
