"""API for the Courses app"""

import logging

from django.conf import settings
from django.db.models import Q

from courses.models import Category, Course, Role, Tag

log = logging.getLogger(__name__)


def get_student_role():
    """
    Returns the role granted to learners by cohort enrollment methods.

    Returns:
        Role: the student role
    """
    role, created = Role.objects.get_or_create(
        shortname=settings.ENROLPROFILE_STUDENT_ROLE,
        defaults={"name": settings.ENROLPROFILE_STUDENT_ROLE.capitalize()},
    )
    if created:
        log.warning("Created missing role '%s'", role.shortname)
    return role


def get_courses_by_categories(category_ids):
    """Returns the ids of all courses directly in any of the given categories"""
    if not category_ids:
        return set()
    return set(
        Course.objects.in_categories(category_ids).values_list("id", flat=True)
    )


def get_courses_by_tags(tag_ids):
    """Returns the ids of all courses tagged with any of the given tags"""
    if not tag_ids:
        return set()
    return set(Course.objects.tagged_with(tag_ids).values_list("id", flat=True))


def resolve_course_ids(category_ids=(), course_ids=(), tag_ids=()):
    """
    Resolves a union of categories, courses and tags to the courses it currently denotes.

    Args:
        category_ids (iterable of int): courses in these categories are included
        course_ids (iterable of int): these courses are included if they still exist
        tag_ids (iterable of int): courses with any of these tags are included

    Returns:
        set of int: the course ids
    """
    query = Q()
    if category_ids:
        query |= Q(category_id__in=category_ids)
    if course_ids:
        query |= Q(id__in=course_ids)
    if tag_ids:
        query |= Q(tags__id__in=tag_ids)
    if not query:
        return set()
    return set(Course.objects.filter(query).distinct().values_list("id", flat=True))


def get_categories():
    """Returns visible categories ordered by name"""
    return Category.objects.visible().order_by("name")


def get_courses():
    """Returns visible courses ordered by title"""
    return Course.objects.visible().order_by("title")


def get_course_tags(course_id=None):
    """
    Returns tags that are attached to courses

    Args:
        course_id (int or None): only return tags of this course

    Returns:
        QuerySet: the tags, ordered by id
    """
    tags = Tag.objects.for_courses()
    if course_id is not None:
        tags = tags.filter(courses__id=course_id)
    return tags.order_by("id")
