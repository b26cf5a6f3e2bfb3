"""
Course models
"""

import logging

from django.db import models
from mitol.common.models import TimestampedModel, TimestampedModelQuerySet

log = logging.getLogger(__name__)


class CategoryQuerySet(TimestampedModelQuerySet):  # pylint: disable=missing-docstring
    def visible(self):
        """Applies a filter for Categories with visible=True"""
        return self.filter(visible=True)


class Category(TimestampedModel):
    """A single level course category"""

    name = models.CharField(max_length=255)
    visible = models.BooleanField(default=True, db_index=True)

    objects = CategoryQuerySet.as_manager()

    class Meta:
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class TagQuerySet(TimestampedModelQuerySet):  # pylint: disable=missing-docstring
    def for_courses(self):
        """Applies a filter for Tags attached to at least one course"""
        return self.filter(courses__isnull=False).distinct()


class Tag(TimestampedModel):
    """A free-form label attached to courses"""

    name = models.CharField(max_length=255, unique=True)

    objects = TagQuerySet.as_manager()

    def __str__(self):
        return self.name


class CourseQuerySet(TimestampedModelQuerySet):  # pylint: disable=missing-docstring
    def visible(self):
        """Applies a filter for Courses with visible=True"""
        return self.filter(visible=True)

    def in_categories(self, category_ids):
        """Applies a filter for Courses directly in any of the given categories"""
        return self.filter(category_id__in=category_ids)

    def tagged_with(self, tag_ids):
        """Applies a filter for Courses tagged with any of the given tags"""
        return self.filter(tags__id__in=tag_ids).distinct()


class Course(TimestampedModel):
    """A course, optionally placed in a category and tagged"""

    title = models.CharField(max_length=255)
    readable_id = models.CharField(max_length=255, unique=True)
    visible = models.BooleanField(default=True, db_index=True)
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="courses",
    )
    tags = models.ManyToManyField(Tag, blank=True, related_name="courses")

    objects = CourseQuerySet.as_manager()

    def __str__(self):
        return f"{self.readable_id} | {self.title}"


class Role(models.Model):
    """A role that can be granted to users in a course"""

    shortname = models.CharField(max_length=100, unique=True)
    name = models.CharField(max_length=255)

    def __str__(self):
        return self.shortname
