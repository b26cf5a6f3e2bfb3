"""
Admin site bindings for courses
"""

from django.contrib import admin
from mitol.common.admin import TimestampedModelAdmin

from courses.models import Category, Course, Role, Tag


@admin.register(Category)
class CategoryAdmin(TimestampedModelAdmin):
    """Admin for Category"""

    model = Category
    search_fields = ["name"]
    list_display = ("id", "name", "visible")
    list_filter = ["visible"]


@admin.register(Course)
class CourseAdmin(TimestampedModelAdmin):
    """Admin for Course"""

    model = Course
    search_fields = ["title", "readable_id"]
    list_display = ("id", "title", "readable_id", "category", "visible")
    list_filter = ["visible", "category"]
    filter_horizontal = ("tags",)


@admin.register(Tag)
class TagAdmin(TimestampedModelAdmin):
    """Admin for Tag"""

    model = Tag
    search_fields = ["name"]
    list_display = ("id", "name")


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    """Admin for Role"""

    model = Role
    list_display = ("id", "shortname", "name")
