"""User admin"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as ContribUserAdmin
from django.utils.translation import gettext_lazy as _
from mitol.common.admin import TimestampedModelAdmin

from users.models import ProfileField, ProfileFieldCategory, ProfileFieldData, User


class ProfileFieldDataInline(admin.TabularInline):
    """Admin view for a user's profile field data"""

    model = ProfileFieldData
    extra = 0


@admin.register(User)
class UserAdmin(ContribUserAdmin, TimestampedModelAdmin):
    """Admin views for user"""

    include_created_on_in_list = True
    fieldsets = (
        (None, {"fields": ("username", "password", "last_login", "created_on")}),
        (_("Personal Info"), {"fields": ("name", "email")}),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
                "classes": ["collapse"],
            },
        ),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "password1", "password2"),
            },
        ),
    )
    list_display = ("id", "username", "email", "name", "is_staff", "last_login")
    list_filter = ("is_staff", "is_superuser", "is_active", "groups")
    search_fields = ("username", "name", "email")
    ordering = ("email",)
    readonly_fields = ("last_login",)
    inlines = [ProfileFieldDataInline]


@admin.register(ProfileFieldCategory)
class ProfileFieldCategoryAdmin(admin.ModelAdmin):
    """Admin for ProfileFieldCategory"""

    model = ProfileFieldCategory
    list_display = ("id", "name", "sortorder")


@admin.register(ProfileField)
class ProfileFieldAdmin(TimestampedModelAdmin):
    """Admin for ProfileField"""

    model = ProfileField
    search_fields = ["shortname", "name"]
    list_display = ("id", "shortname", "name", "datatype", "category", "visible")
    list_filter = ["datatype", "category"]
