"""Admin for enrolment presets"""

from django.contrib import admin
from mitol.common.admin import TimestampedModelAdmin

from enrolprofile.api import delete_preset
from enrolprofile.models import Preset


@admin.register(Preset)
class PresetAdmin(TimestampedModelAdmin):
    """
    Admin for Preset

    Presets are created and changed through the API so the enrollment methods
    follow. Deleting here goes through the same path.
    """

    model = Preset
    search_fields = ["name"]
    list_display = ("id", "name", "category", "course", "tag")
    readonly_fields = ("name", "category", "course", "tag")

    def has_add_permission(self, request):  # noqa: ARG002
        return False

    def delete_model(self, request, obj):  # noqa: ARG002
        delete_preset(obj.id)

    def delete_queryset(self, request, queryset):  # noqa: ARG002
        for preset_id in list(queryset.values_list("id", flat=True)):
            delete_preset(preset_id)
