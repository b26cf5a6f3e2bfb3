"""
Enrolment preset serializers
"""

from rest_framework import serializers

from courses.models import Category, Course, Tag
from enrolprofile import api
from enrolprofile.constants import PRESET_MUST_SELECT_ENTITIES_MSG, ItemType
from enrolprofile.models import Preset

# serializer field, item type and model of each kind of id a preset can include
PRESET_SELECTION_FIELDS = (
    ("categories", ItemType.CATEGORY, Category),
    ("courses", ItemType.COURSE, Course),
    ("tags", ItemType.TAG, Tag),
)


def _id_list_field():
    return serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        allow_empty=True,
        write_only=True,
    )


class PresetSerializer(serializers.ModelSerializer):
    """Serializer for enrolment presets"""

    categories = _id_list_field()
    courses = _id_list_field()
    tags = _id_list_field()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {
            **data,
            "categories": instance.category_ids,
            "courses": instance.course_ids,
            "tags": instance.tag_ids,
        }

    def validate(self, attrs):
        errors = {}
        selected = False
        for field_name, item_type, model in PRESET_SELECTION_FIELDS:
            if field_name in attrs:
                ids = set(attrs[field_name])
            elif self.instance is not None:
                ids = set(self.instance.get_item_ids(item_type))
            else:
                ids = set()
            selected = selected or bool(ids)

            if field_name in attrs and ids:
                found = set(model.objects.filter(id__in=ids).values_list("id", flat=True))
                missing = sorted(ids - found)
                if missing:
                    errors[field_name] = [
                        f"Invalid {item_type.label.lower()} id: {item_id}"
                        for item_id in missing
                    ]

        if errors:
            raise serializers.ValidationError(errors)
        if not selected:
            raise serializers.ValidationError(
                {"non_field_errors": [PRESET_MUST_SELECT_ENTITIES_MSG]}
            )
        return attrs

    def create(self, validated_data):
        return api.create_preset(
            validated_data["name"],
            categories=validated_data.get("categories"),
            courses=validated_data.get("courses"),
            tags=validated_data.get("tags"),
        )

    def update(self, instance, validated_data):
        return api.change_preset(
            instance,
            name=validated_data.get("name"),
            categories=validated_data.get("categories"),
            courses=validated_data.get("courses"),
            tags=validated_data.get("tags"),
        )

    class Meta:
        model = Preset
        fields = [
            "id",
            "name",
            "categories",
            "courses",
            "tags",
            "created_on",
            "updated_on",
        ]
        read_only_fields = ["id", "created_on", "updated_on"]
