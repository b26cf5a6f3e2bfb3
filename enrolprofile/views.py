"""Views for enrolment presets"""

from rest_framework import status, viewsets
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from enrolprofile.api import delete_preset
from enrolprofile.models import Preset
from enrolprofile.serializers import PresetSerializer


class PresetViewSet(viewsets.ModelViewSet):
    """API view set for enrolment presets"""

    serializer_class = PresetSerializer
    permission_classes = [IsAdminUser]
    queryset = Preset.objects.order_by("name", "id")

    def destroy(self, request, *args, **kwargs):  # noqa: ARG002
        preset = self.get_object()
        delete_preset(preset.id)
        return Response(status=status.HTTP_204_NO_CONTENT)
