"""Enrolment preset API URL routes"""

from django.urls import include, re_path
from rest_framework import routers

from enrolprofile import views

app_name = "enrolprofile"

router = routers.SimpleRouter()
router.register(r"presets", views.PresetViewSet, basename="presets_api")

urlpatterns = [
    re_path(r"^api/v0/enrolprofile/", include((router.urls, "v0"))),
]
