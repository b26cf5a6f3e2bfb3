"""
As described in
http://celery.readthedocs.org/en/latest/django/first-steps-with-django.html
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "main.settings")

app = Celery("enrolprofile")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
