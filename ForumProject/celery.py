import os

from celery import Celery

# Ensure Django settings are loaded for Celery workers
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ForumProject.settings")

app = Celery("ForumProject")

# Read settings with CELERY_ prefix from Django settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Discover posts/tasks.py (and any other app's tasks) lazily, once Django is ready
app.autodiscover_tasks()
