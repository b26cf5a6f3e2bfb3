"""Settings for the test suite"""

from main.settings import *  # noqa: F403

# queued tasks run in-process, so no broker is needed
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
