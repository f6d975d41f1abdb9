"""Top-level package for Django configuration.

This package holds the settings modules of the club reservation backend
and its WSGI, ASGI and Celery entry points.
"""

# Import the Celery application as soon as Django starts. Without this
# the shared task registry will not be populated.
from .celery import app as celery_app  # noqa: F401
