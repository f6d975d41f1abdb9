"""Settings used by the test suite.

The database follows the same ``DB_*`` environment variables as the other
settings modules, so the suite can run against PostgreSQL as well. The SQLite
default keeps its test database in a file so that threads opened by a test
share it, and starts every transaction with ``BEGIN IMMEDIATE`` so that
concurrent writers queue on the database lock instead of failing.
"""

import os

from .base import *  # noqa: F401,F403
from .base import BASE_DIR

DEBUG = False

DB_ENGINE = os.environ.get('DB_ENGINE', 'django.db.backends.sqlite3')

if DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': os.environ.get('DB_NAME', BASE_DIR / 'db.sqlite3'),
            'OPTIONS': {
                'timeout': 20,
                'transaction_mode': 'IMMEDIATE',
            },
            'TEST': {
                'NAME': os.environ.get('DB_TEST_NAME', BASE_DIR / 'test-db.sqlite3'),
            },
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': os.environ.get('DB_NAME', 'club'),
            'USER': os.environ.get('DB_USER', ''),
            'PASSWORD': os.environ.get('DB_PASSWORD', ''),
            'HOST': os.environ.get('DB_HOST', ''),
            'PORT': os.environ.get('DB_PORT', ''),
        }
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

TIME_ZONE = 'UTC'
CELERY_TIMEZONE = TIME_ZONE
