"""
MedLocator — Test Settings

Used by pytest (see pyproject.toml). In-memory SQLite, fast hashing,
no throttling.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = (  # noqa: F405
    'core.renderers.StandardJSONRenderer',
)

LOGGING['loggers']['medlocator']['level'] = 'WARNING'  # noqa: F405
