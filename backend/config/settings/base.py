"""
Base settings for the interior studio project.

Values are read from the environment (or a .env file) through
python-decouple; environment modules override what differs.
"""

from pathlib import Path

from decouple import config, Csv

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# =============================================================================
# SECURITY
# =============================================================================
SECRET_KEY = config('SECRET_KEY', default='django-insecure-studio-dev-key')

DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

# =============================================================================
# APPLICATIONS
# =============================================================================
INSTALLED_APPS = [
    'infrastructure',
]

# =============================================================================
# DATABASE
# =============================================================================
# Project state lives in the in-memory registry; no database is configured.
DATABASES = {}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# =============================================================================
# INTERNATIONALIZATION
# =============================================================================
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# =============================================================================
# STUDIO
# =============================================================================
STUDIO = {
    # Number of upcoming tasks on the dashboard
    'DASHBOARD_TASK_LIMIT': config('STUDIO_DASHBOARD_TASK_LIMIT', default=5, cast=int),
    # forward_only | free
    'MATERIAL_STATUS_POLICY': config('STUDIO_MATERIAL_STATUS_POLICY', default='forward_only'),
    # Move IN_PROGRESS projects to COMPLETED when the checklist is done
    'AUTO_COMPLETE_PROJECTS': config('STUDIO_AUTO_COMPLETE_PROJECTS', default=False, cast=bool),
    'SEED_DEFAULT_CHECKLIST': config('STUDIO_SEED_DEFAULT_CHECKLIST', default=True, cast=bool),
    'CURRENCY': config('STUDIO_CURRENCY', default='INR'),
}

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL = config('LOG_LEVEL', default='INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    # Layer loggers only set a level; records propagate to the root handlers
    'loggers': {
        'domain': {
            'level': LOG_LEVEL,
        },
        'application': {
            'level': LOG_LEVEL,
        },
        'infrastructure': {
            'level': LOG_LEVEL,
        },
    },
}
