"""
Django settings for the Hermosa Water meter handler backend.

Every deployment-specific value is read from a HERMOSA_* environment
variable; the defaults give a local SQLite development setup.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_list(name, default=''):
    return [item.strip() for item in os.environ.get(name, default).split(',') if item.strip()]


SECRET_KEY = os.environ.get('HERMOSA_SECRET_KEY', 'django-insecure-hermosa-water-dev-key')

DEBUG = env_bool('HERMOSA_DEBUG', True)

ALLOWED_HOSTS = env_list('HERMOSA_ALLOWED_HOSTS', 'localhost,127.0.0.1')


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'meters',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'hermosa_water.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'hermosa_water.wsgi.application'


# ── Database ─────────────────────────────────────────────
# PostgreSQL when HERMOSA_DB_NAME is set, SQLite otherwise.
if os.environ.get('HERMOSA_DB_NAME'):
    DATABASES = {
        'default': {
            'ENGINE':   'django.db.backends.postgresql',
            'NAME':     os.environ['HERMOSA_DB_NAME'],
            'USER':     os.environ.get('HERMOSA_DB_USER', 'postgres'),
            'PASSWORD': os.environ.get('HERMOSA_DB_PASSWORD', ''),
            'HOST':     os.environ.get('HERMOSA_DB_HOST', 'localhost'),
            'PORT':     os.environ.get('HERMOSA_DB_PORT', '5432'),
            'OPTIONS':  {'sslmode': os.environ.get('HERMOSA_DB_SSLMODE', 'prefer')},
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME':   BASE_DIR / 'db.sqlite3',
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]


LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('HERMOSA_TIME_ZONE', 'Asia/Manila')
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

# Base URL the mobile app uses to fetch uploaded profile photos.
HERMOSA_MEDIA_BASE_URL = os.environ.get('HERMOSA_MEDIA_BASE_URL',
                                        'http://127.0.0.1:8000/uploads/')


# ── Logging ──────────────────────────────────────────────
LOG_LEVEL = os.environ.get('HERMOSA_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format':  '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'class':     'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'root': {
        'handlers': ['console'],
        'level':    'WARNING',
    },
    'loggers': {
        'meters': {
            'handlers':  ['console'],
            'level':     LOG_LEVEL,
            'propagate': False,
        },
        'django.db.backends': {
            'level': 'WARNING',
        },
    },
}
