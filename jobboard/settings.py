"""
Django settings for jobboard project.
"""

from pathlib import Path
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


# -------------------------
# Basic / environment
# -------------------------
SECRET_KEY = os.environ.get('JOBBOARD_SECRET_KEY', 'django-insecure-dev-secret-for-local')

DEBUG = _env_flag('JOBBOARD_DEBUG', 'True')

ALLOWED_HOSTS = (
    os.environ.get('JOBBOARD_ALLOWED_HOSTS', '')
    .split(',') if os.environ.get('JOBBOARD_ALLOWED_HOSTS') else []
)


# -------------------------
# Installed apps / middleware
# -------------------------
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # project apps
    'accounts',
    'jobs',
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

ROOT_URLCONF = 'jobboard.urls'


# -------------------------
# Templates (admin site only)
# -------------------------
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


WSGI_APPLICATION = 'jobboard.wsgi.application'


# -------------------------
# Database (sqlite for dev)
# -------------------------
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('JOBBOARD_DB_PATH', BASE_DIR / 'db.sqlite3'),
        # concurrent writers wait for the lock
        'OPTIONS': {
            'timeout': 20,
            'transaction_mode': 'IMMEDIATE',
        },
        # threaded tests need a file, not a shared-cache :memory: database
        'TEST': {
            'NAME': os.environ.get('JOBBOARD_TEST_DB_PATH', BASE_DIR / 'test_db.sqlite3'),
        },
    }
}


# -------------------------
# Password validation
# -------------------------
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]


# -------------------------
# Internationalization
# -------------------------
LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('JOBBOARD_TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


# -------------------------
# Static & media (resume uploads land in the default storage)
# -------------------------
STATIC_URL = '/static/'
STATIC_ROOT = os.environ.get('JOBBOARD_STATIC_ROOT', os.path.join(BASE_DIR, 'staticfiles'))

MEDIA_URL = '/media/'
MEDIA_ROOT = os.environ.get('JOBBOARD_MEDIA_ROOT', os.path.join(BASE_DIR, 'media'))

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}


# -------------------------
# Auth (identity oracle)
# -------------------------
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LOGIN_URL = '/admin/login/'

# Trust an upstream identity provider that sets REMOTE_USER (e.g. a proxy doing SSO).
TRUST_REMOTE_USER = _env_flag('JOBBOARD_TRUST_REMOTE_USER', 'False')
if TRUST_REMOTE_USER:
    MIDDLEWARE.insert(
        MIDDLEWARE.index('django.contrib.auth.middleware.AuthenticationMiddleware') + 1,
        'django.contrib.auth.middleware.RemoteUserMiddleware',
    )
    AUTHENTICATION_BACKENDS = [
        'django.contrib.auth.backends.RemoteUserBackend',
        'django.contrib.auth.backends.ModelBackend',
    ]


# -------------------------
# Job board behaviour
# -------------------------
JOBBOARD_RESUME_MAX_BYTES = int(os.environ.get('JOBBOARD_RESUME_MAX_BYTES', 10 * 1024 * 1024))
JOBBOARD_RESUME_EXTENSIONS = tuple(
    ext.strip().lower().lstrip('.')
    for ext in os.environ.get('JOBBOARD_RESUME_EXTENSIONS', 'pdf,doc,docx').split(',')
    if ext.strip()
)
JOBBOARD_RESUME_PREFIX = 'resumes'
JOBBOARD_JOBS_DEFAULT_PAGE_SIZE = int(os.environ.get('JOBBOARD_JOBS_DEFAULT_PAGE_SIZE', 10))
JOBBOARD_JOBS_MAX_PAGE_SIZE = int(os.environ.get('JOBBOARD_JOBS_MAX_PAGE_SIZE', 50))
JOBBOARD_NOTIFY_APPLICANTS = _env_flag('JOBBOARD_NOTIFY_APPLICANTS', 'True')
JOBBOARD_ORPHAN_GRACE_HOURS = int(os.environ.get('JOBBOARD_ORPHAN_GRACE_HOURS', 24))

# Resumes are streamed to disk above this size instead of held in memory.
FILE_UPLOAD_MAX_MEMORY_SIZE = 2_621_440


# -------------------------
# Email configuration
# -------------------------
# Default: console backend in development (prints emails to terminal)
EMAIL_BACKEND = os.environ.get('JOBBOARD_EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend')
DEFAULT_FROM_EMAIL = os.environ.get('JOBBOARD_DEFAULT_FROM_EMAIL', 'Job Board <no-reply@jobboard.local>')

# Allow shorthand JOBBOARD_EMAIL_BACKEND='smtp' for convenience
if EMAIL_BACKEND.lower() in ('smtp', 'django.core.mail.backends.smtp.emailbackend'):
    EMAIL_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
    EMAIL_HOST = os.environ.get('JOBBOARD_EMAIL_HOST', 'smtp.gmail.com')
    EMAIL_PORT = int(os.environ.get('JOBBOARD_EMAIL_PORT', 587))
    EMAIL_USE_TLS = _env_flag('JOBBOARD_EMAIL_USE_TLS', 'True')
    EMAIL_HOST_USER = os.environ.get('JOBBOARD_EMAIL_HOST_USER', '')
    EMAIL_HOST_PASSWORD = os.environ.get('JOBBOARD_EMAIL_HOST_PASSWORD', '')


# -------------------------
# Logging (basic)
# -------------------------
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO' if DEBUG else 'WARNING',
            'propagate': False,
        },
        'jobs': {
            'handlers': ['console'],
            'level': os.environ.get('JOBBOARD_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}


# -------------------------
# Security (production suggestions)
# -------------------------
# In production, you should set these via environment variables:
# SECURE_HSTS_SECONDS = 31536000
# SECURE_SSL_REDIRECT = True
# SESSION_COOKIE_SECURE = True
# CSRF_COOKIE_SECURE = True
