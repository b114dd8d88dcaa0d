"""
adminforms - Configuration-driven Admin Forms
Copyright © 2025 Ilona Tag

This file is part of adminforms.

adminforms is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

adminforms is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with adminforms. If not, see <https://www.gnu.org/licenses/>.

Contact: <https://github.com/elevata-labs/elevata>.
"""

from pathlib import Path

from utils.env import env_bool, env_list, env_str

BASE_DIR = Path(__file__).resolve().parent.parent
REPO_ROOT = BASE_DIR.parent

SECRET_KEY = env_str("ADMINFORMS_SECRET_KEY", "insecure-dev-key-change-me")
DEBUG = env_bool("ADMINFORMS_DEBUG", True)
ALLOWED_HOSTS = env_list("ADMINFORMS_ALLOWED_HOSTS", ["localhost", "127.0.0.1", "testserver"])

INSTALLED_APPS = [
  "django.contrib.auth",
  "django.contrib.contenttypes",
  "django.contrib.sessions",
  "django.contrib.messages",
  "django.contrib.staticfiles",
  "adminforms",
  "sample",
]

MIDDLEWARE = [
  "django.middleware.security.SecurityMiddleware",
  "django.contrib.sessions.middleware.SessionMiddleware",
  "django.middleware.common.CommonMiddleware",
  "django.middleware.csrf.CsrfViewMiddleware",
  "django.contrib.auth.middleware.AuthenticationMiddleware",
  "crum.CurrentRequestUserMiddleware",
  "adminforms_site.middleware.LoginRequiredAllMiddleware",
  "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "adminforms_site.urls"

TEMPLATES = [
  {
    "BACKEND": "django.template.backends.django.DjangoTemplates",
    "DIRS": [],
    "APP_DIRS": True,
    "OPTIONS": {
      "context_processors": [
        "django.template.context_processors.request",
        "django.contrib.auth.context_processors.auth",
        "django.contrib.messages.context_processors.messages",
        "adminforms_site.context_processors.app_menu",
      ],
    },
  },
]

DATABASES = {
  "default": {
    "ENGINE": "django.db.backends.sqlite3",
    "NAME": env_str("ADMINFORMS_DB_PATH", str(REPO_ROOT / "adminforms.sqlite3")),
  }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = env_str("ADMINFORMS_LANGUAGE_CODE", "en-us")
TIME_ZONE = env_str("ADMINFORMS_TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
MEDIA_ROOT = env_str("ADMINFORMS_MEDIA_ROOT", str(REPO_ROOT / "media"))
MEDIA_URL = "media/"

LOGIN_URL = "/accounts/login/"
LOGIN_REDIRECT_URL = "/"
LOGOUT_REDIRECT_URL = "/accounts/login/"

# ------------------------------------------------------------
# adminforms
# ------------------------------------------------------------
ADMINFORMS_CONFIG_PATH = env_str("ADMINFORMS_CONFIG_PATH")

ADMINFORMS = {
  "apps": ["sample"],
  "attr_accessible_role": "sample.roles.role_for_user",
}

ADMINFORMS_UI = {
  "order": ["Division", "Team", "Player"],
  "descriptions": {
    "Team": "Teams, their managers and colors",
  },
}

LOGGING = {
  "version": 1,
  "disable_existing_loggers": False,
  "formatters": {
    "simple": {"format": "[{levelname}] {name}: {message}", "style": "{"},
  },
  "handlers": {
    "console": {"class": "logging.StreamHandler", "formatter": "simple"},
  },
  "root": {"handlers": ["console"], "level": "WARNING"},
  "loggers": {
    "adminforms": {"level": env_str("ADMINFORMS_LOG_LEVEL", "INFO")},
  },
}
