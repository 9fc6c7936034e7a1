"""
With these settings, tests run faster.
"""

from .base import *  # noqa: F403
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#secret-key
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="INgnwuvH37jf6eck2HmmKz8ISsZbDCj8v5YbhI9PXxzOCuBTS7Ns4Y4gZGGFTfDQ",
)
# https://docs.djangoproject.com/en/dev/ref/settings/#test-runner
TEST_RUNNER = "django.test.runner.DiscoverRunner"

# DATABASES
# ------------------------------------------------------------------------------
DATABASES = {"default": env.db("DATABASE_URL", default="sqlite://:memory:")}

# PASSWORDS
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#password-hashers
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# ASSIGNABLE VALUES
# ------------------------------------------------------------------------------
ASSIGNABLE_VALUES_TRANSLATIONS = {
    "en": {
        "errors": {
            "messages": {"inclusion": "is not included in the list"},
        },
        "assignable_values": {
            "music": {
                "song": {
                    "genre": {"pop": "Pop music", "rock": "Rock music"},
                    "active": {"true": "Yes", "false": "No"},
                    "year": {
                        "1977": "The year a new hope was born",
                        "1980": "The year the Empire stroke back",
                        "1983": "The year the Jedi returned",
                    },
                },
                "vinyl": {
                    "year": {
                        "1977": "The year a new hope was born",
                        "1980": "The year the Empire stroke back",
                        "1983": "The year the Jedi returned",
                    },
                },
            },
        },
    },
    "de": {
        "assignable_values": {
            "music": {
                "song": {
                    "genre": {"pop": "Popmusik"},
                },
            },
        },
    },
}
