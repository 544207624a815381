from django.db import models

from django.contrib.auth.models import AbstractUser


SUPPORTED_LANGUAGES = [
    ("en-US", "English (US)"),
    ("hi-IN", "Hindi (India)"),
    ("es-ES", "Spanish (Spain)"),
]


class User(AbstractUser):
    preferred_language = models.CharField(
        max_length=16,
        choices=SUPPORTED_LANGUAGES,
        default="en-US",
    )
