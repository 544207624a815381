from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid

import practice.models


SCORE_VALIDATORS = [
    practice.models.validate_finite,
    django.core.validators.MinValueValidator(0.0),
    django.core.validators.MaxValueValidator(100.0),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PracticeSession",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("session_id", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("language", models.CharField(default="en-US", max_length=16)),
                ("target_phrase", models.TextField()),
                ("transcription", models.TextField(blank=True, default="")),
                (
                    "confidence",
                    models.FloatField(
                        default=0.0,
                        validators=[
                            practice.models.validate_finite,
                            django.core.validators.MinValueValidator(0.0),
                            django.core.validators.MaxValueValidator(1.0),
                        ],
                    ),
                ),
                ("accuracy", models.FloatField(validators=SCORE_VALIDATORS)),
                ("fluency", models.FloatField(validators=SCORE_VALIDATORS)),
                ("prosody", models.FloatField(validators=SCORE_VALIDATORS)),
                ("final_score", models.FloatField(validators=SCORE_VALIDATORS)),
                ("wpm", models.FloatField(validators=[practice.models.validate_finite, django.core.validators.MinValueValidator(0.0)])),
                ("duration", models.FloatField(validators=[practice.models.validate_finite, django.core.validators.MinValueValidator(0.0)])),
                (
                    "color",
                    models.CharField(
                        choices=[("green", "Green"), ("yellow", "Yellow"), ("red", "Red")],
                        max_length=8,
                    ),
                ),
                ("word_comparison", models.JSONField(blank=True, default=list)),
                ("feedback", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="practice_sessions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="practice_user_created_idx"),
                    models.Index(fields=["user", "language"], name="practice_user_lang_idx"),
                ],
            },
        ),
    ]
