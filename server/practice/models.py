import math
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from utils.text import is_ordered_subsequence, tokenize_phrase


def validate_finite(value):
    # NaN passes Min/MaxValueValidator
    if value is not None and not math.isfinite(value):
        raise ValidationError("%(value)s is not a finite number.", params={"value": value}, code="not_finite")


SCORE_VALIDATORS = [validate_finite, MinValueValidator(0.0), MaxValueValidator(100.0)]


class PracticeSession(models.Model):
    """
    One scored practice attempt. Written once after a successful analysis,
    never updated; only the owner can delete it.
    """

    class Color(models.TextChoices):
        GREEN = "green", "Green"
        YELLOW = "yellow", "Yellow"
        RED = "red", "Red"

    session_id = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="practice_sessions")
    language = models.CharField(max_length=16, default="en-US")
    target_phrase = models.TextField()
    transcription = models.TextField(blank=True, default="")
    confidence = models.FloatField(default=0.0, validators=[validate_finite, MinValueValidator(0.0), MaxValueValidator(1.0)])

    accuracy = models.FloatField(validators=SCORE_VALIDATORS)
    fluency = models.FloatField(validators=SCORE_VALIDATORS)
    prosody = models.FloatField(validators=SCORE_VALIDATORS)
    final_score = models.FloatField(validators=SCORE_VALIDATORS)
    wpm = models.FloatField(validators=[validate_finite, MinValueValidator(0.0)])
    duration = models.FloatField(validators=[validate_finite, MinValueValidator(0.0)])  # seconds
    color = models.CharField(max_length=8, choices=Color.choices)

    word_comparison = models.JSONField(default=list, blank=True)  # [{word, correct}] in target order
    feedback = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="practice_user_created_idx"),
            models.Index(fields=["user", "language"], name="practice_user_lang_idx"),
        ]

    def __str__(self):
        return f"PracticeSession({self.session_id}) user={self.user_id} score={self.final_score}"

    @staticmethod
    def color_for_score(score: float) -> str:
        if score >= 80:
            return PracticeSession.Color.GREEN
        if score >= 60:
            return PracticeSession.Color.YELLOW
        return PracticeSession.Color.RED

    def clean(self):
        super().clean()
        words = self.word_comparison
        if not isinstance(words, list):
            raise ValidationError({"word_comparison": "Must be a list."})
        for item in words:
            if (
                not isinstance(item, dict)
                or not isinstance(item.get("word"), str)
                or not item["word"].strip()
                or not isinstance(item.get("correct"), bool)
            ):
                raise ValidationError({"word_comparison": "Each entry needs a non-empty 'word' and a boolean 'correct'."})

        spoken = [tok for item in words for tok in tokenize_phrase(item["word"])]
        if not is_ordered_subsequence(spoken, tokenize_phrase(self.target_phrase)):
            raise ValidationError({"word_comparison": "Words must follow the target phrase order."})
