"""Common fixtures for tests."""

import base64
from datetime import datetime, timezone as dt_timezone
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
from rest_framework.test import APIClient

from practice.models import PracticeSession
from speech.gateway import AnalysisGateway


# ============================================================================
# Users & clients
# ============================================================================

@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="alice", password="alice-pass-123")


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username="bob", password="bob-pass-123")


@pytest.fixture
def api_client(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def anon_client() -> APIClient:
    return APIClient()


# ============================================================================
# Analysis engine fixtures
# ============================================================================

@pytest.fixture
def audio_b64() -> str:
    return base64.b64encode(b"RIFF\x24\x00\x00\x00WAVEfmt fake-pcm-samples").decode("ascii")


@pytest.fixture
def engine_payload() -> Dict[str, Any]:
    """A successful /analyze body as the engine sends it."""
    return {
        "success": True,
        "transcription": {"text": "hello how are you", "confidence": 0.92},
        "scoring": {
            "accuracy": 85,
            "fluency": 78,
            "prosody": 80,
            "finalScore": 82,
            "wpm": 120,
            "duration": 2.5,
            "color": "green",
            "wordComparison": [
                {"word": "Hello", "correct": True},
                {"word": "how", "correct": True},
                {"word": "are", "correct": False},
                {"word": "you", "correct": True},
            ],
        },
        "feedback": "Good pronunciation overall.",
    }


@pytest.fixture
def fake_response():
    """Build a stand-in for requests.Response."""
    def _make(status_code=200, json_data=None, content=b"", headers=None):
        resp = MagicMock()
        resp.status_code = status_code
        if json_data is None:
            resp.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            resp.json.return_value = json_data
        resp.content = content
        resp.headers = headers or {}
        return resp
    return _make


@pytest.fixture
def gateway() -> AnalysisGateway:
    return AnalysisGateway(
        base_url="http://engine.test",
        analyze_timeout=30.0,
        request_timeout=5.0,
        max_audio_bytes=1024,
        default_language="en-US",
    )


# ============================================================================
# Session records
# ============================================================================

@pytest.fixture
def make_session():
    """Insert a PracticeSession directly, bypassing the scoring pipeline."""
    def _make(user, created_at=None, **overrides):
        fields = {
            "language": "en-US",
            "target_phrase": "Hello, how are you?",
            "transcription": "hello how are you",
            "confidence": 0.9,
            "accuracy": 80,
            "fluency": 80,
            "prosody": 80,
            "final_score": 80,
            "wpm": 100,
            "duration": 2.0,
            "color": PracticeSession.Color.GREEN,
            "word_comparison": [{"word": "Hello", "correct": True}],
            "feedback": "ok",
        }
        fields.update(overrides)
        if created_at is not None:
            fields["created_at"] = created_at
        return PracticeSession.objects.create(user=user, **fields)
    return _make


def at(day: int, hour: int = 12, month: int = 1, year: int = 2026) -> datetime:
    return datetime(year, month, day, hour, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def jan():
    """`jan(8)` -> 2026-01-08 12:00 UTC."""
    return at
