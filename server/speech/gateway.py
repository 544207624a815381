"""
Client for the remote speech analysis engine.

The engine exposes three calls:

- ``POST /analyze``    {audio, targetPhrase, language} -> transcription + scoring
- ``POST /synthesize`` {text, language}                -> raw audio bytes
- ``GET  /exercises``  ?category=                       -> practice phrases

Every call runs under an explicit timeout and is never retried here; a
failed call surfaces as one of the typed errors in ``utils.exceptions``.
"""
from __future__ import annotations

import base64
import binascii
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests
from django.conf import settings

from utils.exceptions import AnalysisTimeout, InvalidInput, ServiceRejected, ServiceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_MAX_AUDIO_BYTES = 50 * 1024 * 1024
_DATA_URL_RE = re.compile(r"^data:[^,]*;base64,", re.IGNORECASE)
# proxy-side statuses meaning the engine itself was never reached
_UNREACHABLE_STATUSES = {502, 503, 504}


@dataclass
class WordResult:
    word: str
    correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "correct": self.correct}


@dataclass
class AnalysisResult:
    transcription: str
    confidence: float
    accuracy: float
    fluency: float
    prosody: float
    final_score: float
    wpm: float
    duration: float
    color: Optional[str] = None
    word_comparison: List[WordResult] = field(default_factory=list)
    feedback: str = ""

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "AnalysisResult":
        transcription = data.get("transcription") or {}
        scoring = data["scoring"]
        words = []
        for item in scoring.get("wordComparison") or []:
            correct = item.get("correct", item.get("isCorrect", False))
            words.append(WordResult(word=str(item["word"]), correct=bool(correct)))
        return cls(
            transcription=str(transcription.get("text") or ""),
            confidence=_finite(transcription.get("confidence") or 0.0),
            accuracy=_finite(scoring["accuracy"]),
            fluency=_finite(scoring["fluency"]),
            prosody=_finite(scoring["prosody"]),
            final_score=_finite(scoring["finalScore"]),
            wpm=_finite(scoring.get("wpm") or 0.0),
            duration=_finite(scoring.get("duration") or 0.0),
            color=scoring.get("color") or None,
            word_comparison=words,
            feedback=str(data.get("feedback") or ""),
        )


def _finite(value: Any) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite number: {value!r}")
    return number


def _clean_audio_b64(audio: str) -> str:
    s = _DATA_URL_RE.sub("", audio.strip())
    return re.sub(r"\s+", "", s)


def _engine_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        msg = body.get("error") or body.get("message")
        if msg:
            return str(msg)
    return f"Analysis engine returned HTTP {resp.status_code}"


class AnalysisGateway:
    def __init__(
        self,
        base_url: str,
        analyze_timeout: float = 30.0,
        request_timeout: float = 10.0,
        max_audio_bytes: int = DEFAULT_MAX_AUDIO_BYTES,
        default_language: str = "en-US",
    ):
        self.base_url = base_url.rstrip("/")
        self.analyze_timeout = analyze_timeout
        self.request_timeout = request_timeout
        self.max_audio_bytes = max_audio_bytes
        self.default_language = default_language

    def _request(self, method: str, path: str, timeout: float, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = requests.request(method, url, timeout=timeout, **kwargs)
        except requests.Timeout as e:
            logger.warning("[ENGINE] %s %s timed out after %ss: %s", method, path, timeout, e)
            raise AnalysisTimeout()
        except requests.RequestException as e:
            logger.error("[ENGINE] %s %s unreachable: %s", method, path, e)
            raise ServiceUnavailable()

        if resp.status_code in _UNREACHABLE_STATUSES:
            logger.error("[ENGINE] %s %s HTTP %s", method, path, resp.status_code)
            raise ServiceUnavailable()
        if resp.status_code >= 400:
            msg = _engine_message(resp)
            logger.warning("[ENGINE] %s %s rejected (HTTP %s): %s", method, path, resp.status_code, msg)
            raise ServiceRejected(msg)
        return resp

    def _json(self, resp: requests.Response, path: str) -> Any:
        try:
            return resp.json()
        except ValueError:
            logger.warning("[ENGINE] %s returned a non-JSON body", path)
            raise ServiceRejected("Analysis engine returned a malformed response")

    def _validate_audio(self, audio: Optional[str]) -> str:
        if not isinstance(audio, str) or not audio.strip():
            raise InvalidInput("Audio data is required")
        cleaned = _clean_audio_b64(audio)
        # cheap upper bound before decoding anything
        if len(cleaned) * 3 // 4 > self.max_audio_bytes + 2:
            raise InvalidInput(f"Audio exceeds the {self.max_audio_bytes} byte limit")
        try:
            raw = base64.b64decode(cleaned, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidInput("Audio data is not valid base64")
        if not raw:
            raise InvalidInput("Audio data is required")
        if len(raw) > self.max_audio_bytes:
            raise InvalidInput(f"Audio exceeds the {self.max_audio_bytes} byte limit")
        return cleaned

    def analyze(self, audio: str, target_phrase: str, language: Optional[str] = None) -> AnalysisResult:
        audio_b64 = self._validate_audio(audio)
        phrase = (target_phrase or "").strip()
        if not phrase:
            raise InvalidInput("Target phrase is required")
        lang = (language or "").strip() or self.default_language

        resp = self._request(
            "POST", "/analyze", self.analyze_timeout,
            json={"audio": audio_b64, "targetPhrase": phrase, "language": lang},
        )
        data = self._json(resp, "/analyze")
        if not isinstance(data, dict) or not data.get("success"):
            msg = (data.get("error") or data.get("message")) if isinstance(data, dict) else None
            logger.warning("[ENGINE] analyze reported failure: %s", msg)
            raise ServiceRejected(str(msg or "Speech analysis failed."))

        try:
            result = AnalysisResult.from_payload(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("[ENGINE] analyze returned an incomplete result: %r", e)
            raise ServiceRejected("Analysis engine returned an incomplete result")

        logger.info("[ENGINE] analyze ok (lang=%s, score=%s)", lang, result.final_score)
        return result

    def synthesize(self, text: str, language: Optional[str] = None) -> Tuple[bytes, str]:
        text = (text or "").strip()
        if not text:
            raise InvalidInput("Text is required")
        lang = (language or "").strip() or self.default_language
        resp = self._request("POST", "/synthesize", self.request_timeout, json={"text": text, "language": lang})
        if not resp.content:
            raise ServiceRejected("Analysis engine returned no audio")
        return resp.content, resp.headers.get("Content-Type", "audio/mpeg")

    def list_exercises(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"category": category} if category else None
        resp = self._request("GET", "/exercises", self.request_timeout, params=params)
        data = self._json(resp, "/exercises")
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            if data.get("success") is False:
                raise ServiceRejected(str(data.get("error") or data.get("message") or "Failed to load exercises."))
            items = data.get("exercises", data.get("data"))
            if isinstance(items, list):
                return items
        raise ServiceRejected("Analysis engine returned a malformed response")


def get_gateway() -> AnalysisGateway:
    return AnalysisGateway(
        base_url=getattr(settings, "ANALYSIS_ENGINE_URL", "http://localhost:8000"),
        analyze_timeout=getattr(settings, "ANALYSIS_TIMEOUT", 30.0),
        request_timeout=getattr(settings, "ENGINE_REQUEST_TIMEOUT", 10.0),
        max_audio_bytes=getattr(settings, "ANALYSIS_MAX_AUDIO_BYTES", DEFAULT_MAX_AUDIO_BYTES),
        default_language=getattr(settings, "DEFAULT_LANGUAGE", "en-US"),
    )
