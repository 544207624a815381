import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from speech.gateway import AnalysisGateway, AnalysisResult, get_gateway
from utils.exceptions import InvalidInput, PersistenceError
from . import store
from .models import PracticeSession

logger = logging.getLogger(__name__)

IMPROVEMENT_TIPS = (
    "Speak slowly and clearly, one word at a time.",
    "Listen to the reference audio and imitate the rhythm.",
    "Record yourself again and compare with your last attempt.",
)

NEUTRAL_ENCOURAGEMENT = "Nice effort! Keep practicing to build your streak."


def encouragement_for(streak_hint: int) -> str:
    # display only: the hint comes from the client and is never stored
    if streak_hint > 0:
        return f"Great job! That's {streak_hint + 1} in a row. Keep it going!"
    return NEUTRAL_ENCOURAGEMENT


def _record_fields(result: AnalysisResult, target_phrase: str, language: str) -> dict:
    color = result.color if result.color in PracticeSession.Color.values else PracticeSession.color_for_score(result.final_score)
    return {
        "language": language,
        "target_phrase": target_phrase,
        "transcription": result.transcription,
        "confidence": result.confidence,
        "accuracy": result.accuracy,
        "fluency": result.fluency,
        "prosody": result.prosody,
        "final_score": result.final_score,
        "wpm": result.wpm,
        "duration": result.duration,
        "color": color,
        "word_comparison": [w.to_dict() for w in result.word_comparison],
        "feedback": result.feedback,
    }


def build_response(record: PracticeSession, streak_hint: int) -> dict:
    return {
        "sessionId": str(record.session_id),
        "transcription": {
            "text": record.transcription,
            "confidence": record.confidence,
        },
        "scoring": {
            "accuracy": record.accuracy,
            "fluency": record.fluency,
            "prosody": record.prosody,
            "finalScore": record.final_score,
            "wpm": record.wpm,
            "duration": record.duration,
            "color": record.color,
            "wordComparison": record.word_comparison,
        },
        "feedback": {
            "message": record.feedback,
            "tips": list(IMPROVEMENT_TIPS),
        },
        "encouragement": encouragement_for(streak_hint),
        "createdAt": record.created_at.isoformat(),
    }


def submit_session(user, audio, target_phrase, language=None, streak_hint=0, gateway: AnalysisGateway = None) -> dict:
    """
    Score one practice attempt and store it.

    Received -> Analyzing -> Persisting -> Responded, or straight to an error.
    Gateway errors propagate unchanged; nothing is written unless analysis
    succeeded.
    """
    if not audio:
        raise InvalidInput("Audio data is required")
    if not (target_phrase or "").strip():
        raise InvalidInput("Target phrase is required")

    gateway = gateway or get_gateway()
    language = (language or "").strip() or gateway.default_language
    target_phrase = target_phrase.strip()

    result = gateway.analyze(audio, target_phrase, language)

    fields = _record_fields(result, target_phrase, language)
    try:
        record = store.create_record(user, **fields)
    except ValidationError as e:
        logger.error("Rejected analysis result for user=%s: %s", user.pk, e.message_dict, extra={"data": fields})
        raise PersistenceError()
    except DatabaseError as e:
        logger.exception("Could not save session for user=%s: %s", user.pk, e, extra={"data": fields})
        raise PersistenceError()

    logger.info("Session %s saved (user=%s, score=%s)", record.session_id, user.pk, record.final_score)
    return build_response(record, streak_hint)
