"""
Storage access for practice sessions.

Every read and delete is filtered by the owning user: a session that exists
but belongs to someone else is reported exactly like a missing one.
"""
import uuid

from django.db import transaction

from utils.exceptions import SessionNotFound
from .models import PracticeSession


def create_record(user, **fields) -> PracticeSession:
    """Validate and insert one session; raises django ValidationError on bad data."""
    record = PracticeSession(user=user, **fields)
    record.full_clean()
    with transaction.atomic():
        record.save()
    return record


def find_by_user(user, language=None):
    qs = PracticeSession.objects.filter(user=user)
    if language:
        qs = qs.filter(language=language)
    return qs.order_by("-created_at", "-id")


def _parse_session_id(session_id):
    try:
        return uuid.UUID(str(session_id))
    except (TypeError, ValueError):
        raise SessionNotFound()


def find_one(user, session_id) -> PracticeSession:
    sid = _parse_session_id(session_id)
    try:
        return PracticeSession.objects.get(user=user, session_id=sid)
    except PracticeSession.DoesNotExist:
        raise SessionNotFound()


def delete_record(user, session_id) -> None:
    sid = _parse_session_id(session_id)
    deleted, _ = PracticeSession.objects.filter(user=user, session_id=sid).delete()
    if not deleted:
        raise SessionNotFound()
