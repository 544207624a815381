"""
Practice statistics, computed on read over the user's full session history.

Aggregation is done here in Python over streamed rows rather than with
database aggregates, so the numbers do not depend on the storage backend.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from django.utils import timezone

from .models import PracticeSession


@dataclass
class Stats:
    total_sessions: int = 0
    best_score: float = 0
    average_score: float = 0
    average_wpm: float = 0
    streak: int = 0

    def to_dict(self):
        return {
            "totalSessions": self.total_sessions,
            "bestScore": self.best_score,
            "averageScore": round(self.average_score, 2),
            "averageWpm": round(self.average_wpm, 2),
            "streak": self.streak,
        }


def compute_streak(days: Iterable[date]) -> int:
    """
    Length of the run of consecutive calendar days ending at the most recent
    day in `days`. Duplicates collapse; the first gap ends the run.
    """
    distinct = sorted(set(days), reverse=True)
    if not distinct:
        return 0
    streak = 1
    prev = distinct[0]
    for day in distinct[1:]:
        if prev - day != timedelta(days=1):
            break
        streak += 1
        prev = day
    return streak


def compute_stats(user) -> Stats:
    rows = (
        PracticeSession.objects
        .filter(user=user)
        .values_list("final_score", "wpm", "created_at")
        .iterator()
    )

    count = 0
    best = 0.0
    score_sum = 0.0
    wpm_sum = 0.0
    days = set()
    for final_score, wpm, created_at in rows:
        count += 1
        best = max(best, final_score)
        score_sum += final_score
        wpm_sum += wpm
        days.add(timezone.localdate(created_at))

    if not count:
        return Stats()

    return Stats(
        total_sessions=count,
        best_score=best,
        average_score=score_sum / count,
        average_wpm=wpm_sum / count,
        streak=compute_streak(days),
    )
