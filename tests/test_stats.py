"""Tests for practice statistics and streak computation."""

from datetime import date

import pytest

from practice.stats import Stats, compute_stats, compute_streak


class TestComputeStreak:
    def test_three_consecutive_days(self):
        days = [date(2026, 1, 8), date(2026, 1, 7), date(2026, 1, 6)]
        assert compute_streak(days) == 3

    def test_gap_after_most_recent_day_stops_immediately(self):
        days = [date(2026, 1, 8), date(2026, 1, 6), date(2026, 1, 5)]
        assert compute_streak(days) == 1

    def test_same_day_sessions_collapse(self):
        days = [date(2026, 1, 8), date(2026, 1, 8), date(2026, 1, 7)]
        assert compute_streak(days) == 2

    def test_only_most_recent_run_counts(self):
        days = [date(2026, 1, 8), date(2026, 1, 7), date(2026, 1, 4), date(2026, 1, 3), date(2026, 1, 2)]
        assert compute_streak(days) == 2

    def test_input_order_does_not_matter(self):
        days = [date(2026, 1, 6), date(2026, 1, 8), date(2026, 1, 7)]
        assert compute_streak(days) == 3

    def test_month_boundary(self):
        days = [date(2026, 3, 1), date(2026, 2, 28), date(2026, 2, 27)]
        assert compute_streak(days) == 3

    def test_empty(self):
        assert compute_streak([]) == 0


@pytest.mark.django_db
class TestComputeStats:
    def test_no_sessions_gives_zeros(self, user):
        stats = compute_stats(user)
        assert stats == Stats()
        assert stats.to_dict() == {
            "totalSessions": 0,
            "bestScore": 0,
            "averageScore": 0,
            "averageWpm": 0,
            "streak": 0,
        }

    def test_average_and_best(self, user, make_session, jan):
        make_session(user, created_at=jan(8), final_score=80, wpm=100)
        make_session(user, created_at=jan(7), final_score=60, wpm=120)
        make_session(user, created_at=jan(6), final_score=100, wpm=140)

        stats = compute_stats(user)

        assert stats.total_sessions == 3
        assert stats.best_score == 100
        assert stats.average_score == 80
        assert stats.average_wpm == 120
        assert stats.streak == 3

    def test_streak_uses_calendar_day_not_instant(self, user, make_session, jan):
        # late on the 8th and early on the 7th are less than 24h apart but still two days
        make_session(user, created_at=jan(8, hour=0))
        make_session(user, created_at=jan(7, hour=23))
        make_session(user, created_at=jan(8, hour=23))

        assert compute_stats(user).streak == 2

    def test_streak_with_gap(self, user, make_session, jan):
        for day in (8, 6, 5):
            make_session(user, created_at=jan(day))

        assert compute_stats(user).streak == 1

    def test_other_users_sessions_are_ignored(self, user, other_user, make_session, jan):
        make_session(user, created_at=jan(8), final_score=50)
        make_session(other_user, created_at=jan(7), final_score=100)
        make_session(other_user, created_at=jan(6), final_score=100)

        stats = compute_stats(user)

        assert stats.total_sessions == 1
        assert stats.best_score == 50
        assert stats.streak == 1

    def test_averages_cover_full_history(self, user, make_session, jan):
        # more rows than one default page
        for i in range(25):
            make_session(user, created_at=jan(1 + i), final_score=40 if i < 5 else 90, wpm=100)

        stats = compute_stats(user)

        assert stats.total_sessions == 25
        assert stats.average_score == pytest.approx((5 * 40 + 20 * 90) / 25)
        assert stats.streak == 25

    def test_to_dict_rounds_averages(self, user, make_session, jan):
        make_session(user, created_at=jan(8), final_score=70, wpm=101)
        make_session(user, created_at=jan(8), final_score=70, wpm=100)
        make_session(user, created_at=jan(8), final_score=71, wpm=100)

        data = compute_stats(user).to_dict()

        assert data["averageScore"] == 70.33
        assert data["averageWpm"] == 100.33
