"""Tests for the domain services."""
from datetime import date

import pytest

from ayursutra.models import NotificationType, Priority, Progress
from ayursutra.services import (
    NotFoundError,
    analytics_overview,
    auto_schedule,
    create_booking,
    create_feedback,
    dashboard_stats,
    feedback_analytics,
    get_booking,
    get_therapy,
    list_bookings,
    list_feedback,
    list_notifications,
    list_patients,
    list_therapies,
    mark_notification_read,
    patient_history,
    practitioner_performance,
    schedule_dates,
    therapy_effectiveness,
    update_booking_progress,
)


class TestCatalog:
    """Therapies and practitioners."""

    def test_therapy_filter_by_category(self):
        names = [t["name"] for t in list_therapies(category="head therapy")]
        assert names == ["Shirodhara", "Nasya"]

    def test_get_therapy_missing(self):
        with pytest.raises(NotFoundError, match="Therapy not found"):
            get_therapy(42)

    def test_booking_details_are_nested(self):
        b = get_booking(3)
        assert b["therapy"]["name"] == "Panchakarma Detox"
        assert b["practitioner"]["name"] == "Dr. Priya Sharma"
        assert b["totalDays"] == 5


class TestBookings:
    """Booking creation and progress tracking."""

    def test_create_booking_defaults(self):
        b = create_booking("  Asha Rao ", therapy_id=1, practitioner_id=3, date="2025-03-01", time="09:30")
        assert b["id"] == 5
        assert b["patientName"] == "Asha Rao"
        assert b["status"] == "confirmed"
        assert b["progress"] == "scheduled"
        assert b["day"] == 0
        assert b["totalDays"] == 1
        assert b["cost"] == 120
        assert b["paymentStatus"] == "pending"

    def test_create_booking_queues_notification(self):
        create_booking("Asha Rao", therapy_id=2, practitioner_id=2, date="2025-03-01", time="09:30")
        n = list_notifications()[-1]
        assert n["id"] == 6
        assert n["bookingId"] == 5
        assert n["type"] == "pre-procedure"
        assert n["title"] == "Upcoming Shirodhara Session"
        assert n["read"] is False
        assert n["patientName"] == "Asha Rao"
        assert n["therapyName"] == "Shirodhara"

    def test_create_booking_unknown_therapy(self):
        with pytest.raises(NotFoundError):
            create_booking("Asha Rao", therapy_id=99, practitioner_id=1, date="2025-03-01", time="09:30")
        assert len(list_bookings()) == 4
        assert len(list_notifications()) == 5

    def test_create_booking_rejects_zero_days(self):
        with pytest.raises(ValueError):
            create_booking("Asha Rao", 1, 1, "2025-03-01", "09:30", total_days=0)

    @pytest.mark.parametrize("day, at", [("2025-13-45", "09:30"), ("2025-02-29", "09:30"), ("2025-03-01", "99:99")])
    def test_create_booking_rejects_impossible_slot(self, day, at):
        with pytest.raises(ValueError, match="Invalid"):
            create_booking("Asha Rao", 1, 1, day, at)
        assert len(list_bookings()) == 4
        assert list_patients()

    def test_create_booking_normalises_slot(self):
        b = create_booking("Asha Rao", 1, 1, "2025-3-1", "9:05")
        assert (b["date"], b["time"]) == ("2025-03-01", "09:05")

    def test_explicit_cost_kept(self):
        b = create_booking("Asha Rao", 3, 4, "2025-03-01", "09:30", total_days=5, cost=3500)
        assert b["cost"] == 3500

    def test_update_progress(self):
        b = update_booking_progress(3, Progress.IN_PROGRESS, 2)
        assert b["progress"] == "in-progress"
        assert b["day"] == 2
        assert get_booking(3)["day"] == 2

    def test_update_progress_day_beyond_course(self):
        with pytest.raises(ValueError):
            update_booking_progress(2, Progress.COMPLETED, 2)
        assert get_booking(2)["progress"] == "in-progress"

    def test_update_progress_missing_booking(self):
        with pytest.raises(NotFoundError, match="Booking not found"):
            update_booking_progress(77, Progress.COMPLETED, 1)

    def test_filter_by_progress_and_search(self):
        assert [b["id"] for b in list_bookings(progress=Progress.IN_PROGRESS)] == [2, 4]
        assert [b["id"] for b in list_bookings(search="priya")] == [1, 3]
        assert [b["id"] for b in list_bookings(search="udvartana")] == [4]
        assert [b["id"] for b in list_bookings(search="jane")] == [2]


class TestAutoSchedule:
    """Course auto-scheduling (date increments only)."""

    def test_schedule_dates_daily(self):
        assert schedule_dates(date(2025, 1, 30), 3) == [date(2025, 1, 30), date(2025, 1, 31), date(2025, 2, 1)]

    def test_schedule_dates_weekly(self):
        assert schedule_dates(date(2025, 2, 1), 2, "weekly") == [date(2025, 2, 1), date(2025, 2, 8)]

    def test_schedule_dates_unknown_frequency(self):
        with pytest.raises(ValueError):
            schedule_dates(date(2025, 2, 1), 2, "monthly")

    def test_auto_schedule_creates_one_booking_per_session(self):
        created = auto_schedule("Vikram Rao", 3, 4, date(2025, 2, 1), "08:00", total_days=3, frequency="weekly")
        assert [b["date"] for b in created] == ["2025-02-01", "2025-02-08", "2025-02-15"]
        assert [b["id"] for b in created] == [5, 6, 7]
        assert all(b["totalDays"] == 3 and b["time"] == "08:00" for b in created)
        assert len(list_notifications()) == 8

    def test_auto_schedule_unknown_practitioner_creates_nothing(self):
        with pytest.raises(NotFoundError):
            auto_schedule("Vikram Rao", 3, 40, date(2025, 2, 1), "08:00", total_days=3)
        assert len(list_bookings()) == 4


class TestNotifications:
    """Notification listing and read state."""

    def test_filters(self):
        assert [n["id"] for n in list_notifications(notification_type=NotificationType.ALERT)] == [5]
        assert [n["id"] for n in list_notifications(priority=Priority.HIGH)] == [1, 5]
        assert len(list_notifications(unread=True)) == 4
        assert [n["id"] for n in list_notifications(unread=False)] == [4]
        assert [n["id"] for n in list_notifications(search="dietary")] == [5]

    def test_mark_read(self):
        n = mark_notification_read(1)
        assert n["read"] is True
        assert dashboard_stats()["unreadNotifications"] == 3

    def test_mark_read_missing(self):
        with pytest.raises(NotFoundError, match="Notification not found"):
            mark_notification_read(100)


class TestFeedback:
    """Feedback capture and analytics."""

    def test_create_feedback(self):
        fb = create_feedback(3, "Robert Johnson", 3, improvements="More energy", follow_up_needed=True)
        assert fb["id"] == 4
        assert fb["date"] == date.today().isoformat()
        assert fb["followUpNeeded"] is True
        assert fb["wouldRecommend"] is False

    def test_create_feedback_unknown_booking(self):
        with pytest.raises(NotFoundError):
            create_feedback(50, "Nobody", 5)

    def test_create_feedback_rating_bounds(self):
        with pytest.raises(ValueError):
            create_feedback(1, "John Doe", 6)

    def test_list_filters(self):
        assert [f["id"] for f in list_feedback(rating=5)] == [1, 3]
        assert [f["id"] for f in list_feedback(search="anxiety")] == [2]

    def test_analytics(self):
        a = feedback_analytics()
        assert a["totalFeedback"] == 3
        assert a["averageRating"] == pytest.approx(14 / 3)
        dist = {d["rating"]: d for d in a["ratingDistribution"]}
        assert list(dist) == [5, 4, 3, 2, 1]
        assert dist[5]["count"] == 2
        assert dist[5]["percentage"] == pytest.approx(200 / 3)
        assert dist[1]["count"] == 0
        assert a["positiveFeedback"] == 3
        assert a["neutralFeedback"] == 0
        assert a["negativeFeedback"] == 0
        assert a["recommendationRate"] == 100
        assert a["followUpNeeded"] == 1


class TestReports:
    """Dashboard, performance and effectiveness reports."""

    def test_dashboard_stats(self):
        stats = dashboard_stats()
        assert stats["totalBookings"] == 4
        assert stats["completedSessions"] == 1
        assert stats["upcomingSessions"] == 1
        assert stats["unreadNotifications"] == 4
        assert len(stats["weeklyProgress"]) == 7
        assert stats["therapyDistribution"][0] == {"name": "Abhyanga", "value": 35}

    def test_practitioner_performance(self):
        perf = practitioner_performance(1)
        assert perf == {
            "totalPatients": 2,
            "completedSessions": 1,
            "averageRating": 5,
            "patientSatisfaction": 100,
            "revenue": 1400,
        }

    def test_practitioner_without_bookings(self):
        perf = practitioner_performance(4)
        assert perf["totalPatients"] == 0
        assert perf["averageRating"] == 0
        assert perf["revenue"] == 0

    def test_practitioner_performance_missing(self):
        with pytest.raises(NotFoundError):
            practitioner_performance(9)

    def test_therapy_effectiveness(self):
        eff = therapy_effectiveness(2)
        assert eff["totalSessions"] == 1
        assert eff["completionRate"] == 0
        assert eff["averageRating"] == 4
        assert eff["commonImprovements"] == "Better focus, reduced anxiety"
        assert eff["sideEffects"] == ["Slight dizziness for 30 minutes"]
        assert eff["recommendationRate"] == 100

    def test_therapy_effectiveness_skips_none_side_effects(self):
        eff = therapy_effectiveness(1)
        assert eff["completionRate"] == 100
        assert eff["sideEffects"] == []

    def test_analytics_overview_totals(self):
        data = analytics_overview("90d")
        assert data["timeRange"] == "90d"
        assert data["totalBookings"] == 320
        assert data["totalRevenue"] == 903000
        assert data["averageSatisfaction"] == pytest.approx(4.8166, abs=1e-3)
        assert data["topTherapy"] == "Abhyanga"


class TestPatients:
    """Patient roster and history derived from bookings."""

    def test_roster(self):
        patients = list_patients(today=date(2025, 1, 16))
        assert [p["name"] for p in patients] == ["John Doe", "Jane Smith", "Robert Johnson", "Sarah Wilson"]
        john = patients[0]
        assert john["age"] == 45
        assert john["totalSessions"] == 5
        assert john["completedSessions"] == 3
        assert john["lastVisit"] == "2025-01-15"
        assert john["nextAppointment"] is None
        robert = patients[2]
        assert robert["lastVisit"] is None
        assert robert["nextAppointment"] == "2025-01-17"

    def test_history(self):
        history = patient_history("John Doe")
        assert [b["id"] for b in history["bookings"]] == [1]
        assert history["bookings"][0]["therapy"]["name"] == "Abhyanga"
        assert [f["id"] for f in history["feedback"]] == [1]

    def test_history_unknown_patient_is_empty(self):
        assert patient_history("Nobody") == {"bookings": [], "feedback": []}
