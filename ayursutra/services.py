from __future__ import annotations

import copy
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable

from .db import MockDatabase, db_read, db_session, next_id
from .models import (
    Booking,
    Channel,
    Feedback,
    Notification,
    NotificationType,
    PaymentStatus,
    Practitioner,
    Priority,
    Progress,
    Therapy,
)
from .seed import MOCK_ANALYTICS, THERAPY_DISTRIBUTION, WEEKLY_PROGRESS

logger = logging.getLogger(__name__)

FREQUENCY_STEP_DAYS = {"daily": 1, "weekly": 7}


class NotFoundError(LookupError):
    """Raised when a record id (or name) does not match anything."""


# =========================
# Flat dicts (JSON-ready, camelCase keys)
# =========================
def therapy_flat(t: Therapy) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "description": t.description,
        "duration": t.duration,
        "price": t.price,
        "benefits": list(t.benefits),
        "category": t.category,
        "difficulty": t.difficulty,
        "contraindications": list(t.contraindications),
        "preparation": t.preparation,
        "aftercare": t.aftercare,
    }


def practitioner_flat(p: Practitioner) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "specialization": p.specialization,
        "experience": p.experience,
        "qualifications": list(p.qualifications),
        "rating": p.rating,
        "patientsTreated": p.patients_treated,
        "availability": p.availability,
        "languages": list(p.languages),
        "bio": p.bio,
    }


def booking_flat(b: Booking) -> dict:
    return {
        "id": b.id,
        "patientName": b.patient_name,
        "therapyId": b.therapy_id,
        "practitionerId": b.practitioner_id,
        "date": b.date,
        "time": b.time,
        "status": b.status,
        "progress": b.progress.value,
        "day": b.day,
        "totalDays": b.total_days,
        "patientAge": b.patient_age,
        "patientPhone": b.patient_phone,
        "patientEmail": b.patient_email,
        "notes": b.notes,
        "cost": b.cost,
        "paymentStatus": b.payment_status.value,
    }


def notification_flat(n: Notification) -> dict:
    return {
        "id": n.id,
        "bookingId": n.booking_id,
        "type": n.type.value,
        "title": n.title,
        "message": n.message,
        "read": n.read,
        "timestamp": n.timestamp,
        "priority": n.priority.value,
        "channels": [c.value for c in n.channels],
        "patientName": n.patient_name,
        "therapyName": n.therapy_name,
    }


def feedback_flat(f: Feedback) -> dict:
    return {
        "id": f.id,
        "bookingId": f.booking_id,
        "patientName": f.patient_name,
        "rating": f.rating,
        "symptoms": f.symptoms,
        "sideEffects": f.side_effects,
        "improvements": f.improvements,
        "date": f.date,
        "therapyEffectiveness": f.therapy_effectiveness,
        "wouldRecommend": f.would_recommend,
        "followUpNeeded": f.follow_up_needed,
    }


def _booking_with_details(db: MockDatabase, b: Booking) -> dict:
    """Booking plus the nested therapy and practitioner (None when the reference dangles)."""
    therapy = _find(db.therapies, b.therapy_id)
    practitioner = _find(db.practitioners, b.practitioner_id)
    row = booking_flat(b)
    row["therapy"] = therapy_flat(therapy) if therapy else None
    row["practitioner"] = practitioner_flat(practitioner) if practitioner else None
    return row


# =========================
# Helpers
# =========================
def _find(records: Iterable, record_id: int):
    return next((r for r in records if r.id == record_id), None)


def _require(records: Iterable, record_id: int, label: str):
    record = _find(records, record_id)
    if record is None:
        raise NotFoundError(f"{label} not found")
    return record


def _percent(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole else 0


def _average_rating(feedback: list[Feedback]) -> float:
    return sum(f.rating for f in feedback) / len(feedback) if feedback else 0


def _matches(term: str | None, *values: str | None) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in (v or "").lower() for v in values)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _booking_slot(day: str, at: str) -> tuple[str, str]:
    """Normalised (YYYY-MM-DD, HH:MM); ValueError for dates or times that do not exist."""
    try:
        parsed_day = datetime.strptime(day, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date '{day}' (expected YYYY-MM-DD).") from None
    try:
        parsed_at = datetime.strptime(at, "%H:%M").time()
    except ValueError:
        raise ValueError(f"Invalid time '{at}' (expected HH:MM).") from None
    return parsed_day.isoformat(), parsed_at.strftime("%H:%M")


# =========================
# Therapies / practitioners
# =========================
def list_therapies(category: str | None = None) -> list[dict]:
    with db_read() as db:
        return [
            therapy_flat(t)
            for t in db.therapies
            if category is None or t.category.lower() == category.lower()
        ]


def get_therapy(therapy_id: int) -> dict:
    with db_read() as db:
        return therapy_flat(_require(db.therapies, therapy_id, "Therapy"))


def list_practitioners() -> list[dict]:
    with db_read() as db:
        return [practitioner_flat(p) for p in db.practitioners]


def get_practitioner(practitioner_id: int) -> dict:
    with db_read() as db:
        return practitioner_flat(_require(db.practitioners, practitioner_id, "Practitioner"))


# =========================
# Bookings
# =========================
def list_bookings(progress: Progress | None = None, search: str | None = None) -> list[dict]:
    with db_read() as db:
        rows = [_booking_with_details(db, b) for b in db.bookings if progress is None or b.progress == progress]
        return [
            r for r in rows
            if _matches(
                search,
                r["patientName"],
                (r["therapy"] or {}).get("name"),
                (r["practitioner"] or {}).get("name"),
            )
        ]


def get_booking(booking_id: int) -> dict:
    with db_read() as db:
        return _booking_with_details(db, _require(db.bookings, booking_id, "Booking"))


def create_booking(
    patient_name: str,
    therapy_id: int,
    practitioner_id: int,
    date: str,
    time: str,
    total_days: int = 1,
    patient_age: int | None = None,
    patient_phone: str | None = None,
    patient_email: str | None = None,
    notes: str | None = None,
    cost: float | None = None,
    payment_status: PaymentStatus = PaymentStatus.PENDING,
) -> dict:
    """
    Book a therapy course.
    - starts confirmed / scheduled at day 0
    - cost defaults to the therapy price
    - queues a pre-procedure notification for the patient
    - date and time must exist on the calendar and the clock
    """
    if total_days < 1:
        raise ValueError("totalDays must be at least 1.")
    date, time = _booking_slot(date, time)

    with db_session() as db:
        therapy = _require(db.therapies, therapy_id, "Therapy")
        _require(db.practitioners, practitioner_id, "Practitioner")

        booking = Booking(
            id=next_id(db.bookings),
            patient_name=patient_name.strip(),
            therapy_id=therapy_id,
            practitioner_id=practitioner_id,
            date=date,
            time=time,
            total_days=total_days,
            patient_age=patient_age,
            patient_phone=patient_phone,
            patient_email=patient_email,
            notes=notes,
            cost=therapy.price if cost is None else cost,
            payment_status=payment_status,
        )
        db.bookings.append(booking)

        db.notifications.append(
            Notification(
                id=next_id(db.notifications),
                booking_id=booking.id,
                type=NotificationType.PRE_PROCEDURE,
                title=f"Upcoming {therapy.name} Session",
                message="Please prepare for your upcoming therapy session. Check pre-procedure instructions.",
                timestamp=_now_iso(),
                priority=Priority.MEDIUM,
                channels=[Channel.IN_APP, Channel.EMAIL],
                patient_name=booking.patient_name,
                therapy_name=therapy.name,
            )
        )

        logger.info("Booking %s created: %s / %s on %s %s", booking.id, booking.patient_name, therapy.name, date, time)
        return booking_flat(booking)


def schedule_dates(start: date, count: int, frequency: str = "daily") -> list[date]:
    """Session dates for a course: `count` dates from `start`, one or seven days apart."""
    step = FREQUENCY_STEP_DAYS.get(frequency)
    if step is None:
        raise ValueError(f"Unknown frequency '{frequency}' (expected one of: {', '.join(FREQUENCY_STEP_DAYS)}).")
    return [start + timedelta(days=i * step) for i in range(count)]


def auto_schedule(
    patient_name: str,
    therapy_id: int,
    practitioner_id: int,
    start_date: date,
    preferred_time: str,
    total_days: int,
    frequency: str = "daily",
) -> list[dict]:
    """
    Create one booking per session date. The whole batch is rolled back
    if any single booking fails.
    """
    dates = schedule_dates(start_date, total_days, frequency)
    with db_session():
        created = [
            create_booking(
                patient_name=patient_name,
                therapy_id=therapy_id,
                practitioner_id=practitioner_id,
                date=d.isoformat(),
                time=preferred_time,
                total_days=total_days,
            )
            for d in dates
        ]
    logger.info("Auto-scheduled %d %s sessions for %s", len(created), frequency, patient_name)
    return created


def update_booking_progress(booking_id: int, progress: Progress, day: int) -> dict:
    with db_session() as db:
        booking = _require(db.bookings, booking_id, "Booking")
        if day < 0 or day > booking.total_days:
            raise ValueError(f"Day {day} is outside the course (0..{booking.total_days}).")

        booking.progress = progress
        booking.day = day
        logger.info("Booking %s progress -> %s (day %s/%s)", booking_id, progress.value, day, booking.total_days)
        return booking_flat(booking)


# =========================
# Notifications
# =========================
def list_notifications(
    notification_type: NotificationType | None = None,
    priority: Priority | None = None,
    unread: bool | None = None,
    search: str | None = None,
) -> list[dict]:
    with db_read() as db:
        return [
            notification_flat(n)
            for n in db.notifications
            if (notification_type is None or n.type == notification_type)
            and (priority is None or n.priority == priority)
            and (unread is None or n.read != unread)
            and _matches(search, n.title, n.message, n.patient_name)
        ]


def mark_notification_read(notification_id: int) -> dict:
    with db_session() as db:
        n = _require(db.notifications, notification_id, "Notification")
        n.read = True
        return notification_flat(n)


# =========================
# Feedback
# =========================
def list_feedback(rating: int | None = None, search: str | None = None) -> list[dict]:
    with db_read() as db:
        return [
            feedback_flat(f)
            for f in db.feedback
            if (rating is None or f.rating == rating) and _matches(search, f.patient_name, f.symptoms, f.improvements)
        ]


def create_feedback(
    booking_id: int,
    patient_name: str,
    rating: int,
    symptoms: str = "",
    side_effects: str = "",
    improvements: str = "",
    therapy_effectiveness: str = "",
    would_recommend: bool = False,
    follow_up_needed: bool = False,
) -> dict:
    if not 1 <= rating <= 5:
        raise ValueError("Rating must be between 1 and 5.")

    with db_session() as db:
        _require(db.bookings, booking_id, "Booking")
        fb = Feedback(
            id=next_id(db.feedback),
            booking_id=booking_id,
            patient_name=patient_name.strip(),
            rating=rating,
            date=date.today().isoformat(),
            symptoms=symptoms,
            side_effects=side_effects,
            improvements=improvements,
            therapy_effectiveness=therapy_effectiveness,
            would_recommend=would_recommend,
            follow_up_needed=follow_up_needed,
        )
        db.feedback.append(fb)
        logger.info("Feedback %s recorded for booking %s (rating %s)", fb.id, booking_id, rating)
        return feedback_flat(fb)


def feedback_analytics() -> dict[str, Any]:
    with db_read() as db:
        fb = db.feedback
        total = len(fb)
        return {
            "totalFeedback": total,
            "averageRating": _average_rating(fb),
            "ratingDistribution": [
                {
                    "rating": rating,
                    "count": sum(1 for f in fb if f.rating == rating),
                    "percentage": _percent(sum(1 for f in fb if f.rating == rating), total),
                }
                for rating in (5, 4, 3, 2, 1)
            ],
            "positiveFeedback": sum(1 for f in fb if f.rating >= 4),
            "negativeFeedback": sum(1 for f in fb if f.rating <= 2),
            "neutralFeedback": sum(1 for f in fb if f.rating == 3),
            "recommendationRate": _percent(sum(1 for f in fb if f.would_recommend), total),
            "followUpNeeded": sum(1 for f in fb if f.follow_up_needed),
        }


# =========================
# Patients
# =========================
def list_patients(today: date | None = None) -> list[dict]:
    """
    Patient roster derived from bookings, in order of first booking.
    Contact details come from the first booking that carries them.
    """
    today = today or date.today()
    roster: dict[str, dict] = {}

    with db_read() as db:
        for b in db.bookings:
            p = roster.setdefault(
                b.patient_name,
                {
                    "name": b.patient_name,
                    "age": None,
                    "phone": None,
                    "email": None,
                    "totalSessions": 0,
                    "completedSessions": 0,
                    "lastVisit": None,
                    "nextAppointment": None,
                },
            )
            p["age"] = p["age"] if p["age"] is not None else b.patient_age
            p["phone"] = p["phone"] or b.patient_phone
            p["email"] = p["email"] or b.patient_email
            p["totalSessions"] += b.total_days
            p["completedSessions"] += b.day

            booked_on = date.fromisoformat(b.date)
            if booked_on <= today:
                if p["lastVisit"] is None or b.date > p["lastVisit"]:
                    p["lastVisit"] = b.date
            elif b.progress != Progress.COMPLETED:
                if p["nextAppointment"] is None or b.date < p["nextAppointment"]:
                    p["nextAppointment"] = b.date

    return list(roster.values())


def patient_history(patient_name: str) -> dict[str, list[dict]]:
    with db_read() as db:
        return {
            "bookings": [_booking_with_details(db, b) for b in db.bookings if b.patient_name == patient_name],
            "feedback": [feedback_flat(f) for f in db.feedback if f.patient_name == patient_name],
        }


# =========================
# Reports
# =========================
def _feedback_for(db: MockDatabase, bookings: list[Booking]) -> list[Feedback]:
    ids = {b.id for b in bookings}
    return [f for f in db.feedback if f.booking_id in ids]


def practitioner_performance(practitioner_id: int) -> dict[str, Any]:
    with db_read() as db:
        _require(db.practitioners, practitioner_id, "Practitioner")
        bookings = [b for b in db.bookings if b.practitioner_id == practitioner_id]
        fb = _feedback_for(db, bookings)
        return {
            "totalPatients": len(bookings),
            "completedSessions": sum(1 for b in bookings if b.progress == Progress.COMPLETED),
            "averageRating": _average_rating(fb),
            "patientSatisfaction": _percent(sum(1 for f in fb if f.rating >= 4), len(fb)),
            "revenue": sum(b.cost for b in bookings),
        }


def therapy_effectiveness(therapy_id: int) -> dict[str, Any]:
    with db_read() as db:
        _require(db.therapies, therapy_id, "Therapy")
        bookings = [b for b in db.bookings if b.therapy_id == therapy_id]
        fb = _feedback_for(db, bookings)
        return {
            "totalSessions": len(bookings),
            "completionRate": _percent(sum(1 for b in bookings if b.progress == Progress.COMPLETED), len(bookings)),
            "averageRating": _average_rating(fb),
            "commonImprovements": " ".join(f.improvements for f in fb),
            "sideEffects": [f.side_effects for f in fb if f.side_effects and f.side_effects != "None"],
            "recommendationRate": _percent(sum(1 for f in fb if f.would_recommend), len(fb)),
        }


def dashboard_stats() -> dict[str, Any]:
    with db_read() as db:
        return {
            "totalBookings": len(db.bookings),
            "completedSessions": sum(1 for b in db.bookings if b.progress == Progress.COMPLETED),
            "upcomingSessions": sum(1 for b in db.bookings if b.progress == Progress.SCHEDULED),
            "unreadNotifications": sum(1 for n in db.notifications if not n.read),
            "weeklyProgress": copy.deepcopy(WEEKLY_PROGRESS),
            "therapyDistribution": copy.deepcopy(THERAPY_DISTRIBUTION),
        }


def analytics_overview(time_range: str = "30d") -> dict[str, Any]:
    """Static analytics arrays plus the headline totals derived from them."""
    data = copy.deepcopy(MOCK_ANALYTICS)
    trends = data["monthlyTrends"]
    popularity = data["therapyPopularity"]

    data["timeRange"] = time_range
    data["totalRevenue"] = sum(m["revenue"] for m in trends)
    data["totalBookings"] = sum(m["bookings"] for m in trends)
    data["averageSatisfaction"] = sum(m["satisfaction"] for m in trends) / len(trends) if trends else 0
    data["topTherapy"] = max(popularity, key=lambda t: t["bookings"])["name"] if popularity else None
    return data
