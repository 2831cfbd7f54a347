from __future__ import annotations

import logging
from datetime import date
from typing import Any, Literal

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ayursutra.config import settings
from ayursutra.logging_config import setup_logging
from ayursutra.models import NotificationType, PaymentStatus, Priority, Progress
from ayursutra.seed import seed_base
from ayursutra.services import (
    NotFoundError,
    analytics_overview,
    auto_schedule,
    create_booking,
    create_feedback,
    dashboard_stats,
    feedback_analytics,
    get_booking,
    get_practitioner,
    get_therapy,
    list_bookings,
    list_feedback,
    list_notifications,
    list_patients,
    list_practitioners,
    list_therapies,
    mark_notification_read,
    patient_history,
    practitioner_performance,
    therapy_effectiveness,
    update_booking_progress,
)

setup_logging(settings.log_level, settings.log_file)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.project_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)



# Startup

@app.on_event("startup")
def startup() -> None:
    # mock data, only into empty collections
    seed_base()
    logger.info("%s %s ready", settings.project_name, settings.api_version)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})



# Request schemas (camelCase on the wire)

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingCreateIn(CamelModel):
    patient_name: str = Field(..., min_length=1)
    therapy_id: int
    practitioner_id: int
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    total_days: int = Field(1, ge=1)
    patient_age: int | None = Field(None, ge=0)
    patient_phone: str | None = None
    patient_email: str | None = None
    notes: str | None = None
    cost: float | None = Field(None, ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING


class AutoScheduleIn(CamelModel):
    patient_name: str = Field(..., min_length=1)
    therapy_id: int
    practitioner_id: int
    start_date: date
    preferred_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    total_days: int = Field(1, ge=1, le=60)
    frequency: Literal["daily", "weekly"] = "daily"


class ProgressUpdateIn(CamelModel):
    progress: Progress
    day: int = Field(..., ge=0)


class FeedbackCreateIn(CamelModel):
    booking_id: int
    patient_name: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    symptoms: str = ""
    side_effects: str = ""
    improvements: str = ""
    therapy_effectiveness: str = ""
    would_recommend: bool = False
    follow_up_needed: bool = False



# Therapies / practitioners

@app.get("/api/health")
def api_health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/therapies")
def api_therapies(category: str | None = Query(None)) -> list[dict]:
    return list_therapies(category=category)


@app.get("/api/therapies/{therapy_id}")
def api_therapy(therapy_id: int) -> dict:
    return get_therapy(therapy_id)


@app.get("/api/therapies/{therapy_id}/effectiveness")
def api_therapy_effectiveness(therapy_id: int) -> dict[str, Any]:
    return therapy_effectiveness(therapy_id)


@app.get("/api/practitioners")
def api_practitioners() -> list[dict]:
    return list_practitioners()


@app.get("/api/practitioners/{practitioner_id}")
def api_practitioner(practitioner_id: int) -> dict:
    return get_practitioner(practitioner_id)


@app.get("/api/practitioners/{practitioner_id}/performance")
def api_practitioner_performance(practitioner_id: int) -> dict[str, Any]:
    return practitioner_performance(practitioner_id)



# Bookings

@app.get("/api/bookings")
def api_bookings(
    progress: Progress | None = Query(None),
    search: str | None = Query(None),
) -> list[dict]:
    return list_bookings(progress=progress, search=search)


@app.post("/api/bookings")
def api_create_booking(payload: BookingCreateIn) -> dict:
    try:
        return create_booking(
            patient_name=payload.patient_name,
            therapy_id=payload.therapy_id,
            practitioner_id=payload.practitioner_id,
            date=payload.date,
            time=payload.time,
            total_days=payload.total_days,
            patient_age=payload.patient_age,
            patient_phone=payload.patient_phone,
            patient_email=payload.patient_email,
            notes=payload.notes,
            cost=payload.cost,
            payment_status=payload.payment_status,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/bookings/auto-schedule")
def api_auto_schedule(payload: AutoScheduleIn) -> list[dict]:
    """
    Auto-schedule: one booking per session date,
    `totalDays` sessions one day (daily) or one week (weekly) apart.
    """
    try:
        return auto_schedule(
            patient_name=payload.patient_name,
            therapy_id=payload.therapy_id,
            practitioner_id=payload.practitioner_id,
            start_date=payload.start_date,
            preferred_time=payload.preferred_time,
            total_days=payload.total_days,
            frequency=payload.frequency,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/api/bookings/{booking_id}")
def api_booking(booking_id: int) -> dict:
    return get_booking(booking_id)


@app.put("/api/bookings/{booking_id}/progress")
def api_booking_progress(booking_id: int, payload: ProgressUpdateIn) -> dict:
    try:
        return update_booking_progress(booking_id, payload.progress, payload.day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))



# Notifications

@app.get("/api/notifications")
def api_notifications(
    notification_type: NotificationType | None = Query(None, alias="type"),
    priority: Priority | None = Query(None),
    unread: bool | None = Query(None),
    search: str | None = Query(None),
) -> list[dict]:
    return list_notifications(notification_type=notification_type, priority=priority, unread=unread, search=search)


@app.put("/api/notifications/{notification_id}/read")
def api_notification_read(notification_id: int) -> dict:
    return mark_notification_read(notification_id)



# Feedback

@app.get("/api/feedback")
def api_feedback(
    rating: int | None = Query(None, ge=1, le=5),
    search: str | None = Query(None),
) -> list[dict]:
    return list_feedback(rating=rating, search=search)


@app.post("/api/feedback")
def api_create_feedback(payload: FeedbackCreateIn) -> dict:
    try:
        return create_feedback(
            booking_id=payload.booking_id,
            patient_name=payload.patient_name,
            rating=payload.rating,
            symptoms=payload.symptoms,
            side_effects=payload.side_effects,
            improvements=payload.improvements,
            therapy_effectiveness=payload.therapy_effectiveness,
            would_recommend=payload.would_recommend,
            follow_up_needed=payload.follow_up_needed,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/api/feedback/analytics")
def api_feedback_analytics() -> dict[str, Any]:
    return feedback_analytics()



# Patients / dashboard

@app.get("/api/patients")
def api_patients() -> list[dict]:
    return list_patients()


@app.get("/api/patients/{name:path}/history")
def api_patient_history(name: str) -> dict[str, list[dict]]:
    return patient_history(name)


@app.get("/api/dashboard-stats")
def api_dashboard_stats() -> dict[str, Any]:
    return dashboard_stats()


@app.get("/api/analytics")
def api_analytics(time_range: Literal["7d", "30d", "90d", "1y"] = Query("30d", alias="range")) -> dict[str, Any]:
    return analytics_overview(time_range)
