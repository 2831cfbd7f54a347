from __future__ import annotations

from datetime import datetime, timezone

from .db import db_session
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

# =========================
# Static dashboard / analytics arrays (not computed)
# =========================
WEEKLY_PROGRESS = [
    {"day": "Mon", "sessions": 3},
    {"day": "Tue", "sessions": 5},
    {"day": "Wed", "sessions": 4},
    {"day": "Thu", "sessions": 6},
    {"day": "Fri", "sessions": 4},
    {"day": "Sat", "sessions": 7},
    {"day": "Sun", "sessions": 2},
]

THERAPY_DISTRIBUTION = [
    {"name": "Abhyanga", "value": 35},
    {"name": "Shirodhara", "value": 25},
    {"name": "Panchakarma", "value": 20},
    {"name": "Udvartana", "value": 20},
]

MOCK_ANALYTICS = {
    "therapyEffectiveness": [
        {"name": "Abhyanga", "effectiveness": 92, "sessions": 45},
        {"name": "Shirodhara", "effectiveness": 88, "sessions": 32},
        {"name": "Panchakarma", "effectiveness": 95, "sessions": 28},
        {"name": "Udvartana", "effectiveness": 85, "sessions": 38},
        {"name": "Basti", "effectiveness": 90, "sessions": 22},
        {"name": "Nasya", "effectiveness": 87, "sessions": 18},
    ],
    "practitionerPerformance": [
        {"name": "Dr. Priya Sharma", "rating": 4.9, "patients": 45, "revenue": 125000},
        {"name": "Dr. Raj Kumar", "rating": 4.7, "patients": 38, "revenue": 98000},
        {"name": "Dr. Meera Patel", "rating": 4.8, "patients": 42, "revenue": 110000},
        {"name": "Dr. Anil Gupta", "rating": 4.6, "patients": 35, "revenue": 89000},
    ],
    "monthlyTrends": [
        {"month": "Jan", "bookings": 45, "revenue": 125000, "satisfaction": 4.8},
        {"month": "Feb", "bookings": 52, "revenue": 142000, "satisfaction": 4.7},
        {"month": "Mar", "bookings": 48, "revenue": 135000, "satisfaction": 4.9},
        {"month": "Apr", "bookings": 58, "revenue": 165000, "satisfaction": 4.8},
        {"month": "May", "bookings": 62, "revenue": 178000, "satisfaction": 4.9},
        {"month": "Jun", "bookings": 55, "revenue": 158000, "satisfaction": 4.8},
    ],
    "patientSatisfaction": [
        {"rating": 5, "count": 85, "percentage": 68},
        {"rating": 4, "count": 28, "percentage": 22},
        {"rating": 3, "count": 8, "percentage": 6},
        {"rating": 2, "count": 3, "percentage": 2},
        {"rating": 1, "count": 1, "percentage": 1},
    ],
    "therapyPopularity": [
        {"name": "Abhyanga", "bookings": 45, "revenue": 54000},
        {"name": "Shirodhara", "bookings": 32, "revenue": 48000},
        {"name": "Panchakarma", "bookings": 28, "revenue": 224000},
        {"name": "Udvartana", "bookings": 38, "revenue": 38000},
        {"name": "Basti", "bookings": 22, "revenue": 44000},
        {"name": "Nasya", "bookings": 18, "revenue": 14400},
    ],
    "recoveryMetrics": [
        {"week": "Week 1", "improvement": 15, "symptoms": 85},
        {"week": "Week 2", "improvement": 35, "symptoms": 65},
        {"week": "Week 3", "improvement": 55, "symptoms": 45},
        {"week": "Week 4", "improvement": 75, "symptoms": 25},
        {"week": "Week 5", "improvement": 85, "symptoms": 15},
        {"week": "Week 6", "improvement": 92, "symptoms": 8},
    ],
}


def _therapies() -> list[Therapy]:
    return [
        Therapy(
            1, "Abhyanga",
            "Full body oil massage with warm herbal oils to improve circulation and reduce stress",
            "60 minutes", 120, "Massage Therapy", "Easy",
            ["Improves circulation", "Reduces stress", "Nourishes skin", "Detoxifies body", "Improves sleep"],
            ["Open wounds", "Fever", "Pregnancy (first trimester)"],
            "Avoid heavy meals 2 hours before",
            "Rest for 30 minutes, avoid cold water",
        ),
        Therapy(
            2, "Shirodhara",
            "Continuous stream of warm oil over the forehead to calm the mind and nervous system",
            "45 minutes", 150, "Head Therapy", "Easy",
            ["Calms mind", "Improves sleep", "Reduces anxiety", "Enhances concentration", "Balances doshas"],
            ["Head injuries", "Severe migraines", "High blood pressure"],
            "Empty stomach preferred",
            "Avoid cold water on head for 24 hours",
        ),
        Therapy(
            3, "Panchakarma Detox",
            "5-day comprehensive detoxification program for complete body purification",
            "5 days", 800, "Detox Program", "Moderate",
            ["Complete detox", "Balances doshas", "Rejuvenates body", "Boosts immunity", "Mental clarity"],
            ["Chronic diseases", "Pregnancy", "Elderly patients"],
            "Special diet 3 days before",
            "Gradual return to normal diet",
        ),
        Therapy(
            4, "Udvartana",
            "Herbal powder massage for weight management and skin improvement",
            "45 minutes", 100, "Massage Therapy", "Easy",
            ["Weight loss", "Improves skin texture", "Reduces cellulite", "Tones muscles", "Improves circulation"],
            ["Skin allergies", "Open wounds", "Sensitive skin"],
            "Clean skin, avoid lotions",
            "Warm shower after 2 hours",
        ),
        Therapy(
            5, "Basti",
            "Medicated enema therapy for colon cleansing and dosha balancing",
            "30 minutes", 200, "Detox Program", "Moderate",
            ["Colon cleansing", "Balances Vata dosha", "Improves digestion", "Detoxifies colon"],
            ["Severe constipation", "Colon diseases", "Pregnancy"],
            "Empty stomach, special diet",
            "Rest, light diet for 24 hours",
        ),
        Therapy(
            6, "Nasya",
            "Nasal administration of medicated oils for head and neck disorders",
            "20 minutes", 80, "Head Therapy", "Easy",
            ["Clears sinuses", "Improves voice", "Enhances memory", "Relieves headaches"],
            ["Nasal bleeding", "Severe cold", "Sinusitis"],
            "Clean nasal passages",
            "Avoid cold exposure",
        ),
    ]


def _practitioners() -> list[Practitioner]:
    return [
        Practitioner(
            1, "Dr. Priya Sharma", "Panchakarma Expert", "15 years", 4.9, 1200, "Mon-Fri 9AM-6PM",
            "Expert in traditional Panchakarma therapies with 15 years of experience",
            ["BAMS", "MD Ayurveda", "Panchakarma Specialist"], ["Hindi", "English", "Sanskrit"],
        ),
        Practitioner(
            2, "Dr. Raj Kumar", "Ayurvedic Physician", "10 years", 4.7, 800, "Mon-Sat 8AM-7PM",
            "Specialized in herbal medicine and constitutional analysis",
            ["BAMS", "MD Ayurveda", "Herbal Medicine"], ["Hindi", "English", "Tamil"],
        ),
        Practitioner(
            3, "Dr. Meera Patel", "Massage Therapist", "8 years", 4.8, 600, "Tue-Sun 10AM-8PM",
            "Expert in therapeutic massage and bodywork techniques",
            ["Diploma in Ayurvedic Massage", "Certified Therapist"], ["Hindi", "English", "Gujarati"],
        ),
        Practitioner(
            4, "Dr. Anil Gupta", "Detox Specialist", "12 years", 4.6, 900, "Mon-Fri 7AM-5PM",
            "Specialized in detoxification and cleansing therapies",
            ["BAMS", "Detox Therapy Certification"], ["Hindi", "English", "Punjabi"],
        ),
    ]


def _bookings() -> list[Booking]:
    return [
        Booking(
            1, "John Doe", 1, 1, "2025-01-15", "10:00",
            progress=Progress.COMPLETED, day=3, total_days=5,
            patient_age=45, patient_phone="+91-9876543210", patient_email="john.doe@email.com",
            notes="Patient responded well to treatment", cost=600, payment_status=PaymentStatus.PAID,
        ),
        Booking(
            2, "Jane Smith", 2, 2, "2025-01-16", "14:00",
            progress=Progress.IN_PROGRESS, day=1, total_days=1,
            patient_age=32, patient_phone="+91-9876543211", patient_email="jane.smith@email.com",
            notes="First session, patient comfortable", cost=150, payment_status=PaymentStatus.PENDING,
        ),
        Booking(
            3, "Robert Johnson", 3, 1, "2025-01-17", "09:00",
            progress=Progress.SCHEDULED, day=0, total_days=5,
            patient_age=55, patient_phone="+91-9876543212", patient_email="robert.johnson@email.com",
            notes="Comprehensive detox program", cost=800, payment_status=PaymentStatus.PAID,
        ),
        Booking(
            4, "Sarah Wilson", 4, 3, "2025-01-18", "11:00",
            progress=Progress.IN_PROGRESS, day=2, total_days=3,
            patient_age=28, patient_phone="+91-9876543213", patient_email="sarah.wilson@email.com",
            notes="Weight management therapy", cost=300, payment_status=PaymentStatus.PAID,
        ),
    ]


def _notifications(now: str) -> list[Notification]:
    rows = [
        (1, NotificationType.PRE_PROCEDURE, "Abhyanga Session Tomorrow",
         "Please avoid heavy meals 2 hours before your session. Wear comfortable clothing.",
         False, Priority.HIGH, [Channel.IN_APP, Channel.EMAIL], "John Doe", "Abhyanga"),
        (2, NotificationType.POST_PROCEDURE, "Post-Shirodhara Care",
         "Avoid cold water on head for 24 hours. Rest for at least 30 minutes.",
         False, Priority.MEDIUM, [Channel.IN_APP, Channel.EMAIL], "Jane Smith", "Shirodhara"),
        (1, NotificationType.REMINDER, "Session Reminder - 1 Hour",
         "Your Abhyanga session starts in 1 hour. Please arrive 15 minutes early.",
         False, Priority.URGENT, [Channel.IN_APP, Channel.EMAIL, Channel.SMS], "John Doe", "Abhyanga"),
        (2, NotificationType.MILESTONE, "Therapy Progress Milestone",
         "Congratulations! You have completed 50% of your Shirodhara treatment.",
         True, Priority.LOW, [Channel.IN_APP], "Jane Smith", "Shirodhara"),
        (1, NotificationType.ALERT, "Important: Dietary Restrictions",
         "Please follow the prescribed diet strictly for the next 3 days to maximize treatment benefits.",
         False, Priority.HIGH, [Channel.IN_APP, Channel.EMAIL], "John Doe", "Abhyanga"),
    ]
    return [
        Notification(
            id=i,
            booking_id=booking_id,
            type=tipo,
            title=title,
            message=message,
            timestamp=now,
            read=read,
            priority=priority,
            channels=channels,
            patient_name=patient,
            therapy_name=therapy,
        )
        for i, (booking_id, tipo, title, message, read, priority, channels, patient, therapy) in enumerate(rows, start=1)
    ]


def _feedback() -> list[Feedback]:
    return [
        Feedback(
            1, 1, "John Doe", 5, "2025-01-10",
            symptoms="Joint pain reduced significantly, stiffness improved",
            side_effects="None",
            improvements="Better sleep, increased energy, reduced stress levels",
            therapy_effectiveness="Excellent", would_recommend=True, follow_up_needed=False,
        ),
        Feedback(
            2, 2, "Jane Smith", 4, "2025-01-11",
            symptoms="Mild headache after session",
            side_effects="Slight dizziness for 30 minutes",
            improvements="Better focus, reduced anxiety",
            therapy_effectiveness="Good", would_recommend=True, follow_up_needed=True,
        ),
        Feedback(
            3, 4, "Sarah Wilson", 5, "2025-01-12",
            symptoms="Weight loss of 2kg in 2 weeks",
            side_effects="None",
            improvements="Improved skin texture, better circulation",
            therapy_effectiveness="Excellent", would_recommend=True, follow_up_needed=False,
        ),
    ]


def seed_base() -> None:
    """
    Fill the mock data (idempotent): a collection is seeded only while empty.
    - therapies, practitioners
    - bookings
    - notifications (timestamped now)
    - feedback
    """
    now = datetime.now(timezone.utc).isoformat()
    with db_session() as db:
        if not db.therapies:
            db.therapies.extend(_therapies())
        if not db.practitioners:
            db.practitioners.extend(_practitioners())
        if not db.bookings:
            db.bookings.extend(_bookings())
        if not db.notifications:
            db.notifications.extend(_notifications(now))
        if not db.feedback:
            db.feedback.extend(_feedback())
