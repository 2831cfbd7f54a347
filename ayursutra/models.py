from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Progress(enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class PaymentStatus(enum.Enum):
    PAID = "paid"
    PENDING = "pending"


class NotificationType(enum.Enum):
    PRE_PROCEDURE = "pre-procedure"
    POST_PROCEDURE = "post-procedure"
    REMINDER = "reminder"
    ALERT = "alert"
    MILESTONE = "milestone"


class Priority(enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Channel(enum.Enum):
    IN_APP = "in-app"
    EMAIL = "email"
    SMS = "sms"


@dataclass
class Therapy:
    id: int
    name: str
    description: str
    duration: str
    price: float
    category: str
    difficulty: str = "Easy"
    benefits: list[str] = field(default_factory=list)
    contraindications: list[str] = field(default_factory=list)
    preparation: str = ""
    aftercare: str = ""

    def __repr__(self) -> str:
        return f"Therapy({self.name}, {self.category})"


@dataclass
class Practitioner:
    id: int
    name: str
    specialization: str
    experience: str
    rating: float = 0.0
    patients_treated: int = 0
    availability: str = ""
    bio: str = ""
    qualifications: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Practitioner({self.name}, {self.specialization})"


@dataclass
class Booking:
    """
    A therapy course booked for a patient.
    `day` counts completed days of the course and never exceeds `total_days`.
    """
    id: int
    patient_name: str
    therapy_id: int
    practitioner_id: int
    date: str
    time: str
    status: str = "confirmed"
    progress: Progress = Progress.SCHEDULED
    day: int = 0
    total_days: int = 1
    patient_age: int | None = None
    patient_phone: str | None = None
    patient_email: str | None = None
    notes: str | None = None
    cost: float = 0.0
    payment_status: PaymentStatus = PaymentStatus.PENDING


@dataclass
class Notification:
    id: int
    booking_id: int
    type: NotificationType
    title: str
    message: str
    timestamp: str
    read: bool = False
    priority: Priority = Priority.MEDIUM
    channels: list[Channel] = field(default_factory=lambda: [Channel.IN_APP])
    patient_name: str = ""
    therapy_name: str = ""


@dataclass
class Feedback:
    id: int
    booking_id: int
    patient_name: str
    rating: int
    date: str
    symptoms: str = ""
    side_effects: str = ""
    improvements: str = ""
    therapy_effectiveness: str = ""
    would_recommend: bool = False
    follow_up_needed: bool = False
