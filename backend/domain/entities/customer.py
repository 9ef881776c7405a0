"""
Customer Entity

The shop's client record: personal and contact details, fitting preferences,
a history of body measurements and free-text notes.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from domain.entities.entity import Entity
from domain.exceptions import InvalidArgumentError, InvalidOperationError
from domain.value_objects.money import to_decimal
from domain.value_objects.text import clean_optional_text, require_text
from domain.value_objects.time_window import ensure_utc, utc_now

VIP_SPEND_THRESHOLD = Decimal("1000")


class CustomerStatus(str, Enum):
    ACTIVE = "Active"
    VIP = "VIP"


@dataclass(frozen=True)
class PersonalInfo:
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "first_name", require_text(self.first_name, "first_name"))
        object.__setattr__(self, "last_name", require_text(self.last_name, "last_name"))


@dataclass(frozen=True)
class ContactInfo:
    email: str
    phone: str = ""
    address: str = ""

    def __post_init__(self):
        if not isinstance(self.email, str) or not self.email.strip() or "@" not in self.email:
            raise InvalidArgumentError("Invalid email", {"email": self.email})
        object.__setattr__(self, "email", self.email.strip())
        object.__setattr__(self, "phone", (self.phone or "").strip())
        object.__setattr__(self, "address", (self.address or "").strip())


@dataclass(frozen=True)
class CustomerPreferences:
    """Style and fit preferences; notes hold the fabric preference."""

    style: str = ""
    fit: str = ""
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "style", (self.style or "").strip())
        object.__setattr__(self, "fit", (self.fit or "").strip())
        object.__setattr__(self, "notes", clean_optional_text(self.notes))


@dataclass(frozen=True)
class MeasurementRecord:
    """Body measurements taken on a given date."""

    date: datetime
    chest: Decimal
    waist: Decimal
    hips: Decimal
    sleeve: Decimal
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        if not isinstance(self.date, datetime):
            raise InvalidArgumentError("Measurement date is required", {"date": self.date})
        object.__setattr__(self, "date", ensure_utc(self.date))
        for name in ("chest", "waist", "hips", "sleeve"):
            value = to_decimal(getattr(self, name), name)
            if value < 0:
                raise InvalidArgumentError(f"{name} cannot be negative", {name: str(value)})
            object.__setattr__(self, name, value)


@dataclass(frozen=True)
class CustomerNote:
    text: str
    author: Optional[str] = None
    date: datetime = field(default_factory=utc_now)
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        object.__setattr__(self, "text", require_text(self.text, "text"))
        object.__setattr__(self, "author", clean_optional_text(self.author))
        object.__setattr__(self, "date", ensure_utc(self.date))


@dataclass(frozen=True)
class CustomerRegistered:
    """Raised once when a new customer is registered."""

    customer_id: UUID
    email: str
    occurred_at: datetime = field(default_factory=utc_now)


class Customer(Entity):
    """Customer aggregate root."""

    def __init__(
        self,
        customer_number: str,
        personal_info: PersonalInfo,
        contact_info: ContactInfo,
        preferences: Optional[CustomerPreferences] = None,
        *,
        id: Optional[UUID] = None,
        status: CustomerStatus = CustomerStatus.ACTIVE,
        total_spent: Decimal = Decimal("0"),
        registration_date: Optional[datetime] = None,
        measurements: Optional[List[MeasurementRecord]] = None,
        notes: Optional[List[CustomerNote]] = None,
        created_date: Optional[datetime] = None,
        enabled: bool = True,
    ):
        super().__init__(id=id, created_date=created_date, enabled=enabled)
        self.customer_number = require_text(customer_number, "customer_number")
        self.personal_info = personal_info
        self.contact_info = contact_info
        self.preferences = preferences or CustomerPreferences()
        self.status = CustomerStatus(status)
        self.total_spent = to_decimal(total_spent, "total_spent")
        self.registration_date = ensure_utc(registration_date) if registration_date else utc_now()
        self._measurements: List[MeasurementRecord] = list(measurements or [])
        self._notes: List[CustomerNote] = list(notes or [])
        self._events: list = []

    @classmethod
    def register(
        cls,
        customer_number: str,
        personal_info: PersonalInfo,
        contact_info: ContactInfo,
        preferences: Optional[CustomerPreferences] = None,
    ) -> "Customer":
        """Create a new Active customer and record a CustomerRegistered event."""
        customer = cls(customer_number, personal_info, contact_info, preferences)
        customer._events.append(CustomerRegistered(customer.id, contact_info.email))
        return customer

    @property
    def measurement_history(self) -> tuple:
        return tuple(self._measurements)

    @property
    def notes(self) -> tuple:
        return tuple(self._notes)

    def pull_events(self) -> list:
        """Return and clear pending domain events."""
        events, self._events = self._events, []
        return events

    def update_personal_info(self, personal_info: PersonalInfo) -> None:
        self.personal_info = personal_info

    def update_contact_info(self, contact_info: ContactInfo) -> None:
        self.contact_info = contact_info

    def update_preferences(self, preferences: CustomerPreferences) -> None:
        self.preferences = preferences

    def add_measurement(self, record: MeasurementRecord) -> None:
        self._measurements.append(record)

    def add_note(self, text: str, author: Optional[str] = None) -> CustomerNote:
        note = CustomerNote(text, author)
        self._notes.append(note)
        return note

    def promote_to_vip(self) -> None:
        if self.status == CustomerStatus.VIP:
            return
        if self.total_spent < VIP_SPEND_THRESHOLD:
            raise InvalidOperationError(
                f"Customer must spend at least {VIP_SPEND_THRESHOLD} to be VIP",
                {"customer_id": str(self.id), "total_spent": str(self.total_spent)}
            )
        self.status = CustomerStatus.VIP

    @property
    def full_name(self) -> str:
        return f"{self.personal_info.first_name} {self.personal_info.last_name}"
