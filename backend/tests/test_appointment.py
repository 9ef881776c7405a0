"""
Tests for the Appointment entity and its time window.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from conftest import utc
from domain.entities.appointment import Appointment
from domain.exceptions import InvalidArgumentError, InvalidOperationError
from domain.value_objects.appointment_status import AppointmentStatus
from domain.value_objects.time_window import TimeWindow


@pytest.fixture
def appointment():
    return Appointment(uuid4(), utc(2025, 3, 1, 10), utc(2025, 3, 1, 11), "  First fitting ")


class TestTimeWindow:

    def test_end_must_be_after_start(self):
        with pytest.raises(InvalidArgumentError):
            TimeWindow(utc(2025, 3, 1, 10), utc(2025, 3, 1, 10))
        with pytest.raises(InvalidArgumentError):
            TimeWindow(utc(2025, 3, 1, 11), utc(2025, 3, 1, 10))

    def test_naive_datetimes_are_taken_as_utc(self):
        window = TimeWindow(datetime(2025, 3, 1, 10), datetime(2025, 3, 1, 11))
        assert window.start == utc(2025, 3, 1, 10)
        assert window.start.tzinfo is not None
        assert window.duration == timedelta(hours=1)

    def test_other_timezones_are_converted(self):
        plus_two = timezone(timedelta(hours=2))
        window = TimeWindow(datetime(2025, 3, 1, 12, tzinfo=plus_two), datetime(2025, 3, 1, 13, tzinfo=plus_two))
        assert window.start == utc(2025, 3, 1, 10)

    def test_overlap_is_half_open(self):
        window = TimeWindow(utc(2025, 3, 1, 10), utc(2025, 3, 1, 11))

        assert window.overlaps(TimeWindow(utc(2025, 3, 1, 10, 30), utc(2025, 3, 1, 11, 30)))
        assert window.overlaps(TimeWindow(utc(2025, 3, 1, 9), utc(2025, 3, 1, 12)))
        assert not window.overlaps(TimeWindow(utc(2025, 3, 1, 11), utc(2025, 3, 1, 12)))
        assert not window.overlaps(TimeWindow(utc(2025, 3, 1, 9), utc(2025, 3, 1, 10)))


class TestAppointment:

    def test_new_appointment_is_scheduled_with_trimmed_notes(self, appointment):
        assert appointment.status == AppointmentStatus.SCHEDULED
        assert appointment.notes == "First fitting"
        assert appointment.start_utc == utc(2025, 3, 1, 10)

    def test_invalid_window_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Appointment(uuid4(), utc(2025, 3, 1, 11), utc(2025, 3, 1, 10))

    def test_requires_customer(self):
        with pytest.raises(InvalidArgumentError):
            Appointment(None, utc(2025, 3, 1, 10), utc(2025, 3, 1, 11))

    def test_reschedule(self, appointment):
        appointment.reschedule(utc(2025, 3, 2, 14), utc(2025, 3, 2, 15))
        assert appointment.start_utc == utc(2025, 3, 2, 14)
        assert appointment.end_utc == utc(2025, 3, 2, 15)

    def test_reschedule_to_invalid_window_keeps_old_one(self, appointment):
        with pytest.raises(InvalidArgumentError):
            appointment.reschedule(utc(2025, 3, 2, 15), utc(2025, 3, 2, 14))
        assert appointment.start_utc == utc(2025, 3, 1, 10)

    def test_only_scheduled_appointments_can_be_rescheduled(self, appointment):
        appointment.complete()
        with pytest.raises(InvalidOperationError):
            appointment.reschedule(utc(2025, 3, 2, 14), utc(2025, 3, 2, 15))

    def test_complete_then_cancel_fails(self, appointment):
        appointment.complete()
        assert appointment.status == AppointmentStatus.COMPLETED
        with pytest.raises(InvalidOperationError):
            appointment.cancel()

    def test_cancel_twice_is_allowed(self, appointment):
        appointment.cancel()
        appointment.cancel()
        assert appointment.status == AppointmentStatus.CANCELLED

    def test_cancelled_cannot_complete(self, appointment):
        appointment.cancel()
        with pytest.raises(InvalidOperationError):
            appointment.complete()

    def test_update_notes(self, appointment):
        appointment.update_notes("  Bring shoes  ")
        assert appointment.notes == "Bring shoes"
        appointment.update_notes("   ")
        assert appointment.notes is None

    def test_overlaps(self, appointment):
        assert appointment.overlaps(utc(2025, 3, 1, 10, 30), utc(2025, 3, 1, 11, 30))
        assert not appointment.overlaps(utc(2025, 3, 1, 11), utc(2025, 3, 1, 12))

    def test_status_from_string(self):
        assert AppointmentStatus.from_string(" scheduled ") == AppointmentStatus.SCHEDULED
        assert AppointmentStatus.CANCELLED.is_terminal()
        with pytest.raises(ValueError):
            AppointmentStatus.from_string("Missed")
