"""
Tests for the application services over real repositories.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from conftest import register_request, utc
from dtos.request.appointment_request import (
    RescheduleAppointmentRequest,
    ScheduleAppointmentRequest,
    UpdateAppointmentNotesRequest,
)
from dtos.request.customer_request import AddMeasurementRequest, AddNoteRequest, UpdateCustomerRequest
from dtos.request.work_order_request import (
    AddWorkOrderItemRequest,
    CreateWorkOrderRequest,
    SetDiscountRequest,
    UpdateItemQuantityRequest,
)
from exceptions import ValidationError
from services.results import CommandResult, Outcome, PageResult


def schedule(start_hour, end_hour, start_minute=0, end_minute=0, notes=None):
    return ScheduleAppointmentRequest(
        start_utc=utc(2025, 3, 1, start_hour, start_minute),
        end_utc=utc(2025, 3, 1, end_hour, end_minute),
        notes=notes,
    )


def item(description="Suit", quantity=1, unit_price="120", currency="USD", **kwargs):
    return AddWorkOrderItemRequest(
        description=description, quantity=quantity, unit_price=unit_price, currency=currency, **kwargs
    )


class TestResults:

    def test_page_result_navigation(self):
        page = PageResult(items=[1, 2], total=5, page=2, page_size=2)
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is True

        empty = PageResult(items=[], total=0, page=1, page_size=20)
        assert empty.total_pages == 0
        assert empty.has_next is False
        assert empty.has_previous is False

    def test_succeeded(self):
        assert CommandResult.ok().succeeded
        assert CommandResult.created(uuid4()).succeeded
        assert not CommandResult.not_found("missing").succeeded
        assert not CommandResult.conflict("taken", key="x").succeeded
        assert CommandResult.rejected("bad", field="x").details == {"field": "x"}


class TestCustomerService:

    def test_register_and_get_details(self, customer_service, customer_id):
        details = customer_service.get_details(customer_id)

        assert details.customer_number == "C-1001"
        assert details.first_name == "Ada"
        assert details.fabric_preference == "Wool"
        assert details.status == "Active"

    def test_duplicate_customer_number_conflicts(self, customer_service, customer_id):
        result = customer_service.register(request=register_request(email="other@example.com"))
        assert result.outcome == Outcome.CONFLICT

    def test_update(self, customer_service, customer_id):
        request = UpdateCustomerRequest(first_name="Augusta", last_name="King", email="augusta@example.com")
        assert customer_service.update(customer_id=customer_id, request=request).outcome == Outcome.OK

        details = customer_service.get_details(customer_id)
        assert details.first_name == "Augusta"
        assert details.email == "augusta@example.com"
        assert details.fabric_preference is None

    def test_update_missing_customer(self, customer_service):
        request = UpdateCustomerRequest(first_name="A", last_name="B", email="a@b.c")
        assert customer_service.update(customer_id=uuid4(), request=request).outcome == Outcome.NOT_FOUND

    def test_delete_and_restore(self, customer_service, customer_id):
        assert customer_service.delete(customer_id=customer_id).outcome == Outcome.OK
        assert customer_service.delete(customer_id=customer_id).outcome == Outcome.NOT_FOUND
        assert customer_service.get_details(customer_id).enabled is False

        page = customer_service.list_customers(1, 20)
        assert page.total == 0
        page = customer_service.list_customers(1, 20, status="disabled")
        assert page.total == 1

        assert customer_service.restore(customer_id=customer_id).outcome == Outcome.OK
        assert customer_service.get_details(customer_id).enabled is True

    def test_measurements_and_notes_newest_first(self, customer_service, customer_id):
        customer_service.add_measurement(customer_id=customer_id, request=AddMeasurementRequest(
            date=utc(2025, 1, 1), chest=100, waist=80, hips=95, sleeve=62
        ))
        customer_service.add_measurement(customer_id=customer_id, request=AddMeasurementRequest(
            date=utc(2025, 2, 1), chest=101, waist=81, hips=96, sleeve=62
        ))
        result = customer_service.add_note(
            customer_id=customer_id, request=AddNoteRequest(text="Prefers side vents", author="Sam")
        )
        assert result.outcome == Outcome.OK

        details = customer_service.get_details(customer_id)
        assert [m.chest for m in details.measurements] == [Decimal("101"), Decimal("100")]
        assert details.notes[0].text == "Prefers side vents"

    def test_list_rejects_unknown_parameters(self, customer_service):
        with pytest.raises(ValidationError):
            customer_service.list_customers(1, 20, sort_by="shoe_size")
        with pytest.raises(ValidationError):
            customer_service.list_customers(1, 20, sort_dir="sideways")
        with pytest.raises(ValidationError):
            customer_service.list_customers(1, 20, status="archived")


class TestAppointmentService:

    def test_schedule(self, appointment_service, customer_id):
        result = appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11, notes="Fitting"))
        assert result.outcome == Outcome.CREATED

        page = appointment_service.list_for_customer(customer_id, None, None, 1, 50)
        assert page.total == 1
        assert page.items[0].id == result.value
        assert page.items[0].notes == "Fitting"

    def test_schedule_for_unknown_customer_is_rejected(self, appointment_service):
        result = appointment_service.schedule(customer_id=uuid4(), request=schedule(10, 11))
        assert result.outcome == Outcome.REJECTED

    def test_overlapping_schedule_conflicts(self, appointment_service, customer_id):
        appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11))

        result = appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11, 30, 30))
        assert result.outcome == Outcome.CONFLICT

        adjacent = appointment_service.schedule(customer_id=customer_id, request=schedule(11, 12))
        assert adjacent.outcome == Outcome.CREATED

    def test_reschedule_ignores_itself_but_not_others(self, appointment_service, customer_id):
        first = appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11)).value
        appointment_service.schedule(customer_id=customer_id, request=schedule(13, 14))

        shifted = RescheduleAppointmentRequest(start_utc=utc(2025, 3, 1, 10, 30), end_utc=utc(2025, 3, 1, 11, 30))
        result = appointment_service.reschedule(customer_id=customer_id, appointment_id=first, request=shifted)
        assert result.outcome == Outcome.OK

        clash = RescheduleAppointmentRequest(start_utc=utc(2025, 3, 1, 13, 30), end_utc=utc(2025, 3, 1, 14, 30))
        result = appointment_service.reschedule(customer_id=customer_id, appointment_id=first, request=clash)
        assert result.outcome == Outcome.CONFLICT

    def test_commands_check_ownership(self, appointment_service, customer_service, customer_id):
        appointment_id = appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11)).value
        other_customer = customer_service.register(
            request=register_request(number="C-2", email="b@example.com")
        ).value

        assert appointment_service.cancel(
            customer_id=other_customer, appointment_id=appointment_id
        ).outcome == Outcome.NOT_FOUND
        assert appointment_service.complete(
            customer_id=customer_id, appointment_id=uuid4()
        ).outcome == Outcome.NOT_FOUND

    def test_complete_cancel_and_notes(self, appointment_service, customer_id):
        appointment_id = appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11)).value

        notes = UpdateAppointmentNotesRequest(notes="  Bring shoes ")
        assert appointment_service.update_notes(
            customer_id=customer_id, appointment_id=appointment_id, request=notes
        ).outcome == Outcome.OK
        assert appointment_service.complete(
            customer_id=customer_id, appointment_id=appointment_id
        ).outcome == Outcome.OK

        result = appointment_service.cancel(customer_id=customer_id, appointment_id=appointment_id)
        assert result.outcome == Outcome.REJECTED

        page = appointment_service.list_appointments(customer_id, "completed", 1, 50)
        assert page.total == 1
        assert page.items[0].notes == "Bring shoes"
        assert page.items[0].status == "Completed"

    def test_completed_appointment_does_not_block_the_slot(self, appointment_service, customer_id):
        appointment_id = appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11)).value
        appointment_service.complete(customer_id=customer_id, appointment_id=appointment_id)

        result = appointment_service.schedule(customer_id=customer_id, request=schedule(10, 11))
        assert result.outcome == Outcome.CREATED

    def test_list_appointments_rejects_unknown_status(self, appointment_service):
        with pytest.raises(ValidationError):
            appointment_service.list_appointments(None, "missed", 1, 50)
        assert appointment_service.list_appointments(None, "all", 1, 50).total == 0


class TestWorkOrderService:

    @pytest.fixture
    def order_id(self, work_order_service, customer_id):
        result = work_order_service.create(customer_id=customer_id, request=CreateWorkOrderRequest(currency="usd"))
        assert result.outcome == Outcome.CREATED
        return result.value

    def test_create_for_unknown_customer_is_rejected(self, work_order_service):
        result = work_order_service.create(customer_id=uuid4(), request=CreateWorkOrderRequest(currency="USD"))
        assert result.outcome == Outcome.REJECTED
        assert result.message == "Invalid customer or appointment"

    def test_create_with_another_customers_appointment_is_rejected(
        self, work_order_service, appointment_service, customer_service, customer_id
    ):
        other_customer = customer_service.register(
            request=register_request(number="C-2", email="b@example.com")
        ).value
        appointment_id = appointment_service.schedule(customer_id=other_customer, request=schedule(10, 11)).value

        result = work_order_service.create(
            customer_id=customer_id,
            request=CreateWorkOrderRequest(currency="USD", appointment_id=appointment_id)
        )
        assert result.outcome == Outcome.REJECTED

        own = work_order_service.create(
            customer_id=other_customer,
            request=CreateWorkOrderRequest(currency="USD", appointment_id=appointment_id)
        )
        assert own.outcome == Outcome.CREATED
        assert work_order_service.get_summary(own.value).appointment_id == appointment_id

    def test_discount_capping_scenario(self, work_order_service, customer_id, order_id):
        work_order_service.add_item(customer_id=customer_id, work_order_id=order_id, request=item(unit_price="120"))
        result = work_order_service.set_discount(
            customer_id=customer_id, work_order_id=order_id,
            request=SetDiscountRequest(amount="1000", currency="USD")
        )
        assert result.outcome == Outcome.OK

        details = work_order_service.get_details(customer_id, order_id)
        assert details.subtotal == Decimal("120.00")
        assert details.discount == Decimal("1000.00")
        assert details.total == Decimal("0.00")

    def test_currency_mismatch_scenario(self, work_order_service, customer_id, order_id):
        result = work_order_service.add_item(
            customer_id=customer_id, work_order_id=order_id, request=item(currency="EUR")
        )
        assert result.outcome == Outcome.REJECTED
        assert work_order_service.get_details(customer_id, order_id).items == []

    def test_update_quantity_in_place(self, work_order_service, customer_id, order_id):
        work_order_service.add_item(
            customer_id=customer_id, work_order_id=order_id,
            request=item("Suit", 1, "100", garment_type="suit",
                         measurements={"chest": 100, "waist": 84, "hips": 98, "sleeve": 64})
        )
        work_order_service.add_item(customer_id=customer_id, work_order_id=order_id, request=item("Shirt", 1, "40"))

        result = work_order_service.update_item_quantity(
            customer_id=customer_id, work_order_id=order_id, description="suit",
            request=UpdateItemQuantityRequest(quantity=3)
        )
        assert result.outcome == Outcome.OK

        details = work_order_service.get_details(customer_id, order_id)
        assert [(i.description, i.quantity) for i in details.items] == [("Suit", 3), ("Shirt", 1)]
        assert details.items[0].garment_type == "Suit"
        assert details.items[0].chest == Decimal("100")
        assert details.subtotal == Decimal("340.00")

    def test_missing_item_is_rejected(self, work_order_service, customer_id, order_id):
        result = work_order_service.remove_item(customer_id=customer_id, work_order_id=order_id, description="Coat")
        assert result.outcome == Outcome.REJECTED

    def test_lifecycle_and_finalized_immutability(self, work_order_service, customer_id, order_id):
        ids = {"customer_id": customer_id, "work_order_id": order_id}
        work_order_service.add_item(**ids, request=item())

        assert work_order_service.complete(**ids).outcome == Outcome.REJECTED
        assert work_order_service.start(**ids).outcome == Outcome.OK
        assert work_order_service.start(**ids).outcome == Outcome.REJECTED
        assert work_order_service.complete(**ids).outcome == Outcome.OK

        assert work_order_service.add_item(**ids, request=item("Shirt")).outcome == Outcome.REJECTED
        assert work_order_service.remove_item(**ids, description="Suit").outcome == Outcome.REJECTED
        assert work_order_service.clear_discount(**ids).outcome == Outcome.REJECTED
        assert work_order_service.cancel(**ids).outcome == Outcome.REJECTED

        summary = work_order_service.get_summary(order_id)
        assert summary.status == "Completed"
        assert summary.total == Decimal("120.00")

    def test_other_customer_cannot_see_or_change_order(
        self, work_order_service, customer_service, customer_id, order_id
    ):
        other_customer = customer_service.register(
            request=register_request(number="C-2", email="b@example.com")
        ).value

        assert work_order_service.get_details(other_customer, order_id) is None
        assert work_order_service.cancel(
            customer_id=other_customer, work_order_id=order_id
        ).outcome == Outcome.NOT_FOUND
        assert work_order_service.get_by_id(order_id).customer_id == customer_id

    def test_cancel_twice_succeeds(self, work_order_service, customer_id, order_id):
        assert work_order_service.cancel(customer_id=customer_id, work_order_id=order_id).outcome == Outcome.OK
        assert work_order_service.cancel(customer_id=customer_id, work_order_id=order_id).outcome == Outcome.OK

    def test_lists(self, work_order_service, customer_id, order_id):
        work_order_service.add_item(
            customer_id=customer_id, work_order_id=order_id, request=item("Wedding dress", 1, "900")
        )
        second = work_order_service.create(customer_id=customer_id, request=CreateWorkOrderRequest(currency="USD")).value
        work_order_service.start(customer_id=customer_id, work_order_id=second)

        page = work_order_service.list_for_customer(customer_id, 1, 20)
        assert page.total == 2

        page = work_order_service.list_all(1, 20, status="inprogress")
        assert [o.id for o in page.items] == [second]

        page = work_order_service.list_all(1, 20, search="wedding")
        assert [o.id for o in page.items] == [order_id]

        with pytest.raises(ValidationError):
            work_order_service.list_all(1, 20, status="Shipped")
        with pytest.raises(ValidationError):
            work_order_service.list_for_customer(customer_id, 1, 20, sort_by="price")
