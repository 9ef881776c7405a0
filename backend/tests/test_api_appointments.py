"""
Tests for the appointment endpoints.
"""

from uuid import uuid4

import pytest


def window(start, end, **extra):
    return {"start_utc": f"2025-03-01T{start}:00Z", "end_utc": f"2025-03-01T{end}:00Z", **extra}


@pytest.fixture
def appointments_url(api_customer):
    return f"/api/customers/{api_customer}/appointments"


@pytest.fixture
def booked(client, appointments_url):
    response = client.post(appointments_url, json=window("10:00", "11:00", notes="First fitting"))
    assert response.status_code == 201
    return response.json()["id"]


class TestScheduling:

    def test_schedule_and_list(self, client, appointments_url, booked):
        body = client.get(appointments_url).json()

        assert body["total"] == 1
        assert body["page_size"] == 50
        appointment = body["items"][0]
        assert appointment["id"] == booked
        assert appointment["status"] == "Scheduled"
        assert appointment["notes"] == "First fitting"

    def test_overlapping_window_is_409(self, client, appointments_url, booked):
        response = client.post(appointments_url, json=window("10:30", "11:30"))
        assert response.status_code == 409

    def test_adjacent_window_is_allowed(self, client, appointments_url, booked):
        assert client.post(appointments_url, json=window("11:00", "12:00")).status_code == 201
        assert client.post(appointments_url, json=window("09:00", "10:00")).status_code == 201

    def test_inverted_window_is_400(self, client, appointments_url):
        response = client.post(appointments_url, json=window("11:00", "10:00"))
        assert response.status_code == 400
        assert response.json()["title"] == "Validation failed"

    def test_unknown_customer_is_400(self, client):
        response = client.post(f"/api/customers/{uuid4()}/appointments", json=window("10:00", "11:00"))
        assert response.status_code == 400

    def test_list_window_filter(self, client, appointments_url, booked):
        client.post(appointments_url, json=window("14:00", "15:00"))

        body = client.get(appointments_url, params={
            "from_utc": "2025-03-01T12:00:00Z", "to_utc": "2025-03-01T18:00:00Z"
        }).json()
        assert body["total"] == 1
        assert body["items"][0]["start_utc"].startswith("2025-03-01T14:00:00")


class TestAppointmentLifecycle:

    def test_reschedule(self, client, appointments_url, booked):
        response = client.put(f"{appointments_url}/{booked}", json=window("10:30", "11:30"))
        assert response.status_code == 204

        item = client.get(appointments_url).json()["items"][0]
        assert item["start_utc"].startswith("2025-03-01T10:30:00")

    def test_reschedule_into_another_appointment_is_409(self, client, appointments_url, booked):
        client.post(appointments_url, json=window("13:00", "14:00"))

        response = client.put(f"{appointments_url}/{booked}", json=window("12:30", "13:30"))
        assert response.status_code == 409

    def test_complete_then_cancel_is_400(self, client, appointments_url, booked):
        assert client.post(f"{appointments_url}/{booked}/complete").status_code == 204
        assert client.delete(f"{appointments_url}/{booked}").status_code == 400

    def test_cancel_frees_the_slot(self, client, appointments_url, booked):
        assert client.delete(f"{appointments_url}/{booked}").status_code == 204
        assert client.post(appointments_url, json=window("10:00", "11:00")).status_code == 201

    def test_update_notes(self, client, appointments_url, booked):
        response = client.patch(f"{appointments_url}/{booked}/notes", json={"notes": "Bring shoes"})
        assert response.status_code == 204
        assert client.get(appointments_url).json()["items"][0]["notes"] == "Bring shoes"

    def test_other_customers_appointment_is_404(self, client, booked):
        other = client.post("/api/customers", json={
            "customer_number": "C-3001", "first_name": "Alan", "last_name": "Turing",
            "email": "alan@example.com",
        }).json()["id"]

        response = client.post(f"/api/customers/{other}/appointments/{booked}/complete")
        assert response.status_code == 404


class TestGlobalAppointmentList:

    def test_status_filter(self, client, appointments_url, booked):
        client.post(appointments_url, json=window("13:00", "14:00"))
        client.delete(f"{appointments_url}/{booked}")

        cancelled = client.get("/api/appointments", params={"status": "cancelled"}).json()
        assert [a["id"] for a in cancelled["items"]] == [booked]
        assert client.get("/api/appointments", params={"status": "all"}).json()["total"] == 2

    def test_latest_first(self, client, appointments_url, booked):
        later = client.post(appointments_url, json=window("15:00", "16:00")).json()["id"]

        body = client.get("/api/appointments").json()
        assert [a["id"] for a in body["items"]] == [later, booked]

    def test_unknown_status_is_400(self, client):
        assert client.get("/api/appointments", params={"status": "missed"}).status_code == 400
