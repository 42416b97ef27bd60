from datetime import datetime

from clinic_api.models import Appointment, AppointmentServiceLink
from tests.conftest import add_records, count_rows, fetch_one


async def test_create_appointment_defaults_to_pending(http, admin_headers, clinic_client, cleaning):
    response = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-07-01",
            "appointmentTime": "10:00",
            "client": clinic_client.id,
            "services": [cleaning.id],
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    data = body["data"]
    assert data["status"] == "pending"
    assert data["appointmentDate"] == "2024-07-01"
    assert data["appointmentTime"] == "10:00"
    assert data["fullName"] == "Ana Maria Lopez"
    assert data["service"] == "Dental cleaning"
    assert data["services"] == [{"id": cleaning.id, "name": "Dental cleaning", "price": 500.0}]
    assert data["client"] == clinic_client.id


async def test_date_stored_as_clinic_midnight_in_utc(session_factory, appointment):
    stored = await fetch_one(session_factory, Appointment, Appointment.id == appointment["id"])
    assert stored.appointment_date == datetime(2024, 7, 1, 6, 0)


async def test_offset_datetime_lands_on_clinic_calendar_day(
    http, admin_headers, clinic_client, cleaning
):
    response = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-06-15T23:30:00-05:00",
            "appointmentTime": "23:30",
            "client": clinic_client.id,
            "services": [cleaning.id],
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["data"]["appointmentDate"] == "2024-06-15"


async def test_create_snapshots_service_price(session_factory, appointment, cleaning):
    link = await fetch_one(
        session_factory,
        AppointmentServiceLink,
        AppointmentServiceLink.appointment_id == appointment["id"],
    )
    assert link.service_id == cleaning.id
    assert link.unit_price == 500.0


async def test_legacy_single_service_field(http, admin_headers, clinic_client, cleaning):
    response = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-07-02",
            "appointmentTime": "09:00",
            "client": clinic_client.id,
            "service": cleaning.id,
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert [s["id"] for s in response.json()["data"]["services"]] == [cleaning.id]


async def test_unknown_client_rejected_and_nothing_written(
    http, admin_headers, session_factory, cleaning
):
    before = await count_rows(session_factory, Appointment)

    response = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-07-01",
            "appointmentTime": "10:00",
            "client": 999,
            "services": [cleaning.id],
        },
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["status"] == "error"
    assert "client" in response.json()["message"]
    assert await count_rows(session_factory, Appointment) == before
    assert await count_rows(session_factory, AppointmentServiceLink) == 0


async def test_unknown_service_rejected(http, admin_headers, session_factory, clinic_client, cleaning):
    response = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-07-01",
            "appointmentTime": "10:00",
            "client": clinic_client.id,
            "services": [cleaning.id, 4242],
        },
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "services" in response.json()["message"]
    assert await count_rows(session_factory, Appointment) == 0


async def test_missing_fields_and_bad_date_rejected(http, admin_headers, clinic_client, cleaning):
    missing_time = await http.post(
        "/api/appointments",
        json={"appointmentDate": "2024-07-01", "client": clinic_client.id, "services": [cleaning.id]},
        headers=admin_headers,
    )
    bad_date = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "next tuesday",
            "appointmentTime": "10:00",
            "client": clinic_client.id,
            "services": [cleaning.id],
        },
        headers=admin_headers,
    )
    no_services = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-07-01",
            "appointmentTime": "10:00",
            "client": clinic_client.id,
            "services": [],
        },
        headers=admin_headers,
    )

    assert missing_time.status_code == 400
    assert "appointmentTime" in missing_time.json()["message"]
    assert bad_date.status_code == 400
    assert "appointmentDate" in bad_date.json()["message"]
    assert no_services.status_code == 400


async def test_list_empty_store_returns_empty_list(http, admin_headers):
    response = await http.get("/api/appointments", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"] == []


async def test_list_and_get(http, user_headers, appointment):
    listed = await http.get("/api/appointments", headers=user_headers)
    fetched = await http.get(f"/api/appointments/{appointment['id']}", headers=user_headers)

    assert listed.status_code == 200
    assert [a["id"] for a in listed.json()["data"]] == [appointment["id"]]
    assert fetched.status_code == 200
    assert fetched.json()["data"]["fullName"] == "Ana Maria Lopez"


async def test_get_missing_appointment_404(http, admin_headers):
    response = await http.get("/api/appointments/12345", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Appointment not found"}


async def test_deleted_client_shows_as_unavailable(http, admin_headers, appointment, clinic_client):
    deleted = await http.delete(f"/api/clients/{clinic_client.id}", headers=admin_headers)
    assert deleted.status_code == 200

    response = await http.get(f"/api/appointments/{appointment['id']}", headers=admin_headers)

    assert response.json()["data"]["fullName"] == "Client unavailable"


async def test_update_replaces_services_and_keeps_kept_links(
    http, admin_headers, session_factory, appointment, cleaning, whitening
):
    original = await fetch_one(
        session_factory,
        AppointmentServiceLink,
        AppointmentServiceLink.appointment_id == appointment["id"],
        AppointmentServiceLink.service_id == cleaning.id,
    )

    response = await http.put(
        f"/api/appointments/{appointment['id']}",
        json={"services": [cleaning.id, whitening.id]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["service"] == "Dental cleaning, Whitening"
    kept = await fetch_one(
        session_factory,
        AppointmentServiceLink,
        AppointmentServiceLink.appointment_id == appointment["id"],
        AppointmentServiceLink.service_id == cleaning.id,
    )
    assert kept.id == original.id

    response = await http.put(
        f"/api/appointments/{appointment['id']}",
        json={"services": [whitening.id]},
        headers=admin_headers,
    )

    assert response.json()["data"]["services"] == [
        {"id": whitening.id, "name": "Whitening", "price": 1200.0}
    ]
    assert await count_rows(
        session_factory,
        AppointmentServiceLink,
        AppointmentServiceLink.appointment_id == appointment["id"],
    ) == 1


async def test_partial_update_changes_only_given_fields(http, admin_headers, appointment):
    response = await http.put(
        f"/api/appointments/{appointment['id']}",
        json={"appointmentTime": "11:30", "appointmentDate": "2024-07-03T08:00:00"},
        headers=admin_headers,
    )

    data = response.json()["data"]
    assert response.status_code == 200
    assert data["appointmentTime"] == "11:30"
    assert data["appointmentDate"] == "2024-07-03"
    assert data["status"] == "pending"
    assert data["service"] == "Dental cleaning"


async def test_update_to_unknown_client_rejected(http, admin_headers, appointment):
    response = await http.put(
        f"/api/appointments/{appointment['id']}",
        json={"client": 999},
        headers=admin_headers,
    )

    assert response.status_code == 400


async def test_status_lifecycle(http, admin_headers, appointment):
    url = f"/api/appointments/{appointment['id']}"

    confirmed = await http.put(url, json={"status": "confirmed"}, headers=admin_headers)
    same = await http.put(url, json={"status": "confirmed"}, headers=admin_headers)
    completed = await http.put(url, json={"status": "completed"}, headers=admin_headers)
    back = await http.put(url, json={"status": "pending"}, headers=admin_headers)

    assert confirmed.json()["data"]["status"] == "confirmed"
    assert same.status_code == 200
    assert completed.json()["data"]["status"] == "completed"
    assert back.status_code == 400
    assert "completed" in back.json()["message"]


async def test_unknown_status_rejected(http, admin_headers, appointment):
    response = await http.put(
        f"/api/appointments/{appointment['id']}",
        json={"status": "archived"},
        headers=admin_headers,
    )

    assert response.status_code == 400


async def test_update_missing_appointment_404(http, admin_headers):
    response = await http.put(
        "/api/appointments/777", json={"appointmentTime": "12:00"}, headers=admin_headers
    )

    assert response.status_code == 404


async def test_delete_is_soft_and_not_repeatable(http, admin_headers, session_factory, appointment):
    url = f"/api/appointments/{appointment['id']}"

    first = await http.delete(url, headers=admin_headers)
    stored = await fetch_one(session_factory, Appointment, Appointment.id == appointment["id"])
    second = await http.delete(url, headers=admin_headers)
    again = await fetch_one(session_factory, Appointment, Appointment.id == appointment["id"])

    assert first.status_code == 200
    assert stored.deleted_at is not None
    assert second.status_code == 404
    assert again.deleted_at == stored.deleted_at


async def test_booking_scenario(http, admin_headers, clinic_client, cleaning):
    created = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-07-01",
            "appointmentTime": "10:00",
            "client": clinic_client.id,
            "services": [cleaning.id],
        },
        headers=admin_headers,
    )
    appointment_id = created.json()["data"]["id"]
    assert created.json()["data"]["status"] == "pending"
    assert created.json()["data"]["appointmentDate"] == "2024-07-01"

    # The creation link already exists, so remove it before linking through the join endpoint
    removed = await http.delete(
        f"/api/appointment-services/{appointment_id}/{cleaning.id}", headers=admin_headers
    )
    linked = await http.post(
        "/api/appointment-services",
        json={"appointment_id": appointment_id, "service_id": cleaning.id},
        headers=admin_headers,
    )
    deleted = await http.delete(f"/api/appointments/{appointment_id}", headers=admin_headers)
    fetched = await http.get(f"/api/appointments/{appointment_id}", headers=admin_headers)
    listed = await http.get("/api/appointments", headers=admin_headers)

    assert removed.status_code == 204
    assert linked.status_code == 201
    assert deleted.status_code == 200
    assert fetched.status_code == 404
    assert appointment_id not in [a["id"] for a in listed.json()["data"]]


async def test_appointment_without_links_shows_service_unavailable(
    http, admin_headers, session_factory, clinic_client
):
    await add_records(
        session_factory,
        Appointment(
            appointment_date=datetime(2024, 7, 1, 6, 0),
            appointment_time="08:00",
            client_id=clinic_client.id,
        ),
    )

    response = await http.get("/api/appointments", headers=admin_headers)

    assert response.json()["data"][0]["service"] == "Service unavailable"
    assert response.json()["data"][0]["services"] == []


async def test_deleted_service_shows_as_unavailable(http, admin_headers, appointment, cleaning):
    deleted = await http.delete(f"/api/services/{cleaning.id}", headers=admin_headers)
    assert deleted.status_code == 200

    response = await http.get(f"/api/appointments/{appointment['id']}", headers=admin_headers)

    data = response.json()["data"]
    assert data["service"] == "Service unavailable"
    assert data["services"] == []
