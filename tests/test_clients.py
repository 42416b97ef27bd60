from datetime import date

from clinic_api.auth import create_access_token
from clinic_api.domain.clients.service import ClientDeletionPolicy, ClientService
from clinic_api.models import Client, User
from tests.conftest import add_records, fetch_one

CLIENT_BODY = {
    "firstName": "Luis",
    "middleName": "Alberto",
    "lastName": "Garcia",
    "emergencyNumber": "+52 55 1234 5678",
    "birthDate": "1985-03-14",
}


async def test_create_and_get_client(http, user_headers):
    created = await http.post("/api/clients", json=CLIENT_BODY, headers=user_headers)
    client_id = created.json()["data"]["id"]
    fetched = await http.get(f"/api/clients/{client_id}", headers=user_headers)

    assert created.status_code == 201
    assert fetched.json()["data"]["fullName"] == "Luis Alberto Garcia"
    assert fetched.json()["data"]["totalAppointments"] == 0


async def test_create_client_validation(http, user_headers):
    blank_name = await http.post(
        "/api/clients", json={**CLIENT_BODY, "firstName": "  "}, headers=user_headers
    )
    short_phone = await http.post(
        "/api/clients", json={**CLIENT_BODY, "emergencyNumber": "123"}, headers=user_headers
    )
    unknown_user = await http.post(
        "/api/clients", json={**CLIENT_BODY, "userId": 999}, headers=user_headers
    )

    assert blank_name.status_code == 400
    assert "firstName" in blank_name.json()["message"]
    assert short_phone.status_code == 400
    assert unknown_user.status_code == 400


async def test_dropdown(http, user_headers, clinic_client):
    response = await http.get("/api/clients/dropdown", headers=user_headers)

    assert response.json()["data"] == [
        {"id": clinic_client.id, "fullName": "Ana Maria Lopez", "emergencyNumber": "555-123-4567"}
    ]


async def test_non_admin_cannot_delete_client(http, user_headers, clinic_client):
    response = await http.delete(f"/api/clients/{clinic_client.id}", headers=user_headers)

    assert response.status_code == 403
    assert response.json()["status"] == "error"


async def test_delete_cascades_to_linked_user(http, admin_headers, session_factory):
    (linked_user,) = await add_records(
        session_factory, User(name="Patient", email="patient@clinic.test")
    )
    (client,) = await add_records(
        session_factory,
        Client(
            first_name="Rosa",
            middle_name="",
            last_name="Diaz",
            emergency_number="5551112222",
            birth_date=date(2000, 1, 1),
            user_id=linked_user.id,
        ),
    )

    response = await http.delete(f"/api/clients/{client.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["cascadedUserId"] == linked_user.id
    user = await fetch_one(session_factory, User, User.id == linked_user.id)
    assert user.deleted_at is not None

    token = create_access_token(linked_user)
    me = await http.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 401


async def test_delete_without_cascade_keeps_user(session_factory):
    (linked_user,) = await add_records(
        session_factory, User(name="Guardian", email="guardian@clinic.test")
    )
    (client,) = await add_records(
        session_factory,
        Client(
            first_name="Tomas",
            middle_name="",
            last_name="Ruiz",
            emergency_number="5553334444",
            birth_date=date(2012, 6, 1),
            user_id=linked_user.id,
        ),
    )

    async with session_factory() as db:
        service = ClientService(db, deletion_policy=ClientDeletionPolicy(cascade_user=False))
        result = await service.delete_client(client.id)

    assert result["cascadedUserId"] is None
    user = await fetch_one(session_factory, User, User.id == linked_user.id)
    assert user.deleted_at is None


async def test_deleted_client_hidden(http, admin_headers, clinic_client):
    await http.delete(f"/api/clients/{clinic_client.id}", headers=admin_headers)

    listed = await http.get("/api/clients", headers=admin_headers)
    fetched = await http.get(f"/api/clients/{clinic_client.id}", headers=admin_headers)

    assert listed.json()["data"] == []
    assert fetched.status_code == 404


async def test_deleted_client_cannot_book(http, admin_headers, clinic_client, cleaning):
    await http.delete(f"/api/clients/{clinic_client.id}", headers=admin_headers)

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

    assert response.status_code == 400
