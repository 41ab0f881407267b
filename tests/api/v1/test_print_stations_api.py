from datetime import datetime, timedelta, timezone

from starlette.testclient import TestClient
from sqlalchemy.orm import Session

from app.crud import crud_print_station
from app.schemas.print_station import PrintStationCreate
from tests.utils.auth import get_user_authentication_headers
from tests.utils.event import create_random_event, create_registration, create_ticket_type


def _create_station(client: TestClient, event_id: str, **fields) -> dict:
    response = client.post(
        "/api/v1/print-stations",
        json={"event_id": event_id, "name": "Registration desk", **fields},
    )
    assert response.status_code == 201
    return response.json()


def test_scan_to_print_and_reprint_limit(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket, registration_number="TEST-0042")
    station = _create_station(client, event.id, max_reprints=1)

    response = client.post(
        "/api/v1/print-stations/print",
        json={"token": station["access_token"], "registration_number": "TEST-0042"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["print_number"] == 1
    assert body["is_reprint"] is False
    assert body["registration"]["id"] == registration.id
    assert body["station"]["print_settings"]["paper_size"] == "4x6"

    response = client.post(
        "/api/v1/print-stations/print",
        json={"token": station["access_token"], "registration_id": registration.id},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Maximum reprints (1) exceeded"
    assert body["print_count"] == 1
    assert body["registration"]["registration_number"] == "TEST-0042"


def test_print_unknown_attendee(client: TestClient, db: Session):
    event = create_random_event(db)
    station = _create_station(client, event.id)

    response = client.post(
        "/api/v1/print-stations/print",
        json={"token": station["access_token"], "registration_number": "NOPE-0001"},
    )

    assert response.status_code == 404
    assert response.json() == {
        "error": "Attendee not found",
        "registration_number": "NOPE-0001",
    }


def test_print_with_expired_token(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)
    expired = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
    station = _create_station(client, event.id, token_expires_at=expired)

    response = client.post(
        "/api/v1/print-stations/print",
        json={"token": station["access_token"], "registration_id": registration.id},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Print station token has expired"}


def test_kiosk_configuration(client: TestClient, db: Session):
    event = create_random_event(db)
    station = _create_station(client, event.id, auto_print=True)

    response = client.get(f"/api/v1/print-stations/kiosk/{station['access_token']}")
    assert response.status_code == 200
    assert response.json()["auto_print"] is True

    response = client.get("/api/v1/print-stations/kiosk/unknown")
    assert response.status_code == 404


def test_stations_list_with_stats(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)
    station = _create_station(client, event.id)
    client.post(
        "/api/v1/print-stations/print",
        json={"token": station["access_token"], "registration_id": registration.id},
    )

    response = client.get("/api/v1/print-stations", params={"event_id": event.id})

    assert response.status_code == 200
    rows = response.json()
    assert rows[0]["id"] == station["id"]
    assert rows[0]["stats"] == {
        "totalPrints": 1,
        "uniquePrints": 1,
        "totalRegistrations": 1,
        "progress": 100,
    }


def test_regenerate_token_and_invalid_action(client: TestClient, db: Session):
    event = create_random_event(db)
    station = _create_station(client, event.id)

    response = client.patch(
        "/api/v1/print-stations", json={"id": station["id"], "action": "explode"}
    )
    assert response.status_code == 400

    response = client.patch(
        "/api/v1/print-stations", json={"id": station["id"], "action": "regenerate_token"}
    )
    assert response.status_code == 200
    assert response.json()["access_token"] != station["access_token"]

    response = client.get(f"/api/v1/print-stations/kiosk/{station['access_token']}")
    assert response.status_code == 404


def test_print_history(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)
    station = _create_station(client, event.id)
    for _ in range(2):
        client.post(
            "/api/v1/print-stations/print",
            json={"token": station["access_token"], "registration_id": registration.id},
        )

    response = client.get(
        "/api/v1/print-stations/print", params={"registration_id": registration.id}
    )
    assert response.status_code == 200
    assert sorted(job["print_number"] for job in response.json()) == [1, 2]

    response = client.get("/api/v1/print-stations/print")
    assert response.status_code == 400


def test_delete_station_with_history(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)
    station = _create_station(client, event.id)
    client.post(
        "/api/v1/print-stations/print",
        json={"token": station["access_token"], "registration_id": registration.id},
    )

    response = client.delete("/api/v1/print-stations", params={"id": station["id"]})

    assert response.status_code == 200
    response = client.get("/api/v1/print-stations", params={"event_id": event.id})
    assert response.json() == []


def test_public_print_requires_station_token(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)
    station = _create_station(client, event.id)

    response = client.post(
        "/api/v1/print-stations/print",
        json={"print_station_id": station["id"], "registration_id": registration.id},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "token is required"}
    response = client.get(
        "/api/v1/print-stations/print", params={"registration_id": registration.id}
    )
    assert response.json() == []


def test_organizer_prints_by_station_id(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)
    station = _create_station(client, event.id)

    response = client.post(
        f"/api/v1/print-stations/{station['id']}/print",
        json={"registration_id": registration.id},
    )

    assert response.status_code == 200
    assert response.json()["print_number"] == 1
    assert response.json()["station"]["id"] == station["id"]


def test_print_by_station_id_needs_login(client_with_auth: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)
    station = crud_print_station.print_station.create_with_token(
        db, obj_in=PrintStationCreate(event_id=event.id, name="Hall A kiosk")
    )
    url = f"/api/v1/print-stations/{station.id}/print"

    response = client_with_auth.post(url, json={"registration_id": registration.id})
    assert response.status_code == 401

    response = client_with_auth.post(
        url,
        json={"registration_id": registration.id},
        headers=get_user_authentication_headers(org_id="org_other"),
    )
    assert response.status_code == 404

    response = client_with_auth.post(
        url,
        json={"registration_id": registration.id},
        headers=get_user_authentication_headers(),
    )
    assert response.status_code == 200


def test_update_with_null_required_field(client: TestClient, db: Session):
    event = create_random_event(db)
    station = _create_station(client, event.id)

    response = client.put(
        "/api/v1/print-stations", json={"id": station["id"], "max_reprints": None}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "max_reprints cannot be null", "field": "max_reprints"}
