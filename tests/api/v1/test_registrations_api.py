from starlette.testclient import TestClient
from sqlalchemy.orm import Session

from tests.utils.event import create_random_event, create_registration, create_ticket_type


def test_register_on_free_ticket(client: TestClient, db: Session):
    event = create_random_event(db, short_name="AMASICON")
    ticket = create_ticket_type(db, event, quantity_total=10)

    response = client.post(
        f"/api/v1/events/{event.id}/registrations",
        json={
            "ticket_type_id": ticket.id,
            "attendee_name": "Dr. Asha Rao",
            "attendee_email": "asha@example.org",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["registration_number"] == "AMASICON-0001"
    assert data["status"] == "confirmed"
    db.refresh(ticket)
    assert ticket.quantity_sold == 1


def test_register_when_sold_out(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event, quantity_total=1, quantity_sold=1)

    response = client.post(
        f"/api/v1/events/{event.id}/registrations",
        json={
            "ticket_type_id": ticket.id,
            "attendee_name": "Dr. Asha Rao",
            "attendee_email": "asha@example.org",
        },
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Not enough tickets available. Only 0 left."}


def test_register_invalid_email(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)

    response = client.post(
        f"/api/v1/events/{event.id}/registrations",
        json={"ticket_type_id": ticket.id, "attendee_name": "X", "attendee_email": "nope"},
    )

    assert response.status_code == 422


def test_list_registrations_by_status(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    create_registration(db, event, ticket, registration_number="T-0001")
    create_registration(db, event, ticket, registration_number="T-0002", status="pending")

    response = client.get(
        f"/api/v1/events/{event.id}/registrations", params={"status": "pending"}
    )

    assert response.status_code == 200
    assert [r["registration_number"] for r in response.json()] == ["T-0002"]


def test_transfer_registration(client: TestClient, db: Session):
    source = create_random_event(db, name="Conference A", short_name="CONFA")
    target = create_random_event(db, name="Conference B", short_name="CONFB")
    old_ticket = create_ticket_type(db, source, name="Early Bird", quantity_sold=1)
    new_ticket = create_ticket_type(
        db, target, name="Standard", price="1000", quantity_total=50
    )
    registration = create_registration(db, source, old_ticket, registration_number="CONFA-0001")

    response = client.post(
        f"/api/v1/registrations/{registration.id}/transfer",
        json={"new_event_id": target.id, "new_ticket_type_id": new_ticket.id},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["registration_number"] == "CONFB-0001"
    assert body["data"]["event_id"] == target.id
    assert body["data"]["total_amount"] == 1180.0
    assert body["transfer"]["fromEvent"] == "Conference A"
    assert body["priceChange"] == {"oldPrice": 0.0, "newPrice": 1180.0, "difference": 1180.0}


def test_transfer_to_event_of_other_organization(client: TestClient, db: Session):
    source = create_random_event(db)
    foreign = create_random_event(db, org_id="org_other", name="Foreign")
    ticket = create_ticket_type(db, source)
    foreign_ticket = create_ticket_type(db, foreign)
    registration = create_registration(db, source, ticket)

    response = client.post(
        f"/api/v1/registrations/{registration.id}/transfer",
        json={"new_event_id": foreign.id, "new_ticket_type_id": foreign_ticket.id},
    )

    assert response.status_code == 404
    assert response.json() == {"error": "New event not found"}


def test_transfer_checked_in_registration(client: TestClient, db: Session):
    source = create_random_event(db)
    target = create_random_event(db, name="Target")
    ticket = create_ticket_type(db, source)
    target_ticket = create_ticket_type(db, target)
    registration = create_registration(db, source, ticket, checked_in=True)

    response = client.post(
        f"/api/v1/registrations/{registration.id}/transfer",
        json={"new_event_id": target.id, "new_ticket_type_id": target_ticket.id},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot transfer checked-in registration"}


def test_registration_of_other_organization_is_hidden(client: TestClient, db: Session):
    event = create_random_event(db, org_id="org_other")
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)

    response = client.get(f"/api/v1/registrations/{registration.id}")

    assert response.status_code == 404


def test_confirm_check_in_and_cancel(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event, quantity_total=5)
    registration = create_registration(db, event, ticket, status="pending")

    response = client.post(f"/api/v1/registrations/{registration.id}/confirm")
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"

    response = client.post(f"/api/v1/registrations/{registration.id}/check-in")
    assert response.status_code == 200
    assert response.json()["checked_in"] is True

    response = client.post(f"/api/v1/registrations/{registration.id}/check-in")
    assert response.status_code == 400

    response = client.post(
        f"/api/v1/registrations/{registration.id}/cancel", json={"notes": "no show"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    db.refresh(ticket)
    assert ticket.quantity_sold == 0


def test_bulk_delete_imported(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    imported = create_registration(db, event, ticket, registration_number="T-0001", source="import")
    web = create_registration(db, event, ticket, registration_number="T-0002")

    response = client.post(
        f"/api/v1/events/{event.id}/registrations/bulk-delete",
        json={"registration_ids": [imported.id, web.id]},
    )

    assert response.status_code == 200
    assert response.json() == {"deleted": 1, "skipped": [web.id]}


def test_send_confirmation_without_email_provider(client: TestClient, db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    registration = create_registration(db, event, ticket)

    response = client.post(f"/api/v1/registrations/{registration.id}/send-confirmation")

    assert response.status_code == 502
    assert response.json() == {
        "error": "Failed to send confirmation email",
        "details": "No email provider configured",
    }
