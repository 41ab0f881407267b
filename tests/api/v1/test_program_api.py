from unittest.mock import patch

import pytest
from starlette.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.config import settings
from tests.utils.event import create_random_event


@pytest.fixture
def event_with_program(client: TestClient, db: Session):
    event = create_random_event(db, name="AMASICON 2026")
    response = client.post(
        f"/api/v1/events/{event.id}/program/sessions",
        json={
            "session_name": "Hernia Masterclass",
            "session_date": "2026-03-14",
            "start_time": "09:30:00",
            "end_time": "10:15:00",
            "hall": "Hall A",
            "speakers_text": "Dr. A Kumar (akumar@example.org) | Dr. B Singh (bsingh@example.org)",
            "chairpersons_text": "Dr. C Rao (crao@example.org)",
        },
    )
    assert response.status_code == 201
    return event


def test_sync_assignments_endpoint(client: TestClient, event_with_program):
    event_id = event_with_program.id

    response = client.post(f"/api/v1/events/{event_id}/program/sync-assignments")
    assert response.status_code == 200
    assert response.json()["created"] == 3

    response = client.post(f"/api/v1/events/{event_id}/program/sync-assignments")
    assert response.json()["created"] == 0
    assert response.json()["skipped"] == 3

    response = client.get(
        f"/api/v1/events/{event_id}/program/assignments", params={"status": "pending"}
    )
    assert response.status_code == 200
    assert len(response.json()) == 3


def test_send_invitations_without_provider(client: TestClient, event_with_program):
    response = client.post(
        f"/api/v1/events/{event_with_program.id}/program/send-invitations",
        json={"assignmentIds": ["fa_1"], "emailSubject": "Hi", "emailBody": "Hello"},
    )

    assert response.status_code == 500
    assert "No email provider configured" in response.json()["error"]


@patch(
    "app.core.email.send_email",
    return_value={"success": True, "id": "re_1", "provider": "resend"},
)
def test_invite_then_respond(mock_send, client: TestClient, event_with_program, monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test_key")
    event_id = event_with_program.id
    client.post(f"/api/v1/events/{event_id}/program/sync-assignments")
    assignments = client.get(f"/api/v1/events/{event_id}/program/assignments").json()

    response = client.post(
        f"/api/v1/events/{event_id}/program/send-invitations",
        json={
            "assignmentIds": [a["id"] for a in assignments],
            "emailSubject": "{{event_name}}: you are a {{role}}",
            "emailBody": "Please respond at {{confirmation_link}}",
        },
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "sent": 3, "failed": 0, "errors": None}

    text = mock_send.call_args.args[3]
    token = text.rsplit("/respond/", 1)[1]

    response = client.get(f"/api/v1/respond/{token}")
    assert response.status_code == 200
    details = response.json()
    assert details["event"]["name"] == "AMASICON 2026"
    assert len(details["assignments"]) == 1

    response = client.post(
        f"/api/v1/respond/{token}",
        json={"globalResponse": "change_requested", "notes": "Afternoon please"},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "updated": 1}

    assignments = client.get(
        f"/api/v1/events/{event_id}/program/assignments",
        params={"status": "change_requested"},
    ).json()
    assert len(assignments) == 1
    assert assignments[0]["change_request_details"] == "Afternoon please"


def test_respond_with_unknown_token(client: TestClient):
    response = client.get("/api/v1/respond/not-a-token")

    assert response.status_code == 404
    assert response.json() == {"error": "Invalid or expired invitation link"}


def test_respond_requires_an_answer(client: TestClient):
    response = client.post("/api/v1/respond/whatever", json={})

    assert response.status_code == 422
