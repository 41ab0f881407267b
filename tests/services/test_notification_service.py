from unittest.mock import patch

import pytest
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidStateError, NotFoundError, NotificationError
from app.crud import crud_notification_log
from app.schemas.notification import ConfirmationEmailRequest
from app.services import notification_service
from tests.utils.event import create_random_event, create_registration, create_ticket_type

SENT = {"success": True, "id": "re_123", "provider": "resend"}


@pytest.fixture
def confirmed_registration(db: Session):
    event = create_random_event(db, name="AMASICON 2026")
    ticket = create_ticket_type(db, event, name="Delegate")
    return create_registration(
        db,
        event,
        ticket,
        registration_number="AMASI-0007",
        total_amount="1180",
        attendee_phone="+919845000000",
    )


@patch("app.core.email.send_email", return_value=SENT)
def test_confirmation_renders_default_template(mock_send, db: Session, confirmed_registration):
    outcome = notification_service.send_registration_confirmation(
        db, registration_id=confirmed_registration.id
    )

    assert outcome == {"email": SENT, "whatsapp_sent": None}
    to, subject, html, _ = mock_send.call_args.args
    assert to == "attendee@example.com"
    assert subject == "Registration Confirmed: AMASICON 2026"
    assert "AMASI-0007" in html
    assert "INR 1180.00" in html
    assert "{{" not in html

    logs = crud_notification_log.get_logs_for_registration(
        db, registration_id=confirmed_registration.id
    )
    assert len(logs) == 1
    assert logs[0].channel == "email"
    assert logs[0].status == "sent"
    assert logs[0].external_id == "re_123"
    assert logs[0].sent_at is not None


@patch("app.core.email.send_email", return_value=SENT)
def test_confirmation_with_custom_template(mock_send, db: Session, confirmed_registration):
    request = ConfirmationEmailRequest(
        subject="See you at {{event_name}}", body_html="<p>{{registration_number}}</p>"
    )

    notification_service.send_registration_confirmation(
        db, registration_id=confirmed_registration.id, request=request
    )

    _, subject, html, _ = mock_send.call_args.args
    assert subject == "See you at AMASICON 2026"
    assert html == "<p>AMASI-0007</p>"


@patch(
    "app.core.email.send_email",
    return_value={"success": False, "error": "rejected", "provider": "resend"},
)
def test_failed_send_is_logged_and_raised(mock_send, db: Session, confirmed_registration):
    with pytest.raises(NotificationError) as exc_info:
        notification_service.send_registration_confirmation(
            db, registration_id=confirmed_registration.id
        )

    assert exc_info.value.status_code == 502
    assert exc_info.value.to_dict()["details"] == "rejected"
    logs = crud_notification_log.get_logs_for_registration(
        db, registration_id=confirmed_registration.id
    )
    assert [log.status for log in logs] == ["failed"]
    assert logs[0].error_message == "rejected"


@patch("app.core.email.send_email", return_value=SENT)
def test_whatsapp_skipped_when_not_configured(mock_send, db: Session, confirmed_registration):
    outcome = notification_service.send_registration_confirmation(
        db,
        registration_id=confirmed_registration.id,
        request=ConfirmationEmailRequest(whatsapp_template="registration_confirmed"),
    )

    assert outcome["whatsapp_sent"] is False
    logs = crud_notification_log.get_logs_for_registration(
        db, registration_id=confirmed_registration.id
    )
    statuses = {log.channel: log.status for log in logs}
    assert statuses == {"email": "sent", "whatsapp": "skipped"}


@patch("app.utils.whatsapp.send_whatsapp_template", return_value=True)
@patch("app.utils.whatsapp.is_whatsapp_enabled", return_value=True)
@patch("app.core.email.send_email", return_value=SENT)
def test_whatsapp_sent_alongside_email(
    mock_send, mock_enabled, mock_whatsapp, db: Session, confirmed_registration
):
    outcome = notification_service.send_registration_confirmation(
        db,
        registration_id=confirmed_registration.id,
        request=ConfirmationEmailRequest(whatsapp_template="registration_confirmed"),
    )

    assert outcome["whatsapp_sent"] is True
    mock_whatsapp.assert_called_once_with(
        "+919845000000",
        "registration_confirmed",
        ["Dr. Test Attendee", "AMASICON 2026", "AMASI-0007"],
    )


def test_confirmation_requires_confirmed_registration(db: Session):
    event = create_random_event(db)
    ticket = create_ticket_type(db, event)
    pending = create_registration(db, event, ticket, status="pending")

    with pytest.raises(InvalidStateError, match='"pending"'):
        notification_service.send_registration_confirmation(db, registration_id=pending.id)
    with pytest.raises(NotFoundError):
        notification_service.send_registration_confirmation(db, registration_id="missing")


def test_send_without_provider_reports_failure(db: Session, confirmed_registration):
    with pytest.raises(NotificationError) as exc_info:
        notification_service.send_registration_confirmation(
            db, registration_id=confirmed_registration.id
        )

    assert exc_info.value.to_dict()["details"] == "No email provider configured"
