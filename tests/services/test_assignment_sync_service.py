from datetime import date, time
from unittest.mock import patch

import pytest
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import CommandCenterError, NotFoundError
from app.crud import crud_faculty_assignment
from app.services import assignment_sync_service
from tests.utils.event import create_random_event
from tests.utils.program import create_program_session

SENT = {"success": True, "id": "re_1", "provider": "resend"}


@pytest.fixture
def email_enabled(monkeypatch):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test_key")


@pytest.fixture
def program(db: Session):
    event = create_random_event(db, name="AMASICON 2026")
    create_program_session(
        db,
        event,
        speakers_text="Dr. A Kumar (akumar@example.org, +91 98450 00000) | Dr. B Singh",
        chairpersons_text="Dr. C Rao (crao@example.org)",
        moderators_text="Dr. D Iyer (not-an-email)",
    )
    create_program_session(
        db,
        event,
        session_name="Lap Chole Live",
        start_time=time(11, 0),
        end_time=time(12, 0),
        speakers_text="Dr. A Kumar (akumar@example.org)",
    )
    return event


def _assignments(db: Session, event):
    return crud_faculty_assignment.faculty_assignment.get_multi_by_event(db, event_id=event.id)


def test_sync_creates_assignments(db: Session, program):
    result = assignment_sync_service.sync_assignments(db, event_id=program.id)

    assert result["success"] is True
    assert result["created"] == 4
    assert result["skipped"] == 0
    assert result["total"] == 4
    assert result["firstError"] is None
    assert result["parseErrors"] == [
        "Hernia Masterclass (moderator): Dr. D Iyer (not-an-email): "
        "'not-an-email' is not an email address"
    ]

    rows = _assignments(db, program)
    by_key = {(row.session_name, row.faculty_name, row.role): row for row in rows}
    kumar = by_key[("Hernia Masterclass", "Dr. A Kumar", "speaker")]
    assert kumar.faculty_email == "akumar@example.org"
    assert kumar.faculty_phone == "+91 98450 00000"
    assert kumar.topic_title == "Hernia Masterclass"
    assert kumar.session_date == date(2026, 3, 14)
    assert kumar.start_time == time(9, 30)
    assert kumar.hall == "Hall A"
    assert kumar.status == "pending"
    assert len(kumar.invitation_token) == 32

    chair = by_key[("Hernia Masterclass", "Dr. C Rao", "chairperson")]
    assert chair.topic_title is None
    assert len({row.invitation_token for row in rows}) == 4


def test_sync_is_idempotent(db: Session, program):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    tokens = {row.id: row.invitation_token for row in _assignments(db, program)}

    result = assignment_sync_service.sync_assignments(db, event_id=program.id)

    assert result["created"] == 0
    assert result["skipped"] == 4
    assert {row.id: row.invitation_token for row in _assignments(db, program)} == tokens


def test_sync_picks_up_new_faculty(db: Session, program):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    create_program_session(
        db,
        program,
        session_name="Bariatric Debate",
        start_time=time(14, 0),
        end_time=time(15, 0),
        moderators_text="Dr. E Menon",
    )

    result = assignment_sync_service.sync_assignments(db, event_id=program.id)

    assert result["created"] == 1
    assert result["skipped"] == 4


def test_invitation_variables(db: Session, program):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    assignment = next(row for row in _assignments(db, program) if row.role == "speaker")

    variables = assignment_sync_service.invitation_variables(assignment, program)

    assert variables["role"] == "Speaker"
    assert variables["session_date"] == "Saturday, 14 March 2026"
    assert variables["start_time"] == "09:30"
    assert variables["end_time"] == "10:15"
    assert variables["confirmation_link"] == (
        f"{settings.APP_BASE_URL}/respond/{assignment.invitation_token}"
    )


def test_send_invitations_requires_provider(db: Session, program):
    with pytest.raises(CommandCenterError, match="No email provider configured"):
        assignment_sync_service.send_invitations(
            db, event=program, assignment_ids=[], subject="s", body="b"
        )


@patch("app.core.email.send_email", return_value=SENT)
def test_send_invitations(mock_send, db: Session, program, email_enabled):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    rows = _assignments(db, program)

    result = assignment_sync_service.send_invitations(
        db,
        event=program,
        assignment_ids=[row.id for row in rows],
        subject="Invitation: {{event_name}}",
        body="Dear {{faculty_name}},\n**{{role}}** at {{session_name}}\n{{confirmation_link}}",
    )

    # Dr. B Singh has no email address.
    assert result["sent"] == 3
    assert result["failed"] == 1
    assert result["success"] is True
    assert result["errors"] == ["No email for Dr. B Singh"]

    to, subject, html, text = mock_send.call_args_list[0].args
    assert subject == "Invitation: AMASICON 2026"
    assert "<br>" in html
    assert "<strong>" in html
    assert "/respond/" in text

    for row in _assignments(db, program):
        if row.faculty_email:
            assert row.status == "invited"
            assert row.invitation_sent_at is not None
        else:
            assert row.status == "pending"


@patch(
    "app.core.email.send_email",
    return_value={"success": False, "error": "bounced", "provider": "resend"},
)
def test_send_invitations_collects_failures(mock_send, db: Session, program, email_enabled):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    chair = next(row for row in _assignments(db, program) if row.role == "chairperson")

    result = assignment_sync_service.send_invitations(
        db, event=program, assignment_ids=[chair.id], subject="s", body="b"
    )

    assert result == {
        "success": False,
        "sent": 0,
        "failed": 1,
        "errors": ["crao@example.org: bounced"],
    }
    db.refresh(chair)
    assert chair.status == "pending"


def test_get_invitation_lists_all_assignments_of_faculty(db: Session, program):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    kumar = next(row for row in _assignments(db, program) if row.faculty_name == "Dr. A Kumar")

    details = assignment_sync_service.get_invitation(db, token=kumar.invitation_token)

    assert details["faculty"]["email"] == "akumar@example.org"
    assert [a.session_name for a in details["assignments"]] == [
        "Hernia Masterclass",
        "Lap Chole Live",
    ]
    assert details["event"]["name"] == "AMASICON 2026"

    with pytest.raises(NotFoundError, match="Invalid or expired invitation link"):
        assignment_sync_service.get_invitation(db, token="bogus")


def test_global_decline_applies_to_every_assignment(db: Session, program):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    kumar = next(row for row in _assignments(db, program) if row.faculty_name == "Dr. A Kumar")

    result = assignment_sync_service.record_response(
        db, token=kumar.invitation_token, global_response="declined", notes="Travelling"
    )

    assert result == {"success": True, "updated": 2}
    for row in _assignments(db, program):
        if row.faculty_name == "Dr. A Kumar":
            assert row.status == "declined"
            assert row.response_notes == "Travelling"
            assert row.responded_at is not None
        else:
            assert row.status == "pending"


def test_per_assignment_responses(db: Session, program):
    assignment_sync_service.sync_assignments(db, event_id=program.id)
    rows = _assignments(db, program)
    kumar_rows = [row for row in rows if row.faculty_name == "Dr. A Kumar"]
    stranger = next(row for row in rows if row.faculty_name == "Dr. C Rao")
    first, second = kumar_rows

    result = assignment_sync_service.record_response(
        db,
        token=first.invitation_token,
        responses={
            first.id: "confirmed",
            second.id: "change_requested",
            stranger.id: "declined",
        },
        notes={second.id: "Can we move to the afternoon?"},
    )

    assert result["updated"] == 2
    db.refresh(first)
    db.refresh(second)
    db.refresh(stranger)
    assert first.status == "confirmed"
    assert first.response_notes is None
    assert second.status == "change_requested"
    assert second.change_request_details == "Can we move to the afternoon?"
    assert stranger.status == "pending"
