# app/services/assignment_sync_service.py
"""
Faculty assignments: syncing them from the program, inviting the faculty,
and recording their answers.
"""
import logging
from datetime import date, datetime, time, timezone
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.email import is_email_enabled
from app.core.exceptions import CommandCenterError, NotFoundError
from app.crud import crud_faculty_assignment, crud_session
from app.models.event import Event
from app.models.faculty_assignment import FacultyAssignment
from app.models.session import ProgramSession
from app.services.notification_service import NotificationDispatcher
from app.utils.faculty_parser import FacultyEntry, parse_faculty_text
from app.utils.security import generate_invitation_token
from app.utils.templating import render_template, text_to_html

logger = logging.getLogger(__name__)

# (session column, role stored on the assignment, label used in error messages)
ROLE_SOURCES = (
    ("speakers_text", "speaker", "Speaker"),
    ("chairpersons_text", "chairperson", "Chair"),
    ("moderators_text", "moderator", "Moderator"),
)
MAX_SAMPLE_ERRORS = 5


def _insert_assignment(
    db: Session, *, session: ProgramSession, entry: FacultyEntry, role: str
) -> None:
    assignment = FacultyAssignment(
        event_id=session.event_id,
        session_id=session.id,
        faculty_name=entry.name,
        faculty_email=entry.email,
        faculty_phone=entry.phone,
        role=role,
        session_name=session.session_name,
        session_date=session.session_date,
        start_time=session.start_time,
        end_time=session.end_time,
        hall=session.hall,
        topic_title=session.session_name if role == "speaker" else None,
        invitation_token=generate_invitation_token(),
    )
    db.add(assignment)
    db.commit()


def sync_assignments(db: Session, *, event_id: str) -> dict:
    """
    Creates one assignment per (session, person, role) found in the program
    text that does not have one yet.

    Safe to re-run: existing assignments are counted as skipped. Rows that
    fail to insert are skipped too and do not stop the batch.
    """
    created = 0
    skipped = 0
    first_error: Optional[str] = None
    sample_errors: List[str] = []
    parse_errors: List[str] = []

    for session in crud_session.session.get_multi_by_event(db, event_id=event_id):
        for column, role, label in ROLE_SOURCES:
            parsed = parse_faculty_text(getattr(session, column))
            parse_errors.extend(
                f"{session.session_name or session.id} ({role}): {error}"
                for error in parsed.errors
            )

            for entry in parsed.entries:
                if crud_faculty_assignment.faculty_assignment.exists_for_natural_key(
                    db, session_id=session.id, faculty_name=entry.name, role=role
                ):
                    skipped += 1
                    continue

                try:
                    _insert_assignment(db, session=session, entry=entry, role=role)
                    created += 1
                except IntegrityError:
                    # Inserted by a concurrent sync since the existence check.
                    db.rollback()
                    skipped += 1
                except SQLAlchemyError as e:
                    db.rollback()
                    message = str(getattr(e, "orig", None) or e)
                    logger.error(f"Failed to create {role} assignment for {entry.name}: {message}")
                    if first_error is None:
                        first_error = message
                    if len(sample_errors) < MAX_SAMPLE_ERRORS:
                        sample_errors.append(f"{label} {entry.name}: {message}")
                    skipped += 1

    logger.info(
        f"Assignment sync for event {event_id}: {created} created, {skipped} skipped, "
        f"{len(parse_errors)} unparseable entries"
    )
    return {
        "success": True,
        "created": created,
        "skipped": skipped,
        "total": created + skipped,
        "firstError": first_error,
        "sampleErrors": sample_errors,
        "parseErrors": parse_errors,
    }


def _format_date(value: Optional[date]) -> str:
    # e.g. "Saturday, 14 March 2026"
    if not value:
        return ""
    return f"{value.strftime('%A')}, {value.day} {value.strftime('%B %Y')}"


def _format_time(value: Optional[time]) -> str:
    return value.strftime("%H:%M") if value else ""


def invitation_variables(assignment: FacultyAssignment, event: Event) -> Dict[str, str]:
    return {
        "faculty_name": assignment.faculty_name,
        "event_name": event.name,
        "role": assignment.role.capitalize(),
        "session_name": assignment.session_name or "",
        "session_date": _format_date(assignment.session_date),
        "start_time": _format_time(assignment.start_time),
        "end_time": _format_time(assignment.end_time),
        "hall": assignment.hall or "",
        "confirmation_link": f"{settings.APP_BASE_URL}/respond/{assignment.invitation_token}",
    }


def send_invitations(
    db: Session,
    *,
    event: Event,
    assignment_ids: List[str],
    subject: str,
    body: str,
    whatsapp_template: Optional[str] = None,
) -> dict:
    """
    Emails each selected assignment its personalised invitation and marks it
    invited. Per-recipient failures are collected, not raised.
    """
    if not is_email_enabled():
        raise CommandCenterError(
            "No email provider configured. Set RESEND_API_KEY or BLASTABLE_API_KEY."
        )

    assignments = crud_faculty_assignment.faculty_assignment.get_multi_by_ids(
        db, event_id=event.id, ids=assignment_ids
    )
    dispatcher = NotificationDispatcher(db)
    sent = 0
    failed = 0
    errors: List[str] = []

    for assignment in assignments:
        if not assignment.faculty_email:
            failed += 1
            errors.append(f"No email for {assignment.faculty_name}")
            continue

        variables = invitation_variables(assignment, event)
        rendered_subject = render_template(subject, variables)
        rendered_body = render_template(body, variables)

        outcome = dispatcher.dispatch(
            notification_type="faculty_invitation",
            to_email=assignment.faculty_email,
            subject=rendered_subject,
            html=text_to_html(rendered_body),
            text=rendered_body,
            phone=assignment.faculty_phone,
            whatsapp_template=whatsapp_template,
            whatsapp_params=[
                assignment.faculty_name,
                event.name,
                variables["confirmation_link"],
            ],
            event_id=event.id,
            assignment_id=assignment.id,
        )

        if outcome["email"]["success"]:
            assignment.status = "invited"
            assignment.invitation_sent_at = datetime.now(timezone.utc)
            db.add(assignment)
            sent += 1
        else:
            failed += 1
            errors.append(f"{assignment.faculty_email}: {outcome['email'].get('error')}")
        db.commit()

    logger.info(f"Invitations for event {event.id}: {sent} sent, {failed} failed")
    return {
        "success": sent > 0,
        "sent": sent,
        "failed": failed,
        "errors": errors or None,
    }


def _get_by_token(db: Session, token: str) -> FacultyAssignment:
    assignment = crud_faculty_assignment.faculty_assignment.get_by_token(db, token=token)
    if not assignment:
        raise NotFoundError("Invalid or expired invitation link")
    return assignment


def _assignments_for(db: Session, assignment: FacultyAssignment) -> List[FacultyAssignment]:
    return crud_faculty_assignment.faculty_assignment.get_for_faculty(
        db,
        event_id=assignment.event_id,
        faculty_email=assignment.faculty_email,
        faculty_name=assignment.faculty_name,
    )


def get_invitation(db: Session, *, token: str) -> dict:
    assignment = _get_by_token(db, token)
    event = db.get(Event, assignment.event_id)
    return {
        "faculty": {
            "name": assignment.faculty_name,
            "email": assignment.faculty_email,
            "phone": assignment.faculty_phone,
        },
        "assignments": _assignments_for(db, assignment),
        "event": {
            "id": event.id,
            "name": event.name,
            "short_name": event.short_name,
            "start_date": event.start_date,
            "end_date": event.end_date,
            "venue_name": event.venue_name,
        }
        if event
        else None,
    }


def _apply_response(
    assignment: FacultyAssignment, status: str, note: Optional[str], now: datetime
) -> None:
    assignment.status = status
    assignment.responded_at = now
    if status == "declined":
        assignment.response_notes = note
    elif status == "change_requested":
        assignment.change_request_details = note
    elif note:
        assignment.response_notes = note


def record_response(
    db: Session,
    *,
    token: str,
    global_response: Optional[str] = None,
    responses: Optional[Dict[str, str]] = None,
    notes: Optional[Union[str, Dict[str, str]]] = None,
) -> dict:
    """
    Records the faculty member's answer.

    `global_response` applies to all of their assignments in the event.
    Otherwise `responses` maps assignment ids to answers; ids that are not
    this faculty member's assignments are ignored.
    """
    assignment = _get_by_token(db, token)
    own = {a.id: a for a in _assignments_for(db, assignment)}
    now = datetime.now(timezone.utc)
    updated = 0

    if global_response:
        note = notes if isinstance(notes, str) else None
        for item in own.values():
            _apply_response(item, global_response, note, now)
            updated += 1
    elif responses:
        for assignment_id, status in responses.items():
            item = own.get(assignment_id)
            if item is None:
                logger.warning(f"Ignoring response for foreign assignment {assignment_id}")
                continue
            note = notes.get(assignment_id) if isinstance(notes, dict) else None
            if status == "confirmed" or not note:
                item.status = status
                item.responded_at = now
            else:
                _apply_response(item, status, note, now)
            updated += 1

    db.commit()
    logger.info(f"Faculty {assignment.faculty_name} responded for {updated} assignments")
    return {"success": True, "updated": updated}
