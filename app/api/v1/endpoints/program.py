# app/api/v1/endpoints/program.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import crud_faculty_assignment, crud_session
from app.db.session import get_db
from app.schemas.faculty_assignment import (
    FacultyAssignment,
    SendInvitationsRequest,
    SendInvitationsResponse,
    SyncAssignmentsResponse,
)
from app.schemas.session import ProgramSession, ProgramSessionCreate
from app.schemas.token import TokenPayload
from app.services import assignment_sync_service

router = APIRouter(tags=["Program"])


@router.post(
    "/events/{eventId}/program/sessions",
    response_model=ProgramSession,
    status_code=status.HTTP_201_CREATED,
)
def create_program_session(
    eventId: str,
    session_in: ProgramSessionCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, eventId, current_user)
    return crud_session.session.create_with_event(db, obj_in=session_in, event_id=eventId)


@router.get("/events/{eventId}/program/sessions", response_model=List[ProgramSession])
def list_program_sessions(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, eventId, current_user)
    return crud_session.session.get_multi_by_event(db, event_id=eventId)


@router.post(
    "/events/{eventId}/program/sync-assignments",
    response_model=SyncAssignmentsResponse,
)
def sync_faculty_assignments(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Create faculty assignments from the speakers, chairpersons and moderators
    listed on the event's sessions. Re-running only adds what is new.

    Entries that cannot be read are returned in `parseErrors`.
    """
    deps.get_event_for_user(db, eventId, current_user)
    return assignment_sync_service.sync_assignments(db, event_id=eventId)


@router.get(
    "/events/{eventId}/program/assignments", response_model=List[FacultyAssignment]
)
def list_faculty_assignments(
    eventId: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, eventId, current_user)
    return crud_faculty_assignment.faculty_assignment.get_multi_by_event(
        db, event_id=eventId, status=status_filter
    )


@router.post(
    "/events/{eventId}/program/send-invitations",
    response_model=SendInvitationsResponse,
)
def send_faculty_invitations(
    eventId: str,
    invite_in: SendInvitationsRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Email the selected faculty their invitations. Subject and body may use
    `{{faculty_name}}`, `{{event_name}}`, `{{role}}`, `{{session_name}}`,
    `{{session_date}}`, `{{start_time}}`, `{{end_time}}`, `{{hall}}` and
    `{{confirmation_link}}`.
    """
    event = deps.get_event_for_user(db, eventId, current_user)
    return assignment_sync_service.send_invitations(
        db,
        event=event,
        assignment_ids=invite_in.assignmentIds,
        subject=invite_in.emailSubject,
        body=invite_in.emailBody,
        whatsapp_template=invite_in.whatsappTemplate,
    )
