# app/api/v1/endpoints/events.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import crud_event, crud_ticket_type
from app.db.session import get_db
from app.schemas.event import Event, EventCreate, EventUpdate
from app.schemas.ticket_type import TicketType, TicketTypeCreate, TicketTypeUpdate
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Events"])


@router.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Create a new event for the caller's organization.
    """
    return crud_event.event.create_with_organization(
        db, obj_in=event_in, org_id=current_user.org_id
    )


@router.get("/events", response_model=List[Event])
def list_events(
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud_event.event.get_multi_by_organization(
        db, org_id=current_user.org_id, search=search, skip=skip, limit=limit
    )


@router.get("/events/{eventId}", response_model=Event)
def get_event(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return deps.get_event_for_user(db, eventId, current_user)


@router.patch("/events/{eventId}", response_model=Event)
def update_event(
    eventId: str,
    event_in: EventUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = deps.get_event_for_user(db, eventId, current_user)
    return crud_event.event.update(db, db_obj=event, obj_in=event_in)


@router.post(
    "/events/{eventId}/ticket-types",
    response_model=TicketType,
    status_code=status.HTTP_201_CREATED,
)
def create_ticket_type(
    eventId: str,
    ticket_in: TicketTypeCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, eventId, current_user)
    return crud_ticket_type.ticket_type.create_for_event(
        db, obj_in=ticket_in, event_id=eventId
    )


@router.get("/events/{eventId}/ticket-types", response_model=List[TicketType])
def list_ticket_types(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, eventId, current_user)
    return crud_ticket_type.ticket_type.get_multi_by_event(db, event_id=eventId)


@router.patch(
    "/events/{eventId}/ticket-types/{ticketTypeId}", response_model=TicketType
)
def update_ticket_type(
    eventId: str,
    ticketTypeId: str,
    ticket_in: TicketTypeUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, eventId, current_user)
    ticket = crud_ticket_type.ticket_type.get_for_event(
        db, id=ticketTypeId, event_id=eventId
    )
    if not ticket:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Ticket type not found"
        )
    return crud_ticket_type.ticket_type.update(db, db_obj=ticket, obj_in=ticket_in)
