# app/api/v1/endpoints/registrations.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import crud_registration
from app.db.session import get_db
from app.models.registration import Registration as RegistrationModel
from app.schemas.notification import ConfirmationEmailRequest, DispatchResult
from app.schemas.registration import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    Registration,
    RegistrationCancelRequest,
    RegistrationCreate,
    RegistrationStatus,
    RegistrationTransferRequest,
    RegistrationTransferResponse,
)
from app.schemas.token import TokenPayload
from app.services import notification_service, registration_service

router = APIRouter(tags=["Registrations"])


def _get_owned_registration(
    db: Session, registration_id: str, current_user: TokenPayload
) -> RegistrationModel:
    registration = crud_registration.registration.get(db, id=registration_id)
    if not registration or registration.event.organization_id != current_user.org_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found"
        )
    return registration


@router.post(
    "/events/{eventId}/registrations",
    response_model=Registration,
    status_code=status.HTTP_201_CREATED,
)
def create_registration(
    eventId: str,
    registration_in: RegistrationCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Register an attendee on a ticket of the event.

    Free tickets without approval are confirmed immediately; paid tickets
    and tickets that need approval start out pending.
    """
    event = deps.get_event_for_user(db, eventId, current_user)
    return registration_service.create_registration(
        db, event=event, obj_in=registration_in
    )


@router.get("/events/{eventId}/registrations", response_model=List[Registration])
def list_registrations(
    eventId: str,
    status_filter: Optional[RegistrationStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, eventId, current_user)
    return crud_registration.registration.get_multi_by_event(
        db,
        event_id=eventId,
        status=status_filter.value if status_filter else None,
        search=search,
        skip=skip,
        limit=limit,
    )


@router.post(
    "/events/{eventId}/registrations/bulk-delete", response_model=BulkDeleteResponse
)
def bulk_delete_imported_registrations(
    eventId: str,
    delete_in: BulkDeleteRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Delete imported registrations. Registrations that did not come from an
    import are left alone and listed in `skipped`.
    """
    deps.get_event_for_user(db, eventId, current_user)
    return registration_service.bulk_delete_imported(
        db, event_id=eventId, registration_ids=delete_in.registration_ids
    )


@router.get("/registrations/{registrationId}", response_model=Registration)
def get_registration(
    registrationId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return _get_owned_registration(db, registrationId, current_user)


@router.post(
    "/registrations/{registrationId}/transfer",
    response_model=RegistrationTransferResponse,
)
def transfer_registration(
    registrationId: str,
    transfer_in: RegistrationTransferRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Move a registration to another event and ticket type.

    The registration is renumbered in the target event and repriced from the
    new ticket. Seats move with it when it was confirmed.
    """
    _get_owned_registration(db, registrationId, current_user)
    return registration_service.transfer_registration(
        db,
        registration_id=registrationId,
        new_event_id=transfer_in.new_event_id,
        new_ticket_type_id=transfer_in.new_ticket_type_id,
        notes=transfer_in.notes,
        org_id=current_user.org_id,
    )


@router.post("/registrations/{registrationId}/confirm", response_model=Registration)
def confirm_registration(
    registrationId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _get_owned_registration(db, registrationId, current_user)
    return registration_service.confirm_registration(db, registration_id=registrationId)


@router.post("/registrations/{registrationId}/cancel", response_model=Registration)
def cancel_registration(
    registrationId: str,
    cancel_in: RegistrationCancelRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _get_owned_registration(db, registrationId, current_user)
    return registration_service.cancel_registration(
        db,
        registration_id=registrationId,
        refund=cancel_in.refund,
        notes=cancel_in.notes,
    )


@router.post("/registrations/{registrationId}/check-in", response_model=Registration)
def check_in_registration(
    registrationId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _get_owned_registration(db, registrationId, current_user)
    return registration_service.check_in_registration(
        db, registration_id=registrationId, checked_in_by=current_user.sub
    )


@router.post(
    "/registrations/{registrationId}/send-confirmation", response_model=DispatchResult
)
def send_registration_confirmation(
    registrationId: str,
    email_in: Optional[ConfirmationEmailRequest] = None,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _get_owned_registration(db, registrationId, current_user)
    return notification_service.send_registration_confirmation(
        db, registration_id=registrationId, request=email_in
    )
