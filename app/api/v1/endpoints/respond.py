# app/api/v1/endpoints/respond.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.limiter import RESPOND_SUBMIT_LIMIT, RESPOND_VIEW_LIMIT, limiter
from app.db.session import get_db
from app.schemas.faculty_assignment import InvitationDetails, InvitationResponseRequest
from app.services import assignment_sync_service

# Public endpoints: the invitation token in the link is the credential.
router = APIRouter(tags=["Faculty Response"])


@router.get("/respond/{token}", response_model=InvitationDetails)
@limiter.limit(RESPOND_VIEW_LIMIT)
def get_invitation(
    request: Request,  # Required for rate limiter
    token: str,
    db: Session = Depends(get_db),
):
    return assignment_sync_service.get_invitation(db, token=token)


@router.post("/respond/{token}")
@limiter.limit(RESPOND_SUBMIT_LIMIT)
def respond_to_invitation(
    request: Request,  # Required for rate limiter
    token: str,
    response_in: InvitationResponseRequest,
    db: Session = Depends(get_db),
):
    return assignment_sync_service.record_response(
        db,
        token=token,
        global_response=response_in.globalResponse.value
        if response_in.globalResponse
        else None,
        responses={k: v.value for k, v in response_in.responses.items()}
        if response_in.responses
        else None,
        notes=response_in.notes,
    )
