# app/api/v1/endpoints/badge_templates.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import crud_badge_template
from app.db.session import get_db
from app.schemas.badge_template import (
    BadgeGenerationRecord,
    BadgeTemplate,
    BadgeTemplateCreate,
    BadgeTemplateUpdate,
)
from app.schemas.token import TokenPayload
from app.services import badge_template_service

router = APIRouter(tags=["Badge Templates"])


def _check_template_access(db: Session, template_id: str, current_user: TokenPayload):
    template = crud_badge_template.badge_template.get(db, id=template_id)
    if not template:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Badge template not found"
        )
    deps.get_event_for_user(db, template.event_id, current_user)
    return template


@router.get("/badge-templates", response_model=List[BadgeTemplate])
def list_badge_templates(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, event_id, current_user)
    return crud_badge_template.badge_template.get_multi_by_event(db, event_id=event_id)


@router.post(
    "/badge-templates",
    response_model=BadgeTemplate,
    status_code=status.HTTP_201_CREATED,
)
def create_badge_template(
    template_in: BadgeTemplateCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, template_in.event_id, current_user)
    return badge_template_service.create_template(db, obj_in=template_in)


@router.put("/badge-templates", response_model=BadgeTemplate)
def update_badge_template(
    template_in: BadgeTemplateUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Update a template.

    On a locked template, changes to `size`, `template_image_url` or
    `template_data` are refused with 403 unless `force_unlock` is true.
    """
    _check_template_access(db, template_in.id, current_user)
    return badge_template_service.update_template(db, obj_in=template_in)


@router.delete("/badge-templates")
def delete_badge_template(
    id: str,
    force: bool = False,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _check_template_access(db, id, current_user)
    badge_template_service.delete_template(db, template_id=id, force=force)
    return {"success": True}


@router.post(
    "/badge-templates/{templateId}/generations", response_model=BadgeTemplate
)
def record_badge_generation(
    templateId: str,
    generation_in: BadgeGenerationRecord,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Record that badges were generated from this template. The first
    generation locks the template's design.
    """
    _check_template_access(db, templateId, current_user)
    return badge_template_service.record_generation(
        db,
        template_id=templateId,
        count=generation_in.count,
        locked_by=generation_in.locked_by,
    )
