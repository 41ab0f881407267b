# app/services/badge_template_service.py
"""
Badge template lifecycle.

A template is locked by the first badge generation that uses it. While
locked, its design (size, background image, element layout) is frozen so
that reprinted badges match the ones already handed out; name, description,
ticket scope and the default flag stay editable.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, TemplateLockedError
from app.crud import crud_badge_template
from app.models.badge_template import DESIGN_FIELDS, BadgeTemplate
from app.schemas.badge_template import BadgeTemplateCreate, BadgeTemplateUpdate
from app.utils.validators import reject_nulls_for_required_columns

logger = logging.getLogger(__name__)


def _locked_error(template: BadgeTemplate, consequence: str) -> TemplateLockedError:
    locked_since = (
        template.locked_at.strftime("%d/%m/%Y") if template.locked_at else "an earlier run"
    )
    count = template.badges_generated_count or 0
    return TemplateLockedError(
        "Template is locked",
        message=(
            f"This template has been locked since {locked_since}. "
            f"{count} badges have been generated. {consequence}"
        ),
        is_locked=True,
        badges_generated=count,
    )


def _get_template(db: Session, template_id: str) -> BadgeTemplate:
    template = crud_badge_template.badge_template.get(db, id=template_id)
    if not template:
        raise NotFoundError("Badge template not found")
    return template


def create_template(db: Session, *, obj_in: BadgeTemplateCreate) -> BadgeTemplate:
    template = BadgeTemplate(**obj_in.model_dump())
    if obj_in.is_default:
        crud_badge_template.badge_template.clear_default(db, event_id=obj_in.event_id)
    db.add(template)
    db.commit()
    db.refresh(template)
    logger.info(f"Badge template {template.id} created for event {template.event_id}")
    return template


def update_template(db: Session, *, obj_in: BadgeTemplateUpdate) -> BadgeTemplate:
    """
    Applies the fields present in `obj_in`.

    Raises TemplateLockedError when the template is locked, `force_unlock`
    is not set and any design field is present. `force_unlock` clears the
    lock before the update is applied.
    """
    template = _get_template(db, obj_in.id)
    present = obj_in.model_fields_set - {"id", "event_id", "force_unlock"}
    reject_nulls_for_required_columns(
        BadgeTemplate, {field: getattr(obj_in, field) for field in present}
    )

    if template.is_locked and not obj_in.force_unlock:
        if present.intersection(DESIGN_FIELDS):
            logger.warning(f"Rejected design change on locked template {template.id}")
            raise _locked_error(template, "Design changes are not allowed.")

    if obj_in.force_unlock and template.is_locked:
        template.is_locked = False
        template.locked_at = None
        template.locked_by = None
        logger.info(f"Badge template {template.id} force-unlocked")

    if obj_in.is_default:
        crud_badge_template.badge_template.clear_default(
            db, event_id=template.event_id, exclude_id=template.id
        )

    for field in present:
        setattr(template, field, getattr(obj_in, field))

    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def delete_template(db: Session, *, template_id: str, force: bool = False) -> None:
    template = _get_template(db, template_id)
    if template.is_locked and not force:
        raise _locked_error(template, "Cannot delete.")
    db.delete(template)
    db.commit()
    logger.info(f"Badge template {template_id} deleted (force={force})")


def record_generation(
    db: Session, *, template_id: str, count: int, locked_by: Optional[str] = None
) -> BadgeTemplate:
    """Locks the template on its first generation, then keeps counting."""
    template = _get_template(db, template_id)
    if not template.is_locked:
        template.is_locked = True
        template.locked_at = datetime.now(timezone.utc)
        template.locked_by = locked_by or "system"
        template.badges_generated_count = count
        logger.info(f"Badge template {template.id} locked after generating {count} badges")
    else:
        template.badges_generated_count = (template.badges_generated_count or 0) + count

    db.add(template)
    db.commit()
    db.refresh(template)
    return template
