# app/services/registration_service.py
"""
Registration inventory rules.

Every operation here keeps `ticket_types.quantity_sold` in step with the
registrations that hold a seat: only confirmed registrations count, so the
counters move when a registration enters or leaves the confirmed state, or
moves between tickets while confirmed.

Availability is checked by reading the counter right before writing it, in
the same transaction but without a row lock. Two concurrent requests can both
pass the check for the last seat.
"""
import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import (
    CapacityExceededError,
    InvalidStateError,
    NotFoundError,
)
from app.crud import crud_event, crud_registration, crud_ticket_type
from app.models.event import Event
from app.models.registration import Registration
from app.models.ticket_type import TicketType
from app.schemas.registration import RegistrationCreate

logger = logging.getLogger(__name__)


def calculate_amounts(
    price, tax_percentage, quantity: int
) -> Tuple[Decimal, Decimal, Decimal]:
    """
    Returns (unit_price, tax_amount, total_amount).

    Tax is rounded half-up to a whole currency unit.
    """
    unit_price = Decimal(str(price or 0))
    tax_rate = Decimal(str(tax_percentage or 0))
    subtotal = unit_price * quantity
    tax_amount = (subtotal * tax_rate / 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return unit_price, tax_amount, subtotal + tax_amount


def _adjust_sold(ticket: TicketType, delta: int) -> None:
    ticket.quantity_sold = max(0, (ticket.quantity_sold or 0) + delta)


def _ensure_capacity(ticket: TicketType, quantity: int) -> None:
    if not ticket.has_capacity_for(quantity):
        raise CapacityExceededError(
            f"Not enough tickets available. Only {ticket.quantity_available} left."
        )


def _get_registration(db: Session, registration_id: str) -> Registration:
    registration = crud_registration.registration.get(db, id=registration_id)
    if not registration:
        raise NotFoundError("Registration not found")
    return registration


def transfer_registration(
    db: Session,
    *,
    registration_id: str,
    new_event_id: str,
    new_ticket_type_id: str,
    notes: Optional[str] = None,
    org_id: Optional[str] = None,
) -> dict:
    """
    Moves a registration to another event and ticket type.

    The registration gets a fresh number in the target event's sequence and
    is repriced from the new ticket. Returns the updated registration with a
    summary of the move and the price difference.
    """
    registration = _get_registration(db, registration_id)

    if registration.checked_in:
        raise InvalidStateError("Cannot transfer checked-in registration")

    new_event = crud_event.event.get(db, id=new_event_id)
    if not new_event or (org_id and new_event.organization_id != org_id):
        raise NotFoundError("New event not found")

    new_ticket = crud_ticket_type.ticket_type.get(db, id=new_ticket_type_id)
    if not new_ticket:
        raise NotFoundError("New ticket type not found")

    if new_ticket.event_id != new_event.id:
        raise InvalidStateError("Ticket does not belong to the selected event")

    if new_ticket.status != "active":
        raise InvalidStateError("New ticket is not available for sale")

    quantity = registration.quantity or 1
    _ensure_capacity(new_ticket, quantity)

    new_number = crud_registration.registration.next_registration_number(
        db, event=new_event
    )
    unit_price, tax_amount, total_amount = calculate_amounts(
        new_ticket.price, new_ticket.tax_percentage, quantity
    )

    old_event_name = registration.event.name if registration.event else "Unknown Event"
    old_ticket = registration.ticket_type
    old_ticket_name = old_ticket.name if old_ticket else "Unknown"
    old_total = Decimal(str(registration.total_amount or 0))
    was_confirmed = registration.status == "confirmed"

    note = (
        f'Transferred from "{old_event_name}" ({old_ticket_name}) '
        f'to "{new_event.name}" ({new_ticket.name})'
    )
    if notes:
        note += f" - {notes}"
    stamp = datetime.now().strftime("%d/%m/%Y")
    existing_notes = f"{registration.notes}\n" if registration.notes else ""

    registration.event_id = new_event.id
    registration.ticket_type_id = new_ticket.id
    registration.registration_number = new_number
    registration.unit_price = unit_price
    registration.tax_amount = tax_amount
    registration.total_amount = total_amount
    registration.notes = f"{existing_notes}[{stamp}] {note}"

    if was_confirmed:
        if old_ticket:
            _adjust_sold(old_ticket, -quantity)
        _adjust_sold(new_ticket, quantity)

    db.add(registration)
    db.commit()
    db.refresh(registration)

    logger.info(
        f"Registration {registration.id} transferred to event {new_event.id} "
        f"as {new_number} (confirmed={was_confirmed})"
    )

    return {
        "success": True,
        "message": f"Successfully transferred to {new_event.name}",
        "data": registration,
        "transfer": {
            "fromEvent": old_event_name,
            "toEvent": new_event.name,
            "fromTicket": old_ticket_name,
            "toTicket": new_ticket.name,
            "newRegistrationNumber": new_number,
        },
        "priceChange": {
            "oldPrice": float(old_total),
            "newPrice": float(total_amount),
            "difference": float(total_amount - old_total),
        },
    }


def create_registration(
    db: Session, *, event: Event, obj_in: RegistrationCreate
) -> Registration:
    """
    Registers an attendee on one of the event's tickets.

    Free tickets that need no approval are confirmed immediately and take
    their seats at once; everything else starts pending.
    """
    if not event.registration_open:
        raise InvalidStateError("Registration is closed for this event")

    ticket = crud_ticket_type.ticket_type.get_for_event(
        db, id=obj_in.ticket_type_id, event_id=event.id
    )
    if not ticket:
        raise NotFoundError("Ticket type not found")

    if ticket.status != "active":
        raise InvalidStateError("Ticket is not available for sale")

    _ensure_capacity(ticket, obj_in.quantity)

    unit_price, tax_amount, total_amount = calculate_amounts(
        ticket.price, ticket.tax_percentage, obj_in.quantity
    )
    is_free = unit_price == 0
    if not is_free and obj_in.payment_method.value == "free":
        raise InvalidStateError("A payment method is required for paid tickets")

    confirmed = is_free and not ticket.requires_approval
    data = obj_in.model_dump(exclude={"ticket_type_id", "payment_method", "source"})
    if data.get("attendee_country") is None:
        data.pop("attendee_country", None)

    registration = Registration(
        **data,
        event_id=event.id,
        ticket_type_id=ticket.id,
        registration_number=crud_registration.registration.next_registration_number(
            db, event=event
        ),
        unit_price=unit_price,
        tax_amount=tax_amount,
        total_amount=total_amount,
        currency=ticket.currency,
        payment_method=obj_in.payment_method.value,
        source=obj_in.source.value,
        status="confirmed" if confirmed else "pending",
        confirmed_at=datetime.now(timezone.utc) if confirmed else None,
    )
    if confirmed:
        _adjust_sold(ticket, obj_in.quantity)

    db.add(registration)
    db.commit()
    db.refresh(registration)
    logger.info(
        f"Registration {registration.registration_number} created for event "
        f"{event.id} with status {registration.status}"
    )
    return registration


def confirm_registration(db: Session, *, registration_id: str) -> Registration:
    registration = _get_registration(db, registration_id)
    if registration.status != "pending":
        raise InvalidStateError(
            f'Only pending registrations can be confirmed (status is "{registration.status}")'
        )

    ticket = registration.ticket_type
    _ensure_capacity(ticket, registration.quantity)

    registration.status = "confirmed"
    registration.confirmed_at = datetime.now(timezone.utc)
    _adjust_sold(ticket, registration.quantity)

    db.add(registration)
    db.commit()
    db.refresh(registration)
    logger.info(f"Registration {registration.id} confirmed")
    return registration


def cancel_registration(
    db: Session,
    *,
    registration_id: str,
    refund: bool = False,
    notes: Optional[str] = None,
) -> Registration:
    """Cancels (or marks refunded) and releases the seats of a confirmed registration."""
    registration = _get_registration(db, registration_id)
    if registration.status in ("cancelled", "refunded"):
        raise InvalidStateError(f"Registration is already {registration.status}")

    was_confirmed = registration.status == "confirmed"
    registration.status = "refunded" if refund else "cancelled"
    if notes:
        stamp = datetime.now().strftime("%d/%m/%Y")
        existing_notes = f"{registration.notes}\n" if registration.notes else ""
        registration.notes = f"{existing_notes}[{stamp}] Cancelled - {notes}"

    if was_confirmed and registration.ticket_type:
        _adjust_sold(registration.ticket_type, -registration.quantity)

    db.add(registration)
    db.commit()
    db.refresh(registration)
    logger.info(f"Registration {registration.id} set to {registration.status}")
    return registration


def check_in_registration(
    db: Session, *, registration_id: str, checked_in_by: Optional[str] = None
) -> Registration:
    registration = _get_registration(db, registration_id)
    if registration.status != "confirmed":
        raise InvalidStateError(
            f'Cannot check in: Registration status is "{registration.status}"'
        )
    if registration.checked_in:
        raise InvalidStateError("Attendee is already checked in")

    registration.checked_in = True
    registration.checked_in_at = datetime.now(timezone.utc)
    registration.checked_in_by = checked_in_by

    db.add(registration)
    db.commit()
    db.refresh(registration)
    return registration


def bulk_delete_imported(
    db: Session, *, event_id: str, registration_ids: List[str]
) -> dict:
    """
    Deletes imported registrations. Rows entered through the web or by an
    admin are never deleted here and come back in `skipped`.
    """
    rows = crud_registration.registration.get_multi_by_ids(
        db, event_id=event_id, ids=registration_ids
    )
    found = {row.id for row in rows}
    skipped = [rid for rid in registration_ids if rid not in found]
    deleted = 0
    for row in rows:
        if row.source != "import":
            skipped.append(row.id)
            continue
        if row.status == "confirmed" and row.ticket_type:
            _adjust_sold(row.ticket_type, -row.quantity)
        db.delete(row)
        deleted += 1

    db.commit()
    logger.info(f"Bulk delete on event {event_id}: {deleted} deleted, {len(skipped)} skipped")
    return {"deleted": deleted, "skipped": skipped}
