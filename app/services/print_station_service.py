# app/services/print_station_service.py
"""
Print station gate.

A kiosk authenticates with its station token (or an admin names the station
by id) and asks to print a badge for a registration. Each successful print
writes a completed PrintJob numbered 1, 2, 3... per (station, registration)
pair; the next number decides whether the print is a reprint and whether the
station's reprint policy allows it.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    InputValidationError,
    InvalidStateError,
    NotFoundError,
    ReprintLimitExceededError,
    ReprintNotAllowedError,
    TokenExpiredError,
)
from app.crud import crud_print_job, crud_print_station, crud_registration
from app.models.print_station import PrintStation
from app.models.registration import Registration
from app.schemas.print_station import PrintRequest, PrintStationUpdate
from app.utils.validators import reject_nulls_for_required_columns

logger = logging.getLogger(__name__)


def _is_expired(station: PrintStation) -> bool:
    expires_at = station.token_expires_at
    if expires_at is None:
        return False
    # SQLite hands back naive datetimes; they are stored as UTC.
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at < datetime.now(timezone.utc)


def _resolve_station(
    db: Session, *, token: Optional[str], station_id: Optional[str]
) -> PrintStation:
    if token:
        station = crud_print_station.print_station.get_by_token(db, token=token)
    elif station_id:
        station = crud_print_station.print_station.get(db, id=station_id)
    else:
        raise InputValidationError("print_station_id or token is required")

    if not station:
        raise NotFoundError("Print station not found")
    if not station.is_active:
        raise InvalidStateError("Print station is not active")
    if _is_expired(station):
        raise TokenExpiredError("Print station token has expired")
    return station


def _serialize_registration(registration: Registration) -> Dict[str, Any]:
    return {
        "id": registration.id,
        "registration_number": registration.registration_number,
        "attendee_name": registration.attendee_name,
        "attendee_email": registration.attendee_email,
        "attendee_phone": registration.attendee_phone,
        "attendee_institution": registration.attendee_institution,
        "attendee_designation": registration.attendee_designation,
        "ticket_type_id": registration.ticket_type_id,
        "ticket_type": registration.ticket_type.name if registration.ticket_type else None,
        "status": registration.status,
    }


def print_registration(db: Session, *, request: PrintRequest) -> Dict[str, Any]:
    station = _resolve_station(db, token=request.token, station_id=request.print_station_id)

    if request.registration_id:
        registration = crud_registration.registration.get_for_event(
            db, id=request.registration_id, event_id=station.event_id
        )
    elif request.registration_number:
        registration = crud_registration.registration.get_by_number(
            db,
            registration_number=request.registration_number,
            event_id=station.event_id,
        )
    else:
        raise InputValidationError("registration_id or registration_number is required")

    if not registration:
        raise NotFoundError(
            "Attendee not found", registration_number=request.registration_number
        )

    printed = _serialize_registration(registration)

    if registration.status != "confirmed":
        logger.warning(
            f"Print refused at station {station.id}: {registration.registration_number} "
            f"is {registration.status}"
        )
        raise InvalidStateError(
            f'Cannot print: Registration status is "{registration.status}"',
            registration=printed,
        )

    if station.ticket_type_ids and registration.ticket_type_id not in station.ticket_type_ids:
        logger.warning(
            f"Print refused at station {station.id}: ticket type "
            f"{registration.ticket_type_id} not allowed"
        )
        raise InvalidStateError(
            "This ticket type is not allowed for printing at this station",
            registration=printed,
        )

    if station.require_checkin and not registration.checked_in:
        raise InvalidStateError(
            "Attendee must be checked in before printing", registration=printed
        )

    last_number = crud_print_job.get_max_print_number(
        db, station_id=station.id, registration_id=registration.id
    )
    print_number = last_number + 1

    if print_number > 1 and not station.allow_reprint:
        logger.warning(
            f"Reprint refused at station {station.id} for {registration.registration_number}"
        )
        raise ReprintNotAllowedError(
            "Reprints are not allowed at this station",
            registration=printed,
            already_printed=True,
        )

    if print_number > station.max_reprints:
        logger.warning(
            f"Reprint limit reached at station {station.id} for "
            f"{registration.registration_number} ({last_number} prints)"
        )
        raise ReprintLimitExceededError(
            f"Maximum reprints ({station.max_reprints}) exceeded",
            registration=printed,
            print_count=last_number,
        )

    job = crud_print_job.create_print_job(
        db,
        station_id=station.id,
        registration_id=registration.id,
        print_number=print_number,
        device_info=request.device_info or {},
    )
    logger.info(
        f"Printed {registration.registration_number} at station {station.id} "
        f"(print #{print_number})"
    )

    return {
        "success": True,
        "print_job": job,
        "print_number": print_number,
        "is_reprint": print_number > 1,
        "registration": printed,
        "station": {
            "id": station.id,
            "name": station.name,
            "print_mode": station.print_mode,
            "print_settings": station.print_settings,
            "auto_print": station.auto_print,
        },
        "badge_template": station.badge_template,
    }


def get_station_by_token(db: Session, *, token: str) -> PrintStation:
    """The kiosk's own view of its station. Inactive stations are not found."""
    station = crud_print_station.print_station.get_by_token(db, token=token)
    if not station or not station.is_active:
        raise NotFoundError("Print station not found")
    if _is_expired(station):
        raise TokenExpiredError("Print station token has expired")
    return station


def list_stations_with_stats(db: Session, *, event_id: str) -> List[Dict[str, Any]]:
    stations = crud_print_station.print_station.get_multi_by_event(db, event_id=event_id)
    total_registrations = crud_registration.registration.count_confirmed_by_event(
        db, event_id=event_id
    )
    results = []
    for station in stations:
        stats = crud_print_job.get_station_stats(db, station_id=station.id)
        stats["totalRegistrations"] = total_registrations
        stats["progress"] = (
            round(stats["uniquePrints"] / total_registrations * 100)
            if total_registrations
            else 0
        )
        results.append({"station": station, "stats": stats})
    return results


def update_station(db: Session, *, obj_in: PrintStationUpdate) -> PrintStation:
    station = crud_print_station.print_station.get(db, id=obj_in.id)
    if not station:
        raise NotFoundError("Print station not found")
    update_data = obj_in.model_dump(exclude_unset=True, exclude={"id"})
    reject_nulls_for_required_columns(PrintStation, update_data)
    return crud_print_station.print_station.update(db, db_obj=station, obj_in=update_data)


def regenerate_token(db: Session, *, station_id: str) -> PrintStation:
    station = crud_print_station.print_station.get(db, id=station_id)
    if not station:
        raise NotFoundError("Print station not found")
    station = crud_print_station.print_station.regenerate_token(db, db_obj=station)
    logger.info(f"Access token regenerated for print station {station.id}")
    return station
