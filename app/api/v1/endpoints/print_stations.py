# app/api/v1/endpoints/print_stations.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core.exceptions import InputValidationError
from app.core.limiter import KIOSK_CONFIG_LIMIT, PRINT_LIMIT, limiter
from app.crud import crud_print_job, crud_print_station, crud_registration
from app.db.session import get_db
from app.schemas.print_station import (
    PrintJob,
    PrintRequest,
    PrintResponse,
    PrintStation,
    PrintStationAction,
    PrintStationCreate,
    PrintStationUpdate,
    PrintStationWithStats,
)
from app.schemas.token import TokenPayload
from app.services import print_station_service

router = APIRouter(tags=["Print Stations"])


def _check_station_access(db: Session, station_id: str, current_user: TokenPayload):
    station = crud_print_station.print_station.get(db, id=station_id)
    if not station:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Print station not found"
        )
    deps.get_event_for_user(db, station.event_id, current_user)
    return station


@router.get("/print-stations", response_model=List[PrintStationWithStats])
def list_print_stations(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    List an event's print stations with their print progress.
    """
    deps.get_event_for_user(db, event_id, current_user)
    rows = print_station_service.list_stations_with_stats(db, event_id=event_id)
    return [
        PrintStationWithStats(
            **PrintStation.model_validate(row["station"]).model_dump(),
            stats=row["stats"],
        )
        for row in rows
    ]


@router.get("/print-stations/kiosk/{token}", response_model=PrintStation)
@limiter.limit(KIOSK_CONFIG_LIMIT)
def get_print_station_by_token(
    request: Request,  # Required for rate limiter
    token: str,
    db: Session = Depends(get_db),
):
    """
    Public: a kiosk loads its own station configuration with its token.
    """
    return print_station_service.get_station_by_token(db, token=token)


@router.post(
    "/print-stations",
    response_model=PrintStation,
    status_code=status.HTTP_201_CREATED,
)
def create_print_station(
    station_in: PrintStationCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deps.get_event_for_user(db, station_in.event_id, current_user)
    return crud_print_station.print_station.create_with_token(
        db, obj_in=station_in, created_by=current_user.sub
    )


@router.put("/print-stations", response_model=PrintStation)
def update_print_station(
    station_in: PrintStationUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _check_station_access(db, station_in.id, current_user)
    return print_station_service.update_station(db, obj_in=station_in)


@router.patch("/print-stations", response_model=PrintStation)
def print_station_action(
    action_in: PrintStationAction,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _check_station_access(db, action_in.id, current_user)
    if action_in.action != "regenerate_token":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action"
        )
    return print_station_service.regenerate_token(db, station_id=action_in.id)


@router.delete("/print-stations")
def delete_print_station(
    id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    _check_station_access(db, id, current_user)
    crud_print_station.print_station.remove(db, id=id)
    return {"success": True}


@router.post("/print-stations/print", response_model=PrintResponse)
@limiter.limit(PRINT_LIMIT)
def print_badge(
    request: Request,  # Required for rate limiter
    print_in: PrintRequest,
    db: Session = Depends(get_db),
):
    """
    Public: print a badge at a station (scan to print).

    The kiosk identifies its station by access token; a bare station id is
    only accepted on the authenticated route below. Refusals (inactive
    station, expired token, unconfirmed registration, reprint policy) come
    back as `{"error": ...}` with a 4xx status.
    """
    if not print_in.token:
        raise InputValidationError("token is required")
    return print_station_service.print_registration(db, request=print_in)


@router.post("/print-stations/{station_id}/print", response_model=PrintResponse)
def print_badge_as_organizer(
    station_id: str,
    print_in: PrintRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Print at a station by id, for organizers of the station's event.
    """
    _check_station_access(db, station_id, current_user)
    print_in = print_in.model_copy(update={"print_station_id": station_id, "token": None})
    return print_station_service.print_registration(db, request=print_in)


@router.get("/print-stations/print", response_model=List[PrintJob])
def print_history(
    station_id: Optional[str] = None,
    registration_id: Optional[str] = None,
    limit: int = 50,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    if not station_id and not registration_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="station_id or registration_id is required",
        )
    if station_id:
        _check_station_access(db, station_id, current_user)
    if registration_id:
        registration = crud_registration.registration.get(db, id=registration_id)
        if not registration:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found"
            )
        deps.get_event_for_user(db, registration.event_id, current_user)
    return crud_print_job.get_history(
        db, station_id=station_id, registration_id=registration_id, limit=limit
    )
