# app/api/v1/api.py

from fastapi import APIRouter
from app.api.v1.endpoints import (
    badge_templates,
    events,
    print_stations,
    program,
    registrations,
    respond,
)

# This is the main router for the v1 API.
# It will include all the specific endpoint routers.
api_router = APIRouter()

api_router.include_router(events.router)
api_router.include_router(registrations.router)
api_router.include_router(badge_templates.router)
api_router.include_router(print_stations.router)
api_router.include_router(program.router)
api_router.include_router(respond.router)
