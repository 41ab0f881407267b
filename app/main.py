# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import CommandCenterError
from app.core.limiter import limiter

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.PROJECT_NAME} starting up (env={settings.ENV})")
    yield
    logger.info(f"{settings.PROJECT_NAME} shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="""
        **AMASI Command Center**

        Back office for association conferences.

        ## Features

        * **Registrations**: Ticketing, inventory, transfers between events, check-in
        * **Badges**: Badge templates that lock once badges have been generated
        * **Print Stations**: Kiosk badge printing with reprint control
        * **Faculty**: Speaker, chairperson and moderator assignments and invitations
        * **Notifications**: Email (Resend / Blastable) and WhatsApp templates

        ## Authentication

        Most endpoints require JWT authentication via the `Authorization: Bearer <token>` header.

        ## Public Endpoints

        `/print-stations/print`, `/print-stations/kiosk/{token}` and `/respond/{token}`
        are authorized by the station or invitation token they carry.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(CommandCenterError)
async def command_center_error_handler(request: Request, exc: CommandCenterError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,  # Allow cookies and authorization headers
    allow_methods=["*"],  # Allow all methods (GET, POST, etc.)
    allow_headers=["*"],  # Allow all headers
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "AMASI Command Center is running"}
