# app/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.core.config import settings
from app.crud import crud_event
from app.models.event import Event
from app.schemas.token import TokenPayload

# This tells FastAPI where to look for the token.
# The `tokenUrl` doesn't have to be a real endpoint in this service,
# it's just for the OpenAPI documentation.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"])
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception

    if not token_data.org_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Organization context required"
        )
    return token_data


def get_event_for_user(db: Session, event_id: str, current_user: TokenPayload) -> Event:
    """
    Loads an event the caller's organization owns. Events of other
    organizations are reported as missing.
    """
    event = crud_event.event.get(db, id=event_id)
    if not event or event.organization_id != current_user.org_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return event
