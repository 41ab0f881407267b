from datetime import datetime, timedelta, timezone
from typing import Dict

from jose import jwt

from app.core.config import settings


def get_user_authentication_headers(
    org_id: str = "org_abc", user_id: str = "user_123"
) -> Dict[str, str]:
    """Builds a Bearer header with a token signed like the auth service's."""
    payload = {
        "sub": user_id,
        "orgId": org_id,
        "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp()),
    }
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}
