from typing import Optional

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """Claims of the bearer token issued by the platform's auth service."""

    sub: str  # user id
    # Tenant. Events, and everything hanging off them, are scoped to it.
    org_id: Optional[str] = Field(default=None, alias="orgId")
    exp: int

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }
