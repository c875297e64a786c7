from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class SessionInfo(BaseModel):
    """Session metadata safe to show an administrator (no token)"""

    id: UUID
    created_at: datetime
    expires_at: datetime
    is_active: bool
    expired: bool


class RevokeSessionsResponse(BaseModel):
    revoked_count: int
    user_id: UUID
