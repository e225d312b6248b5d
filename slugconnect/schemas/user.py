from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    id: str
    email: str
    email_confirmed: bool = False
    has_profile: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TokenData(BaseModel):
    user_id: str
    jti: Optional[str] = None
    expires_at: Optional[datetime] = None


class SessionRead(BaseModel):
    user: UserRead
    expires_at: Optional[datetime] = None
