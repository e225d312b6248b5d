from __future__ import annotations

from pydantic import BaseModel, Field

from slugconnect.schemas.connection import ConnectionStatus
from slugconnect.schemas.profile import ProfileRead


class ProfileFilter(BaseModel):
    """Discover sidebar criteria. Empty strings match everything."""

    major: str = ""
    year: str = ""
    interest: str = ""
    custom_interest: str = ""
    search: str = ""


class DiscoverProfile(ProfileRead):
    status: ConnectionStatus = ConnectionStatus.IDLE
    label: str = ConnectionStatus.IDLE.label
    can_send: bool = True


class DiscoverResponse(BaseModel):
    profiles: list[DiscoverProfile] = Field(default_factory=list)
    total: int = 0
    viewer_interests: list[str] = Field(default_factory=list)
    filters: ProfileFilter = Field(default_factory=ProfileFilter)
    message: str | None = None
