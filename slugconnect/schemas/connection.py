from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from slugconnect.schemas.profile import ProfileRead


class ConnectionStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RECEIVED = "received"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def can_send(self) -> bool:
        return self in (ConnectionStatus.IDLE, ConnectionStatus.REJECTED)

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ConnectionStatus.IDLE: "Send Connection Request",
    ConnectionStatus.PENDING: "Request Pending",
    ConnectionStatus.RECEIVED: "Request Received",
    ConnectionStatus.ACCEPTED: "✓ Connected",
    ConnectionStatus.REJECTED: "Send Request Again",
}


ResponseAction = Literal["accepted", "rejected"]


class ConnectionStatusRead(BaseModel):
    target_id: str
    status: ConnectionStatus
    label: str
    can_send: bool

    @classmethod
    def of(cls, target_id: str, status: ConnectionStatus) -> "ConnectionStatusRead":
        return cls(target_id=target_id, status=status, label=status.label, can_send=status.can_send)


class SendRequest(BaseModel):
    receiver_id: str = Field(min_length=1)


class RespondRequest(BaseModel):
    action: ResponseAction


class ConnectionRequestRead(BaseModel):
    id: int
    sender_id: str
    receiver_id: str
    status: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PendingRequestItem(BaseModel):
    request: ConnectionRequestRead
    sender: ProfileRead | None = None
    sender_name: str = "Unknown"
    sender_major: str = "Unknown"


class AcceptedConnectionItem(BaseModel):
    request: ConnectionRequestRead
    other_user_id: str
    other_user: ProfileRead | None = None
    other_user_name: str = "Unknown"
    other_user_major: str = "Unknown"


class ConnectionsOverview(BaseModel):
    pending_requests: list[PendingRequestItem] = Field(default_factory=list)
    accepted_connections: list[AcceptedConnectionItem] = Field(default_factory=list)
