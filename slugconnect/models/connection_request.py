from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from slugconnect.database import Base


REQUEST_STATUSES = ("pending", "accepted", "rejected")


def canonical_pair(first: str, second: str) -> tuple[str, str]:
    return (first, second) if first <= second else (second, first)


class ConnectionRequest(Base):
    __tablename__ = "connection_requests"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Ordered pair of the two identities; one row per relationship regardless of direction.
    pair_low = Column(String(36), nullable=False)
    pair_high = Column(String(36), nullable=False)

    status = Column(String(16), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("pair_low", "pair_high", name="uq_connection_requests_pair"),
        CheckConstraint("sender_id <> receiver_id", name="ck_connection_requests_not_self"),
        CheckConstraint(
            "status IN (" + ", ".join(f"'{status}'" for status in REQUEST_STATUSES) + ")",
            name="ck_connection_requests_status",
        ),
    )

    @classmethod
    def values_for(cls, sender_id: str, receiver_id: str, status: str = "pending") -> dict:
        low, high = canonical_pair(sender_id, receiver_id)
        return {
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "pair_low": low,
            "pair_high": high,
            "status": status,
        }

    def other_party(self, user_id: str) -> str:
        return self.receiver_id if self.sender_id == user_id else self.sender_id
