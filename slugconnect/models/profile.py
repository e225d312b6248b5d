from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, func
from sqlalchemy.orm import relationship
from slugconnect.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    # One row per user; the auth identity doubles as the primary key.
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    name = Column(String(255), nullable=False)
    major = Column(String(255), nullable=False, index=True)
    college = Column(String(255), nullable=True)
    year = Column(String(32), nullable=False, index=True)
    interests = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", backref="profile_record")
