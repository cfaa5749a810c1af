# app/db/models/session.py
from sqlalchemy import Column, DateTime, ForeignKey, String

from app.db.base import Base, utcnow


class LoginSession(Base):
    """Server-side record behind an opaque session token."""

    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
