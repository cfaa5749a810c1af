# app/db/models/review.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, new_id, utcnow


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    sitter_id = Column(String(36), ForeignKey("sitter_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    owner_name = Column(String, nullable=False)

    rating = Column(Integer, nullable=False)   # 1..5
    comment = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    sitter = relationship("SitterProfile", foreign_keys=[sitter_id])
    owner = relationship("User", foreign_keys=[owner_id])
