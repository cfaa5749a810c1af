from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, new_id, utcnow

STATUS_PENDING = "pending"
STATUS_CONFIRMED = "confirmed"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

BOOKING_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_COMPLETED, STATUS_CANCELLED)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=new_id)

    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    sitter_id = Column(String(36), ForeignKey("sitter_profiles.id"), nullable=False, index=True)

    # snapshots taken at creation; later profile edits must not change them
    sitter_name = Column(String, nullable=False)
    owner_name = Column(String, nullable=False)
    owner_email = Column(String, nullable=False)
    owner_phone = Column(String, nullable=True)

    cat_name = Column(String, nullable=False)
    cat_breed = Column(String, nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)  # inclusive
    total_days = Column(Integer, nullable=False)
    total_cost = Column(Float, nullable=False)

    special_instructions = Column(String, nullable=True)

    status = Column(String, nullable=False, default=STATUS_PENDING)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    # relationships
    owner = relationship("User", foreign_keys=[owner_id])
    sitter = relationship("SitterProfile", foreign_keys=[sitter_id])
