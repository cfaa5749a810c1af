"""
Booking ledger.

Cost is fixed when the booking is made: ``total_days`` counts both the
start and end date, and ``total_cost`` uses the sitter's rate at that
moment.  Owner and sitter display fields are copied onto the booking so
later profile edits leave booking history unchanged.

Status moves only along ``ALLOWED_TRANSITIONS``.  Overlapping bookings
for the same sitter are accepted.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, InvalidTransitionError, NotFoundError, ValidationError
from app.db.models.booking import (
    BOOKING_STATUSES,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_CONFIRMED,
    STATUS_PENDING,
    Booking,
)
from app.db.models.sitter import SitterProfile
from app.db.models.user import ROLE_OWNER, ROLE_SITTER, User

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    STATUS_PENDING: {STATUS_CONFIRMED, STATUS_CANCELLED},
    STATUS_CONFIRMED: {STATUS_COMPLETED, STATUS_CANCELLED},
    STATUS_COMPLETED: set(),
    STATUS_CANCELLED: set(),
}


def stay_length(start_date: date, end_date: date) -> int:
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date")
    return (end_date - start_date).days + 1


def create(
    db: Session,
    owner: User,
    sitter_id: str,
    cat_name: str,
    cat_breed: Optional[str],
    start_date: date,
    end_date: date,
    special_instructions: Optional[str] = None,
) -> Booking:
    sitter = db.query(SitterProfile).filter(SitterProfile.id == sitter_id).first()
    if not sitter:
        raise NotFoundError("Sitter not found")

    if not (cat_name or "").strip():
        raise ValidationError("Cat name is required")

    total_days = stay_length(start_date, end_date)
    total_cost = total_days * sitter.daily_rate

    booking = Booking(
        owner_id=owner.id,
        sitter_id=sitter.id,
        sitter_name=sitter.name,
        owner_name=owner.full_name,
        owner_email=owner.email,
        owner_phone=owner.phone,
        cat_name=cat_name.strip(),
        cat_breed=cat_breed,
        start_date=start_date,
        end_date=end_date,
        total_days=total_days,
        total_cost=total_cost,
        special_instructions=special_instructions,
        status=STATUS_PENDING,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)

    logger.info(
        "Booking %s created: owner=%s sitter=%s days=%d cost=%.2f",
        booking.id, owner.id, sitter.id, total_days, total_cost,
    )
    return booking


def list_mine(db: Session, user: User) -> List[Booking]:
    q = db.query(Booking)
    if user.role == ROLE_OWNER:
        q = q.filter(Booking.owner_id == user.id)
    elif user.sitter_profile is not None:
        q = q.filter(Booking.sitter_id == user.sitter_profile.id)
    else:
        return []
    return q.order_by(Booking.created_at.desc(), Booking.id.desc()).all()


def set_status(db: Session, booking_id: str, new_status: str, acting_user: User) -> Booking:
    if acting_user.role != ROLE_SITTER:
        raise ForbiddenError("Sitter access required")

    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        raise NotFoundError("Booking not found")

    sitter = acting_user.sitter_profile
    if sitter is None or booking.sitter_id != sitter.id:
        raise ForbiddenError("Not your booking")

    if new_status not in BOOKING_STATUSES:
        raise ValidationError(f"Unknown booking status: {new_status}")

    current = booking.status
    if new_status not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidTransitionError(f"Cannot change booking from {current} to {new_status}")

    booking.status = new_status
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s: %s -> %s", booking.id, current, new_status)
    return booking


def list_all(db: Session) -> List[Booking]:
    return db.query(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()).all()
