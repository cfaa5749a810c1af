"""
Review submission and sitter rating aggregation.

The aggregate is recomputed from every stored review on each
submission, never adjusted incrementally.  The insert and the
recompute share one transaction, and the sequence is serialized: by a
process-wide lock (covers SQLite and threaded workers) and by locking
the sitter row (covers several processes on a database that supports
``SELECT ... FOR UPDATE``).
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from threading import Lock
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.db.models.review import Review
from app.db.models.sitter import SitterProfile
from app.db.models.user import User

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

_aggregate_lock = Lock()


def round_rating(value: float) -> float:
    """Round to one decimal, halves away from zero (4.25 -> 4.3)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _recalculate_sitter_rating(db: Session, sitter: SitterProfile) -> None:
    total, count = (
        db.query(func.sum(Review.rating), func.count(Review.id))
        .filter(Review.sitter_id == sitter.id)
        .one()
    )
    if count:
        sitter.rating_average = round_rating(total / count)
    sitter.rating_count = count


def submit(
    db: Session,
    sitter_id: str,
    owner: User,
    rating,
    comment: Optional[str] = None,
) -> Review:
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be a whole number between {MIN_RATING} and {MAX_RATING}")

    with _aggregate_lock:
        try:
            sitter = (
                db.query(SitterProfile)
                .filter(SitterProfile.id == sitter_id)
                .with_for_update()
                .first()
            )
            if not sitter:
                raise NotFoundError("Sitter not found")

            review = Review(
                sitter_id=sitter.id,
                owner_id=owner.id,
                owner_name=owner.full_name,
                rating=rating,
                comment=comment,
            )
            db.add(review)
            db.flush()

            _recalculate_sitter_rating(db, sitter)
            db.commit()
        except Exception:
            db.rollback()
            raise

    db.refresh(review)
    logger.info(
        "Review %s for sitter %s: rating=%d, sitter now %.1f over %d reviews",
        review.id, sitter_id, rating, sitter.rating_average, sitter.rating_count,
    )
    return review
