"""Sitter directory: search, detail lookup and self-service profile edits."""

import logging
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.db.models.review import Review
from app.db.models.sitter import BOROUGHS, SitterProfile, SitterSpecialty
from app.db.models.user import User
from app.schemas.sitter import SitterSearchCriteria

logger = logging.getLogger(__name__)

# everything except identity links and the rating aggregates
EDITABLE_FIELDS = (
    "name",
    "email",
    "phone",
    "borough",
    "neighborhood",
    "daily_rate",
    "experience",
    "specialties",
    "bio",
    "verified",
    "avatar_url",
    "available",
)


def _is_set(value) -> bool:
    return value is not None and str(value).strip() != "" and str(value).strip().lower() != "all"


def search(db: Session, criteria: SitterSearchCriteria) -> List[SitterProfile]:
    q = db.query(SitterProfile)

    if _is_set(criteria.borough):
        q = q.filter(SitterProfile.borough == criteria.borough.strip())

    if criteria.min_rate is not None:
        q = q.filter(SitterProfile.daily_rate >= criteria.min_rate)

    if criteria.max_rate is not None:
        q = q.filter(SitterProfile.daily_rate <= criteria.max_rate)

    if _is_set(criteria.specialty):
        q = q.filter(
            SitterProfile.specialty_rows.any(
                SitterSpecialty.name.icontains(criteria.specialty.strip(), autoescape=True)
            )
        )

    if criteria.min_rating is not None:
        q = q.filter(SitterProfile.rating_average >= criteria.min_rating)

    if criteria.available is not None:
        q = q.filter(SitterProfile.available == criteria.available)

    if criteria.search is not None and criteria.search.strip():
        term = criteria.search.strip()
        q = q.filter(
            or_(
                SitterProfile.name.icontains(term, autoescape=True),
                SitterProfile.neighborhood.icontains(term, autoescape=True),
                SitterProfile.bio.icontains(term, autoescape=True),
                SitterProfile.borough.icontains(term, autoescape=True),
            )
        )

    # created_at/id only make tie order deterministic
    return q.order_by(
        SitterProfile.rating_average.desc(),
        SitterProfile.created_at.asc(),
        SitterProfile.id.asc(),
    ).all()


def get_by_id(db: Session, sitter_id: str) -> SitterProfile:
    sitter = db.query(SitterProfile).filter(SitterProfile.id == sitter_id).first()
    if not sitter:
        raise NotFoundError("Sitter not found")
    return sitter


def list_reviews(db: Session, sitter_id: str) -> List[Review]:
    return (
        db.query(Review)
        .filter(Review.sitter_id == sitter_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def update_own_profile(db: Session, user: User, **fields) -> SitterProfile:
    """Apply a partial update to the signed-in sitter's own listing."""
    sitter = user.sitter_profile
    if sitter is None:
        raise NotFoundError("Sitter profile not found")

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update: {', '.join(sorted(unknown))}")

    _validate_profile_fields(fields)

    for field, value in fields.items():
        if field == "daily_rate":
            sitter.set_daily_rate(value)
        elif field == "specialties":
            sitter.set_specialties(value or [])
        elif field == "name":
            sitter.name = value.strip()
        elif field in ("neighborhood", "experience", "bio"):
            setattr(sitter, field, value or "")
        else:
            setattr(sitter, field, value)

    db.commit()
    db.refresh(sitter)
    logger.info("Sitter %s updated fields: %s", sitter.id, ", ".join(sorted(fields)) or "-")
    return sitter


def _validate_profile_fields(fields: dict) -> None:
    # checked up front so a bad field leaves the row untouched
    if "daily_rate" in fields:
        rate = fields["daily_rate"]
        if rate is None or rate <= 0:
            raise ValidationError("Daily rate must be a positive number")
    if "borough" in fields and fields["borough"] not in BOROUGHS:
        raise ValidationError(f"Borough must be one of: {', '.join(BOROUGHS)}")
    if "name" in fields and not (fields["name"] or "").strip():
        raise ValidationError("Name cannot be empty")
    for flag in ("verified", "available"):
        if flag in fields and fields[flag] is None:
            raise ValidationError(f"{flag} must be true or false")
