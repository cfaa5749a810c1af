"""
Account registration, sign-in and profile edits.

Registering a sitter also creates their public ``SitterProfile``; both
rows are written in one transaction so a sitter account never exists
without its listing.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import AuthError, ConflictError, ValidationError
from app.core.security import dummy_verify, hash_password, verify_password
from app.db.models.sitter import SitterProfile, format_rate_label
from app.db.models.user import ROLE_SITTER, ROLES, User

logger = logging.getLogger(__name__)

STARTER_DAILY_RATE = 40.0
STARTER_BOROUGH = "Manhattan"
STARTER_EXPERIENCE = "New sitter"
STARTER_BIO = "New to Purrfect Sitters!"
STARTER_AVATAR_URL = "https://images.unsplash.com/photo-1511367461989-f85a21fda167?w=200"


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _starter_profile(user: User) -> SitterProfile:
    return SitterProfile(
        user=user,
        name=user.full_name,
        email=user.email,
        phone=user.phone,
        borough=STARTER_BOROUGH,
        neighborhood="",
        daily_rate=STARTER_DAILY_RATE,
        rate_display=format_rate_label(STARTER_DAILY_RATE),
        rating_average=5.0,
        rating_count=0,
        experience=STARTER_EXPERIENCE,
        bio=STARTER_BIO,
        verified=False,
        avatar_url=STARTER_AVATAR_URL,
        available=True,
    )


def register(
    db: Session,
    email: Optional[str],
    password: Optional[str],
    first_name: Optional[str],
    last_name: Optional[str],
    role: Optional[str],
    phone: Optional[str] = None,
) -> User:
    email = normalize_email(email)
    first_name = (first_name or "").strip()
    last_name = (last_name or "").strip()
    role = (role or "").strip().lower()

    if not email or not password or not first_name or not last_name or not role:
        raise ValidationError("All fields are required")
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")

    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        phone=phone or None,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("Email already registered")

    try:
        if role == ROLE_SITTER:
            db.add(_starter_profile(user))
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Registration rolled back for %s account", role)
        raise

    db.refresh(user)
    logger.info("Registered %s account %s", role, user.id)
    return user


def verify(db: Session, email: Optional[str], password: Optional[str]) -> User:
    """Return the account for valid credentials.

    Unknown email and wrong password raise the same ``AuthError``.
    """
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password required")

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        dummy_verify()
        raise AuthError()
    if not verify_password(password, user.password_hash):
        raise AuthError()
    return user


def update_profile(
    db: Session,
    user: User,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> User:
    """Partial update; ``None`` leaves a field untouched. Email and role never change."""
    if first_name is not None and not first_name.strip():
        raise ValidationError("First name cannot be empty")
    if last_name is not None and not last_name.strip():
        raise ValidationError("Last name cannot be empty")

    if first_name is not None:
        user.first_name = first_name.strip()
    if last_name is not None:
        user.last_name = last_name.strip()
    if phone is not None:
        user.phone = phone
    if avatar_url is not None:
        user.avatar_url = avatar_url

    db.commit()
    db.refresh(user)
    return user
