"""
Server-side session store.

A session maps an opaque random token to an account and its role until
``expires_at``.  The store object only holds the time-to-live and a
clock; rows live in the ``sessions`` table so every worker process sees
the same sessions.  One ``SessionStore`` is created per application in
``create_app`` and reached through ``app.state``.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.db.base import utcnow
from app.db.models.session import LoginSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """An authenticated caller, as resolved from a session token."""

    token: str
    account_id: str
    role: str


class SessionStore:
    def __init__(self, ttl: timedelta = timedelta(hours=24), clock: Callable[[], datetime] = utcnow):
        self.ttl = ttl
        self._clock = clock

    def issue(self, db: Session, account_id: str, role: str, replaces: Optional[str] = None) -> str:
        """Create a session and return its token.

        ``replaces`` is the token the caller presented with this request,
        if any; it is revoked in the same transaction so a browser never
        holds two live sessions.
        """
        if replaces:
            db.query(LoginSession).filter(LoginSession.token == replaces).delete(synchronize_session=False)

        token = secrets.token_urlsafe(32)
        now = self._clock()
        db.add(
            LoginSession(
                token=token,
                user_id=account_id,
                role=role,
                created_at=now,
                expires_at=now + self.ttl,
            )
        )
        db.commit()
        logger.info("Issued session for account %s (role=%s)", account_id, role)
        return token

    def authenticate(self, db: Session, token: Optional[str]) -> Optional[Principal]:
        """Resolve ``token`` to a ``Principal``; ``None`` means anonymous."""
        if not token:
            return None

        row = db.query(LoginSession).filter(LoginSession.token == token).first()
        if row is None:
            return None

        if row.expires_at <= self._clock():
            db.delete(row)
            db.commit()
            return None

        return Principal(token=row.token, account_id=row.user_id, role=row.role)

    def revoke(self, db: Session, token: Optional[str]) -> None:
        if not token:
            return
        deleted = db.query(LoginSession).filter(LoginSession.token == token).delete(synchronize_session=False)
        db.commit()
        if deleted:
            logger.info("Revoked session")
