"""
Password hashing and request authentication.

Passwords are hashed with passlib's ``pbkdf2_sha256`` (salted, one-way).
Requests authenticate with a session token sent either as
``Authorization: Bearer <token>`` or in the session cookie; the token is
resolved against the ``SessionStore`` stored on ``app.state``.

The gates below are FastAPI dependencies:

* ``get_principal`` never fails; anonymous callers get ``None``.
* ``require_auth`` raises ``UnauthorizedError`` for anonymous callers.
* ``require_role(role)`` additionally raises ``ForbiddenError`` on a role
  mismatch and returns the full ``User`` row.
"""

from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.sessions import Principal, SessionStore
from app.db.base import get_db
from app.db.models.user import User

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def dummy_verify() -> None:
    """Spend the same time as a real verification; used for unknown emails."""
    pwd_context.dummy_verify()


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_token(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if creds and creds.scheme.lower() == "bearer" and creds.credentials:
        return creds.credentials
    return request.cookies.get(settings.session_cookie_name) or None


def get_principal(
    token: Optional[str] = Depends(get_token),
    store: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db),
) -> Optional[Principal]:
    return store.authenticate(db, token)


def get_current_user(
    principal: Optional[Principal] = Depends(get_principal),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """The signed-in ``User`` or ``None``."""
    if principal is None:
        return None
    return db.query(User).filter(User.id == principal.account_id).first()


def require_auth(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise UnauthorizedError()
    return user


def require_role(role: str) -> Callable[..., User]:
    """Dependency factory: allow only signed-in users whose role is ``role``."""

    def _role_dependency(user: User = Depends(require_auth)) -> User:
        if user.role != role:
            raise ForbiddenError(f"{role.capitalize()} access required")
        return user

    return _role_dependency
