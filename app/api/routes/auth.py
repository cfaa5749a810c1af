from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_current_user, get_session_store, get_token, require_auth
from app.core.sessions import SessionStore
from app.db.base import get_db
from app.db.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import AuthResponse, LoginRequest, UserCreate, UserUpdate, UserWithProfileResponse
from app.services import accounts

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _start_session(response: Response, db: Session, store: SessionStore, user: User, previous: Optional[str]) -> AuthResponse:
    token = store.issue(db, user.id, user.role, replaces=previous)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=int(store.ttl.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return AuthResponse(access_token=token, user=UserWithProfileResponse.model_validate(user))


@router.post("/register", response_model=ApiResponse[AuthResponse])
def register(
    payload: UserCreate,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    previous: Optional[str] = Depends(get_token),
):
    user = accounts.register(
        db,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
        phone=payload.phone,
    )
    return ApiResponse(message="Registration successful!", data=_start_session(response, db, store, user, previous))


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    previous: Optional[str] = Depends(get_token),
):
    user = accounts.verify(db, payload.email, payload.password)
    return ApiResponse(message="Login successful!", data=_start_session(response, db, store, user, previous))


@router.post("/logout", response_model=ApiResponse[None])
def logout(
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    token: Optional[str] = Depends(get_token),
):
    store.revoke(db, token)
    response.delete_cookie(settings.session_cookie_name)
    return ApiResponse(message="Logged out successfully")


@router.get("/me", response_model=ApiResponse[Optional[UserWithProfileResponse]])
def me(user: Optional[User] = Depends(get_current_user)):
    # anonymous callers get data=null rather than an error
    if user is None:
        return ApiResponse(data=None)
    return ApiResponse(data=UserWithProfileResponse.model_validate(user))


@router.put("/me", response_model=ApiResponse[UserWithProfileResponse])
def update_me(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_auth),
):
    updated = accounts.update_profile(db, user, **payload.model_dump(exclude_unset=True))
    return ApiResponse(message="Profile updated!", data=UserWithProfileResponse.model_validate(updated))
