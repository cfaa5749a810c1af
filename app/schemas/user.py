from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr

from app.schemas.sitter import SitterResponse


class UserCreate(BaseModel):
    # presence is checked by the account service so a missing field
    # gets the same answer as a blank one
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    sitter_profile_id: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class UserWithProfileResponse(UserResponse):
    sitter_profile: Optional[SitterResponse] = None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserWithProfileResponse
