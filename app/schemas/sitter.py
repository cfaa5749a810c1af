# app/schemas/sitter.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from app.schemas.review import ReviewResponse

Borough = Literal["Manhattan", "Brooklyn", "Queens", "Bronx", "Staten Island"]


class SitterSearchCriteria(BaseModel):
    """
    Filters for the sitter directory. Every field is optional; the set
    ones are ANDed together. `search` matches any of name, neighborhood,
    bio or borough (case-insensitive substring). `borough` and `specialty`
    accept "all" as "no filter".
    """
    borough: Optional[str] = None
    min_rate: Optional[float] = Field(default=None, ge=0)
    max_rate: Optional[float] = Field(default=None, ge=0)
    specialty: Optional[str] = None
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)
    search: Optional[str] = None
    available: Optional[bool] = None


class SitterProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    borough: Optional[Borough] = None
    neighborhood: Optional[str] = None
    daily_rate: Optional[float] = Field(default=None, gt=0)
    experience: Optional[str] = None
    specialties: Optional[List[str]] = None
    bio: Optional[str] = None
    verified: Optional[bool] = None
    avatar_url: Optional[str] = None
    available: Optional[bool] = None


class SitterResponse(BaseModel):
    id: str
    user_id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    borough: str
    neighborhood: str
    daily_rate: float
    rate_display: str
    rating_average: float
    rating_count: int
    experience: str
    specialties: List[str]
    bio: str
    verified: bool
    avatar_url: Optional[str]
    available: bool
    created_at: datetime

    class Config:
        from_attributes = True


class SitterDetailResponse(SitterResponse):
    reviews: List[ReviewResponse] = []
