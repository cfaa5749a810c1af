# app/schemas/review.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class ReviewCreate(BaseModel):
    sitter_id: str
    # range is enforced by the rating service so the error uses the common envelope
    rating: int = Field(..., description="Rating 1-5")
    comment: Optional[str] = None

class ReviewResponse(BaseModel):
    id: str
    sitter_id: str
    owner_id: str
    owner_name: str
    rating: int
    comment: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
