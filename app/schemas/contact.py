from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: Optional[str] = None
    message: str = Field(..., min_length=1)


class ContactResponse(ContactCreate):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True
