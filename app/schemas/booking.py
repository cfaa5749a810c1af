from pydantic import BaseModel
from datetime import date, datetime
from typing import Literal, Optional

# --- CREATE ---
class BookingCreate(BaseModel):
    sitter_id: str
    cat_name: str
    cat_breed: Optional[str] = None
    start_date: date
    end_date: date
    special_instructions: Optional[str] = None


# --- UPDATE (Sitter) ---
class BookingStatusUpdate(BaseModel):
    status: Literal["pending", "confirmed", "completed", "cancelled"]


# --- RESPONSE ---
class BookingResponse(BaseModel):
    id: str
    owner_id: str
    sitter_id: str
    sitter_name: str
    cat_name: str
    cat_breed: Optional[str]
    start_date: date
    end_date: date
    total_days: int
    total_cost: float
    owner_name: str
    owner_email: str
    owner_phone: Optional[str]
    special_instructions: Optional[str]
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
