from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import require_auth, require_role
from app.db.base import get_db
from app.db.models.user import ROLE_SITTER, User
from app.schemas.booking import BookingCreate, BookingResponse, BookingStatusUpdate
from app.schemas.common import ApiResponse
from app.services import bookings

router = APIRouter(prefix="/api/bookings", tags=["bookings"])

# Signed-in user books a sitter

@router.post("", response_model=ApiResponse[BookingResponse])
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
):
    new_booking = bookings.create(
        db,
        owner=current_user,
        sitter_id=booking.sitter_id,
        cat_name=booking.cat_name,
        cat_breed=booking.cat_breed,
        start_date=booking.start_date,
        end_date=booking.end_date,
        special_instructions=booking.special_instructions,
    )
    return ApiResponse(message="Booking created!", data=BookingResponse.model_validate(new_booking))


# Owner sees the bookings they made, sitter sees the bookings made with them

@router.get("/my", response_model=ApiResponse[list[BookingResponse]])
def my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
):
    return ApiResponse(data=[BookingResponse.model_validate(b) for b in bookings.list_mine(db, current_user)])


# Sitter confirms / completes / cancels

@router.put("/{booking_id}/status", response_model=ApiResponse[BookingResponse])
def update_booking_status(
    booking_id: str,
    update: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_SITTER)),
):
    booking = bookings.set_status(db, booking_id, update.status, current_user)
    return ApiResponse(message="Booking updated!", data=BookingResponse.model_validate(booking))


# Unfiltered view of every booking

@router.get("", response_model=ApiResponse[list[BookingResponse]])
def all_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
):
    return ApiResponse(data=[BookingResponse.model_validate(b) for b in bookings.list_all(db)])
