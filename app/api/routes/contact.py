from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import require_auth
from app.db.base import get_db
from app.db.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.contact import ContactCreate, ContactResponse
from app.services import contacts

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact", response_model=ApiResponse[ContactResponse])
def send_contact_message(payload: ContactCreate, db: Session = Depends(get_db)):
    message = contacts.submit(
        db,
        name=payload.name,
        email=payload.email,
        subject=payload.subject,
        message=payload.message,
    )
    return ApiResponse(message="Message sent successfully!", data=ContactResponse.model_validate(message))


@router.get("/contacts", response_model=ApiResponse[List[ContactResponse]])
def list_contact_messages(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
):
    return ApiResponse(data=[ContactResponse.model_validate(m) for m in contacts.list_messages(db)])
