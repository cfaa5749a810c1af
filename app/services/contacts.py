"""Contact-form inbox."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.db.models.contact import ContactMessage

logger = logging.getLogger(__name__)


def submit(db: Session, name: str, email: str, message: str, subject: Optional[str] = None) -> ContactMessage:
    contact = ContactMessage(name=name, email=email, subject=subject, message=message)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info("Contact message %s received", contact.id)
    return contact


def list_messages(db: Session) -> List[ContactMessage]:
    return db.query(ContactMessage).order_by(ContactMessage.created_at.desc()).all()
