from sqlalchemy import Column, DateTime, String

from app.db.base import Base, new_id, utcnow


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    subject = Column(String, nullable=True)
    message = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
