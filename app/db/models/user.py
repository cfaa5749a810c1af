# app/db/models/user.py
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from app.db.base import Base, new_id, utcnow

ROLE_OWNER = "owner"
ROLE_SITTER = "sitter"
ROLES = (ROLE_OWNER, ROLE_SITTER)


class User(Base):
    """A signed-up account, either a cat owner or a sitter."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)  # always lowercase
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    role = Column(String, nullable=False)

    phone = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    # one-to-one; the link lives only on sitter_profiles.user_id
    sitter_profile = relationship(
        "SitterProfile",
        back_populates="user",
        uselist=False,
        lazy="selectin",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def sitter_profile_id(self):
        return self.sitter_profile.id if self.sitter_profile else None
