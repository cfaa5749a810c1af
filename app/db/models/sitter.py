# app/db/models/sitter.py
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, new_id, utcnow

BOROUGHS = ("Manhattan", "Brooklyn", "Queens", "Bronx", "Staten Island")


def format_rate_label(rate: float) -> str:
    # fixed notation, cents kept, trailing zeros dropped: 40.0 -> $40/day, 62.5 -> $62.5/day
    amount = f"{rate:.2f}".rstrip("0").rstrip(".")
    return f"${amount}/day"


class SitterProfile(Base):
    """
    Public, searchable listing for a sitter account.
    rating_average / rating_count are derived from the reviews table and
    are only written by the rating aggregator.
    """
    __tablename__ = "sitter_profiles"
    __table_args__ = (
        CheckConstraint("daily_rate > 0"),
        CheckConstraint("rating_count >= 0"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    # display + contact
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    borough = Column(String, nullable=False, default="Manhattan")
    neighborhood = Column(String, nullable=False, default="")

    # Pricing
    daily_rate = Column(Float, nullable=False)
    rate_display = Column(String, nullable=False)

    rating_average = Column(Float, nullable=False, default=5.0)
    rating_count = Column(Integer, nullable=False, default=0)

    experience = Column(String, nullable=False, default="")
    bio = Column(String, nullable=False, default="")
    verified = Column(Boolean, nullable=False, default=False)
    avatar_url = Column(String, nullable=True)
    available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="sitter_profile")
    specialty_rows = relationship(
        "SitterSpecialty",
        back_populates="sitter",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SitterSpecialty.position",
    )

    @property
    def specialties(self) -> list[str]:
        return [row.name for row in self.specialty_rows]

    def set_specialties(self, names) -> None:
        # set semantics: blanks and case-insensitive duplicates dropped, first spelling wins
        seen = set()
        rows = []
        for name in names:
            cleaned = (name or "").strip()
            if not cleaned or cleaned.lower() in seen:
                continue
            seen.add(cleaned.lower())
            rows.append(SitterSpecialty(name=cleaned, position=len(rows)))
        self.specialty_rows = rows

    def set_daily_rate(self, rate: float) -> None:
        self.daily_rate = rate
        self.rate_display = format_rate_label(rate)


class SitterSpecialty(Base):
    __tablename__ = "sitter_specialties"

    id = Column(Integer, primary_key=True, index=True)
    sitter_id = Column(String(36), ForeignKey("sitter_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    sitter = relationship("SitterProfile", back_populates="specialty_rows")
