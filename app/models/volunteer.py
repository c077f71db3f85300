"""Volunteer model."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base


class Volunteer(Base):
    """Volunteer identified by membership card number."""

    __tablename__ = "volunteers"

    card_id = Column(Integer, primary_key=True, autoincrement=False)
    surname = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    fiscal_code = Column(String(32), nullable=False, default="")
    disabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    shifts = relationship(
        "Shift",
        back_populates="volunteer",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Volunteer(card_id={self.card_id}, surname={self.surname}, disabled={self.disabled})>"

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"

    def validate(self) -> None:
        """Validate volunteer data."""
        if self.card_id is None:
            raise ValueError("Card ID is required")
        if self.card_id < 0:
            raise ValueError("Card ID must be non-negative")
        if not self.surname:
            raise ValueError("Surname is required")
        if not self.name:
            raise ValueError("Name is required")
