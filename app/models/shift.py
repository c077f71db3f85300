"""Shift model for volunteer bookings."""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from dataclasses import dataclass
from datetime import datetime, date
from typing import Optional
from app.database import Base


@dataclass(frozen=True)
class ShiftSlot:
    """
    Structural value of a shift.

    Two slots are the same shift when every field matches; the storage row id
    is not part of the value. In the fixed-hour task catalog the hours are
    implied by the task and stay ``None``.
    """

    shift_date: date
    task: int
    card_id: int
    entrance_hour: Optional[str] = None
    exit_hour: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "shift_date": self.shift_date.isoformat(),
            "task": self.task,
            "entrance_hour": self.entrance_hour,
            "exit_hour": self.exit_hour,
            "card_id": self.card_id,
        }


class Shift(Base):
    """Shift model representing one booked unit of work."""

    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    shift_date = Column(Date, nullable=False, index=True)
    task = Column(Integer, nullable=False)
    # Empty when the task implies its own hours
    entrance_hour = Column(String(5), nullable=False, default="")
    exit_hour = Column(String(5), nullable=False, default="")
    card_id = Column(Integer, ForeignKey("volunteers.card_id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # One booking per volunteer, date, task and hour
    __table_args__ = (
        UniqueConstraint(
            'shift_date', 'task', 'entrance_hour', 'exit_hour', 'card_id',
            name='uq_shift_slot'
        ),
    )

    # Relationships
    volunteer = relationship("Volunteer", back_populates="shifts")

    def __repr__(self) -> str:
        return (
            f"<Shift(id={self.id}, date={self.shift_date}, task={self.task}, "
            f"hours={self.entrance_hour}-{self.exit_hour}, card_id={self.card_id})>"
        )

    @classmethod
    def from_slot(cls, slot: ShiftSlot) -> "Shift":
        return cls(
            shift_date=slot.shift_date,
            task=slot.task,
            entrance_hour=slot.entrance_hour or "",
            exit_hour=slot.exit_hour or "",
            card_id=slot.card_id,
        )

    def to_slot(self) -> ShiftSlot:
        return ShiftSlot(
            shift_date=self.shift_date,
            task=self.task,
            card_id=self.card_id,
            entrance_hour=self.entrance_hour or None,
            exit_hour=self.exit_hour or None,
        )

    def validate(self) -> None:
        """Validate shift data."""
        if not self.shift_date:
            raise ValueError("Shift date is required")
        if not isinstance(self.shift_date, date):
            raise ValueError("Shift date must be a date object")
        if self.task is None:
            raise ValueError("Task is required")
        if self.card_id is None:
            raise ValueError("Card ID is required")
        if bool(self.entrance_hour) != bool(self.exit_hour):
            raise ValueError("Entrance and exit hours must be set together")
        if self.entrance_hour and self.entrance_hour >= self.exit_hour:
            raise ValueError("Entrance hour must precede exit hour")
