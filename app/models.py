from __future__ import annotations

from datetime import date, time
from typing import Optional

from sqlalchemy import CheckConstraint, Date, Float, Index, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class GuestEntry(Base):
    """One invited guest and, once scanned, their single check-in."""

    __tablename__ = "guest_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    entry_code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    confirmation: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    pending_expenses: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Written together by the check-in transition, never afterwards
    check_in_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    check_in_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    scanner: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "(check_in_date IS NULL AND check_in_time IS NULL AND scanner IS NULL)"
            " OR (check_in_date IS NOT NULL AND check_in_time IS NOT NULL AND scanner IS NOT NULL)",
            name="ck_guest_check_in_complete",
        ),
        Index("ix_guest_entries_full_name", "full_name"),
    )

    @property
    def checked_in(self) -> bool:
        return self.check_in_date is not None
