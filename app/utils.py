from __future__ import annotations

from typing import Iterable, List, Optional

from .models import GuestEntry


CONFIRMED_ANSWERS = {"ok", "confirmado", "si", "sí"}

STATUS_ATTENDED = "asistio"
STATUS_CONFIRMED = "confirmado"
STATUS_PENDING = "pendiente"
GUEST_STATUSES = (STATUS_ATTENDED, STATUS_CONFIRMED, STATUS_PENDING)


def is_confirmed(confirmation: Optional[str]) -> bool:
    if confirmation is None:
        return False
    return str(confirmation).strip().lower() in CONFIRMED_ANSWERS


def guest_status(guest: GuestEntry) -> str:
    if guest.check_in_date and guest.check_in_time:
        return STATUS_ATTENDED
    if is_confirmed(guest.confirmation):
        return STATUS_CONFIRMED
    return STATUS_PENDING


def filter_guests(guests: Iterable[GuestEntry], search: Optional[str]) -> List[GuestEntry]:
    # Blank search keeps everything; otherwise match name or code, case-insensitive
    items = list(guests)
    if not search or not search.strip():
        return items
    needle = search.lower()
    return [g for g in items if needle in g.full_name.lower() or needle in g.entry_code.lower()]
