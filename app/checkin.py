from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import GuestEntry


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

STATUS_OK = "ok"
STATUS_ALREADY_REGISTERED = "ya_registrado"
STATUS_ERROR = "error"
INVALID_CODE = "codigo_invalido"


class CheckInUpdateError(RuntimeError):
    """The database rejected the write that records a first check-in."""


@dataclass(frozen=True)
class CheckInResult:
    status: str
    full_name: Optional[str] = None
    check_in_date: Optional[str] = None
    check_in_time: Optional[str] = None
    scanner: Optional[str] = None

    @property
    def is_invalid(self) -> bool:
        return self.status == STATUS_ERROR


def make_clock(tz_name: Optional[str] = None) -> Clock:
    if not tz_name:
        return datetime.now
    zone = ZoneInfo(tz_name)
    return lambda: datetime.now(zone)


def find_guest(db: Session, entry_code: str) -> Optional[GuestEntry]:
    return db.execute(select(GuestEntry).where(GuestEntry.entry_code == entry_code)).scalar_one_or_none()


def _reload_guest(db: Session, entry_code: str) -> GuestEntry:
    stmt = select(GuestEntry).where(GuestEntry.entry_code == entry_code).execution_options(populate_existing=True)
    return db.execute(stmt).scalar_one()


def _already_registered(guest: GuestEntry) -> CheckInResult:
    return CheckInResult(
        status=STATUS_ALREADY_REGISTERED,
        full_name=guest.full_name,
        check_in_date=guest.check_in_date.isoformat() if guest.check_in_date else None,
        check_in_time=guest.check_in_time.strftime("%H:%M:%S") if guest.check_in_time else None,
        scanner=guest.scanner,
    )


def check_in(db: Session, entry_code: str, scanner: str, clock: Clock = datetime.now) -> CheckInResult:
    """Record the first check-in for ``entry_code`` or report the existing one.

    The write is a single conditional UPDATE guarded by ``check_in_date IS NULL``,
    so when two scanners race on the same code exactly one of them records the
    check-in and the other receives the winner's values as ``ya_registrado``.
    """
    guest = find_guest(db, entry_code)
    if guest is None:
        logger.info("check-in rejected: unknown code=%s scanner=%s", entry_code, scanner)
        return CheckInResult(status=STATUS_ERROR)

    if guest.checked_in:
        logger.warning(
            "duplicate check-in: code=%s first_at=%s %s by=%s scanner=%s",
            entry_code,
            guest.check_in_date,
            guest.check_in_time,
            guest.scanner,
            scanner,
        )
        return _already_registered(guest)

    now = clock().replace(microsecond=0)
    full_name = guest.full_name
    stmt = (
        update(GuestEntry)
        .where(GuestEntry.entry_code == entry_code, GuestEntry.check_in_date.is_(None))
        .values(check_in_date=now.date(), check_in_time=now.time(), scanner=scanner)
        .execution_options(synchronize_session=False)
    )
    try:
        updated = db.execute(stmt).rowcount
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("check-in update failed: code=%s scanner=%s error=%s", entry_code, scanner, exc)
        raise CheckInUpdateError("Failed to update record") from exc

    if updated != 1:
        # Another scanner recorded this guest between our read and write
        guest = _reload_guest(db, entry_code)
        logger.warning("check-in lost race: code=%s scanner=%s winner=%s", entry_code, scanner, guest.scanner)
        return _already_registered(guest)

    logger.info("check-in ok: code=%s name=%s scanner=%s", entry_code, full_name, scanner)
    return CheckInResult(
        status=STATUS_OK,
        full_name=full_name,
        check_in_date=now.date().isoformat(),
        check_in_time=now.strftime("%H:%M:%S"),
        scanner=scanner,
    )
