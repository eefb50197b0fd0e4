from __future__ import annotations

import sys
from datetime import date, datetime, time
from pathlib import Path

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import checkin as checkin_module
from app.checkin import CheckInUpdateError, check_in, make_clock
from app.database import Database
from app.models import GuestEntry


CODE = "123e4567-e89b-12d3-a456-426614174000"
FIRST_SCAN = datetime(2026, 3, 14, 19, 30, 5, 123456)
LATER_SCAN = datetime(2026, 3, 14, 21, 2, 44)


@pytest.fixture()
def database(tmp_path: Path) -> Database:
    database = Database(f"sqlite:///{tmp_path / 'checkin.db'}")
    database.create_all()
    db = database.session()
    try:
        db.add(GuestEntry(number=1, entry_code=CODE, full_name="Juan Pérez", confirmation="ok"))
        db.commit()
    finally:
        db.close()
    yield database
    database.dispose()


def _stored(database: Database) -> GuestEntry:
    db = database.session()
    try:
        guest = db.execute(select(GuestEntry).where(GuestEntry.entry_code == CODE)).scalar_one()
        db.expunge(guest)
        return guest
    finally:
        db.close()


def test_unknown_code_is_invalid(database: Database) -> None:
    db = database.session()
    try:
        result = check_in(db, "00000000-0000-0000-0000-000000000000", "gate1", lambda: FIRST_SCAN)
    finally:
        db.close()
    assert result.status == "error"
    assert result.is_invalid
    assert _stored(database).check_in_date is None


def test_first_check_in_persists(database: Database) -> None:
    db = database.session()
    try:
        result = check_in(db, CODE, "gate1", lambda: FIRST_SCAN)
    finally:
        db.close()

    assert result.status == "ok"
    assert result.full_name == "Juan Pérez"
    assert result.check_in_date == "2026-03-14"
    assert result.check_in_time == "19:30:05"

    stored = _stored(database)
    assert stored.check_in_date == date(2026, 3, 14)
    assert stored.check_in_time == time(19, 30, 5)
    assert stored.scanner == "gate1"


def test_repeat_check_in_keeps_first_record(database: Database) -> None:
    db = database.session()
    try:
        check_in(db, CODE, "gate1", lambda: FIRST_SCAN)
        repeat = check_in(db, CODE, "gate2", lambda: LATER_SCAN)
    finally:
        db.close()

    assert repeat.status == "ya_registrado"
    assert repeat.full_name == "Juan Pérez"
    assert repeat.check_in_date == "2026-03-14"
    assert repeat.check_in_time == "19:30:05"
    assert repeat.scanner == "gate1"

    stored = _stored(database)
    assert stored.check_in_time == time(19, 30, 5)
    assert stored.scanner == "gate1"


def test_losing_a_race_reports_the_winner(database: Database, monkeypatch: pytest.MonkeyPatch) -> None:
    # Winner records first; the loser still holds a pending view of the row
    db = database.session()
    try:
        check_in(db, CODE, "gate1", lambda: FIRST_SCAN)
    finally:
        db.close()

    stale = GuestEntry(entry_code=CODE, full_name="Juan Pérez")
    monkeypatch.setattr(checkin_module, "find_guest", lambda db, code: stale)

    db = database.session()
    try:
        result = check_in(db, CODE, "gate2", lambda: LATER_SCAN)
    finally:
        db.close()

    assert result.status == "ya_registrado"
    assert result.check_in_time == "19:30:05"
    assert result.scanner == "gate1"
    assert _stored(database).scanner == "gate1"


def test_update_failure_raises_and_leaves_row_pending(database: Database, monkeypatch: pytest.MonkeyPatch) -> None:
    db = database.session()

    def failing_commit() -> None:
        raise OperationalError("UPDATE guest_entries", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", failing_commit)
    try:
        with pytest.raises(CheckInUpdateError):
            check_in(db, CODE, "gate1", lambda: FIRST_SCAN)
    finally:
        db.close()

    stored = _stored(database)
    assert stored.check_in_date is None
    assert stored.check_in_time is None
    assert stored.scanner is None


def test_make_clock_with_timezone() -> None:
    clock = make_clock("UTC")
    assert clock().tzinfo is not None
    assert make_clock(None)().tzinfo is None
