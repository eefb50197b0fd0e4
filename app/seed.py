from __future__ import annotations

import uuid

from sqlalchemy import select

from .config import get_settings
from .database import Database
from .models import GuestEntry


DEMO_GUESTS = [
    (1, "Juan Pérez", "Confirmado"),
    (2, "María García", "ok"),
    (3, "Pedro Martínez", "Pendiente"),
]


def upsert_demo_guests(database: Database) -> int:
    """Insert the demo guests that are missing by name; returns how many were added."""
    database.create_all()
    added = 0
    db = database.session()
    try:
        for number, name, confirmation in DEMO_GUESTS:
            exists = db.execute(select(GuestEntry.id).where(GuestEntry.full_name == name)).first()
            if exists:
                continue
            db.add(
                GuestEntry(
                    number=number,
                    entry_code=str(uuid.uuid4()),
                    full_name=name,
                    confirmation=confirmation,
                )
            )
            added += 1
        db.commit()
    finally:
        db.close()
    return added


def main() -> None:
    database = Database(get_settings().database_url)
    added = upsert_demo_guests(database)
    print(f"Seed complete ({added} guests added).")


if __name__ == "__main__":
    main()
