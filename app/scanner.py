from __future__ import annotations

import logging
from datetime import datetime
from typing import NamedTuple, Optional

from sqlalchemy.orm import Session

from .checkin import CheckInResult, Clock, check_in
from .debounce import ScanDebouncer
from .entry_codes import normalize_entry_code


logger = logging.getLogger(__name__)


class ScanOutcome(NamedTuple):
    entry_code: str
    result: Optional[CheckInResult]  # None when the read was debounced

    @property
    def ignored(self) -> bool:
        return self.result is None


def process_scan(
    db: Session,
    payload: str,
    scanner: str,
    clock: Clock = datetime.now,
    debouncer: Optional[ScanDebouncer] = None,
    session_id: Optional[str] = None,
) -> ScanOutcome:
    """Turn one decoded QR read into a check-in.

    Raises ``InvalidPayloadError`` for empty or too-short payloads; those never
    reach the debouncer or the database. No UUID-shape check is made here, any
    normalized code is looked up as-is. Reads are debounced per ``session_id``,
    or per scanner label when no session is given.
    """
    entry_code = normalize_entry_code(payload)
    session_id = session_id or scanner
    if debouncer is not None and not debouncer.accept(session_id):
        logger.debug("scan ignored inside debounce window: session=%s code=%s", session_id, entry_code)
        return ScanOutcome(entry_code, None)
    return ScanOutcome(entry_code, check_in(db, entry_code, scanner, clock))
