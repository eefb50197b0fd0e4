from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..checkin import Clock
from ..config import Settings
from ..debounce import ScanDebouncer
from ..deps import get_clock, get_db, get_debouncer, get_settings_dep
from ..entry_codes import InvalidPayloadError
from ..scanner import process_scan
from ..schemas import ErrorResponse, ScannerSession, ScanOut, ScanRequest
from .checkin import result_payload


router = APIRouter(prefix="/api/scanner", tags=["scanner"])


@router.post(
    "/scan",
    response_model=ScanOut,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
def scanner_scan(
    payload: ScanRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    debouncer: ScanDebouncer = Depends(get_debouncer),
    settings: Settings = Depends(get_settings_dep),
) -> dict:
    scanner = payload.escaner or settings.default_scanner_label
    try:
        outcome = process_scan(
            db,
            payload.payload or "",
            scanner,
            clock,
            debouncer=debouncer,
            session_id=payload.debounce_key(settings.default_scanner_label),
        )
    except InvalidPayloadError:
        raise HTTPException(status_code=400, detail="Invalid QR payload")

    if outcome.ignored:
        return {"status": "ignorado"}
    return {"codigo_entrada": outcome.entry_code, **result_payload(outcome.result)}


@router.post("/reset")
def scanner_reset(
    payload: ScannerSession,
    debouncer: ScanDebouncer = Depends(get_debouncer),
    settings: Settings = Depends(get_settings_dep),
) -> dict:
    """Let the next read from this session through right away ("scan another")."""
    debouncer.reset(payload.debounce_key(settings.default_scanner_label))
    return {"status": "ok"}
