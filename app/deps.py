from __future__ import annotations

from typing import Iterator, Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from .checkin import Clock
from .config import Settings
from .database import Database
from .debounce import ScanDebouncer


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    yield from database.sessions()


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_debouncer(request: Request) -> ScanDebouncer:
    return request.app.state.debouncer


def require_token(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings_dep),
) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    token = authorization.split(" ", 1)[1].strip()
    if token != settings.api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return token
