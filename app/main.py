from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .checkin import Clock, make_clock
from .config import Settings, get_settings
from .database import Database
from .debounce import ScanDebouncer
from .observability import RequestTimingLoggingMiddleware, add_exception_handlers, configure_logging
from .routers import health
from .routers import checkin as checkin_router
from .routers import scanner as scanner_router
from .routers import guests as guests_router
from .routers import exports as exports_router
from .routers import invitations as invitations_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    database.create_all()
    logger.info("Event check-in API started (environment=%s)", app.state.settings.environment)
    yield
    database.dispose()


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title="Event Check-in API", version="0.1.0", lifespan=lifespan)
    application.state.settings = settings
    application.state.database = Database(settings.database_url)
    application.state.clock = clock or make_clock(settings.timezone)
    application.state.debouncer = ScanDebouncer(settings.scanner_debounce_seconds)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestTimingLoggingMiddleware)

    add_exception_handlers(application)

    # Routers
    application.include_router(health.router)
    application.include_router(checkin_router.router)
    application.include_router(scanner_router.router)
    application.include_router(invitations_router.router)
    application.include_router(guests_router.router)
    application.include_router(exports_router.router)

    return application


app = create_app()
