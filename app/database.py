from __future__ import annotations

from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker


Base = declarative_base()


class Database:
    """Engine and session factory for one application instance.

    Built once by ``create_app`` and shared through ``app.state``; handlers get
    sessions from it via the ``get_db`` dependency.
    """

    def __init__(self, url: str) -> None:
        engine_kwargs = {"future": True, "pool_pre_ping": True}
        connect_args = {}
        if url.startswith("sqlite"):
            # Needed for SQLite when used with threads (FastAPI default)
            connect_args = {"check_same_thread": False}
        self.url = url
        self.engine = create_engine(url, connect_args=connect_args, **engine_kwargs)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, future=True)

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def sessions(self) -> Iterator[Session]:
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
