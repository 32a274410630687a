# backend/database.py
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


# Opaque 32-char hex identifiers for every record
def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_url(url: str) -> str:
    # SQLAlchemy requires the postgresql:// scheme
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


class Store:
    """Owns the engine and session factory for one database.

    Constructed once per process and handed to the app; ``connect`` must run
    before traffic is accepted and ``close`` on shutdown.
    """

    def __init__(self, url: str):
        self.url = _normalize_url(url)

        engine_kwargs = {}
        if self.url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory databases live inside a single connection
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine = create_engine(self.url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.connected = False

    def connect(self):
        # Register every table on Base.metadata before creating them
        import models.users  # noqa: F401
        import models.parcel  # noqa: F401
        import models.rider  # noqa: F401
        import models.tracking  # noqa: F401
        import models.payment  # noqa: F401
        import models.log  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        self.connected = True
        logger.info("Connected to store at %s", self.engine.url.render_as_string(hide_password=True))

    def close(self):
        self.engine.dispose()
        self.connected = False
        logger.info("Store connection closed")

    def session(self) -> Session:
        return self.SessionLocal()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.store.session()
    try:
        yield db
    finally:
        db.close()
