from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from fastapi import Request

from config.settings import Settings

Base = declarative_base()


def make_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    SQLite gets WAL mode and foreign keys; an in-memory SQLite URL shares a
    single connection so every session sees the same database.
    """
    url = settings.database_url
    kwargs = {"echo": settings.database_echo, "pool_pre_ping": True}

    if settings.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    if settings.is_sqlite:
        in_memory = ":memory:" in url or url == "sqlite://"

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def get_db(request: Request):
    """Dependency for FastAPI routes"""
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
