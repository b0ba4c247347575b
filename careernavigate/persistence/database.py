"""Engine and session lifecycle for the key-value store.

init_database() opens the store once at startup and makes sure the
``kv_entries`` table exists; get_session() wraps one unit of work in a
transaction; close_database() releases the connection pool at shutdown.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from careernavigate.logging import get_logger

from .exceptions import DatabaseConnectionError
from .schema import create_schema

# Seconds SQLite waits on a locked database before failing a write
SQLITE_BUSY_TIMEOUT = 30

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None

logger = get_logger(__name__, component="database")


def init_database(database_url: str) -> None:
    """Open the store at ``database_url`` and create the key-value table.

    File-backed SQLite URLs get their parent directory created. Calling this
    again replaces the previous engine.

    Raises:
        DatabaseConnectionError: If the URL is unusable or the store cannot be opened
    """
    global _engine, _session_factory

    if not database_url or not isinstance(database_url, str):
        raise DatabaseConnectionError("Database URL must be a non-empty string")

    try:
        url = make_url(database_url)
    except ArgumentError as e:
        raise DatabaseConnectionError(f"Invalid database URL: {e}") from e

    safe_url = url.render_as_string(hide_password=True)
    logger.info(
        "Opening key-value store",
        extra={"event": "database.initializing", "database_url": safe_url},
    )

    is_sqlite = url.get_backend_name() == "sqlite"

    close_database()
    try:
        if is_sqlite and url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        engine = create_engine(
            url,
            pool_pre_ping=True,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}
            if is_sqlite
            else {},
        )
        if is_sqlite:
            event.listen(engine, "connect", _set_sqlite_pragmas)

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        create_schema(engine)
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            f"Failed to open key-value store: {e}",
            extra={"event": "database.init_failed", "database_url": safe_url},
        )
        raise DatabaseConnectionError(f"Failed to initialize database: {e}") from e

    _engine = engine
    _session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    logger.info(
        "Key-value store ready",
        extra={"event": "database.initialised", "database_url": safe_url},
    )


def _set_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Session that commits on clean exit and rolls back on any exception.

    Example:
        >>> with get_session() as session:
        ...     record = ResumeRepository(session).get("abc123")
    """
    if _session_factory is None:
        raise DatabaseConnectionError(
            "Database not initialized. Call init_database() before using get_session()"
        )

    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.warning(
            f"Database session rolled back: {e}",
            extra={"event": "database.session.rolled_back", "error_type": type(e).__name__},
        )
        raise
    finally:
        session.close()


def close_database() -> None:
    """Dispose of the engine, if one is open."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        logger.info("Key-value store closed", extra={"event": "database.closed"})
    _engine = None
    _session_factory = None
