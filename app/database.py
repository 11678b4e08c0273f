# app/database.py
import logging
import threading
import time
from contextlib import contextmanager
from typing import Iterator

from fastapi import Depends, Request
from sqlalchemy import event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.core.config import Settings, get_settings
from app.core.errors import (
    RequestTimeoutError,
    StorageError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

# SQLSTATE raised by Postgres when statement_timeout cancels a query
PG_QUERY_CANCELED = "57014"


class ConnectionManager:
    """
    Owns the pooled engine used by every request and by the health monitor.

    The engine handle is swapped under a lock on reconnect, so sessions
    opened after a swap always see the new pool.

    Pool policy (from settings):
      - pool_size    = DB_MAX_IDLE_CONNS   (connections kept when idle)
      - max_overflow = DB_MAX_OPEN_CONNS - DB_MAX_IDLE_CONNS
      - pool_recycle = DB_CONN_MAX_LIFETIME (older connections are replaced)
      - pool_timeout = DB_POOL_TIMEOUT     (wait for a free connection)
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.url = settings.DATABASE_URL
        self._engine: Engine | None = None
        self._lock = threading.RLock()

    @property
    def engine(self) -> Engine | None:
        with self._lock:
            return self._engine

    # ---- internal helpers ----

    def _build_engine(self, url: str) -> Engine:
        s = self.settings
        parsed = make_url(url)
        connect_args = self._connect_args(url)
        in_memory = parsed.database in (None, "", ":memory:")

        if parsed.get_backend_name() == "sqlite" and in_memory:
            # A single shared in-memory connection; no pool sizing applies
            return create_engine(url, connect_args=connect_args, poolclass=StaticPool)

        return create_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            pool_size=s.DB_MAX_IDLE_CONNS,
            max_overflow=max(s.DB_MAX_OPEN_CONNS - s.DB_MAX_IDLE_CONNS, 0),
            pool_recycle=s.DB_CONN_MAX_LIFETIME,
            pool_timeout=s.DB_POOL_TIMEOUT,
            connect_args=connect_args,
        )

    def _connect_args(self, url: str) -> dict:
        timeout = self.settings.DB_PING_TIMEOUT
        if make_url(url).get_backend_name() == "sqlite":
            return {"check_same_thread": False, "timeout": timeout}

        seconds = max(int(timeout), 1)
        return {
            "connect_timeout": seconds,
            # Notice a server that stops answering on an already open connection
            "keepalives": 1,
            "keepalives_idle": seconds,
            "keepalives_interval": 1,
            "keepalives_count": 3,
        }

    def _probe(self, engine: Engine) -> None:
        with engine.connect() as conn:
            if engine.dialect.name == "postgresql":
                # Local to the probe's transaction; pooled connections keep no limit
                conn.execute(
                    text("SELECT set_config('statement_timeout', :ms, true)"),
                    {"ms": statement_timeout_ms(self.settings.DB_PING_TIMEOUT)},
                )
            conn.execute(text("SELECT 1"))

    def _open(self, url: str) -> Engine:
        """
        Create an engine and accept it only if the liveness probe succeeds.
        """
        try:
            engine = self._build_engine(url)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(
                f"failed to connect to database: {exc}"
            ) from exc

        try:
            self._probe(engine)
        except SQLAlchemyError as exc:
            self._dispose(engine)
            raise StorageUnavailableError(f"failed to ping database: {exc}") from exc

        return engine

    @staticmethod
    def _dispose(engine: Engine) -> None:
        # Closing a dead pool may itself fail; the old engine is dropped anyway
        try:
            engine.dispose()
        except Exception as exc:
            logger.warning("Ignoring error while closing database pool: %s", exc)

    # ---- public operations ----

    def connect(self, url: str | None = None) -> None:
        """
        Open the pool for `url` (defaults to DATABASE_URL) and make it active.

        Raises:
            StorageUnavailableError: if the database cannot be reached.
        """
        url = url or self.url
        engine = self._open(url)
        with self._lock:
            old, self._engine = self._engine, engine
            self.url = url
        if old is not None:
            self._dispose(old)

    def ping(self) -> None:
        """
        Raises:
            StorageUnavailableError: no engine, or the probe failed.
        """
        engine = self.engine
        if engine is None:
            raise StorageUnavailableError("database connection is not initialized")
        try:
            self._probe(engine)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"failed to ping database: {exc}") from exc

    def reconnect(self, url: str | None = None) -> None:
        """
        Drop the current pool and open a fresh one.

        On failure the manager keeps no engine, so later pings keep failing
        until a reconnect succeeds.
        """
        url = url or self.url
        with self._lock:
            old, self._engine = self._engine, None
        if old is not None:
            self._dispose(old)

        engine = self._open(url)
        with self._lock:
            self._engine = engine
            self.url = url

    def close(self) -> None:
        with self._lock:
            old, self._engine = self._engine, None
        if old is not None:
            self._dispose(old)

    @contextmanager
    def session(self, deadline: float | None = None) -> Iterator[Session]:
        """
        Yield a Session bound to the active engine.

        `deadline` is a time.monotonic() value. Each transaction the session
        begins checks it, and on Postgres the remaining time becomes the
        transaction's statement_timeout.
        """
        engine = self.engine
        if engine is None:
            raise StorageUnavailableError("database connection is not initialized")

        with Session(engine) as session:
            if deadline is not None:
                _bind_deadline(session, deadline)
            yield session


def statement_timeout_ms(seconds: float) -> str:
    """
    Postgres statement_timeout value for `seconds`.

    Never below 1 ms: a statement_timeout of 0 disables the limit.
    """
    return str(max(1, int(seconds * 1000)))


def _bind_deadline(session: Session, deadline: float) -> None:
    @event.listens_for(session, "after_begin")
    def _limit_statement_time(_session, _transaction, connection):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise RequestTimeoutError("request deadline exceeded")
        if connection.dialect.name == "postgresql":
            connection.execute(
                text("SELECT set_config('statement_timeout', :ms, true)"),
                {"ms": statement_timeout_ms(remaining)},
            )


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures into domain errors.

        with storage_errors("get products"):
            ...
    """
    try:
        yield
    except SQLAlchemyError as exc:
        if getattr(getattr(exc, "orig", None), "pgcode", None) == PG_QUERY_CANCELED:
            raise RequestTimeoutError(f"{action}: query cancelled") from exc
        raise StorageError(f"failed to {action}: {exc}") from exc


settings = get_settings()

manager = ConnectionManager(settings)


def create_db_and_tables(connections: ConnectionManager) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    engine = connections.engine
    if engine is None:
        raise StorageUnavailableError("database connection is not initialized")
    with storage_errors("create tables"):
        SQLModel.metadata.create_all(engine)


def get_connection_manager() -> ConnectionManager:
    return manager


def get_session(
    request: Request,
    connections: ConnectionManager = Depends(get_connection_manager),
):
    """
    FastAPI dependency that yields a SQLModel Session.

    The request deadline stamped by the timeout middleware is carried
    into the session so slow queries are cancelled, not just ignored.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    deadline = getattr(request.state, "deadline", None)
    with connections.session(deadline) as session:
        yield session
