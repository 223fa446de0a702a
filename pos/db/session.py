from contextlib import contextmanager
from pathlib import Path
import threading

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..config import load_env


def _ensure_sqlite_dir(url: str) -> None:
    # Ensure sqlite file parent directory exists to avoid 'unable to open database file'
    if url.startswith("sqlite:///") and ":memory:" not in url:
        db_path = url.split("sqlite:///")[-1]
        Path(db_path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def _configure_sqlite(engine: Engine) -> None:
    """Let SQLAlchemy own transaction boundaries on pysqlite.

    Every transaction starts with BEGIN IMMEDIATE, so concurrent writers are
    serialized for the whole unit of work and SAVEPOINT behaves.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, **kwargs) -> Engine:
    _ensure_sqlite_dir(url)
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False, "timeout": 30})
    engine = create_engine(url, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


def create_session_factory(engine: Engine):
    """Return a ``get_session``-style context manager bound to ``engine``."""

    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)

    @contextmanager
    def session_scope():
        session = factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return session_scope


_default_factory = None
_default_lock = threading.Lock()


def _default_session_factory():
    global _default_factory
    with _default_lock:
        if _default_factory is None:
            _default_factory = create_session_factory(build_engine(load_env().database_url))
    return _default_factory


@contextmanager
def get_session():
    """Unit of work on the configured database; the engine is built on first use."""
    with _default_session_factory()() as session:
        yield session
