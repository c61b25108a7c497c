from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

class Base(DeclarativeBase):
    pass

def create_db_engine(database_url: str) -> Engine:
    """Create an engine for the configured database.

    SQLite connections are shared across the worker threads that run
    repository calls, so same-thread checking is disabled for them.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, pool_pre_ping=True)

    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False}
        )

    # In-memory databases live as long as their single connection
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db(engine: Engine) -> None:
    """Create missing tables (safe to call repeatedly)."""
    # Table classes register themselves on Base.metadata when imported
    import repositories.wind_repo  # noqa: F401
    Base.metadata.create_all(bind=engine)
