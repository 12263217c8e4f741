"""Store connection wiring for the play service.

Builds the SQLAlchemy engine and session factory the play store runs on, checks
connectivity at startup, and hands each request its own session through the
`get_db` dependency.

The engine and session factory are built once by the application factory from
the explicit `Settings` object and stored on `app.state`; nothing here reads the
environment.
"""

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .settings import Settings


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the play store.

    Pooled connections are pinged before use, since the store may drop idle
    connections between requests. SQLite URLs get
    `check_same_thread=False` because FastAPI may open and close a session on
    different threadpool workers; an in-memory SQLite database additionally
    shares one connection so every session sees the same tables.

    Args:
        settings: Service settings carrying `database_url`.

    Returns:
        sqlalchemy.engine.Engine: Engine bound to `settings.database_url`.
    """
    url = make_url(settings.database_url)
    kwargs = {"pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    return create_engine(url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory requests draw their sessions from.

    Objects stay readable after commit so a stored play can be returned as-is.

    Args:
        engine: Engine bound to the play store.

    Returns:
        sqlalchemy.orm.sessionmaker: Factory producing sessions on `engine`.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def check_store(engine: Engine) -> None:
    """Round-trip a trivial query so startup fails if the store is unreachable.

    Raises:
        sqlalchemy.exc.OperationalError: If the database cannot be reached.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_db(request: Request):
    """Open a session for one play request and close it when the request ends.

    `get_play_store` wraps the session in a `PlayTable`, which commits or rolls
    back each store call itself; this dependency only owns the session lifetime.

    Args:
        request: Incoming request; its app carries the session factory.

    Yields:
        sqlalchemy.orm.Session: Session bound to the play store.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
