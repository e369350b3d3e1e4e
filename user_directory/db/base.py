import logging
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()  # Base class for the ORM models (to be inherited by the models)


class Database:
    """Handle on the backing store. Opened at startup, closed at shutdown.

    The handle is created once per application and passed around explicitly
    (it lives on ``app.state``) instead of being a module-level engine.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[Engine] = None
        self.SessionFactory: Optional[sessionmaker] = None

    def open(self) -> None:
        """Create the engine and session factory, and create the tables if they don't exist."""
        if self.engine is not None:
            return
        kwargs = {}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # An in-memory database only exists inside its connection, so share one connection
            if ":memory:" in self.url or self.url in ("sqlite://", "sqlite:///"):
                kwargs["poolclass"] = StaticPool
        self.engine = create_engine(self.url, pool_pre_ping=True, **kwargs)
        self.SessionFactory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine)
        # Import the models so they are registered on Base.metadata
        from user_directory.models import user  # noqa: F401
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database opened (%s)", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self.SessionFactory = None
        logger.info("Database closed")

    def session(self) -> Session:
        if self.SessionFactory is None:
            raise RuntimeError("Database is not open")
        return self.SessionFactory()

    def ping(self) -> bool:
        with self.session() as session:
            session.execute(text("SELECT 1"))
        return True


# Dependency to get the database session (called in the API endpoints to get the database session)
def get_db(request: Request):
    """Creates and provides a session for each request."""
    database: Database = request.app.state.database
    session = database.session()
    try:
        yield session  # Return session to the caller
    finally:
        session.close()  # Always release the connection after the request finishes
