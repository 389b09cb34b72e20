import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


class Database:
    """
    Handle to the job portal database.

    Owns the SQLAlchemy engine and session factory. Constructed once at process
    start (see the lifespan in main.py), connected explicitly, and disposed on
    shutdown. Request handlers never touch it directly; they receive sessions
    through the get_db dependency.
    """

    def __init__(self, url: str, create_tables: bool = False):
        self.url = url
        self.create_tables = create_tables
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    def connect(self) -> None:
        if self.engine is not None:
            return

        if self.url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self.url or self.url in ("sqlite://", "sqlite+pysqlite://"):
                # One shared connection, otherwise every session sees an empty database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_pre_ping": True,  # Verify connections before using them
                "pool_size": 10,
                "max_overflow": 20,
            }

        self.engine = create_engine(self.url, **kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        if self.create_tables:
            from jobportal.models import job, user  # noqa: F401  register tables
            Base.metadata.create_all(bind=self.engine)

        logger.info("Database engine created for %s", self.engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self.SessionLocal = None
        logger.info("Database engine disposed")

    def session(self) -> Session:
        if self.SessionLocal is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self.SessionLocal()


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
