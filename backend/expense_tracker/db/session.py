# expense_tracker/db/session.py
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .base import Base


class Database:
    """
    Owns the engine and session factory for one database URL.
    Created once per application and disposed on shutdown.
    """

    def __init__(self, url: str):
        connect_args = {}
        if url.startswith("sqlite"):
            # sqlite connections are handed between the threadpool workers
            connect_args["check_same_thread"] = False
        self.engine = create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, future=True)

    def create_all(self) -> None:
        # import models so they register on Base.metadata
        from . import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def get_db(self) -> Generator[Session, None, None]:
        """
        Yield a SQLAlchemy Session and close it afterwards.
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
