from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
import logging

from .config import DATABASE_URL
from .exceptions import PersistenceError

logger = logging.getLogger(__name__)

# SQLite needs cross-thread access for the test client
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        logger.debug("get_db: rolling back session after request error")
        db.rollback()
        raise
    finally:
        db.close()

def commit(db, action: str):
    """Commit the unit of work or roll it back and raise PersistenceError."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise PersistenceError(f"Failed to {action}") from e
