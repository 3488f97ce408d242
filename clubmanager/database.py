from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager
import os
import uuid

from clubmanager.config import config

_connect_args = {"check_same_thread": False} if config.SQLALCHEMY_DATABASE_URI.startswith("sqlite") else {}

engine = create_engine(config.SQLALCHEMY_DATABASE_URI, connect_args=_connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


from sqlalchemy.orm import Session

@contextmanager
def transactional(db: Session):
    """
    A context manager for handling database transactions that is aware of the testing environment.

    In production, it commits or rolls back the transaction.
    In testing, it only flushes the session, leaving the final commit/rollback
    to the test runner's transactional fixture.
    """
    is_test_mode = os.getenv("TESTING", "false").lower() == "true"

    if not is_test_mode:
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
    else:
        # Flush only: data is readable inside the test, the fixture rolls it back
        try:
            yield db
            db.flush()
        except Exception:
            db.rollback()
            raise


def generate_id() -> str:
    """Primary keys are UUID4 strings."""
    return str(uuid.uuid4())
