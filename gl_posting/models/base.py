"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db(), and every posting runs inside unit_of_work().
"""

from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

from gl_posting.config import get_settings
from gl_posting.exceptions import ConflictError

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True tests connections before using them, which
# handles a database restart or a stale connection.
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# --- Session Factory ---
# autocommit=False: the caller decides when a posting becomes visible.
# autoflush=False: SQL is only sent on an explicit flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed even if
    the endpoint raises, so connections never leak from the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session):
    """
    Run a block of writes as one all-or-nothing unit.

    Commits when the block finishes, rolls back on any exception.
    The voucher counter lives in the same transaction, so an abort
    also gives back the voucher number it minted. Unique-key
    violations surfacing at commit (duplicate voucher number,
    duplicate revaluation date) become ConflictError.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(
            f"Write conflicts with an existing record: {e.orig}"
        ) from e
    except Exception:
        db.rollback()
        raise
