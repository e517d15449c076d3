"""Atomic multi-row transactions with transparent optimistic-concurrency retry.

Versioned rows (``version_id_col``) make SQLAlchemy emit
``UPDATE ... WHERE version = <read version>``; a concurrent writer turns that
into ``StaleDataError`` at commit. Racing inserts of the same key surface as a
unique-constraint ``IntegrityError``. Both roll the whole unit back and re-run
the body against fresh reads, so a body must only read and stage ORM changes.
Any other ``IntegrityError`` (NOT NULL, foreign key, check) is a bug in the
body and is raised as is.
"""
import logging
import time
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from eventroster.config import settings
from eventroster.errors import Aborted

logger = logging.getLogger(__name__)

T = TypeVar("T")

# SQLSTATE unique_violation
PG_UNIQUE_VIOLATION = "23505"


def is_write_conflict(exc: Exception) -> bool:
    """True for errors a retry can resolve: stale versions and key collisions."""
    if isinstance(exc, StaleDataError):
        return True
    if not isinstance(exc, IntegrityError):
        return False
    orig = exc.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    message = str(orig).lower()
    return "unique constraint" in message or "duplicate key" in message


def run_in_transaction(
    db: Session,
    body: Callable[[Session], T],
    max_attempts: Optional[int] = None,
) -> T:
    """Run ``body(db)`` and commit; retry the whole unit on write conflicts."""
    attempts = max_attempts or settings.TRANSACTION_MAX_ATTEMPTS

    for attempt in range(attempts):
        try:
            result = body(db)
            db.commit()
            return result
        except Exception as e:
            db.rollback()
            if not is_write_conflict(e):
                raise
            if attempt < attempts - 1:
                backoff = settings.TRANSACTION_BACKOFF_SECONDS * (2 ** attempt)
                logger.warning(
                    "Transaction attempt %d conflicted, retrying in %.3fs: %s",
                    attempt + 1, backoff, e.__class__.__name__,
                )
                time.sleep(backoff)
            else:
                logger.error("Transaction aborted after %d attempts", attempts)
                raise Aborted(f"Too much contention, aborted after {attempts} attempts") from e

    raise Aborted("Transaction did not run")
