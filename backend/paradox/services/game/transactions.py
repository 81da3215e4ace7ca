"""Transaction boundary for service-layer writes.

Every state-changing service runs under one process-wide write lock and
inside a single database transaction, so submit, reveal, start and reset
never interleave and never expose half-applied state.
"""
import logging
import threading
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from paradox import db
from paradox.errors import ParadoxError, PersistenceError

logger = logging.getLogger(__name__)

_write_lock = threading.RLock()


def transactional(func):
    """Commit on success; roll back and re-raise on failure.

    Domain errors propagate unchanged. Store failures are logged and
    surfaced as PersistenceError. Do not commit inside the wrapped function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        with _write_lock:
            try:
                result = func(*args, **kwargs)
                db.session.commit()
                return result
            except ParadoxError:
                db.session.rollback()
                raise
            except SQLAlchemyError as e:
                logger.error(f"Transaction failed in {func.__name__}: {e}", exc_info=True)
                db.session.rollback()
                raise PersistenceError() from e

    return wrapper
