from contextlib import contextmanager
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import PersistenceError
from ..services.logging import log_event


logger = logging.getLogger(__name__)


class SessionRepository:
    def __init__(self, session: Session) -> None:
        self._session = session


@contextmanager
def unit_of_work(session_factory, action: str):
    """Open one transaction and translate storage failures.

    Service errors raised inside the block pass through unchanged; either
    way the session context manager has already rolled back.
    """
    try:
        with session_factory() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.exception("storage failure while trying to %s", action)
        log_event("error", "storage.failed", action=action, error=exc.__class__.__name__)
        raise PersistenceError(f"failed to {action}") from exc
