import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from learnhub_backend.api.exceptions import ConflictException, InternalServerException

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, description: str):
    """Commit the session, mapping database failures onto API errors."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Integrity error while trying to {description}: {e.orig if hasattr(e, 'orig') else e}")
        raise ConflictException(detail=f"Could not {description}: conflicting data")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {description}: {e}")
        raise InternalServerException(detail=f"Could not {description}")
