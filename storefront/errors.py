import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)


def storage_error(exc: Exception, action: str) -> HTTPException:
    """Log a failed storage call and turn it into a 500 carrying the driver's message."""
    # DBAPIError wraps the driver exception; its own str() adds the SQL and a help link
    message = str(exc.orig) if isinstance(exc, DBAPIError) and exc.orig is not None else str(exc)
    logger.error("%s failed: %s", action, message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )
