"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import HTTPException, status

from whistle.domain.error import (
    ContentRemovedError,
    DomainError,
    NotAuthenticated,
    NotAuthorizedError,
    NotFoundError,
    StorageUnavailable,
    ValidationError,
)


def to_http_error(error: DomainError) -> HTTPException:
    """Convert a domain error raised by a use case into an HTTPException.

    Args:
        error: Domain error

    Returns:
        Exception for the route to raise
    """
    if isinstance(error, StorageUnavailable):
        logfire.error("Comment storage unavailable", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Comments unavailable, retry",
            headers={"Retry-After": "1"},
        )
    if isinstance(error, NotAuthenticated):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error)
        )
    if isinstance(error, NotAuthorizedError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this comment",
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ContentRemovedError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )

    logfire.error("Unexpected domain error", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal error",
    )
