"""Mapping of domain errors to HTTP errors."""
from fastapi import HTTPException

from dining.services.ordering.errors import ConflictError, DomainError, NotFoundError


def to_http_exception(error: DomainError) -> HTTPException:
    """Build the HTTPException for a domain error.

    Validation and illegal-state errors are unprocessable requests.
    """
    if isinstance(error, NotFoundError):
        status_code = 404
    elif isinstance(error, ConflictError):
        status_code = 409
    else:
        status_code = 422
    return HTTPException(
        status_code=status_code,
        detail={"code": error.code.value, "message": error.message},
    )
