"""Domain errors raised by the services and rendered by the API layer."""

from enum import Enum

from fastapi import status


class KitchenWiseError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(KitchenWiseError):
    """One or more field-level violations, reported together."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[str] | str, message: str = "Validation failed"):
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__(message)


class NotFoundError(KitchenWiseError):
    """The addressed record does not exist (or was deleted concurrently)."""

    status_code = status.HTTP_404_NOT_FOUND


class MalformedKeyError(KitchenWiseError):
    """A stored sort key could not be decoded."""

    def __init__(self, sort_key: str):
        self.sort_key = sort_key
        super().__init__(f"Invalid sort key format: {sort_key!r}")


class StoreUnavailableError(KitchenWiseError):
    """The item store failed; retrying is left to the caller."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class ConditionFailedError(Exception):
    """A store write precondition was not met.

    Kept apart from ``KitchenWiseError``: services translate it into the error
    that is meaningful for their callers.
    """


class GenerationFailureReason(str, Enum):
    """Why the recipe text generator failed."""

    RATE_LIMITED = "rate_limited"
    INVALID_CREDENTIALS = "invalid_credentials"
    MALFORMED_OUTPUT = "malformed_output"
    UPSTREAM_REJECTED = "upstream_rejected"


_GENERATION_FAILURES = {
    GenerationFailureReason.RATE_LIMITED: (
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Service temporarily unavailable. Please try again later.",
    ),
    GenerationFailureReason.INVALID_CREDENTIALS: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Service configuration error",
    ),
    GenerationFailureReason.MALFORMED_OUTPUT: (
        status.HTTP_502_BAD_GATEWAY,
        "Recipe generation failed due to unexpected response format. Please try again.",
    ),
    GenerationFailureReason.UPSTREAM_REJECTED: (
        status.HTTP_502_BAD_GATEWAY,
        "Recipe generation service is experiencing issues. Please try again later.",
    ),
}


class GenerationFailedError(KitchenWiseError):
    """The external recipe text generator failed."""

    def __init__(self, reason: GenerationFailureReason, detail: str | None = None):
        self.reason = reason
        self.detail = detail
        self.status_code, message = _GENERATION_FAILURES[reason]
        super().__init__(message)
