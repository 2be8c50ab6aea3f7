# core/errors.py

import httpx

from core.logging_config import logger


# ============================================================
# Error taxonomy
# ============================================================

class InquiryError(Exception):
    """
    Base class for every error the inquiry service raises on purpose.

    Carries the HTTP status the API boundary answers with and the
    user-facing message that goes into the {"error": ...} body.
    """

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(InquiryError):
    """A required field is missing/empty, or a value is outside its set."""

    status_code = 400
    default_message = "Invalid request"

    def __init__(self, message: str = None, field: str = None):
        self.field = field
        super().__init__(message)

    @classmethod
    def missing_field(cls, field: str) -> "ValidationError":
        return cls(f"Missing required field: {field}", field=field)


class NotFoundError(InquiryError):
    status_code = 404
    default_message = "Inquiry not found"


class NoOpError(InquiryError):
    """Update payload had nothing on the allow-list."""

    status_code = 400
    default_message = "No valid fields to update"


class PersistenceError(InquiryError):
    status_code = 500
    default_message = "Database operation failed"


class RequestTimeoutError(InquiryError):
    """The store (or the API, seen from the portal) did not answer in time."""

    status_code = 504
    default_message = "Request timed out"


class NetworkError(InquiryError):
    """Client-side transport failure, distinct from a non-2xx response."""

    status_code = 502
    default_message = "Network error"


# ============================================================
# Supabase error translation
# ============================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST APIError (has .message)
      • Errors with args
      • Generic Python exceptions
    """

    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation") -> InquiryError:
    """
    Translate an exception raised by the Supabase client into the taxonomy.
    Returns the error (doesn't raise) so the caller can re-raise with `from`.

    Args:
        error: The exception that occurred
        operation: Description of what failed (e.g., "Failed to submit inquiry")
    """
    if isinstance(error, InquiryError):
        return error

    detail = extract_supabase_error(error)

    if isinstance(error, httpx.TimeoutException):
        logger.error(f"{operation}: timed out ({detail})")
        return RequestTimeoutError(f"{operation}: database timed out")

    logger.error(f"{operation}: {detail}")
    return PersistenceError(operation)
