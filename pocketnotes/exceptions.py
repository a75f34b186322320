"""Custom exceptions for PocketNotes.

Every exception carries a human-readable message and an optional details
dict. The Flask error handlers in main.py map each class to an HTTP status
and render them as:

    {"error": {"type": ..., "message": ..., "details": ...}}
"""


class PocketNotesError(Exception):
    """Base exception for all PocketNotes errors."""

    error_type = "InternalError"
    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(PocketNotesError):
    """Malformed or missing request input."""

    error_type = "ValidationError"
    status_code = 400


class DuplicateAccount(PocketNotesError):
    """An account with the given email already exists."""

    error_type = "DuplicateAccount"
    status_code = 400


class InvalidCredentials(PocketNotesError):
    """Email/password pair did not match.

    Raised identically for unknown email and wrong password.
    """

    error_type = "InvalidCredentials"
    status_code = 401


class AuthenticationError(PocketNotesError):
    """Missing, invalid or expired bearer token, or unknown principal."""

    error_type = "Unauthenticated"
    status_code = 401


class Forbidden(PocketNotesError):
    """Authenticated principal does not own the target resource."""

    error_type = "Forbidden"
    status_code = 403


class ResourceNotFound(PocketNotesError):
    """Requested resource does not exist."""

    error_type = "NotFound"
    status_code = 404


# ============================================================================
# Token errors (internal; collapsed to AuthenticationError at the HTTP edge)
# ============================================================================


class TokenError(Exception):
    """Raised when bearer token verification fails."""

    kind = "invalid_token"


class MalformedToken(TokenError):
    """Token could not be decoded or lacks required claims."""

    kind = "malformed_token"


class BadSignature(TokenError):
    """Signature does not match the payload under the configured secret/algorithm."""

    kind = "bad_signature"


class TokenExpired(TokenError):
    """Token is past its exp claim."""

    kind = "token_expired"
