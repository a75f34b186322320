"""Authentication middleware for protected endpoints.

Per request the middleware moves through:

    NoToken -> TokenPresent -> Verified | Rejected

This module provides:
- authenticate() - header -> Principal, or AuthenticationError
- @auth_required - runs authenticate() and passes principal= to the view
- @public - marks a view as reachable without a token
- enforce_route_policy() - app-level before_request that rejects any view
  marked neither @public nor @auth_required

Every token failure reaches the client as the same 401 "Unauthenticated";
the specific reason (expired, bad signature, malformed) is only logged.
"""

import logging
from functools import wraps

from flask import current_app, request

from ..db import Core, get_core
from ..exceptions import AuthenticationError, TokenError
from .principal import Principal
from .schemas import AccountResponse
from .token import TokenIssuer

logger = logging.getLogger(__name__)

EXPECTED_HEADER = "Authorization: Bearer <token>"


def extract_bearer_token(auth_header: str | None) -> str:
    """Pull the token out of an Authorization header value.

    Raises:
        AuthenticationError: Header missing or not "Bearer <token>"
    """
    if not auth_header:
        raise AuthenticationError(
            "Authentication required",
            {"expected": EXPECTED_HEADER}
        )

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise AuthenticationError(
            "Invalid authorization header format",
            {"expected": EXPECTED_HEADER}
        )

    return parts[1]


def authenticate(auth_header: str | None, issuer: TokenIssuer, core: Core) -> Principal:
    """
    Resolve the caller from an Authorization header.

    Args:
        auth_header: Raw Authorization header value (may be None)
        issuer: Token issuer holding the signing secret
        core: Persistence collaborator for the account lookup

    Returns:
        Principal for the token's account

    Raises:
        AuthenticationError: No token, token fails verification, or the
            account no longer exists
    """
    token_str = extract_bearer_token(auth_header)

    try:
        account_id = issuer.verify(token_str)
    except TokenError as e:
        logger.warning(f"Token rejected ({e.kind}): {e}")
        raise AuthenticationError("Invalid or expired token")

    row = core.account.get_by_id(account_id)
    if row is None:
        logger.warning(f"Token for unknown account {account_id}")
        raise AuthenticationError("Invalid or expired token")

    account = AccountResponse.model_validate(dict(row))
    return Principal(account_id=account.id, account=account)


# ============================================================================
# View decorators
# ============================================================================


def auth_required(f):
    """
    Decorator to require a valid bearer token.

    The wrapped view receives the Principal as a keyword argument:

    ```python
    @notes_bp.get("")
    @auth_required
    def list_notes(principal: Principal):
        ...
    ```

    Raises:
        AuthenticationError: If the request does not authenticate
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        services = current_app.extensions["pocketnotes"]
        core = get_core()
        try:
            principal = authenticate(
                request.headers.get("Authorization"),
                services.token_issuer,
                core,
            )
        finally:
            core.close()

        logger.debug(f"Authenticated account {principal.account_id}")
        return f(*args, principal=principal, **kwargs)

    wrapper.auth_policy = "auth_required"
    return wrapper


def public(f):
    """Mark a view as reachable without authentication."""
    f.auth_policy = "public"
    return f


# ============================================================================
# Default-deny route policy
# ============================================================================


def enforce_route_policy():
    """
    Reject requests to views that declare no auth policy.

    Registered as an app-level before_request. Unmatched URLs fall through to
    Flask's 404 and CORS preflight (OPTIONS) is left to flask-cors.

    Raises:
        AuthenticationError: If the matched view is neither @public nor
            @auth_required
    """
    if request.method == "OPTIONS" or request.endpoint is None:
        return None

    view = current_app.view_functions.get(request.endpoint)
    if getattr(view, "auth_policy", None) in ("public", "auth_required"):
        return None

    logger.error(f"View '{request.endpoint}' has no auth policy; rejecting request")
    raise AuthenticationError("Authentication required")
