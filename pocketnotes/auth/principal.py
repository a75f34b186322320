"""The authenticated caller for one request."""

from dataclasses import dataclass

from .schemas import AccountResponse


@dataclass(frozen=True)
class Principal:
    """Verified identity built by the auth middleware.

    Lives for a single request and is passed to handlers explicitly;
    never persisted.
    """

    account_id: str
    account: AccountResponse
