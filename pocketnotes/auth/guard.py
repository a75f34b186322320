"""Ownership guard for single-resource operations.

Notes belong to exactly one account. Before a handler reads, mutates or
deletes a specific note it calls guard_resource(), which loads the note and
compares its owner to the principal. Listing needs no guard because the
list query itself is scoped to the principal's account.

The guard must run before any write is attempted.
"""

import logging
from enum import Enum
from typing import Any, Callable

from ..exceptions import Forbidden, ResourceNotFound
from .principal import Principal

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    READ = "read"
    MUTATE = "mutate"
    DELETE = "delete"


def check_owner(principal: Principal, owner_id: str, operation: Operation) -> None:
    """Pure ownership decision.

    Raises:
        Forbidden: If owner_id is not the principal's account
    """
    if owner_id != principal.account_id:
        logger.warning(
            f"Account {principal.account_id} denied {operation.value} "
            f"on resource owned by {owner_id}"
        )
        raise Forbidden("User not authorized")


def guard_resource(
    principal: Principal,
    resource_id: str,
    operation: Operation,
    fetch: Callable[[str], Any],
    resource_type: str = "Note",
    owner_field: str = "owner_id",
):
    """
    Load a resource and authorize the principal against its owner.

    Args:
        principal: Authenticated caller
        resource_id: ID of the target resource
        operation: What the caller intends to do
        fetch: Persistence lookup returning the record or None
        resource_type: Name used in the NotFound message
        owner_field: Key of the owner ID on the fetched record

    Returns:
        The fetched record, so callers need not load it twice

    Raises:
        ResourceNotFound: No record with resource_id
        Forbidden: Record exists but belongs to another account
    """
    resource = fetch(resource_id)
    if resource is None:
        raise ResourceNotFound(
            f"{resource_type} not found",
            {"id": resource_id}
        )

    check_owner(principal, resource[owner_field], operation)
    return resource
