"""SQL query builders for parameterized statements.

Column names come from code (never from request data); values are always
bound as parameters.
"""

from typing import Any


def build_where_clause(
    conditions: dict[str, Any],
    param_map: dict[str, str] | None = None
) -> tuple[str, list[Any]]:
    """Build a WHERE clause from a dict of conditions.

    Args:
        conditions: Column (or param_map key) to value. None values are skipped.
        param_map: Optional mapping from key to SQL fragment. The value is
            bound once per placeholder in the fragment.

    Returns:
        Tuple of (clause, params). Empty conditions yield "1=1".
    """
    param_map = param_map or {}
    fragments = []
    params = []

    for key, value in conditions.items():
        if value is None:
            continue
        fragment = param_map.get(key, f"{key} = ?")
        fragments.append(fragment)
        params.extend([value] * fragment.count("?"))

    if not fragments:
        return "1=1", []

    return " AND ".join(fragments), params


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build a SET clause for a partial UPDATE.

    Args:
        data: Column to new value. None values are skipped.
        exclude: Columns that must never be written (e.g. {"id", "owner_id"}).

    Returns:
        Tuple of (clause, params). Nothing to update yields ("", []).
    """
    exclude = exclude or set()
    fragments = []
    params = []

    for column, value in data.items():
        if column in exclude or value is None:
            continue
        fragments.append(f"{column} = ?")
        params.append(value)

    return ", ".join(fragments), params
