"""UUID generation utilities.

Account and note IDs are opaque UUID v4 strings. This is the only module
that imports uuid4; the persistence layer calls uid.generate_uuid().
"""

from uuid import uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())
