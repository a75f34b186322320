"""Utility functions for PocketNotes.

Import convention: use module-level imports for clarity.

    from pocketnotes.utils import isodatetime, uid
    timestamp = isodatetime.now()
    note_id = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
