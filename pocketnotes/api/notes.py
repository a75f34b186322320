"""Note CRUD endpoints for PocketNotes.

This module implements RESTful endpoints for note management:
- GET    /notes          - List the caller's notes (newest first)
- POST   /notes          - Create note owned by the caller
- PUT    /notes/{id}     - Update note (owner only)
- DELETE /notes/{id}     - Delete note (owner only)

Every endpoint requires a bearer token. Update and delete pass the ownership
guard before touching the database; listing is scoped by owner in the query.
"""

import logging

from flask import Blueprint, jsonify, request

from ..auth.guard import Operation, guard_resource
from ..auth.middleware import auth_required
from ..auth.principal import Principal
from ..db import get_core
from ..exceptions import ResourceNotFound, ValidationError
from .schemas import NoteCreate, NoteResponse, NoteUpdate
from .validation import validate_request

logger = logging.getLogger(__name__)


# Create Blueprint
notes_bp = Blueprint("notes", __name__, url_prefix="/notes")


def _parse_favorite_filter() -> bool | None:
    value = request.args.get("favorite")
    if value is None:
        return None
    lowered = value.lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    raise ValidationError(
        "Invalid favorite filter",
        {"favorite": value, "expected": "true or false"}
    )


def _gone(note_id: str) -> ResourceNotFound:
    """Note removed by a concurrent request after the guard passed."""
    logger.info(f"Note {note_id} disappeared during request")
    return ResourceNotFound("Note not found", {"id": note_id})


@notes_bp.get("")
@auth_required
def list_notes(principal: Principal):
    """
    List notes owned by the caller.

    Query Parameters:
        - favorite: "true"/"false" - Only (non-)favorite notes
        - q: Case-insensitive substring of title or content

    Returns:
        200: Array of Note objects, newest first
    """
    is_favorite = _parse_favorite_filter()
    search = request.args.get("q") or None

    core = get_core()
    rows = core.note.list_by_owner(
        principal.account_id,
        is_favorite=is_favorite,
        search=search,
    )

    return jsonify([NoteResponse.from_row(row).to_json() for row in rows])


@notes_bp.post("")
@auth_required
@validate_request
def create_note(data: NoteCreate, principal: Principal):
    """
    Create a note owned by the caller.

    Request Body (NoteCreate):
        - title: str (required)
        - content: str (required)
        - isFavorite: bool (default: false)

    Returns:
        200: Created Note
        400: Missing title or content
    """
    core = get_core()
    note_id = core.note.create(
        owner_id=principal.account_id,
        title=data.title,
        content=data.content,
        is_favorite=data.is_favorite,
    )
    row = core.note.get_by_id(note_id)

    logger.info(f"Note {note_id} created by {principal.account_id}")
    return jsonify(NoteResponse.from_row(row).to_json()), 200


@notes_bp.put("/<note_id>")
@auth_required
@validate_request
def update_note(note_id: str, data: NoteUpdate, principal: Principal):
    """
    Update a note (partial update).

    Request Body (NoteUpdate), all optional:
        - title, content, isFavorite

    Returns:
        200: Updated Note
        403: Note belongs to another account
        404: Note not found
    """
    with get_core(atomic=True) as core:
        guard_resource(principal, note_id, Operation.MUTATE, core.note.get_by_id)

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if update_data and core.note.update(note_id, update_data) == 0:
            raise _gone(note_id)

        row = core.note.get_by_id(note_id)
        if row is None:
            raise _gone(note_id)

    return jsonify(NoteResponse.from_row(row).to_json())


@notes_bp.delete("/<note_id>")
@auth_required
def delete_note(note_id: str, principal: Principal):
    """
    Delete a note.

    Returns:
        200: {"id": note_id}
        403: Note belongs to another account
        404: Note not found
    """
    with get_core(atomic=True) as core:
        guard_resource(principal, note_id, Operation.DELETE, core.note.get_by_id)
        if core.note.delete(note_id) == 0:
            raise _gone(note_id)

    logger.info(f"Note {note_id} deleted by {principal.account_id}")
    return jsonify({"id": note_id})
