"""Request body validation decorator.

@validate_request looks for the view parameter annotated with a Pydantic
model, validates the request body into it and passes the model instance in.
Path parameters and any keyword arguments injected by outer decorators
(e.g. principal= from @auth_required) pass through untouched.

    @notes_bp.put("/<note_id>")
    @auth_required
    @validate_request
    def update_note(note_id: str, data: NoteUpdate, principal: Principal):
        ...
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import ValidationError


def _find_model_param(f) -> tuple[str, type[BaseModel]] | None:
    for name, param in inspect.signature(f).parameters.items():
        annotation = param.annotation
        if inspect.isclass(annotation) and issubclass(annotation, BaseModel):
            return name, annotation
    return None


def _request_payload() -> dict | None:
    """JSON body, falling back to form data for HTML form posts."""
    payload = request.get_json(silent=True)
    if payload is None and request.form:
        payload = request.form.to_dict()
    return payload


def validate_request(f):
    """
    Validate the request body against the view's Pydantic parameter.

    Raises:
        ValidationError: Body missing, not an object, or fails the schema
    """
    model_param = _find_model_param(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        if model_param is not None:
            name, model = model_param
            payload = _request_payload()
            if not isinstance(payload, dict):
                raise ValidationError(
                    "Request body must be a JSON object",
                    {"content_type": request.content_type}
                )
            try:
                kwargs[name] = model.model_validate(payload)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {"errors": e.errors(include_url=False, include_context=False)}
                )
        return f(*args, **kwargs)

    return wrapper
