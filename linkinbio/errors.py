"""
errors.py — domain exceptions and the flat JSON error envelope.

Every error leaving the API has the shape
    {"error": "<message>"}
or, for validation failures,
    {"error": "Validation failed", "issues": {"formErrors": [...], "fieldErrors": {...}}}

Handlers that turn these exceptions into responses live in main.py.
"""
from typing import Any, Iterable, Optional

from fastapi.responses import JSONResponse

VALIDATION_FAILED = "Validation failed"
_VALUE_ERROR_PREFIX = "Value error, "
_REQUEST_SECTIONS = {"body", "query", "path", "header", "cookie"}


class ResourceNotFound(Exception):
    """
    The resource does not exist OR is not owned by the caller.

    Both cases deliberately produce the same message so a caller cannot test
    for other users' resources.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"{label} not found or unauthorized")


class PayloadInvalid(Exception):
    """A request that passed schema validation but breaks a business rule."""

    def __init__(self, message: str, issues: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.issues = issues
        super().__init__(message)


class Unauthenticated(Exception):
    """No valid session for this request."""


def error_response(
    message: str,
    status_code: int,
    issues: Optional[dict[str, Any]] = None,
    **extra: Any,
) -> JSONResponse:
    """Build the flat {error[, issues]} body."""
    body: dict[str, Any] = {"error": message}
    if issues is not None:
        body["issues"] = issues
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def flatten_errors(errors: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """
    Collapse pydantic error dicts into {"formErrors": [...], "fieldErrors": {field: [msg, ...]}}.

    The request section ("body", "query") is dropped from each loc. Errors with
    no remaining location (whole-object rules, missing body) become formErrors;
    everything else is keyed by its top-level field name.
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if part not in _REQUEST_SECTIONS]
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        if not loc or error.get("type") == "json_invalid":
            form_errors.append(message)
        else:
            field_errors.setdefault(str(loc[0]), []).append(message)
    return {"formErrors": form_errors, "fieldErrors": field_errors}
