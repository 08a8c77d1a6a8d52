"""
handlers/responses.py
---------------------
Maps service Outcomes to HTTP responses.

    OK             -> 200
    INVALID        -> 400 {success: false, message, errors}
    CONFLICT       -> 400 {success: false, message}
    NOT_FOUND      -> 404 {success: false, message}
    INTERNAL_ERROR -> 500 {success: false, message, details}
"""

from typing import Any, Optional

from fastapi.responses import JSONResponse

from models.outcome import Outcome, OutcomeKind

_STATUS = {
    OutcomeKind.OK: 200,
    OutcomeKind.INVALID: 400,
    OutcomeKind.CONFLICT: 400,
    OutcomeKind.NOT_FOUND: 404,
    OutcomeKind.INTERNAL_ERROR: 500,
}


def error_body(outcome: Outcome) -> dict:
    body: dict[str, Any] = {"success": False, "message": outcome.message}
    if outcome.kind is OutcomeKind.INVALID:
        body["errors"] = outcome.errors
    elif outcome.kind is OutcomeKind.INTERNAL_ERROR:
        body["details"] = outcome.detail
    return body


def to_response(outcome: Outcome, content: Optional[Any] = None) -> JSONResponse:
    """
    Build the response for an Outcome.

    Args:
        outcome: The service result.
        content: Body to send on success; defaults to {success, message}.
    """
    if outcome.is_ok:
        if content is None:
            content = {"success": True, "message": outcome.message}
        return JSONResponse(status_code=200, content=content)
    return JSONResponse(status_code=_STATUS[outcome.kind], content=error_body(outcome))


def record_response(outcome: Outcome) -> JSONResponse:
    """Single record on success (serialized with to_dict)."""
    return to_response(outcome, outcome.value.to_dict() if outcome.is_ok else None)


def list_response(outcome: Outcome) -> JSONResponse:
    """List of records on success."""
    return to_response(outcome, [r.to_dict() for r in outcome.value] if outcome.is_ok else None)


def created_response(outcome: Outcome, id_field: str) -> JSONResponse:
    """{success, message, id} for a successful insert; `id_field` names the key attribute."""
    if outcome.is_ok:
        record_id = getattr(outcome.value, id_field)
        return to_response(outcome, {"success": True, "message": outcome.message, "id": record_id})
    return to_response(outcome)
