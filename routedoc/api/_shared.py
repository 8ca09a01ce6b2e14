"""Shared response envelope helpers for HTTP routes."""
from __future__ import annotations

from typing import Dict

from starlette.responses import JSONResponse

from ..utils.errors import ErrorCode, make_error


def envelope_error(
    code: ErrorCode,
    message: str | None = None,
    *,
    recovery: tuple[str, ...] | None = None,
    status: int | None = None,
) -> Dict[str, object]:
    error_payload = make_error(
        code,
        message=message,
        recovery=recovery,
        status=status,
    )
    return {
        "ok": False,
        "data": None,
        "errors": [error_payload],
    }


def envelope_response(payload: Dict[str, object]) -> JSONResponse:
    status = 200
    if not payload.get("ok"):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            status = int(first.get("status", 500))
        else:
            status = 500
    return JSONResponse(payload, status_code=status)


def error_response(
    code: ErrorCode,
    message: str | None = None,
    *,
    recovery: tuple[str, ...] | None = None,
    status: int | None = None,
) -> JSONResponse:
    return envelope_response(
        envelope_error(
            code,
            message,
            recovery=recovery,
            status=status,
        )
    )


__all__ = ["envelope_error", "envelope_response", "error_response"]
