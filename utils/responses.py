"""
JSON envelope shared by every endpoint: {ok, data, error, message}
"""
from typing import Any, Optional

from fastapi.responses import JSONResponse


def envelope(ok: bool, data: Any = None, error: Optional[str] = None, message: str = "OK") -> dict:
    return {
        "ok": ok,
        "data": {} if data is None else data,
        "error": error,
        "message": message,
    }


def success_response(data: Any = None, message: str = "OK", status: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status, content=envelope(True, data, None, message))


def error_response(error_code: str, status: int = 400, message: str = "An error occurred", data: Any = None) -> JSONResponse:
    """Failure envelope; `error_code` is a stable machine-readable key such as "session_not_found"."""
    return JSONResponse(status_code=status, content=envelope(False, data, error_code, message))
