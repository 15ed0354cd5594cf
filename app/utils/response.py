from typing import Any


def success_response(data: Any = None, message: str | None = None) -> dict:
    return {"status": "success", "data": data, "message": message}


def error_response(message: str, code: str | None = None, data: Any = None) -> dict:
    """Error envelope; ``code`` is the stable machine-readable error name."""
    if code is not None:
        data = {"code": code, **(data or {})}
    return {"status": "error", "data": data, "message": message}
