# blog/core/responses.py
"""
Success envelope.

Every successful endpoint returns through `success()`; failures never do,
they are raised and rendered by `blog.core.errors`.
"""
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_body(data: Any = None, message: Optional[str] = None) -> dict:
    """
    Build the success mapping.

    `data` and `message` are only present when they are not None:
        success()                 -> {"success": True}
        success({"id": 1})        -> {"success": True, "data": {"id": 1}}
        success(None, "Deleted.") -> {"success": True, "message": "Deleted."}
    """
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    if message is not None:
        body["message"] = message
    return body


def success(data: Any = None, message: Optional[str] = None, status_code: int = 200) -> JSONResponse:
    """Wrap a successful result; pass status_code=201 for creations."""
    return JSONResponse(success_body(data, message), status_code=status_code)
