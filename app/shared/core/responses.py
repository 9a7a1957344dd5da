# 📄 File: app/shared/core/responses.py
# 🧭 Purpose (Layman Explanation):
# Wraps every answer the service sends in the same outer shape, so clients always know
# where to find the "it worked" flag, the status, the message and the data.
# 🧪 Purpose (Technical Summary):
# Response Envelope helpers rendering {success, statusCode, message, data|error} as
# JSONResponse objects, plus the paginated list payload shape.
# 🔗 Dependencies:
# FastAPI JSONResponse, jsonable_encoder
# 🔄 Connected Modules / Calls From:
# Every presentation route, app-level exception handlers, ErrorHandlingMiddleware

from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    message: str,
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Render a success envelope."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({
            "success": True,
            "statusCode": status_code,
            "message": message,
            "data": data,
        }),
        headers=headers,
    )


def error_response(
    status_code: int,
    message: str,
    error: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Render an error envelope. ``error`` carries structured details, never a traceback."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({
            "success": False,
            "statusCode": status_code,
            "message": message,
            "error": error,
        }),
        headers=headers,
    )


def page_payload(total: int, page: int, limit: int, data: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"total": total, "page": page, "limit": limit, "data": data}
