"""Unified API response wrapper.

{
    "code": 0,           // 0=success, non-0=error code
    "message": "success",
    "data": { ... },     // null on error
    "timestamp": "...",
    "request_id": "..."  // echoed from X-Request-ID, "" when absent
}
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = ""


def success_response(data: Any = None, request_id: str = "") -> ApiResponse:
    return ApiResponse(code=0, message="success", data=data, request_id=request_id)


def error_response(code: int, message: str, request_id: str = "") -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None, request_id=request_id)
