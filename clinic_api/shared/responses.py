"""Response envelope used by every JSON endpoint"""

from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """{ status, data?, message? }"""

    status: Literal["success", "error"] = "success"
    data: Optional[T] = None
    message: Optional[str] = None


def success(data=None, message: Optional[str] = None) -> dict:
    body = {"status": "success"}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body


def error(message: str) -> dict:
    return {"status": "error", "message": message}
