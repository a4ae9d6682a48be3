"""Response envelope shared by all report endpoints."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{success, message, data, errors}`` wrapper around every payload."""

    success: bool
    message: str = ""
    data: Optional[T] = None
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def success_result(cls, data: T, message: str = "") -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error_result(cls, message: str, errors: Optional[list[str]] = None) -> "ApiResponse[T]":
        return cls(success=False, message=message, errors=errors or [message])


def exception_messages(exc: BaseException) -> list[str]:
    """Messages of an exception and its direct cause, for operator diagnosis."""
    messages = [str(exc)]
    cause = exc.__cause__ or exc.__context__
    if cause is not None and str(cause) and str(cause) not in messages:
        messages.append(str(cause))
    return messages
