"""Uniform result shape returned by every mutation route."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ActionResult(BaseModel, Generic[T]):
    """success + data, or failure + error message. Never both."""

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "ActionResult[T]":
        return cls(success=False, error=message)
