"""
Error Kinds & Results
=====================
Exceptions raised by the model layer and the result type returned by the
controller when an operation may fail in a recoverable way.

Policy:
    - IO_ERROR / PARSE_ERROR: logged, previous scene stays untouched.
    - INVALID_VIEWPORT: programming error, the current operation is aborted.
    - RENDER_INIT: fatal at startup.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(StrEnum):
    INVALID_VIEWPORT = "InvalidViewport"
    IO_ERROR = "IoError"
    PARSE_ERROR = "ParseError"
    RENDER_INIT = "RenderInit"


class EnclosingCircleError(Exception):
    """Base class for all application errors."""
    kind: ErrorKind


class InvalidViewport(EnclosingCircleError):
    """Degenerate window or real rectangle."""
    kind = ErrorKind.INVALID_VIEWPORT


class SceneIOError(EnclosingCircleError):
    """Filesystem failure while saving or loading a scene."""
    kind = ErrorKind.IO_ERROR


class SceneParseError(EnclosingCircleError):
    """Scene file is not a valid scene document."""
    kind = ErrorKind.PARSE_ERROR


class RenderInitError(EnclosingCircleError):
    """No usable graphics backend."""
    kind = ErrorKind.RENDER_INIT


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, exc: EnclosingCircleError) -> Err:
        return cls(kind=exc.kind, message=str(exc))


Result = Union[Ok[Any], Err]
