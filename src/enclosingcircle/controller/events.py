"""
UI Events
=========
Input delivered by the windowing shell to the AppController.

The shell (Qt widgets) converts its native events into these plain values,
so the controller can be driven and tested without a window.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Any, Union


class MouseButton(Enum):
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()
    OTHER = auto()


class KeyCode(Enum):
    W = auto()
    H = auto()
    S = auto()
    O = auto()
    DIGIT1 = auto()
    DIGIT2 = auto()
    ESCAPE = auto()
    OTHER = auto()


class Modifier(Flag):
    NONE = 0
    PRIMARY = auto()  # Ctrl, or Command on macOS
    SHIFT = auto()
    ALT = auto()


@dataclass(frozen=True)
class FrameRequest:
    """Paint the scene onto `painter` (a QPainter), covering width x height pixels."""
    painter: Any
    width: int
    height: int


@dataclass(frozen=True)
class MouseMove:
    px: int
    py: int


@dataclass(frozen=True)
class MouseEnter:
    pass


@dataclass(frozen=True)
class MouseLeave:
    pass


@dataclass(frozen=True)
class MouseButtonEvent:
    px: int
    py: int
    button: MouseButton
    pressed: bool


@dataclass(frozen=True)
class MouseWheel:
    dy: float


@dataclass(frozen=True)
class Key:
    code: KeyCode
    modifiers: Modifier
    pressed: bool


@dataclass(frozen=True)
class CloseRequest:
    pass


Event = Union[FrameRequest, MouseMove, MouseEnter, MouseLeave,
              MouseButtonEvent, MouseWheel, Key, CloseRequest]
