"""
Application Controller
======================
Receives UI events from the windowing shell and turns them into scene,
viewport and solver operations.

Why is this file needed?
------------------------
1. Routing: One entry point (`handle`) for every input event, dispatched by
   event type to a small set of handlers.
2. Ownership: It holds the Scene handle created by the application root and
   replaces it wholesale when a file is loaded.
3. Decoupling: Window operations (close, minimize, ...) go through the
   WindowHost protocol, so the controller runs without Qt widgets.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

import numpy as np

from enclosingcircle import config
from enclosingcircle.controller.events import (
    CloseRequest, Event, FrameRequest, Key, KeyCode, Modifier, MouseButton,
    MouseButtonEvent, MouseEnter, MouseLeave, MouseMove, MouseWheel,
)
from enclosingcircle.errors import Err, InvalidViewport, Ok, Result, SceneIOError, SceneParseError
from enclosingcircle.model.coordinate_systems import CSMap, WindowCS
from enclosingcircle.model.geometry_primitives import Vec2d, Vec2i
from enclosingcircle.model.io import IOManager
from enclosingcircle.model.state import PointSet, Scene, SolveResult
from enclosingcircle.solvers.solver import Solver
from enclosingcircle.view.renderer import Renderer

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Application modes, deciding where ESC goes."""
    WORK = "work"
    INFO = "info"
    FILE = "file"


class WindowHost(Protocol):
    """Window operations the controller may request from the shell."""
    def close_window(self) -> None: ...
    def minimize_window(self) -> None: ...
    def set_maximized(self, maximized: bool) -> None: ...
    def window_opacity(self) -> float: ...
    def set_window_opacity(self, opacity: float) -> None: ...
    def forward_to_dialog(self, event: Key) -> None: ...
    def on_scene_changed(self) -> None: ...
    def on_mode_changed(self, mode: Mode) -> None: ...


class AppController:
    def __init__(
        self,
        scene: Scene,
        *,
        rng: Optional[np.random.Generator] = None,
        solver: Optional[Solver] = None,
        renderer: Optional[Renderer] = None,
        host: Optional[WindowHost] = None,
        scene_path: str = config.DEFAULT_SCENE_PATH,
    ) -> None:
        self.scene = scene
        self.rng = rng if rng is not None else np.random.default_rng()
        self.solver = solver if solver is not None else Solver(self.rng)
        self.renderer = renderer if renderer is not None else Renderer()
        self.host = host
        self.scene_path = scene_path

        self.mode = Mode.WORK
        self.cursor: Optional[Vec2i] = None
        self.cursor_inside = False
        self.maximized = False
        self._pan_from: Optional[Vec2i] = None

        self._handlers: dict[type, Callable[..., None]] = {
            FrameRequest: self._on_frame,
            MouseMove: self._on_mouse_move,
            MouseEnter: self._on_mouse_enter,
            MouseLeave: self._on_mouse_leave,
            MouseButtonEvent: self._on_mouse_button,
            MouseWheel: self._on_mouse_wheel,
            Key: self._on_key,
            CloseRequest: self._on_close_request,
        }

    # ------------------------------------------------------------------------------
    # Event entry point
    # ------------------------------------------------------------------------------

    def handle(self, event: Event) -> None:
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.debug(f"Ignoring unsupported event {event!r}")
            return
        try:
            handler(event)
        except InvalidViewport:
            logger.exception(f"Viewport error while handling {type(event).__name__}, event dropped.")

    # ------------------------------------------------------------------------------
    # Scene operations (also used by the control panel)
    # ------------------------------------------------------------------------------

    def add_point(self, pos: Vec2d, point_set: PointSet = PointSet.FIRST_SET) -> None:
        self.scene.add_point(pos, point_set)
        self._notify()

    def add_random(self, n: int, point_set: PointSet = PointSet.FIRST_SET) -> int:
        added = self.scene.add_random(n, point_set, self.rng)
        self._notify()
        return added

    def clear(self) -> None:
        self.scene.clear()
        self._notify()

    def solve(self) -> SolveResult:
        result = self.solver.solve_scene(self.scene)
        self._notify()
        return result

    def cancel(self) -> None:
        self.scene.cancel()
        self._notify()

    def pan(self, delta: Vec2d) -> None:
        self.scene.cs.pan(delta)
        self._notify()

    def save_scene(self, path: Optional[str] = None) -> Result:
        path = path or self.scene_path
        try:
            IOManager.save_scene(self.scene, path)
        except SceneIOError as e:
            logger.error(f"Could not save scene: {e}")
            return Err.from_exception(e)
        logger.info(f"File {path} saved successfully")
        return Ok(path)

    def load_scene(self, path: Optional[str] = None) -> Result:
        """Replace the scene with the file contents; on failure nothing changes."""
        path = path or self.scene_path
        try:
            scene = IOManager.load_scene(path)
        except (SceneIOError, SceneParseError) as e:
            logger.error(f"Could not load scene: {e}")
            return Err.from_exception(e)
        self.scene = scene
        self._notify()
        logger.info(f"File {path} loaded successfully")
        return Ok(scene)

    # ------------------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------------------

    def set_mode(self, mode: Mode) -> None:
        if mode is self.mode:
            return
        self.mode = mode
        if self.host is not None:
            self.host.on_mode_changed(mode)

    # ------------------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------------------

    def _on_frame(self, e: FrameRequest) -> None:
        cursor = self.cursor if self.cursor_inside else None
        self.renderer.paint(e.painter, WindowCS.from_size(e.width, e.height), self.scene, cursor)

    def _on_mouse_move(self, e: MouseMove) -> None:
        pos = Vec2i(e.px, e.py)
        if self._pan_from is not None and self.renderer.last_window_cs is not None:
            shift = pos - self._pan_from
            sim = CSMap(self.renderer.last_window_cs, self.scene.cs).similarity()
            # dragging right moves the plane right, so the viewport moves left
            self.scene.cs.pan(Vec2d(-shift.x * sim.x, shift.y * sim.y))
            self._pan_from = pos
        self.cursor = pos
        self._notify()

    def _on_mouse_enter(self, e: MouseEnter) -> None:
        self.cursor_inside = True
        self._notify()

    def _on_mouse_leave(self, e: MouseLeave) -> None:
        self.cursor_inside = False
        self._pan_from = None
        self._notify()

    def _on_mouse_button(self, e: MouseButtonEvent) -> None:
        pos = Vec2i(e.px, e.py)
        if not e.pressed:
            if e.button is MouseButton.MIDDLE:
                self._pan_from = None
            return
        if not self.cursor_inside or self.mode is not Mode.WORK:
            return
        if e.button is MouseButton.LEFT:
            self.add_point(self.renderer.to_real(pos, self.scene), PointSet.FIRST_SET)
        elif e.button is MouseButton.RIGHT:
            self.add_point(self.renderer.to_real(pos, self.scene), PointSet.SECOND_SET)
        elif e.button is MouseButton.MIDDLE:
            self._pan_from = pos

    def _on_mouse_wheel(self, e: MouseWheel) -> None:
        if self.cursor is None or not self.cursor_inside or self.renderer.last_window_cs is None:
            return
        anchor = self.renderer.to_real(self.cursor, self.scene)
        self.scene.cs.scale(1.0 + e.dy * config.WHEEL_SENSITIVITY, anchor)
        self._notify()

    def _on_key(self, e: Key) -> None:
        if not e.pressed:
            return
        if Modifier.PRIMARY in e.modifiers:
            self._on_shortcut(e.code)
        elif e.code is KeyCode.ESCAPE:
            self._on_escape(e)

    def _on_shortcut(self, code: KeyCode) -> None:
        host = self.host
        if code is KeyCode.S:
            self.save_scene()
        elif code is KeyCode.O:
            self.load_scene()
        elif host is None:
            return
        elif code is KeyCode.W:
            host.close_window()
        elif code is KeyCode.H:
            host.minimize_window()
        elif code is KeyCode.DIGIT1:
            self.maximized = not self.maximized
            host.set_maximized(self.maximized)
        elif code is KeyCode.DIGIT2:
            host.set_window_opacity(0.5 if host.window_opacity() == 1.0 else 1.0)

    def _on_escape(self, e: Key) -> None:
        if self.mode is Mode.WORK:
            if self.host is not None:
                self.host.close_window()
        elif self.mode is Mode.INFO:
            self.set_mode(Mode.WORK)
        elif self.host is not None:
            self.host.forward_to_dialog(e)

    def _on_close_request(self, e: CloseRequest) -> None:
        if self.host is not None:
            self.host.close_window()

    # ------------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------------

    def _notify(self) -> None:
        if self.host is not None:
            self.host.on_scene_changed()
