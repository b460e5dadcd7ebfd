"""
Input/Output Manager (JSON)
Handles saving and loading the Scene to .json files.

Schema:
    {
      "version": "<package version>",
      "ownCS": {"min": {"x": float, "y": float}, "max": {"x": float, "y": float}},
      "points": [{"pos": {"x": float, "y": float}, "set": "FIRST_SET" | "SECOND_SET"}, ...]
    }

Unknown keys are ignored on load. Floats are written with repr(), so a
save/load cycle reproduces every double bit for bit.
"""
import json
import logging
import math
import os
import stat
import tempfile
from importlib.metadata import version, PackageNotFoundError
from typing import Any

from enclosingcircle.errors import InvalidViewport, SceneIOError, SceneParseError
from enclosingcircle.model.coordinate_systems import RealCS
from enclosingcircle.model.geometry_primitives import Vec2d
from enclosingcircle.model.state import Point, PointSet, Scene

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("enclosingcircle")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


class IOManager:

    # --- ENCODING ---

    @staticmethod
    def _vec_to_dict(v: Vec2d) -> dict[str, float]:
        return {"x": v.x, "y": v.y}

    @staticmethod
    def scene_to_dict(scene: Scene) -> dict[str, Any]:
        return {
            "version": APP_VERSION,
            "ownCS": {
                "min": IOManager._vec_to_dict(scene.cs.min),
                "max": IOManager._vec_to_dict(scene.cs.max),
            },
            "points": [
                {"pos": IOManager._vec_to_dict(p.pos), "set": p.set.value}
                for p in scene.points
            ],
        }

    @staticmethod
    def _file_mode(filepath: str) -> int:
        """Mode for a saved file: keep the existing one, else honour the umask."""
        try:
            return stat.S_IMODE(os.stat(filepath).st_mode)
        except OSError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    @staticmethod
    def save_scene(scene: Scene, filepath: str) -> None:
        """
        Write the scene atomically: temp file in the target directory, then rename.

        Raises:
            SceneIOError: on any filesystem failure. The target is left untouched.
        """
        logger.info(f"Saving scene to: {filepath}")
        try:
            text = json.dumps(IOManager.scene_to_dict(scene), indent=2, allow_nan=False)
        except ValueError as e:
            raise SceneIOError(f"Scene contains values that cannot be saved: {e}") from e

        directory = os.path.dirname(os.path.abspath(filepath))
        temp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(prefix=".scene-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(temp_path, IOManager._file_mode(filepath))
            os.replace(temp_path, filepath)
            temp_path = None
        except OSError as e:
            logger.error(f"Failed to save scene: {e}")
            raise SceneIOError(f"Could not write file '{filepath}': {e}") from e
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError as e:
                    logger.warning(f"Could not delete temp file '{temp_path}': {e}")

        logger.info(f"Scene saved to: {filepath} ({len(scene.points)} points)")

    # --- DECODING ---

    @staticmethod
    def _require(obj: Any, key: str, where: str) -> Any:
        if not isinstance(obj, dict):
            raise SceneParseError(f"'{where}' must be an object")
        if key not in obj:
            raise SceneParseError(f"Missing required key '{key}' in '{where}'")
        return obj[key]

    @staticmethod
    def _number(value: Any, where: str) -> float:
        # bool is an int subclass, but 'true' is not a coordinate
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SceneParseError(f"'{where}' must be a number, got {value!r}")
        try:
            number = float(value)
        except OverflowError:
            number = math.inf
        if not math.isfinite(number):
            raise SceneParseError(f"'{where}' must be finite, got {value!r}")
        return number

    @staticmethod
    def _vec_from_dict(obj: Any, where: str) -> Vec2d:
        x = IOManager._number(IOManager._require(obj, "x", where), f"{where}.x")
        y = IOManager._number(IOManager._require(obj, "y", where), f"{where}.y")
        return Vec2d(x, y)

    @staticmethod
    def scene_from_dict(data: Any) -> Scene:
        """
        Build a Scene from a decoded JSON document.

        Raises:
            SceneParseError: on any schema violation.
        """
        own_cs = IOManager._require(data, "ownCS", "document")
        cs_min = IOManager._vec_from_dict(IOManager._require(own_cs, "min", "ownCS"), "ownCS.min")
        cs_max = IOManager._vec_from_dict(IOManager._require(own_cs, "max", "ownCS"), "ownCS.max")
        try:
            cs = RealCS(cs_min, cs_max)
        except InvalidViewport as e:
            raise SceneParseError(f"Invalid 'ownCS': {e}") from e

        raw_points = IOManager._require(data, "points", "document")
        if not isinstance(raw_points, list):
            raise SceneParseError("'points' must be a list")

        points: list[Point] = []
        for i, raw in enumerate(raw_points):
            where = f"points[{i}]"
            pos = IOManager._vec_from_dict(IOManager._require(raw, "pos", where), f"{where}.pos")
            set_name = IOManager._require(raw, "set", where)
            try:
                point_set = PointSet(set_name)
            except ValueError:
                raise SceneParseError(f"'{where}.set' must be one of "
                                      f"{[s.value for s in PointSet]}, got {set_name!r}") from None
            points.append(Point(pos, point_set))

        return Scene(cs=cs, points=points)

    @staticmethod
    def _reject_constant(name: str) -> float:
        raise SceneParseError(f"Non-finite number '{name}' is not allowed")

    @staticmethod
    def load_scene(filepath: str) -> Scene:
        """
        Read a scene file into a new Scene. Never touches existing state.

        Raises:
            SceneIOError: the file could not be read.
            SceneParseError: the file is not a valid scene document.
        """
        logger.info(f"Loading scene from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise SceneParseError(f"File '{filepath}' is not UTF-8 text: {e}") from e
        except OSError as e:
            logger.error(f"Failed to read scene file: {e}")
            raise SceneIOError(f"Could not read file '{filepath}': {e}") from e

        try:
            data = json.loads(text, parse_constant=IOManager._reject_constant)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError, over-long integer literals and runaway nesting
            raise SceneParseError(f"File '{filepath}' is not valid JSON: {e}") from e

        scene = IOManager.scene_from_dict(data)
        logger.info(f"Scene loaded from: {filepath} ({len(scene.points)} points)")
        return scene

