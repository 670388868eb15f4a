"""
Camera framing for the editor and garden views.

Pure derived state: the eye position, look-at target, and orbit limits
are recomputed from the view mode, the active stem height, and an
optional focused flower whenever any of them change.
"""

import math
from typing import NamedTuple

from flora.config import VIEW_GARDEN, VIEW_MODES, VIEW_SINGLE, CameraConfig

DEFAULT_CAMERA = CameraConfig()

Vec3 = tuple[float, float, float]


class CameraFrame(NamedTuple):
    """
    Camera placement and orbit limits.

    Attributes:
        eye: Camera position
        target: Look-at point (also the orbit pivot)
        min_distance: Closest zoom
        max_distance: Furthest zoom
        min_polar: Smallest polar angle from straight up (radians)
        max_polar: Largest polar angle from straight up (radians)
        scene_offset: Vertical shift applied to the displayed flower
    """

    eye: Vec3
    target: Vec3
    min_distance: float
    max_distance: float
    min_polar: float
    max_polar: float
    scene_offset: float

    def distance(self) -> float:
        """Distance from eye to target."""
        return math.dist(self.eye, self.target)

    def clamp_distance(self, distance: float) -> float:
        """Clamp a requested zoom distance into the allowed range."""
        return min(max(distance, self.min_distance), self.max_distance)


def _frame_single(stem_height: float, config: CameraConfig) -> CameraFrame:
    # Steep downward angle that keeps the whole plant in view
    total_height = stem_height + config.head_allowance
    eye_height = max(total_height * config.single_eye_height_gain, config.single_eye_height_min)
    eye_distance = max(
        total_height * config.single_eye_distance_gain, config.single_eye_distance_min
    )
    target_height = stem_height * config.single_target_gain
    return CameraFrame(
        eye=(0.0, eye_height, eye_distance),
        target=(0.0, target_height, 0.0),
        min_distance=config.min_distance,
        max_distance=max(config.single_max_distance, stem_height * config.single_max_per_height),
        min_polar=0.0,
        max_polar=math.pi,
        scene_offset=-max(config.single_offset_min, stem_height * config.single_offset_gain),
    )


def _frame_garden(focus: Vec3 | None, config: CameraConfig) -> CameraFrame:
    if focus is not None:
        x, y, z = focus
        eye = (x + config.focus_offset, config.focus_eye_height, z + config.focus_offset)
        target = (x, y + config.focus_target_lift, z)
    else:
        eye = config.garden_eye
        target = config.garden_target
    return CameraFrame(
        eye=tuple(float(v) for v in eye),
        target=tuple(float(v) for v in target),
        min_distance=config.min_distance,
        max_distance=config.garden_max_distance,
        min_polar=config.polar_margin,
        max_polar=math.pi / 2 - config.polar_margin,
        scene_offset=0.0,
    )


def frame_camera(
    mode: str,
    stem_height: float = 3.0,
    focus: Vec3 | None = None,
    config: CameraConfig = DEFAULT_CAMERA,
) -> CameraFrame:
    """
    Compute the camera for a view.

    Args:
        mode: "single" (editing one flower) or "garden" (field overview)
        stem_height: Height of the flower being edited (single mode)
        focus: Position of a flower to centre on (garden mode only)
        config: Framing constants

    Returns:
        CameraFrame for the view

    Raises:
        ValueError: If mode is not a known view mode
    """
    if mode == VIEW_SINGLE:
        return _frame_single(stem_height, config)
    if mode == VIEW_GARDEN:
        return _frame_garden(focus, config)
    raise ValueError(f"Unknown view mode: {mode!r}. Expected one of {VIEW_MODES}")
