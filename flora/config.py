"""
Configuration and type definitions for the flower generator and garden.

This module defines the shape parameters a user tunes in the editor and
the constants used by the wind animator, the camera framing rules, and
the garden store.

Shape Parameters:
    petal_count: Number of petals around the head, in [3, 20]
    petal_length: Base petal length, in [0.5, 2.0]
    petal_width: Base petal width, in [0.1, 1.0]
    stem_height: Stem height, in [1, 5]
    petal_color / center_color / stem_color: "#RRGGBB" hex strings
    seed: Any finite real; drives all pseudo-random shape and wind jitter

The generator never enforces these domains itself. Callers validate
with ShapeParameters.is_valid() before rendering or planting.
"""

import math
import re
from dataclasses import dataclass

import numpy as np

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

# View modes understood by the camera framing
VIEW_SINGLE = "single"
VIEW_GARDEN = "garden"
VIEW_MODES = (VIEW_SINGLE, VIEW_GARDEN)


def random_hex_color(rng: np.random.Generator) -> str:
    """Draw a uniformly random "#RRGGBB" color."""
    return "#" + "".join(f"{int(v):02X}" for v in rng.integers(0, 256, size=3))


@dataclass(frozen=True)
class ShapeParameters:
    """
    User-tunable description of one flower's form.

    Immutable: a flower is re-rendered from a fresh instance whenever
    a slider moves, and a planted flower never changes shape.
    """

    petal_count: int = 8
    petal_length: float = 1.0
    petal_width: float = 0.5
    stem_height: float = 3.0
    petal_color: str = "#ff6b6b"
    center_color: str = "#feca57"
    stem_color: str = "#1dd1a1"
    seed: float = 0.0

    @classmethod
    def default(cls, seed: float = 0.0) -> "ShapeParameters":
        """The flower the editor starts with."""
        return cls(seed=seed)

    @classmethod
    def random(cls, rng: np.random.Generator) -> "ShapeParameters":
        """
        Draw a completely new random flower.

        Petal counts start at 5 so freshly generated flowers never look
        sparse, even though 3 and 4 are valid slider values.
        """
        return cls(
            petal_count=int(rng.integers(5, 20)),
            petal_length=float(0.5 + rng.random() * 1.5),
            petal_width=float(0.1 + rng.random() * 0.9),
            stem_height=float(1.0 + rng.random() * 4.0),
            petal_color=random_hex_color(rng),
            center_color=random_hex_color(rng),
            stem_color=random_hex_color(rng),
            seed=float(rng.random()),
        )

    def is_valid(self) -> bool:
        """Check every field lies inside its editor domain."""
        colors_ok = all(
            isinstance(c, str) and HEX_COLOR.match(c) is not None
            for c in (self.petal_color, self.center_color, self.stem_color)
        )
        return (
            3 <= self.petal_count <= 20
            and 0.5 <= self.petal_length <= 2.0
            and 0.1 <= self.petal_width <= 1.0
            and 1.0 <= self.stem_height <= 5.0
            and math.isfinite(self.seed)
            and colors_ok
        )


@dataclass(frozen=True)
class WindConfig:
    """
    Constants for the per-flower wind animation.

    Each profile value is drawn from the flower seed with its own offset
    so the four values are decorrelated.
    """

    # Seed offsets for each profile value
    speed_offset: float = 42.0
    strength_offset: float = 13.0
    turbulence_offset: float = 27.0
    direction_offset: float = 99.0

    # Profile ranges [lo, hi)
    speed_range: tuple[float, float] = (0.5, 1.5)
    strength_range: tuple[float, float] = (0.05, 0.15)
    turbulence_range: tuple[float, float] = (0.1, 0.3)
    direction_range: tuple[float, float] = (0.0, 2 * math.pi)

    # Per-frame coefficients
    z_phase: float = 0.3  # Phase lead of the z gust
    z_damping: float = 0.7  # Gusts along z are weaker
    turb_freq_x: float = 2.5
    turb_freq_z: float = 2.7
    turb_gain_x: float = 0.05
    turb_gain_z: float = 0.04
    stem_tilt_gain: float = 0.2  # Radians of stem tilt per unit wind
    head_sway_gain: float = 0.2  # Head offset per unit wind per unit stem height

    def __post_init__(self) -> None:
        for name in ("speed_range", "strength_range", "turbulence_range", "direction_range"):
            lo, hi = getattr(self, name)
            if hi < lo:
                raise ValueError(f"{name} must satisfy lo <= hi")


@dataclass(frozen=True)
class CameraConfig:
    """Camera framing constants for the editor and garden views."""

    min_distance: float = 2.0
    garden_max_distance: float = 30.0
    single_max_distance: float = 15.0  # Floor; tall stems extend it
    single_max_per_height: float = 3.0

    head_allowance: float = 1.0  # Extra height for the flower head
    single_eye_height_gain: float = 1.2
    single_eye_height_min: float = 5.0
    single_eye_distance_gain: float = 1.0
    single_eye_distance_min: float = 4.0
    single_target_gain: float = 0.3  # Look-at height as a fraction of stem

    single_offset_gain: float = 0.25  # Editor flower is lowered by this * stem
    single_offset_min: float = 0.5

    garden_eye: tuple[float, float, float] = (5.0, 5.0, 5.0)
    garden_target: tuple[float, float, float] = (0.0, 1.0, 0.0)
    focus_offset: float = 5.0  # Diagonal eye offset from a focused flower
    focus_eye_height: float = 5.0
    focus_target_lift: float = 1.0

    # Keeps the garden camera above ground and off the zenith
    polar_margin: float = 0.1


@dataclass(frozen=True)
class GardenConfig:
    """
    Constants for the planted-flower store.

    The duplicate-submission window absorbs accidental double clicks:
    a second plant by the same user within `dedup_window_ms` and within
    `dedup_tolerance` on both x and z is dropped.
    """

    collection_key: str = "plantedFlowers"
    dedup_window_ms: int = 1000
    dedup_tolerance: float = 0.1
    tall_stem_threshold: float = 4.0  # Stems above this are sunk into the ground
    tall_stem_sink: float = 0.15  # Depth per unit of stem above the threshold
    field_extent: float = 10.0  # Random placement covers [-extent, extent)

    def __post_init__(self) -> None:
        if self.dedup_window_ms < 0:
            raise ValueError("dedup_window_ms must be nonnegative")
        if self.dedup_tolerance < 0:
            raise ValueError("dedup_tolerance must be nonnegative")

    @classmethod
    def default(cls) -> "GardenConfig":
        """Store settings used by the web garden."""
        return cls()


@dataclass(frozen=True)
class PlantedFlower:
    """
    A flower planted in the shared garden.

    Carries the full shape so the garden can re-render it from its seed,
    plus ownership, placement, and watering history. Records are
    immutable; watering produces an updated copy.

    Invariants:
        - id is unique within a garden
        - water_count never decreases
        - last_watered, when set, is >= planted_at
        - position[1] is fixed when planted
    """

    id: str
    username: str
    petal_count: int
    petal_length: float
    petal_width: float
    stem_height: float
    petal_color: str
    center_color: str
    stem_color: str
    seed: float
    position: tuple[float, float, float]
    planted_at: int  # ms since epoch
    last_watered: int | None = None  # ms since epoch
    water_count: int = 0

    @classmethod
    def from_shape(
        cls,
        params: ShapeParameters,
        id: str,
        username: str,
        position: tuple[float, float, float],
        planted_at: int,
    ) -> "PlantedFlower":
        """Create a fresh, never-watered record from shape parameters."""
        return cls(
            id=id,
            username=username,
            petal_count=params.petal_count,
            petal_length=params.petal_length,
            petal_width=params.petal_width,
            stem_height=params.stem_height,
            petal_color=params.petal_color,
            center_color=params.center_color,
            stem_color=params.stem_color,
            seed=params.seed,
            position=position,
            planted_at=planted_at,
        )

    @property
    def shape(self) -> ShapeParameters:
        """The shape parameters this flower was planted with."""
        return ShapeParameters(
            petal_count=self.petal_count,
            petal_length=self.petal_length,
            petal_width=self.petal_width,
            stem_height=self.stem_height,
            petal_color=self.petal_color,
            center_color=self.center_color,
            stem_color=self.stem_color,
            seed=self.seed,
        )
