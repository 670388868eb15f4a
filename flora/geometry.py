"""
Procedural flower geometry.

Turns ShapeParameters into a flat description of one flower that a
renderer can turn into meshes or patches:

    - petals: evenly spaced around the head, each with jittered length
      and width (+/-10%) and a small upward bend
    - leaves: a fixed pair on the stem, one at 30% and one at 60% height
    - stem: a tapered cylinder
    - center: the sphere at the top of the stem

The builder is a pure function of its parameters. Rebuilding from the
same ShapeParameters always gives bit-identical petals.
"""

import math
from dataclasses import asdict, dataclass, replace

import numpy as np

from flora.config import ShapeParameters
from flora.noise import make_random

# Per-petal seed offsets keeping the three draws independent
LENGTH_OFFSET = 0.0
WIDTH_OFFSET = 0.1
BEND_OFFSET = 0.2

JITTER_BASE = 0.9  # Petal scale in [0.9, 1.1)
JITTER_SPAN = 0.2
BEND_RANGE = (0.1, 0.3)  # Radians

STEM_RADIUS_BASE = 0.15
STEM_RADIUS_TOP = 0.1
CENTER_RADIUS = 0.3


@dataclass(frozen=True)
class PetalGeom:
    """One petal around the flower head."""

    index: int
    angle: float  # Azimuth around the stem axis (radians)
    length: float
    width: float
    bend: float  # Upward tilt from horizontal (radians)

    def direction(self) -> np.ndarray:
        """Unit vector from the head center toward the petal tip (x, y, z)."""
        c = math.cos(self.bend)
        return np.array(
            [c * math.cos(self.angle), math.sin(self.bend), c * math.sin(self.angle)],
            dtype=float,
        )

    def tip_position(self, head_height: float) -> np.ndarray:
        """World position of the petal tip for a head at (0, head_height, 0)."""
        return np.array([0.0, head_height, 0.0]) + self.length * self.direction()


@dataclass(frozen=True)
class LeafGeom:
    """A flat leaf attached to the stem."""

    height: float  # Attachment height along the stem
    width: float
    length: float
    yaw: float  # Rotation around the stem axis (radians)


@dataclass(frozen=True)
class StemGeom:
    """Tapered stem cylinder standing on the origin."""

    radius_base: float
    radius_top: float
    height: float


@dataclass(frozen=True)
class CenterGeom:
    """Sphere at the top of the stem."""

    radius: float
    height: float


@dataclass(frozen=True)
class FlowerGeometry:
    """Complete renderable description of one flower."""

    petals: tuple[PetalGeom, ...]
    leaves: tuple[LeafGeom, LeafGeom]
    stem: StemGeom
    center: CenterGeom

    def to_dict(self) -> dict:
        """Plain-data form consumed by the rendering layer."""
        return {
            "petals": [asdict(p) for p in self.petals],
            "leaves": [asdict(leaf) for leaf in self.leaves],
            "stem": asdict(self.stem),
            "center": asdict(self.center),
        }


def build_petals(params: ShapeParameters) -> tuple[PetalGeom, ...]:
    """
    Lay out petals evenly around the head.

    Petal i sits at angle (i / petal_count) * 2pi. Its draws are keyed by
    seed + i so neighbouring petals differ, with fixed offsets separating
    length, width, and bend. A nonpositive petal count yields no petals.
    """
    random = make_random(params.seed)
    count = params.petal_count
    petals = []
    for i in range(max(0, count)):
        petal_seed = params.seed + i
        length = params.petal_length * (
            JITTER_BASE + random(0.0, JITTER_SPAN, petal_seed + LENGTH_OFFSET)
        )
        width = params.petal_width * (
            JITTER_BASE + random(0.0, JITTER_SPAN, petal_seed + WIDTH_OFFSET)
        )
        bend = random(BEND_RANGE[0], BEND_RANGE[1], petal_seed + BEND_OFFSET)
        petals.append(
            PetalGeom(
                index=i,
                angle=(i / count) * 2 * math.pi,
                length=length,
                width=width,
                bend=bend,
            )
        )
    return tuple(petals)


def build_leaves(stem_height: float) -> tuple[LeafGeom, LeafGeom]:
    """The fixed leaf pair: lower leaf larger, opposite yaw."""
    return (
        LeafGeom(height=stem_height * 0.3, width=0.4, length=0.8, yaw=math.pi / 4),
        LeafGeom(height=stem_height * 0.6, width=0.4, length=0.6, yaw=-math.pi / 4),
    )


def build_flower(params: ShapeParameters) -> FlowerGeometry:
    """Build the full flower geometry for a parameter set."""
    return FlowerGeometry(
        petals=build_petals(params),
        leaves=build_leaves(params.stem_height),
        stem=StemGeom(
            radius_base=STEM_RADIUS_BASE,
            radius_top=STEM_RADIUS_TOP,
            height=params.stem_height,
        ),
        center=CenterGeom(radius=CENTER_RADIUS, height=params.stem_height),
    )


def render(params: ShapeParameters, seed: float | None = None) -> dict:
    """
    Renderer entry point, called on every parameter change.

    Args:
        params: Shape parameters from the editor or a planted record
        seed: Optional seed overriding params.seed

    Returns:
        {"petals": [...], "leaves": [...], "stem": {...}, "center": {...}}
    """
    if seed is not None:
        params = replace(params, seed=seed)
    return build_flower(params).to_dict()
