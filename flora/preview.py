"""
Matplotlib previews of flowers and the garden.

These are flat, quick-look renderings for the command line and for
checking generator output; the interactive 3D scene is drawn elsewhere
from the same geometry.

- render_flower: side view of one flower, optionally mid-sway
- render_garden: top-down map of planted flowers
"""

from __future__ import annotations

import math

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Circle, Ellipse

from flora.config import HEX_COLOR, PlantedFlower, ShapeParameters
from flora.geometry import build_flower
from flora.wind import WindProfile, wind_tick

LEAD_COLOR = "#1e1914"
SKY_COLOR = "#dbeafe"
GROUND_COLOR = "#5d9e5f"


def _check_color(color: str) -> str:
    if HEX_COLOR.match(color) is None:
        raise ValueError(f"Expected a #RRGGBB color, got {color!r}")
    return color


def draw_flower(ax: plt.Axes, params: ShapeParameters, t: float = 0.0, x0: float = 0.0):
    """
    Draw one flower in side view (x right, y up) with its base at (x0, 0).

    The wind frame at time t bends the head sideways; petals are drawn
    as ellipses projected onto the x-y plane, back petals first.
    """
    petal_color = _check_color(params.petal_color)
    center_color = _check_color(params.center_color)
    stem_color = _check_color(params.stem_color)

    geom = build_flower(params)
    frame = wind_tick(WindProfile.from_seed(params.seed), t, params.stem_height)
    head = np.array([x0 + frame.head_offset[0], geom.stem.height])

    # Stem: lead outline then fill, tapering toward the head
    ax.plot([x0, head[0]], [0.0, head[1]], color=LEAD_COLOR,
            linewidth=geom.stem.radius_base * 40 + 2, solid_capstyle="round", zorder=1)
    ax.plot([x0, head[0]], [0.0, head[1]], color=stem_color,
            linewidth=geom.stem.radius_base * 40, solid_capstyle="round", zorder=2)

    for side, leaf in zip((1, -1), geom.leaves):
        frac = leaf.height / max(geom.stem.height, 1e-9)
        attach = (x0 + (head[0] - x0) * frac, leaf.height)
        angle = side * math.degrees(abs(leaf.yaw))
        ax.add_patch(Ellipse(
            (attach[0] + side * leaf.length * 0.35, attach[1]),
            leaf.length, leaf.width, angle=angle,
            facecolor=stem_color, edgecolor=LEAD_COLOR, linewidth=1, zorder=3,
        ))

    # Painter's order: petals facing away (negative z) first
    flutter = frame.petal_flutter[1]
    petals = sorted(geom.petals, key=lambda p: math.sin(p.angle + flutter))
    for petal in petals:
        d = petal.direction()
        dx = math.cos(petal.angle + flutter) * math.cos(petal.bend)
        mid = head + 0.5 * petal.length * np.array([dx, d[1]])
        angle = math.degrees(math.atan2(d[1], dx))
        depth = math.sin(petal.angle + flutter)
        ax.add_patch(Ellipse(
            tuple(mid), petal.length, petal.width, angle=angle,
            facecolor=petal_color, edgecolor=LEAD_COLOR, linewidth=1,
            zorder=4 + depth,
        ))

    ax.add_patch(Circle(tuple(head), geom.center.radius, facecolor=center_color,
                        edgecolor=LEAD_COLOR, linewidth=1, zorder=6))


def render_flower(
    params: ShapeParameters,
    t: float = 0.0,
    figsize: tuple = (5, 7),
) -> tuple[plt.Figure, plt.Axes]:
    """
    Render a single flower preview.

    Args:
        params: Flower shape
        t: Animation time in seconds (0 = rest pose of the wind cycle)
        figsize: Figure size in inches

    Returns:
        (figure, axes) tuple
    """
    fig, ax = plt.subplots(figsize=figsize, facecolor=SKY_COLOR)
    reach = params.petal_length * 1.2 + 0.5
    ax.set_xlim(-reach - 1.0, reach + 1.0)
    ax.set_ylim(-0.5, params.stem_height + reach)
    ax.set_aspect("equal")
    ax.axis("off")

    ax.fill_between([-reach - 1.0, reach + 1.0], -0.5, 0.0, color=GROUND_COLOR, zorder=0)
    draw_flower(ax, params, t)
    return fig, ax


def render_garden(
    flowers: list[PlantedFlower],
    extent: float = 15.0,
    highlight: str | None = None,
    figsize: tuple = (8, 8),
) -> tuple[plt.Figure, plt.Axes]:
    """
    Render a top-down map of the garden.

    Each flower is a ring of petal dots around its center color, sized by
    petal length. Flowers owned by `highlight` are labelled.
    """
    fig, ax = plt.subplots(figsize=figsize)
    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect("equal")
    ax.set_facecolor(GROUND_COLOR)
    ax.set_xticks([])
    ax.set_yticks([])

    for flower in flowers:
        x, _, z = flower.position
        geom = build_flower(flower.shape)
        for petal in geom.petals:
            reach = petal.length * math.cos(petal.bend) * 0.5
            ax.add_patch(Ellipse(
                (x + math.cos(petal.angle) * reach, z + math.sin(petal.angle) * reach),
                petal.length * 0.6, petal.width * 0.6,
                angle=math.degrees(petal.angle),
                facecolor=flower.petal_color, edgecolor=LEAD_COLOR, linewidth=0.5, zorder=2,
            ))
        ax.add_patch(Circle((x, z), geom.center.radius, facecolor=flower.center_color,
                            edgecolor=LEAD_COLOR, linewidth=0.5, zorder=3))
        if highlight is not None and flower.username == highlight:
            ax.annotate(flower.username, (x, z + flower.petal_length + 0.3),
                        ha="center", fontsize=8, color="white", zorder=4)

    return fig, ax


def save_flower(filepath: str, params: ShapeParameters, t: float = 0.0, dpi: int = 150):
    """Render and save a flower preview to file."""
    fig, _ = render_flower(params, t)
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
    print(f"Saved to {filepath}")


def save_garden(filepath: str, flowers: list[PlantedFlower], dpi: int = 150, **kwargs):
    """Render and save a garden map to file."""
    fig, _ = render_garden(flowers, **kwargs)
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
    print(f"Saved to {filepath}")
