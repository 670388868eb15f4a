"""
Watering effect: droplets falling onto a flower.

Eight droplets start on a small ring above the flower head and fall
under gravity after a short per-droplet delay, fading out as they reach
the ground. Start heights and delays are drawn from the flower seed, so
the effect replays identically, and each frame is a pure function of
the time since watering began.
"""

import math
from typing import NamedTuple

from flora.noise import make_random

NUM_DROPLETS = 8
RING_RADIUS = 0.4
START_LIFT = 1.5  # Above the top of the stem
START_JITTER = 0.5
MAX_DELAY = 0.5
GRAVITY = 9.8
FADE_HEIGHT = 0.5
OPACITY = 0.8
DURATION = 2.0

# Seed offsets for droplet draws (one per droplet, stepped by index)
HEIGHT_OFFSET = 501.0
DELAY_OFFSET = 601.0


class Droplet(NamedTuple):
    """A droplet's start position and fall delay."""

    x: float
    y: float
    z: float
    delay: float


class DropletState(NamedTuple):
    """A droplet at one instant."""

    x: float
    y: float
    z: float
    opacity: float


def make_droplets(stem_height: float, seed: float) -> list[Droplet]:
    """Lay out the droplets for watering a flower of the given height."""
    random = make_random(seed)
    droplets = []
    for i in range(NUM_DROPLETS):
        angle = (i / NUM_DROPLETS) * 2 * math.pi
        droplets.append(
            Droplet(
                x=math.cos(angle) * RING_RADIUS,
                y=stem_height + START_LIFT + random(0.0, START_JITTER, HEIGHT_OFFSET + i),
                z=math.sin(angle) * RING_RADIUS,
                delay=random(0.0, MAX_DELAY, DELAY_OFFSET + i),
            )
        )
    return droplets


def droplet_frame(
    droplets: list[Droplet], elapsed: float, duration: float = DURATION
) -> list[DropletState] | None:
    """
    Droplet positions at `elapsed` seconds after watering began.

    A droplet waits at its start until its delay passes, then falls with
    y = y0 - g/2 * (elapsed - delay)^2, clamped at the ground. Below the
    fade height its opacity drops linearly to zero.

    Returns:
        One DropletState per droplet, or None once the effect is over
    """
    if elapsed > duration:
        return None

    states = []
    for d in droplets:
        y = d.y
        if elapsed > d.delay:
            fall = elapsed - d.delay
            y = d.y - 0.5 * GRAVITY * fall * fall
        opacity = OPACITY if y > FADE_HEIGHT else max(0.0, y / FADE_HEIGHT)
        states.append(DropletState(x=d.x, y=max(0.0, y), z=d.z, opacity=opacity))
    return states
