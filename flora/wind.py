"""
Per-flower wind animation.

Each flower derives a wind profile once from its seed:

    speed in [0.5, 1.5), strength in [0.05, 0.15),
    turbulence in [0.1, 0.3), direction in [0, 2pi)

Every frame the profile and the elapsed time give the sway:

    wind_x = sin(t * speed) * strength
    wind_z = cos(t * speed + 0.3) * strength * 0.7
    turb_x = sin(2.5 * t * speed) * turbulence * 0.05
    turb_z = cos(2.7 * t * speed) * turbulence * 0.04
    dir_x  = (wind_x + turb_x) * cos(direction)
    dir_z  = (wind_z + turb_z) * sin(direction)

The stem tilts by (dir_z, -dir_x) * 0.2, the head shifts sideways by
(dir_x, dir_z) * stem_height * 0.2, and the petal cluster flutters with
small fixed sinusoids. Motion is a pure function of elapsed time, so
restarting at t = 0 replays it exactly and nothing accumulates.
"""

import math
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from flora.config import WindConfig
from flora.noise import seeded_random

DEFAULT_WIND = WindConfig()

# Petal flutter: (frequency, amplitude) about x, y, z
FLUTTER_X = (2.5, 0.02)
FLUTTER_Y = (3.0, 0.03)
FLUTTER_Z = (4.0, 0.01)


class WindProfile(NamedTuple):
    """Per-flower wind constants derived from the seed."""

    speed: float
    strength: float
    turbulence: float
    direction: float

    @classmethod
    def from_seed(cls, seed: float, config: WindConfig = DEFAULT_WIND) -> "WindProfile":
        """Derive the profile for a flower seed."""
        return cls(
            speed=seeded_random(seed, config.speed_offset, *config.speed_range),
            strength=seeded_random(seed, config.strength_offset, *config.strength_range),
            turbulence=seeded_random(
                seed, config.turbulence_offset, *config.turbulence_range
            ),
            direction=seeded_random(
                seed, config.direction_offset, *config.direction_range
            ),
        )


class WindFrame(NamedTuple):
    """
    Sway offsets for one frame.

    Attributes:
        stem_tilt: (rotation about x, rotation about z) in radians
        head_offset: (x, z) lateral displacement of the flower head
        petal_flutter: (x, y, z) rotation of the petal cluster in radians
    """

    stem_tilt: tuple[float, float]
    head_offset: tuple[float, float]
    petal_flutter: tuple[float, float, float]


def directed_wind(
    profile: WindProfile, t: float, config: WindConfig = DEFAULT_WIND
) -> tuple[float, float]:
    """Wind plus turbulence projected onto the profile direction."""
    phase = t * profile.speed
    wind_x = math.sin(phase) * profile.strength
    wind_z = math.cos(phase + config.z_phase) * profile.strength * config.z_damping
    turb_x = math.sin(config.turb_freq_x * phase) * profile.turbulence * config.turb_gain_x
    turb_z = math.cos(config.turb_freq_z * phase) * profile.turbulence * config.turb_gain_z
    dir_x = (wind_x + turb_x) * math.cos(profile.direction)
    dir_z = (wind_z + turb_z) * math.sin(profile.direction)
    return dir_x, dir_z


def petal_flutter(t: float) -> tuple[float, float, float]:
    """Cosmetic petal flutter, independent of the wind profile."""
    return (
        math.cos(t * FLUTTER_X[0]) * FLUTTER_X[1],
        math.sin(t * FLUTTER_Y[0]) * FLUTTER_Y[1],
        math.sin(t * FLUTTER_Z[0]) * FLUTTER_Z[1],
    )


def wind_tick(
    profile: WindProfile,
    t: float,
    stem_height: float = 3.0,
    config: WindConfig = DEFAULT_WIND,
) -> WindFrame:
    """
    Compute the sway for one frame.

    Args:
        profile: Flower wind profile
        t: Seconds since the animation started
        stem_height: Stem height; taller stems swing their head further
        config: Wind coefficients

    Returns:
        WindFrame with stem tilt, head offset, and petal flutter
    """
    dir_x, dir_z = directed_wind(profile, t, config)
    tilt = config.stem_tilt_gain
    sway = stem_height * config.head_sway_gain
    return WindFrame(
        stem_tilt=(dir_z * tilt, -dir_x * tilt),
        head_offset=(dir_x * sway, dir_z * sway),
        petal_flutter=petal_flutter(t),
    )


def stack_profiles(profiles: list[WindProfile]) -> dict[str, Array]:
    """Stack profiles into per-field arrays for wind_tick_batch."""
    return {
        "speed": jnp.array([p.speed for p in profiles]),
        "strength": jnp.array([p.strength for p in profiles]),
        "turbulence": jnp.array([p.turbulence for p in profiles]),
        "direction": jnp.array([p.direction for p in profiles]),
    }


def wind_tick_batch(
    profiles: dict[str, Array],
    t: float,
    stem_heights: Array,
    config: WindConfig = DEFAULT_WIND,
) -> dict[str, Array]:
    """
    Compute one frame of sway for a whole garden at once.

    This is more efficient than calling wind_tick per flower as it uses
    vectorized operations. Agrees with wind_tick to float32 precision.

    Args:
        profiles: Arrays from stack_profiles, each of shape (n,)
        t: Seconds since the animation started
        stem_heights: Stem heights, shape (n,)
        config: Wind coefficients

    Returns:
        Dict with "stem_tilt" (n, 2), "head_offset" (n, 2) and
        "petal_flutter" (3,), the last being shared by all flowers
    """
    phase = t * profiles["speed"]
    strength = profiles["strength"]
    turbulence = profiles["turbulence"]

    wind_x = jnp.sin(phase) * strength
    wind_z = jnp.cos(phase + config.z_phase) * strength * config.z_damping
    turb_x = jnp.sin(config.turb_freq_x * phase) * turbulence * config.turb_gain_x
    turb_z = jnp.cos(config.turb_freq_z * phase) * turbulence * config.turb_gain_z

    dir_x = (wind_x + turb_x) * jnp.cos(profiles["direction"])
    dir_z = (wind_z + turb_z) * jnp.sin(profiles["direction"])

    sway = jnp.asarray(stem_heights) * config.head_sway_gain
    stem_tilt = jnp.stack(
        [dir_z * config.stem_tilt_gain, -dir_x * config.stem_tilt_gain], axis=-1
    )
    head_offset = jnp.stack([dir_x * sway, dir_z * sway], axis=-1)

    return {
        "stem_tilt": stem_tilt,
        "head_offset": head_offset,
        "petal_flutter": jnp.array(petal_flutter(t)),
    }
