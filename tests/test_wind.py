"""
Tests for the wind animation.

These tests verify the profile ranges, the per-frame formulas, purity
over time, and agreement between the scalar and batched paths.
"""

import math

import jax.numpy as jnp
import numpy as np

from flora import wind
from flora.config import WindConfig


class TestWindProfile:
    """Tests for profile derivation."""

    def test_profile_ranges(self) -> None:
        """All four values lie in their ranges."""
        for i in range(200):
            p = wind.WindProfile.from_seed(i * 0.013)
            assert 0.5 <= p.speed < 1.5
            assert 0.05 <= p.strength < 0.15
            assert 0.1 <= p.turbulence < 0.3
            assert 0.0 <= p.direction < 2 * math.pi

    def test_profile_deterministic(self) -> None:
        """Same seed, same profile."""
        assert wind.WindProfile.from_seed(0.31) == wind.WindProfile.from_seed(0.31)

    def test_values_decorrelated(self) -> None:
        """Each value uses its own offset, so normalized draws differ."""
        p = wind.WindProfile.from_seed(0.5)
        normalized = {
            round((p.speed - 0.5) / 1.0, 9),
            round((p.strength - 0.05) / 0.1, 9),
            round((p.turbulence - 0.1) / 0.2, 9),
            round(p.direction / (2 * math.pi), 9),
        }
        assert len(normalized) == 4


class TestWindTick:
    """Tests for a single frame."""

    def test_matches_formulas(self) -> None:
        """Frame follows the documented sway formulas."""
        p = wind.WindProfile(speed=1.2, strength=0.1, turbulence=0.2, direction=0.8)
        t, h = 2.3, 3.5
        wind_x = math.sin(t * 1.2) * 0.1
        wind_z = math.cos(t * 1.2 + 0.3) * 0.1 * 0.7
        turb_x = math.sin(2.5 * t * 1.2) * 0.2 * 0.05
        turb_z = math.cos(2.7 * t * 1.2) * 0.2 * 0.04
        dir_x = (wind_x + turb_x) * math.cos(0.8)
        dir_z = (wind_z + turb_z) * math.sin(0.8)

        frame = wind.wind_tick(p, t, h)
        assert math.isclose(frame.stem_tilt[0], dir_z * 0.2)
        assert math.isclose(frame.stem_tilt[1], -dir_x * 0.2)
        assert math.isclose(frame.head_offset[0], dir_x * h * 0.2)
        assert math.isclose(frame.head_offset[1], dir_z * h * 0.2)

    def test_pure_in_time(self) -> None:
        """Repeated calls at the same t agree exactly."""
        p = wind.WindProfile.from_seed(0.9)
        assert wind.wind_tick(p, 4.2) == wind.wind_tick(p, 4.2)

    def test_restart_replays(self) -> None:
        """Running 0..T twice gives the same sequence."""
        p = wind.WindProfile.from_seed(0.25)
        times = [i / 60 for i in range(120)]
        first = [wind.wind_tick(p, t) for t in times]
        second = [wind.wind_tick(p, t) for t in times]
        assert first == second

    def test_head_offset_scales_with_stem(self) -> None:
        """Doubling stem height doubles the head offset, not the tilt."""
        p = wind.WindProfile.from_seed(0.6)
        short = wind.wind_tick(p, 1.7, stem_height=2.0)
        tall = wind.wind_tick(p, 1.7, stem_height=4.0)
        assert math.isclose(tall.head_offset[0], 2 * short.head_offset[0])
        assert tall.stem_tilt == short.stem_tilt

    def test_flutter_independent_of_profile(self) -> None:
        """Petal flutter depends only on time."""
        a = wind.wind_tick(wind.WindProfile.from_seed(0.1), 3.0)
        b = wind.wind_tick(wind.WindProfile.from_seed(0.7), 3.0)
        assert a.petal_flutter == b.petal_flutter

    def test_flutter_at_zero(self) -> None:
        """At t=0 only the cosine term (x) is nonzero."""
        flutter = wind.petal_flutter(0.0)
        assert flutter == (0.02, 0.0, 0.0)

    def test_sway_is_small(self) -> None:
        """Tilt stays well under 0.1 rad for any profile."""
        for i in range(50):
            p = wind.WindProfile.from_seed(i * 0.7)
            for t in np.linspace(0, 20, 40):
                frame = wind.wind_tick(p, float(t))
                assert abs(frame.stem_tilt[0]) < 0.1
                assert abs(frame.stem_tilt[1]) < 0.1

    def test_custom_config(self) -> None:
        """Zero tilt gain removes stem tilt."""
        config = WindConfig(stem_tilt_gain=0.0)
        frame = wind.wind_tick(wind.WindProfile.from_seed(0.3), 1.0, config=config)
        assert frame.stem_tilt == (0.0, 0.0)


class TestWindBatch:
    """Tests for the vectorized garden path."""

    def test_matches_scalar(self) -> None:
        """Batched frame agrees with wind_tick per flower."""
        seeds = [0.11, 0.52, 0.93, 12.5]
        heights = [1.0, 2.5, 4.0, 5.0]
        profiles = [wind.WindProfile.from_seed(s) for s in seeds]
        t = 3.3

        batch = wind.wind_tick_batch(wind.stack_profiles(profiles), t, jnp.array(heights))
        assert batch["stem_tilt"].shape == (4, 2)
        assert batch["head_offset"].shape == (4, 2)

        for i, (p, h) in enumerate(zip(profiles, heights)):
            frame = wind.wind_tick(p, t, h)
            assert jnp.allclose(batch["stem_tilt"][i], jnp.array(frame.stem_tilt), atol=1e-5)
            assert jnp.allclose(batch["head_offset"][i], jnp.array(frame.head_offset), atol=1e-5)
        assert jnp.allclose(batch["petal_flutter"], jnp.array(wind.petal_flutter(t)), atol=1e-6)

    def test_stack_profiles(self) -> None:
        """Stacking keeps order."""
        profiles = [wind.WindProfile.from_seed(s) for s in (0.2, 0.4)]
        stacked = wind.stack_profiles(profiles)
        assert jnp.isclose(stacked["speed"][1], profiles[1].speed)
