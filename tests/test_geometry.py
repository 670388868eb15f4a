"""
Tests for procedural flower geometry.

These tests verify determinism, petal layout, jitter bounds, and the
renderer-facing dict form.
"""

import math
from dataclasses import replace

import numpy as np

from flora import geometry
from flora.config import ShapeParameters


def make_params(**kwargs) -> ShapeParameters:
    """Default editor flower with overrides."""
    return replace(ShapeParameters.default(seed=0.4242), **kwargs)


class TestDeterminism:
    """Same parameters, same geometry."""

    def test_rebuild_identical(self) -> None:
        """Two independent builds are equal field for field."""
        params = make_params(petal_count=13)
        assert geometry.build_flower(params) == geometry.build_flower(params)

    def test_render_identical(self) -> None:
        """Two render calls give identical dicts."""
        params = make_params()
        assert geometry.render(params) == geometry.render(params)

    def test_seed_changes_shape(self) -> None:
        """A different seed gives different petal jitter."""
        a = geometry.build_petals(make_params(seed=0.1))
        b = geometry.build_petals(make_params(seed=0.2))
        assert [p.length for p in a] != [p.length for p in b]

    def test_render_seed_override(self) -> None:
        """render(params, seed) uses the given seed."""
        params = make_params(seed=0.1)
        overridden = geometry.render(params, seed=0.2)
        assert overridden == geometry.render(make_params(seed=0.2))


class TestPetals:
    """Tests for petal layout."""

    def test_petal_count(self) -> None:
        """One petal per petal_count."""
        for n in (3, 8, 20):
            assert len(geometry.build_petals(make_params(petal_count=n))) == n

    def test_even_spacing(self) -> None:
        """Petal i sits at (i / n) * 2pi."""
        petals = geometry.build_petals(make_params(petal_count=6))
        for i, petal in enumerate(petals):
            assert petal.index == i
            assert math.isclose(petal.angle, i / 6 * 2 * math.pi)

    def test_jitter_within_ten_percent(self) -> None:
        """Length and width stay within [0.9, 1.1) of the base."""
        params = make_params(petal_count=20, petal_length=1.5, petal_width=0.4)
        for petal in geometry.build_petals(params):
            assert 0.9 * 1.5 <= petal.length < 1.1 * 1.5
            assert 0.9 * 0.4 <= petal.width < 1.1 * 0.4

    def test_bend_range(self) -> None:
        """Bend is in [0.1, 0.3) radians."""
        for petal in geometry.build_petals(make_params(petal_count=20)):
            assert 0.1 <= petal.bend < 0.3

    def test_draws_are_distinct(self) -> None:
        """Length, width, and bend use different draws."""
        params = make_params(petal_count=1, petal_length=1.0, petal_width=1.0)
        petal = geometry.build_petals(params)[0]
        length_jitter = petal.length - 0.9
        width_jitter = petal.width - 0.9
        assert length_jitter != width_jitter

    def test_zero_petals_empty(self) -> None:
        """Out-of-domain counts degenerate to no petals."""
        assert geometry.build_petals(make_params(petal_count=0)) == ()
        assert geometry.build_petals(make_params(petal_count=-3)) == ()

    def test_tip_position(self) -> None:
        """Tip lies one petal length from the head center."""
        petal = geometry.build_petals(make_params())[2]
        tip = petal.tip_position(3.0)
        assert np.isclose(np.linalg.norm(tip - np.array([0.0, 3.0, 0.0])), petal.length)
        assert tip[1] > 3.0  # Bent upward


class TestStemAndLeaves:
    """Tests for the fixed parts."""

    def test_stem(self) -> None:
        """Stem tapers from 0.15 to 0.1 over the stem height."""
        stem = geometry.build_flower(make_params(stem_height=4.2)).stem
        assert stem.radius_base == 0.15
        assert stem.radius_top == 0.1
        assert stem.height == 4.2

    def test_leaf_pair(self) -> None:
        """Two leaves at 30% and 60% of the stem with opposite yaw."""
        lower, upper = geometry.build_flower(make_params(stem_height=2.0)).leaves
        assert math.isclose(lower.height, 0.6)
        assert math.isclose(upper.height, 1.2)
        assert lower.length == 0.8 and upper.length == 0.6
        assert lower.yaw == -upper.yaw

    def test_center_on_top(self) -> None:
        """Center sphere sits at the stem top."""
        center = geometry.build_flower(make_params(stem_height=2.5)).center
        assert center.height == 2.5
        assert center.radius == 0.3


class TestRenderDict:
    """Tests for the renderer-facing dict."""

    def test_keys(self) -> None:
        """Dict has petals, leaves, stem, center."""
        out = geometry.render(make_params(petal_count=5))
        assert set(out) == {"petals", "leaves", "stem", "center"}
        assert len(out["petals"]) == 5
        assert len(out["leaves"]) == 2
        assert out["stem"]["height"] == 3.0

    def test_petal_fields(self) -> None:
        """Petal dicts carry angle, length, width, bend."""
        petal = geometry.render(make_params())["petals"][0]
        assert set(petal) == {"index", "angle", "length", "width", "bend"}
