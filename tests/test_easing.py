"""Tests for mockstage easing curves."""

import math

import pytest

from mockstage.core.easing import (
    EASING_FUNCTIONS,
    EASING_LABELS,
    Easing,
    coerce_easing,
    ease,
    easing_function,
    linear,
)


class TestEndpoints:
    @pytest.mark.parametrize("kind", list(Easing))
    def test_starts_at_zero_and_ends_at_one(self, kind):
        assert ease(kind, 0.0) == pytest.approx(0.0)
        assert ease(kind, 1.0) == pytest.approx(1.0)


class TestCurves:
    def test_linear_is_identity(self):
        assert ease(Easing.LINEAR, 0.37) == pytest.approx(0.37)

    def test_ease_in_is_quadratic(self):
        assert ease(Easing.EASE_IN, 0.5) == pytest.approx(0.25)

    def test_ease_out_mirrors_ease_in(self):
        assert ease(Easing.EASE_OUT, 0.5) == pytest.approx(0.75)

    def test_ease_in_out_is_symmetric(self):
        assert ease(Easing.EASE_IN_OUT, 0.25) == pytest.approx(0.125)
        assert ease(Easing.EASE_IN_OUT, 0.5) == pytest.approx(0.5)
        assert ease(Easing.EASE_IN_OUT, 0.75) == pytest.approx(0.875)

    @pytest.mark.parametrize("t,expected", [
        (0.2, 7.5625 * 0.2 ** 2),
        (0.5, 7.5625 * (0.5 - 1.5 / 2.75) ** 2 + 0.75),
        (0.8, 7.5625 * (0.8 - 2.25 / 2.75) ** 2 + 0.9375),
        (0.95, 7.5625 * (0.95 - 2.625 / 2.75) ** 2 + 0.984375),
    ])
    def test_bounce_segments(self, t, expected):
        assert ease(Easing.BOUNCE, t) == pytest.approx(expected)

    def test_bounce_is_continuous_at_breakpoints(self):
        for edge in (1 / 2.75, 2 / 2.75, 2.5 / 2.75):
            assert ease(Easing.BOUNCE, edge - 1e-9) == pytest.approx(ease(Easing.BOUNCE, edge), abs=1e-6)

    @pytest.mark.parametrize("t", [0.1, 0.25, 0.5, 0.9])
    def test_elastic_values(self, t):
        expected = 2 ** (-10 * t) * math.sin((10 * t - 0.75) * 2 * math.pi / 3) + 1
        assert ease(Easing.ELASTIC, t) == pytest.approx(expected)

    def test_elastic_overshoots(self):
        samples = [ease(Easing.ELASTIC, i / 100) for i in range(1, 100)]
        assert max(samples) > 1.0


class TestLookup:
    def test_plain_names_resolve(self):
        assert easing_function("easeIn") is EASING_FUNCTIONS[Easing.EASE_IN]

    def test_unknown_name_falls_back_to_linear(self):
        assert easing_function("wobble") is linear
        assert ease("wobble", 0.3) == pytest.approx(0.3)

    def test_none_falls_back_to_linear(self):
        assert ease(None, 0.6) == pytest.approx(0.6)

    def test_coerce_unknown(self):
        assert coerce_easing("wobble") is Easing.LINEAR
        assert coerce_easing("bounce") is Easing.BOUNCE

    def test_every_kind_has_a_label(self):
        assert set(EASING_LABELS) == set(Easing)
