"""Tests for keyframe interpolation and upsert."""

import pytest

from mockstage.core.easing import Easing
from mockstage.core.interpolation import (
    find_active_keyframe,
    interpolate,
    keyframes_for,
    upsert_keyframe,
)
from mockstage.core.model import Keyframe, KeyframeProperty


def kf(t, prop, value, easing=Easing.LINEAR):
    return Keyframe(timestamp=t, property=KeyframeProperty(prop), value=value, easing=easing)


@pytest.fixture
def linear_x():
    return [kf(0, "x", 0), kf(2, "x", 100)]


class TestInterpolate:
    def test_midpoint(self, linear_x):
        assert interpolate(0, linear_x, 1, "x") == pytest.approx(50)

    def test_before_first_holds_first_value(self, linear_x):
        assert interpolate(0, linear_x, -1, "x") == pytest.approx(0)

    def test_after_last_holds_last_value(self, linear_x):
        assert interpolate(0, linear_x, 5, "x") == pytest.approx(100)

    def test_no_keyframes_returns_base(self):
        assert interpolate(42, [], 1, "x") == 42

    def test_other_property_keyframes_ignored(self, linear_x):
        assert interpolate(7, linear_x, 1, "y") == 7

    def test_boundary_flatness_uses_extreme_keyframes(self):
        kfs = [kf(1, "scale", 2), kf(3, "scale", 4)]
        assert interpolate(1, kfs, 1, "scale") == 2
        assert interpolate(1, kfs, 3, "scale") == 4

    def test_unsorted_input(self):
        kfs = [kf(2, "x", 100), kf(0, "x", 0)]
        assert interpolate(0, kfs, 0.5, "x") == pytest.approx(25)

    def test_end_keyframe_easing_shapes_segment(self):
        kfs = [kf(0, "x", 0, Easing.LINEAR), kf(2, "x", 100, Easing.EASE_IN)]
        # progress 0.5 eased by easeIn -> 0.25
        assert interpolate(0, kfs, 1, "x") == pytest.approx(25)

    def test_three_keyframes_picks_bracket(self):
        kfs = [kf(0, "rotation", 0), kf(1, "rotation", 90), kf(3, "rotation", 0)]
        assert interpolate(0, kfs, 2, "rotation") == pytest.approx(45)

    def test_idempotent(self, linear_x):
        assert interpolate(0, linear_x, 1.3, "x") == interpolate(0, linear_x, 1.3, "x")


class TestUpsert:
    def test_appends_with_default_easing(self):
        kfs = []
        written = upsert_keyframe(kfs, "x", 10, 1.0)
        assert kfs == [written]
        assert written.easing is Easing.EASE_IN_OUT

    def test_overwrites_within_epsilon(self):
        kfs = []
        first = upsert_keyframe(kfs, "x", 10, 1.0)
        second = upsert_keyframe(kfs, "x", 20, 1.04)
        assert second is first
        assert len(kfs) == 1
        assert first.value == 20
        assert first.timestamp == 1.0

    def test_epsilon_is_exclusive(self):
        kfs = []
        upsert_keyframe(kfs, "x", 10, 1.0)
        upsert_keyframe(kfs, "x", 20, 1.05)
        assert len(kfs) == 2

    def test_different_property_does_not_merge(self):
        kfs = []
        upsert_keyframe(kfs, "x", 10, 1.0)
        upsert_keyframe(kfs, "y", 10, 1.0)
        assert len(kfs) == 2

    def test_keyframes_for_sorts(self):
        kfs = [kf(3, "x", 1), kf(1, "x", 2), kf(2, "y", 3)]
        assert [k.timestamp for k in keyframes_for(kfs, "x")] == [1, 3]


class TestActiveKeyframe:
    def test_within_window(self):
        kfs = [kf(1.0, "x", 1), kf(2.0, "y", 2)]
        assert find_active_keyframe(kfs, 2.05) is kfs[1]

    def test_first_match_wins(self):
        kfs = [kf(1.0, "x", 1), kf(1.02, "y", 2)]
        assert find_active_keyframe(kfs, 1.01) is kfs[0]

    def test_none_outside_window(self):
        assert find_active_keyframe([kf(1.0, "x", 1)], 1.2) is None
