"""Tests for visibility, enter/exit phases and motion paths."""

import pytest

from mockstage.core.easing import Easing
from mockstage.core.model import EditorMode, Keyframe, KeyframeProperty
from mockstage.core.render_state import (
    animation_phase,
    is_visible,
    resolve_transform,
    sample_motion_path,
)

from conftest import make_layer


def kf(t, prop, value):
    return Keyframe(t, KeyframeProperty(prop), value, Easing.LINEAR)


@pytest.fixture
def clip():
    return make_layer("A", start_time=2, duration=3, anim_in="fade-in", anim_out="zoom-out",
                      anim_in_duration=0.5, anim_out_duration=0.5)


class TestVisibility:
    def test_design_always_visible(self, clip):
        assert is_visible(clip, 0, EditorMode.DESIGN)

    @pytest.mark.parametrize("t,expected", [(1.9, False), (2, True), (5, True), (5.1, False)])
    def test_video_window_inclusive(self, clip, t, expected):
        assert is_visible(clip, t, "video") is expected


class TestAnimationPhase:
    def test_entering(self, clip):
        phase = animation_phase(clip, 2.2, "video")
        assert (phase.phase, phase.preset) == ("enter", "fade-in")

    def test_exiting(self, clip):
        phase = animation_phase(clip, 4.8, "video")
        assert (phase.phase, phase.preset) == ("exit", "zoom-out")

    def test_steady(self, clip):
        assert animation_phase(clip, 3.5, "video") is None

    def test_none_preset_skipped(self, clip):
        clip.anim_in = "none"
        assert animation_phase(clip, 2.2, "video") is None

    def test_design_mode(self, clip):
        assert animation_phase(clip, 2.2, "design") is None


class TestResolveTransform:
    def test_design_ignores_keyframes(self):
        layer = make_layer(position=(10, 20), keyframes=[kf(0, "x", 100)])
        tf = resolve_transform(layer, 0, "design")
        assert (tf.x, tf.y, tf.scale, tf.rotation, tf.opacity) == (10, 20, 1.0, 0.0, 1.0)

    def test_video_interpolates_each_property(self):
        layer = make_layer(keyframes=[
            kf(0, "x", 0), kf(2, "x", 100),
            kf(0, "opacity", 1), kf(2, "opacity", 0),
        ])
        tf = resolve_transform(layer, 1, "video")
        assert tf.x == pytest.approx(50)
        assert tf.opacity == pytest.approx(0.5)
        assert tf.y == 0


class TestMotionPath:
    def test_needs_two_keyframes(self):
        assert sample_motion_path(make_layer(keyframes=[kf(0, "x", 1)])) == ([], [])

    def test_needs_positional_keyframes(self):
        layer = make_layer(keyframes=[kf(0, "scale", 1), kf(1, "scale", 2)])
        assert sample_motion_path(layer) == ([], [])

    def test_samples_between_extremes(self):
        layer = make_layer(position=(0, 7), keyframes=[kf(1, "x", 0), kf(3, "x", 100)])
        path, dots = sample_motion_path(layer, samples=4)
        assert len(path) == 5
        assert [p[0] for p in path] == pytest.approx([0, 25, 50, 75, 100])
        assert all(p[1] == 7 for p in path)
        assert dots == [(0, 7), (100, 7)]
