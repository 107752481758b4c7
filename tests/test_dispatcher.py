"""Tests for the mode-aware property update path."""

import pytest

from mockstage.core.dispatcher import apply_property_update
from mockstage.core.easing import Easing
from mockstage.core.model import KeyframeProperty

from conftest import by_name


@pytest.fixture
def layer(stacked_store):
    return by_name(stacked_store, "A")


class TestDesignMode:
    def test_position_writes_static(self, stacked_store, layer):
        apply_property_update(stacked_store, layer.id, {"position": (10, 20)})
        assert (layer.position.x, layer.position.y) == (10, 20)
        assert layer.keyframes == []

    def test_single_axis_keeps_other(self, stacked_store, layer):
        stacked_store.update_layer(layer.id, position=(5, 6))
        apply_property_update(stacked_store, layer.id, {"x": 50})
        assert (layer.position.x, layer.position.y) == (50, 6)

    def test_scale_rotation_opacity_static(self, stacked_store, layer):
        apply_property_update(stacked_store, layer.id, {"scale": 2, "rotation": 30, "opacity": 0.5})
        assert (layer.scale, layer.rotation, layer.opacity) == (2, 30, 0.5)
        assert layer.keyframes == []


class TestVideoMode:
    @pytest.fixture(autouse=True)
    def video(self, stacked_store):
        stacked_store.set_mode("video")
        stacked_store.seek(1.0)

    def test_position_becomes_two_keyframes(self, stacked_store, layer):
        apply_property_update(stacked_store, layer.id, {"position": (10, 20)})
        assert (layer.position.x, layer.position.y) == (0, 0)
        props = {k.property: k.value for k in layer.keyframes}
        assert props == {KeyframeProperty.X: 10, KeyframeProperty.Y: 20}
        assert all(k.timestamp == 1.0 for k in layer.keyframes)
        assert all(k.easing is Easing.EASE_IN_OUT for k in layer.keyframes)

    def test_repeated_updates_coalesce(self, stacked_store, layer):
        for v in (1.1, 1.2, 1.3):
            apply_property_update(stacked_store, layer.id, {"scale": v})
        assert len(layer.keyframes) == 1
        assert layer.keyframes[0].value == pytest.approx(1.3)
        assert layer.scale == 1.0

    def test_non_animatable_is_static(self, stacked_store, layer):
        apply_property_update(stacked_store, layer.id, {"name": "Renamed", "rotation": 45})
        assert layer.name == "Renamed"
        assert layer.rotation == 0.0
        assert [k.property for k in layer.keyframes] == [KeyframeProperty.ROTATION]

    def test_opacity_keyframed(self, stacked_store, layer):
        apply_property_update(stacked_store, layer.id, {"opacity": 0.2})
        assert layer.opacity == 1.0
        assert layer.keyframes[0].property is KeyframeProperty.OPACITY


def test_unknown_layer(stacked_store):
    assert not apply_property_update(stacked_store, "missing", {"scale": 2})
