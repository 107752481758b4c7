"""Tests for the project store: layer lifecycle, selection, transport."""

import pytest

from mockstage.core.easing import Easing
from mockstage.core.media import MediaInfo
from mockstage.core.model import EditorMode, Keyframe, KeyframeProperty, LayerKind, OverlayKind, coerce_mode

from conftest import by_name


class TestAddLayers:
    def test_add_frame_defaults(self, store):
        layer = store.add_frame("macbook-air")
        assert layer.kind is LayerKind.FRAME
        assert layer.name == "MacBook Air"
        assert (layer.position.x, layer.position.y) == (50, 50)
        assert layer.z_index == 1
        assert (layer.start_time, layer.duration) == (0.0, 5.0)
        assert store.selected_id == layer.id

    def test_add_overlay_defaults(self, store):
        text = store.add_overlay("text")
        emoji = store.add_overlay(OverlayKind.EMOJI)
        shape = store.add_overlay("shape")
        image = store.add_overlay("image")
        assert text.name == "Text Layer"
        assert text.payload.content == "Double Click"
        assert emoji.payload.content == "🔥"
        assert shape.payload.content == "rect"
        assert shape.payload.style == {"backgroundColor": "#3b82f6", "borderRadius": 20}
        assert text.payload.style == {"color": "#ffffff", "fontSize": 32}
        assert image.scale == 0.5
        assert [l.z_index for l in (text, emoji, shape, image)] == [1, 2, 3, 4]

    def test_frames_and_overlays_share_z_space(self, store):
        store.add_frame()
        overlay = store.add_overlay()
        assert overlay.z_index == 2

    def test_layers_changed_emitted(self, store):
        seen = []
        store.layersChanged.connect(lambda: seen.append(True))
        store.add_frame()
        assert seen


class TestUpdateLayer:
    def test_merges_static_fields(self, stacked_store):
        a = by_name(stacked_store, "A")
        assert stacked_store.update_layer(a.id, name="Hero", scale=2.0, position=(3, 4))
        assert a.name == "Hero"
        assert a.scale == 2.0
        assert (a.position.x, a.position.y) == (3, 4)

    def test_payload_fields(self, stacked_store):
        b = by_name(stacked_store, "B")
        stacked_store.update_layer(b.id, content="Hello")
        assert b.payload.content == "Hello"

    def test_unknown_field_raises(self, stacked_store):
        a = by_name(stacked_store, "A")
        with pytest.raises(AttributeError):
            stacked_store.update_layer(a.id, sparkle=True)

    def test_unknown_id_ignored(self, store):
        assert not store.update_layer("missing", name="x")

    def test_emits_layer_changed(self, stacked_store):
        a = by_name(stacked_store, "A")
        seen = []
        stacked_store.layerChanged.connect(seen.append)
        stacked_store.update_layer(a.id, rotation=15)
        assert seen == [a.id]


class TestDeleteDuplicate:
    def test_delete_clears_selection(self, stacked_store):
        a = by_name(stacked_store, "A")
        stacked_store.select(a.id)
        assert stacked_store.delete_layer(a.id)
        assert a.id not in stacked_store
        assert stacked_store.selected_id is None

    def test_delete_unknown_is_noop(self, stacked_store):
        assert not stacked_store.delete_layer("missing")
        assert len(stacked_store) == 3

    def test_duplicate(self, stacked_store):
        a = by_name(stacked_store, "A")
        a.keyframes.append(Keyframe(1.0, KeyframeProperty.X, 5.0))
        dup = stacked_store.duplicate_layer(a.id)
        assert dup.id != a.id
        assert dup.name == "A (Copy)"
        assert (dup.position.x, dup.position.y) == (a.position.x + 20, a.position.y + 20)
        assert dup.z_index == 4
        assert stacked_store.selected_id == dup.id
        assert dup.keyframes[0].id != a.keyframes[0].id
        dup.keyframes[0].value = 99
        assert a.keyframes[0].value == 5.0

    def test_duplicate_unknown_is_noop(self, stacked_store):
        assert stacked_store.duplicate_layer("missing") is None
        assert len(stacked_store) == 3

    def test_copy_paste(self, stacked_store):
        c = by_name(stacked_store, "C")
        stacked_store.select(c.id)
        stacked_store.copy_selection()
        pasted = stacked_store.paste()
        assert pasted.name == "C (Copy)"

    def test_paste_after_source_deleted(self, stacked_store):
        c = by_name(stacked_store, "C")
        stacked_store.select(c.id)
        stacked_store.copy_selection()
        stacked_store.delete_layer(c.id)
        assert stacked_store.paste() is None


class TestStacking:
    def test_reorder_front(self, stacked_store):
        b = by_name(stacked_store, "B")
        stacked_store.reorder_layer(b.id, "front")
        assert {l.name: l.z_index for l in stacked_store.layers()} == {"A": 1, "B": 4, "C": 3}

    def test_move_layer_dense(self, stacked_store):
        a, c = by_name(stacked_store, "A"), by_name(stacked_store, "C")
        stacked_store.reorder_layer(c.id, "front")
        stacked_store.move_layer(a.id, c.id)
        assert sorted(l.z_index for l in stacked_store.layers()) == [1, 2, 3]
        assert [l.name for l in stacked_store.layers_by_z(descending=True)] == ["A", "C", "B"]


class TestSelection:
    def test_select_unknown_ignored(self, stacked_store):
        stacked_store.select("missing")
        assert stacked_store.selected_id is None

    def test_selection_signal(self, stacked_store):
        seen = []
        stacked_store.selectionChanged.connect(seen.append)
        a = by_name(stacked_store, "A")
        stacked_store.select(a.id)
        stacked_store.select(a.id)
        stacked_store.select(None)
        assert seen == [a.id, None]


class TestTransport:
    def test_seek_clamps(self, store):
        store.seek(99)
        assert store.current_time == store.duration
        store.seek(-3)
        assert store.current_time == 0.0

    def test_step_pauses_and_clamps(self, store):
        store.set_playing(True)
        store.step(-0.1)
        assert not store.is_playing
        assert store.current_time == 0.0
        store.step(0.1)
        assert store.current_time == pytest.approx(0.1)

    def test_go_to_end_and_start(self, store):
        store.go_to_end()
        assert store.current_time == store.duration
        store.go_to_start()
        assert store.current_time == 0.0

    def test_toggle_playing_emits(self, store):
        seen = []
        store.playStateChanged.connect(seen.append)
        store.toggle_playing()
        store.toggle_playing()
        assert seen == [True, False]

    def test_set_duration_rejects_non_positive(self, store):
        with pytest.raises(ValueError):
            store.set_duration(0)

    @pytest.mark.parametrize("value,expected", [
        ("video", EditorMode.VIDEO),
        (EditorMode.DESIGN, EditorMode.DESIGN),
        ("timeline", EditorMode.DESIGN),
        (None, EditorMode.DESIGN),
    ])
    def test_coerce_mode(self, value, expected):
        assert coerce_mode(value) is expected

    def test_set_mode(self, store):
        seen = []
        store.modeChanged.connect(seen.append)
        store.set_mode("video")
        assert store.mode is EditorMode.VIDEO
        assert seen == ["video"]


class TestCanvas:
    def test_zoom_floor(self, store):
        store.update_canvas(zoom=0.01)
        assert store.canvas.zoom == 0.1

    def test_zoom_by(self, store):
        store.zoom_by(2)
        assert store.canvas.zoom == pytest.approx(1.0)

    def test_unknown_canvas_field(self, store):
        with pytest.raises(AttributeError):
            store.update_canvas(depth=3)

    def test_fit_zoom(self, store):
        assert store.canvas.fit_zoom(960, 1080) == pytest.approx(0.5)
        assert store.canvas.fit_zoom(10000, 10000) == pytest.approx(0.85)
        assert store.canvas.fit_zoom(10, 10) == pytest.approx(0.1)


class TestKeyframeEditing:
    def test_set_easing_on_active_keyframe(self, stacked_store):
        a = by_name(stacked_store, "A")
        a.keyframes.append(Keyframe(1.0, KeyframeProperty.X, 5.0))
        stacked_store.seek(1.05)
        assert stacked_store.set_keyframe_easing(a.id, "bounce")
        assert a.keyframes[0].easing is Easing.BOUNCE

    def test_set_easing_without_active_keyframe(self, stacked_store):
        a = by_name(stacked_store, "A")
        assert not stacked_store.set_keyframe_easing(a.id, "bounce")

    def test_clear_keyframes(self, stacked_store):
        a = by_name(stacked_store, "A")
        a.keyframes.append(Keyframe(1.0, KeyframeProperty.X, 5.0))
        stacked_store.clear_keyframes(a.id)
        assert a.keyframes == []


class TestAttachMedia:
    def test_frame_video_extends_timeline(self, store):
        frame = store.add_frame()
        store.update_layer(frame.id, start_time=2.0)
        store.attach_media(frame.id, MediaInfo(url="file:///clip.mp4", is_video=True, duration=12.4))
        assert frame.payload.content_url == "file:///clip.mp4"
        assert frame.payload.is_video
        assert frame.duration == pytest.approx(12.4)
        assert store.duration == 15.0

    def test_image_on_overlay_keeps_timing(self, store):
        overlay = store.add_overlay("image")
        store.attach_media(overlay.id, MediaInfo(url="file:///a.png", is_video=False))
        assert overlay.payload.content == "file:///a.png"
        assert overlay.duration == 5.0
        assert store.duration == 10.0

    def test_short_video_leaves_timeline(self, store):
        overlay = store.add_overlay("video")
        store.attach_media(overlay.id, MediaInfo(url="file:///b.mp4", is_video=True, duration=3.0))
        assert overlay.duration == 3.0
        assert store.duration == 10.0
