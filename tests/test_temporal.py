"""Tests for timeline clip move / resize gestures and snapping."""

import pytest

from mockstage.core.temporal import (
    ClipDragMode,
    TemporalTransformController,
    TimelineGeometryError,
    TimelineScale,
    find_closest_snap,
)

from conftest import make_layer

TRACK_PX = 1000  # 10 s timeline -> 100 px per second, snap threshold 0.15 s


@pytest.fixture
def clips(store):
    def _clips(a, b):
        la = store.add_layer(make_layer("A", start_time=a[0], duration=a[1], z_index=1), select=False)
        lb = store.add_layer(make_layer("B", start_time=b[0], duration=b[1], z_index=2), select=False)
        return la, lb
    return _clips


@pytest.fixture
def ctl(store):
    return TemporalTransformController(store)


def drag(ctl, layer, mode, dx_seconds, start_px=500):
    ctl.begin(layer.id, mode, start_px, TRACK_PX)
    ctl.move(start_px + dx_seconds * 100)


class TestTimelineScale:
    def test_mapping(self):
        s = TimelineScale(1000, 10)
        assert s.pixels_per_second == 100
        assert s.to_seconds(250) == pytest.approx(2.5)
        assert s.to_pixels(2.5) == pytest.approx(250)

    def test_time_at_clamps(self):
        s = TimelineScale(1000, 10)
        assert s.time_at(-5) == 0
        assert s.time_at(250) == pytest.approx(2.5)
        assert s.time_at(2000) == 10

    @pytest.mark.parametrize("width,duration", [(1000, 0), (1000, -1), (0, 10)])
    def test_degenerate_geometry_raises(self, width, duration):
        with pytest.raises(TimelineGeometryError):
            TimelineScale(width, duration)

    def test_begin_with_zero_width_leaves_slot_free(self, store, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        with pytest.raises(TimelineGeometryError):
            ctl.begin(a.id, "move", 0, 0)
        assert not store.drag_slot.busy


class TestFindClosestSnap:
    def test_threshold_is_exclusive(self):
        assert find_closest_snap(5.5, [5.0], 0.5) is None

    def test_nearest_wins(self):
        assert find_closest_snap(5.0, [4.0, 5.3, 6.0], 1.0) == 5.3

    def test_first_wins_ties(self):
        assert find_closest_snap(5.0, [4.0, 6.0], 2.0) == 4.0


class TestSnapPoints:
    def test_move_points(self, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        ctl.begin(a.id, "move", 0, TRACK_PX)
        assert ctl.snap_points() == [0.0, 10.0, 5.0, 8.0]

    def test_resize_right_adds_equal_length(self, clips, ctl):
        a, _ = clips((1, 2), (5, 3))
        ctl.begin(a.id, "resize-right", 0, TRACK_PX)
        assert ctl.snap_points() == [0.0, 10.0, 5.0, 8.0, 4.0]

    def test_resize_left_adds_equal_length(self, clips, ctl):
        a, _ = clips((1, 2), (5, 0.5))
        ctl.begin(a.id, "resize-left", 0, TRACK_PX)
        assert ctl.snap_points() == [0.0, 10.0, 5.0, 5.5, 2.5]


class TestMove:
    def test_end_snaps_to_neighbour_start(self, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        drag(ctl, a, ClipDragMode.MOVE, 3.1)
        assert (a.start_time, a.duration) == pytest.approx((3.0, 2.0))

    def test_start_snap_preferred(self, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        drag(ctl, a, "move", 4.95)
        assert a.start_time == pytest.approx(5.0)

    def test_clamped_to_timeline_end(self, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        drag(ctl, a, "move", 9)
        assert a.start_time == pytest.approx(8.0)

    def test_clamped_to_zero(self, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        drag(ctl, a, "move", -5)
        assert a.start_time == 0.0

    def test_emits_timing_changed(self, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        seen = []
        ctl.timingChanged.connect(lambda *args: seen.append(args))
        drag(ctl, a, "move", 1)
        assert seen == [(a.id, pytest.approx(1.0), pytest.approx(2.0))]


class TestResizeRight:
    def test_snaps_to_neighbour_start(self, clips, ctl):
        a, _ = clips((0, 4.9), (5, 3))
        drag(ctl, a, ClipDragMode.RESIZE_RIGHT, 0.2, start_px=490)
        assert a.duration == pytest.approx(5.0)
        assert a.start_time == 0.0

    def test_equal_length_snap(self, clips, ctl):
        a, _ = clips((0, 2), (6, 3))
        drag(ctl, a, "resize-right", 1.05)
        assert a.duration == pytest.approx(3.0)

    def test_floor(self, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        drag(ctl, a, "resize-right", -10)
        assert a.duration == pytest.approx(0.2)

    def test_clamped_to_timeline_end(self, clips, ctl):
        a, _ = clips((8, 1), (0, 1))
        drag(ctl, a, "resize-right", 5)
        assert a.duration == pytest.approx(2.0)


class TestResizeLeft:
    def test_moves_start_keeps_end(self, clips, ctl):
        a, _ = clips((2, 3), (7, 1))
        drag(ctl, a, ClipDragMode.RESIZE_LEFT, -1.0)
        assert (a.start_time, a.duration) == pytest.approx((1.0, 4.0))

    def test_snaps_to_zero(self, clips, ctl):
        a, _ = clips((2, 3), (7, 1))
        drag(ctl, a, "resize-left", -1.95)
        assert (a.start_time, a.duration) == pytest.approx((0.0, 5.0))

    def test_refuses_to_cross_floor(self, clips, ctl):
        a, _ = clips((2, 3), (7, 1))
        ctl.begin(a.id, "resize-left", 500, TRACK_PX)
        ctl.move(600)
        assert (a.start_time, a.duration) == pytest.approx((3.0, 2.0))
        ctl.move(790)
        assert (a.start_time, a.duration) == pytest.approx((3.0, 2.0))


class TestDurationFloor:
    @pytest.mark.parametrize("mode", ["resize-left", "resize-right"])
    def test_no_delta_sequence_goes_below_floor(self, clips, ctl, mode):
        a, _ = clips((2, 3), (7, 1))
        ctl.begin(a.id, mode, 500, TRACK_PX)
        for px in (900, 100, 780, 799, 801, 1500, -300, 520, 1000):
            ctl.move(px)
            assert a.duration >= 0.2 - 1e-9
        ctl.end()


class TestLifecycle:
    def test_end_releases_slot(self, store, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        ctl.begin(a.id, "move", 0, TRACK_PX)
        assert store.drag_slot.busy
        ctl.end()
        assert not store.drag_slot.busy
        ctl.move(900)
        assert a.start_time == 0

    def test_layer_deleted_mid_drag_emits_nothing(self, store, clips, ctl):
        a, _ = clips((0, 2), (5, 3))
        seen = []
        ctl.timingChanged.connect(lambda *args: seen.append(args))
        ctl.begin(a.id, "move", 0, TRACK_PX)
        store.delete_layer(a.id)
        ctl.move(100)
        assert seen == []
        ctl.end()
        assert not store.drag_slot.busy

    def test_unknown_layer(self, ctl):
        assert not ctl.begin("missing", "move", 0, TRACK_PX)
