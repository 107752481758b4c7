# mockstage/core/playback.py
from __future__ import annotations

from app_config import MIN_LOOP_POINT_S, TICK_INTERVAL_MS, TICK_STEP_S
from mockstage.qt import QtCore
from .logging import get_logger


class PlaybackClock(QtCore.QObject):
    """
    Fixed-step playhead driver. A QTimer fires every TICK_INTERVAL_MS while
    the store is playing and each tick adds TICK_STEP_S, regardless of the
    wall time that actually elapsed. Playback loops at the end of the last
    clip (never later than the timeline end, never earlier than 1s).
    """
    ticked = QtCore.Signal(float)

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self._store = store
        self._log = get_logger(__name__)
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(TICK_INTERVAL_MS)
        self._timer.timeout.connect(self.tick)
        store.playStateChanged.connect(self._on_play_state)
        if store.is_playing:
            self._timer.start()

    @property
    def running(self) -> bool:
        return self._timer.isActive()

    def loop_point(self) -> float:
        layers = self._store.layers()
        max_end = max((l.start_time + l.duration for l in layers), default=self._store.duration)
        return min(self._store.duration, max(max_end, MIN_LOOP_POINT_S))

    def tick(self) -> None:
        if not self._store.is_playing:
            return
        t = self._store.current_time
        if t >= self.loop_point():
            t = 0.0
        else:
            t = t + TICK_STEP_S
        self._store.set_current_time(t)
        self.ticked.emit(self._store.current_time)

    def _on_play_state(self, playing: bool) -> None:
        if playing:
            self._log.debug("clock start")
            self._timer.start()
        else:
            self._log.debug("clock stop")
            self._timer.stop()
