# mockstage/core/interpolation.py
"""
Keyframe interpolation.

Each property animates on its own curve: x, y, scale, rotation and opacity
keyframes are looked up independently, so multi-axis motion only stays in
sync when the keyframes for each axis share timestamps.
"""
from __future__ import annotations
from typing import Iterable, List, Optional, Union

from app_config import ACTIVE_KEYFRAME_WINDOW_S, DEFAULT_EASING, KEYFRAME_MERGE_EPSILON_S
from .easing import Easing, coerce_easing, ease
from .model import Keyframe, KeyframeProperty


def keyframes_for(keyframes: Iterable[Keyframe], prop: Union[KeyframeProperty, str]) -> List[Keyframe]:
    """Keyframes of one property, ordered by timestamp."""
    prop = KeyframeProperty(prop)
    return sorted((k for k in keyframes if k.property == prop), key=lambda k: k.timestamp)


def interpolate(base: float, keyframes: Iterable[Keyframe], time: float,
                prop: Union[KeyframeProperty, str]) -> float:
    """Effective value of *prop* at *time*.

    No keyframes for the property yields *base*. Outside the keyed range the
    nearest keyframe's value holds flat. Between two keyframes the END
    keyframe's easing shapes the progress.
    """
    track = keyframes_for(keyframes or (), prop)
    if not track:
        return base

    if time <= track[0].timestamp:
        return track[0].value
    if time >= track[-1].timestamp:
        return track[-1].value

    for start, end in zip(track, track[1:]):
        if start.timestamp <= time < end.timestamp:
            progress = (time - start.timestamp) / (end.timestamp - start.timestamp)
            eased = ease(end.easing, progress)
            return start.value + (end.value - start.value) * eased

    return base


def upsert_keyframe(keyframes: List[Keyframe], prop: Union[KeyframeProperty, str], value: float,
                    time: float, easing: Union[Easing, str] = DEFAULT_EASING,
                    epsilon: float = KEYFRAME_MERGE_EPSILON_S) -> Keyframe:
    """Write *value* for *prop* at *time* into *keyframes* (in place).

    An existing keyframe of the same property closer than *epsilon* is
    overwritten, so a continuous drag coalesces into one keyframe instead of
    one per pointer event.
    """
    prop = KeyframeProperty(prop)
    for kf in keyframes:
        if kf.property == prop and abs(kf.timestamp - time) < epsilon:
            kf.value = float(value)
            return kf
    kf = Keyframe(timestamp=float(time), property=prop, value=float(value), easing=coerce_easing(easing))
    keyframes.append(kf)
    return kf


def find_active_keyframe(keyframes: Iterable[Keyframe], time: float,
                         window: float = ACTIVE_KEYFRAME_WINDOW_S) -> Optional[Keyframe]:
    """First keyframe (insertion order) sitting under the playhead."""
    for kf in keyframes:
        if abs(kf.timestamp - time) < window:
            return kf
    return None
