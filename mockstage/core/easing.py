# mockstage/core/easing.py
"""
Easing curves mapping progress in [0, 1] to eased progress.

Every curve satisfies ease(0) == 0 and ease(1) == 1. Bounce and elastic
may leave [0, 1] in between.
"""
from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, Union
import math


class Easing(str, Enum):
    LINEAR = "linear"
    EASE_IN = "easeIn"
    EASE_OUT = "easeOut"
    EASE_IN_OUT = "easeInOut"
    BOUNCE = "bounce"
    ELASTIC = "elastic"


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_out(t: float) -> float:
    return t * (2 - t)


def ease_in_out(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def bounce(t: float) -> float:
    n1, d1 = 7.5625, 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    c4 = (2 * math.pi) / 3
    return math.pow(2, -10 * t) * math.sin((t * 10 - 0.75) * c4) + 1


EASING_FUNCTIONS: Dict[Easing, Callable[[float], float]] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN: ease_in,
    Easing.EASE_OUT: ease_out,
    Easing.EASE_IN_OUT: ease_in_out,
    Easing.BOUNCE: bounce,
    Easing.ELASTIC: elastic,
}

# Inspector labels, in menu order
EASING_LABELS: Dict[Easing, str] = {
    Easing.LINEAR: "Linear",
    Easing.EASE_IN: "Smooth In",
    Easing.EASE_OUT: "Smooth Out",
    Easing.EASE_IN_OUT: "Smooth In/Out",
    Easing.BOUNCE: "Bounce",
    Easing.ELASTIC: "Elastic",
}


def easing_function(kind: Union[Easing, str, None]) -> Callable[[float], float]:
    """Curve for *kind*; anything unrecognised eases linearly."""
    # str-valued members hash like their values, so plain names hit too
    return EASING_FUNCTIONS.get(kind, linear)


def ease(kind: Union[Easing, str, None], t: float) -> float:
    return easing_function(kind)(t)


def coerce_easing(kind: Union[Easing, str]) -> Easing:
    try:
        return Easing(kind)
    except ValueError:
        return Easing.LINEAR
