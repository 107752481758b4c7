# mockstage/core/model.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Union
import uuid

from app_config import (
    DEFAULT_ANIM_DURATION_S, DEFAULT_CLIP_DURATION_S, DEFAULT_EASING,
    DEFAULT_TIMELINE_DURATION_S, MAX_FIT_ZOOM, MIN_ZOOM,
)
from .easing import Easing


def new_id() -> str:
    return str(uuid.uuid4())


class KeyframeProperty(str, Enum):
    X = "x"
    Y = "y"
    SCALE = "scale"
    ROTATION = "rotation"
    OPACITY = "opacity"


ANIMATABLE = frozenset(p.value for p in KeyframeProperty)


class EditorMode(str, Enum):
    DESIGN = "design"
    VIDEO = "video"


def coerce_mode(value: Any, default: EditorMode = EditorMode.DESIGN) -> EditorMode:
    try:
        return EditorMode(value)
    except ValueError:
        return default


class LayerKind(str, Enum):
    FRAME = "frame"
    OVERLAY = "overlay"


class OverlayKind(str, Enum):
    TEXT = "text"
    EMOJI = "emoji"
    SHAPE = "shape"
    IMAGE = "image"
    VIDEO = "video"


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def coerce(cls, value: Any) -> "Position":
        """Accept a Position, an (x, y) pair or a {"x", "y"} mapping."""
        if isinstance(value, Position):
            return Position(value.x, value.y)
        if isinstance(value, dict):
            return Position(float(value.get("x", 0.0)), float(value.get("y", 0.0)))
        x, y = value
        return Position(float(x), float(y))


@dataclass
class Keyframe:
    timestamp: float  # seconds, absolute on the global timeline
    property: KeyframeProperty
    value: float
    easing: Easing = Easing(DEFAULT_EASING)
    id: str = field(default_factory=new_id)


@dataclass
class FramePayload:
    device: str = "iphone-15"
    content_url: Optional[str] = None
    is_video: bool = False
    shadow: str = "soft"


@dataclass
class OverlayPayload:
    kind: OverlayKind = OverlayKind.TEXT
    content: str = ""
    style: Dict[str, Any] = field(default_factory=dict)


Payload = Union[FramePayload, OverlayPayload]


@dataclass
class Layer:
    payload: Payload
    name: str = "Layer"
    position: Position = field(default_factory=Position)
    scale: float = 1.0
    rotation: float = 0.0
    opacity: float = 1.0
    z_index: int = 1
    start_time: float = 0.0
    duration: float = DEFAULT_CLIP_DURATION_S
    anim_in: str = "none"
    anim_in_duration: float = DEFAULT_ANIM_DURATION_S
    anim_out: str = "none"
    anim_out_duration: float = DEFAULT_ANIM_DURATION_S
    keyframes: List[Keyframe] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def kind(self) -> LayerKind:
        return LayerKind.FRAME if isinstance(self.payload, FramePayload) else LayerKind.OVERLAY

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def base_value(self, prop: Union[KeyframeProperty, str]) -> float:
        """Static (un-animated) value of an animatable property."""
        prop = KeyframeProperty(prop)
        if prop is KeyframeProperty.X:
            return self.position.x
        if prop is KeyframeProperty.Y:
            return self.position.y
        return float(getattr(self, prop.value))


LAYER_FIELDS = frozenset(f.name for f in fields(Layer)) - {"id", "payload"}


@dataclass
class CanvasState:
    width: int = 1920
    height: int = 1080
    zoom: float = 0.5
    padding: int = 40

    def fit_zoom(self, avail_w: float, avail_h: float) -> float:
        """Zoom that fits the composition into the available viewport."""
        fit = min(avail_w / self.width, avail_h / self.height, MAX_FIT_ZOOM)
        return max(MIN_ZOOM, fit)


@dataclass
class TimelineState:
    current_time: float = 0.0
    duration: float = DEFAULT_TIMELINE_DURATION_S
    is_playing: bool = False
    mode: EditorMode = EditorMode.DESIGN
