# mockstage/core/presets.py
from __future__ import annotations
from typing import Any, Dict, List, Tuple

from .model import OverlayKind

DEVICE_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    "iphone-15":            {"name": "iPhone 15 Pro",  "aspect_ratio": 9 / 19.5, "frame_color": "#1c1c1e", "size": (300, 615)},
    "macbook-air":          {"name": "MacBook Air",    "aspect_ratio": 16 / 10,  "frame_color": "#27272a", "size": (720, 424)},
    "browser-window":       {"name": "Chrome Browser", "aspect_ratio": 16 / 9,   "frame_color": "#ffffff", "size": (600, 380)},
    "ipad-pro":             {"name": "iPad Pro",       "aspect_ratio": 4 / 3,    "frame_color": "#1c1c1e", "size": (480, 640)},
    "apple-watch":          {"name": "Apple Watch",    "aspect_ratio": 1 / 1.25, "frame_color": "#1c1c1e", "size": (180, 220)},
    "samsung-galaxy":       {"name": "Galaxy S24",     "aspect_ratio": 9 / 19.5, "frame_color": "#1c1c1e", "size": (300, 615)},
    "samsung-galaxy-ultra": {"name": "S24 Ultra",      "aspect_ratio": 9 / 19.5, "frame_color": "#1c1c1e", "size": (300, 615)},
}

ANIMATION_PRESETS_IN: List[Tuple[str, str]] = [
    ("none", "None"),
    ("fade-in", "Fade In"),
    ("zoom-in", "Zoom In"),
    ("slide-up", "Slide Up"),
    ("shake", "Shake"),
    ("pulse", "Pulse"),
]

ANIMATION_PRESETS_OUT: List[Tuple[str, str]] = [
    ("none", "None"),
    ("fade-out", "Fade Out"),
    ("zoom-out", "Zoom Out"),
    ("slide-down", "Slide Down"),
]

SHAPE_PRESETS: List[Tuple[str, str]] = [
    ("rect", "Square"),
    ("circle", "Circle"),
    ("rounded", "Rounded"),
    ("triangle", "Triangle"),
    ("star", "Star"),
    ("heart", "Heart"),
    ("diamond", "Diamond"),
    ("hexagon", "Hexagon"),
]

SHAPE_SIZE = (100, 100)


def device_name(device: str) -> str:
    return DEVICE_DEFINITIONS.get(device, {}).get("name", device)


def default_overlay_content(kind: OverlayKind) -> str:
    if kind is OverlayKind.TEXT:
        return "Double Click"
    if kind is OverlayKind.EMOJI:
        return "🔥"
    return "rect"


def default_overlay_style(kind: OverlayKind) -> Dict[str, Any]:
    if kind is OverlayKind.SHAPE:
        return {"backgroundColor": "#3b82f6", "borderRadius": 20}
    return {"color": "#ffffff", "fontSize": 32}


def default_overlay_scale(kind: OverlayKind) -> float:
    # media starts smaller than text and shapes
    return 0.5 if kind in (OverlayKind.IMAGE, OverlayKind.VIDEO) else 1.0
