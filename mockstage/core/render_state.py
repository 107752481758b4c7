# mockstage/core/render_state.py
"""
What a renderer needs to know about a layer at a given instant: whether it
is on screen, its resolved transform, and which enter/exit preset applies.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from app_config import MOTION_PATH_SAMPLES
from .interpolation import interpolate
from .model import EditorMode, KeyframeProperty, Layer


@dataclass(frozen=True)
class RenderTransform:
    x: float
    y: float
    scale: float
    rotation: float
    opacity: float


@dataclass(frozen=True)
class AnimationPhase:
    phase: str   # "enter" | "exit"
    preset: str


def _is_video(mode: Union[EditorMode, str]) -> bool:
    return EditorMode(mode) is EditorMode.VIDEO


def is_visible(layer: Layer, time: float, mode: Union[EditorMode, str]) -> bool:
    if not _is_video(mode):
        return True
    return layer.start_time <= time <= layer.start_time + layer.duration


def animation_phase(layer: Layer, time: float, mode: Union[EditorMode, str]) -> Optional[AnimationPhase]:
    if not _is_video(mode):
        return None
    since_start = time - layer.start_time
    until_end = (layer.start_time + layer.duration) - time
    if since_start < layer.anim_in_duration and layer.anim_in != "none":
        return AnimationPhase("enter", layer.anim_in)
    if until_end < layer.anim_out_duration and layer.anim_out != "none":
        return AnimationPhase("exit", layer.anim_out)
    return None


def resolve_transform(layer: Layer, time: float, mode: Union[EditorMode, str]) -> RenderTransform:
    """Transform to draw *layer* with; design mode ignores keyframes."""
    if not _is_video(mode):
        return RenderTransform(layer.position.x, layer.position.y, layer.scale, layer.rotation, layer.opacity)
    kfs = layer.keyframes
    return RenderTransform(
        x=interpolate(layer.position.x, kfs, time, KeyframeProperty.X),
        y=interpolate(layer.position.y, kfs, time, KeyframeProperty.Y),
        scale=interpolate(layer.scale, kfs, time, KeyframeProperty.SCALE),
        rotation=interpolate(layer.rotation, kfs, time, KeyframeProperty.ROTATION),
        opacity=interpolate(layer.opacity, kfs, time, KeyframeProperty.OPACITY),
    )


def position_at(layer: Layer, time: float) -> Tuple[float, float]:
    return (
        interpolate(layer.position.x, layer.keyframes, time, KeyframeProperty.X),
        interpolate(layer.position.y, layer.keyframes, time, KeyframeProperty.Y),
    )


def sample_motion_path(layer: Layer, samples: int = MOTION_PATH_SAMPLES
                       ) -> Tuple[List[Tuple[float, float]], List[Tuple[float, float]]]:
    """Polyline through the layer's animated position, plus keyframe dots.

    Returns (path_points, keyframe_points) in canvas units relative to the
    canvas centre. Both are empty unless the layer has two or more keyframes
    and at least one of them keys x or y.
    """
    kfs = layer.keyframes
    if len(kfs) < 2:
        return [], []
    positional = [k for k in kfs if k.property in (KeyframeProperty.X, KeyframeProperty.Y)]
    if not positional:
        return [], []

    start = min(k.timestamp for k in kfs)
    end = max(k.timestamp for k in kfs)
    path = [position_at(layer, float(t)) for t in np.linspace(start, end, samples + 1)]
    dots = [position_at(layer, k.timestamp) for k in positional]
    return path, dots
