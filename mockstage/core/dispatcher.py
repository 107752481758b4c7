# mockstage/core/dispatcher.py
"""
Mode-aware write path for layer edits.

Design mode merges updates into the layer's static fields. Video mode turns
animatable fields (position x/y, scale, rotation, opacity) into keyframes at
the playhead and leaves their static values alone; anything else is always
a static write.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping

from .logging import get_logger
from .model import ANIMATABLE, EditorMode, Position

log = get_logger(__name__)


def _split_position(updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Flatten a `position` update into x/y entries."""
    flat = {k: v for k, v in updates.items() if k != "position"}
    if "position" in updates:
        pos = Position.coerce(updates["position"])
        flat.setdefault("x", pos.x)
        flat.setdefault("y", pos.y)
    return flat


def apply_property_update(store, layer_id: str, updates: Mapping[str, Any]) -> bool:
    """Route *updates* for one layer through the active editor mode.

    Returns False when the layer does not exist.
    """
    layer = store.layer(layer_id)
    if layer is None:
        log.debug("property update for unknown layer %s ignored", layer_id)
        return False
    if not updates:
        return True

    flat = _split_position(updates)

    if store.mode is EditorMode.VIDEO:
        keyed = {k: float(v) for k, v in flat.items() if k in ANIMATABLE}
        static = {k: v for k, v in flat.items() if k not in ANIMATABLE}
        if keyed:
            store.upsert_keyframes(layer_id, keyed)
    else:
        static = {k: v for k, v in flat.items() if k not in ("x", "y")}
        if "x" in flat or "y" in flat:
            static["position"] = Position(
                float(flat.get("x", layer.position.x)),
                float(flat.get("y", layer.position.y)),
            )

    if static:
        store.update_layer(layer_id, **static)
    return True
