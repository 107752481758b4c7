# mockstage/core/zorder.py
"""
Stacking order across every layer, frames and overlays alike.

z_index values need not be distinct. Sorting is stable, so ties keep the
layers' insertion order.
"""
from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Sequence, Union

from .model import Layer


class ZDirection(str, Enum):
    FRONT = "front"
    BACK = "back"
    FORWARD = "forward"
    BACKWARD = "backward"


def ascending(layers: Iterable[Layer]) -> List[Layer]:
    return sorted(layers, key=lambda l: l.z_index)


def descending(layers: Iterable[Layer]) -> List[Layer]:
    """Topmost first: the order of the layers list and timeline tracks."""
    return sorted(layers, key=lambda l: l.z_index, reverse=True)


def next_z_index(layers: Iterable[Layer]) -> int:
    values = [l.z_index for l in layers]
    return max(values) + 1 if values else 1


def reorder(layers: Sequence[Layer], layer_id: str, direction: Union[ZDirection, str]) -> bool:
    """Restack one layer. Returns False when nothing changed."""
    direction = ZDirection(direction)
    order = ascending(layers)
    idx = next((i for i, l in enumerate(order) if l.id == layer_id), -1)
    if idx < 0:
        return False
    target = order[idx]

    if direction is ZDirection.FRONT:
        target.z_index = order[-1].z_index + 1
        return True
    if direction is ZDirection.BACK:
        target.z_index = min(l.z_index for l in order) - 1
        return True

    if direction is ZDirection.FORWARD:
        if idx >= len(order) - 1:
            return False
        other = order[idx + 1]
    else:
        if idx == 0:
            return False
        other = order[idx - 1]
    target.z_index, other.z_index = other.z_index, target.z_index
    return True


def move_to(layers: Sequence[Layer], dragged_id: str, target_id: str) -> bool:
    """Drop *dragged_id* at *target_id*'s slot in the topmost-first list.

    Every layer is then renumbered densely: the top gets len(layers), the
    bottom gets 1.
    """
    order = descending(layers)
    src = next((i for i, l in enumerate(order) if l.id == dragged_id), -1)
    dst = next((i for i, l in enumerate(order) if l.id == target_id), -1)
    if src < 0 or dst < 0 or src == dst:
        return False

    item = order.pop(src)
    order.insert(dst, item)
    count = len(order)
    for i, layer in enumerate(order):
        layer.z_index = count - i
    return True
