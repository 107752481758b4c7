# mockstage/core/timecode.py
from __future__ import annotations
import math


def format_display_time(seconds: float) -> str:
    """M:SS.cc for the transport readout."""
    seconds = max(0.0, float(seconds))
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    centis = int(math.floor(round((seconds % 1) * 100, 6)))
    return f"{mins}:{secs:02d}.{min(centis, 99):02d}"


def format_ruler_time(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    return f"{int(seconds // 60)}:{int(seconds % 60):02d}"
