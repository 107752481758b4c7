# mockstage/core/media.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import cv2

from app_config import FFMPEG_THREADS, IMAGE_EXTS, MAX_PROBED_DURATION_S, VIDEO_EXTS
from .logging import get_logger

try:
    from ffpyplayer.player import MediaPlayer
except Exception:
    MediaPlayer = None

log = get_logger(__name__)


@dataclass(frozen=True)
class MediaInfo:
    url: str
    is_video: bool
    duration: Optional[float] = None   # seconds; None for stills or when unknown


def is_video_path(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in VIDEO_EXTS


def is_image_path(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in IMAGE_EXTS


def _sane(duration: Optional[float]) -> Optional[float]:
    if duration and 0 < duration < MAX_PROBED_DURATION_S:
        return float(duration)
    return None


def _probe_duration_via_ffpyplayer(path: str) -> Optional[float]:
    if MediaPlayer is None:
        return None
    player = None
    try:
        player = MediaPlayer(path, ff_opts={"threads": FFMPEG_THREADS, "an": 1, "paused": True},
                             loglevel="warning")
        md = player.get_metadata() or {}
        dur = md.get("duration")
        return float(dur) if dur is not None else None
    except Exception as ex:
        log.debug("No/invalid metadata for %s: %s", path, ex)
        return None
    finally:
        if player is not None:
            try:
                player.close_player()
            except Exception as ex:
                log.debug("close_player failed: %s", ex)


def _probe_duration_via_opencv(path: str) -> Optional[float]:
    cap = None
    try:
        cap = cv2.VideoCapture(path)
        if not cap.isOpened():
            return None
        frames = cap.get(cv2.CAP_PROP_FRAME_COUNT)
        fps = cap.get(cv2.CAP_PROP_FPS)
        if fps and fps > 0 and frames and frames > 0:
            return float(frames) / float(fps)
    except Exception as ex:
        log.debug("OpenCV probe failed for %s: %s", path, ex)
    finally:
        if cap is not None:
            cap.release()
    return None


def probe_media(path: Union[str, Path]) -> MediaInfo:
    """Classify a picked file and, for video, measure its duration.

    Raises FileNotFoundError for a missing file and ValueError for an
    extension that is neither a known image nor a known video type.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(p))
    if not (is_video_path(p) or is_image_path(p)):
        raise ValueError(f"Unsupported media type: {p.suffix or p.name}")

    url = p.resolve().as_uri()
    if not is_video_path(p):
        log.info("Image media %s", p.name)
        return MediaInfo(url=url, is_video=False)

    duration = _sane(_probe_duration_via_ffpyplayer(str(p)))
    if duration is None:
        duration = _sane(_probe_duration_via_opencv(str(p)))
    if duration is None:
        log.warning("Could not determine duration of %s", p.name)
    else:
        log.info("Video media %s duration %.3fs", p.name, duration)
    return MediaInfo(url=url, is_video=True, duration=duration)
