"""
Application configuration settings
Brand, paths, media formats, engine constants and runtime defaults live here.
Engine constants are read by mockstage.core; change them before shipping, not after.
"""

from __future__ import annotations
import os
import platform
from pathlib import Path

DEV_MODE = True
DEV_LAYERS = [
    {
        "kind": "frame",
        "device": "iphone-15",
        "name": "iPhone 15 Pro",
        "position": (0, 0),
        "start_time": 0.0,
        "duration": 5.0,
    },
    {
        "kind": "overlay",
        "overlay": "text",
        "content": "Launch day",
        "position": (0, -380),
        "start_time": 1.0,
        "duration": 3.0,
    },
]

# ───────────────────────────────────────────────────────────────────────────────
# Identity
# ───────────────────────────────────────────────────────────────────────────────
APP_NAME = "Mockstage"
APP_VERSION = "0.3.0"

APP_ID = "app.mockstage.studio"

# Organization identifiers (for QSettings, folders, About box)
ORG_NAME = "Mockstage"
ORG_DIRNAME = "Mockstage"
ORG_DOMAIN = "mockstage.app"

TAGLINE = "Device mockups that move."

BUILD_COMMIT = os.getenv("MOCKSTAGE_BUILD_COMMIT", "")[:7]
BUILD_CHANNEL = os.getenv("MOCKSTAGE_BUILD_CHANNEL", "dev")  # dev/beta/stable


def version_string() -> str:
    """Human-friendly version string for About dialogs and logs."""
    meta = f"+{BUILD_COMMIT}" if BUILD_COMMIT else ""
    chan = f" ({BUILD_CHANNEL})" if BUILD_CHANNEL and BUILD_CHANNEL != "stable" else ""
    return f"{APP_VERSION}{meta}{chan}"


# ───────────────────────────────────────────────────────────────────────────────
# Supported media
# ───────────────────────────────────────────────────────────────────────────────
VIDEO_EXTS = {
    ".mp4", ".mov", ".avi", ".mkv", ".m4v", ".webm", ".wmv", ".mpg", ".mpeg"
}
IMAGE_EXTS = {
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tif", ".tiff"
}
FFMPEG_THREADS = "auto"               # passed to ffpyplayer when probing
MAX_PROBED_DURATION_S = 24 * 60 * 60  # reject nonsense container durations


# ───────────────────────────────────────────────────────────────────────────────
# Engine constants
# ───────────────────────────────────────────────────────────────────────────────
# Playback clock: fixed step per tick, no drift compensation
TICK_INTERVAL_MS = 100
TICK_STEP_S = 0.1
TIME_ROUND_DIGITS = 6      # current_time is quantised to this many decimals
MIN_LOOP_POINT_S = 1.0
STEP_SECONDS = 0.1         # arrow-key transport step

# Keyframes
KEYFRAME_MERGE_EPSILON_S = 0.05   # upsert overwrites within this window
ACTIVE_KEYFRAME_WINDOW_S = 0.1    # inspector "current keyframe" window
DEFAULT_EASING = "easeInOut"
MOTION_PATH_SAMPLES = 50

# Canvas transforms
MIN_SCALE = 0.1
SCALE_SENSITIVITY = 0.005
GUIDE_THRESHOLD_PX = 10.0
DUPLICATE_OFFSET = 20.0
MIN_ZOOM = 0.1
MAX_FIT_ZOOM = 0.85

# Timeline clips
CLIP_SNAP_THRESHOLD_PX = 15.0
MIN_CLIP_DURATION_S = 0.2
DEFAULT_CLIP_DURATION_S = 5.0
DEFAULT_ANIM_DURATION_S = 0.5

# Initial project
DEFAULT_CANVAS = {"width": 1920, "height": 1080, "zoom": 0.5, "padding": 40}
DEFAULT_TIMELINE_DURATION_S = 10.0


# ───────────────────────────────────────────────────────────────────────────────
# User data locations
# ───────────────────────────────────────────────────────────────────────────────
def _appdata_base() -> Path:
    system = platform.system()
    if system == "Windows":
        base = os.getenv("APPDATA") or (Path.home() / "AppData" / "Roaming")
    elif system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return Path(base) / ORG_DIRNAME / APP_NAME


APPDATA_DIR = _appdata_base()
LOG_DIR = APPDATA_DIR / "logs"
DEFAULT_MEDIA_DIR = Path.home()


def ensure_app_dirs() -> None:
    """Create required folders if they don't exist."""
    for p in (APPDATA_DIR, LOG_DIR):
        p.mkdir(parents=True, exist_ok=True)


# ───────────────────────────────────────────────────────────────────────────────
# QSettings bootstrap (call once during startup)
# ───────────────────────────────────────────────────────────────────────────────
def apply_qsettings_org() -> None:
    """
    Apply org/app metadata for QSettings. Call early in startup,
    before constructing your first QSettings instance.
    """
    try:
        from PySide6.QtCore import QCoreApplication
        QCoreApplication.setOrganizationName(ORG_NAME)
        QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
        QCoreApplication.setApplicationName(APP_NAME)
    except Exception:
        # Safe to import this module in non-Qt contexts (e.g., tests)
        pass


# ───────────────────────────────────────────────────────────────────────────────
# Defaults (primed into QSettings by mockstage.core.config)
# ───────────────────────────────────────────────────────────────────────────────
DEFAULTS = {
    "paths": {
        "last_media_dir": str(DEFAULT_MEDIA_DIR),
        "logs_dir": str(LOG_DIR),
    },
    "editor": {
        "start_mode": "design",
        "show_motion_path": True,
    },
    "hotkeys": {
        "play_pause": "Space",
        "delete": "Delete",
        "duplicate": "Ctrl+D",
        "copy": "Ctrl+C",
        "paste": "Ctrl+V",
        "forward": "]",
        "backward": "[",
    },
}


def banner() -> str:
    return (
        f"{APP_NAME} {version_string()}  •  {APP_ID}\n"
        f"Data: {APPDATA_DIR}"
    )


if __name__ == "__main__":
    ensure_app_dirs()
    print(banner())
