"""Static configuration for the integrity check viewer.

All user-editable settings (report location, click timing, logging) live in
a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# INTEGRITY_CONFIG may come from the environment or a local .env file.
load_dotenv()
CONFIG_PATH = os.getenv("INTEGRITY_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Report opened when no path is given on the command line.
REPORT_PATH = _resolve_path(_CONFIG.get("report_path", "report.json"))

# Two clicks on the same row within this interval close the dialog.
DOUBLE_CLICK_INTERVAL = int(_CONFIG.get("double_click_interval_ms", 500)) / 1000.0

# Message cells are clipped to this many characters; the status line shows
# the full text of the highlighted row.
MESSAGE_CLIP_CHARS = int(_CONFIG.get("message_clip_chars", 64))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
