# app/themes.py
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any, List
import json
import logging

log = logging.getLogger(__name__)


@dataclass
class Theme:
    name: str
    background: str
    key_fill: str
    key_stroke: str
    key_text: str
    highlight: str
    success: str
    error: str
    text: str
    text_muted: str
    prompt: str


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="Typi Night",
        background="#1a1a2e",
        key_fill="#2c2c54",
        key_stroke="#4a4a8a",
        key_text="#ffffff",
        highlight="#4a4a8a",
        success="#4caf50",
        error="#f44336",
        text="#ffffff",
        text_muted="#aaaaaa",
        prompt="#4caf50",
    ),
    Theme(
        name="Nord",
        background="#2e3440",
        key_fill="#3b4252",
        key_stroke="#4c566a",
        key_text="#eceff4",
        highlight="#5e81ac",
        success="#a3be8c",
        error="#bf616a",
        text="#eceff4",
        text_muted="#88c0d0",
        prompt="#a3be8c",
    ),
    Theme(
        name="Monkeytype Dark",
        background="#0f1115",
        key_fill="#1f2228",
        key_stroke="#3a3f4b",
        key_text="#e5e7eb",
        highlight="#6b5a1e",
        success="#22c55e",
        error="#ef4444",
        text="#e5e7eb",
        text_muted="#6b7280",
        prompt="#eab308",
    ),
]

BUILTIN_COUNT = len(THEMES)
DEFAULT_THEME_INDEX = 0
_CUSTOM_FILE = Path("themes.json")
_FIELDS = [f.name for f in fields(Theme)]


# -------- helpers --------
def theme_from_dict(d: Dict[str, Any]) -> Theme:
    missing = set(_FIELDS) - set(d.keys())
    if missing:
        raise ValueError(f"Missing theme keys: {', '.join(sorted(missing))}")
    return Theme(**{name: str(d[name]) for name in _FIELDS})


# -------- public API used by UI --------
def load_custom_themes(path: Path = _CUSTOM_FILE) -> int:
    """Append extra themes from a JSON list (if present). Returns how many were added."""
    if not path.exists():
        return 0
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Failed to read %s: %s", path, e)
        return 0
    if not isinstance(data, list):
        log.warning("%s must hold a list of themes", path)
        return 0
    added = 0
    for item in data:
        try:
            THEMES.append(theme_from_dict(item))
            added += 1
        except (ValueError, AttributeError, TypeError) as e:
            log.warning("Skipping custom theme: %s", e)
    return added


def find_theme(name: str) -> Theme:
    for t in THEMES:
        if t.name == name:
            return t
    log.warning("Unknown theme %r, using %s", name, THEMES[DEFAULT_THEME_INDEX].name)
    return THEMES[DEFAULT_THEME_INDEX]
