# app/config.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import os

from app.errors import ConfigError
from app.layout import KeyboardLayout, KeyGeometry

log = logging.getLogger(__name__)

CONFIG_ENV = "TYPI_CONFIG"
DEFAULT_CONFIG_FILE = Path("typi.json")

# Scaffold text rows, centered horizontally: (y, font px, bold)
TITLE_ROW = (50, 48, True)
INSTRUCTIONS_ROW = (120, 24, False)
SCORE_ROW = (170, 20, False)
PROMPT_ROW = (250, 72, True)


@dataclass
class AppConfig:
    title: str = "Typi - Typing Tutor"
    width: int = 1280
    height: int = 800
    theme: str = "Typi Night"
    seed: Optional[int] = None
    log_level: str = "INFO"
    geometry: KeyGeometry = field(default_factory=KeyGeometry)
    layout: KeyboardLayout = field(default_factory=KeyboardLayout)


def _geometry_from_dict(d: Dict[str, Any]) -> KeyGeometry:
    known = {f.name for f in fields(KeyGeometry)}
    kwargs: Dict[str, Any] = {}
    for k, v in d.items():
        if k not in known:
            continue
        if k == "row_offsets":
            if not isinstance(v, list) or not all(
                isinstance(x, (int, float)) and not isinstance(x, bool) for x in v
            ):
                raise ConfigError("geometry.row_offsets must be a list of numbers")
            kwargs[k] = tuple(float(x) for x in v)
        elif isinstance(v, (int, float)) and not isinstance(v, bool):
            kwargs[k] = float(v)
        else:
            raise ConfigError(f"geometry.{k} must be a number")
    return KeyGeometry(**kwargs)


def config_from_dict(d: Dict[str, Any]) -> AppConfig:
    if not isinstance(d, dict):
        raise ConfigError("Config root must be an object")
    cfg = AppConfig()
    for key, kind in (("title", str), ("theme", str), ("log_level", str), ("width", int), ("height", int)):
        if key in d:
            value = d[key]
            if not isinstance(value, kind) or isinstance(value, bool):
                raise ConfigError(f"{key} must be of type {kind.__name__}")
            setattr(cfg, key, value)
    if d.get("seed") is not None:
        if not isinstance(d["seed"], int):
            raise ConfigError("seed must be an integer")
        cfg.seed = d["seed"]
    if "geometry" in d:
        if not isinstance(d["geometry"], dict):
            raise ConfigError("geometry must be an object")
        cfg.geometry = _geometry_from_dict(d["geometry"])
    if "layout" in d:
        # LayoutError propagates: a bad layout aborts startup
        cfg.layout = KeyboardLayout(d["layout"])
    return cfg


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is None:
        env = os.environ.get(CONFIG_ENV)
        path = Path(env) if env else DEFAULT_CONFIG_FILE
    if not path.exists():
        log.info("No config at %s, using defaults", path)
        return AppConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    cfg = config_from_dict(data)
    log.info("Loaded config from %s", path)
    return cfg
