"""Command line configuration: config.json plus environment overrides."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

FORMATS = ("url", "qr")

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config.json"
DEFAULTS = {"master_key": "", "format": "url"}


def load_config(path: Optional[Path] = None) -> Dict:
    """
    Read the JSON config at `path` (missing default file -> built-in defaults),
    then apply MASTER_KEY / SHORTCRYPT_FORMAT from the environment.
    """
    cfg = dict(DEFAULTS)
    if path is not None or DEFAULT_CONFIG.exists():
        path = Path(path) if path is not None else DEFAULT_CONFIG
        with path.open("r", encoding="utf-8") as f:
            cfg.update(json.load(f))

    env_key = os.getenv("MASTER_KEY")
    if env_key is not None:
        cfg["master_key"] = env_key
    env_format = os.getenv("SHORTCRYPT_FORMAT")
    if env_format is not None:
        cfg["format"] = env_format.lower()
    return cfg


def resolve_settings(cfg: Dict, key: Optional[str] = None, fmt: Optional[str] = None):
    """Apply command line overrides and validate. Returns (key, format)."""
    master_key = key if key is not None else cfg.get("master_key", "")
    if not master_key:
        raise ValueError("no key provided (set master_key in config.json, MASTER_KEY env or --key)")
    fmt = (fmt or cfg.get("format") or "url").lower()
    if fmt not in FORMATS:
        raise ValueError(f"unknown format '{fmt}' (expected one of: {', '.join(FORMATS)})")
    return master_key, fmt
