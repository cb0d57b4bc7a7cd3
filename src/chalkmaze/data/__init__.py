"""Bundled theme data.

Themes are presentation settings (lighting, fog, texture paths). The core only
reads the wall-torch block, which drives torch placement in
``chalkmaze.render_state``. Everything is validated against
``themes.schema.json`` before use.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Mapping, Optional, Tuple

from jsonschema import Draft7Validator

from ..exceptions import ThemeDataError

logger = logging.getLogger(__name__)

_PKG = "chalkmaze.data"
THEMES_FILE = "themes.json"
SCHEMA_FILE = "themes.schema.json"


@dataclass(frozen=True)
class TorchLighting:
    color: int
    intensity: float
    distance: float
    spacing: int
    flicker_min: float
    flicker_max: float


@dataclass(frozen=True)
class Theme:
    key: str
    name: str
    wall_torches: TorchLighting
    levels: Optional[Tuple[int, int]] = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def covers(self, level: int) -> bool:
        if self.levels is None:
            return False
        lo, hi = self.levels
        return lo <= level <= hi


def _read_json(name: str) -> Dict[str, Any]:
    with resources.files(_PKG).joinpath(name).open("rb") as fh:
        return json.load(fh)


@lru_cache(maxsize=1)
def _schema() -> Dict[str, Any]:
    return _read_json(SCHEMA_FILE)


def validate_themes(data: Any) -> None:
    """Raise ThemeDataError listing every schema violation in ``data``."""
    validator = Draft7Validator(_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        for err in errors:
            logger.error("Theme schema validation error at %s: %s", list(err.path), err.message)
        raise ThemeDataError("Theme data failed schema validation", errors)
    if data["default"] not in data["themes"]:
        raise ThemeDataError(f"Default theme '{data['default']}' is not defined")


def parse_themes(data: Mapping[str, Any]) -> Dict[str, Theme]:
    validate_themes(data)
    out: Dict[str, Theme] = {}
    for key, doc in data["themes"].items():
        torches = doc["lighting"]["wall_torches"]
        levels = doc.get("levels")
        out[key] = Theme(
            key=key,
            name=doc["name"],
            wall_torches=TorchLighting(
                color=int(torches["color"]),
                intensity=float(torches["intensity"]),
                distance=float(torches.get("distance", 0.0)),
                spacing=int(torches["spacing"]),
                flicker_min=float(torches["flicker_min"]),
                flicker_max=float(torches["flicker_max"]),
            ),
            levels=(int(levels[0]), int(levels[1])) if levels else None,
            raw=doc,
        )
    logger.debug("Loaded %d theme(s): %s", len(out), ", ".join(sorted(out)))
    return out


@lru_cache(maxsize=1)
def load_themes() -> Tuple[str, Dict[str, Theme]]:
    """Return ``(default_key, themes)`` from the bundled JSON."""
    data = _read_json(THEMES_FILE)
    return data["default"], parse_themes(data)


def theme_for_level(level: int) -> Theme:
    """Theme whose level range covers ``level``; the default theme otherwise."""
    default_key, themes = load_themes()
    for theme in themes.values():
        if theme.covers(level):
            return theme
    return themes[default_key]


__all__ = [
    "Theme",
    "TorchLighting",
    "load_themes",
    "parse_themes",
    "theme_for_level",
    "validate_themes",
]
