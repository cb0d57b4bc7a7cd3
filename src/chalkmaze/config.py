from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import tomllib

logger = logging.getLogger(__name__)


ENV_PREFIX = "CM_"
TOML_SECTIONS = ("maze", "agent", "markers", "hints")


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, str):
        v = value.strip()
        if v == "" or v.lower() == "none":
            return None
        return int(v, 0)
    return int(value)


def _clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


@dataclass
class MazeSettings:
    """Tunable constants for maze generation, the agent and navigation aids.

    The settings can be constructed/overridden from:
    - Environment variables (prefix: CM_, e.g. CM_SEED=42)
    - A TOML config file (env CM_SETTINGS_FILE or configs/settings.toml if present)

    TOML files may group keys under [maze], [agent], [markers] and [hints]
    or keep them at the top level.
    """

    # Maze geometry
    cell_size: float = 1.0
    wall_height: float = 3.0
    min_size: int = 11
    max_size: int = 51
    size_increment: int = 4
    seed: Optional[int] = None

    # Agent
    eye_height: float = 1.5
    agent_radius: float = 0.3
    agent_height: float = 1.6
    move_speed: float = 3.0
    mouse_sensitivity: float = 0.0016
    exit_radius: float = 0.5

    # Markers
    floor_marker_capacity: int = 8
    wall_marker_capacity: int = 12
    wall_marker_range: float = 2.0
    marker_surface_offset: float = 0.01
    floor_marker_height: float = 0.08

    # Hints and debug respawn
    hints_per_level: int = 2
    hint_duration: float = 5.0
    respawn_min_steps: int = 3
    respawn_max_steps: int = 4

    @property
    def respawn_ring(self) -> Tuple[int, int]:
        return (self.respawn_min_steps, self.respawn_max_steps)

    # ------------------------ Core API ------------------------
    def validate(self) -> None:
        """Validate and normalize settings to safe values."""
        defaults = MazeSettings()
        for name in ("cell_size", "wall_height", "agent_height", "move_speed", "hint_duration"):
            value = float(getattr(self, name))
            if value <= 0.0:
                logger.warning("Invalid %s=%s; resetting to %s", name, value, getattr(defaults, name))
                value = getattr(defaults, name)
            setattr(self, name, value)

        # The agent box must fit inside a corridor one cell wide.
        self.agent_radius = _clamp(float(self.agent_radius), 0.01, self.cell_size * 0.49)
        self.eye_height = _clamp(float(self.eye_height), 0.0, self.wall_height)
        self.exit_radius = max(0.0, float(self.exit_radius))
        self.mouse_sensitivity = max(0.0, float(self.mouse_sensitivity))

        if self.min_size < 11 or self.min_size % 2 == 0:
            logger.warning("Invalid min_size=%s; resetting to 11", self.min_size)
            self.min_size = 11
        if self.max_size > 51 or self.max_size % 2 == 0 or self.max_size < self.min_size:
            logger.warning("Invalid max_size=%s; resetting to 51", self.max_size)
            self.max_size = 51
        if self.size_increment <= 0 or self.size_increment % 2 == 1:
            logger.warning("Invalid size_increment=%s; resetting to 4", self.size_increment)
            self.size_increment = 4

        self.floor_marker_capacity = max(0, int(self.floor_marker_capacity))
        self.wall_marker_capacity = max(0, int(self.wall_marker_capacity))
        self.wall_marker_range = max(0.0, float(self.wall_marker_range))
        self.marker_surface_offset = max(0.0, float(self.marker_surface_offset))
        self.floor_marker_height = max(0.0, float(self.floor_marker_height))
        self.hints_per_level = max(0, int(self.hints_per_level))

        self.respawn_min_steps = max(0, int(self.respawn_min_steps))
        self.respawn_max_steps = int(self.respawn_max_steps)
        if self.respawn_max_steps < self.respawn_min_steps:
            logger.warning(
                "respawn_max_steps=%s below respawn_min_steps=%s; using min for both",
                self.respawn_max_steps,
                self.respawn_min_steps,
            )
            self.respawn_max_steps = self.respawn_min_steps

        self.seed = _as_optional_int(self.seed)

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MazeSettings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in data.items() if k in allowed}
        unknown = sorted(set(data) - allowed)
        if unknown:
            logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
        obj = cls(**filtered)
        obj.validate()
        return obj

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            env_key = ENV_PREFIX + f.name.upper()
            raw = env.get(env_key)
            if raw is None or raw == "":
                continue
            if f.name == "seed":
                caster: Any = _as_optional_int
            elif isinstance(f.default, int):
                caster = int
            else:
                caster = float
            try:
                out[f.name] = caster(raw)
            except ValueError as exc:
                logger.error("Invalid env for %s=%r: %s", env_key, raw, exc)
        return out

    @classmethod
    def from_toml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        try:
            with path.open("rb") as f:
                doc = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.error("Failed to read settings TOML %s: %s", path, exc)
            return {}
        flat: Dict[str, Any] = {}
        for section in TOML_SECTIONS:
            if isinstance(doc.get(section), dict):
                flat.update(doc[section])
        for k, v in doc.items():
            if isinstance(v, dict):
                continue
            flat[k] = v
        return flat

    @classmethod
    def discover_config_path(cls) -> Optional[Path]:
        env_path = os.environ.get("CM_SETTINGS_FILE")
        if env_path:
            return Path(env_path).expanduser().resolve()
        # <repo>/src/chalkmaze/config.py -> <repo>
        repo_root = Path(__file__).resolve().parents[2]
        default_path = repo_root / "configs" / "settings.toml"
        if default_path.exists():
            return default_path
        return None

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Dict[str, str]] = None,
        file_path: Optional[Path | str] = None,
    ) -> "MazeSettings":
        # Order of precedence (lowest to highest): defaults < file < env
        data: Dict[str, Any] = {}
        if file_path is not None:
            chosen_path: Optional[Path] = Path(file_path).expanduser().resolve()
        else:
            chosen_path = cls.discover_config_path()
        if chosen_path is not None:
            data.update(cls.from_toml_file(chosen_path))
        data.update(cls.from_env(env))
        return cls.from_dict(data)


__all__ = [
    "MazeSettings",
    "ENV_PREFIX",
]
