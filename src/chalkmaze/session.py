from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .agent import AgentController, MovementIntents
from .config import MazeSettings
from .data import theme_for_level
from .events import EventBus, EventType
from .geometry import Box3, CoordinateMapper, Vec3
from .maze.generator import BacktrackingGenerator, MazeGenerator
from .maze.grid import Grid
from .maze.pathfinding import PathFinder
from .maze.progression import LevelPolicy
from .maze.tiles import Cell
from .navigation.markers import MarkerInventory, MarkerPose, RayHit
from .navigation.raycast import cast_wall_ray
from .physics.collision import CollisionWorld
from .render_state import TorchRenderState, place_torches
from .results import Failure, MarkerKind, Outcome
from .rng import RNGManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveHint:
    path: List[Cell]
    expires_at: float


class MazeSession:
    """Holds the current level: grid, collision world, agent, markers and hints.

    One ``update`` per frame moves the agent against the walls, expires the
    path hint and advances to the next level when the agent reaches the exit.
    Each level's state is built completely before it replaces the previous
    one. Failed player actions come back as ``Outcome`` failures and are also
    published as ``notice`` events for the UI.
    """

    def __init__(
        self,
        settings: Optional[MazeSettings] = None,
        bus: Optional[EventBus] = None,
        generator: Optional[MazeGenerator] = None,
    ) -> None:
        self.settings = settings or MazeSettings()
        s = self.settings
        self.bus = bus or EventBus()
        self.rngm = RNGManager(s.seed)
        self.policy = LevelPolicy(s)
        self.mapper = CoordinateMapper(s.cell_size)
        self.generator = generator or BacktrackingGenerator()
        self.pathfinder = PathFinder(self.mapper)
        self.controller = AgentController(s.move_speed, s.mouse_sensitivity)
        self.intents = MovementIntents()
        self.markers = MarkerInventory(
            floor_capacity=s.floor_marker_capacity,
            wall_capacity=s.wall_marker_capacity,
            wall_range=s.wall_marker_range,
            surface_offset=s.marker_surface_offset,
            floor_marker_height=s.floor_marker_height,
        )
        self.torches = TorchRenderState()

        self.level = 0
        self.grid: Optional[Grid] = None
        self.collision: Optional[CollisionWorld] = None
        self.position = Vec3()
        self.hints_remaining = 0
        self.active_hint: Optional[ActiveHint] = None
        self.elapsed = 0.0
        self._respawn_rng = self.rngm.context_rng("respawn", 0)

    # ------------------------ Level lifecycle ------------------------
    def start(self, level: int = 1) -> Grid:
        """Build and switch to ``level``. Returns the new grid."""
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        s = self.settings
        width, height = self.policy.dimensions(level)
        seed = self.rngm.derive_seed("maze_layout", level)
        grid = self.generator.generate(width, height, seed)

        collision = CollisionWorld(self.mapper, s.wall_height, s.agent_radius, s.agent_height)
        collision.rebuild(grid)
        theme = theme_for_level(level)
        torches = place_torches(
            grid, theme.wall_torches, self.mapper, s.wall_height, self.rngm.context_rng("torches", level)
        )
        caps = self.policy.capacities(level)

        # Swap everything in at once.
        self.level = level
        self.grid = grid
        self.collision = collision
        self.markers.reset(caps.floor_markers, caps.wall_markers)
        self.hints_remaining = caps.hints
        self.active_hint = None
        self.position = self.mapper.cell_center(grid.start, s.eye_height)
        self.controller.reset()
        self.intents.clear()
        self.torches.reset(torches)
        self._respawn_rng = self.rngm.context_rng("respawn", level)

        logger.info("Level %d started: %dx%d maze (theme=%s)", level, width, height, theme.key)
        self._publish(
            EventType.LEVEL_STARTED,
            {"level": level, "width": width, "height": height, "seed": seed, "theme": theme.key},
        )
        return grid

    def advance_level(self) -> Grid:
        return self.start(self.level + 1)

    def _require_level(self) -> Grid:
        if self.grid is None or self.collision is None:
            raise RuntimeError("MazeSession.start() must be called before playing")
        return self.grid

    # ------------------------ Per-frame update ------------------------
    def update(self, dt: float) -> bool:
        """Advance one frame. Returns True when the exit was reached."""
        grid = self._require_level()
        assert self.collision is not None
        self.elapsed += dt
        self.torches.advance(dt)

        delta = self.controller.movement_delta(self.intents, dt)
        if delta.x or delta.z:
            self.position = self.collision.resolve(self.position, delta)

        if self.active_hint is not None and self.elapsed >= self.active_hint.expires_at:
            self.active_hint = None
            self._publish(EventType.HINT_EXPIRED, {"level": self.level})

        if self.position.horizontal_distance(self.exit_position) < self.settings.exit_radius:
            logger.info("Level %d complete (grid %r)", self.level, grid)
            self._publish(EventType.LEVEL_COMPLETED, {"level": self.level})
            self.advance_level()
            return True
        return False

    # ------------------------ Queries ------------------------
    @property
    def start_position(self) -> Vec3:
        return self.mapper.cell_center(self._require_level().start, self.settings.eye_height)

    @property
    def exit_position(self) -> Vec3:
        return self.mapper.cell_center(self._require_level().exit, 0.0)

    @property
    def wall_boxes(self) -> tuple[Box3, ...]:
        self._require_level()
        assert self.collision is not None
        return self.collision.boxes

    @property
    def agent_cell(self) -> Cell:
        return self.mapper.cell_of(self.position)

    # ------------------------ Actions ------------------------
    def reveal_hint(self) -> Outcome[List[Cell]]:
        """Show the route to the exit for ``hint_duration`` seconds.

        A hint is only spent when there is a path to show.
        """
        grid = self._require_level()
        if self.hints_remaining <= 0:
            return self._notice(Outcome.fail(Failure.HINTS_EXHAUSTED))
        path = self.pathfinder.shortest_path(grid, self.position)
        if path is None:
            return self._notice(Outcome.fail(Failure.PATH_UNAVAILABLE))
        self.hints_remaining -= 1
        self.active_hint = ActiveHint(path=path, expires_at=self.elapsed + self.settings.hint_duration)
        logger.info("Path to exit revealed (%d cells, %d hints left)", len(path), self.hints_remaining)
        self._publish(
            EventType.HINT_REVEALED,
            {"level": self.level, "path": list(path), "hints_remaining": self.hints_remaining},
        )
        return Outcome.success(path)

    def drop_floor_marker(self) -> Outcome[MarkerPose]:
        self._require_level()
        return self._marker_result(self.markers.place_floor_marker(self.position))

    def place_wall_marker(self, hit: Optional[RayHit]) -> Outcome[MarkerPose]:
        self._require_level()
        return self._marker_result(self.markers.place_wall_marker(hit))

    def place_wall_marker_in_view(self) -> Outcome[MarkerPose]:
        """Cast from the agent's eye along the view direction and mark the wall hit."""
        grid = self._require_level()
        hit = cast_wall_ray(
            grid,
            self.position,
            self.controller.view_direction(),
            self.mapper,
            self.settings.wall_height,
        )
        return self.place_wall_marker(hit)

    def debug_teleport_near_exit(self) -> Outcome[Vec3]:
        """DEBUG ONLY: jump to a random open cell a few steps from the exit."""
        grid = self._require_level()
        lo, hi = self.settings.respawn_ring
        candidates = self.pathfinder.ring_candidates(grid, grid.exit, lo, hi)
        if not candidates:
            logger.info("Could not find teleport position near exit")
            return self._notice(Outcome.fail(Failure.CANDIDATES_UNAVAILABLE))
        cell = self._respawn_rng.choice(sorted(candidates))
        self.position = self.mapper.cell_center(cell, self.settings.eye_height)
        logger.info("Teleported near exit to %s (debug)", cell)
        self._publish(EventType.AGENT_TELEPORTED, {"level": self.level, "cell": cell})
        return Outcome.success(self.position)

    # ------------------------ Helpers ------------------------
    def _marker_result(self, outcome: Outcome[MarkerPose]) -> Outcome[MarkerPose]:
        if not outcome.ok:
            return self._notice(outcome)
        assert outcome.value is not None and outcome.kind is not None
        self._publish(
            EventType.MARKER_PLACED,
            {
                "kind": outcome.kind.value,
                "position": outcome.value.position.as_tuple(),
                "rotation": outcome.value.rotation,
                "remaining": self.markers.remaining(outcome.kind),
            },
        )
        return outcome

    def _notice(self, outcome: Outcome[Any]) -> Outcome[Any]:
        assert outcome.failure is not None
        logger.debug("Notice: %s (%s)", outcome.message, outcome.failure.value)
        self._publish(
            EventType.NOTICE,
            {
                "failure": outcome.failure.value,
                "kind": outcome.kind.value if outcome.kind else None,
                "message": outcome.message,
            },
        )
        return outcome

    def _publish(self, name: str, payload: Dict[str, Any]) -> None:
        self.bus.publish(name, payload)

    def summary(self) -> Dict[str, Any]:
        """Serializable snapshot of the current level for tools and the CLI."""
        grid = self._require_level()
        return {
            "seed_hex": self.rngm.get_master_seed_hex(),
            "level": self.level,
            "width": grid.width,
            "height": grid.height,
            "start": list(grid.start),
            "exit": list(grid.exit),
            "grid": grid.to_lines(),
            "wall_boxes": len(self.wall_boxes),
            "torches": len(self.torches.torches),
            "markers": {
                MarkerKind.FLOOR.value: self.markers.floor_remaining,
                MarkerKind.WALL.value: self.markers.wall_remaining,
            },
            "hints": self.hints_remaining,
        }


__all__ = [
    "ActiveHint",
    "MazeSession",
]
