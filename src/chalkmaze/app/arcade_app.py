from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

try:
    import arcade  # type: ignore
except ImportError:  # pragma: no cover - optional for headless installs
    arcade = None

from ..config import MazeSettings
from ..events import Event, EventType
from ..maze.tiles import CellState
from ..results import MarkerKind
from ..session import MazeSession

logger = logging.getLogger(__name__)

TILE_SIZE = 14
MARGIN = 1
HUD_HEIGHT = 48
TURN_SPEED = 2.5  # radians per second

WALL_COLOR = (70, 70, 78)
FLOOR_COLOR = (24, 24, 28)
EXIT_COLOR = (0, 220, 0)
AGENT_COLOR = (60, 180, 255)
BREADCRUMB_COLOR = (255, 170, 68)
CHALK_COLOR = (238, 238, 238)
HINT_COLOR = (0, 255, 102)
TORCH_COLOR = (255, 204, 153)
BG_COLOR = (10, 10, 10)


class MazeWindow:
    """Top-down Arcade view of a MazeSession.

    W/S move, A/D strafe, Q/E turn, B drops a breadcrumb, C chalks the wall in
    front, P reveals the path and O is the debug teleport near the exit.

    Note: This class is only created if Arcade is available. Tests focus on the
    session layer, not rendering.
    """

    def __init__(self, session: MazeSession):
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        self.session = session
        self._turn = 0
        self._notice: Optional[Tuple[str, float]] = None
        side = session.policy.size(max(session.level, 1))
        width = side * TILE_SIZE
        height = side * TILE_SIZE + HUD_HEIGHT
        self._window = arcade.Window(width, height, title=self._caption())
        self._window.background_color = BG_COLOR
        self._window.on_draw = self.on_draw
        self._window.on_update = self.on_update
        self._window.on_key_press = self.on_key_press
        self._window.on_key_release = self.on_key_release
        self._subscriptions = [
            session.bus.subscribe(EventType.NOTICE, self._on_notice),
            session.bus.subscribe(EventType.LEVEL_STARTED, self._on_level_started),
        ]
        logger.info("Arcade window initialized (%dx%d)", width, height)

    def _caption(self) -> str:
        return f"Chalk Maze - Level {self.session.level}"

    def _on_notice(self, event: Event) -> None:
        self._notice = (event.payload["message"], self.session.elapsed + 1.5)

    def _on_level_started(self, event: Event) -> None:
        side = event.payload["width"]
        self._window.set_size(side * TILE_SIZE, side * TILE_SIZE + HUD_HEIGHT)
        self._window.set_caption(self._caption())

    def run(self) -> None:
        try:
            arcade.run()
        finally:
            for unsubscribe in self._subscriptions:
                unsubscribe()

    # ------------------------ Coordinates ------------------------
    def _to_screen(self, wx: float, wz: float) -> Tuple[float, float]:
        grid = self.session.grid
        assert grid is not None
        cs = self.session.mapper.cell_size
        sx = (wx / cs) * TILE_SIZE + TILE_SIZE / 2
        sy = (grid.height - 1 - wz / cs) * TILE_SIZE + TILE_SIZE / 2 + HUD_HEIGHT
        return sx, sy

    def _fill_cell(self, x: int, z: int, color: Tuple[int, int, int]) -> None:
        cx, cy = self._to_screen(*self.session.mapper.grid_to_world(x, z))
        half = TILE_SIZE / 2 - MARGIN
        arcade.draw_lrbt_rectangle_filled(cx - half, cx + half, cy - half, cy + half, color)

    # ------------------------ Arcade hooks ------------------------
    def on_draw(self) -> None:  # pragma: no cover - drawing only
        self._window.clear()
        session = self.session
        grid = session.grid
        if grid is None:
            return
        for z in range(grid.height):
            for x in range(grid.width):
                wall = grid.cell_at(x, z) is CellState.WALL
                self._fill_cell(x, z, WALL_COLOR if wall else FLOOR_COLOR)
        self._fill_cell(*grid.exit, EXIT_COLOR)

        for torch, intensity in zip(session.torches.torches, session.torches.intensities()):
            sx, sy = self._to_screen(torch.position.x, torch.position.z)
            shade = tuple(min(255, int(c * min(1.0, intensity))) for c in TORCH_COLOR)
            arcade.draw_circle_filled(sx, sy, TILE_SIZE * 0.2, shade)

        if session.active_hint is not None:
            points = [self._to_screen(*session.mapper.grid_to_world(*c)) for c in session.active_hint.path]
            arcade.draw_line_strip(points, HINT_COLOR, 2)

        for pose in session.markers.placed:
            sx, sy = self._to_screen(pose.position.x, pose.position.z)
            if pose.kind is MarkerKind.FLOOR:
                arcade.draw_circle_filled(sx, sy, TILE_SIZE * 0.2, BREADCRUMB_COLOR)
            else:
                r = TILE_SIZE * 0.2
                arcade.draw_line(sx - r, sy - r, sx + r, sy + r, CHALK_COLOR, 2)
                arcade.draw_line(sx - r, sy + r, sx + r, sy - r, CHALK_COLOR, 2)

        ax, ay = self._to_screen(session.position.x, session.position.z)
        radius = session.settings.agent_radius / session.mapper.cell_size * TILE_SIZE
        arcade.draw_circle_filled(ax, ay, max(2.0, radius), AGENT_COLOR)
        facing = session.controller.forward()
        arcade.draw_line(ax, ay, ax + facing.x * TILE_SIZE, ay - facing.z * TILE_SIZE, AGENT_COLOR, 2)

        hud = (
            f"Level {session.level}  {grid.width}x{grid.height}  "
            f"breadcrumbs {session.markers.floor_remaining}  chalk {session.markers.wall_remaining}  "
            f"hints {session.hints_remaining}"
        )
        arcade.draw_text(hud, 8, 26, arcade.color.WHITE, 11)
        if self._notice is not None:
            arcade.draw_text(self._notice[0], 8, 6, arcade.color.ORANGE, 11)

    def on_update(self, delta_time: float) -> None:
        session = self.session
        if self._turn:
            session.controller.yaw += self._turn * TURN_SPEED * delta_time
        session.update(delta_time)
        if self._notice is not None and session.elapsed >= self._notice[1]:
            self._notice = None

    def _movement_keys(self) -> Dict[int, str]:
        k = arcade.key
        return {
            k.W: "forward",
            k.UP: "forward",
            k.S: "backward",
            k.DOWN: "backward",
            k.A: "left",
            k.LEFT: "left",
            k.D: "right",
            k.RIGHT: "right",
        }

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        k = arcade.key
        intent = self._movement_keys().get(symbol)
        if intent:
            setattr(self.session.intents, intent, True)
        elif symbol == k.Q:
            self._turn = 1
        elif symbol == k.E:
            self._turn = -1
        elif symbol == k.B:
            self.session.drop_floor_marker()
        elif symbol == k.C:
            self.session.place_wall_marker_in_view()
        elif symbol == k.P:
            self.session.reveal_hint()
        elif symbol == k.O:
            self.session.debug_teleport_near_exit()

    def on_key_release(self, symbol: int, modifiers: int) -> None:
        intent = self._movement_keys().get(symbol)
        if intent:
            setattr(self.session.intents, intent, False)
        elif symbol in (arcade.key.Q, arcade.key.E):
            self._turn = 0


def run(settings: Optional[MazeSettings] = None, level: int = 1) -> int:  # pragma: no cover - manual usage
    """Launch the interactive viewer; returns a process exit code."""
    if arcade is None:
        raise RuntimeError("Arcade is not installed. Please install 'arcade' to run the viewer.")
    session = MazeSession(settings)
    session.start(level)
    window = MazeWindow(session)
    window.run()
    return 0


__all__ = [
    "MazeWindow",
    "run",
]
