from __future__ import annotations

import math
from dataclasses import dataclass

from .geometry import UP, Vec3

MOVE_SPEED = 3.0
MOUSE_SENSITIVITY = 0.0016
PITCH_LIMIT = math.pi / 2 - 0.1


@dataclass
class MovementIntents:
    """Which movement keys are held this tick."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False

    def clear(self) -> None:
        self.forward = self.backward = self.left = self.right = False

    @property
    def any(self) -> bool:
        return self.forward or self.backward or self.left or self.right


class AgentController:
    """First-person look angles and per-tick movement deltas.

    Yaw 0 faces -Z; positive yaw turns left. Pitch is clamped short of
    straight up/down. The controller only produces deltas; collision is the
    caller's job.
    """

    def __init__(self, move_speed: float = MOVE_SPEED, sensitivity: float = MOUSE_SENSITIVITY) -> None:
        self.move_speed = move_speed
        self.sensitivity = sensitivity
        self.yaw = 0.0
        self.pitch = 0.0

    def look(self, dx: float, dy: float) -> None:
        """Apply a mouse movement in pixels."""
        self.yaw -= dx * self.sensitivity
        self.pitch -= dy * self.sensitivity
        self.pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch))

    def reset(self) -> None:
        self.yaw = 0.0
        self.pitch = 0.0

    def forward(self) -> Vec3:
        """Horizontal unit vector the agent faces."""
        return Vec3(-math.sin(self.yaw), 0.0, -math.cos(self.yaw))

    def view_direction(self) -> Vec3:
        """Unit view vector including pitch."""
        cp = math.cos(self.pitch)
        return Vec3(-math.sin(self.yaw) * cp, math.sin(self.pitch), -math.cos(self.yaw) * cp)

    def movement_delta(self, intents: MovementIntents, dt: float) -> Vec3:
        forward = self.forward()
        right = forward.cross(UP)
        direction = Vec3()
        if intents.forward:
            direction = direction + forward
        if intents.backward:
            direction = direction - forward
        if intents.right:
            direction = direction + right
        if intents.left:
            direction = direction - right
        if direction.length() == 0.0:
            return Vec3()
        return direction.normalized() * (self.move_speed * dt)


__all__ = [
    "AgentController",
    "MovementIntents",
]
