import math

import pytest

from chalkmaze.agent import PITCH_LIMIT, AgentController, MovementIntents


def test_yaw_zero_faces_negative_z():
    ctrl = AgentController()
    f = ctrl.forward()
    assert f.x == pytest.approx(0.0)
    assert f.z == pytest.approx(-1.0)


def test_forward_movement_scaled_by_speed():
    ctrl = AgentController(move_speed=3.0)
    delta = ctrl.movement_delta(MovementIntents(forward=True), 0.5)
    assert delta.z == pytest.approx(-1.5)
    assert delta.y == 0.0


def test_strafe_right_is_positive_x_at_yaw_zero():
    ctrl = AgentController()
    delta = ctrl.movement_delta(MovementIntents(right=True), 1.0)
    assert delta.x == pytest.approx(3.0)
    assert delta.z == pytest.approx(0.0)


def test_diagonal_is_not_faster():
    ctrl = AgentController(move_speed=3.0)
    delta = ctrl.movement_delta(MovementIntents(forward=True, left=True), 1.0)
    assert delta.length() == pytest.approx(3.0)


def test_opposite_keys_cancel():
    ctrl = AgentController()
    intents = MovementIntents(forward=True, backward=True)
    assert intents.any
    assert ctrl.movement_delta(intents, 1.0).length() == 0.0
    intents.clear()
    assert not intents.any


def test_look_clamps_pitch():
    ctrl = AgentController(sensitivity=0.01)
    ctrl.look(0.0, -10_000.0)
    assert ctrl.pitch == pytest.approx(PITCH_LIMIT)
    ctrl.look(100.0, 0.0)
    assert ctrl.yaw == pytest.approx(-1.0)
    v = ctrl.view_direction()
    assert v.length() == pytest.approx(1.0)
    assert v.y == pytest.approx(math.sin(PITCH_LIMIT))
