"""Tests for agents, directions and the per-tick motion model."""

from __future__ import annotations

import pytest

from pacman_entities import (
    MOVE_STEP,
    Agent,
    Direction,
    GridPosition,
    advance,
    interpolated_position,
)
from pacman_grid import load_map_from_text

CORRIDOR = load_map_from_text(["22222", "20002", "22022", "22222"]).grid
TICKS_PER_TILE = round(1 / MOVE_STEP)


def _check_invariants(agent: Agent) -> None:
    assert 0.0 <= agent.progress <= 1.0
    if agent.progress == 1.0:
        assert agent.position == agent.target


class TestDirection:
    def test_opposites(self) -> None:
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.NONE.opposite is Direction.NONE

    def test_rotations(self) -> None:
        assert Direction.UP.rotation == 270
        assert Direction.DOWN.rotation == 90
        assert Direction.LEFT.rotation == 180
        assert Direction.RIGHT.rotation == 0

    def test_grid_position_step(self) -> None:
        assert GridPosition(5, 5).step(Direction.RIGHT, 4) == (9, 5)
        assert GridPosition(5, 5).step(Direction.UP) == (5, 4)
        assert GridPosition(5, 5).step(Direction.NONE, 4) == (5, 5)


class TestAdvance:
    def test_stationary_without_intent(self) -> None:
        agent = Agent(GridPosition(1, 1))
        advance(agent, CORRIDOR)
        assert agent.position == agent.target == (1, 1)
        assert agent.progress == 1.0

    def test_queued_turn_commits_and_starts_moving(self) -> None:
        agent = Agent(GridPosition(1, 1), queued_direction=Direction.RIGHT)
        advance(agent, CORRIDOR)
        assert agent.current_direction is Direction.RIGHT
        assert agent.target == (2, 1)
        assert agent.position == (1, 1)
        assert agent.progress == 0.0
        assert agent.facing == 0

    def test_blocked_queued_direction_is_ignored(self) -> None:
        agent = Agent(GridPosition(1, 1), current_direction=Direction.RIGHT,
                      queued_direction=Direction.UP)
        advance(agent, CORRIDOR)
        assert agent.current_direction is Direction.RIGHT
        assert agent.target == (2, 1)
        # intent stays buffered for the next junction
        assert agent.queued_direction is Direction.UP

    def test_reaches_next_tile_after_fixed_ticks(self) -> None:
        agent = Agent(GridPosition(1, 1), queued_direction=Direction.RIGHT)
        advance(agent, CORRIDOR)
        for _ in range(TICKS_PER_TILE):
            advance(agent, CORRIDOR)
            _check_invariants(agent)
        assert agent.progress == 1.0
        assert agent.position == (2, 1)

    def test_buffered_turn_taken_at_junction(self) -> None:
        agent = Agent(GridPosition(1, 1), queued_direction=Direction.RIGHT)
        advance(agent, CORRIDOR)
        agent.queued_direction = Direction.DOWN
        for _ in range(TICKS_PER_TILE + 1):
            advance(agent, CORRIDOR)
        assert agent.current_direction is Direction.DOWN
        assert agent.target == (2, 2)
        assert agent.facing == 90

    def test_stops_at_wall_and_never_enters_it(self) -> None:
        agent = Agent(GridPosition(1, 1), queued_direction=Direction.RIGHT)
        for _ in range(10 * TICKS_PER_TILE):
            advance(agent, CORRIDOR)
            _check_invariants(agent)
            assert CORRIDOR.is_walkable(*agent.target)
        assert agent.position == (3, 1)
        assert agent.progress == 1.0

    def test_progress_clamped_on_overshoot(self) -> None:
        agent = Agent(GridPosition(1, 1), target=GridPosition(2, 1), progress=0.95,
                      current_direction=Direction.RIGHT)
        advance(agent, CORRIDOR)
        assert agent.progress == 1.0
        assert agent.position == (2, 1)


class TestInterpolatedPosition:
    def test_midway(self) -> None:
        agent = Agent(GridPosition(1, 1), target=GridPosition(2, 1), progress=0.25)
        assert interpolated_position(agent) == pytest.approx((1.25, 1.0))

    def test_at_rest(self) -> None:
        assert interpolated_position(Agent(GridPosition(3, 2))) == (3, 2)
