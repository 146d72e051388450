"""Tests for game state, scatter mode, pellet pickup and the tick pipeline."""

from __future__ import annotations

import pytest

from pacman_entities import Agent, Direction, GhostKind, GridPosition, interpolated_position
from pacman_grid import load_map_from_text
from pacman_rules import (
    PELLET_POINTS,
    SCATTER_TICKS,
    check_capture,
    check_pickup,
    new_game,
    render_snapshot,
    step,
    tick_scatter_timer,
    trigger_scatter,
)

SANDWICH = ["222", "212", "222"]

# player on the left, a pellet and a power pellet to its right, one ghost far right
STRIP = ["2222222222", "2413000052", "2222222222"]


class TestNewGame:
    def test_pellets_and_counts(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        assert state.player.position == (1, 1)
        assert state.pellets_remaining == 2
        assert [(p.position, p.is_power) for p in state.pellets] == [((2, 1), False), ((3, 1), True)]
        assert state.score == 0 and state.scatter_timer == 0 and not state.won

    def test_kinds_cycle_in_spawn_order(self) -> None:
        layout = load_map_from_text(["2222222", "2455555", "2222222"])
        state = new_game(layout)
        kinds = [g.kind for g in state.pursuers]
        assert kinds == [GhostKind.CHASER, GhostKind.AMBUSHER, GhostKind.FLANKER,
                         GhostKind.SHY, GhostKind.CHASER]
        assert all(g.home == g.position for g in state.pursuers)

    def test_anchors_are_unique_corners(self) -> None:
        layout = load_map_from_text(["2222222", "2455555", "2222222"])
        state = new_game(layout)
        anchors = [g.scatter_anchor for g in state.pursuers]
        assert anchors[:4] == [(6, 0), (0, 0), (6, 2), (0, 2)]
        assert anchors[4] == (5, 1)
        assert len(set(anchors)) == len(anchors)


class TestCheckPickup:
    def test_sandwich_scenario(self) -> None:
        state = new_game(load_map_from_text(SANDWICH))
        step(state)
        assert not state.pellets[0].active
        assert state.score == 10 == PELLET_POINTS
        assert state.pellets_remaining == 0
        assert state.won

    def test_pickup_is_idempotent(self) -> None:
        state = new_game(load_map_from_text(SANDWICH))
        assert len(check_pickup(state)) == 1
        assert check_pickup(state) == []
        assert state.score == PELLET_POINTS
        assert state.pellets_remaining == 0

    def test_nothing_under_the_player(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        assert check_pickup(state) == []
        assert state.score == 0 and not state.won

    def test_power_pellet_triggers_scatter(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        state.player.position = state.player.target = GridPosition(3, 1)
        check_pickup(state)
        assert state.scatter_timer == SCATTER_TICKS
        assert state.score == PELLET_POINTS

    def test_inert_pellet_off_the_map(self) -> None:
        state = new_game(load_map_from_text(SANDWICH))
        state.pellets[0].position = GridPosition(9, 9)
        check_pickup(state)
        assert state.pellets[0].active and state.score == 0

    def test_won_exactly_when_last_pellet_eaten_and_sticky(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        state.player.queued_direction = Direction.RIGHT
        seen_won = False
        for _ in range(40):
            step(state)
            assert state.won == (state.pellets_remaining == 0)
            seen_won = seen_won or state.won
            assert state.won or not seen_won
        assert state.won
        assert state.score == 2 * PELLET_POINTS


class TestScatterMode:
    def _state_with_moving_ghost(self, progress: float):
        state = new_game(load_map_from_text(STRIP))
        g = state.pursuers[0].agent
        g.position, g.target = GridPosition(7, 1), GridPosition(6, 1)
        g.progress = progress
        g.current_direction = Direction.LEFT
        g.queued_direction = Direction.LEFT
        return state, g

    def test_mid_transit_reversal_swaps_and_inverts(self) -> None:
        state, g = self._state_with_moving_ghost(0.6)
        trigger_scatter(state)
        assert g.progress == pytest.approx(0.4)
        assert g.position == (6, 1) and g.target == (7, 1)
        assert g.current_direction is Direction.RIGHT
        assert g.queued_direction is Direction.NONE

    @pytest.mark.parametrize("progress", [0.0, 0.125, 0.6, 0.875])
    def test_reversal_keeps_visual_position(self, progress: float) -> None:
        state, g = self._state_with_moving_ghost(progress)
        before = interpolated_position(g)
        trigger_scatter(state)
        assert interpolated_position(g) == pytest.approx(before)
        assert 0.0 <= g.progress <= 1.0
        if g.progress == 1.0:
            assert g.position == g.target

    def test_reversal_at_zero_progress_snaps_back_to_origin(self) -> None:
        state, g = self._state_with_moving_ghost(0.0)
        trigger_scatter(state)
        assert g.progress == 1.0
        assert g.position == g.target == (7, 1)
        assert g.current_direction is Direction.RIGHT

    def test_reversal_turns_facing_around(self) -> None:
        state, g = self._state_with_moving_ghost(0.5)
        g.facing = Direction.LEFT.rotation
        trigger_scatter(state)
        assert g.facing == Direction.RIGHT.rotation

    def test_ghost_leaving_its_cell_on_the_pickup_tick(self) -> None:
        state = new_game(load_map_from_text(["2222222", "2430052", "2222222"]))
        ghost = state.pursuers[0].agent
        ghost.target, ghost.progress = GridPosition(4, 1), 0.125
        ghost.current_direction = Direction.LEFT
        pac = state.player
        pac.target, pac.progress = GridPosition(2, 1), 0.0
        pac.current_direction = Direction.RIGHT
        # the ghost reaches (4,1) on tick 7 and sets off again on tick 8,
        # the same tick the player lands on the power pellet
        while state.scatter_timer == 0:
            step(state)
            for agent in (state.player, ghost):
                assert 0.0 <= agent.progress <= 1.0
                if agent.progress == 1.0:
                    assert agent.position == agent.target
        assert ghost.progress == 1.0
        assert state.ticks == 8
        assert ghost.position == ghost.target == (4, 1)
        assert ghost.current_direction is Direction.RIGHT
        assert not check_capture(state)

    def test_stationary_ghost_only_flips_direction(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        g = state.pursuers[0].agent
        g.current_direction = Direction.LEFT
        trigger_scatter(state)
        assert g.current_direction is Direction.RIGHT
        assert g.position == g.target == (8, 1)
        assert g.progress == 1.0

    def test_retrigger_resets_timer_and_reverses_again(self) -> None:
        state, g = self._state_with_moving_ghost(0.25)
        trigger_scatter(state)
        for _ in range(10):
            tick_scatter_timer(state)
        trigger_scatter(state)
        assert state.scatter_timer == SCATTER_TICKS
        assert g.current_direction is Direction.LEFT
        assert g.progress == pytest.approx(0.25)
        assert g.position == (7, 1)

    def test_timer_runs_down_to_chase(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        trigger_scatter(state)
        for _ in range(SCATTER_TICKS + 5):
            tick_scatter_timer(state)
        assert state.scatter_timer == 0
        assert not state.scatter_active


class TestStep:
    def test_invariants_hold_for_every_agent(self) -> None:
        layout = load_map_from_text([
            "2222222222",
            "2411111112",
            "2122122112",
            "2111153112",
            "2222222222",
        ])
        state = new_game(layout)
        state.player.queued_direction = Direction.RIGHT
        for _ in range(300):
            step(state)
            for agent in [state.player] + [g.agent for g in state.pursuers]:
                assert 0.0 <= agent.progress <= 1.0
                if agent.progress == 1.0:
                    assert agent.position == agent.target
                assert layout.grid.is_walkable(*agent.target)
        assert state.ticks == 300

    def test_power_pickup_turns_ghost_around_in_same_tick(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        ghost = state.pursuers[0].agent
        state.player.queued_direction = Direction.RIGHT
        while state.scatter_timer == 0:
            step(state)
        assert state.scatter_timer == SCATTER_TICKS - 1
        assert ghost.current_direction is Direction.RIGHT


class TestCheckCapture:
    def test_same_cell(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        assert not check_capture(state)
        state.pursuers[0].agent.position = state.pursuers[0].agent.target = GridPosition(1, 1)
        assert check_capture(state)

    def test_head_on_crossing(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        pac = state.player
        pac.position, pac.target, pac.progress = GridPosition(4, 1), GridPosition(5, 1), 0.5
        g = state.pursuers[0].agent
        g.position, g.target, g.progress = GridPosition(5, 1), GridPosition(4, 1), 0.375
        assert not check_capture(state)
        g.progress = 0.5
        assert check_capture(state)


class TestRenderSnapshot:
    def test_frame_contents(self) -> None:
        state = new_game(load_map_from_text(STRIP))
        state.player.target, state.player.progress = GridPosition(2, 1), 0.5
        frame = render_snapshot(state)
        assert (frame.player.x, frame.player.y) == pytest.approx((1.5, 1.0))
        assert frame.pursuers[0].kind is GhostKind.CHASER
        assert frame.pellets == ((GridPosition(2, 1), True, False), (GridPosition(3, 1), True, True))
        assert (frame.score, frame.scatter_timer, frame.won) == (0, 0, False)
