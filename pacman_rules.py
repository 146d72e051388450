"""
Game state and the per-tick rules: scatter mode, pellet pickup, win and capture.

One GameState is created per level with `new_game` and then driven by calling
`step(state)` once per frame.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pacman_entities import (
    Agent, Direction, GhostKind, GridPosition, Pellet, Pursuer,
    advance, interpolated_position,
)
from pacman_ghost_ai import update_pursuer_intents
from pacman_grid import LevelGrid


# --- Config ----------------------------------------------------------------------------------
PELLET_POINTS = 10        # every pellet, power pellets included
SCATTER_TICKS = 6 * 60    # six seconds at 60 FPS

# Spawn order decides the kind
KIND_ORDER = (GhostKind.CHASER, GhostKind.AMBUSHER, GhostKind.FLANKER, GhostKind.SHY)


@dataclass
class GameState:
    grid: LevelGrid
    player: Agent
    pursuers: List[Pursuer] = field(default_factory=list)
    pellets: List[Pellet] = field(default_factory=list)
    score: int = 0
    pellets_remaining: int = 0
    scatter_timer: int = 0
    won: bool = False
    ticks: int = 0

    @property
    def scatter_active(self):
        return self.scatter_timer > 0


# --- Setup ---------------------------------------------------------------
def anchor_for(kind, index, grid):
    """Corner cell for this kind, nudged inward for every extra lap of four ghosts."""
    w, h = grid.width, grid.height
    inset = index // len(KIND_ORDER)
    corners = {
        GhostKind.CHASER: (w - 1 - inset, inset),
        GhostKind.AMBUSHER: (inset, inset),
        GhostKind.FLANKER: (w - 1 - inset, h - 1 - inset),
        GhostKind.SHY: (inset, h - 1 - inset),
    }
    return GridPosition(*corners[kind])


def new_game(layout):
    grid = layout.grid
    player = Agent(GridPosition(*layout.player_spawn))

    pursuers = []
    for i, spawn in enumerate(layout.pursuer_spawns):
        kind = KIND_ORDER[i % len(KIND_ORDER)]
        home = GridPosition(*spawn)
        pursuers.append(Pursuer(Agent(home), kind, home, anchor_for(kind, i, grid)))

    pellets = [Pellet(GridPosition(*p)) for p in layout.pellet_cells]
    pellets += [Pellet(GridPosition(*p), is_power=True) for p in layout.power_cells]

    return GameState(grid=grid, player=player, pursuers=pursuers, pellets=pellets,
                     pellets_remaining=len(pellets))


# --- Scatter mode ------------------------------------------------------------------
def reverse_pursuer(agent):
    if agent.progress < 1:
        # turn around mid-corridor without moving on screen
        agent.position, agent.target = agent.target, agent.position
        agent.progress = 1.0 - agent.progress
        agent.queued_direction = Direction.NONE
        if agent.progress >= 1:
            # had only just left its cell: it is back at rest there
            agent.position = agent.target
    agent.current_direction = agent.current_direction.opposite
    if agent.current_direction is not Direction.NONE:
        agent.facing = agent.current_direction.rotation


def trigger_scatter(state):
    """Enter (or re-enter) scatter mode and turn every pursuer around."""
    state.scatter_timer = SCATTER_TICKS
    for g in state.pursuers:
        reverse_pursuer(g.agent)


def tick_scatter_timer(state):
    if state.scatter_timer > 0:
        state.scatter_timer -= 1


# --- Pellets, win, capture ----------------------------------------------------------
def check_pickup(state):
    """Eat whatever is under the player. Returns the pellets eaten this call."""
    here = state.player.position
    eaten = []
    for p in state.pellets:
        if not p.active or p.position != here:
            continue
        p.active = False
        state.score += PELLET_POINTS
        state.pellets_remaining = max(0, state.pellets_remaining - 1)
        eaten.append(p)
        if p.is_power:
            trigger_scatter(state)

    if state.pellets_remaining == 0:
        state.won = True
    return eaten


def _caught(ghost, pac):
    if ghost.position == pac.position:
        return True
    # head-on in the same corridor segment and already crossed
    return (ghost.target == pac.position and pac.target == ghost.position
            and ghost.progress < 1 and pac.progress < 1
            and ghost.progress + pac.progress >= 1)


def check_capture(state):
    """True when a pursuer has reached the player."""
    return any(_caught(g.agent, state.player) for g in state.pursuers)


# ---- MAIN update ----------------------------------------------------------------
def step(state):
    """One tick: ghost decisions, motion, pickup, scatter countdown."""
    update_pursuer_intents(state)
    advance(state.player, state.grid)
    for g in state.pursuers:
        advance(g.agent, state.grid)
    eaten = check_pickup(state)
    tick_scatter_timer(state)
    state.ticks += 1
    return eaten


# --- Renderer view ------------------------------------------------------------
@dataclass(frozen=True)
class ActorView:
    x: float
    y: float
    facing: int
    kind: Optional[GhostKind] = None


@dataclass(frozen=True)
class Frame:
    player: ActorView
    pursuers: tuple
    pellets: tuple      # (position, active, is_power)
    score: int
    scatter_timer: int
    won: bool


def _view(agent, kind=None):
    x, y = interpolated_position(agent)
    return ActorView(x, y, agent.facing, kind)


def render_snapshot(state):
    return Frame(
        player=_view(state.player),
        pursuers=tuple(_view(g.agent, g.kind) for g in state.pursuers),
        pellets=tuple((p.position, p.active, p.is_power) for p in state.pellets),
        score=state.score,
        scatter_timer=state.scatter_timer,
        won=state.won,
    )
