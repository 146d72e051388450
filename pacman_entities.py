from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


# --- Config ----------------------------------------------------------------------------------
MOVE_STEP = 0.125   # progress gained per tick; 8 ticks per tile for every agent


# --- Grid primitives --------------------------------------------------
class GridPosition(NamedTuple):
    x: int
    y: int

    def step(self, direction, n=1):
        dx, dy = direction.delta
        return GridPosition(self.x + n * dx, self.y + n * dy)


class Direction(Enum):
    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self):
        return self.value

    @property
    def opposite(self):
        dx, dy = self.value
        return Direction((-dx, -dy))

    @property
    def rotation(self):
        return FACING[self]


# Visual rotation in degrees (y grows downward). NONE has no rotation.
FACING = {
    Direction.RIGHT: 0,
    Direction.DOWN: 90,
    Direction.LEFT: 180,
    Direction.UP: 270,
}


class GhostKind(Enum):
    CHASER = "chaser"       # heads straight for the player
    AMBUSHER = "ambusher"   # 4 tiles ahead of the player
    FLANKER = "flanker"     # 2 tiles ahead of the player
    SHY = "shy"             # chases from afar, retreats to its anchor when close


# --- Entities ------------------------------------------------
@dataclass
class Agent:
    """
    One moving actor. `position` is authoritative when `progress == 1`; in between
    the actor is drawn `progress` of the way from `position` to `target`.
    """
    position: GridPosition
    target: GridPosition = None
    progress: float = 1.0
    facing: int = 0
    current_direction: Direction = Direction.NONE
    queued_direction: Direction = Direction.NONE

    def __post_init__(self):
        self.position = GridPosition(*self.position)
        self.target = self.position if self.target is None else GridPosition(*self.target)

    @property
    def at_decision_point(self):
        return self.progress >= 1


@dataclass
class Pursuer:
    agent: Agent
    kind: GhostKind
    home: GridPosition
    scatter_anchor: GridPosition

    @property
    def position(self):
        return self.agent.position


@dataclass
class Pellet:
    position: GridPosition
    is_power: bool = False
    active: bool = True


# --- Motion Model ----------------------------------------------------------------------
def _walkable_neighbour(grid, cell, direction):
    if direction is Direction.NONE:
        return None
    nxt = cell.step(direction)
    return nxt if grid.is_walkable(nxt.x, nxt.y) else None


def advance(agent, grid):
    """Move one agent by one tick."""
    if agent.progress >= 1:
        # decision point: snap, maybe turn, then start the next tile if the way is open
        agent.position = agent.target
        agent.progress = 1.0

        if _walkable_neighbour(grid, agent.position, agent.queued_direction) is not None:
            agent.current_direction = agent.queued_direction

        nxt = _walkable_neighbour(grid, agent.position, agent.current_direction)
        if nxt is not None:
            agent.target = nxt
            agent.progress = 0.0
            agent.facing = agent.current_direction.rotation
        return

    agent.progress = min(1.0, agent.progress + MOVE_STEP)
    if agent.progress >= 1:
        agent.position = agent.target   # arrived; keep position == target at progress 1


def interpolated_position(agent):
    """Visual position in (fractional) grid units."""
    (x0, y0), (x1, y1) = agent.position, agent.target
    p = agent.progress
    return x0 + (x1 - x0) * p, y0 + (y1 - y0) * p
