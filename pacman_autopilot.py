from collections import deque

from pacman_entities import Direction


# --- Reflex Agent "AI" config ------------------------------------
REFLEX_WEIGHTS = {
    "stop_penalty": 250.0,       # discourage standing still
    "ghost_close_penalty": 300.0, # a chasing ghost within dist <= 1
    "ghost_near_penalty": 150.0,  # a chasing ghost at dist == 2
    "food_gain": 30.0,           # 1 / (1 + min_food_dist)
    "capsule_gain": 80.0,        # 1 / (1 + min_capsule_dist)
    "reverse_penalty": 10.0,
    "scatter_ghost_scale": 0.5,  # ghosts heading home are less of a threat
    "breadcrumb_base": 10.0,
    "breadcrumb_decay": 0.95,
}

MAX_REVERSE = 2      # reversals allowed in a row before the penalty kicks in
HISTORY_LEN = 12     # recent tiles remembered for the breadcrumb penalty

ACTIONS = (Direction.NONE, Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


def manhattan(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def get_legal_actions(grid, cell):
    return [a for a in ACTIONS
            if a is Direction.NONE or grid.is_walkable(*cell.step(a))]


class ReflexPilot:
    """
    Steers the player one tile at a time by scoring every legal move.
    Keeps the little bit of memory the scoring needs (visited tiles, reversal streak).
    """

    def __init__(self, weights=None):
        self.weights = dict(REFLEX_WEIGHTS if weights is None else weights)
        self.history = deque(maxlen=HISTORY_LEN)
        self.reverse_count = 0

    def evaluate(self, state, action):
        """Higher is better."""
        w = self.weights
        cell = state.player.position
        nxt = cell.step(action)
        evf = 0.0

        if action is Direction.NONE:
            evf -= w["stop_penalty"]

        food = [p.position for p in state.pellets if p.active and not p.is_power]
        if food:
            evf += w["food_gain"] * (1.0 / (1.0 + min(manhattan(nxt, f) for f in food)))

        caps = [p.position for p in state.pellets if p.active and p.is_power]
        if caps:
            evf += w["capsule_gain"] * (1.0 / (1.0 + min(manhattan(nxt, c) for c in caps)))

        scale = w["scatter_ghost_scale"] if state.scatter_active else 1.0
        for g in state.pursuers:
            d = min(manhattan(nxt, g.agent.position), manhattan(nxt, g.agent.target))
            if d <= 1:
                evf -= w["ghost_close_penalty"] * scale
            elif d == 2:
                evf -= w["ghost_near_penalty"] * scale

        if nxt in self.history:
            recent = list(self.history)
            idx = len(recent) - 1 - recent.index(nxt)   # 0 = most recent
            evf -= w["breadcrumb_base"] * (w["breadcrumb_decay"] ** idx)
        return evf

    def choose(self, state):
        player = state.player
        cell = player.position
        cur_dir = player.current_direction
        opposite = cur_dir.opposite if cur_dir is not Direction.NONE else None

        legal = get_legal_actions(state.grid, cell)
        best, best_s = None, None
        for a in legal:
            s = self.evaluate(state, a)
            if a is opposite and self.reverse_count >= MAX_REVERSE:
                excess = self.reverse_count - MAX_REVERSE + 1
                s -= self.weights["reverse_penalty"] * (2 ** (excess - 1))
            if best_s is None or s > best_s:   # ties keep the earlier action
                best, best_s = a, s

        if best is opposite:
            self.reverse_count += 1
        else:
            self.reverse_count = 0
        if not self.history or self.history[-1] != cell:
            self.history.append(cell)
        return best

    def drive(self, state):
        """Set the player's queued direction when it stands on a tile centre."""
        if state.player.at_decision_point:
            state.player.queued_direction = self.choose(state)
