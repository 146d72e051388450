from pacman_entities import Direction, GhostKind, GridPosition


# --- Config ----------------------------------------------------------------------------------
AMBUSH_LEAD = 4          # tiles ahead of the player the ambusher aims for
FLANK_LEAD = 2
SHY_RADIUS_SQ = 8 * 8    # the shy ghost only chases from further than this

# Candidate order for the decision engine. Also the tie-break order.
GHOST_DIRS = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


def dist_sq(a, b):
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


# ------------- Ghost Strategies --------------------------------------------
def _chaser_target(pursuer, pac_pos, pac_dir):
    return pac_pos


def _ambusher_target(pursuer, pac_pos, pac_dir):
    return pac_pos.step(pac_dir, AMBUSH_LEAD)


def _flanker_target(pursuer, pac_pos, pac_dir):
    return pac_pos.step(pac_dir, FLANK_LEAD)


def _shy_target(pursuer, pac_pos, pac_dir):
    # chase if far; else back off to its own corner
    if dist_sq(pursuer.position, pac_pos) > SHY_RADIUS_SQ:
        return pac_pos
    return pursuer.scatter_anchor


STRATEGIES = {
    GhostKind.CHASER: _chaser_target,
    GhostKind.AMBUSHER: _ambusher_target,
    GhostKind.FLANKER: _flanker_target,
    GhostKind.SHY: _shy_target,
}


def target_for(pursuer, player_position, player_direction, scatter_active):
    """Tile this pursuer is heading for right now."""
    if scatter_active:
        return pursuer.scatter_anchor
    return STRATEGIES[pursuer.kind](pursuer, GridPosition(*player_position), player_direction)


# --- Decision engine ------------------------------------------------------------
def legal_dirs_no_reverse(pursuer, grid):
    """
    Walkable directions out of the cell the pursuer is about to stand on, in
    GHOST_DIRS order. The reverse of its current direction is dropped unless it
    is the only way out (dead end).
    """
    cell = pursuer.agent.target
    legal = [d for d in GHOST_DIRS if grid.is_walkable(*cell.step(d))]
    rev = pursuer.agent.current_direction.opposite
    if len(legal) > 1 and rev in legal:
        legal.remove(rev)
    return legal


def choose_direction(pursuer, target_tile, grid):
    cell = pursuer.agent.target
    best_d, best = None, None
    for d in legal_dirs_no_reverse(pursuer, grid):
        dd = dist_sq(cell.step(d), target_tile)
        if best_d is None or dd < best_d:   # strict: first in GHOST_DIRS wins a tie
            best_d, best = dd, d

    if best is None:
        # walled in on all four sides
        return pursuer.agent.current_direction.opposite
    return best


def update_pursuer_intents(state):
    """Queue a new direction for every pursuer standing on a decision point."""
    player = state.player
    scatter_active = state.scatter_timer > 0
    for g in state.pursuers:
        if not g.agent.at_decision_point:
            continue
        tgt = target_for(g, player.position, player.current_direction, scatter_active)
        g.agent.queued_direction = choose_direction(g, tgt, state.grid)
