from dataclasses import dataclass


# Tile codes
EMPTY, PELLET, WALL, POWER, PAC_SPAWN, GHOST_SPAWN = 0, 1, 2, 3, 4, 5

# Glyphs written by Pacman_Maze_Gen and the hand-made maps
CHAR2TILE = {
    '#': WALL, '.': PELLET, ' ': EMPTY, 'o': POWER, 'P': PAC_SPAWN, 'G': GHOST_SPAWN,
    '0': EMPTY, '1': PELLET, '2': WALL, '3': POWER, '4': PAC_SPAWN, '5': GHOST_SPAWN,
}


# --- Level Grid ---------------------------------------------------------------------
@dataclass(frozen=True)
class LevelGrid:
    """Read-only tile rows. Rows keep their own (trimmed) length."""
    rows: tuple

    @property
    def height(self):
        return len(self.rows)

    @property
    def width(self):
        return max((len(row) for row in self.rows), default=0)

    def tile(self, x, y):
        """Tile code at (x, y), or None when the cell is off the map."""
        if not 0 <= y < len(self.rows):
            return None
        row = self.rows[y]
        if not 0 <= x < len(row):
            return None
        return row[x]

    def is_walkable(self, x, y) -> bool:
        code = self.tile(x, y)
        return code is not None and code != WALL

    def cells_of_type(self, code):
        return [(x, y) for y, row in enumerate(self.rows) for x, v in enumerate(row) if v == code]


@dataclass(frozen=True)
class LevelLayout:
    grid: LevelGrid
    player_spawn: tuple
    pursuer_spawns: tuple
    pellet_cells: tuple
    power_cells: tuple


# --- Map parsing -----------------------------------------------------------------
def load_map_from_text(txt):
    """
    Parse a map into a LevelLayout.

    `txt` is either one string (newline separated) or a list of row strings, written
    with digit codes ("212") or maze glyphs ("#.#"). Unknown glyphs become EMPTY.
    """
    lines = txt.splitlines() if isinstance(txt, str) else list(txt)
    lines = [line.rstrip() for line in lines]
    # drop blank lines at the edges, keep blank lines inside the map
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise ValueError("map text has no rows")

    rows = tuple(tuple(CHAR2TILE.get(ch, EMPTY) for ch in line) for line in lines)
    grid = LevelGrid(rows)

    pac_spawns = grid.cells_of_type(PAC_SPAWN)
    if pac_spawns:
        pac_spawn = pac_spawns[0]
    else:
        walkable = [(x, y) for y, row in enumerate(rows) for x in range(len(row)) if grid.is_walkable(x, y)]
        if not walkable:
            raise ValueError("map has no walkable cell to spawn the player on")
        pac_spawn = walkable[0]

    return LevelLayout(
        grid=grid,
        player_spawn=pac_spawn,
        pursuer_spawns=tuple(grid.cells_of_type(GHOST_SPAWN)),
        pellet_cells=tuple(grid.cells_of_type(PELLET)),
        power_cells=tuple(grid.cells_of_type(POWER)),
    )


def count_pellets(layout):
    return len(layout.pellet_cells) + len(layout.power_cells)
