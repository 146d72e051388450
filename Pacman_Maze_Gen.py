import math
import random
from collections import deque

WALL = "#"
SPACE = " "
PELLET = "."
CAPSULE = "o"
PACMAN = "P"
GHOST = "G"

DIRS4 = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def _neighbors4(grid, r, c):
    H, W = len(grid), len(grid[0])
    for dr, dc in DIRS4:
        rr, cc = r + dr, c + dc
        if 0 <= rr < H and 0 <= cc < W:
            yield rr, cc


def _degree(grid, r, c):
    return sum(grid[rr][cc] == SPACE for rr, cc in _neighbors4(grid, r, c))


def enrich_loops(grid, rng, prob=0.18):
    """
    Turns some degree-2 corridor tiles into degree-3 by knocking through a wall
    into another corridor two steps away. More routes, still single-wide.
    """
    H, W = len(grid), len(grid[0])
    for r in range(2, H - 2):
        for c in range(2, W - 2):
            if grid[r][c] != SPACE:
                continue
            if _degree(grid, r, c) == 2 and rng.random() < prob:
                dirs = DIRS4[:]
                rng.shuffle(dirs)
                for dr, dc in dirs:
                    wr, wc = r + dr, c + dc
                    rr, cc = r + 2 * dr, c + 2 * dc
                    if grid[wr][wc] == WALL and grid[rr][cc] == SPACE:
                        grid[wr][wc] = SPACE
                        break


def remove_dead_ends(grid, rng):
    """Open walls next to dead ends until every corridor tile has degree >= 2."""
    H, W = len(grid), len(grid[0])
    changed = True
    while changed:
        changed = False
        for r in range(1, H - 1):
            for c in range(1, W - 1):
                if grid[r][c] != SPACE or _degree(grid, r, c) != 1:
                    continue
                dirs = DIRS4[:]
                rng.shuffle(dirs)
                # prefer a wall that leads into another corridor
                for dr, dc in dirs:
                    wr, wc = r + dr, c + dc
                    rr, cc = r + 2 * dr, c + 2 * dc
                    if 0 <= rr < H and 0 <= cc < W and grid[wr][wc] == WALL and grid[rr][cc] == SPACE:
                        grid[wr][wc] = SPACE
                        changed = True
                        break
                else:
                    for dr, dc in dirs:
                        wr, wc = r + dr, c + dc
                        if 1 <= wr < H - 1 and 1 <= wc < W - 1 and grid[wr][wc] == WALL:
                            grid[wr][wc] = SPACE
                            changed = True
                            break


def carve_avenues(grid, row_stride=6, col_stride=8, row_offset=0, col_offset=0):
    """Long straight corridors at regular intervals: reliable escape lanes."""
    H, W = len(grid), len(grid[0])

    r = max(1, row_offset)
    while r < H - 1:
        for c in range(1, W - 1):
            grid[r][c] = SPACE
        r += row_stride

    c = max(1, col_offset)
    while c < W - 1:
        for r in range(1, H - 1):
            grid[r][c] = SPACE
        c += col_stride


def _linspace_int(lo, hi, n):
    if n <= 1:
        return [(lo + hi) // 2]
    span = hi - lo
    return [lo + round(i * span / (n - 1)) for i in range(n)]


def _nearest_space(grid, sr, sc, search_radius):
    H, W = len(grid), len(grid[0])
    if grid[sr][sc] == SPACE:
        return sr, sc
    q = deque([(sr, sc, 0)])
    seen = {(sr, sc)}
    while q:
        r, c, d = q.popleft()
        if d > search_radius:
            break
        for dr, dc in DIRS4:
            rr, cc = r + dr, c + dc
            if 0 <= rr < H and 0 <= cc < W and (rr, cc) not in seen:
                if grid[rr][cc] == SPACE:
                    return rr, cc
                seen.add((rr, cc))
                q.append((rr, cc, d + 1))
    return None


def place_capsules(grid, num_capsules=4, search_radius=4):
    """
    Spreads capsules ('o') over a square lattice across the playable interior,
    nudging each one to the nearest corridor tile. Returns how many were placed.
    """
    if num_capsules <= 0:
        return 0
    H, W = len(grid), len(grid[0])
    per_side = max(1, math.ceil(math.sqrt(num_capsules)))
    rows = _linspace_int(2, H - 3, per_side)
    cols = _linspace_int(2, W - 3, per_side)

    placed = 0
    for r in rows:
        for c in cols:
            if placed >= num_capsules:
                return placed
            spot = _nearest_space(grid, r, c, search_radius)
            if spot:
                rr, cc = spot
                grid[rr][cc] = CAPSULE
                placed += 1
    return placed


def _place_pacman(grid, width, height):
    pac_c = width // 2
    for r in range(1, height // 3 + 1):
        if grid[r][pac_c] == SPACE:
            return r, pac_c
    # centre column blocked near the top, scan outward
    for r in range(1, height // 3 + 1):
        for off in range(1, pac_c):
            for c in (pac_c - off, pac_c + off):
                if 1 <= c < width - 1 and grid[r][c] == SPACE:
                    return r, c
    return None


def _place_ghosts(grid, width, height, pac_c, num_ghosts):
    # lowest corridor row with room for everyone, else the roomiest one
    ghost_row, best_free = height - 3, -1
    for r in range(height - 3, height // 2, -1):
        free = sum(grid[r][c] == SPACE for c in range(1, width - 1))
        if free >= num_ghosts:
            ghost_row = r
            break
        if free > best_free:
            ghost_row, best_free = r, free

    # centred, with gaps so they don't overlap
    centers = [pac_c]
    i = 1
    while len(centers) < num_ghosts and i < width:
        if pac_c - i > 1:
            centers.append(pac_c - i)
        if len(centers) < num_ghosts and pac_c + i < width - 1:
            centers.append(pac_c + i)
        i += 2

    placed = 0
    for c in centers:
        if placed >= num_ghosts:
            break
        if grid[ghost_row][c] == SPACE:
            grid[ghost_row][c] = GHOST
            placed += 1
    if placed < num_ghosts:
        for c in range(1, width - 1):
            if grid[ghost_row][c] == SPACE:
                grid[ghost_row][c] = GHOST
                placed += 1
                if placed == num_ghosts:
                    break
    return placed


def generate_pacman_map(width=31, height=21, num_capsules=4, num_ghosts=4, symmetry="vertical", seed=None):
    """
    Generates an ASCII map with:
      - Single-width corridors
      - No dead ends (all corridor tiles have degree >= 2)
      - Pac-Man at center top, ghosts at bottom
      - Capsules evenly spaced
    width/height are bumped to odd values so corridors align with the wall lattice.
    symmetry: None | 'vertical' | 'horizontal'
    The same seed always yields the same map; the global random module is not touched.
    """
    rng = random.Random(seed)

    if width % 2 == 0: width += 1
    if height % 2 == 0: height += 1

    # 1) Full walls
    grid = [[WALL for _ in range(width)] for _ in range(height)]

    # 2) Perfect maze on odd cells (DFS backtracker)
    def neighbors2(r, c):
        for dr, dc in [(-2, 0), (2, 0), (0, -2), (0, 2)]:
            rr, cc = r + dr, c + dc
            if 1 <= rr < height - 1 and 1 <= cc < width - 1:
                yield rr, cc, r + dr // 2, c + dc // 2

    sr = rng.randrange(1, height - 1, 2)
    sc = rng.randrange(1, width - 1, 2)
    grid[sr][sc] = SPACE
    stack = [(sr, sc)]
    seen = {(sr, sc)}
    while stack:
        r, c = stack[-1]
        cand = [(rr, cc, wr, wc) for rr, cc, wr, wc in neighbors2(r, c) if (rr, cc) not in seen]
        if not cand:
            stack.pop()
            continue
        rr, cc, wr, wc = rng.choice(cand)
        grid[wr][wc] = SPACE
        grid[rr][cc] = SPACE
        seen.add((rr, cc))
        stack.append((rr, cc))

    # 3) Loops, avenues
    remove_dead_ends(grid, rng)
    carve_avenues(grid, row_stride=6, col_stride=8, row_offset=3, col_offset=width // 2 % 3)
    enrich_loops(grid, rng, prob=0.20)

    # 4) Optional symmetry (after loops so corridors stay single-wide)
    if symmetry == "vertical":
        for r in range(height):
            for c in range(width // 2):
                grid[r][width - 1 - c] = grid[r][c]
    elif symmetry == "horizontal":
        for r in range(height // 2):
            grid[height - 1 - r] = grid[r][:]

    # 5) Pac-Man, ghosts, capsules
    pac = _place_pacman(grid, width, height)
    if pac is None:
        raise ValueError(f"no corridor near the top of a {width}x{height} maze for Pac-Man")
    pac_r, pac_c = pac
    grid[pac_r][pac_c] = PACMAN
    _place_ghosts(grid, width, height, pac_c, num_ghosts)
    place_capsules(grid, num_capsules)

    # 6) Fill remaining corridors with pellets
    for r in range(1, height - 1):
        for c in range(1, width - 1):
            if grid[r][c] == SPACE:
                grid[r][c] = PELLET

    return "\n".join("".join(row) for row in grid)
