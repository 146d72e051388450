import math
import random
import sys
import time
from dataclasses import dataclass, asdict

import pygame

from Pacman_Maze_Gen import generate_pacman_map
from pacman_autopilot import ReflexPilot
from pacman_entities import Direction, GhostKind
from pacman_grid import WALL, count_pellets, load_map_from_text
from pacman_rules import check_capture, new_game, render_snapshot, step


# -------------- TELEMETRI API for Data Logging ---------------------------
@dataclass
class GameResult:
    layout: str
    seed: int
    status: str          # "WIN" | "LOSS" | "DNF"
    score: int
    elapsed_sec: float
    moves: int
    pellets_total: int
    pellets_eaten: int
    completion_pct: float


# ---------- MAP -----------------------------------
MAP_TEXT = """
####################
#...############...#
#.#..............#.#
#.###o########o###.#
#........P.........#
#.#######..#######.#
#..................#
#.#.#####..#####.#.#
#.#o.G.G...G.G..o#.#
#.#.#####..#####.#.#
#..................#
####################
""".strip("\n")

GENERATE_MAP = True   # Set True to Generate New Map Every Run
MAP_WIDTH, MAP_HEIGHT = 17, 12


# --- Config ----------------------------------------------------------------------------------
TILE_SIZE = 30
FPS = 60              # scatter timing in pacman_rules assumes 60 ticks per second
AI_CONTROL = False    # True lets the reflex autopilot steer Pac-Man

# Colors for each element of the game
BLACK    = (0, 0, 0)
WALL_C   = (0, 0, 255)
PELLET_C = (255, 255, 0)
POWER_C  = (255, 184, 151)
PACMAN_C = (255, 255, 0)
SCATTER_C = (100, 100, 255)
HUD_C    = (200, 200, 200)
GHOST_C = {
    GhostKind.CHASER: (255, 0, 0),        # red
    GhostKind.AMBUSHER: (255, 192, 203),  # pink
    GhostKind.FLANKER: (0, 255, 255),     # cyan
    GhostKind.SHY: (255, 165, 0),         # orange
}

KEY2DIR = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def make_map_text(seed=None):
    if GENERATE_MAP:
        return generate_pacman_map(width=MAP_WIDTH, height=MAP_HEIGHT, num_capsules=4, num_ghosts=4,
                                   symmetry="vertical", seed=seed)
    return MAP_TEXT


def make_game_from_text(txt):
    layout = load_map_from_text(txt)
    state = new_game(layout)
    width, height = layout.grid.width * TILE_SIZE, layout.grid.height * TILE_SIZE
    return layout, state, width, height


# --- Drawing ----------------------------------------------------------------
def to_pixels(x, y):
    return int((x + 0.5) * TILE_SIZE), int((y + 0.5) * TILE_SIZE)


def draw_pacman(screen, view, t):
    cx, cy = to_pixels(view.x, view.y)
    radius = TILE_SIZE // 2 - 2
    pygame.draw.circle(screen, PACMAN_C, (cx, cy), radius)
    # mouth wedge opening toward the facing angle
    half = math.radians(10 + 25 * abs(math.sin(t * 0.25)))
    facing = math.radians(view.facing)
    pts = [(cx, cy)]
    for a in (facing - half, facing + half):
        pts.append((cx + (radius + 1) * math.cos(a), cy + (radius + 1) * math.sin(a)))
    pygame.draw.polygon(screen, BLACK, pts)


def draw_ghost(screen, view, scatter):
    center = to_pixels(view.x, view.y)
    color = SCATTER_C if scatter else GHOST_C[view.kind]
    pygame.draw.circle(screen, color, center, TILE_SIZE // 2 - 2)


def draw_frame(screen, font, grid, frame, t):
    screen.fill(BLACK)
    for y, row in enumerate(grid.rows):
        for x, cell in enumerate(row):
            if cell == WALL:
                pygame.draw.rect(screen, WALL_C, (x * TILE_SIZE, y * TILE_SIZE, TILE_SIZE, TILE_SIZE))

    for (px, py), active, is_power in frame.pellets:
        if active:
            pygame.draw.circle(screen, POWER_C if is_power else PELLET_C, to_pixels(px, py), 7 if is_power else 3)

    draw_pacman(screen, frame.player, t)
    scatter = frame.scatter_timer > 0
    for g in frame.pursuers:
        draw_ghost(screen, g, scatter)

    hud = f"Score: {frame.score}    Scatter: {'ON' if scatter else 'off'}    [Arrows] Move  [R] Reset"
    screen.blit(font.render(hud, True, HUD_C), (6, 4))
    if frame.won:
        msg = font.render("YOU WIN!  [R] Play again", True, PACMAN_C)
        screen.blit(msg, msg.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))


# --- Setup & main loop: API CALLING --------------------------------------------------------------------------------------------------
def run_single_game_telemetry(
    layout_name: str = "inline",
    seed: int | None = None,
    max_time_sec: float | None = None,
    max_moves: int | None = None,
    headless: bool = True,
    map_text: str | None = None,
) -> dict:
    """Play one autopilot game to WIN / LOSS / DNF and return its GameResult as a dict."""
    if seed is None:
        seed = random.randint(0, 2**31 - 1)
    txt = map_text if map_text is not None else make_map_text(seed)
    layout, state, width, height = make_game_from_text(txt)
    pilot = ReflexPilot()

    screen = font = clock = None
    if not headless:
        pygame.init()
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Pac-Man (batch)")
        font = pygame.font.SysFont(None, 18)
        clock = pygame.time.Clock()

    pellets_total = count_pellets(layout)
    start_time = time.perf_counter()
    moves = 0
    status = None

    while status is None:
        if clock is not None:
            clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    status = "DNF"
            if status is not None:
                break

        pilot.drive(state)
        step(state)
        moves += 1

        if state.won:
            status = "WIN"
        elif check_capture(state):
            status = "LOSS"

        elapsed = time.perf_counter() - start_time
        if status is None and (
            (max_time_sec is not None and elapsed >= max_time_sec) or
            (max_moves is not None and moves >= max_moves)
        ):
            status = "DNF"

        if screen is not None:
            draw_frame(screen, font, layout.grid, render_snapshot(state), moves)
            pygame.display.flip()

    elapsed_sec = time.perf_counter() - start_time
    pellets_eaten = pellets_total - state.pellets_remaining
    completion_pct = (pellets_eaten / pellets_total * 100.0) if pellets_total else 0.0

    if screen is not None:
        pygame.display.quit()
        pygame.quit()

    return asdict(GameResult(
        layout=layout_name,
        seed=seed,
        status=status,
        score=state.score,
        elapsed_sec=round(elapsed_sec, 6),
        moves=moves,
        pellets_total=pellets_total,
        pellets_eaten=pellets_eaten,
        completion_pct=round(completion_pct, 2),
    ))


# --- Setup & main loop: MAIN LOOP RUN --------------------------------------------------------------------------------------------------
def main():
    pygame.init()
    layout, state, width, height = make_game_from_text(make_map_text())
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption("Pac-Man")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 18)
    pilot = ReflexPilot()

    def reset_game():
        nonlocal layout, state, screen, pilot
        layout, state, w, h = make_game_from_text(make_map_text())
        if (w, h) != screen.get_size():
            screen = pygame.display.set_mode((w, h))
        pilot = ReflexPilot()

    frames = 0
    running = True
    while running:
        clock.tick(FPS)
        frames += 1
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in KEY2DIR:
                    state.player.queued_direction = KEY2DIR[event.key]
                elif event.key == pygame.K_r:
                    reset_game()

        if not state.won:
            # ------ AI control overrides the keyboard -------------------
            if AI_CONTROL:
                pilot.drive(state)
            step(state)
            if check_capture(state):
                print(f"Caught! Score: {state.score}")
                reset_game()

        draw_frame(screen, font, layout.grid, render_snapshot(state), frames)
        pygame.display.flip()

    pygame.quit(); sys.exit()


if __name__ == "__main__":
    main()
