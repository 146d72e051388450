#!/usr/bin/env python3
import argparse, csv, os, time, importlib

FIELDS = ["i", "seed", "status", "score", "elapsed_sec", "moves",
          "pellets_total", "pellets_eaten", "completion_pct", "ts"]


def build_parser():
    p = argparse.ArgumentParser(description="Batch-run autopilot Pac-Man games with telemetry.")
    p.add_argument("-n", "--num_games", type=int, default=10)
    p.add_argument("--seed0", type=int, default=12345)
    p.add_argument("--max_time", type=float, default=60.0, help="DNF cap per game (seconds)")
    p.add_argument("--max_moves", type=int, default=None, help="DNF cap per game (ticks)")
    p.add_argument("--headless", action="store_true", help="Run without a window for speed")
    p.add_argument("--csv", default="pacman_runs.csv", help="Output CSV path")
    p.add_argument("--module", default="Pacman_Game", help="Which Pacman module to use")
    return p


def run_batch(run_single_game_telemetry, num_games, seed0, csv_path, max_time=None, max_moves=None, headless=True):
    """Play `num_games` games, appending one CSV row each. Returns (wins, losses, dnfs)."""
    new_file = not os.path.exists(csv_path)
    wins = losses = dnfs = 0

    with open(csv_path, "a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        if new_file:
            w.writeheader()

        for i in range(num_games):
            res = run_single_game_telemetry(
                layout_name="generated",
                seed=seed0 + i,
                max_time_sec=max_time,
                max_moves=max_moves,
                headless=headless,
            )

            status = res["status"]
            if status == "WIN": wins += 1
            elif status == "LOSS": losses += 1
            else: dnfs += 1

            w.writerow({
                "i": i,
                "seed": res["seed"],
                "status": status,
                "score": res["score"],
                "elapsed_sec": res["elapsed_sec"],
                "moves": res["moves"],
                "pellets_total": res["pellets_total"],
                "pellets_eaten": res["pellets_eaten"],
                "completion_pct": res["completion_pct"],
                "ts": int(time.time()),
            })
    return wins, losses, dnfs


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Dynamically import the chosen module
    try:
        pacman_mod = importlib.import_module(args.module)
    except ImportError as e:
        raise SystemExit(f"Error: Could not import module {args.module}: {e}")

    wins, losses, dnfs = run_batch(
        pacman_mod.run_single_game_telemetry,
        args.num_games, args.seed0, args.csv,
        max_time=args.max_time, max_moves=args.max_moves, headless=args.headless,
    )

    total = args.num_games or 1
    print(f"Games: {args.num_games} | Wins: {wins} | Losses: {losses} | DNF: {dnfs} | Win rate: {wins/total*100:.2f}%")


if __name__ == "__main__":
    main()
