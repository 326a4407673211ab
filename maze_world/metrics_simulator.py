import argparse
import csv
import os
import statistics
import time

# Optional plotting
try:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    HAS_MPL = True
except ImportError:
    HAS_MPL = False

from .maze import MAZE_WIDTH, MAZE_HEIGHT
from .world import MazeWorld

DEFAULT_MAX_TICKS = 200000

METRICS = [
    "elapsed_sec",
    "ticks",
    "dfs_visited",
    "bfs_visited",
    "dfs_path_length",
    "bfs_path_length",
    "dfs_wrong_moves",
    "bfs_wrong_moves",
]


def run_single(width, height, seed=None, max_ticks=DEFAULT_MAX_TICKS):
    """Runs both searches on one fresh maze until they finish reconstructing."""
    world = MazeWorld(width, height, seed=seed)
    world.arm_depth_first()

    t0 = time.perf_counter()
    ticks = 0
    while not (world.dfs.is_done and world.bfs.is_done) and ticks < max_ticks:
        world.tick()
        ticks += 1
    elapsed = time.perf_counter() - t0

    status = world.status()
    result = {
        "width": width,
        "height": height,
        "seed": seed,
        "ticks": ticks,
        "elapsed_sec": elapsed,
        "dfs_visited": status["dfs_visited"],
        "bfs_visited": status["bfs_visited"],
        "dfs_path_length": status["dfs_path_length"],
        "bfs_path_length": status["bfs_path_length"],
        "dfs_wrong_moves": status["dfs_wrong_moves"],
        "bfs_wrong_moves": status["bfs_wrong_moves"],
        "finished": world.dfs.is_done and world.bfs.is_done,
    }
    return result, world


def aggregate_results(rows, group_by=("width", "height")):
    grouped = {}
    for r in rows:
        key = tuple(r[k] for k in group_by)
        grouped.setdefault(key, []).append(r)

    def agg_stat(values):
        if not values:
            return {"avg": 0, "min": 0, "max": 0, "stdev": 0}
        return {
            "avg": statistics.mean(values),
            "min": min(values),
            "max": max(values),
            "stdev": statistics.pstdev(values) if len(values) > 1 else 0,
        }

    summary = []
    for key, items in grouped.items():
        entry = {"group": key, "count": len(items)}
        for m in METRICS:
            stats = agg_stat([it[m] for it in items])
            for stat_name, value in stats.items():
                entry[f"{m}_{stat_name}"] = value
        entry["finished_rate"] = sum(1 for it in items if it["finished"]) / len(items)
        summary.append(entry)
    return summary


def write_csv(path, rows):
    if not rows:
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        for r in rows:
            writer.writerow(r)


def plot_metric(summary, metric_keys, out_path):
    """Grouped bar chart, one bar per metric key for every maze size."""
    if not HAS_MPL or not summary:
        return False
    labels = [f"{row['width']}x{row['height']}" for row in summary]
    n = len(metric_keys)
    bar_width = 0.8 / max(1, n)
    plt.figure(figsize=(max(8, len(labels) * 0.8), 5))
    for i, key in enumerate(metric_keys):
        xs = [j + i * bar_width for j in range(len(labels))]
        plt.bar(xs, [row.get(key, 0) for row in summary], width=bar_width, label=key)
    plt.xticks([j + bar_width * (n - 1) / 2 for j in range(len(labels))], labels, rotation=45, ha="right")
    plt.legend()
    plt.tight_layout()
    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    plt.savefig(out_path)
    plt.close()
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run repeated DFS/BFS maze races and record metrics.")
    parser.add_argument("--runs", type=int, default=10, help="Runs per maze size")
    parser.add_argument("--width", type=int, nargs="*", default=[MAZE_WIDTH])
    parser.add_argument("--height", type=int, nargs="*", default=[MAZE_HEIGHT])
    parser.add_argument("--seed", type=int, default=None, help="Base seed (default: current time)")
    parser.add_argument("--max_ticks", type=int, default=DEFAULT_MAX_TICKS)
    parser.add_argument("--out_dir", default="metrics_output")
    parser.add_argument("--render_tree", action="store_true",
                        help="Render the DFS and BFS predecessor trees of the last run with graphviz")
    args = parser.parse_args(argv)

    if len(args.width) != len(args.height):
        parser.error("--width and --height need the same number of values")

    all_rows = []
    seed_base = args.seed if args.seed is not None else int(time.time())
    last_world = None

    for width, height in zip(args.width, args.height):
        for i in range(args.runs):
            row, last_world = run_single(width, height, seed=seed_base + i, max_ticks=args.max_ticks)
            all_rows.append(row)

    os.makedirs(args.out_dir, exist_ok=True)
    write_csv(os.path.join(args.out_dir, "raw_results.csv"), all_rows)

    summary = aggregate_results(all_rows)
    expanded = []
    for row in summary:
        width, height = row["group"]
        new_row = {k: v for k, v in row.items() if k != "group"}
        new_row["width"] = width
        new_row["height"] = height
        expanded.append(new_row)
    write_csv(os.path.join(args.out_dir, "summary.csv"), expanded)

    if HAS_MPL:
        plot_metric(expanded, ["dfs_visited_avg", "bfs_visited_avg"], os.path.join(args.out_dir, "visited_avg.png"))
        plot_metric(expanded, ["dfs_wrong_moves_avg", "bfs_wrong_moves_avg"], os.path.join(args.out_dir, "wrong_moves_avg.png"))
        plot_metric(expanded, ["ticks_avg"], os.path.join(args.out_dir, "ticks_avg.png"))

    if args.render_tree and last_world is not None:
        from .visualization import render_search_tree
        render_search_tree(last_world.dfs, os.path.join(args.out_dir, "dfs_tree"))
        render_search_tree(last_world.bfs, os.path.join(args.out_dir, "bfs_tree"))

    print(f"Wrote results to {args.out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
