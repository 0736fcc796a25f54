import argparse
import json
import logging
import sys
from typing import List, Optional

import networkx as nx
import numpy as np

from .config import SolverConfig
from .dimacs import load_graph
from .errors import ColoringError
from .graph import ColoringGraph
from .moves import MoveMode
from .solver import SolveResult, solve_graph

logger = logging.getLogger(__name__)


def str2bool(v):
    if isinstance(v, bool):
        return v
    if v.lower() in ("yes", "true", "t", "y", "1"):
        return True
    if v.lower() in ("no", "false", "f", "n", "0"):
        return False
    raise argparse.ArgumentTypeError("boolean value expected")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Low-conflict k-coloring by parallel simulated annealing")
    parser.add_argument("graph", type=str, nargs="?", default=None, help="DIMACS graph file")
    parser.add_argument(
        "--generate",
        type=float,
        nargs=2,
        metavar=("NODES", "PROBABILITY"),
        default=None,
        help="use a G(n, p) random graph instead of a file",
    )

    parser.add_argument("-K", "--colors", type=int, default=None, help="number of colors (default: max degree + 1)")
    parser.add_argument("-j", "--threads", type=int, default=None, help="parallel annealing runs (default: CPU count)")
    parser.add_argument("-S", "--sa-iters", type=int, default=100_000, help="annealing iterations per run")
    parser.add_argument("-T", "--initial-temp", type=float, default=500.0, help="initial temperature")
    parser.add_argument("-C", "--cooling-rate", type=float, default=0.995, help="cooling rate")
    parser.add_argument("-M", "--min-temp", type=float, default=1e-9, help="temperature floor")
    parser.add_argument("--cooling-interval", type=int, default=1, help="iterations between cooling steps")
    parser.add_argument("-m", "--recolor-count", type=int, default=1, help="nodes recolored per move")
    parser.add_argument("--time-limit", type=float, default=None, help="wall-clock budget per run in seconds")
    parser.add_argument(
        "--move-mode",
        choices=[mode.value for mode in MoveMode],
        default=MoveMode.CONFLICTED.value,
        help="which nodes a move may recolor",
    )
    parser.add_argument("--descent-iters", type=int, default=0, help="local descent iterations after annealing")
    parser.add_argument("--seed", type=int, default=None, help="random seed (default: clock based)")
    parser.add_argument("-R", "--render", type=str2bool, default=False, help="plot the coloring")
    parser.add_argument("-O", "--output", type=str, default=None, help="write a JSON report to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser


def load_input(args) -> ColoringGraph:
    if args.generate is not None:
        nodes, probability = args.generate
        g = nx.gnp_random_graph(int(nodes), probability, seed=args.seed)
        return ColoringGraph.from_networkx(g)
    return load_graph(args.graph)


def default_colors(graph: ColoringGraph) -> int:
    return max((node.degree for node in graph.get_nodes()), default=0) + 1


def render(graph: ColoringGraph, result: SolveResult, seed: Optional[int] = None) -> None:
    import matplotlib.colors as mcolors
    import matplotlib.pyplot as plt

    g = nx.Graph(graph.to_networkx())
    nodes = list(g.nodes())
    color_map = [g.nodes[node]["color"] for node in nodes]

    plt.figure(figsize=(10, 8))
    pos = nx.spring_layout(g, seed=seed if seed is not None else 42)
    cmap = mcolors.ListedColormap(plt.cm.jet(np.linspace(0, 1, max(result.k, 1))))

    nx.draw_networkx_nodes(g, pos, nodelist=nodes, node_color=color_map, cmap=cmap, vmin=0, vmax=max(result.k - 1, 1))
    nx.draw_networkx_labels(g, pos, labels={node: node for node in nodes})

    conflict_edges = set(graph.conflict_edges())
    non_conflict_edges = [edge for edge in g.edges() if tuple(sorted(edge)) not in conflict_edges]

    nx.draw_networkx_edges(g, pos, edgelist=non_conflict_edges)
    nx.draw_networkx_edges(g, pos, edgelist=list(conflict_edges), edge_color="red")

    plt.title(f"Used Colors: {result.num_colors_used}, Conflicts: {result.conflicts}")
    plt.show()


def report(result: SolveResult, graph: ColoringGraph, args) -> dict:
    return {
        "solution": result.colors,
        "conflicts": result.conflicts,
        "greedy_conflicts": result.greedy_conflicts,
        "annealing_conflicts": result.annealing_conflicts,
        "run_conflicts": result.run_costs,
        "colors": result.k,
        "colors_used": result.num_colors_used,
        "nodes": graph.num_nodes,
        "edges": graph.num_edges,
        "iterations": result.best_run.iterations,
        "best_iteration": result.best_run.best_iteration,
        "runtime_seconds": result.runtime_seconds,
        "move_mode": args.move_mode,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.graph is None) == (args.generate is None):
        parser.error("give either a graph file or --generate NODES PROBABILITY")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        graph = load_input(args)
        if args.colors is None:
            args.colors = default_colors(graph)
        logger.info("graph: %d nodes, %d edges, k=%d", graph.num_nodes, graph.num_edges, args.colors)
        config = SolverConfig.from_args(args)
        result = solve_graph(graph, args.colors, config)
    except ColoringError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Done! conflicts: {result.conflicts} (greedy: {result.greedy_conflicts})")
    print(f"Colors used: {result.num_colors_used} of {result.k}")
    print(f"Run conflicts: {result.run_costs}")
    print(f"Solution: {result.colors}")
    sys.stdout.flush()

    if args.render:
        render(result.graph, result, args.seed)

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                json.dump(report(result, graph, args), f, indent=2)
        except OSError as exc:
            print(f"error: cannot write {args.output}: {exc}", file=sys.stderr)
            return 1
        print(f"Results saved to: {args.output}")
        sys.stdout.flush()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
