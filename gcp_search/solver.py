import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .config import SolverConfig
from .graph import ColoringGraph
from .greedy import greedy_coloring
from .local_search import local_descent
from .parallel import run_parallel
from .simulated_annealing import AnnealingResult

logger = logging.getLogger(__name__)


@dataclass
class SolveResult:
    graph: ColoringGraph
    k: int
    conflicts: int
    greedy_conflicts: int
    annealing_conflicts: int
    best_run: AnnealingResult
    run_costs: List[int] = field(default_factory=list)
    descent_recolors: int = 0
    runtime_seconds: float = 0.0

    @property
    def colors(self) -> List[int]:
        return self.graph.colors()

    @property
    def num_colors_used(self) -> int:
        return self.graph.num_colors_used()


def solve(
    node_count: int,
    edges: Iterable[Tuple[int, int]],
    k: int,
    config: Optional[SolverConfig] = None,
) -> SolveResult:
    """Greedy start, parallel annealing, then optional local descent."""
    return solve_graph(ColoringGraph.from_edges(node_count, edges), k, config)


def solve_graph(graph: ColoringGraph, k: int, config: Optional[SolverConfig] = None) -> SolveResult:
    """Same as ``solve`` for an already built graph; ``graph`` gets the greedy coloring."""
    config = (config if config is not None else SolverConfig()).validate()
    start = time.perf_counter()

    greedy_coloring(graph, k)
    greedy_conflicts = graph.total_conflicts()
    logger.info("greedy coloring: %d conflicts with k=%d", greedy_conflicts, k)

    runs = run_parallel(graph, k, config.annealing, config.threads, seed=config.seed)
    best_run = runs.best
    best = best_run.graph.clone()

    descent_recolors = 0
    if config.descent_iterations > 0 and best.total_conflicts() > 0:
        if config.seed is not None:
            rng = np.random.default_rng(np.random.SeedSequence(config.seed).spawn(config.threads + 1)[-1])
        else:
            rng = np.random.default_rng()
        descent_recolors = local_descent(best, k, config.descent_iterations, rng)
        logger.info(
            "local descent: %d -> %d conflicts (%d recolors)",
            best_run.cost,
            best.total_conflicts(),
            descent_recolors,
        )

    return SolveResult(
        graph=best,
        k=k,
        conflicts=best.total_conflicts(),
        greedy_conflicts=greedy_conflicts,
        annealing_conflicts=best_run.cost,
        best_run=best_run,
        run_costs=runs.costs,
        descent_recolors=descent_recolors,
        runtime_seconds=time.perf_counter() - start,
    )
