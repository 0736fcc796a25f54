import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import AnnealingParams
from .errors import InvalidArgumentError
from .graph import ColoringGraph
from .moves import random_recolor, undo_move

logger = logging.getLogger(__name__)


@dataclass
class AnnealingResult:
    """Best coloring found by one annealing run plus run diagnostics."""

    graph: ColoringGraph
    cost: int
    iterations: int
    accepted: int
    best_iteration: int  # iteration at which ``cost`` was first reached (0 = start)
    best_time: float  # seconds since start at that iteration
    last_improvement_iteration: int  # last iteration that lowered the current cost
    last_improvement_time: float
    elapsed: float
    final_temperature: float
    seed: Optional[int] = None
    history: List[int] = field(default_factory=list)  # best cost after each iteration

    @property
    def colors(self) -> List[int]:
        return self.graph.colors()


class SimulatedAnnealingSolver:
    """Simulated annealing over k-colorings, minimizing conflicting edges.

    Each iteration recolors ``params.recolor_count`` nodes of the working
    state, keeps the move if it lowers the cost, otherwise keeps it with the
    Metropolis probability ``exp(-delta / T)`` and rolls it back on
    rejection. Temperature is multiplied by ``cooling_rate`` every
    ``cooling_interval`` iterations and never drops below ``min_temp``.
    """

    def __init__(
        self,
        k: int,
        params: Optional[AnnealingParams] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        if k < 1:
            raise InvalidArgumentError(f"k must be at least 1, got {k}")
        self.k = k
        self.params = (params if params is not None else AnnealingParams()).validate()
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def accept_solution(self, current_score: int, new_score: int, temperature: float) -> bool:
        """Metropolis criterion."""
        if new_score < current_score:
            return True
        probability = np.exp((current_score - new_score) / max(temperature, self.params.min_temp))
        return self.rng.random() < probability

    def solve(self, graph: ColoringGraph) -> AnnealingResult:
        """Anneal a copy of ``graph``; the argument itself is left untouched.

        Every node must already hold a color: uncolored nodes never conflict,
        so a zero cost would not mean a proper coloring.
        """
        if not graph.is_fully_colored():
            raise InvalidArgumentError("annealing needs a fully colored start state")
        params = self.params
        working = graph.clone()
        current_cost = working.total_conflicts()
        best_cost = current_cost
        best_colors = working.colors()
        history: List[int] = []

        temperature = params.initial_temp
        iteration = 0
        accepted = 0
        best_iteration = 0
        best_time = 0.0
        last_improvement_iteration = 0
        last_improvement_time = 0.0

        start = time.perf_counter()
        deadline = start + params.time_limit if params.time_limit is not None else None
        logger.debug(
            "annealing start: nodes=%d k=%d cost=%d T0=%g", working.num_nodes, self.k, current_cost, temperature
        )

        while iteration < params.max_iterations:
            if params.stop_on_zero and best_cost == 0:
                break
            now = time.perf_counter()
            if deadline is not None and now >= deadline:
                logger.debug("annealing deadline reached after %d iterations", iteration)
                break

            move = random_recolor(working, params.recolor_count, self.k, self.rng, params.move_mode)
            candidate_cost = current_cost + move.delta
            iteration += 1

            if self.accept_solution(current_cost, candidate_cost, temperature):
                if candidate_cost < current_cost:
                    last_improvement_iteration = iteration
                    last_improvement_time = now - start
                current_cost = candidate_cost
                accepted += 1
                if candidate_cost < best_cost:
                    best_cost = candidate_cost
                    best_colors = working.colors()
                    best_iteration = iteration
                    best_time = now - start
            else:
                undo_move(working, move)

            if params.record_history:
                history.append(best_cost)

            if iteration % params.cooling_interval == 0:
                temperature = max(temperature * params.cooling_rate, params.min_temp)

        elapsed = time.perf_counter() - start
        best = graph.clone()
        best.set_colors(best_colors)
        logger.debug(
            "annealing done: iterations=%d accepted=%d best=%d (iteration %d) in %.3fs",
            iteration,
            accepted,
            best_cost,
            best_iteration,
            elapsed,
        )

        return AnnealingResult(
            graph=best,
            cost=best_cost,
            iterations=iteration,
            accepted=accepted,
            best_iteration=best_iteration,
            best_time=best_time,
            last_improvement_iteration=last_improvement_iteration,
            last_improvement_time=last_improvement_time,
            elapsed=elapsed,
            final_temperature=temperature,
            seed=self.seed,
            history=history,
        )
