import logging

import numpy as np

from .errors import InvalidArgumentError
from .graph import UNCOLORED, ColoringGraph

logger = logging.getLogger(__name__)


def color_conflict_counts(graph: ColoringGraph, node_id: int, k: int) -> np.ndarray:
    """For each color in [0, k), how many neighbors of ``node_id`` hold it."""
    nodes = graph.get_nodes()
    counts = np.zeros(k, dtype=np.int64)
    for nb in graph.get_node(node_id).neighbors:
        if nb == node_id:
            continue
        color = nodes[nb].color
        if color != UNCOLORED and color < k:
            counts[color] += 1
    return counts


def local_descent(graph: ColoringGraph, k: int, iterations: int, rng: np.random.Generator) -> int:
    """Min-conflicts repair: move random nodes to their least conflicting color.

    Ties between minimizing colors are broken uniformly at random. Works in
    place and returns how many recolorings were applied. On a coloring that
    uses only colors in [0, k), total conflicts never go up; coloring an
    uncolored node can add conflicts.
    """
    if k < 1:
        raise InvalidArgumentError(f"k must be at least 1, got {k}")
    if iterations < 0:
        raise InvalidArgumentError(f"iterations must be non-negative, got {iterations}")
    if graph.num_nodes == 0:
        return 0

    nodes = graph.get_nodes()
    changed = 0
    for _ in range(iterations):
        node_id = int(rng.integers(graph.num_nodes))
        counts = color_conflict_counts(graph, node_id, k)
        minimizers = np.flatnonzero(counts == counts.min())
        color = int(rng.choice(minimizers))
        if color != nodes[node_id].color:
            graph.recolor(node_id, color)
            changed += 1

    logger.debug("local descent: %d recolors over %d iterations", changed, iterations)
    return changed
