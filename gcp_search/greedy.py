from typing import List

from .errors import InvalidArgumentError
from .graph import UNCOLORED, ColoringGraph


def degree_order(graph: ColoringGraph) -> List[int]:
    """Node ids by descending degree, ties by ascending id."""
    nodes = graph.get_nodes()
    return sorted(range(len(nodes)), key=lambda i: (-nodes[i].degree, i))


def greedy_coloring(graph: ColoringGraph, k: int) -> ColoringGraph:
    """Color every node with at most ``k`` colors, largest degree first.

    Each node takes the smallest color none of its already colored neighbors
    uses. When all ``k`` colors are taken it falls back to the color used by
    the fewest colored neighbors (smallest index on ties), so the pass never
    fails, it just leaves conflicts. Colors present before the call are
    ignored and overwritten. Counters are rebuilt at the end.
    """
    if k < 1:
        raise InvalidArgumentError(f"k must be at least 1, got {k}")

    nodes = graph.get_nodes()
    assigned = [UNCOLORED] * len(nodes)
    for i in degree_order(graph):
        neighbor_color_count = [0] * k
        for nb in nodes[i].neighbors:
            color = assigned[nb]
            if color != UNCOLORED:
                neighbor_color_count[color] += 1

        chosen = UNCOLORED
        for color in range(k):
            if neighbor_color_count[color] == 0:
                chosen = color
                break

        if chosen == UNCOLORED:
            chosen = min(range(k), key=lambda c: (neighbor_color_count[c], c))

        assigned[i] = chosen

    graph.set_colors(assigned)
    return graph
