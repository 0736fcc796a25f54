from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

import numpy as np

from .errors import InvalidArgumentError
from .graph import UNCOLORED, ColoringGraph


class MoveMode(Enum):
    CONFLICTED = "conflicted"  # only nodes with a nonzero conflict counter
    UNIFORM = "uniform"  # any node


@dataclass
class Move:
    """Recolorings applied to a graph, enough to roll them back."""

    changes: List[Tuple[int, int]] = field(default_factory=list)  # (node, previous color)
    delta: int = 0  # change in total conflicts

    def __len__(self) -> int:
        return len(self.changes)


def recolor_node(graph: ColoringGraph, node_id: int, color: int, k: int) -> int:
    """``graph.recolor`` with the color checked against ``k``."""
    if not 0 <= color < k:
        raise InvalidArgumentError(f"Color {color} outside [0, {k})")
    return graph.recolor(node_id, color)


def select_move_nodes(
    graph: ColoringGraph,
    count: int,
    rng: np.random.Generator,
    mode: MoveMode = MoveMode.CONFLICTED,
) -> List[int]:
    """Pick up to ``count`` distinct node ids, in random order.

    Asking for more nodes than are eligible returns all of them.
    """
    if count < 0:
        raise InvalidArgumentError(f"Recolor count must be non-negative, got {count}")

    if mode is MoveMode.CONFLICTED:
        eligible = graph.conflicted_nodes()
        size = min(count, len(eligible))
        if size == 0:
            return []
        return [int(i) for i in rng.choice(eligible, size=size, replace=False)]

    size = min(count, graph.num_nodes)
    if size == 0:
        return []
    return [int(i) for i in rng.choice(graph.num_nodes, size=size, replace=False)]


def random_color(current: int, k: int, rng: np.random.Generator) -> int:
    """Uniform color in [0, k) other than ``current``."""
    if current == UNCOLORED or current >= k:
        return int(rng.integers(k))
    color = int(rng.integers(k - 1))
    return color + 1 if color >= current else color


def random_recolor(
    graph: ColoringGraph,
    count: int,
    k: int,
    rng: np.random.Generator,
    mode: MoveMode = MoveMode.CONFLICTED,
) -> Move:
    """Recolor up to ``count`` nodes in place and return the undo record."""
    if k < 1:
        raise InvalidArgumentError(f"k must be at least 1, got {k}")

    move = Move()
    nodes = graph.get_nodes()
    for node_id in select_move_nodes(graph, count, rng, mode):
        current = nodes[node_id].color
        if k == 1 and current == 0:
            continue  # no other color to go to
        move.changes.append((node_id, current))
        move.delta += graph.recolor(node_id, random_color(current, k, rng))
    return move


def undo_move(graph: ColoringGraph, move: Move) -> None:
    for node_id, color in reversed(move.changes):
        if color == UNCOLORED:
            graph.uncolor(node_id)
        else:
            graph.recolor(node_id, color)
