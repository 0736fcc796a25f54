from typing import Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .errors import InvalidArgumentError, OutOfRangeError

UNCOLORED = -1


class Node:
    """A vertex: fixed id, mutable color, neighbor multiset.

    Writing ``color`` directly bypasses the conflict counters of the owning
    graph; call ``ColoringGraph.recompute_conflicts`` afterwards.
    """

    __slots__ = ("_id", "color", "neighbors")

    def __init__(self, node_id: int, color: int = UNCOLORED, neighbors: Optional[List[int]] = None):
        self._id = node_id
        self.color = color
        self.neighbors: List[int] = neighbors if neighbors is not None else []

    @property
    def id(self) -> int:
        return self._id

    @property
    def degree(self) -> int:
        return len(self.neighbors)

    def is_colored(self) -> bool:
        return self.color != UNCOLORED

    def __repr__(self) -> str:
        return f"Node(id={self._id}, color={self.color}, degree={len(self.neighbors)})"


class ColoringGraph:
    """Graph plus coloring, with per-node conflict counters kept up to date.

    ``conflicts[i]`` is the number of entries of node ``i``'s neighbor list
    whose node has the same color as ``i``. Every public mutating method
    leaves the counters consistent with the colors.
    """

    def __init__(self, num_nodes: int):
        if isinstance(num_nodes, bool) or not isinstance(num_nodes, (int, np.integer)):
            raise InvalidArgumentError(f"Node count must be an integer, got {num_nodes!r}")
        if num_nodes < 0:
            raise InvalidArgumentError(f"Node count must be non-negative, got {num_nodes}")
        self._nodes: List[Node] = [Node(i) for i in range(int(num_nodes))]
        self._conflicts = np.zeros(int(num_nodes), dtype=np.int64)
        self._num_edges = 0

    @classmethod
    def from_edges(cls, num_nodes: int, edges: Iterable[Tuple[int, int]]) -> "ColoringGraph":
        graph = cls(num_nodes)
        for u, v in edges:
            graph.add_edge(u, v)
        return graph

    @classmethod
    def from_networkx(cls, g: nx.Graph) -> "ColoringGraph":
        """Build from a networkx graph; nodes get dense ids in iteration order.

        A ``color`` node attribute, when present on every node, is carried
        over.
        """
        index = {node: i for i, node in enumerate(g.nodes())}
        graph = cls(len(index))
        for u, v in g.edges():
            graph.add_edge(index[u], index[v])
        colors = [data.get("color") for _, data in g.nodes(data=True)]
        if colors and all(c is not None for c in colors):
            graph.set_colors(colors)
        return graph

    def to_networkx(self) -> nx.MultiGraph:
        g = nx.MultiGraph()
        for node in self._nodes:
            g.add_node(node.id, color=node.color)
        for node in self._nodes:
            self_entries = 0
            for nb in node.neighbors:
                if node.id < nb:
                    g.add_edge(node.id, nb)
                elif node.id == nb:
                    self_entries += 1
            for _ in range(self_entries // 2):
                g.add_edge(node.id, node.id)
        return g

    @property
    def num_nodes(self) -> int:
        return len(self._nodes)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    @property
    def conflicts(self) -> np.ndarray:
        """Read-only view of the per-node conflict counters."""
        view = self._conflicts.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return len(self._nodes)

    def _check_endpoint(self, node_id: int) -> None:
        if not 0 <= node_id < len(self._nodes):
            raise InvalidArgumentError(f"Edge endpoint {node_id} outside [0, {len(self._nodes)})")

    def add_edge(self, u: int, v: int) -> None:
        self._check_endpoint(u)
        self._check_endpoint(v)
        node_u = self._nodes[u]
        node_v = self._nodes[v]
        node_u.neighbors.append(v)
        node_v.neighbors.append(u)
        self._num_edges += 1
        if node_u.color != UNCOLORED and node_u.color == node_v.color:
            self._conflicts[u] += 1
            self._conflicts[v] += 1

    def get_node(self, node_id: int) -> Node:
        if not 0 <= node_id < len(self._nodes):
            raise OutOfRangeError(f"Node id {node_id} outside [0, {len(self._nodes)})")
        return self._nodes[node_id]

    def get_nodes(self) -> List[Node]:
        return self._nodes

    def degree(self, node_id: int) -> int:
        return self.get_node(node_id).degree

    def color_of(self, node_id: int) -> int:
        return self.get_node(node_id).color

    def colors(self) -> List[int]:
        return [node.color for node in self._nodes]

    def set_colors(self, colors: Sequence[int]) -> None:
        """Assign every node's color at once and rebuild the counters."""
        if len(colors) != len(self._nodes):
            raise InvalidArgumentError(f"Expected {len(self._nodes)} colors, got {len(colors)}")
        for node, color in zip(self._nodes, colors):
            color = int(color)
            if color < UNCOLORED:
                raise InvalidArgumentError(f"Invalid color {color} for node {node.id}")
            node.color = color
        self.recompute_conflicts()

    def recompute_conflicts(self) -> None:
        nodes = self._nodes
        counts = np.zeros(len(nodes), dtype=np.int64)
        for node in nodes:
            color = node.color
            if color == UNCOLORED:
                continue
            counts[node.id] = sum(1 for nb in node.neighbors if nodes[nb].color == color)
        self._conflicts = counts

    def total_conflicts(self) -> int:
        return int(self._conflicts.sum()) // 2

    def node_conflicts(self, node_id: int) -> int:
        self.get_node(node_id)
        return int(self._conflicts[node_id])

    def conflicted_nodes(self) -> np.ndarray:
        """Ids of nodes with a nonzero conflict counter, ascending."""
        return np.flatnonzero(self._conflicts)

    def conflict_edges(self) -> List[Tuple[int, int]]:
        edges = []
        for node in self._nodes:
            if node.color == UNCOLORED:
                continue
            self_entries = 0
            for nb in node.neighbors:
                if node.id < nb and self._nodes[nb].color == node.color:
                    edges.append((node.id, nb))
                elif node.id == nb:
                    self_entries += 1
            edges.extend([(node.id, node.id)] * (self_entries // 2))
        return edges

    def num_colors_used(self) -> int:
        return len({node.color for node in self._nodes if node.color != UNCOLORED})

    def is_fully_colored(self) -> bool:
        return all(node.color != UNCOLORED for node in self._nodes)

    def is_proper(self) -> bool:
        return self.is_fully_colored() and self.total_conflicts() == 0

    def recolor(self, node_id: int, color: int) -> int:
        """Give ``node_id`` a new color, updating counters in O(degree).

        Returns the change in the number of conflicting edges.
        """
        if color < 0:
            raise InvalidArgumentError(f"Color must be non-negative, got {color}")
        return self._assign(node_id, color)

    def uncolor(self, node_id: int) -> int:
        """Remove ``node_id``'s color; same contract as ``recolor``."""
        return self._assign(node_id, UNCOLORED)

    def _assign(self, node_id: int, color: int) -> int:
        node = self.get_node(node_id)
        old = node.color
        if old == color:
            return 0
        nodes = self._nodes
        counters = self._conflicts
        change = 0
        for nb in node.neighbors:
            if nb == node_id:
                # a self loop conflicts exactly while the node holds a color
                if old == UNCOLORED:
                    counters[node_id] += 1
                    change += 1
                elif color == UNCOLORED:
                    counters[node_id] -= 1
                    change -= 1
                continue
            nb_color = nodes[nb].color
            if old != UNCOLORED and nb_color == old:
                counters[nb] -= 1
                counters[node_id] -= 1
                change -= 2
            elif color != UNCOLORED and nb_color == color:
                counters[nb] += 1
                counters[node_id] += 1
                change += 2
        node.color = color
        return change // 2

    def clone(self) -> "ColoringGraph":
        copy = ColoringGraph.__new__(ColoringGraph)
        copy._nodes = [Node(node.id, node.color, list(node.neighbors)) for node in self._nodes]
        copy._conflicts = self._conflicts.copy()
        copy._num_edges = self._num_edges
        return copy

    def describe(self) -> str:
        lines = []
        for node in self._nodes:
            color = "uncolored" if node.color == UNCOLORED else str(node.color)
            neighbors = " ".join(str(nb) for nb in node.neighbors)
            lines.append(f"Node {node.id} (color {color}, conflicts {int(self._conflicts[node.id])}): {neighbors}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ColoringGraph(nodes={len(self._nodes)}, edges={self._num_edges}, conflicts={self.total_conflicts()})"
