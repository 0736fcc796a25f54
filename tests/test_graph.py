import unittest

import networkx as nx
import numpy as np

from gcp_search.errors import ErrorKind, InvalidArgumentError, OutOfRangeError
from gcp_search.graph import UNCOLORED, ColoringGraph


def brute_force_conflicts(graph):
    return sum(
        1
        for node in graph.get_nodes()
        for nb in node.neighbors
        if node.color != UNCOLORED and graph.get_node(nb).color == node.color
    ) // 2


class TestColoringGraph(unittest.TestCase):

    def setUp(self):
        # 6-node example graph: cycle 0-1-3-4-5-0 plus 0-2-3
        self.edges = [(0, 1), (0, 2), (1, 3), (2, 3), (3, 4), (4, 5), (5, 0)]
        self.graph = ColoringGraph.from_edges(6, self.edges)

    def test_new_graph_is_uncolored(self):
        graph = ColoringGraph(4)
        self.assertEqual(graph.colors(), [UNCOLORED] * 4)
        self.assertEqual(list(graph.conflicts), [0, 0, 0, 0])
        self.assertEqual(graph.total_conflicts(), 0)

    def test_empty_graph(self):
        graph = ColoringGraph(0)
        self.assertEqual(len(graph), 0)
        self.assertEqual(graph.total_conflicts(), 0)
        self.assertEqual(graph.clone().num_nodes, 0)

    def test_negative_node_count(self):
        with self.assertRaises(InvalidArgumentError) as ctx:
            ColoringGraph(-1)
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_ARGUMENT)

    def test_add_edge_out_of_bounds(self):
        for u, v in [(-1, 0), (0, 6), (6, 6)]:
            with self.assertRaises(InvalidArgumentError):
                self.graph.add_edge(u, v)

    def test_add_edge_is_symmetric(self):
        for u, v in self.edges:
            self.assertIn(v, self.graph.get_node(u).neighbors)
            self.assertIn(u, self.graph.get_node(v).neighbors)
        self.assertEqual(self.graph.num_edges, len(self.edges))

    def test_duplicate_edges_are_kept(self):
        graph = ColoringGraph.from_edges(2, [(0, 1), (0, 1)])
        self.assertEqual(graph.get_node(0).neighbors, [1, 1])
        graph.set_colors([0, 0])
        self.assertEqual(graph.total_conflicts(), 2)

    def test_get_node_out_of_range(self):
        with self.assertRaises(OutOfRangeError) as ctx:
            self.graph.get_node(6)
        self.assertEqual(ctx.exception.kind, ErrorKind.OUT_OF_RANGE)
        with self.assertRaises(IndexError):
            self.graph.get_node(-1)

    def test_recompute_conflicts(self):
        self.graph.set_colors([0, 0, 0, 0, 0, 0])
        self.assertEqual(self.graph.total_conflicts(), len(self.edges))
        self.assertEqual(list(self.graph.conflicts), [3, 2, 2, 3, 2, 2])

    def test_recolor_updates_counters(self):
        self.graph.set_colors([0, 1, 1, 0, 1, 2])
        self.assertEqual(self.graph.total_conflicts(), 0)

        delta = self.graph.recolor(0, 1)
        self.assertEqual(delta, 2)
        self.assertEqual(self.graph.node_conflicts(0), 2)
        self.assertEqual(self.graph.node_conflicts(1), 1)
        self.assertEqual(self.graph.node_conflicts(2), 1)
        self.assertEqual(self.graph.total_conflicts(), 2)

        delta = self.graph.recolor(0, 0)
        self.assertEqual(delta, -2)
        self.assertEqual(self.graph.total_conflicts(), 0)

    def test_recolor_same_color_is_noop(self):
        self.graph.set_colors([0, 1, 1, 0, 1, 2])
        self.assertEqual(self.graph.recolor(3, 0), 0)
        self.assertEqual(self.graph.total_conflicts(), 0)

    def test_recolor_negative_color(self):
        with self.assertRaises(InvalidArgumentError):
            self.graph.recolor(0, -1)

    def test_incremental_matches_recompute(self):
        rng = np.random.default_rng(7)
        g = nx.gnp_random_graph(60, 0.2, seed=3)
        graph = ColoringGraph.from_networkx(g)
        graph.set_colors(rng.integers(4, size=60).tolist())
        running = graph.total_conflicts()

        for _ in range(2000):
            node = int(rng.integers(60))
            running += graph.recolor(node, int(rng.integers(4)))
            incremental = graph.total_conflicts()
            self.assertEqual(incremental, running)

        counters = graph.conflicts.copy()
        graph.recompute_conflicts()
        self.assertEqual(graph.total_conflicts(), running)
        self.assertTrue(np.array_equal(graph.conflicts, counters))
        self.assertEqual(brute_force_conflicts(graph), running)

    def test_uncolor(self):
        self.graph.set_colors([0, 0, 1, 2, 1, 2])
        before = self.graph.total_conflicts()
        self.assertEqual(self.graph.uncolor(0), -1)
        self.assertEqual(self.graph.total_conflicts(), before - 1)
        self.assertEqual(self.graph.color_of(0), UNCOLORED)

    def test_self_loop(self):
        graph = ColoringGraph.from_edges(2, [(0, 0), (0, 1)])
        self.assertEqual(graph.get_node(0).neighbors, [0, 0, 1])
        self.assertEqual(graph.recolor(0, 0), 1)
        self.assertEqual(graph.recolor(1, 0), 1)
        self.assertEqual(graph.recolor(0, 1), -1)
        self.assertEqual(graph.total_conflicts(), 1)
        self.assertEqual(graph.conflict_edges(), [(0, 0)])
        graph.recompute_conflicts()
        self.assertEqual(graph.total_conflicts(), 1)

    def test_clone_is_independent(self):
        self.graph.set_colors([0, 1, 1, 0, 1, 2])
        copy = self.graph.clone()

        copy.recolor(0, 1)
        self.assertEqual(self.graph.color_of(0), 0)
        self.assertEqual(self.graph.total_conflicts(), 0)
        self.assertEqual(copy.total_conflicts(), 2)

        self.graph.recolor(5, 0)
        self.assertEqual(copy.color_of(5), 2)

        copy.add_edge(1, 2)
        self.assertNotIn(2, self.graph.get_node(1).neighbors)

    def test_conflicted_nodes_and_edges(self):
        self.graph.set_colors([0, 0, 1, 2, 1, 2])
        self.assertEqual(self.graph.conflicted_nodes().tolist(), [0, 1])
        self.assertEqual(self.graph.conflict_edges(), [(0, 1)])
        self.assertFalse(self.graph.is_proper())
        self.assertEqual(self.graph.num_colors_used(), 3)

    def test_conflicts_view_is_read_only(self):
        with self.assertRaises(ValueError):
            self.graph.conflicts[0] = 5

    def test_set_colors_length_mismatch(self):
        with self.assertRaises(InvalidArgumentError):
            self.graph.set_colors([0, 1])

    def test_networkx_round_trip(self):
        self.graph.set_colors([0, 1, 1, 0, 1, 2])
        g = self.graph.to_networkx()
        self.assertEqual(g.number_of_nodes(), 6)
        self.assertEqual(g.number_of_edges(), len(self.edges))
        back = ColoringGraph.from_networkx(g)
        self.assertEqual(back.colors(), self.graph.colors())
        self.assertEqual(back.num_edges, self.graph.num_edges)

    def test_describe(self):
        self.graph.set_colors([0, 1, 1, 0, 1, 2])
        text = self.graph.describe()
        self.assertEqual(len(text.splitlines()), 6)
        self.assertTrue(text.startswith("Node 0 (color 0, conflicts 0): 1 2 5"))


if __name__ == "__main__":
    unittest.main()
