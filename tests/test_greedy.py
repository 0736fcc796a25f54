import unittest

import networkx as nx

from gcp_search.errors import InvalidArgumentError
from gcp_search.graph import UNCOLORED, ColoringGraph
from gcp_search.greedy import degree_order, greedy_coloring


class TestGreedyColoring(unittest.TestCase):

    def test_every_node_gets_a_color(self):
        g = nx.gnp_random_graph(40, 0.4, seed=11)
        for k in (1, 2, 3, 8):
            graph = greedy_coloring(ColoringGraph.from_networkx(g), k)
            self.assertTrue(graph.is_fully_colored())
            self.assertTrue(all(0 <= c < k for c in graph.colors()))
            self.assertNotIn(UNCOLORED, graph.colors())

    def test_no_edges_single_color(self):
        graph = greedy_coloring(ColoringGraph(5), 1)
        self.assertEqual(graph.colors(), [0] * 5)
        self.assertEqual(graph.total_conflicts(), 0)

    def test_path_two_colors(self):
        graph = greedy_coloring(ColoringGraph.from_edges(3, [(0, 1), (1, 2)]), 2)
        self.assertEqual(graph.colors(), [1, 0, 1])
        self.assertEqual(graph.total_conflicts(), 0)

    def test_degree_order_ties_by_id(self):
        graph = ColoringGraph.from_edges(5, [(3, 0), (3, 1), (3, 2), (4, 1), (4, 2)])
        self.assertEqual(degree_order(graph), [3, 1, 2, 4, 0])

    def test_least_used_fallback(self):
        # K4 with two colors: node 2 sees {0: 1, 1: 1} and takes 0, node 3 sees {0: 2, 1: 1}
        graph = greedy_coloring(ColoringGraph.from_networkx(nx.complete_graph(4)), 2)
        self.assertEqual(graph.colors(), [0, 1, 0, 1])
        self.assertEqual(graph.total_conflicts(), 2)

    def test_overwrites_previous_colors(self):
        graph = ColoringGraph.from_edges(3, [(0, 1), (1, 2)])
        graph.set_colors([1, 1, 1])
        greedy_coloring(graph, 2)
        self.assertEqual(graph.colors(), [1, 0, 1])

    def test_invalid_k(self):
        with self.assertRaises(InvalidArgumentError):
            greedy_coloring(ColoringGraph(2), 0)

    def test_six_node_example_is_proper(self):
        graph = ColoringGraph.from_edges(6, [(0, 1), (0, 2), (1, 3), (2, 3), (3, 4), (4, 5), (5, 0)])
        greedy_coloring(graph, 3)
        self.assertEqual(graph.total_conflicts(), 0)


if __name__ == "__main__":
    unittest.main()
