"""
Low-conflict graph k-coloring with greedy construction, simulated annealing,
min-conflicts local descent and parallel multi-run orchestration.
"""

import logging

from .config import AnnealingParams, SolverConfig
from .dimacs import load_graph, parse_dimacs, read_dimacs, write_dimacs
from .errors import ColoringError, ErrorKind, GraphFormatError, InvalidArgumentError, OutOfRangeError
from .graph import UNCOLORED, ColoringGraph, Node
from .greedy import greedy_coloring
from .local_search import local_descent
from .moves import Move, MoveMode, random_recolor, select_move_nodes, undo_move
from .parallel import MultiRunResult, run_parallel
from .simulated_annealing import AnnealingResult, SimulatedAnnealingSolver
from .solver import SolveResult, solve, solve_graph

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # State
    "ColoringGraph",
    "Node",
    "UNCOLORED",
    # Errors
    "ColoringError",
    "ErrorKind",
    "InvalidArgumentError",
    "OutOfRangeError",
    "GraphFormatError",
    # Search
    "greedy_coloring",
    "Move",
    "MoveMode",
    "random_recolor",
    "select_move_nodes",
    "undo_move",
    "AnnealingParams",
    "AnnealingResult",
    "SimulatedAnnealingSolver",
    "local_descent",
    "MultiRunResult",
    "run_parallel",
    # Pipeline
    "SolverConfig",
    "SolveResult",
    "solve",
    "solve_graph",
    # DIMACS
    "parse_dimacs",
    "read_dimacs",
    "load_graph",
    "write_dimacs",
]
