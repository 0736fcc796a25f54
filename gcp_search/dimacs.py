"""
DIMACS graph files.

    c optional comment lines
    p edge <N> <M>
    e <u> <v>        (M times, 1-based ids)

Ids are shifted to 0-based on read and back to 1-based on write.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from .errors import GraphFormatError
from .graph import ColoringGraph

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"^p\s+edge\s+(\d+)\s+(\d+)\s*$")
EDGE_RE = re.compile(r"^e\s+(-?\d+)\s+(-?\d+)\s*$")

Edge = Tuple[int, int]


def parse_dimacs(lines: Iterable[str]) -> Tuple[int, List[Edge]]:
    num_nodes = None
    declared_edges = 0
    edges: List[Edge] = []

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("c"):
            continue

        if num_nodes is None:
            match = HEADER_RE.match(line)
            if match is None:
                raise GraphFormatError(f"expected 'p edge <nodes> <edges>', got {line!r}", line_number)
            num_nodes, declared_edges = int(match.group(1)), int(match.group(2))
            continue

        match = EDGE_RE.match(line)
        if match is None:
            raise GraphFormatError(f"expected 'e <u> <v>', got {line!r}", line_number)
        u, v = int(match.group(1)), int(match.group(2))
        for endpoint in (u, v):
            if endpoint < 1 or endpoint > num_nodes:
                raise GraphFormatError(f"edge endpoint {endpoint} outside [1, {num_nodes}]", line_number)
        edges.append((u - 1, v - 1))

    if num_nodes is None:
        raise GraphFormatError("missing 'p edge' header")
    if len(edges) != declared_edges:
        logger.warning("header declares %d edges but %d were read", declared_edges, len(edges))
    return num_nodes, edges


def read_dimacs(path: Union[str, Path]) -> Tuple[int, List[Edge]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_dimacs(f)
    except OSError as exc:
        raise GraphFormatError(f"cannot read graph file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"graph file {path} is not text: {exc}") from exc


def load_graph(path: Union[str, Path]) -> ColoringGraph:
    num_nodes, edges = read_dimacs(path)
    return ColoringGraph.from_edges(num_nodes, edges)


def write_dimacs(path: Union[str, Path], num_nodes: int, edges: List[Edge], comment: str = None) -> None:
    with open(path, "w", encoding="utf-8") as f:
        if comment:
            for line in comment.splitlines():
                f.write(f"c {line}\n")
        f.write(f"p edge {num_nodes} {len(edges)}\n")
        for u, v in edges:
            f.write(f"e {u + 1} {v + 1}\n")
