"""Link-graph construction for the graph view.

Uses :mod:`networkx` to hold the directed note graph; traversal is bounded by
depth and by note count so large vaults stay tractable to draw.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

import networkx as nx

from vaultgraph.note import GraphData, GraphEdge, GraphNode, Note


def _lookup(notes: Sequence[Note]) -> tuple[dict[str, Note], dict[str, Note]]:
    by_path: dict[str, Note] = {}
    by_name: dict[str, Note] = {}
    for note in notes:
        by_path.setdefault(note.path, note)
        by_name.setdefault(note.name, note)
    return by_path, by_name


def _edge_targets(notes: Sequence[Note]) -> list[tuple[str, str]]:
    """``(source_path, target_path)`` per link that lands inside *notes*.

    A link lands on a note whose path equals it, equals it plus ``.md``, or
    whose name equals it, checked in that order.
    """
    by_path, by_name = _lookup(notes)
    edges: list[tuple[str, str]] = []
    for note in notes:
        for link in note.links:
            target = by_path.get(link) or by_path.get(f"{link}.md") or by_name.get(link)
            if target is not None:
                edges.append((note.path, target.path))
    return edges


def build_link_graph(notes: Sequence[Note]) -> nx.DiGraph:
    """Return a directed graph with one node per note path."""
    G: nx.DiGraph = nx.DiGraph()
    for note in notes:
        G.add_node(note.path, label=note.name)
    G.add_edges_from(_edge_targets(notes))
    return G


def connected_subgraph(
    central_path: str,
    notes: Sequence[Note],
    max_depth: int = 2,
    max_notes: int = 50,
) -> list[Note]:
    """Breadth-first neighbourhood of *central_path* over links and backlinks.

    The central note is depth 0; neighbours are only expanded while the
    current depth is below *max_depth*. Stops once *max_notes* are collected.
    """
    by_path, _ = _lookup(notes)
    if central_path not in by_path:
        return []

    G = build_link_graph(notes)
    visited: set[str] = set()
    result: list[Note] = []
    queue: deque[tuple[str, int]] = deque([(central_path, 0)])

    while queue and len(result) < max_notes:
        path, depth = queue.popleft()
        if path in visited or depth > max_depth:
            continue
        visited.add(path)
        result.append(by_path[path])

        if depth < max_depth:
            for neighbour in (*G.successors(path), *G.predecessors(path)):
                if neighbour not in visited:
                    queue.append((neighbour, depth + 1))

    return result


def most_connected(notes: Sequence[Note], max_notes: int = 50) -> list[Note]:
    """The *max_notes* notes with the most links in and out (ties keep scan order)."""
    G = build_link_graph(notes)
    ranked = sorted(notes, key=lambda n: G.out_degree(n.path) + G.in_degree(n.path), reverse=True)
    return ranked[:max_notes]


def graph_data(notes: Sequence[Note]) -> GraphData:
    """Nodes and directed edges for *notes*; repeated links yield repeated edges."""
    edges = _edge_targets(notes)
    G = build_link_graph(notes)
    nodes = [
        GraphNode(
            id=note.path,
            label=note.name,
            tags=list(note.tags),
            link_count=len(note.links),
            backlink_count=G.in_degree(note.path),
        )
        for note in notes
    ]
    return GraphData(
        nodes=nodes,
        edges=[GraphEdge(source=s, target=t) for s, t in edges],
    )
