"""Search observers.

The solver reports every visited (state, player) node and every traversed
edge to an observer, so tracing and graph capture stay outside the search
algorithm. ``GraphRecorder`` keeps the visited graph in memory in a plain
form that any exporter can consume.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from ..models import PLAYER_ONE, GapSequence
from .canonical import CanonicalKey, canonical_key


@runtime_checkable
class SearchObserver(Protocol):
    """Callbacks invoked by MinimaxSolver during a solve."""

    def on_node(self, gaps: GapSequence, player: int, terminal: bool) -> None: ...

    def on_edge(self, gaps: GapSequence, successor: GapSequence) -> None: ...


class NullObserver:
    """Observer that ignores every event."""

    def on_node(self, gaps: GapSequence, player: int, terminal: bool) -> None:
        pass

    def on_edge(self, gaps: GapSequence, successor: GapSequence) -> None:
        pass


class CompositeObserver:
    """Forwards events to several observers in order."""

    def __init__(self, *observers: SearchObserver):
        self.observers = list(observers)

    def on_node(self, gaps: GapSequence, player: int, terminal: bool) -> None:
        for observer in self.observers:
            observer.on_node(gaps, player, terminal)

    def on_edge(self, gaps: GapSequence, successor: GapSequence) -> None:
        for observer in self.observers:
            observer.on_edge(gaps, successor)


@dataclass
class GraphNode:
    """A canonical position seen during search."""
    key: CanonicalKey
    terminal: bool
    is_start: bool = False
    players: set[int] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": list(self.key),
            "terminal": self.terminal,
            "is_start": self.is_start,
            "players": sorted(self.players),
        }


class GraphRecorder:
    """Records the game graph explored by a solve.

    Nodes are keyed by canonical key, so symmetric positions collapse into
    one node. The first node reported with player 1 to move and no incoming
    edge recorded yet is tagged as the start node.
    """

    def __init__(self) -> None:
        self.nodes: dict[CanonicalKey, GraphNode] = {}
        self.edges: list[tuple[CanonicalKey, CanonicalKey]] = []
        self._edge_set: set[tuple[CanonicalKey, CanonicalKey]] = set()
        self.start: CanonicalKey | None = None

    def on_node(self, gaps: GapSequence, player: int, terminal: bool) -> None:
        key = canonical_key(gaps)
        node = self.nodes.get(key)
        if node is None:
            node = GraphNode(key=key, terminal=terminal)
            self.nodes[key] = node
        node.players.add(player)
        if self.start is None and player == PLAYER_ONE and not self.edges:
            self.start = key
            node.is_start = True

    def on_edge(self, gaps: GapSequence, successor: GapSequence) -> None:
        edge = (canonical_key(gaps), canonical_key(successor))
        if edge not in self._edge_set:
            self._edge_set.add(edge)
            self.edges.append(edge)

    def successors(self, key: CanonicalKey) -> list[CanonicalKey]:
        return [dst for src, dst in self.edges if src == key]

    def terminal_nodes(self) -> list[GraphNode]:
        return [node for node in self.nodes.values() if node.terminal]

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._edge_set.clear()
        self.start = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": list(self.start) if self.start is not None else None,
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [[list(src), list(dst)] for src, dst in self.edges],
        }
