"""Prometheus metrics for the solver.

Counters and histograms live here so the search engine can record
lightweight telemetry without managing its own metric instances. Nothing is
exported unless the embedding application exposes the default registry.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Gauge, Histogram


SOLVES_TOTAL: Final[Counter] = Counter(
    "polyarea_solves_total",
    "Total top-level solves, labeled by outcome (player1, player2, none, error).",
    labelnames=("outcome",),
)

SOLVE_LATENCY: Final[Histogram] = Histogram(
    "polyarea_solve_latency_seconds",
    "Wall-clock duration of top-level solves in seconds.",
    buckets=(0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0, 120.0, 600.0),
)

NODES_VISITED: Final[Counter] = Counter(
    "polyarea_nodes_visited_total",
    "Total search nodes expanded across all solves.",
)

TABLE_LOOKUPS: Final[Counter] = Counter(
    "polyarea_table_lookups_total",
    "Transposition table lookups, labeled by outcome (hit or miss).",
    labelnames=("outcome",),
)

TABLE_SIZE: Final[Gauge] = Gauge(
    "polyarea_table_entries",
    "Transposition table size at the end of the most recent solve.",
)


def record_solve(
    outcome: str,
    elapsed_seconds: float,
    nodes_visited: int,
    hits: int,
    misses: int,
    table_entries: int,
) -> None:
    """Record one finished (or abandoned) solve."""
    SOLVES_TOTAL.labels(outcome=outcome).inc()
    SOLVE_LATENCY.observe(elapsed_seconds)
    NODES_VISITED.inc(nodes_visited)
    TABLE_LOOKUPS.labels(outcome="hit").inc(hits)
    TABLE_LOOKUPS.labels(outcome="miss").inc(misses)
    TABLE_SIZE.set(table_entries)
