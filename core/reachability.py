# core/reachability.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Path queries over the transition graph

"""Reachability queries over a transition graph.

All searches are breadth-first over canonical state keys, so structured state
values compare by structure. Paths are lists of RC-steps; the empty path
means the source already satisfies the query.
"""

from collections import deque
from typing import Iterable, List, Optional, Set, Tuple

from model.configuration import Configuration
from model.rc_step import RCStep
from model.state_value import StateValue, state_key
from utils.logger import get_logger

from .cost import get_cost
from .rc_steps import TransitionGraph
from .replay import replay

Path = List[RCStep]


def find_path_to_state(
    graph: TransitionGraph, source: StateValue, target: StateValue
) -> Optional[Path]:
    """Shortest path from `source` to `target`, or None when unreachable."""
    source_key, target_key = state_key(source), state_key(target)
    queue = deque([(source_key, [])])
    visited: Set[str] = set()

    while queue:
        current, path = queue.popleft()
        if current == target_key:
            return path
        if current in visited:
            continue
        visited.add(current)
        for step in graph.get(current, []):
            next_key = step.target_key
            if next_key not in visited:
                queue.append((next_key, path + [step]))
    return None


def paths_at_depth(
    graph: TransitionGraph,
    source: StateValue,
    targets: Iterable[StateValue],
    depth: int,
) -> List[Path]:
    """All explored paths of exactly `depth` steps that end in a target state.

    A (state, depth) pair is expanded once, so at most one path per target
    state and depth is reported.
    """
    target_keys = {state_key(t) for t in targets}
    queue = deque([(state_key(source), [], 0)])
    visited: Set[Tuple[str, int]] = set()
    paths: List[Path] = []

    while queue:
        current, path, level = queue.popleft()
        if level > depth or (current, level) in visited:
            continue
        visited.add((current, level))

        if level == depth:
            if current in target_keys:
                paths.append(path)
            continue

        for step in graph.get(current, []):
            queue.append((step.target_key, path + [step], level + 1))
    return paths


def path_cost(path: Path, gamma: Configuration):
    """Total cost of `path`, resolving each step from the configuration it leaves."""
    total = 0
    current = gamma
    for step in path:
        total += get_cost(current, step)
        current = replay(step, current)
    return total


def min_cost_path(
    graph: TransitionGraph,
    source: StateValue,
    targets: Iterable[StateValue],
    gamma: Configuration,
) -> Optional[Path]:
    """Cheapest of the shortest paths from `source` to each target state."""
    best: Optional[Path] = None
    best_cost = None
    for target in targets:
        path = find_path_to_state(graph, source, target)
        if path is None:
            continue
        cost = path_cost(path, gamma)
        if best_cost is None or cost < best_cost:
            best, best_cost = path, cost

    if best is not None:
        get_logger().debug(f"  cheapest path from {state_key(source)}: {len(best)} steps, cost={best_cost}")
    return best
