# core/__init__.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Core module public API for transition-graph and replay machinery

"""Core components for robustness-aware regression test reduction.

This module provides the trace and graph machinery that a reduction driver
builds on: it derives a cost-weighted graph of reachable transition steps
from a host state machine, replays those steps against symbolic
configurations, and answers reachability questions over the resulting graph.

The host machine's transition function is treated as an opaque oracle; no
statechart semantics are defined here.

Primary Components:
    extract_rc: Depth-first RC-step extraction with cycle safety
    build_graph: Index of RC-steps by canonical source-state key
    get_cost: Priority-ordered cost resolution from step actions
    replay: Pure single-step configuration update
    replay_trace: Walk a recorded trace through the RC-step relation
    find_path_to_state / min_cost_path: Reachability queries
    compute_bt_cost: Cost of recovering to a state tagged Good

Example:
    >>> from model import TableMachine
    >>> from core import extract_rc, build_graph, create_initial_configuration
    >>> machine = TableMachine({"id": "m", "states": {"a": {"on": {"GO": "b"}}, "b": {}}})
    >>> graph = build_graph(extract_rc(machine))
    >>> gamma = create_initial_configuration(machine)
"""

from .cost import get_cost, extract_cost_from_actions, coerce_number
from .rc_steps import extract_rc, build_graph, TransitionGraph
from .replay import create_initial_configuration, replay, create_configuration_from_state
from .reachability import find_path_to_state, paths_at_depth, path_cost, min_cost_path
from .trace_replay import TraceReplay, match_step, replay_trace
from .recovery import (
    DEFAULT_DEPTH_MAX,
    DEFAULT_USR_MAX,
    UINT_MAX,
    bad_states,
    compute_bt_cost,
    good_states,
    states_with_tags,
)

__all__ = [
    "get_cost",
    "extract_cost_from_actions",
    "coerce_number",
    "extract_rc",
    "build_graph",
    "TransitionGraph",
    "create_initial_configuration",
    "replay",
    "create_configuration_from_state",
    "find_path_to_state",
    "paths_at_depth",
    "path_cost",
    "min_cost_path",
    "TraceReplay",
    "match_step",
    "replay_trace",
    "DEFAULT_USR_MAX",
    "DEFAULT_DEPTH_MAX",
    "UINT_MAX",
    "good_states",
    "bad_states",
    "states_with_tags",
    "compute_bt_cost",
]

__version__ = "1.0.0"
__description__ = "Core components for robustness-aware test reduction"
