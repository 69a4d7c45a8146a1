# core/rc_steps.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# RC-step extraction from a host machine's node tree and graph indexing

"""RC-Step Extractor and Transition Graph Builder.

Extraction walks the host machine's node tree depth-first with an explicit
stack. Every node is visited at most once (keyed by node id), so cyclic or
self-referential node graphs terminate. For each node only its own events are
probed: the host's transition oracle is asked to take a synthetic event of
that type from the node's state value. Invalid transitions are expected and
skipped; results that leave the state unchanged are not recorded. Children
are visited whether or not any transition reaches them.
"""

from dataclasses import replace
from typing import Dict, List, Set

from model.host import HostMachine, HostNode
from model.rc_step import RCStep
from model.state_value import state_key
from utils.logger import get_logger

from .cost import get_cost

TransitionGraph = Dict[str, List[RCStep]]


def _probe_node(machine: HostMachine, node: HostNode, steps: List[RCStep]) -> None:
    logger = get_logger()
    source = node.value
    source_key = state_key(source)

    for event in node.own_events:
        try:
            result = machine.transition(source, {"type": event})
        except Exception as exc:
            logger.transition_skipped(source_key, event, str(exc))
            continue

        if state_key(result.value) == source_key:
            logger.debug(f"    self-loop {source_key} --{event}--> dropped")
            continue

        step = RCStep(
            source=source,
            event=event,
            target=result.value,
            actions=tuple(result.actions or ()),
        )
        logger.debug(f"    recorded {step}")
        steps.append(step)


def extract_rc(machine: HostMachine, with_costs: bool = False) -> List[RCStep]:
    """Extract all RC-steps reachable structurally from the machine's root.

    Args:
        machine: Host machine; its root node is the machine itself
        with_costs: Annotate every step with its resolved cost

    Returns:
        RC-steps in depth-first node order, own events in declaration order
    """
    logger = get_logger()
    steps: List[RCStep] = []
    visited: Set[str] = set()
    stack: List[HostNode] = [machine]

    while stack:
        node = stack.pop()
        if node.id in visited:
            continue
        visited.add(node.id)
        logger.debug(f"  visiting node {node.id}")

        _probe_node(machine, node, steps)

        children = list((node.states or {}).values())
        # reversed so the first declared child is processed next
        stack.extend(reversed(children))

    if with_costs:
        steps = [replace(step, cost=get_cost(None, step)) for step in steps]

    logger.extraction_summary(len(visited), len(steps))
    return steps


def build_graph(rc_steps: List[RCStep]) -> TransitionGraph:
    """Index steps by canonical source-state key, preserving order per bucket."""
    graph: TransitionGraph = {}
    for step in rc_steps:
        graph.setdefault(state_key(step.source), []).append(step)
    return graph
