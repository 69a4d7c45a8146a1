# core/recovery.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Back-track cost: how expensive it is to get from a bad state to a good one

"""Back-track (recovery) cost.

States are classified by the tags declared on their nodes: ``Good`` marks
states a system may recover to and ``Bad`` marks states reached through a
fault. The back-track cost of a configuration is the cost of the cheapest
recovery path to any good state that fits a user budget:

1. the cheapest shortest path to a good state is tried first;
2. when it is missing or over budget, paths of exactly 2, 3, ...,
   ``depth_max`` steps are searched and the cheapest at each depth is taken;
3. the first cost within budget wins; otherwise the last cost the depth
   search found is returned, or ``UINT_MAX`` when it found none.
"""

from typing import Iterable, List, Sequence

from model.configuration import Configuration
from model.rc_step import RCStep
from model.state_value import StateValue, state_key
from utils.logger import get_logger

from .rc_steps import build_graph
from .reachability import min_cost_path, path_cost, paths_at_depth

UINT_MAX = 4294967295
DEFAULT_USR_MAX = 50
DEFAULT_DEPTH_MAX = 5

GOOD_TAG = "Good"
BAD_TAG = "Bad"


def states_with_tags(machine, tags: Iterable[str]) -> List[StateValue]:
    """State values of every node carrying one of `tags`, in definition order.

    The root node is not a state of its own and is never reported. A compound
    node denotes its initial leaf, as it does when used as a transition target.
    """
    wanted = set(tags)
    found: List[StateValue] = []
    seen = set()
    stack = list(reversed(list(machine.states.values())))

    while stack:
        node = stack.pop()
        if node.id in seen:
            continue
        seen.add(node.id)
        if wanted.intersection(getattr(node, "tags", ())):
            found.append(node.value)
        stack.extend(reversed(list(node.states.values())))
    return found


def good_states(machine, tags: Iterable[str] = (GOOD_TAG,)) -> List[StateValue]:
    return states_with_tags(machine, tags)


def bad_states(machine, tags: Iterable[str] = (BAD_TAG,)) -> List[StateValue]:
    return states_with_tags(machine, tags)


def _cheapest(paths, gamma: Configuration):
    best_cost = None
    for path in paths:
        cost = path_cost(path, gamma)
        if best_cost is None or cost < best_cost:
            best_cost = cost
    return best_cost


def compute_bt_cost(
    rc_steps: Sequence[RCStep],
    gamma: Configuration,
    good: Sequence[StateValue],
    usr_max=DEFAULT_USR_MAX,
    depth_max: int = DEFAULT_DEPTH_MAX,
):
    """Back-track cost of recovering from ``gamma.state`` to a good state.

    Args:
        rc_steps: RC-steps of the machine, costs resolved from `gamma` on
        gamma: Configuration to recover from
        good: Good state values, e.g. from :func:`good_states`
        usr_max: Largest acceptable recovery cost
        depth_max: Deepest path length searched after the direct attempt

    Returns:
        The recovery cost, or ``UINT_MAX`` when no good state is reachable
    """
    logger = get_logger()
    if not good:
        logger.debug("  no good states, recovery impossible")
        return UINT_MAX

    graph = build_graph(rc_steps)
    source = gamma.state

    direct = min_cost_path(graph, source, good, gamma)
    if direct is not None:
        cost = path_cost(direct, gamma)
        if cost <= usr_max:
            return cost

    bt_cost = None
    for depth in range(2, depth_max + 1):
        cost = _cheapest(paths_at_depth(graph, source, good, depth), gamma)
        if cost is None:
            continue
        bt_cost = cost
        if cost <= usr_max:
            return cost
        logger.debug(f"  depth {depth} recovery from {state_key(source)} costs {cost} > {usr_max}")

    return UINT_MAX if bt_cost is None else bt_cost
