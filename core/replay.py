# core/replay.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Configuration construction and single-step replay

"""Configuration & Replay Engine.

Configurations (γ) are immutable snapshots; :func:`replay` always returns a
new one. Every action carrying an ``assign`` facet updates the context, whatever
cost it also declares: function assigns replace the working context with their
return value, patch assigns are shallow-merged into it. Nothing else in an
action is applied here.
"""

from typing import Any, Dict, Mapping, Optional

from model.configuration import Configuration
from model.host import HostMachine
from model.rc_step import RCStep
from model.state_value import StateValue
from utils.logger import get_logger


def create_initial_configuration(machine: HostMachine) -> Configuration:
    """Build γ₀ from the machine's initial state and declared context."""
    return Configuration(
        state=machine.initial_state.value,
        context=dict(machine.context or {}),
        machine=machine,
    )


def replay(step: RCStep, gamma: Configuration) -> Configuration:
    """Advance `gamma` along `step`.

    Args:
        step: RC-step to take; its source is not checked against γ.state
        gamma: Configuration to advance, left untouched

    Returns:
        New configuration in ``step.target`` with the updated context and
        ``last_event`` set to ``{"type": step.event}``
    """
    context: Dict[str, Any] = dict(gamma.context)

    for action in step.actions:
        if callable(action.assign):
            context = action.assign(context, {"type": step.event})
        elif action.assign is not None:
            context = {**context, **action.assign}

    get_logger().debug(f"  replay {step} ctx={context}")
    return Configuration(
        state=step.target,
        context=context,
        machine=gamma.machine,
        last_event={"type": step.event},
    )


def create_configuration_from_state(
    machine: HostMachine,
    state_value: StateValue,
    context: Optional[Mapping[str, Any]] = None,
) -> Configuration:
    """Snapshot an arbitrary state.

    The context is `context` when given, else the machine's declared context,
    else an empty mapping.
    """
    if context is None:
        context = machine.context or {}
    return Configuration(state=state_value, context=dict(context), machine=machine)
