# model/__init__.py

"""
Domain objects for transition graphs and recorded runs:
state values, tagged actions, RC-steps, configurations, trace events and
the host-machine boundary. These types carry no extraction, replay or
mutation logic.
"""

from .state_value import StateValue, state_key, parse_state_key, compare_states
from .action import Action, ActionKind, as_action
from .rc_step import RCStep
from .configuration import Configuration
from .trace import TraceEvent, Trace, as_trace, UNDEFINED
from .host import HostMachine, HostNode, TransitionResult
from .exceptions import InvalidTransitionError, MachineDefinitionError
from .table_machine import TableMachine, TableNode

__all__ = [
    "StateValue",
    "state_key",
    "parse_state_key",
    "compare_states",
    "Action",
    "ActionKind",
    "as_action",
    "RCStep",
    "Configuration",
    "TraceEvent",
    "Trace",
    "as_trace",
    "UNDEFINED",
    "HostMachine",
    "HostNode",
    "TransitionResult",
    "InvalidTransitionError",
    "MachineDefinitionError",
    "TableMachine",
    "TableNode",
]
