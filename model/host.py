# model/host.py

"""
Host machine boundary
=====================

The state-machine runtime itself is external. These protocols describe the
small surface the extractor and replay engine rely on:

  •  ``machine.initial_state.value`` and ``machine.context``
  •  ``machine.transition(state_value, event)`` returning a TransitionResult,
     or raising when the transition is invalid
  •  a node tree rooted at the machine, each node exposing ``id``,
     ``own_events``, ``states`` (child nodes by key) and ``value`` (the state
     value the node denotes)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple

from .state_value import StateValue


@dataclass(frozen=True, slots=True)
class TransitionResult:
    value: StateValue
    actions: Tuple[Any, ...] = field(default_factory=tuple)


class InitialState(Protocol):
    value: StateValue


class HostNode(Protocol):
    id: str
    own_events: Sequence[str]
    states: Mapping[str, "HostNode"]
    value: StateValue


class HostMachine(HostNode, Protocol):
    initial_state: InitialState
    context: Optional[Mapping[str, Any]]

    def transition(self, state: StateValue, event: Any) -> TransitionResult:
        ...
