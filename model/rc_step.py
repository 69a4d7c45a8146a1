# model/rc_step.py

"""
RCStep
======

Immutable record of one reachable transition of a host machine: the source
state, the triggering event, the target state and the ordered actions the
host reported for it. RC-steps are the edges of the transition graph.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .action import Action, as_action
from .state_value import StateValue, state_key


@dataclass(frozen=True, slots=True)
class RCStep:
    source: StateValue
    event: str
    target: StateValue
    actions: Tuple[Action, ...] = field(default_factory=tuple)
    cost: Optional[Any] = None

    def __post_init__(self) -> None:
        # resolve raw host actions once, here
        object.__setattr__(self, "actions", tuple(as_action(a) for a in self.actions or ()))

    @property
    def source_key(self) -> str:
        return state_key(self.source)

    @property
    def target_key(self) -> str:
        return state_key(self.target)

    def __str__(self) -> str:
        return f"{self.source_key} --{self.event}--> {self.target_key}"
