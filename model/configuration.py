# model/configuration.py

"""
Configuration (γ)
=================

Symbolic snapshot of a host machine: its current state value, the extended
context, a reference to the machine and the event that produced it.
Configurations are never updated in place; replaying a step yields a new one.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .state_value import StateValue, state_key


@dataclass(frozen=True, slots=True)
class Configuration:
    state: StateValue
    context: Dict[str, Any] = field(default_factory=dict)
    machine: Any = None
    last_event: Optional[Dict[str, Any]] = None

    @property
    def state_key(self) -> str:
        return state_key(self.state)

    def __str__(self) -> str:
        return f"γ({self.state_key}, ctx={self.context})"
