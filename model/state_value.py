# model/state_value.py

"""
State values
============

A state value names a (possibly compound) machine state. Flat states are
plain strings; compound states are nested mappings such as
``{"locked": {"alarm": "armed"}}``. Graph indexes and comparisons use a
canonical string key so that structurally equal values collide.
"""

from __future__ import annotations
import json
from typing import Mapping, Union

StateValue = Union[str, Mapping[str, "StateValue"]]


def state_key(value: StateValue) -> str:
    """Return the canonical string key for `value`."""
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def parse_state_key(key: str) -> StateValue:
    """Inverse of `state_key`; non-JSON keys are returned unchanged."""
    try:
        decoded = json.loads(key)
    except ValueError:
        return key
    if isinstance(decoded, (str, dict)):
        return decoded
    return key


def compare_states(first: StateValue, second: StateValue) -> bool:
    """True if both values denote the same state."""
    return state_key(first) == state_key(second)
