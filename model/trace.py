# model/trace.py

"""
Trace events
============

A trace is the ordered sequence of events recorded from one run of the
system under test. Each element carries the event identifier and the message
payload that accompanied it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple, Union


class _Undefined:
    """Marker for a payload value that is absent rather than null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNDEFINED = _Undefined()


@dataclass(frozen=True, slots=True)
class TraceEvent:
    event: str
    message: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TraceEvent":
        """Build an event from an ``{"event": ..., "message": ...}`` mapping."""
        message = data.get("message")
        return cls(event=str(data["event"]), message=dict(message) if message else {})

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.event, "message": dict(self.message)}

    def __str__(self) -> str:
        return f"{self.event}{self.message}"


Trace = Tuple[TraceEvent, ...]


def as_trace(events: Iterable[Union[TraceEvent, Mapping[str, Any]]]) -> Trace:
    """Normalize a sequence of events or event mappings into a Trace."""
    return tuple(
        ev if isinstance(ev, TraceEvent) else TraceEvent.from_dict(ev) for ev in events
    )
