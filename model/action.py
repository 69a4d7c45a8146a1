# model/action.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Tagged action variant resolved once when a transition step is built

"""Action effect descriptors.

Host machines hand back actions in loosely-typed shapes: mappings with an
``assign`` entry, objects with a numeric ``cost``, identifiers that embed a
cost token, objects exposing an ``exec`` callable, bare strings. This module
resolves each raw action into a single :class:`Action` record so the replay
engine and the cost resolver read resolved facets instead of probing shapes
again.

One raw action may carry several facets at once, e.g. an ``assign`` next to
an explicit ``cost``. Every recognized facet is kept on the record:
``assign`` for the context update, ``cost`` for an explicit or type-encoded
cost, ``executable`` for a callable ``exec``. The :class:`ActionKind` tag
names the facet that decides the action's cost role and, failing that, its
effect, in this order:
COST, TYPE_ENCODED_COST, ASSIGN_FUNCTION, ASSIGN_PATCH, EXECUTABLE, PLAIN.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Mapping, Optional

from parser.cost_grammar import scan_call_form, scan_type_identifier


class ActionKind(Enum):
    """Primary facet of an action."""
    ASSIGN_FUNCTION = auto()  # (context, event) -> new context
    ASSIGN_PATCH = auto()  # mapping shallow-merged into context
    COST = auto()  # explicit `cost` field
    TYPE_ENCODED_COST = auto()  # identifier carrying a setCost token
    EXECUTABLE = auto()  # zero-argument callable, numeric result is a cost
    PLAIN = auto()  # no recognized effect


_MISSING = object()


def _facet(raw: Any, name: str) -> Any:
    """Read `name` from a mapping key or an attribute, `_MISSING` if absent."""
    if isinstance(raw, Mapping):
        return raw.get(name, _MISSING)
    return getattr(raw, name, _MISSING)


@dataclass(frozen=True, slots=True)
class Action:
    kind: ActionKind
    raw: Any = None
    type: Optional[str] = None
    cost: Any = None
    # context update (callable or mapping), independent of `kind`
    assign: Any = None
    executable: Optional[Callable[[], Any]] = None

    @property
    def is_assign(self) -> bool:
        return self.assign is not None

    @property
    def has_cost(self) -> bool:
        return self.kind in (ActionKind.COST, ActionKind.TYPE_ENCODED_COST)

    def __str__(self) -> str:
        label = self.type if self.type is not None else self.kind.name.lower()
        if self.has_cost:
            return f"{label}<cost={self.cost}>"
        return label


def _assign_facet(raw: Any) -> Any:
    assign = _facet(raw, "assign")
    if callable(assign):
        return assign
    if isinstance(assign, Mapping):
        return dict(assign)
    return None


def as_action(raw: Any) -> Action:
    """Resolve a raw host action into an :class:`Action`.

    Already-resolved actions are returned as they are.
    """
    if isinstance(raw, Action):
        return raw

    if isinstance(raw, str):
        encoded = scan_call_form(raw)
        if encoded is not None:
            return Action(ActionKind.TYPE_ENCODED_COST, raw=raw, type=raw, cost=encoded)
        return Action(ActionKind.PLAIN, raw=raw, type=raw)

    if raw is None:
        return Action(ActionKind.PLAIN, raw=raw)

    raw_type = _facet(raw, "type")
    type_str = None if raw_type is _MISSING or raw_type is None else str(raw_type)
    assign = _assign_facet(raw)
    executable = _facet(raw, "exec")
    executable = executable if callable(executable) else None
    facets = dict(raw=raw, type=type_str, assign=assign, executable=executable)

    cost = _facet(raw, "cost")
    if cost is not _MISSING:
        return Action(ActionKind.COST, cost=cost, **facets)

    # an empty type identifier is treated as absent
    if type_str:
        encoded = scan_type_identifier(type_str)
        if encoded is not None:
            return Action(ActionKind.TYPE_ENCODED_COST, cost=encoded, **facets)

    if callable(assign):
        return Action(ActionKind.ASSIGN_FUNCTION, **facets)
    if assign is not None:
        return Action(ActionKind.ASSIGN_PATCH, **facets)
    if executable is not None:
        return Action(ActionKind.EXECUTABLE, **facets)
    return Action(ActionKind.PLAIN, **facets)
