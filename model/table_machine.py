# model/table_machine.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Reference host machine built from a nested transition-table definition

"""Table-driven hierarchical state machine.

The real host runtime is external; this adapter gives the extractor, the
replay engine and the command line a concrete machine to work with. A
definition is a nested mapping::

    {
        "id": "door",
        "initial": "closed",
        "context": {"opens": 0},
        "states": {
            "closed": {"on": {"OPEN": {"target": "opened", "actions": ["setCost(1)"]}}},
            "opened": {"on": {"CLOSE": "closed", "LOCK": "#door.locked"}},
            "locked": {
                "initial": "engaged",
                "on": {"UNLOCK": "closed"},
                "states": {"engaged": {}, "jammed": {}},
            },
        },
    }

Any state may list ``"tags"`` such as ``["Good"]`` or ``["Bad"]``.

Event lookup starts at the active leaf and bubbles up to the root. Targets are
sibling keys, ``.child`` keys of the handling node, or ``#id`` absolute node
ids. Compound targets descend to their initial leaf; targetless transitions
keep the current state value.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import InvalidTransitionError, MachineDefinitionError
from .host import TransitionResult
from .state_value import StateValue, state_key


@dataclass(frozen=True, slots=True)
class _Transition:
    target: Optional[str]
    actions: Tuple[Any, ...] = ()


@dataclass(eq=False, slots=True)
class TableNode:
    """One state node of a :class:`TableMachine`."""
    key: str
    id: str
    path: Tuple[str, ...]
    parent: Optional["TableNode"] = None
    initial: Optional[str] = None
    tags: Tuple[str, ...] = ()
    transitions: Dict[str, _Transition] = field(default_factory=dict)
    states: Dict[str, "TableNode"] = field(default_factory=dict)
    value: StateValue = ""

    @property
    def own_events(self) -> List[str]:
        return list(self.transitions)

    @property
    def is_leaf(self) -> bool:
        return not self.states

    def __repr__(self) -> str:
        return f"TableNode({self.id})"


@dataclass(frozen=True, slots=True)
class _InitialState:
    value: StateValue


def _parse_transition(event: str, spec: Any) -> _Transition:
    if spec is None or isinstance(spec, str):
        return _Transition(target=spec)
    if isinstance(spec, Mapping):
        actions = spec.get("actions", ())
        if isinstance(actions, (str, Mapping)) or callable(actions):
            actions = (actions,)
        return _Transition(target=spec.get("target"), actions=tuple(actions))
    raise MachineDefinitionError(f"Invalid transition for event {event!r}: {spec!r}")


def _parse_tags(tags: Any) -> Tuple[str, ...]:
    if tags is None:
        return ()
    if isinstance(tags, str):
        return (tags,)
    return tuple(str(tag) for tag in tags)


def _path_to_value(path: Tuple[str, ...]) -> StateValue:
    value: StateValue = path[-1]
    for key in reversed(path[:-1]):
        value = {key: value}
    return value


class TableMachine:
    """Host machine backed by a nested transition table.

    Exposes the node-tree shape (``id``, ``own_events``, ``states``, ``tags``,
    ``value``) at the root so it can be handed straight to the extractor.
    """

    def __init__(self, definition: Mapping[str, Any]):
        if not isinstance(definition, Mapping):
            raise MachineDefinitionError("Machine definition must be a mapping")
        if not definition.get("states"):
            raise MachineDefinitionError("Machine definition declares no states")

        self.id: str = str(definition.get("id", "machine"))
        self.context: Dict[str, Any] = dict(definition.get("context") or {})
        self._nodes_by_id: Dict[str, TableNode] = {}
        self.root = self._build_node(self.id, (), definition, None)
        self.initial_state = _InitialState(self._resolve_leaf_value(self.root))
        self.root.value = self.initial_state.value

    # Node-tree shape delegated to the root node
    @property
    def own_events(self) -> List[str]:
        return self.root.own_events

    @property
    def states(self) -> Dict[str, TableNode]:
        return self.root.states

    @property
    def value(self) -> StateValue:
        return self.root.value

    @property
    def tags(self) -> Tuple[str, ...]:
        return self.root.tags

    def get_node_by_id(self, node_id: str) -> TableNode:
        try:
            return self._nodes_by_id[node_id]
        except KeyError:
            raise InvalidTransitionError(f"Unknown state node: {node_id}") from None

    def nodes(self) -> List[TableNode]:
        """All nodes in definition order, root first."""
        return list(self._nodes_by_id.values())

    def _build_node(
        self, key: str, path: Tuple[str, ...], spec: Mapping[str, Any], parent: Optional[TableNode]
    ) -> TableNode:
        if not isinstance(spec, Mapping):
            raise MachineDefinitionError(f"State {key!r} must be a mapping, got {spec!r}")

        node_id = ".".join((self.id,) + path)
        node = TableNode(
            key=key,
            id=node_id,
            path=path,
            parent=parent,
            initial=spec.get("initial"),
            tags=_parse_tags(spec.get("tags")),
        )
        self._nodes_by_id[node_id] = node

        for event, t_spec in (spec.get("on") or {}).items():
            node.transitions[event] = _parse_transition(event, t_spec)

        for child_key, child_spec in (spec.get("states") or {}).items():
            node.states[child_key] = self._build_node(
                child_key, path + (child_key,), child_spec or {}, node
            )

        if node.states:
            if node.initial is None:
                node.initial = next(iter(node.states))
            if node.initial not in node.states:
                raise MachineDefinitionError(
                    f"Initial state {node.initial!r} of {node_id} is not a child state"
                )
        if path:
            node.value = self._resolve_leaf_value(node)
        return node

    def _resolve_leaf(self, node: TableNode) -> TableNode:
        while node.states:
            node = node.states[node.initial]
        return node

    def _resolve_leaf_value(self, node: TableNode) -> StateValue:
        return _path_to_value(self._resolve_leaf(node).path)

    def _node_for_value(self, value: StateValue) -> TableNode:
        node = self.root
        current: Any = value
        while True:
            if isinstance(current, str):
                child = node.states.get(current)
                if child is None:
                    raise InvalidTransitionError(f"Unknown state value: {state_key(value)}")
                return self._resolve_leaf(child)
            if isinstance(current, Mapping) and len(current) == 1:
                (key, rest), = current.items()
                child = node.states.get(key)
                if child is None:
                    raise InvalidTransitionError(f"Unknown state value: {state_key(value)}")
                node, current = child, rest
                continue
            raise InvalidTransitionError(f"Unsupported state value: {value!r}")

    def _resolve_target(self, handler: TableNode, target: str) -> TableNode:
        if target.startswith("#"):
            return self.get_node_by_id(target[1:])
        if target.startswith("."):
            child = handler.states.get(target[1:])
            if child is None:
                raise InvalidTransitionError(f"{handler.id} has no child state {target[1:]!r}")
            return child
        siblings = handler.parent.states if handler.parent else handler.states
        if target in siblings:
            return siblings[target]
        raise InvalidTransitionError(f"Cannot resolve target {target!r} from {handler.id}")

    def transition(self, state: StateValue, event: Any) -> TransitionResult:
        """Take `event` from `state`.

        Args:
            state: Current state value
            event: Event type string or a mapping with a ``type`` entry

        Returns:
            TransitionResult with the resulting state value and the actions
            declared on the taken transition

        Raises:
            InvalidTransitionError: Unknown state or no node handles the event
        """
        event_type = event.get("type") if isinstance(event, Mapping) else event
        leaf = self._node_for_value(state)

        handler: Optional[TableNode] = leaf
        while handler is not None and event_type not in handler.transitions:
            handler = handler.parent
        if handler is None:
            raise InvalidTransitionError(
                f"Event {event_type!r} is not handled in state {state_key(state)}"
            )

        taken = handler.transitions[event_type]
        if taken.target is None:
            return TransitionResult(value=_path_to_value(leaf.path), actions=taken.actions)
        target = self._resolve_target(handler, taken.target)
        return TransitionResult(value=self._resolve_leaf_value(target), actions=taken.actions)

    def __repr__(self) -> str:
        return f"TableMachine({self.id}, states={list(self.states)})"
