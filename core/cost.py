# core/cost.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Cost resolution for RC-steps from their action lists

"""Cost Resolver.

Resolves the numeric cost of taking an RC-step. Actions are scanned in list
order and the first action that yields a cost decides the result:

1. an explicit ``cost`` field, coerced to a number (non-numeric becomes 0)
2. a ``setCost`` annotation in the action's type identifier (colon form, then
   call form)
3. a plain-string action written in call form, ``setCost(N)``
4. an executable whose return value is numeric, also on actions that carry an
   ``assign``; a raising executable is skipped and scanning continues with
   the next action

When no action yields a cost the step's own ``cost`` is used, else 0.
"""

import math
import re
from numbers import Number
from typing import Any, Iterable, Optional

from model.action import Action, ActionKind, as_action
from model.configuration import Configuration
from model.rc_step import RCStep
from utils.logger import get_logger

logger = get_logger()


# Numeric string literals accepted for explicit costs: decimal (with optional
# fraction and exponent), signed Infinity, and unsigned 0x/0o/0b integers.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INFINITY = re.compile(r"([+-]?)Infinity")
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def _parse_numeric_text(text: str):
    if not text:
        return 0
    if _PREFIXED.fullmatch(text):
        return int(text, 0)
    infinity = _INFINITY.fullmatch(text)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf
    if _DECIMAL.fullmatch(text):
        parsed = float(text)
        return int(parsed) if parsed.is_integer() else parsed
    return 0


def coerce_number(value: Any):
    """Numeric coercion for explicit ``cost`` fields.

    Booleans count as 0/1 and None as 0. Strings must be a whole numeric
    literal after trimming: decimals such as ``"12"``, ``"1.5e3"`` or ``".5"``,
    ``"Infinity"`` (case-sensitive, optionally signed) and unsigned ``0x``/
    ``0o``/``0b`` integers. ``"inf"``, ``"nan"``, ``"1_000"`` and other text
    become 0, as does NaN and anything that is not a number or a string.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Number) and not isinstance(value, complex):
        return 0 if isinstance(value, float) and math.isnan(value) else value
    if isinstance(value, str):
        return _parse_numeric_text(value.strip())
    return 0


def _is_numeric_result(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, (bool, complex))


def _cost_of(action: Action) -> Optional[Any]:
    if action.kind is ActionKind.COST:
        return coerce_number(action.cost)

    if action.kind is ActionKind.TYPE_ENCODED_COST:
        return action.cost

    if action.executable is not None:
        try:
            result = action.executable()
        except Exception as exc:
            logger.debug(f"Executable action {action} raised {type(exc).__name__}: {exc}")
            return None
        if _is_numeric_result(result):
            return result

    return None


def extract_cost_from_actions(actions: Iterable[Any]) -> Optional[Any]:
    """Return the cost carried by the first cost-yielding action, or None."""
    for raw in actions or ():
        cost = _cost_of(as_action(raw))
        if cost is not None:
            return cost
    return None


def get_cost(gamma_p: Optional[Configuration], rc_b: RCStep):
    """Resolve the cost of taking `rc_b`.

    Args:
        gamma_p: Configuration the step is taken from (not consulted by the
            current rules, kept for cost functions that depend on state)
        rc_b: Step whose cost is requested

    Returns:
        The resolved cost, the step's own ``cost`` when no action yields one,
        or 0
    """
    cost = extract_cost_from_actions(rc_b.actions)
    if cost is not None:
        return cost
    if rc_b.cost is not None:
        return rc_b.cost
    return 0
