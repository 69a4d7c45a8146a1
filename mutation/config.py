# mutation/config.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Mutation defaults and per-call configuration

"""Mutation configuration.

Holds the default pools used by the generators and the :class:`MutantConfig`
record callers pass to override them. Pools and positions are stored as
tuples so a config can be shared between calls.
"""

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple

from model.trace import UNDEFINED


@dataclass(frozen=True)
class MutationDefaults:
    DEFAULT_INJECTION_RATE: float = 0.1
    COMPOUND_INJECTION_RATE: float = 0.05
    DEFAULT_MM_TIMEOUT_MS: int = 5000
    TIMEOUT_EVENT: str = "TIMEOUT"


MUTATION_DEFAULTS = MutationDefaults()

DEFAULT_WRONG_MESSAGES: Tuple[str, ...] = (
    "INVALID_EVENT",
    "UNKNOWN_ACTION",
    "UNEXPECTED_MESSAGE",
    "WRONG_TYPE",
    "MALFORMED_REQUEST",
    "UNSUPPORTED_OPERATION",
    "DEPRECATED_EVENT",
    "FORBIDDEN_ACTION",
)

DEFAULT_WRONG_PAYLOADS: Tuple[Mapping[str, Any], ...] = (
    {"value": None},
    {"value": UNDEFINED},
    {"value": float("nan")},
    {"value": float("inf")},
    {"value": float("-inf")},
    {"value": ""},
    {"value": []},
    {"value": {}},
    {"data": {"corrupted": True, "original": None}},
    {"id": -1},
    {"id": "invalid-id-format"},
    {"timestamp": "not-a-date"},
    {"count": -999999},
    {"status": "INVALID_STATUS"},
)


@dataclass(frozen=True)
class MutantConfig:
    """Options for a single mutation call.

    Attributes:
        injection_rate: Per-index Bernoulli probability used when no explicit
            positions are given
        injection_positions: Explicit indices to mutate; out-of-range entries
            are ignored
        wrong_messages: Pool of replacement event identifiers (WM)
        wrong_payloads: Pool of malformed payloads (WP)
        missing_message_timeout: Timeout recorded on MM markers
    """

    injection_rate: float = MUTATION_DEFAULTS.DEFAULT_INJECTION_RATE
    injection_positions: Tuple[int, ...] = ()
    wrong_messages: Tuple[str, ...] = DEFAULT_WRONG_MESSAGES
    wrong_payloads: Tuple[Mapping[str, Any], ...] = DEFAULT_WRONG_PAYLOADS
    missing_message_timeout: int = MUTATION_DEFAULTS.DEFAULT_MM_TIMEOUT_MS

    def __post_init__(self) -> None:
        object.__setattr__(self, "injection_positions", tuple(self.injection_positions or ()))
        object.__setattr__(self, "wrong_messages", tuple(self.wrong_messages))
        object.__setattr__(self, "wrong_payloads", tuple(self.wrong_payloads))
        if not self.wrong_messages:
            raise ValueError("wrong_messages pool must not be empty")
        if not self.wrong_payloads:
            raise ValueError("wrong_payloads pool must not be empty")


def make_config(config: Optional[MutantConfig] = None, **overrides) -> MutantConfig:
    """Return `config` (or the defaults) with keyword overrides applied."""
    base = config if config is not None else MutantConfig()
    return replace(base, **overrides) if overrides else base
