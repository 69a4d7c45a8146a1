# model/exceptions.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Exceptions raised by the reference host machine adapter

"""Domain-specific exceptions for host machine handling.

The extractor treats :class:`InvalidTransitionError` as an expected outcome
of probing a node with one of its events; it never reaches callers of the
extraction API.
"""


class InvalidTransitionError(RuntimeError):
    """Raised when a machine cannot take an event from a given state."""

    pass


class MachineDefinitionError(ValueError):
    """Raised when a machine definition is structurally malformed."""

    pass
