# mutation/kinds.py

"""
Common Robustness Failure kinds injected into traces.
"""

from enum import Enum
from typing import Union

from .exceptions import UnknownCRFTypeError


class CRFKind(str, Enum):
    """Fault class injected by a mutant."""
    WM = "WM"  # wrong message: event identifier replaced
    WP = "WP"  # wrong payload: message replaced by a malformed shape
    MM = "MM"  # missing message: element replaced by a timeout marker

    def __str__(self) -> str:
        return self.value


def parse_crf_kind(kind: Union["CRFKind", str]) -> CRFKind:
    """Return the CRFKind for `kind`, raising UnknownCRFTypeError if unrecognized."""
    if isinstance(kind, CRFKind):
        return kind
    try:
        return CRFKind(kind)
    except ValueError:
        raise UnknownCRFTypeError(f"Unknown CRF type: {kind}") from None
