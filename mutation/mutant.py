# mutation/mutant.py

"""
Mutant records
==============

A Mutant pairs an untouched copy of the original trace with its
fault-injected variant, the indices that were corrupted and the CRF kind
applied. MutantMetrics aggregates a batch of mutants for reporting.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from model.trace import Trace
from .kinds import CRFKind


@dataclass(frozen=True)
class Mutant:
    original_trace: Trace
    mutated_trace: Trace
    injection_points: Tuple[int, ...]
    crf_type: CRFKind
    expected_bad_state: bool
    # per-index kinds actually applied; compound mutants may list several
    position_kinds: Mapping[int, Tuple[CRFKind, ...]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "originalTrace": [ev.to_dict() for ev in self.original_trace],
            "mutatedTrace": [ev.to_dict() for ev in self.mutated_trace],
            "injectionPoints": list(self.injection_points),
            "crfType": self.crf_type.value,
            "expectedBadState": self.expected_bad_state,
            "positionKinds": {
                str(pos): [k.value for k in kinds] for pos, kinds in self.position_kinds.items()
            },
        }

    def __str__(self) -> str:
        return (
            f"Mutant({self.crf_type}, len={len(self.mutated_trace)}, "
            f"points={list(self.injection_points)})"
        )


@dataclass(frozen=True)
class MutantMetrics:
    total_mutants: int
    expected_violations: int
    average_injection_points: float
    crf_distribution: Mapping[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalMutants": self.total_mutants,
            "expectedViolations": self.expected_violations,
            "averageInjectionPoints": self.average_injection_points,
            "crfDistribution": dict(self.crf_distribution),
        }
