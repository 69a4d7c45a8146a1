# mutation/__init__.py

"""Fault-injected trace variants for validating reduced test suites.

This package provides:
  • CRFKind: the injected fault classes (WM, WP, MM)
  • MutantConfig: pools, rates and positions for a mutation call
  • generate_mutant / generate_compound_mutant / batch_generate_mutants
  • calculate_mutant_metrics: aggregate figures for a batch
  • UnknownCRFTypeError: raised for unrecognized kinds
"""

from .config import (
    MutantConfig,
    MUTATION_DEFAULTS,
    DEFAULT_WRONG_MESSAGES,
    DEFAULT_WRONG_PAYLOADS,
    UNDEFINED,
    make_config,
)
from .exceptions import UnknownCRFTypeError
from .kinds import CRFKind, parse_crf_kind
from .mutant import Mutant, MutantMetrics
from .generators import (
    select_positions,
    generate_wm_mutant,
    generate_wp_mutant,
    generate_mm_mutant,
    generate_mutant,
    generate_compound_mutant,
    batch_generate_mutants,
    calculate_mutant_metrics,
)

__all__ = [
    "MutantConfig",
    "MUTATION_DEFAULTS",
    "DEFAULT_WRONG_MESSAGES",
    "DEFAULT_WRONG_PAYLOADS",
    "UNDEFINED",
    "make_config",
    "UnknownCRFTypeError",
    "CRFKind",
    "parse_crf_kind",
    "Mutant",
    "MutantMetrics",
    "select_positions",
    "generate_wm_mutant",
    "generate_wp_mutant",
    "generate_mm_mutant",
    "generate_mutant",
    "generate_compound_mutant",
    "batch_generate_mutants",
    "calculate_mutant_metrics",
]
