# parser/__init__.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Cost-annotation tokenization and scanning

"""Cost-annotation parsing for action identifiers.

Host machines commonly encode a transition's cost inside an action's type
identifier, e.g. ``"setCost:10"`` or ``"setCost(10)"``. This module turns that
implicit convention into an explicit, versioned grammar: a SLY lexer
tokenizes the identifier and a scanner looks for the two accepted encodings.

Core Functions:
    scan_type_identifier: Cost in an action type identifier (colon form, then call form)
    scan_call_form: Cost written as ``setCost(N)``

Example:
    >>> from parser import scan_type_identifier
    >>> scan_type_identifier("billing.setCost: 25")
    25
"""

from .cost_grammar import GRAMMAR_VERSION, scan_call_form, scan_type_identifier
from .cost_lexer import CostLexer

__all__ = ["GRAMMAR_VERSION", "scan_call_form", "scan_type_identifier", "CostLexer"]

__version__ = "1.0.0"
__description__ = "Cost-annotation grammar for action identifiers"
