# parser/cost_grammar.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Scanner for the two accepted cost-annotation encodings

"""Cost-annotation grammar, version 1.

Two encodings are accepted anywhere inside an identifier, keyword matched
case-insensitively:

Colon form::

    SETCOST (COLON | SPACE)* INT          e.g. "setCost:10", "SETCOST 5", "setCost-3"

Call form::

    SETCOST SPACE* LPAREN SPACE* INT SPACE* RPAREN
                                          e.g. "setCost(10)", "setCost ( -2 )"

Action type identifiers are searched for the colon form across the whole
string first, then for the call form. Plain-string actions accept the call
form only. Scanning never raises; a missing annotation yields ``None``.
"""

from typing import List, Optional

from .cost_lexer import CostLexer

GRAMMAR_VERSION = 1

_SEPARATORS = ("COLON", "SPACE")


def _tokenize(text: str) -> List:
    return list(CostLexer().tokenize(text))


def _skip(tokens: List, pos: int, kinds) -> int:
    while pos < len(tokens) and tokens[pos].type in kinds:
        pos += 1
    return pos


def _expect(tokens: List, pos: int, kind: str) -> bool:
    return pos < len(tokens) and tokens[pos].type == kind


def _colon_form(tokens: List) -> Optional[int]:
    for index, tok in enumerate(tokens):
        if tok.type != "SETCOST":
            continue
        pos = _skip(tokens, index + 1, _SEPARATORS)
        if _expect(tokens, pos, "INT"):
            return int(tokens[pos].value)
    return None


def _call_form(tokens: List) -> Optional[int]:
    for index, tok in enumerate(tokens):
        if tok.type != "SETCOST":
            continue
        pos = _skip(tokens, index + 1, ("SPACE",))
        if not _expect(tokens, pos, "LPAREN"):
            continue
        pos = _skip(tokens, pos + 1, ("SPACE",))
        if not _expect(tokens, pos, "INT"):
            continue
        value = int(tokens[pos].value)
        pos = _skip(tokens, pos + 1, ("SPACE",))
        if _expect(tokens, pos, "RPAREN"):
            return value
    return None


def scan_type_identifier(text: str) -> Optional[int]:
    """Return the cost encoded in an action type identifier, if any."""
    tokens = _tokenize(text)
    cost = _colon_form(tokens)
    if cost is not None:
        return cost
    return _call_form(tokens)


def scan_call_form(text: str) -> Optional[int]:
    """Return the cost encoded as ``setCost(N)`` in `text`, if any."""
    return _call_form(_tokenize(text))
