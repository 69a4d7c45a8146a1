# parser/cost_lexer.py
# This file is part of Raten - Robustness-Aware Test Suite Reduction
#
# Lexical analyzer for cost annotations embedded in action identifiers using SLY

"""Lexical analyzer for cost annotations.

Action identifiers are free-form strings; only the ``setCost`` keyword, signed
integers and the punctuation around them are meaningful. Every other character
is emitted as an ``OTHER`` token so that tokenization never fails and token
adjacency mirrors character adjacency in the source string.

Tokens (matched case-insensitively, in this order):
- SETCOST: the keyword ``setCost``
- INT: signed integer literal
- COLON, LPAREN, RPAREN: punctuation
- SPACE: a single whitespace character
- OTHER: any remaining character
"""

import re

from sly import Lexer


class CostLexer(Lexer):
    """SLY-based lexer for cost annotation tokenization.

    Whitespace is tokenized rather than ignored because the colon form
    accepts separators only between the keyword and the number.
    """

    tokens = {
        "SETCOST",
        "INT",
        "COLON",
        "LPAREN",
        "RPAREN",
        "SPACE",
        "OTHER",
    }

    reflags = re.IGNORECASE

    SETCOST = r"setcost"
    INT = r"-?\d+"
    COLON = r":"
    LPAREN = r"\("
    RPAREN = r"\)"
    SPACE = r"\s"
    OTHER = r"."

    def error(self, t):
        """Skip a character no rule matched.

        OTHER matches everything but newlines and SPACE covers those, so this
        is reached only for exotic input.
        """
        # utils imports model, and model.action imports this package
        from utils.logger import get_logger

        get_logger().debug(f"Skipping unmatched character {t.value[0]!r} at {self.index}")
        self.index += 1
