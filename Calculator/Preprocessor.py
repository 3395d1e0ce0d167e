# Preprocessor.py
"""Paren auto-balancing, the first stage of the pipeline."""

import logging

from . import error as E

logger = logging.getLogger(__name__)


def autobalance_parens(problem):
    """Return problem with every unclosed '(' closed at the end.

    A ')' without a matching '(' can never be repaired and raises a
    SyntaxError right away. Truncated input such as "tan(45" becomes "tan(45)".
    """
    depth = 0
    for current_char in problem:
        if current_char == '(':
            depth += 1
        elif current_char == ')':
            depth -= 1
            if depth < 0:
                raise E.SyntaxError("Mismatched parentheses!", code="3100")

    if depth > 0:
        logger.debug("Closing %d open parenthes(es) in %r", depth, problem)
        return problem + ")" * depth
    return problem
