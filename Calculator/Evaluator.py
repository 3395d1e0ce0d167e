# Evaluator.py
"""Postfix evaluation on a numeric stack."""

import logging

from .Lexer import Number, Constant, Operator, Function
from . import ScientificEngine
from . import error as E

logger = logging.getLogger(__name__)


def _pop_operands(num_stack, count):
    """Pop `count` values, returned in push order (left operand first)."""
    if len(num_stack) < count:
        raise E.ParserError("Too many operators, Too little operands", code="3200")
    operands = num_stack[len(num_stack) - count:]
    del num_stack[len(num_stack) - count:]
    return operands


def eval_postfix(postfixed, radian_mode=False):
    """Evaluate a postfix token list and return the single resulting float.

    Division by zero and domain errors are not errors here: they produce
    inf or nan the way IEEE floats do.
    """
    num_stack = []

    for token in postfixed:
        if isinstance(token, (Number, Constant)):
            num_stack.append(token.value)

        elif isinstance(token, Operator):
            operands = _pop_operands(num_stack, token.arity)
            num_stack.append(float(token.function(*operands)))

        elif isinstance(token, Function):
            operands = _pop_operands(num_stack, token.arity)
            num_stack.append(ScientificEngine.apply_function(token.name, operands, radian_mode))

        else:
            # '(' , ')' and ',' never reach the postfix sequence
            raise E.ParserError(f"Unexpected token in postfix expression: {token!r}", code="3200")

    if len(num_stack) != 1:
        raise E.ParserError("Too many operators, Too little operands", code="3200")

    logger.debug("Evaluated %s to %r", postfixed, num_stack[0])
    return num_stack[0]
