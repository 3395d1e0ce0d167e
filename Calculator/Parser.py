# Parser.py
"""""
Infix -> postfix conversion (shunting-yard).

Stacks
------
- op_stack: operators, functions and '(' waiting to be emitted
- postfixed: the output queue, in reverse-Polish order
- scopes:    one _Scope per '(' on op_stack, counting call arguments
"""""

import logging

from .Lexer import Number, Constant, Operator, Function, LParen, RParen, Comma, UNARY_MINUS
from . import error as E

logger = logging.getLogger(__name__)


class _Scope:
    """Bookkeeping for one open '('; `function` is None for a bare group."""

    def __init__(self, function, nested):
        self.function = function
        self.nested = nested
        self.arguments = 1


def _is_prefix_position(previous):
    """A '-' or '+' is unary at the start, after '(', after an operator and after ','."""
    return previous is None or isinstance(previous, (LParen, Operator, Comma))


def _pop_until_paren(op_stack, postfixed):
    """Move operators to the output until '(' is on top; False if there is none."""
    while op_stack:
        if isinstance(op_stack[-1], LParen):
            return True
        postfixed.append(op_stack.pop())
    return False


def _push_operator(op_stack, postfixed, current_op):
    while op_stack and isinstance(op_stack[-1], Operator):
        top_op = op_stack[-1]
        if top_op.precedence > current_op.precedence or (
                top_op.precedence == current_op.precedence and current_op.is_left_associative):
            postfixed.append(op_stack.pop())
        else:
            break
    op_stack.append(current_op)


def to_postfix(tokens):
    """Convert the lexer's token list into a postfix token list."""
    postfixed = []
    op_stack = []
    scopes = []
    previous = None

    for token in tokens:
        if isinstance(token, (Number, Constant)):
            postfixed.append(token)

        elif isinstance(token, Function):
            op_stack.append(token)

        elif isinstance(token, LParen):
            function = op_stack[-1] if op_stack and isinstance(op_stack[-1], Function) else None
            scopes.append(_Scope(function, nested=bool(op_stack)))
            op_stack.append(token)

        elif isinstance(token, Comma):
            if isinstance(previous, (LParen, Comma)):
                raise E.SyntaxError("Empty argument!", code="3104")
            if not _pop_until_paren(op_stack, postfixed):
                raise E.SyntaxError("Mismatched parentheses!", code="3100")
            scope = scopes[-1]
            if scope.function is None and scope.nested:
                raise E.SyntaxError("Comma without matching function call!", code="3101")
            scope.arguments += 1

        elif isinstance(token, RParen):
            if isinstance(previous, Comma):
                raise E.SyntaxError("Empty argument!", code="3104")
            if not _pop_until_paren(op_stack, postfixed):
                raise E.SyntaxError("Mismatched parentheses!", code="3100")
            op_stack.pop()
            scope = scopes.pop()
            if scope.function is not None:
                if scope.arguments < scope.function.arity:
                    raise E.ParserError(
                        f"Too few arguments ({scope.arguments}) for function {scope.function.name} "
                        f"(requires {scope.function.arity})!", code="3201")
                postfixed.append(op_stack.pop())

        elif isinstance(token, Operator):
            if _is_prefix_position(previous):
                if token.symbol == "-":
                    _push_operator(op_stack, postfixed, UNARY_MINUS)
                elif token.symbol != "+":
                    raise E.ParserError("Too many operators, Too little operands", code="3200")
                # unary '+' is the identity and produces no token
            else:
                _push_operator(op_stack, postfixed, token)

        previous = token

    while op_stack:
        top = op_stack.pop()
        if isinstance(top, LParen):
            raise E.SyntaxError("Mismatched parentheses!", code="3100")
        postfixed.append(top)

    logger.debug("Postfix: %s", postfixed)
    return postfixed
