# Lexer.py
"""""
Token types and the lexer.

The lexer turns a balanced, whitespace-free string into a flat token list.
Implicit multiplication is inserted here, before the parser resolves
precedence: "e2" -> e * 2, "2(3+4)" -> 2 * (3+4).
"""""

import logging

from . import ScientificEngine
from . import error as E

logger = logging.getLogger(__name__)

LEFT = "left"
RIGHT = "right"

PREV_ANSWER_SYMBOL = "_"
DIGITS = "0123456789"


# -----------------------------
# Token types
# -----------------------------

class Token:
    """Base class; tokens compare by type and payload."""
    __slots__ = ()

    def _key(self):
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} tokens are immutable")

    def __repr__(self):
        return type(self).__name__ + "()"


class Number(Token):
    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", float(value))

    def _key(self):
        return (self.value,)

    def __repr__(self):
        return f"Number({self.value!r})"


class PrevAnswer(Number):
    """The '_' placeholder, already resolved to the caller's previous answer."""
    __slots__ = ()

    def __repr__(self):
        return f"PrevAnswer({self.value!r})"


class Constant(Token):
    __slots__ = ("name", "value")

    def __init__(self, name, value):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "value", float(value))

    def _key(self):
        return (self.name,)

    def __repr__(self):
        return f"Constant({self.name!r})"


class Operator(Token):
    __slots__ = ("symbol", "precedence", "associativity", "arity", "function")

    def __init__(self, symbol, precedence, associativity, arity, function):
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "precedence", precedence)
        object.__setattr__(self, "associativity", associativity)
        object.__setattr__(self, "arity", arity)
        object.__setattr__(self, "function", function)

    @property
    def is_left_associative(self):
        return self.associativity == LEFT

    def _key(self):
        return (self.symbol, self.arity)

    def __repr__(self):
        if self.arity == 1:
            return f"Operator({self.symbol!r}, unary)"
        return f"Operator({self.symbol!r})"


class Function(Token):
    __slots__ = ("name", "arity")

    def __init__(self, name, arity):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "arity", arity)

    def _key(self):
        return (self.name,)

    def __repr__(self):
        return f"Function({self.name!r})"


class LParen(Token):
    __slots__ = ()


class RParen(Token):
    __slots__ = ()


class Comma(Token):
    __slots__ = ()


# -----------------------------
# Token tables
# -----------------------------

OPERATORS = {
    "+": Operator("+", 2, LEFT, 2, ScientificEngine.add),
    "-": Operator("-", 2, LEFT, 2, ScientificEngine.subtract),
    "*": Operator("*", 3, LEFT, 2, ScientificEngine.multiply),
    "/": Operator("/", 3, LEFT, 2, ScientificEngine.divide),
    "^": Operator("^", 4, RIGHT, 2, ScientificEngine.power),
}

# Produced by the parser for a '-' in prefix position; binds tighter than '^'
UNARY_MINUS = Operator("-", 5, RIGHT, 1, ScientificEngine.negate)

FUNCTIONS = {name: Function(name, arity) for name, (arity, _) in ScientificEngine.FUNCTIONS.items()}


def is_function(name):
    return name in FUNCTIONS or name in ScientificEngine.FUNCTION_ALIASES


def get_function(name):
    return FUNCTIONS[ScientificEngine.FUNCTION_ALIASES.get(name, name)]


# -----------------------------
# Lexer
# -----------------------------

def _ends_operand(token):
    return isinstance(token, (Number, Constant, RParen))


def _push_operand(result, token):
    """Append an operand-like token, inserting '*' after a preceding operand."""
    if result and _ends_operand(result[-1]):
        result.append(OPERATORS["*"])
    result.append(token)


def _read_number(problem, b):
    start = b
    while b < len(problem) and (problem[b] in DIGITS or problem[b] == "."):
        b += 1
    literal = problem[start:b]
    if literal.count(".") > 1 or literal == ".":
        raise E.LexerError(f"Malformed number '{literal}'", code="3301")
    return Number(literal), b


def _read_name(problem, b):
    """Read an identifier starting at b; return (token, next_index)."""
    start = b
    while b < len(problem) and problem[b].isascii() and problem[b].isalpha():
        b += 1
    letters = problem[start:b]

    # Function names may end in digits (log10, exp2); "e2" is still e * 2
    digits_end = b
    while digits_end < len(problem) and problem[digits_end] in DIGITS:
        digits_end += 1
    if digits_end > b and problem[start:digits_end] in FUNCTIONS:
        return get_function(problem[start:digits_end]), digits_end

    # "epi" -> e, pi and "pisin" -> pi, sin: take the longest known prefix,
    # the caller reads the rest as the next name
    for end in range(len(letters), 0, -1):
        name = letters[:end]
        if name in FUNCTIONS:
            return get_function(name), start + end
        if name in ScientificEngine.CONSTANTS:
            return Constant(name, ScientificEngine.CONSTANTS[name]), start + end
    raise E.LexerError(f"Unknown function or constant '{letters}'", code="3300")


def lexer(problem, prev_ans=None):
    """Convert a balanced, whitespace-free string into a list of tokens."""
    result = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Numbers ---
        if current_char in DIGITS or current_char == ".":
            token, b = _read_number(problem, b)
            _push_operand(result, token)
            continue

        # --- Functions and constants ---
        if (current_char.isascii() and current_char.isalpha()) or current_char in ("π", "√"):
            if current_char in ("π", "√"):
                name = current_char
                b += 1
                if is_function(name):
                    token = get_function(name)
                else:
                    token = Constant("pi", ScientificEngine.CONSTANTS[name])
            else:
                token, b = _read_name(problem, b)

            if isinstance(token, Function) and (b >= len(problem) or problem[b] != "("):
                raise E.SyntaxError(f"Function '{token.name}' expected parentheses", code="3103")
            _push_operand(result, token)
            continue

        # --- Previous answer ---
        if current_char == PREV_ANSWER_SYMBOL:
            if prev_ans is None:
                raise E.LexerError("No previous answer available!", code="3302")
            _push_operand(result, PrevAnswer(prev_ans))
            b += 1
            continue

        # --- Operators ---
        if current_char == "*" and problem[b + 1:b + 2] == "*":
            result.append(OPERATORS["^"])
            b += 2
            continue
        if current_char in OPERATORS:
            result.append(OPERATORS[current_char])

        # --- Parentheses and comma ---
        elif current_char == "(":
            # A function call's '(' follows its Function token directly
            if result and isinstance(result[-1], Function):
                result.append(LParen())
            else:
                _push_operand(result, LParen())
        elif current_char == ")":
            result.append(RParen())
        elif current_char == ",":
            result.append(Comma())
        else:
            raise E.SyntaxError(f"Unexpected character '{current_char}'", code="3102")

        b += 1

    logger.debug("Lexed %r into %s", problem, result)
    return result
