# MathEngine.py
"""""
Core calculation engine for the Postfix Calculator.

Pipeline
--------
1) Preprocessor: closes unbalanced '(' at the end of the input.
2) Lexer: converts the string into a flat list of tokens.
3) Parser: shunting-yard, infix tokens -> postfix tokens.
4) Evaluator: runs the postfix tokens on a numeric stack.
5) Rounding: the result is rounded to `fix` decimal places.

Formatting helpers (radix, thousands separators) and the help text live here
as well, so the command line and the UI render results the same way.
"""""

import logging
import math

from . import error as E
from . import Preprocessor
from . import Lexer
from . import Parser
from . import Evaluator
from . import ScientificEngine

logger = logging.getLogger(__name__)

DEFAULT_FIX = 10
DEFAULT_BASE = 10

RADIX_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


# -----------------------------
# Utilities / small helpers
# -----------------------------

def clean_input(problem):
    """Remove every whitespace character; the pipeline never sees blanks."""
    return "".join(problem.split())


def round_to_fix(value, fix):
    """Round value to `fix` decimal places.

    Python's round() works on the exact binary value and breaks exact ties to
    even, which is what formatting with `fix` decimals and parsing the string
    back would give: round_to_fix(2.5, 0) == 2.0, round_to_fix(0.125, 2) == 0.12.
    """
    if fix < 0:
        raise E.ConfigurationError(f"Invalid number of decimal places: {fix}", code="5000")
    if not math.isfinite(value):
        return value
    return float(round(value, fix))


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(problem, prev_ans=None, fix=DEFAULT_FIX, radian_mode=False):
    """Main API: balance -> lex -> postfix -> evaluate -> round.

    Returns a float. Raises HelpRequested for "help" and one of the MathError
    subclasses for malformed input; the error carries the original equation.
    """
    cleaned = clean_input(problem)
    try:
        if cleaned == "help":
            raise E.HelpRequested(help_text())
        if not cleaned:
            return 0.0

        balanced = Preprocessor.autobalance_parens(cleaned)
        lexed = Lexer.lexer(balanced, prev_ans)
        postfixed = Parser.to_postfix(lexed)
        evaled = Evaluator.eval_postfix(postfixed, radian_mode)
        ergebnis = round_to_fix(evaled, fix)
        logger.debug("%r = %r (raw %r)", problem, ergebnis, evaled)
        return ergebnis

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    # Convert unexpected Python exceptions to our unified error type
    except (ArithmeticError, ValueError, TypeError) as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem) from e


def calculate(problem, prev_ans=None, configuration=None):
    """Evaluate with the settings of a config_manager.Configuration."""
    if configuration is None:
        return evaluate(problem, prev_ans)
    return evaluate(problem, prev_ans, fix=configuration.fix, radian_mode=configuration.radian_mode)


# -----------------------------
# Result formatting
# -----------------------------

def radix_fmt(number, base=DEFAULT_BASE, fix=DEFAULT_FIX):
    """Render number in radix `base` with at most `fix` fractional digits."""
    if not 2 <= base <= 36:
        raise E.ConfigurationError("Base too large! Accepted ranges: 2 - 36", code="5001")

    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if math.isnan(number):
        return "nan"

    sign = "-" if number < 0 else ""

    if base == 10:
        # Decimal output goes through float formatting to avoid binary artifacts
        rendered = f"{abs(number):.{fix}f}"
        if "." in rendered:
            rendered = rendered.rstrip("0").rstrip(".")
        return sign + rendered

    integral = int(abs(number))
    obase_int = ""
    while integral >= base:
        obase_int = RADIX_DIGITS[integral % base] + obase_int
        integral //= base
    obase_int = RADIX_DIGITS[integral] + obase_int

    fract = abs(number) - int(abs(number))
    obase_fract = ""
    while fract != 0 and len(obase_fract) < fix:
        fract *= base
        digit = int(fract)
        obase_fract += RADIX_DIGITS[digit]
        fract -= digit

    if obase_fract:
        return f"{sign}{obase_int}.{obase_fract}"
    return sign + obase_int


def thousand_sep(digits):
    """Insert ',' every three digits, counting from the right."""
    result = []
    for i, current_char in enumerate(reversed(digits)):
        if i % 3 == 0 and i != 0 and current_char != "-":
            result.append(",")
        result.append(current_char)
    return "".join(reversed(result))


def format_result(ans, base=DEFAULT_BASE, fix=DEFAULT_FIX):
    """Display form of a result: separators, right aligned integral part."""
    ans_string = radix_fmt(ans, base, fix)
    if "." in ans_string:
        integral, fraction = ans_string.split(".")
        return f"{thousand_sep(integral):>10}.{fraction}"
    return f"{thousand_sep(ans_string):>10}"


def help_text():
    """Usage text listing constants, functions and operators."""
    unary = sorted(name for name, (arity, _) in ScientificEngine.FUNCTIONS.items() if arity == 1)
    binary = sorted(name for name, (arity, _) in ScientificEngine.FUNCTIONS.items() if arity == 2)
    constants = sorted(name for name in ScientificEngine.CONSTANTS if name.isascii())

    lines = [
        "Postfix Calculator",
        "",
        "Constants",
        "  " + ", ".join(constants),
        "",
        "Functions (one argument)",
        "  " + ", ".join(f"{name}(x)" for name in unary),
        "",
        "Functions (two arguments)",
        "  " + ", ".join(f"{name}(x, y)" for name in binary),
        "",
        "Operators",
        "  + - * / ^ (** is the same as ^), unary -",
        "",
        "Other",
        "  _       previous answer",
        "  2pi     implicit multiplication",
        "  sin(30  unclosed parentheses are closed automatically",
    ]
    return "\n".join(lines)
