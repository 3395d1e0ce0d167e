# ScientificEngine.py
"""""
Numeric kernels for the calculator's functions, operators and constants.

Every kernel follows IEEE floating point semantics instead of raising:
division by zero gives inf/nan, domain errors give nan, overflow gives inf.
The math module raises for those cases, so the kernels translate.
"""""

import math
from decimal import Decimal, ROUND_HALF_UP

inf = math.inf
nan = math.nan

CONSTANTS = {
    "e": math.e,
    "pi": math.pi,
    "π": math.pi,
}

# Forward trig functions that read their argument in degrees unless radian mode is on
ANGLE_FUNCTIONS = ["sin", "cos", "tan", "csc", "sec", "cot"]


# -----------------------------
# Operators
# -----------------------------

def add(x, y):
    return x + y


def subtract(x, y):
    return x - y


def multiply(x, y):
    return x * y


def divide(x, y):
    if y == 0:
        if x == 0 or math.isnan(x):
            return nan
        return math.copysign(inf, x) * math.copysign(1.0, y)
    return x / y


def power(base, exponent):
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and float(exponent).is_integer() and exponent % 2 == 1:
            return -inf
        return inf
    except ValueError:
        # pow(0, negative) is inf, a negative base with a fractional exponent is nan
        if base == 0:
            # -0.0 to a negative odd integer keeps the sign
            if float(exponent).is_integer() and exponent % 2 == 1:
                return math.copysign(inf, base)
            return inf
        return nan


def negate(x):
    return -x


# -----------------------------
# Functions
# -----------------------------

def _safe(function, odd=False):
    """Wrap a math function so domain errors give nan and overflow gives inf.

    Odd functions (sinh) overflow towards the sign of their argument.
    """
    def wrapper(x):
        try:
            return function(x)
        except ValueError:
            return nan
        except OverflowError:
            if odd:
                return math.copysign(inf, x)
            return inf
    wrapper.__name__ = function.__name__
    return wrapper


def ln(x):
    if x == 0:
        return -inf
    if x < 0:
        return nan
    return math.log(x)


def log(x, base):
    """Logarithm of x to an arbitrary base."""
    return divide(ln(x), ln(base))


def log10(x):
    if x == 0:
        return -inf
    if x < 0:
        return nan
    return math.log10(x)


def sqrt(x):
    if x < 0:
        return nan
    return math.sqrt(x)


def cbrt(x):
    return math.copysign(power(abs(x), 1.0 / 3.0), x)


def nroot(x, n):
    """n-th root of x; odd integer roots of negative numbers stay real."""
    if x < 0 and float(n).is_integer() and n % 2 == 1:
        return -power(-x, divide(1.0, n))
    return power(x, divide(1.0, n))


def exp2(x):
    return power(2.0, x)


def round_half_away(x):
    """round(0.5) == 1 and round(-2.5) == -3, unlike Python's round()."""
    # Floats this large have no fractional part
    if not math.isfinite(x) or abs(x) >= 2 ** 52:
        return x
    return float(Decimal(x).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _integral(function):
    # math.ceil/floor return ints and raise on inf/nan
    def wrapper(x):
        if not math.isfinite(x):
            return x
        return float(function(x))
    return wrapper


def _reciprocal(function):
    def wrapper(x):
        return divide(1.0, function(x))
    return wrapper


def _inverse_reciprocal(function):
    def wrapper(x):
        return _safe(function)(divide(1.0, x))
    return wrapper


def _acot(x):
    if x == 0:
        return math.pi / 2
    return math.atan(1.0 / x)


# name -> (arity, kernel)
FUNCTIONS = {
    "sin": (1, _safe(math.sin)),
    "cos": (1, _safe(math.cos)),
    "tan": (1, _safe(math.tan)),
    "csc": (1, _reciprocal(_safe(math.sin))),
    "sec": (1, _reciprocal(_safe(math.cos))),
    "cot": (1, _reciprocal(_safe(math.tan))),
    "sinh": (1, _safe(math.sinh, odd=True)),
    "cosh": (1, _safe(math.cosh)),
    "tanh": (1, _safe(math.tanh)),
    "asin": (1, _safe(math.asin)),
    "acos": (1, _safe(math.acos)),
    "atan": (1, _safe(math.atan)),
    "acsc": (1, _inverse_reciprocal(math.asin)),
    "asec": (1, _inverse_reciprocal(math.acos)),
    "acot": (1, _acot),
    "deg": (1, math.degrees),
    "rad": (1, math.radians),
    "sqrt": (1, sqrt),
    "cbrt": (1, cbrt),
    "ln": (1, ln),
    "log10": (1, log10),
    "exp": (1, _safe(math.exp)),
    "exp2": (1, exp2),
    "abs": (1, abs),
    "ceil": (1, _integral(math.ceil)),
    "floor": (1, _integral(math.floor)),
    "round": (1, round_half_away),
    "nroot": (2, nroot),
    "log": (2, log),
    "min": (2, min),
    "max": (2, max),
}

FUNCTION_ALIASES = {
    "√": "sqrt",
}


def arity(name):
    return FUNCTIONS[name][0]


def apply_function(name, args, radian_mode=False):
    """Run the kernel of function `name` on its already evaluated arguments."""
    kernel = FUNCTIONS[name][1]
    if name in ANGLE_FUNCTIONS and not radian_mode:
        args = [math.radians(args[0])]
    return float(kernel(*args))
