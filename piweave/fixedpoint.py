import logging
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from fractions import Fraction


logger = logging.getLogger(__name__)

MAX_NEWTON_ITERATIONS = 10_000


class ConvergenceError(ArithmeticError):
    pass


def arithmetic_context() -> Context:
    return Context(
        prec=MAX_PREC,
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
    )


def fixed_divide(numerator, denominator, places: int) -> Decimal:
    places = int(places)
    if places < 0:
        raise ValueError("places must be >= 0")
    quotient = Fraction(numerator) / Fraction(denominator)
    scaled = round(quotient * 10**places)
    return Decimal(scaled).scaleb(-places, context=arithmetic_context())


def factorial(n: int) -> Decimal:
    n = int(n)
    if n < 0:
        raise ValueError("n must be >= 0")
    result = Decimal(1)
    with localcontext(arithmetic_context()):
        for i in range(n, 1, -1):
            result *= i
    return result


def sqrt_newton(c, target, places: int, seed=1, max_iterations: int = MAX_NEWTON_ITERATIONS) -> Decimal:
    c = Decimal(c)
    target = Decimal(target)
    x = Decimal(seed)
    if c <= 0:
        raise ValueError("c must be > 0")
    if target <= 0:
        raise ValueError("target must be > 0")
    if x <= 0:
        raise ValueError("seed must be > 0")
    with localcontext(arithmetic_context()):
        for iteration in range(1, int(max_iterations) + 1):
            x = x - fixed_divide(x * x - c, 2 * x, places)
            if abs(x * x - c) < target:
                logger.debug("sqrt(%s) converged after %d iterations", c, iteration)
                return x
    raise ConvergenceError(f"sqrt({c}) did not reach {target} within {max_iterations} iterations")
