from __future__ import annotations

import math
from fractions import Fraction


def approximate_fraction(value: float, tol: float = 0.01) -> Fraction:
    """Simplest fraction (smallest denominator) within ``tol`` of ``value``."""

    if not math.isfinite(value):
        raise ValueError(f"Cannot approximate non-finite value {value!r} by a fraction.")
    if tol <= 0:
        return Fraction(value).limit_denominator()

    denominator = 1
    while True:
        numerator = round(value * denominator)
        if abs(value - numerator / denominator) <= tol:
            return Fraction(numerator, denominator)
        denominator += 1


def format_fraction(value: float, tol: float = 0.01, *, latex: bool = False) -> str:
    """
    Display form of ``value``: an integer when it is within ``tol`` of one,
    otherwise a signed fraction ("-3/4", or "-\\frac{3}{4}" with ``latex``).
    Used for display only; tableau arithmetic stays in floating point.
    """

    frac = approximate_fraction(value, tol)
    if frac.denominator == 1:
        return str(frac.numerator)

    sign = "-" if frac.numerator < 0 else ""
    num = abs(frac.numerator)
    if latex:
        return f"{sign}\\frac{{{num}}}{{{frac.denominator}}}"
    return f"{sign}{num}/{frac.denominator}"
