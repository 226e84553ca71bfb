"""Errors raised by the tableau pivot engine."""

from __future__ import annotations

from typing import Iterable, Tuple


class TableauError(ValueError):
    """Base class for every failure signalled by a tableau operation."""


class InvalidTableau(TableauError):
    """Labels or matrix dimensions break a tableau invariant."""


class PivotSequenceError(TableauError):
    """An operation was called out of order with respect to the pivot stage."""


class PivotColumnNotSet(TableauError):
    def __init__(self) -> None:
        super().__init__("No pivot column has been selected; choose an entering variable first.")


class PivotNotSet(TableauError):
    def __init__(self) -> None:
        super().__init__("Pivot row and column must both be selected before this step.")


class ZeroPivot(TableauError):
    def __init__(self, row: int, column: int) -> None:
        self.row = row
        self.column = column
        super().__init__(f"Pivot element at row {row}, column {column} is zero; cannot divide.")


class Unbounded(TableauError):
    """No constraint row bounds the entering variable."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(
            f"No candidate rows: column '{column}' has no positive entry, the problem is unbounded."
        )


class UnknownVariable(TableauError):
    def __init__(self, names: Iterable[str]) -> None:
        self.names: Tuple[str, ...] = tuple(names)
        listed = ", ".join(f"'{name}'" for name in self.names)
        super().__init__(f"Unknown column(s) {listed} in tableau.")


class VariableNotBasic(TableauError):
    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"Variable '{variable}' is not basic in any constraint row.")


class ZeroCoefficient(TableauError):
    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(
            f"Variable '{variable}' has a zero coefficient in its basic row; cannot eliminate it."
        )


class InvalidReplacementShape(TableauError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Objective row must have {expected} entries, got {actual}.")


class InvalidCriterion(TableauError):
    def __init__(self, criterion: object) -> None:
        self.criterion = criterion
        super().__init__(
            f"Unknown entry criterion {criterion!r}; expected 'most_negative' or 'most_positive'."
        )
