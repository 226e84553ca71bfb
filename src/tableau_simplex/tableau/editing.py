"""Objective-row and column edits used between simplex phases."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import numpy as np

from ..exceptions import (
    InvalidReplacementShape,
    InvalidTableau,
    UnknownVariable,
    VariableNotBasic,
    ZeroCoefficient,
)
from .state import TableState

logger = logging.getLogger(__name__)


def adjust_objective_row(state: TableState, variable: str) -> TableState:
    """
    Remove ``variable``'s coefficient from the objective row by subtracting a
    multiple of the row where it is basic. Typically used for artificial
    variables before starting phase one, or for basic variables after the
    phase-two objective is installed.
    """

    state.require_settled("adjust the objective row")
    if variable not in state.columns:
        raise UnknownVariable([variable])
    col = state.columns.index(variable)

    if variable not in state.variables[1:]:
        raise VariableNotBasic(variable)
    row = state.variables.index(variable, 1)

    coef = state.matrix[row, col]
    if coef == 0:
        raise ZeroCoefficient(variable)

    factor = state.matrix[0, col] / coef
    state.matrix[0, :] = state.matrix[0, :] - state.matrix[row, :] * factor
    state.clear_pivot()
    logger.debug("Adjusted objective row for %s using row %d (factor %g)", variable, row, factor)
    return state


def drop_columns(state: TableState, names: Iterable[str]) -> TableState:
    """
    Return a new tableau without the named columns. The input is left untouched
    and the result has no pivot selected.
    """

    state.require_settled("drop columns")
    to_drop = set(names)
    missing = sorted(to_drop.difference(state.columns))
    if missing:
        raise UnknownVariable(missing)
    if state.columns[0] in to_drop:
        raise InvalidTableau(f"Cannot drop the objective column '{state.columns[0]}'.")
    for row, label in enumerate(state.variables[1:], start=1):
        if label in to_drop:
            raise InvalidTableau(
                f"Column '{label}' is still basic in row {row}; pivot it out before dropping it."
            )

    keep = [idx for idx, label in enumerate(state.columns) if label not in to_drop]
    matrix = state.matrix[:, keep + [state.matrix.shape[1] - 1]]
    columns = [state.columns[idx] for idx in keep]
    # Basic columns were rejected above, so every row label carries over.
    variables = list(state.variables)
    logger.debug("Dropped columns %s", sorted(to_drop))
    return TableState(columns, variables, matrix)


def replace_objective_row(state: TableState, label: str, row: Any) -> TableState:
    """Install a new objective row and rename the objective label."""

    state.require_settled("replace the objective row")
    values = np.asarray(row, dtype=float)
    expected = state.matrix.shape[1]
    if values.ndim == 2 and 1 in values.shape:
        values = values.reshape(-1)
    if values.ndim != 1:
        raise InvalidReplacementShape(expected, int(values.size))
    if values.size != expected:
        raise InvalidReplacementShape(expected, int(values.size))
    if label in state.columns[1:]:
        raise InvalidTableau(f"Objective label '{label}' is already used by another column.")
    if label in state.variables[1:]:
        raise InvalidTableau(f"Objective label '{label}' is already a basic variable.")

    state.matrix[0, :] = values
    state.columns[0] = label
    state.variables[0] = label
    state.clear_pivot()
    logger.debug("Replaced objective row with '%s'", label)
    return state
