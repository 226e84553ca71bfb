"""Gauss-Jordan pivot steps."""

from __future__ import annotations

import logging
from typing import Tuple

from ..exceptions import PivotNotSet, PivotSequenceError, ZeroPivot
from ..schemas import PivotStage
from .state import TableState

logger = logging.getLogger(__name__)


def _require_pivot(state: TableState, stage: PivotStage, action: str) -> Tuple[int, int]:
    row, column = state.pivot_row, state.pivot_column
    if row is None or column is None:
        raise PivotNotSet()
    if state.stage is not stage:
        raise PivotSequenceError(
            f"Cannot {action} at stage '{state.stage.value}'; expected stage '{stage.value}'."
        )
    return row, column


def normalize_pivot_row(state: TableState) -> TableState:
    """Divide the pivot row by the pivot element so that it becomes 1."""

    row, column = _require_pivot(state, PivotStage.ROW_CHOSEN, "normalize the pivot row")
    pivot = state.matrix[row, column]
    if pivot == 0:
        raise ZeroPivot(row, column)

    state.matrix[row, :] = state.matrix[row, :] / pivot
    state._advance(PivotStage.NORMALIZED)
    logger.debug("Normalized row %d (%s) by pivot %g", row, state.variables[row], pivot)
    return state


def eliminate_pivot_column(state: TableState) -> TableState:
    """Zero the pivot column in every row other than the pivot row."""

    pivot_row, column = _require_pivot(state, PivotStage.NORMALIZED, "eliminate the pivot column")
    matrix = state.matrix
    source = matrix[pivot_row, :].copy()

    for i in range(matrix.shape[0]):
        if i == pivot_row:
            continue
        factor = matrix[i, column]
        if factor != 0:
            matrix[i, :] = matrix[i, :] - factor * source

    state._advance(PivotStage.ELIMINATED)
    logger.debug("Eliminated column %s using row %d", state.columns[column], pivot_row)
    return state


def pivot(state: TableState) -> TableState:
    """Normalize then eliminate around the selected pivot element."""
    normalize_pivot_row(state)
    return eliminate_pivot_column(state)
