"""Entering-column and leaving-row selection for a simplex tableau."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import numpy as np

from ..exceptions import (
    InvalidCriterion,
    InvalidTableau,
    PivotColumnNotSet,
    PivotSequenceError,
    Unbounded,
)
from ..schemas import EntryCriterion, PivotStage
from .state import TableState

logger = logging.getLogger(__name__)

_ENTRY_STAGES = frozenset(
    {PivotStage.UNSET, PivotStage.COLUMN_CHOSEN, PivotStage.ELIMINATED, PivotStage.OPTIMAL}
)


@dataclass(frozen=True)
class EntrySelection:
    column: Optional[int]
    label: Optional[str]

    @property
    def optimal(self) -> bool:
        return self.column is None


@dataclass(frozen=True)
class ExitSelection:
    row: int
    leaving: str
    entering: str
    ratios: Dict[int, float]


def coerce_criterion(criterion: Union[EntryCriterion, str]) -> EntryCriterion:
    if isinstance(criterion, EntryCriterion):
        return criterion
    try:
        return EntryCriterion(criterion)
    except ValueError as exc:
        raise InvalidCriterion(criterion) from exc


def select_entry_variable(
    state: TableState,
    criterion: Union[EntryCriterion, str] = EntryCriterion.MOST_NEGATIVE,
    *,
    tol: float = 0.0,
) -> EntrySelection:
    """
    Pick the entering column from the objective row.

    The self-label column and the RHS are excluded. With ``MOST_NEGATIVE`` the
    smallest coefficient enters unless it is ``>= -tol``; with ``MOST_POSITIVE``
    the largest enters unless it is ``<= tol``. Ties go to the leftmost column.
    When nothing qualifies the tableau is optimal: the pivot selection is cleared
    and the returned selection has ``optimal`` set.
    """

    rule = coerce_criterion(criterion)
    if state.stage not in _ENTRY_STAGES:
        raise PivotSequenceError(
            f"Cannot choose an entering variable at stage '{state.stage.value}'; "
            "finish the current pivot first."
        )

    costs = state.matrix[0, 1:-1]
    if costs.size == 0:
        return _mark_optimal(state, "no decision columns")

    if rule is EntryCriterion.MOST_NEGATIVE:
        idx = int(np.argmin(costs))
        if costs[idx] >= -tol:
            return _mark_optimal(state, "no negative coefficient in the objective row")
    else:
        idx = int(np.argmax(costs))
        if costs[idx] <= tol:
            return _mark_optimal(state, "no positive coefficient in the objective row")

    column = idx + 1
    state._set_pivot(None, column, PivotStage.COLUMN_CHOSEN)
    logger.info("Entering: %s (coefficient %g)", state.columns[column], costs[idx])
    return EntrySelection(column=column, label=state.columns[column])


def _mark_optimal(state: TableState, reason: str) -> EntrySelection:
    state._set_pivot(None, None, PivotStage.OPTIMAL)
    logger.info("Optimal tableau: %s.", reason)
    return EntrySelection(column=None, label=None)


def ratio_test(state: TableState, column: int, *, tol: float = 0.0) -> Tuple[int, Dict[int, float]]:
    """
    Minimum-ratio test over the constraint rows for ``column``.

    Only rows whose entry exceeds ``tol`` take part. Returns the winning row and
    the ratio of every candidate row; equal minima resolve to the lowest row.
    """

    entries = state.matrix[1:, column]
    rhs = state.matrix[1:, -1]
    ratios: Dict[int, float] = {}
    for offset, value in enumerate(entries):
        if value > tol:
            ratios[offset + 1] = float(rhs[offset] / value)
    if not ratios:
        raise Unbounded(state.columns[column])

    best_row = min(ratios, key=lambda row: (ratios[row], row))
    return best_row, ratios


def select_exit_variable(state: TableState, *, tol: float = 0.0) -> ExitSelection:
    """
    Pick the leaving row for the chosen column and make the entering variable
    basic in it. The displaced variable is reported on the returned selection.
    """

    column = state.pivot_column
    if column is None:
        raise PivotColumnNotSet()
    if state.stage is not PivotStage.COLUMN_CHOSEN:
        raise PivotSequenceError(
            f"Cannot choose a leaving variable at stage '{state.stage.value}'; "
            "it needs a freshly chosen entering column."
        )

    try:
        row, ratios = ratio_test(state, column, tol=tol)
    except Unbounded:
        state._advance(PivotStage.UNBOUNDED)
        logger.info("Unbounded: no candidate row for %s", state.columns[column])
        raise
    leaving = state.variables[row]
    entering = state.columns[column]
    if entering in state.variables:
        raise InvalidTableau(
            f"Entering variable '{entering}' is already basic in row {state.variables.index(entering)}."
        )

    state.variables[row] = entering
    state._set_pivot(row, column, PivotStage.ROW_CHOSEN)
    logger.info("Leaving: %s\tratios by row: %s", leaving, ratios)
    return ExitSelection(row=row, leaving=leaving, entering=entering, ratios=ratios)
