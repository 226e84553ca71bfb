from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from .exceptions import Unbounded
from .schemas import LPModel, PivotOptions, PivotRun, PivotStage, PivotStep
from .standard_form import build_tableau
from .tableau.editing import adjust_objective_row, drop_columns, replace_objective_row
from .tableau.pivoting import pivot
from .tableau.selection import select_entry_variable, select_exit_variable
from .tableau.state import TableState

logger = logging.getLogger(__name__)


def basic_solution(state: TableState) -> Dict[str, float]:
    return {label: float(state.matrix[row, -1]) for row, label in enumerate(state.variables) if row > 0}


def run_simplex(state: TableState, options: Optional[PivotOptions] = None) -> PivotRun:
    """
    Pivot ``state`` in place until the entry rule reports optimality, the ratio
    test finds no bounding row, or ``max_iters`` pivots have been applied.
    """

    opts = options or PivotOptions()
    state.require_settled("start a pivot run")
    steps: List[PivotStep] = []

    while True:
        entry = select_entry_variable(state, opts.criterion, tol=opts.tol)
        if entry.optimal:
            logger.info("Optimal after %d pivot(s); objective %g", len(steps), state.objective_value)
            return PivotRun(
                status="optimal",
                objective_value=state.objective_value,
                values=basic_solution(state),
                iterations=len(steps),
                steps=steps,
            )

        if len(steps) >= opts.max_iters:
            state.clear_pivot()
            logger.info("Iteration limit %d reached", opts.max_iters)
            return PivotRun(
                status="iteration_limit",
                objective_value=None,
                values=None,
                iterations=len(steps),
                steps=steps,
                message=f"Hit iteration limit of {opts.max_iters} pivots.",
            )

        try:
            exit_ = select_exit_variable(state, tol=opts.tol)
        except Unbounded as exc:
            logger.info("Unbounded along column %s", exc.column)
            return PivotRun(
                status="unbounded",
                objective_value=None,
                values=None,
                iterations=len(steps),
                steps=steps,
                message=str(exc),
            )

        pivot(state)
        steps.append(
            PivotStep(entering=exit_.entering, leaving=exit_.leaving, row=exit_.row, column=entry.column)
        )


def start_phase_two(
    state: TableState,
    artificial: Iterable[str],
    label: str,
    row: Sequence[float] | np.ndarray,
) -> TableState:
    """
    Drop the artificial columns, install the phase-two objective and restore
    canonical form by eliminating every basic variable from the objective row.
    """

    pruned = drop_columns(state, artificial)
    replace_objective_row(pruned, label, row)
    for variable in list(pruned.variables[1:]):
        if variable not in pruned.columns:
            continue
        if pruned.matrix[0, pruned.columns.index(variable)] != 0:
            adjust_objective_row(pruned, variable)
    return pruned


def _drive_out_artificials(state: TableState, artificial: Sequence[str], tol: float) -> TableState:
    """
    Pivot zero-level artificials out of the basis. A row with no usable
    non-artificial entry is redundant and is removed.
    """

    redundant: List[int] = []
    for row in range(1, len(state.variables)):
        if state.variables[row] not in artificial:
            continue
        candidates = [
            col
            for col in range(1, len(state.columns))
            if state.columns[col] not in artificial and abs(state.matrix[row, col]) > tol
        ]
        if not candidates:
            redundant.append(row)
            continue
        column = candidates[0]
        logger.info("Driving %s out of the basis via %s", state.variables[row], state.columns[column])
        state.variables[row] = state.columns[column]
        state._set_pivot(row, column, PivotStage.ROW_CHOSEN)
        pivot(state)
        state.clear_pivot()

    if not redundant:
        return state
    keep = [row for row in range(len(state.variables)) if row not in redundant]
    logger.info("Removing redundant row(s) %s", redundant)
    return TableState(state.columns, [state.variables[row] for row in keep], state.matrix[keep, :])


def solve_model(model: LPModel, options: Optional[PivotOptions] = None) -> PivotRun:
    """Two-phase tableau simplex for an LP over non-negative variables."""

    opts = options or PivotOptions()
    initial = build_tableau(model)
    state = initial.state
    steps: List[PivotStep] = []

    if initial.needs_phase_one:
        phase1 = run_simplex(state, opts)
        steps.extend(phase1.steps)
        if phase1.status != "optimal":
            return PivotRun(
                status=phase1.status,
                objective_value=None,
                values=None,
                iterations=phase1.iterations,
                steps=steps,
                message=f"Phase one stopped: {phase1.message or phase1.status}",
            )
        if state.objective_value < -opts.tol:
            return PivotRun(
                status="infeasible",
                objective_value=None,
                values=None,
                iterations=phase1.iterations,
                steps=steps,
                message="Infeasible.",
            )
        state = _drive_out_artificials(state, initial.artificial, opts.tol)
        state = start_phase_two(state, initial.artificial, initial.objective_label, initial.objective_row)

    remaining = max(opts.max_iters - len(steps), 1)
    phase2 = run_simplex(state, opts.model_copy(update={"max_iters": remaining}))
    steps.extend(phase2.steps)
    if phase2.status != "optimal":
        return PivotRun(
            status=phase2.status,
            objective_value=None,
            values=None,
            iterations=len(steps),
            steps=steps,
            message=phase2.message,
        )

    basics = phase2.values or {}
    values = {var.name: basics.get(var.name, 0.0) for var in model.variables}
    objective = -state.objective_value if initial.negated else state.objective_value
    return PivotRun(
        status="optimal",
        objective_value=float(objective),
        values=values,
        iterations=len(steps),
        steps=steps,
    )
