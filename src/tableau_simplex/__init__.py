"""Tableau Simplex: Gauss-Jordan pivot engine for simplex tableaus."""

from .driver import basic_solution, run_simplex, solve_model, start_phase_two
from .schemas import EntryCriterion, PivotOptions, PivotStage
from .standard_form import build_tableau
from .tableau import (
    TableState,
    adjust_objective_row,
    drop_columns,
    eliminate_pivot_column,
    normalize_pivot_row,
    pivot,
    ratio_test,
    replace_objective_row,
    select_entry_variable,
    select_exit_variable,
)

__all__ = [
    "TableState",
    "EntryCriterion",
    "PivotStage",
    "PivotOptions",
    "select_entry_variable",
    "select_exit_variable",
    "ratio_test",
    "normalize_pivot_row",
    "eliminate_pivot_column",
    "pivot",
    "adjust_objective_row",
    "drop_columns",
    "replace_objective_row",
    "build_tableau",
    "run_simplex",
    "start_phase_two",
    "solve_model",
    "basic_solution",
]
