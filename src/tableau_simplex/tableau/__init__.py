"""Tableau state and the operations that mutate it."""

from .editing import adjust_objective_row, drop_columns, replace_objective_row
from .pivoting import eliminate_pivot_column, normalize_pivot_row, pivot
from .selection import (
    EntrySelection,
    ExitSelection,
    ratio_test,
    select_entry_variable,
    select_exit_variable,
)
from .state import TableState

__all__ = [
    "TableState",
    "EntrySelection",
    "ExitSelection",
    "select_entry_variable",
    "select_exit_variable",
    "ratio_test",
    "normalize_pivot_row",
    "eliminate_pivot_column",
    "pivot",
    "adjust_objective_row",
    "drop_columns",
    "replace_objective_row",
]
