"""Read-only renderings of a tableau for consoles and LaTeX documents."""

from __future__ import annotations

from typing import Callable, List

from tabulate import tabulate

from ..tableau.state import TableState
from .rational import format_fraction

_BLUE = "\x1b[34m"
_RESET = "\x1b[0m"


def _decimal(value: float, digits: int) -> str:
    rounded = round(float(value), digits)
    if rounded == 0:
        rounded = 0.0
    return str(rounded)


def _is_pivot_cell(state: TableState, row: int, col: int) -> bool:
    return row == state.pivot_row or col == state.pivot_column


def render_table(state: TableState, *, digits: int = 3, color: bool = False) -> str:
    """
    Plain-text table with one line per row, labelled by its basic variable.
    Cells in the pivot row or pivot column are highlighted with brackets, or
    in blue when ``color`` is set; the label column is never highlighted.
    """

    headers = [""] + list(state.columns) + ["RHS"]
    rows: List[List[str]] = []
    for i, label in enumerate(state.variables):
        cells = [label]
        for j, value in enumerate(state.matrix[i]):
            text = _decimal(value, digits)
            if _is_pivot_cell(state, i, j):
                text = f"{_BLUE}{text}{_RESET}" if color else f"[{text}]"
            cells.append(text)
        rows.append(cells)

    return tabulate(
        rows,
        headers=headers,
        tablefmt="presto",
        colalign=["left"] + ["right"] * (len(headers) - 1),
        disable_numparse=True,
    )


def _latex_tabular(state: TableState, cell: Callable[[float], str]) -> str:
    headers = [""] + [f"${label}$" for label in state.columns] + ["$RHS$"]
    rows = [
        [f"${label}$"] + [f"${cell(value)}$" for value in state.matrix[i]]
        for i, label in enumerate(state.variables)
    ]
    return tabulate(
        rows,
        headers=headers,
        tablefmt="latex_raw",
        colalign=["center"] * len(headers),
        disable_numparse=True,
    )


def render_latex(state: TableState, *, tol: float = 0.01) -> str:
    """LaTeX ``tabular`` with every entry shown as its nearest simple fraction."""
    return _latex_tabular(state, lambda value: format_fraction(float(value), tol, latex=True))


def render_latex_float(state: TableState, *, digits: int = 2) -> str:
    return _latex_tabular(state, lambda value: _decimal(value, digits))
