from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from ..exceptions import InvalidTableau, PivotSequenceError
from ..schemas import PivotStage, TableauModel

# Stages in which a pivot has been only partially applied to the matrix.
_MID_PIVOT = frozenset({PivotStage.ROW_CHOSEN, PivotStage.NORMALIZED})


class TableState:
    """
    Simplex tableau: labelled columns, one basic variable per row, and a float
    matrix whose last column is the right-hand side. Row 0 is the objective row
    and ``columns[0] == variables[0]`` is its self label.

    The pivot selection is ``None`` until chosen; ``stage`` tracks how far the
    current pivot has been applied.
    """

    def __init__(self, columns: Sequence[str], variables: Sequence[str], matrix: Any) -> None:
        self.columns: List[str] = list(columns)
        self.variables: List[str] = list(variables)
        self.matrix: np.ndarray = np.array(matrix, dtype=float)
        self._pivot_row: Optional[int] = None
        self._pivot_column: Optional[int] = None
        self._stage = PivotStage.UNSET
        _validate(self.columns, self.variables, self.matrix)

    @property
    def pivot_row(self) -> Optional[int]:
        return self._pivot_row

    @property
    def pivot_column(self) -> Optional[int]:
        return self._pivot_column

    @property
    def stage(self) -> PivotStage:
        return self._stage

    @property
    def objective_label(self) -> str:
        return self.columns[0]

    @property
    def rhs(self) -> np.ndarray:
        return self.matrix[:, -1]

    @property
    def objective_value(self) -> float:
        return float(self.matrix[0, -1])

    def copy(self) -> "TableState":
        clone = TableState(self.columns, self.variables, self.matrix)
        clone._pivot_row = self._pivot_row
        clone._pivot_column = self._pivot_column
        clone._stage = self._stage
        return clone

    def clear_pivot(self) -> None:
        self.require_settled("clear the pivot")
        self._set_pivot(None, None, PivotStage.UNSET)

    def require_settled(self, action: str) -> None:
        if self._stage in _MID_PIVOT:
            raise PivotSequenceError(
                f"Cannot {action} while a pivot is half applied (stage '{self._stage.value}'); "
                "finish normalization and elimination first."
            )

    def _set_pivot(self, row: Optional[int], column: Optional[int], stage: PivotStage) -> None:
        self._pivot_row = row
        self._pivot_column = column
        self._stage = stage

    def _advance(self, stage: PivotStage) -> None:
        self._stage = stage

    def to_model(self) -> TableauModel:
        return TableauModel(
            columns=list(self.columns),
            variables=list(self.variables),
            matrix=self.matrix.tolist(),
            pivot_row=self._pivot_row,
            pivot_column=self._pivot_column,
            stage=self._stage,
        )

    @classmethod
    def from_model(cls, model: TableauModel) -> "TableState":
        state = cls(model.columns, model.variables, model.matrix)
        row, column, stage = model.pivot_row, model.pivot_column, model.stage

        needs_column = stage not in (PivotStage.UNSET, PivotStage.OPTIMAL)
        needs_row = stage in (PivotStage.ROW_CHOSEN, PivotStage.NORMALIZED, PivotStage.ELIMINATED)
        if (column is not None) != needs_column or (row is not None) != needs_row:
            raise InvalidTableau(
                f"Pivot selection (row={row}, column={column}) does not match stage '{stage.value}'."
            )
        if column is not None and not 1 <= column <= len(state.columns) - 1:
            raise InvalidTableau(f"Pivot column {column} is outside the selectable range.")
        if row is not None and not 1 <= row <= state.matrix.shape[0] - 1:
            raise InvalidTableau(f"Pivot row {row} is outside the constraint rows.")

        state._set_pivot(row, column, stage)
        return state

    def __repr__(self) -> str:
        return (
            f"TableState(columns={self.columns!r}, variables={self.variables!r}, "
            f"shape={self.matrix.shape}, stage={self._stage.value!r})"
        )


def _validate(columns: List[str], variables: List[str], matrix: np.ndarray) -> None:
    if matrix.ndim != 2:
        raise InvalidTableau(f"Tableau matrix must be 2-D, got {matrix.ndim} dimension(s).")
    rows, cols = matrix.shape
    if not columns or not variables or rows == 0:
        raise InvalidTableau("Tableau needs at least the objective row and its self-label column.")
    if rows != len(variables):
        raise InvalidTableau(f"Matrix has {rows} rows but {len(variables)} basic variable labels.")
    if cols != len(columns) + 1:
        raise InvalidTableau(
            f"Matrix has {cols} columns; expected {len(columns) + 1} ({len(columns)} labels plus RHS)."
        )
    for kind, labels in (("column", columns), ("variable", variables)):
        seen = set()
        for label in labels:
            if label in seen:
                raise InvalidTableau(f"Duplicate {kind} label '{label}'.")
            seen.add(label)
    if columns[0] != variables[0]:
        raise InvalidTableau(
            f"Objective label mismatch: columns[0] is '{columns[0]}' but variables[0] is '{variables[0]}'."
        )
