from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from .schemas import LPModel
from .tableau.editing import adjust_objective_row
from .tableau.state import TableState


@dataclass
class InitialTableau:
    """Starting tableau plus what the driver needs to finish a two-phase solve."""

    state: TableState
    objective_label: str
    objective_row: np.ndarray
    artificial: List[str] = field(default_factory=list)
    negated: bool = False

    @property
    def needs_phase_one(self) -> bool:
        return bool(self.artificial)


def build_tableau(
    model: LPModel,
    *,
    objective_label: str = "Z",
    phase_one_label: str = "W",
) -> InitialTableau:
    """
    Convert an LP over non-negative variables into a simplex tableau.
    <= rows get a slack, >= rows a surplus and an artificial, == rows an
    artificial. When artificials are present the returned tableau carries the
    phase-one objective and ``objective_row`` holds the real objective for the
    tableau without artificial columns.
    """

    structural: List[str] = []
    for var in model.variables:
        if var.lb is None or var.lb != 0.0 or var.ub is not None:
            raise ValueError(
                f"Variable {var.name} must have lb = 0 and no upper bound for the tableau form."
            )
        structural.append(var.name)
    index = {name: idx for idx, name in enumerate(structural)}

    extra_columns: List[Tuple[str, str]] = []
    rows: List[Tuple[Dict[int, float], Dict[str, float], float]] = []
    basis: List[str] = []

    for cons in model.constraints:
        coeffs: Dict[int, float] = {}
        for term in cons.lhs.terms:
            if term.var not in index:
                raise ValueError(f"Constraint '{cons.name}' references unknown variable '{term.var}'.")
            coeffs[index[term.var]] = coeffs.get(index[term.var], 0.0) + term.coef
        rhs_value = cons.rhs - cons.lhs.constant
        cmp = cons.cmp

        if rhs_value < 0:
            coeffs = {idx: -val for idx, val in coeffs.items()}
            rhs_value = -rhs_value
            if cmp == "<=":
                cmp = ">="
            elif cmp == ">=":
                cmp = "<="

        added: Dict[str, float] = {}
        if cmp == "<=":
            slack = f"s_{cons.name}"
            extra_columns.append((slack, "slack"))
            added[slack] = 1.0
            basis.append(slack)
        elif cmp == ">=":
            surplus = f"e_{cons.name}"
            artificial = f"a_{cons.name}"
            extra_columns.extend([(surplus, "surplus"), (artificial, "artificial")])
            added[surplus] = -1.0
            added[artificial] = 1.0
            basis.append(artificial)
        else:
            artificial = f"a_{cons.name}"
            extra_columns.append((artificial, "artificial"))
            added[artificial] = 1.0
            basis.append(artificial)
        rows.append((coeffs, added, rhs_value))

    n = len(structural)
    extra_names = [name for name, _ in extra_columns]
    artificial_names = [name for name, kind in extra_columns if kind == "artificial"]
    width = 1 + n + len(extra_names) + 1

    objective = np.zeros(width, dtype=float)
    objective[0] = 1.0
    for term in model.objective.terms:
        if term.var not in index:
            raise ValueError(f"Objective references unknown variable '{term.var}'.")
        objective[1 + index[term.var]] -= term.coef
    objective[-1] = model.objective.constant
    negated = model.sense == "min"
    if negated:
        # Minimizing Z is carried out as maximizing -Z.
        objective[1:] = -objective[1:]

    matrix = np.zeros((len(rows) + 1, width), dtype=float)
    for i, (coeffs, added, rhs_value) in enumerate(rows, start=1):
        for idx, value in coeffs.items():
            matrix[i, 1 + idx] = value
        for name, value in added.items():
            matrix[i, 1 + n + extra_names.index(name)] = value
        matrix[i, -1] = rhs_value

    if not artificial_names:
        matrix[0, :] = objective
        columns = [objective_label] + structural + extra_names
        state = TableState(columns, [objective_label] + basis, matrix)
        return InitialTableau(state=state, objective_label=objective_label, objective_row=objective, negated=negated)

    # Phase one maximizes W = -(sum of artificials), i.e. W + sum(a) = 0.
    matrix[0, 0] = 1.0
    for name in artificial_names:
        matrix[0, 1 + n + extra_names.index(name)] = 1.0
    columns = [phase_one_label] + structural + extra_names
    state = TableState(columns, [phase_one_label] + basis, matrix)
    for name in artificial_names:
        adjust_objective_row(state, name)

    keep = [idx for idx, name in enumerate(columns) if name not in artificial_names]
    phase_two_row = objective[keep + [width - 1]]
    return InitialTableau(
        state=state,
        objective_label=objective_label,
        objective_row=phase_two_row,
        artificial=artificial_names,
        negated=negated,
    )
