from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Sense = Literal["min", "max"]
Cmp = Literal["<=", ">=", "=="]
RunStatus = Literal["optimal", "infeasible", "unbounded", "iteration_limit"]


class EntryCriterion(str, Enum):
    MOST_NEGATIVE = "most_negative"
    MOST_POSITIVE = "most_positive"


class PivotStage(str, Enum):
    UNSET = "unset"
    COLUMN_CHOSEN = "column_chosen"
    ROW_CHOSEN = "row_chosen"
    NORMALIZED = "normalized"
    ELIMINATED = "eliminated"
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"


class Variable(BaseModel):
    name: str
    lb: float | None = 0.0
    ub: float | None = None


class LinearTerm(BaseModel):
    var: str
    coef: float


class LinearExpr(BaseModel):
    terms: List[LinearTerm] = Field(default_factory=list)
    constant: float = 0.0


class Constraint(BaseModel):
    name: str
    lhs: LinearExpr
    cmp: Cmp
    rhs: float


class LPModel(BaseModel):
    name: str = "problem"
    sense: Sense
    objective: LinearExpr
    variables: List[Variable]
    constraints: List[Constraint]


class PivotOptions(BaseModel):
    max_iters: int = 10_000
    tol: float = 1e-9
    criterion: EntryCriterion = EntryCriterion.MOST_NEGATIVE


class TableauModel(BaseModel):
    """JSON shape of a tableau; matrix rows carry the RHS as their last entry."""

    columns: List[str]
    variables: List[str]
    matrix: List[List[float]]
    pivot_row: Optional[int] = None
    pivot_column: Optional[int] = None
    stage: PivotStage = PivotStage.UNSET


class PivotStep(BaseModel):
    entering: str
    leaving: str
    row: int
    column: int


class PivotRun(BaseModel):
    status: RunStatus
    objective_value: Optional[float]
    values: Dict[str, float] | None
    iterations: int
    steps: List[PivotStep] = Field(default_factory=list)
    message: str = ""
