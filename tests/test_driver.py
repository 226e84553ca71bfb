import numpy as np
import pytest

from tableau_simplex.driver import basic_solution, run_simplex, solve_model, start_phase_two
from tableau_simplex.schemas import (
    Constraint,
    LinearExpr,
    LinearTerm,
    LPModel,
    PivotOptions,
    PivotStage,
    Variable,
)
from tableau_simplex.tableau import (
    TableState,
    adjust_objective_row,
    eliminate_pivot_column,
    normalize_pivot_row,
    select_entry_variable,
    select_exit_variable,
)


def make_production_tableau() -> TableState:
    return TableState(
        ["Z", "x", "y", "s1", "s2", "s3"],
        ["Z", "s1", "s2", "s3"],
        [
            [1, -3, -5, 0, 0, 0, 0],
            [0, 1, 0, 1, 0, 0, 4],
            [0, 0, 2, 0, 1, 0, 12],
            [0, 3, 2, 0, 0, 1, 18],
        ],
    )


def make_phase_one_tableau() -> TableState:
    return TableState(
        ["W", "x", "y", "s1", "a1"],
        ["W", "a1", "s1"],
        [
            [1, 0, 0, 0, 1, 0],
            [0, 1, 1, 0, 1, 4],
            [0, 1, 0, 1, 0, 3],
        ],
    )


def expr(**coefs: float) -> LinearExpr:
    return LinearExpr(terms=[LinearTerm(var=name, coef=value) for name, value in coefs.items()])


def make_lp(sense, objective, constraints) -> LPModel:
    names = sorted({term.var for c in constraints for term in c.lhs.terms} | {t.var for t in objective.terms})
    return LPModel(
        sense=sense,
        objective=objective,
        variables=[Variable(name=name) for name in names],
        constraints=constraints,
    )


def test_production_problem_step_by_step():
    state = make_production_tableau()
    entered = []

    for _ in range(2):
        entry = select_entry_variable(state)
        assert not entry.optimal
        entered.append(entry.label)
        select_exit_variable(state)
        normalize_pivot_row(state)
        eliminate_pivot_column(state)

    assert entered == ["y", "x"]
    assert select_entry_variable(state).optimal
    assert state.pivot_row is None and state.pivot_column is None
    assert state.objective_value == pytest.approx(36.0)

    values = basic_solution(state)
    assert values["x"] == pytest.approx(2.0)
    assert values["y"] == pytest.approx(6.0)
    assert values["s1"] == pytest.approx(2.0)


def test_run_simplex_reports_steps():
    state = make_production_tableau()

    run = run_simplex(state)

    assert run.status == "optimal"
    assert run.iterations == 2
    assert [(s.entering, s.leaving) for s in run.steps] == [("y", "s2"), ("x", "s3")]
    assert run.objective_value == pytest.approx(36.0)
    assert run.values["x"] == pytest.approx(2.0)
    assert state.stage is PivotStage.OPTIMAL


def test_run_simplex_unbounded():
    state = TableState(
        ["Z", "x", "y", "s1"],
        ["Z", "s1"],
        [[1, -1, 0, 0, 0], [0, 1, -1, 1, 1]],
    )

    run = run_simplex(state)

    assert run.status == "unbounded"
    assert run.iterations == 1
    assert "'y'" in run.message
    assert run.values is None
    assert state.stage is PivotStage.UNBOUNDED


def test_run_simplex_iteration_limit():
    state = make_production_tableau()

    run = run_simplex(state, PivotOptions(max_iters=1))

    assert run.status == "iteration_limit"
    assert run.iterations == 1
    assert state.stage is PivotStage.UNSET
    assert state.objective_value == pytest.approx(30.0)


def test_manual_two_phase_transition():
    state = make_phase_one_tableau()
    adjust_objective_row(state, "a1")

    phase1 = run_simplex(state)

    assert phase1.status == "optimal"
    assert state.objective_value == pytest.approx(0.0, abs=1e-9)
    assert state.variables == ["W", "y", "x"]

    phase2_state = start_phase_two(state, ["a1"], "Z", [1, -1, -2, 0, 0])

    assert phase2_state.columns == ["Z", "x", "y", "s1"]
    np.testing.assert_allclose(phase2_state.matrix[0], [1, 0, 0, -1, 5])
    assert state.columns[-1] == "a1"

    phase2 = run_simplex(phase2_state)

    assert phase2.status == "optimal"
    assert phase2.objective_value == pytest.approx(8.0)
    assert phase2.values == {"y": pytest.approx(4.0), "s1": pytest.approx(3.0)}


def test_solve_model_with_equality():
    model = make_lp(
        "max",
        expr(x=1.0, y=2.0),
        [
            Constraint(name="c1", lhs=expr(x=1.0, y=1.0), cmp="==", rhs=4.0),
            Constraint(name="c2", lhs=expr(x=1.0), cmp="<=", rhs=3.0),
        ],
    )

    run = solve_model(model)

    assert run.status == "optimal"
    assert run.objective_value == pytest.approx(8.0)
    assert run.values == {"x": pytest.approx(0.0), "y": pytest.approx(4.0)}


def test_solve_model_minimization():
    model = make_lp(
        "min",
        expr(x=3.0, y=2.0),
        [
            Constraint(name="c1", lhs=expr(x=1.0, y=2.0), cmp=">=", rhs=8.0),
            Constraint(name="c2", lhs=expr(x=3.0, y=1.0), cmp=">=", rhs=6.0),
        ],
    )

    run = solve_model(model)

    assert run.status == "optimal"
    assert run.objective_value == pytest.approx(9.6, rel=1e-6)
    assert run.values["x"] == pytest.approx(0.8, rel=1e-6)
    assert run.values["y"] == pytest.approx(3.6, rel=1e-6)


def test_solve_model_infeasible():
    model = make_lp(
        "max",
        expr(x=1.0, y=1.0),
        [
            Constraint(name="c1", lhs=expr(x=1.0, y=1.0), cmp="<=", rhs=1.0),
            Constraint(name="c2", lhs=expr(x=1.0, y=1.0), cmp=">=", rhs=3.0),
        ],
    )

    run = solve_model(model)

    assert run.status == "infeasible"
    assert run.values is None


def test_solve_model_unbounded():
    model = make_lp(
        "max",
        expr(x=1.0),
        [Constraint(name="c1", lhs=expr(x=1.0, y=-1.0), cmp="<=", rhs=1.0)],
    )

    assert solve_model(model).status == "unbounded"
