import pytest

from tableau_simplex.schemas import (
    Constraint,
    LinearExpr,
    LinearTerm,
    LPModel,
    PivotOptions,
    TableauModel,
    Variable,
)
from tableau_simplex.server import (
    apply_pivot,
    build_initial_tableau,
    choose_entering,
    choose_leaving,
    drop_tableau_columns,
    pivot_step,
    render_tableau,
    replace_objective,
    solve_lp,
    solve_tableau,
)


def make_production_model() -> TableauModel:
    return TableauModel(
        columns=["Z", "x", "y", "s1", "s2", "s3"],
        variables=["Z", "s1", "s2", "s3"],
        matrix=[
            [1, -3, -5, 0, 0, 0, 0],
            [0, 1, 0, 1, 0, 0, 4],
            [0, 0, 2, 0, 1, 0, 12],
            [0, 3, 2, 0, 0, 1, 18],
        ],
    )


def test_tools_walk_through_one_pivot():
    entered = choose_entering(make_production_model())
    assert entered["entering"] == "y"
    assert entered["tableau"]["pivot_column"] == 2
    assert entered["tableau"]["stage"] == "column_chosen"

    left = choose_leaving(TableauModel.model_validate(entered["tableau"]))
    assert left["leaving"] == "s2"
    assert left["row"] == 2
    assert [item["row"] for item in left["ratios"]] == [2, 3]
    assert left["ratios"][0]["variable"] == "s2"

    pivoted = apply_pivot(TableauModel.model_validate(left["tableau"]))
    assert pivoted["tableau"]["matrix"][0][-1] == pytest.approx(30.0)
    assert pivoted["tableau"]["stage"] == "eliminated"


def test_pivot_step_until_optimal():
    tableau = make_production_model()
    leaving = []
    while True:
        result = pivot_step(tableau)
        tableau = TableauModel.model_validate(result["tableau"])
        if result["optimal"]:
            break
        leaving.append(result["leaving"])

    assert leaving == ["s2", "s3"]
    assert tableau.matrix[0][-1] == pytest.approx(36.0)


def test_choose_leaving_without_column_reports_error():
    result = choose_leaving(make_production_model())

    assert result["kind"] == "PivotColumnNotSet"
    assert result["tableau"]["stage"] == "unset"


def test_unbounded_is_reported():
    tableau = TableauModel(
        columns=["Z", "x", "s1"],
        variables=["Z", "s1"],
        matrix=[[1, -1, 0, 0], [0, -1, 1, 3]],
    )
    entered = choose_entering(tableau)

    result = choose_leaving(TableauModel.model_validate(entered["tableau"]))

    assert result["kind"] == "Unbounded"
    assert "'x'" in result["error"]


def test_solve_tableau_returns_run():
    result = solve_tableau(make_production_model(), PivotOptions())

    assert result["run"]["status"] == "optimal"
    assert result["run"]["objective_value"] == pytest.approx(36.0)
    assert result["tableau"]["variables"] == ["Z", "s1", "y", "x"]


def test_edit_tools():
    dropped = drop_tableau_columns(make_production_model(), ["x"])
    assert dropped["tableau"]["columns"] == ["Z", "y", "s1", "s2", "s3"]

    bad = replace_objective(make_production_model(), "W", [1, 0, 0])
    assert bad["kind"] == "InvalidReplacementShape"


def test_build_and_solve_lp():
    model = LPModel(
        sense="min",
        objective=LinearExpr(terms=[LinearTerm(var="x", coef=3.0), LinearTerm(var="y", coef=2.0)]),
        variables=[Variable(name="x"), Variable(name="y")],
        constraints=[
            Constraint(
                name="c1",
                lhs=LinearExpr(terms=[LinearTerm(var="x", coef=1.0), LinearTerm(var="y", coef=2.0)]),
                cmp=">=",
                rhs=8.0,
            ),
            Constraint(
                name="c2",
                lhs=LinearExpr(terms=[LinearTerm(var="x", coef=3.0), LinearTerm(var="y", coef=1.0)]),
                cmp=">=",
                rhs=6.0,
            ),
        ],
    )

    built = build_initial_tableau(model)
    assert built["artificial"] == ["a_c1", "a_c2"]
    assert built["tableau"]["columns"][0] == "W"

    solution = solve_lp(model)
    assert solution["status"] == "optimal"
    assert solution["objective_value"] == pytest.approx(9.6, rel=1e-6)


def test_render_tool_styles():
    assert "\\begin{tabular}" in render_tableau(make_production_model(), "latex")["rendered"]
    assert "RHS" in render_tableau(make_production_model())["rendered"]
    assert render_tableau(make_production_model(), "html")["kind"] == "ValueError"
