from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .display import render_latex, render_latex_float, render_table
from .driver import run_simplex, solve_model
from .exceptions import TableauError
from .schemas import EntryCriterion, LPModel, PivotOptions, TableauModel
from .standard_form import build_tableau
from .tableau import (
    TableState,
    adjust_objective_row,
    drop_columns,
    pivot,
    replace_objective_row,
    select_entry_variable,
    select_exit_variable,
)

logger = logging.getLogger(__name__)

app = FastMCP("Tableau Simplex")


def _error(exc: TableauError, tableau: TableauModel | None = None) -> Dict[str, Any]:
    return {
        "error": str(exc),
        "kind": type(exc).__name__,
        "tableau": tableau.model_dump() if tableau is not None else None,
    }


@app.tool()
def choose_entering(tableau: TableauModel, criterion: EntryCriterion = EntryCriterion.MOST_NEGATIVE) -> dict:
    """Select the entering column from the objective row; reports optimal when none improves it."""
    try:
        state = TableState.from_model(tableau)
        entry = select_entry_variable(state, criterion)
    except TableauError as exc:
        return _error(exc, tableau)
    return {"tableau": state.to_model().model_dump(), "optimal": entry.optimal, "entering": entry.label}


@app.tool()
def choose_leaving(tableau: TableauModel) -> dict:
    """Run the ratio test on the chosen column and make the entering variable basic."""
    try:
        state = TableState.from_model(tableau)
        exit_ = select_exit_variable(state)
    except TableauError as exc:
        return _error(exc, tableau)
    ratios: List[Dict[str, Any]] = [
        {"row": row, "variable": exit_.leaving if row == exit_.row else state.variables[row], "ratio": ratio}
        for row, ratio in sorted(exit_.ratios.items())
    ]
    return {
        "tableau": state.to_model().model_dump(),
        "entering": exit_.entering,
        "leaving": exit_.leaving,
        "row": exit_.row,
        "ratios": ratios,
    }


@app.tool()
def apply_pivot(tableau: TableauModel) -> dict:
    """Normalize the pivot row and eliminate the pivot column elsewhere."""
    try:
        state = pivot(TableState.from_model(tableau))
    except TableauError as exc:
        return _error(exc, tableau)
    return {"tableau": state.to_model().model_dump()}


@app.tool()
def pivot_step(tableau: TableauModel, options: PivotOptions | None = None) -> dict:
    """One full simplex iteration: entering column, ratio test, then pivot."""
    opts = options or PivotOptions()
    try:
        state = TableState.from_model(tableau)
        entry = select_entry_variable(state, opts.criterion, tol=opts.tol)
        if entry.optimal:
            return {"tableau": state.to_model().model_dump(), "optimal": True, "entering": None, "leaving": None}
        exit_ = select_exit_variable(state, tol=opts.tol)
        pivot(state)
    except TableauError as exc:
        return _error(exc, tableau)
    return {
        "tableau": state.to_model().model_dump(),
        "optimal": False,
        "entering": exit_.entering,
        "leaving": exit_.leaving,
    }


@app.tool()
def solve_tableau(tableau: TableauModel, options: PivotOptions | None = None) -> dict:
    """Pivot the tableau until optimal, unbounded, or the iteration limit."""
    opts = options or PivotOptions()
    try:
        state = TableState.from_model(tableau)
        run = run_simplex(state, opts)
    except TableauError as exc:
        return _error(exc, tableau)
    return {"tableau": state.to_model().model_dump(), "run": run.model_dump()}


@app.tool()
def adjust_objective(tableau: TableauModel, variable: str) -> dict:
    """Eliminate a basic variable's coefficient from the objective row."""
    try:
        state = adjust_objective_row(TableState.from_model(tableau), variable)
    except TableauError as exc:
        return _error(exc, tableau)
    return {"tableau": state.to_model().model_dump()}


@app.tool()
def drop_tableau_columns(tableau: TableauModel, names: List[str]) -> dict:
    """Return a copy of the tableau without the named (non-basic) columns."""
    try:
        state = drop_columns(TableState.from_model(tableau), names)
    except TableauError as exc:
        return _error(exc, tableau)
    return {"tableau": state.to_model().model_dump()}


@app.tool()
def replace_objective(tableau: TableauModel, label: str, row: List[float]) -> dict:
    """Install a new objective row (self label through RHS) under a new label."""
    try:
        state = replace_objective_row(TableState.from_model(tableau), label, row)
    except TableauError as exc:
        return _error(exc, tableau)
    return {"tableau": state.to_model().model_dump()}


@app.tool()
def build_initial_tableau(model: LPModel) -> dict:
    "Build the starting tableau (with phase-one objective when artificials are needed)."
    try:
        initial = build_tableau(model)
    except ValueError as exc:
        return {"error": str(exc), "kind": type(exc).__name__, "tableau": None}
    return {
        "tableau": initial.state.to_model().model_dump(),
        "artificial": list(initial.artificial),
        "objective_label": initial.objective_label,
        "objective_row": initial.objective_row.tolist(),
        "negated": initial.negated,
    }


@app.tool()
def solve_lp(model: LPModel, options: PivotOptions | None = None) -> dict:
    "Solve an LP over non-negative variables with the two-phase tableau method."
    opts = options or PivotOptions()
    try:
        return solve_model(model, opts).model_dump()
    except ValueError as exc:
        return {"error": str(exc), "kind": type(exc).__name__}


@app.tool()
def render_tableau(tableau: TableauModel, style: str = "text") -> dict:
    """Render the tableau as 'text', 'latex' (fractions) or 'latex_float'."""
    try:
        state = TableState.from_model(tableau)
    except TableauError as exc:
        return _error(exc, tableau)
    renderers = {"text": render_table, "latex": render_latex, "latex_float": render_latex_float}
    if style not in renderers:
        return {"error": f"Unknown style '{style}'.", "kind": "ValueError", "tableau": None}
    return {"rendered": renderers[style](state)}


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("TABLEAU_SIMPLEX_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    logger.info("Starting Tableau Simplex server (%s)", transport)

    if transport == "stdio":
        app.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        app.settings.host = "0.0.0.0"
        app.settings.port = port
        app.settings.streamable_http_path = "/mcp"
        app.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        app.run(transport="streamable-http")


if __name__ == "__main__":
    main()
