"""Display helpers; none of them mutate the tableau."""

from .rational import approximate_fraction, format_fraction
from .render import render_latex, render_latex_float, render_table

__all__ = [
    "approximate_fraction",
    "format_fraction",
    "render_table",
    "render_latex",
    "render_latex_float",
]
