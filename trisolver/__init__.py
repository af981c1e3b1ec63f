"""TriSolver — 2×2 linear systems by Cramer's Rule, Gaussian Elimination and Matrix Inversion."""

from trisolver.core import (
    Coefficients,
    LineData,
    MethodTrace,
    PivotStatus,
    PlotData,
    Solution,
    SolveResult,
    Status,
    TraceStep,
    cramers_rule,
    gaussian_elimination,
    matrix_inversion,
    solve,
    solve_coefficients,
)
from trisolver.derivation import build_result

__all__ = [
    "Coefficients",
    "LineData",
    "MethodTrace",
    "PivotStatus",
    "PlotData",
    "Solution",
    "SolveResult",
    "Status",
    "TraceStep",
    "build_result",
    "cramers_rule",
    "gaussian_elimination",
    "matrix_inversion",
    "solve",
    "solve_coefficients",
]
