"""
TriSolver — 2×2 linear system solver.

Solves

    a11·x + a12·y = b1
    a21·x + a22·y = b2

with Cramer's Rule, Gaussian Elimination and Matrix Inversion.  Each method
returns a ``MethodTrace``: the solution plus every intermediate quantity in
the order it was computed, so a presentation layer can narrate the working
without recomputing anything.

All values keep full floating-point precision.  Rounding for display lives
in ``trisolver.derivation``.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)

Vector = tuple[float, float]
Matrix = tuple[tuple[float, ...], ...]
TraceValue = Union[float, Vector, Matrix]


class Status(str, Enum):
    UNIQUE = "unique"
    SINGULAR = "singular"


class PivotStatus(str, Enum):
    OK = "ok"
    ROW_SWAP = "row_swap"
    DEGENERATE = "degenerate_pivot"
    ZERO_REDUCED_PIVOT = "zero_reduced_pivot"


# ── Data model ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Coefficients:
    a11: float
    a12: float
    a21: float
    a22: float
    b1: float
    b2: float

    @property
    def matrix(self) -> Matrix:
        return ((self.a11, self.a12), (self.a21, self.a22))

    @property
    def vector(self) -> Vector:
        return (self.b1, self.b2)

    @property
    def augmented(self) -> Matrix:
        return ((self.a11, self.a12, self.b1), (self.a21, self.a22, self.b2))

    @property
    def determinant(self) -> float:
        return determinant(self.a11, self.a12, self.a21, self.a22)


@dataclass(frozen=True)
class Solution:
    x: float
    y: float


@dataclass(frozen=True)
class TraceStep:
    """One named intermediate quantity of a derivation."""

    name: str
    value: TraceValue
    label: str = ""


@dataclass(frozen=True)
class MethodTrace:
    method: str
    solution: Optional[Solution]
    steps: tuple[TraceStep, ...] = ()
    pivot: PivotStatus = PivotStatus.OK

    def names(self) -> list[str]:
        return [s.name for s in self.steps]

    def value(self, name: str) -> TraceValue:
        """Return the value of the step called *name* (``KeyError`` if absent)."""
        for step in self.steps:
            if step.name == name:
                return step.value
        raise KeyError(name)

    def __contains__(self, name: str) -> bool:
        return any(s.name == name for s in self.steps)


@dataclass(frozen=True)
class LineData:
    """One equation in slope-intercept form ``y = slope·x + intercept``.

    When the ``y`` coefficient is zero the line is vertical: ``slope`` and
    ``intercept`` are ``None`` and ``vertical_x`` holds its ``x`` position.
    """

    slope: Optional[float]
    intercept: Optional[float]
    vertical_x: Optional[float] = None

    @property
    def is_vertical(self) -> bool:
        return self.vertical_x is not None


@dataclass(frozen=True)
class PlotData:
    column_vector1: Vector
    column_vector2: Vector
    solution_vector: Vector
    constant_vector: Vector
    scaled_vector1: Vector
    scaled_vector2: Vector
    line1: LineData
    line2: LineData
    intersection: Vector


@dataclass(frozen=True)
class SolveResult:
    coefficients: Coefficients
    determinant: float
    status: Status
    solution: Optional[Solution] = None
    cramers: Optional[MethodTrace] = None
    gaussian: Optional[MethodTrace] = None
    inversion: Optional[MethodTrace] = None
    plot_data: Optional[PlotData] = None

    @property
    def has_unique_solution(self) -> bool:
        return self.status is Status.UNIQUE

    def trace(self, method: str) -> Optional[MethodTrace]:
        if method not in METHODS:
            raise ValueError(
                f"Unknown method '{method}'. Choose one of: {', '.join(METHODS)}."
            )
        return getattr(self, method)

    def to_dict(self) -> dict:
        """Plain (JSON-ready) representation of the result."""
        data = asdict(self)
        data["status"] = self.status.value
        data["has_unique_solution"] = self.has_unique_solution
        for method in METHODS:
            if data[method] is not None:
                data[method]["pivot"] = getattr(self, method).pivot.value
        return data


METHODS = ("cramers", "gaussian", "inversion")


# ── Arithmetic helpers ──────────────────────────────────────────────────

def determinant(a11: float, a12: float, a21: float, a22: float) -> float:
    return a11 * a22 - a12 * a21


def singular_case(coeffs) -> str:
    """Classify a zero-determinant system as ``"no_solution"`` or ``"infinite"``.

    Parallel lines (or an equation reading ``0 = b`` with ``b ≠ 0``) have no
    solution; coincident lines have infinitely many.
    """
    c = _as_coefficients(coeffs)
    for a, b, rhs in c.augmented:
        if a == 0 and b == 0 and rhs != 0:
            return "no_solution"
    det_x = c.b1 * c.a22 - c.a12 * c.b2
    det_y = c.a11 * c.b2 - c.b1 * c.a21
    if det_x == 0 and det_y == 0:
        return "infinite"
    return "no_solution"


def _as_coefficients(coeffs) -> Coefficients:
    if isinstance(coeffs, Coefficients):
        return coeffs
    return Coefficients(*coeffs)


# ── Cramer's Rule ───────────────────────────────────────────────────────

def cramers_rule(coeffs) -> MethodTrace:
    """Solve via ratios of determinants.

    ``D_x`` replaces column 1 of A with b, ``D_y`` replaces column 2.
    """
    c = _as_coefficients(coeffs)
    det = c.determinant
    det_x = c.b1 * c.a22 - c.a12 * c.b2
    det_y = c.a11 * c.b2 - c.b1 * c.a21
    steps = [
        TraceStep("det", det, "D = a11·a22 − a12·a21"),
        TraceStep("det_x", det_x, "Dx = b1·a22 − a12·b2"),
        TraceStep("det_y", det_y, "Dy = a11·b2 − b1·a21"),
    ]
    if det == 0:
        return MethodTrace("cramers", None, tuple(steps))

    x = det_x / det
    y = det_y / det
    steps += [
        TraceStep("x", x, "x = Dx / D"),
        TraceStep("y", y, "y = Dy / D"),
    ]
    return MethodTrace("cramers", Solution(x, y), tuple(steps))


# ── Gaussian Elimination ────────────────────────────────────────────────

def gaussian_elimination(coeffs, allow_row_swap: bool = True) -> MethodTrace:
    """Row-reduce the augmented matrix, then back-substitute.

    A zero leading coefficient (``a11 = 0``) cannot be used as a pivot.  With
    *allow_row_swap* the two rows are exchanged first and the trace carries
    ``PivotStatus.ROW_SWAP``; without it the trace reports
    ``PivotStatus.DEGENERATE`` and no solution.  A reduced pivot ``a22'``
    of exactly zero gives ``PivotStatus.ZERO_REDUCED_PIVOT`` and no solution,
    even when ``det`` itself is a tiny non-zero number.
    """
    c = _as_coefficients(coeffs)
    augmented = c.augmented
    steps = [TraceStep("augmented", augmented, "[A | b]")]
    pivot = PivotStatus.OK

    row1, row2 = augmented
    if row1[0] == 0:
        if not allow_row_swap or row2[0] == 0:
            logger.debug("Gaussian elimination: zero pivot in column 1")
            steps.append(TraceStep("pivot", row1[0], "a11 = 0"))
            return MethodTrace("gaussian", None, tuple(steps),
                               PivotStatus.DEGENERATE)
        row1, row2 = row2, row1
        pivot = PivotStatus.ROW_SWAP
        steps.append(TraceStep("row_swap", (row1, row2), "R1 ↔ R2"))

    p11, p12, q1 = row1
    p21, p22, q2 = row2

    factor = p21 / p11
    reduced_a22 = p22 - factor * p12
    reduced_b2 = q2 - factor * q1
    steps += [
        TraceStep("factor", factor, "f = a21 / a11"),
        TraceStep("reduced_a22", reduced_a22, "a22' = a22 − f·a12"),
        TraceStep("reduced_b2", reduced_b2, "b2' = b2 − f·b1"),
        TraceStep("echelon",
                  ((p11, p12, q1), (0.0, reduced_a22, reduced_b2)),
                  "row echelon form"),
    ]
    if reduced_a22 == 0:
        # a22' = 0 can also come from rounding when det is tiny but not 0
        logger.debug("Gaussian elimination: reduced pivot a22' is 0")
        return MethodTrace("gaussian", None, tuple(steps),
                           PivotStatus.ZERO_REDUCED_PIVOT)

    y = reduced_b2 / reduced_a22
    x_numerator = q1 - p12 * y
    x = x_numerator / p11
    steps += [
        TraceStep("y", y, "y = b2' / a22'"),
        TraceStep("x_numerator", x_numerator, "b1 − a12·y"),
        TraceStep("x", x, "x = (b1 − a12·y) / a11"),
    ]
    return MethodTrace("gaussian", Solution(x, y), tuple(steps), pivot)


# ── Matrix Inversion ────────────────────────────────────────────────────

def matrix_inversion(coeffs) -> MethodTrace:
    """Solve ``[x; y] = A⁻¹ · b`` with ``A⁻¹ = adj(A) / det``."""
    c = _as_coefficients(coeffs)
    det = c.determinant
    adjugate = ((c.a22, -c.a12), (-c.a21, c.a11))
    steps = [
        TraceStep("det", det, "D = a11·a22 − a12·a21"),
        TraceStep("adjugate", adjugate, "adj(A)"),
    ]
    if det == 0:
        return MethodTrace("inversion", None, tuple(steps))

    inverse = tuple(tuple(entry / det for entry in row) for row in adjugate)
    (i11, i12), (i21, i22) = inverse
    x = i11 * c.b1 + i12 * c.b2
    y = i21 * c.b1 + i22 * c.b2
    steps += [
        TraceStep("inverse", inverse, "A⁻¹ = adj(A) / D"),
        TraceStep("x", x, "x = A⁻¹[1,1]·b1 + A⁻¹[1,2]·b2"),
        TraceStep("y", y, "y = A⁻¹[2,1]·b1 + A⁻¹[2,2]·b2"),
    ]
    return MethodTrace("inversion", Solution(x, y), tuple(steps))


# ── Geometry ────────────────────────────────────────────────────────────

def _line(a: float, b: float, rhs: float) -> LineData:
    # a·x + b·y = rhs
    if b == 0:
        return LineData(None, None, vertical_x=rhs / a if a != 0 else None)
    return LineData(slope=-a / b, intercept=rhs / b)


def plot_data(coeffs, solution: Solution) -> PlotData:
    c = _as_coefficients(coeffs)
    col1 = (c.a11, c.a21)
    col2 = (c.a12, c.a22)
    return PlotData(
        column_vector1=col1,
        column_vector2=col2,
        solution_vector=(solution.x, solution.y),
        constant_vector=c.vector,
        scaled_vector1=(solution.x * col1[0], solution.x * col1[1]),
        scaled_vector2=(solution.y * col2[0], solution.y * col2[1]),
        line1=_line(c.a11, c.a12, c.b1),
        line2=_line(c.a21, c.a22, c.b2),
        intersection=(solution.x, solution.y),
    )


# ── Public entry point ──────────────────────────────────────────────────

def solve(a11: float, a12: float, a21: float, a22: float,
          b1: float, b2: float) -> SolveResult:
    """
    Solve the 2×2 system with all three methods.

    A zero determinant is a regular result (``Status.SINGULAR``) with every
    trace left as ``None``; nothing is raised.  Cramer's Rule supplies the
    authoritative ``solution`` and the plot data.
    """
    coeffs = Coefficients(a11, a12, a21, a22, b1, b2)
    det = coeffs.determinant
    logger.debug("solve %s: det=%r", coeffs, det)

    if det == 0:
        return SolveResult(coeffs, det, Status.SINGULAR)

    cramers = cramers_rule(coeffs)
    gaussian = gaussian_elimination(coeffs)
    inversion = matrix_inversion(coeffs)
    if gaussian.pivot is PivotStatus.ROW_SWAP:
        logger.debug("a11 = 0: Gaussian elimination pivoted on row 2")
    elif gaussian.pivot is PivotStatus.ZERO_REDUCED_PIVOT:
        logger.warning("det=%r but Gaussian elimination lost its pivot "
                       "to rounding", det)

    return SolveResult(
        coefficients=coeffs,
        determinant=det,
        status=Status.UNIQUE,
        solution=cramers.solution,
        cramers=cramers,
        gaussian=gaussian,
        inversion=inversion,
        plot_data=plot_data(coeffs, cramers.solution),
    )


def solve_coefficients(coeffs: Coefficients) -> SolveResult:
    return solve(coeffs.a11, coeffs.a12, coeffs.a21, coeffs.a22,
                 coeffs.b1, coeffs.b2)
