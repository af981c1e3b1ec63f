"""
Derivation formatter for TriSolver.

Turns a ``SolveResult`` into the step-by-step document shown by the GUI and
the command line.  Each step is a dict::

    {"step_number", "description", "expression", "latex", "explanation"}

``expression`` is plain Unicode for text widgets and terminals; ``latex`` is
the same formula for a math typesetting engine.  All rounding to display
precision happens here, never in ``trisolver.core``.
"""

import time
from datetime import datetime
from functools import partial

import numpy as np

from trisolver.core import (
    Coefficients, MethodTrace, PivotStatus, PlotData, SolveResult,
    singular_case,
)

DEFAULT_DECIMALS = 4
DEFAULT_TOLERANCE = 1e-9

METHOD_INFO = {
    "cramers": {
        "name": "Cramer's Rule",
        "description": (
            "Solve with ratios of determinants formed by substituting the "
            "constant vector b into each column of A."
        ),
        "approach": "D → Dx, Dy → x = Dx/D, y = Dy/D",
    },
    "gaussian": {
        "name": "Gaussian Elimination",
        "description": (
            "Row-reduce the augmented matrix [A | b] to row echelon form, "
            "then back-substitute."
        ),
        "approach": "[A | b] → R2 ← R2 − f·R1 → back-substitution",
    },
    "inversion": {
        "name": "Matrix Inversion",
        "description": (
            "Build A⁻¹ from the adjugate and the determinant, then multiply "
            "it by the constant vector b."
        ),
        "approach": "adj(A) → A⁻¹ = adj(A)/D → [x, y] = A⁻¹·b",
    },
    "vectors": {
        "name": "Geometric View",
        "description": (
            "Read the system as two lines that intersect at the solution, "
            "and as a linear combination of the column vectors of A."
        ),
        "approach": "x·v₁ + y·v₂ = b  and  intersection of two lines",
    },
}

NO_UNIQUE_SOLUTION = "No unique solution (Determinant is 0)."

ROUNDED_PIVOT_NOTE = (
    "The determinant is not exactly 0, but floating-point rounding made the "
    "reduced pivot a22' zero, so Gaussian Elimination cannot finish. The "
    "system is nearly singular; the answer comes from Cramer's Rule."
)


# ── Number formatting ───────────────────────────────────────────────────

def format_value(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    """Format a float for display.

    Integers print without a decimal point (``7`` not ``7.0``); other values
    are rounded to *decimals* places with trailing zeros removed.
    """
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "∞" if value > 0 else "−∞"
    if abs(value - round(value)) < 1e-12:
        return str(int(round(value)))
    formatted = f"{value:.{decimals}f}".rstrip("0").rstrip(".")
    if formatted in ("-0", ""):
        return "0"
    return formatted


def format_fixed(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    """Fixed-width rounding used for final answers (``2.4286``)."""
    text = f"{value:.{decimals}f}"
    if text.startswith("-") and float(text) == 0:
        text = text[1:]
    return text


def _p(value: float, decimals: int) -> str:
    """Parenthesise negatives so products read ``(2)(−3)``."""
    return f"({format_value(value, decimals)})"


def _matrix_plain(rows, decimals: int, bar_at: int = None) -> str:
    lines = []
    for row in rows:
        cells = [format_value(v, decimals) for v in row]
        if bar_at is not None:
            cells.insert(bar_at, "|")
        lines.append("[ " + "  ".join(cells) + " ]")
    return "\n".join(lines)


def _column_latex(v, decimals: int) -> str:
    return _matrix_latex(((v[0],), (v[1],)), decimals)


def _vector_plain(v, decimals: int) -> str:
    return f"({format_value(v[0], decimals)}, {format_value(v[1], decimals)})"


def _matrix_latex(rows, decimals: int, env: str = "pmatrix",
                  bar_at: int = None) -> str:
    body = []
    for row in rows:
        cells = [format_value(v, decimals) for v in row]
        if bar_at is not None:
            cells.insert(bar_at, "|")
        body.append(" & ".join(cells))
    return f"\\begin{{{env}}} " + " \\\\ ".join(body) + f" \\end{{{env}}}"


def _term(coeff: float, var: str, decimals: int, first: bool) -> str:
    if coeff == 0:
        return ""
    mag = abs(coeff)
    num = "" if mag == 1 else format_value(mag, decimals)
    if first:
        return f"{'−' if coeff < 0 else ''}{num}{var}"
    return f" {'−' if coeff < 0 else '+'} {num}{var}"


def format_equation(a: float, b: float, rhs: float,
                    decimals: int = DEFAULT_DECIMALS) -> str:
    """``a·x + b·y = rhs`` as readable text, e.g. ``2x − y = 3``."""
    lhs = _term(a, "x", decimals, True)
    lhs += _term(b, "y", decimals, not lhs)
    return f"{lhs or '0'} = {format_value(rhs, decimals)}"


def format_system(coeffs: Coefficients, decimals: int = DEFAULT_DECIMALS) -> str:
    c = coeffs
    return (f"{format_equation(c.a11, c.a12, c.b1, decimals)}, "
            f"{format_equation(c.a21, c.a22, c.b2, decimals)}")


def _numbered(steps: list) -> list:
    for i, s in enumerate(steps, 1):
        s["step_number"] = i
    return steps


# ── Cramer's Rule ───────────────────────────────────────────────────────

def _cramers_steps(trace: MethodTrace, c: Coefficients, d: int) -> list:
    det = trace.value("det")
    det_x = trace.value("det_x")
    det_y = trace.value("det_y")
    f = partial(format_value, decimals=d)

    steps = [
        {
            "description": "Calculate the determinant D of A",
            "expression": (
                f"D = |{f(c.a11)} {f(c.a12)}; {f(c.a21)} {f(c.a22)}| = "
                f"{_p(c.a11, d)}{_p(c.a22, d)} − {_p(c.a12, d)}{_p(c.a21, d)}"
                f" = {f(det)}"
            ),
            "latex": (
                f"D = {_matrix_latex(c.matrix, d, 'vmatrix')} = "
                f"{_p(c.a11, d)}{_p(c.a22, d)} - {_p(c.a12, d)}{_p(c.a21, d)}"
                f" = {f(det)}"
            ),
            "explanation": (
                "Cross-multiply the diagonals of the coefficient matrix. "
                "A non-zero determinant means the system has exactly one solution."
            ),
        },
        {
            "description": "Calculate Dx (replace column 1 with b)",
            "expression": (
                f"Dx = |{f(c.b1)} {f(c.a12)}; {f(c.b2)} {f(c.a22)}| = "
                f"{_p(c.b1, d)}{_p(c.a22, d)} − {_p(c.a12, d)}{_p(c.b2, d)}"
                f" = {f(det_x)}"
            ),
            "latex": (
                f"D_x = {_matrix_latex(((c.b1, c.a12), (c.b2, c.a22)), d, 'vmatrix')}"
                f" = {_p(c.b1, d)}{_p(c.a22, d)} - {_p(c.a12, d)}{_p(c.b2, d)}"
                f" = {f(det_x)}"
            ),
            "explanation": "The x-column of A is replaced by the constants b1, b2.",
        },
        {
            "description": "Calculate Dy (replace column 2 with b)",
            "expression": (
                f"Dy = |{f(c.a11)} {f(c.b1)}; {f(c.a21)} {f(c.b2)}| = "
                f"{_p(c.a11, d)}{_p(c.b2, d)} − {_p(c.b1, d)}{_p(c.a21, d)}"
                f" = {f(det_y)}"
            ),
            "latex": (
                f"D_y = {_matrix_latex(((c.a11, c.b1), (c.a21, c.b2)), d, 'vmatrix')}"
                f" = {_p(c.a11, d)}{_p(c.b2, d)} - {_p(c.b1, d)}{_p(c.a21, d)}"
                f" = {f(det_y)}"
            ),
            "explanation": "The y-column of A is replaced by the constants b1, b2.",
        },
    ]
    if trace.solution is None:
        return steps

    x, y = trace.value("x"), trace.value("y")
    steps.append({
        "description": "Calculate x and y",
        "expression": (
            f"x = Dx / D = {f(det_x)} / {f(det)} = {format_fixed(x, d)}\n"
            f"y = Dy / D = {f(det_y)} / {f(det)} = {format_fixed(y, d)}"
        ),
        "latex": (
            f"x = \\frac{{D_x}}{{D}} = \\frac{{{f(det_x)}}}{{{f(det)}}} = {format_fixed(x, d)}"
            f" \\qquad "
            f"y = \\frac{{D_y}}{{D}} = \\frac{{{f(det_y)}}}{{{f(det)}}} = {format_fixed(y, d)}"
        ),
        "explanation": "Each unknown is its own determinant divided by D.",
    })
    return steps


# ── Gaussian Elimination ────────────────────────────────────────────────

def _gaussian_steps(trace: MethodTrace, c: Coefficients, d: int) -> list:
    f = partial(format_value, decimals=d)
    augmented = trace.value("augmented")
    steps = [{
        "description": "Start with the augmented matrix",
        "expression": _matrix_plain(augmented, d, bar_at=2),
        "latex": _matrix_latex(augmented, d, bar_at=2),
        "explanation": "Write the coefficients of A next to the constants b.",
    }]

    if trace.pivot is PivotStatus.DEGENERATE:
        steps.append({
            "description": "Zero pivot — elimination cannot start",
            "expression": "a11 = 0",
            "latex": "a_{11} = 0",
            "explanation": (
                "The leading coefficient of row 1 is zero, so the factor "
                "a21/a11 is undefined. Swap the rows before eliminating."
            ),
        })
        return steps

    rows = augmented
    if trace.pivot is PivotStatus.ROW_SWAP:
        rows = trace.value("row_swap")
        steps.append({
            "description": "Swap the rows (R1 ↔ R2)",
            "expression": _matrix_plain(rows, d, bar_at=2),
            "latex": (
                "R_1 \\leftrightarrow R_2: \\quad " + _matrix_latex(rows, d, bar_at=2)
            ),
            "explanation": (
                "The leading coefficient a11 is 0 and cannot be used as a pivot, "
                "so row 2 becomes the pivot row. The unknowns keep their order."
            ),
        })

    (p11, p12, q1), (p21, p22, q2) = rows
    factor = trace.value("factor")
    reduced_a22 = trace.value("reduced_a22")
    reduced_b2 = trace.value("reduced_b2")
    echelon = trace.value("echelon")
    ff = format_fixed(factor, d)
    steps.append({
        "description": f"Eliminate the first term in R2 (R2 ← R2 − {f(p21)}/{f(p11)}·R1)",
        "expression": (
            f"({f(p21)} − {ff}·{f(p11)})x + ({f(p22)} − {ff}·{f(p12)})y"
            f" = {f(q2)} − {ff}·{f(q1)}\n"
            + _matrix_plain(echelon, d, bar_at=2)
        ),
        "latex": (
            f"R_2 \\leftarrow R_2 - \\frac{{{f(p21)}}}{{{f(p11)}}} R_1: \\quad "
            + _matrix_latex(echelon, d, bar_at=2)
        ),
        "explanation": (
            f"The factor f = {f(p21)}/{f(p11)} = {ff} makes the x-coefficient of "
            f"row 2 zero, leaving the matrix in row echelon form."
        ),
    })

    if trace.solution is None:
        explanation = "After elimination a22' = 0, so y cannot be isolated."
        if c.determinant != 0:
            explanation += " " + ROUNDED_PIVOT_NOTE
        steps.append({
            "description": "Row 2 has no y-term",
            "expression": f"0y = {f(reduced_b2)}",
            "latex": f"0y = {f(reduced_b2)}",
            "explanation": explanation,
        })
        return steps

    y = trace.value("y")
    x = trace.value("x")
    steps.append({
        "description": "Back-substitution (from R2)",
        "expression": (
            f"{f(reduced_a22)}y = {f(reduced_b2)}  ⟹  "
            f"y = {f(reduced_b2)} / {f(reduced_a22)} = {format_fixed(y, d)}"
        ),
        "latex": (
            f"{f(reduced_a22)}y = {f(reduced_b2)} \\implies "
            f"y = \\frac{{{f(reduced_b2)}}}{{{f(reduced_a22)}}} = {format_fixed(y, d)}"
        ),
        "explanation": "Row 2 now contains only y, so divide by its coefficient.",
    })
    steps.append({
        "description": "Back-substitution (into R1)",
        "expression": (
            f"{f(p11)}x + {f(p12)}({format_fixed(y, d)}) = {f(q1)}  ⟹  "
            f"x = {format_fixed(x, d)}"
        ),
        "latex": (
            f"{f(p11)}x + {f(p12)}({format_fixed(y, d)}) = {f(q1)} \\implies "
            f"x = {format_fixed(x, d)}"
        ),
        "explanation": "Substitute y into row 1 and solve for x.",
    })
    return steps


# ── Matrix Inversion ────────────────────────────────────────────────────

def _inversion_steps(trace: MethodTrace, c: Coefficients, d: int) -> list:
    f = partial(format_value, decimals=d)
    det = trace.value("det")
    adjugate = trace.value("adjugate")
    steps = [
        {
            "description": "Calculate the determinant D of A",
            "expression": (
                f"D = {_p(c.a11, d)}{_p(c.a22, d)} − {_p(c.a12, d)}{_p(c.a21, d)}"
                f" = {f(det)}"
            ),
            "latex": f"D = {_matrix_latex(c.matrix, d, 'vmatrix')} = {f(det)}",
            "explanation": "A is invertible only when D ≠ 0.",
        },
        {
            "description": "Form the adjugate of A",
            "expression": "adj(A) =\n" + _matrix_plain(adjugate, d),
            "latex": f"\\operatorname{{adj}}(A) = {_matrix_latex(adjugate, d)}",
            "explanation": (
                "Swap the diagonal entries a11 and a22, and negate the "
                "off-diagonal entries a12 and a21."
            ),
        },
    ]
    if trace.solution is None:
        return steps

    inverse = trace.value("inverse")
    x, y = trace.value("x"), trace.value("y")
    steps += [
        {
            "description": "Divide by the determinant to get A⁻¹",
            "expression": f"A⁻¹ = adj(A) / {f(det)} =\n" + _matrix_plain(inverse, d),
            "latex": (
                f"A^{{-1}} = \\frac{{1}}{{{f(det)}}} {_matrix_latex(adjugate, d)}"
                f" = {_matrix_latex(inverse, d)}"
            ),
            "explanation": "Every entry of the adjugate is divided by D.",
        },
        {
            "description": "Multiply A⁻¹ by b",
            "expression": (
                f"x = {f(inverse[0][0])}·{_p(c.b1, d)} + {f(inverse[0][1])}·{_p(c.b2, d)}"
                f" = {format_fixed(x, d)}\n"
                f"y = {f(inverse[1][0])}·{_p(c.b1, d)} + {f(inverse[1][1])}·{_p(c.b2, d)}"
                f" = {format_fixed(y, d)}"
            ),
            "latex": (
                f"\\begin{{pmatrix}} x \\\\ y \\end{{pmatrix}} = "
                f"{_matrix_latex(inverse, d)} {_matrix_latex(((c.b1,), (c.b2,)), d)}"
                f" = {_matrix_latex(((x,), (y,)), d)}"
            ),
            "explanation": "Each unknown is the dot product of a row of A⁻¹ with b.",
        },
    ]
    return steps


# ── Geometric view ──────────────────────────────────────────────────────

def linear_combination_latex(plot: PlotData, decimals: int = DEFAULT_DECIMALS) -> str:
    """``x·v₁ + y·v₂ = b`` with the numbers filled in."""
    x, y = plot.solution_vector
    v1, v2, b = plot.column_vector1, plot.column_vector2, plot.constant_vector
    return (f"{format_fixed(x, decimals)} {_column_latex(v1, decimals)} + "
            f"{format_fixed(y, decimals)} {_column_latex(v2, decimals)} = "
            f"{_column_latex(b, decimals)}")


def line_equations(plot: PlotData, decimals: int = DEFAULT_DECIMALS) -> list:
    """Each equation as ``y = m·x + c`` (or ``x = k`` for a vertical line)."""
    out = []
    for line in (plot.line1, plot.line2):
        if line.is_vertical:
            out.append(f"x = {format_fixed(line.vertical_x, decimals)}")
        else:
            out.append(f"y = ({format_fixed(line.slope, decimals)})x + "
                       f"{format_fixed(line.intercept, decimals)}")
    return out


def _vector_steps(result: SolveResult, d: int) -> list:
    plot = result.plot_data
    vec = partial(_vector_plain, decimals=d)
    x, y = plot.solution_vector
    line1, line2 = line_equations(plot, d)
    return [
        {
            "description": "Write b as a linear combination of the columns of A",
            "expression": (
                f"{format_fixed(x, d)}·{vec(plot.column_vector1)} + "
                f"{format_fixed(y, d)}·{vec(plot.column_vector2)} = "
                f"{vec(plot.constant_vector)}"
            ),
            "latex": linear_combination_latex(plot, d),
            "explanation": (
                "The solution is the pair of scalars (x, y) that combines the "
                "column vectors of A into the constant vector b."
            ),
        },
        {
            "description": "Draw the scaled column vectors tip to tail",
            "expression": (
                f"x·v₁ = {vec(plot.scaled_vector1)},  y·v₂ = {vec(plot.scaled_vector2)}"
            ),
            "latex": (
                f"x\\vec{{v_1}} = {_column_latex(plot.scaled_vector1, d)}, "
                f"\\quad y\\vec{{v_2}} = {_column_latex(plot.scaled_vector2, d)}"
            ),
            "explanation": (
                "Draw v₁ scaled by x, then v₂ scaled by y starting from the tip "
                "of the first vector. The final point reached is the tip of b."
            ),
        },
        {
            "description": "Write each equation in slope-intercept form",
            "expression": f"Line 1: {line1}\nLine 2: {line2}",
            "latex": f"{line1} \\qquad {line2}",
            "explanation": "Each equation is a straight line in the xy-plane.",
        },
        {
            "description": "Find the intersection point",
            "expression": f"P = ({format_fixed(x, d)}, {format_fixed(y, d)})",
            "latex": f"\\mathbf{{P}}: ({format_fixed(x, d)}, {format_fixed(y, d)})",
            "explanation": "The solution is the single point lying on both lines.",
        },
    ]


# ── Singular system ─────────────────────────────────────────────────────

def _singular_steps(result: SolveResult, d: int) -> list:
    c = result.coefficients
    case = singular_case(c)
    if case == "infinite":
        geometry = (
            "The two equations describe the same line (lines are coincident), "
            "so infinitely many (x, y) pairs satisfy both."
        )
    else:
        geometry = (
            "The two lines are parallel and never intersect, so no (x, y) "
            "pair satisfies both."
        )
    return [{
        "description": "The determinant is zero",
        "expression": (
            f"D = {_p(c.a11, d)}{_p(c.a22, d)} − {_p(c.a12, d)}{_p(c.a21, d)} = 0"
        ),
        "latex": f"D = {_matrix_latex(c.matrix, d, 'vmatrix')} = 0",
        "explanation": (
            "The column vectors are linearly dependent, thus the system has no "
            f"unique solution. {geometry}"
        ),
    }]


# ── Public helpers ──────────────────────────────────────────────────────

def method_steps(result: SolveResult, method: str = "cramers",
                 decimals: int = DEFAULT_DECIMALS) -> list:
    """Numbered derivation steps for *method* (or the singular explanation)."""
    if method not in METHOD_INFO:
        raise ValueError(
            f"Unknown method '{method}'. Choose one of: {', '.join(METHOD_INFO)}."
        )
    if not result.has_unique_solution:
        return _numbered(_singular_steps(result, decimals))
    if method == "vectors":
        return _numbered(_vector_steps(result, decimals))

    builders = {
        "cramers": _cramers_steps,
        "gaussian": _gaussian_steps,
        "inversion": _inversion_steps,
    }
    trace = result.trace(method)
    return _numbered(builders[method](trace, result.coefficients, decimals))


def final_answer(result: SolveResult, decimals: int = DEFAULT_DECIMALS) -> str:
    if not result.has_unique_solution:
        return NO_UNIQUE_SOLUTION
    sol = result.solution
    return f"x = {format_fixed(sol.x, decimals)}, y = {format_fixed(sol.y, decimals)}"


def verification_steps(result: SolveResult, decimals: int = DEFAULT_DECIMALS,
                       tolerance: float = DEFAULT_TOLERANCE) -> list:
    """Substitute the solution back into both equations."""
    if not result.has_unique_solution:
        return []
    c = result.coefficients
    A = np.array(c.matrix, dtype=float)
    b = np.array(c.vector, dtype=float)
    sol = np.array([result.solution.x, result.solution.y], dtype=float)
    lhs = A @ sol
    xs, ys = format_fixed(sol[0], decimals), format_fixed(sol[1], decimals)

    steps = []
    for i, (row, value, target) in enumerate(zip(c.matrix, lhs, b), 1):
        ok = bool(np.isclose(value, target, rtol=tolerance, atol=tolerance))
        steps.append({
            "description": f"Substitute into equation ({i})",
            "expression": (
                f"{_p(row[0], decimals)}({xs}) + {_p(row[1], decimals)}({ys})"
                f" = {format_value(value, decimals)}  {'✓' if ok else '✗'}"
            ),
            "latex": (
                f"{_p(row[0], decimals)}({xs}) + {_p(row[1], decimals)}({ys})"
                f" = {format_value(value, decimals)}"
            ),
            "explanation": (
                f"The left side equals b{i} = {format_value(target, decimals)}"
                + ("." if ok else f", off by {abs(value - target):.3g}.")
            ),
            "residual": float(value - target),
        })
    return _numbered(steps)


def methods_agree(result: SolveResult, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True when all three methods produced the same (x, y) within *tolerance*."""
    if not result.has_unique_solution:
        return False
    sols = [result.trace(m).solution for m in ("cramers", "gaussian", "inversion")]
    if any(s is None for s in sols):
        return False
    arr = np.array([[s.x, s.y] for s in sols], dtype=float)
    return bool(np.allclose(arr, arr[0], rtol=tolerance, atol=tolerance))


def render_text(document: dict) -> str:
    """Plain-text rendering of a ``build_result`` document."""
    lines = [
        document["given"]["problem"],
        f"Method: {document['method']['name']}",
        f"Determinant D of A: {format_value(document['determinant'])}",
        "",
    ]
    for step in document["steps"]:
        lines.append(f"{step['step_number']}. {step['description']}")
        lines.extend(f"     {line}" for line in step["expression"].split("\n"))
        lines.append(f"   {step['explanation']}")
        lines.append("")

    lines.append(f"Answer: {document['final_answer']}")
    for note in document["summary"].get("notes", []):
        lines.append(f"Note: {note}")

    if document["verification_steps"]:
        lines.append("")
        lines.append("Verification:")
        for step in document["verification_steps"]:
            lines.append(f"  {step['expression']}")
    return "\n".join(lines)


def build_result(result: SolveResult, method: str = "cramers",
                 decimals: int = DEFAULT_DECIMALS,
                 tolerance: float = DEFAULT_TOLERANCE) -> dict:
    """
    Build the full derivation document for *result*.

    Returns a dict with ``equation``, ``given``, ``method``, ``determinant``,
    ``steps``, ``final_answer``, ``verification_steps`` and ``summary``.
    """
    t_start = time.perf_counter()
    c = result.coefficients
    info = METHOD_INFO.get(method)
    if info is None:
        raise ValueError(
            f"Unknown method '{method}'. Choose one of: {', '.join(METHOD_INFO)}."
        )

    system = format_system(c, decimals)
    steps = method_steps(result, method, decimals)
    verification = verification_steps(result, decimals, tolerance)

    notes = []
    if result.has_unique_solution:
        case = "one_solution"
        passed = all(abs(s["residual"]) <= tolerance * max(1.0, abs(b))
                     for s, b in zip(verification, c.vector))
        status = "pass" if passed and methods_agree(result, tolerance) else "fail"
        if result.gaussian.pivot is PivotStatus.ZERO_REDUCED_PIVOT:
            notes.append(ROUNDED_PIVOT_NOTE)
        if not passed:
            notes.append("Substituting the solution back does not reproduce b "
                         "within tolerance.")
    else:
        case = singular_case(c)
        status = "pass"

    parameters = {
        "equation_type": "Linear system (2 equations, 2 unknowns)",
        "variables": "x, y",
        "approach": info["approach"],
    }
    if method == "gaussian" and result.gaussian is not None:
        parameters["pivot"] = result.gaussian.pivot.value

    t_end = time.perf_counter()
    return {
        "equation": system,
        "given": {
            "problem": f"Solve the 2×2 linear system: {system}",
            "inputs": {
                "equations": system,
                "variables": "x, y",
                "coefficients": {
                    "a11": c.a11, "a12": c.a12, "b1": c.b1,
                    "a21": c.a21, "a22": c.a22, "b2": c.b2,
                },
            },
        },
        "method": {
            "name": info["name"],
            "description": info["description"],
            "parameters": parameters,
        },
        "determinant": result.determinant,
        "steps": steps,
        "final_answer": final_answer(result, decimals),
        "verification_steps": verification,
        "summary": {
            "case": case,
            "runtime_ms": round((t_end - t_start) * 1000, 2),
            "total_steps": len(steps),
            "verification_steps": len(verification),
            "validation_status": status,
            "notes": notes,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "library": f"NumPy {np.__version__}",
        },
    }
