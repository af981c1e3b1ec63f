"""Tests for the 2×2 solver core: the three methods, plot data and result variants."""

import json
import math
import random

import pytest

from trisolver import core
from trisolver.core import (
    Coefficients, PivotStatus, Status, cramers_rule, gaussian_elimination,
    matrix_inversion, solve,
)


# 2x + 3y = 7,  x − 2y = 1
EXAMPLE = dict(a11=2, a12=3, a21=1, a22=-2, b1=7, b2=1)


def _random_systems(n=200, seed=1234):
    rng = random.Random(seed)
    out = []
    while len(out) < n:
        vals = [rng.uniform(-10, 10) for _ in range(6)]
        if abs(core.determinant(*vals[:4])) > 0.5:
            out.append(tuple(vals))
    return out


# ── Cramer's Rule ────────────────────────────────────────────────────────

class TestCramers:
    def test_concrete_example(self):
        trace = cramers_rule(Coefficients(**EXAMPLE))
        assert trace.value("det") == -7
        assert trace.value("det_x") == -17
        assert trace.value("det_y") == -5
        assert trace.solution.x == pytest.approx(17 / 7)
        assert trace.solution.y == pytest.approx(5 / 7)

    def test_trace_order(self):
        trace = cramers_rule(Coefficients(**EXAMPLE))
        assert trace.names() == ["det", "det_x", "det_y", "x", "y"]

    def test_singular_has_no_solution(self):
        trace = cramers_rule((1, 2, 2, 4, 3, 6))
        assert trace.solution is None
        assert trace.value("det") == 0
        assert "x" not in trace


# ── Gaussian Elimination ─────────────────────────────────────────────────

class TestGaussian:
    def test_concrete_example(self):
        trace = gaussian_elimination(Coefficients(**EXAMPLE))
        assert trace.pivot is PivotStatus.OK
        assert trace.value("factor") == pytest.approx(0.5)
        assert trace.value("reduced_a22") == pytest.approx(-3.5)
        assert trace.value("reduced_b2") == pytest.approx(-2.5)
        assert trace.solution.y == pytest.approx(5 / 7)
        assert trace.solution.x == pytest.approx(17 / 7)

    def test_trace_order(self):
        trace = gaussian_elimination(Coefficients(**EXAMPLE))
        assert trace.names() == [
            "augmented", "factor", "reduced_a22", "reduced_b2",
            "echelon", "y", "x_numerator", "x",
        ]

    def test_determinant_equals_pivot_times_reduced_pivot(self):
        trace = gaussian_elimination(Coefficients(**EXAMPLE))
        a11 = trace.value("augmented")[0][0]
        assert a11 * trace.value("reduced_a22") == pytest.approx(-7)

    def test_echelon_form_has_zero_below_pivot(self):
        echelon = gaussian_elimination(Coefficients(**EXAMPLE)).value("echelon")
        assert echelon[1][0] == 0.0
        assert echelon[0] == (2, 3, 7)

    def test_zero_leading_coefficient_swaps_rows(self):
        trace = gaussian_elimination(Coefficients(0, 1, 1, 1, 5, 3))
        assert trace.pivot is PivotStatus.ROW_SWAP
        assert trace.names()[:2] == ["augmented", "row_swap"]
        assert trace.value("row_swap") == ((1, 1, 3), (0, 1, 5))
        assert trace.solution.x == -2
        assert trace.solution.y == 5

    def test_zero_leading_coefficient_without_swap_is_reported(self):
        trace = gaussian_elimination(Coefficients(0, 1, 1, 1, 5, 3),
                                     allow_row_swap=False)
        assert trace.pivot is PivotStatus.DEGENERATE
        assert trace.solution is None
        assert "factor" not in trace

    def test_no_pivot_in_either_row(self):
        trace = gaussian_elimination(Coefficients(0, 1, 0, 2, 1, 2))
        assert trace.pivot is PivotStatus.DEGENERATE
        assert trace.solution is None

    def test_reduced_pivot_zero_has_no_solution(self):
        trace = gaussian_elimination(Coefficients(1, 2, 2, 4, 3, 7))
        assert trace.value("reduced_a22") == 0
        assert trace.solution is None
        assert trace.pivot is PivotStatus.ZERO_REDUCED_PIVOT

    def test_reduced_pivot_rounded_to_zero_is_reported(self):
        result = solve(49, 1, 1, 1 / 49, 1, 2)
        assert result.determinant != 0
        assert result.status is Status.UNIQUE
        assert result.cramers.solution is not None
        assert result.inversion.solution is not None
        assert result.gaussian.solution is None
        assert result.gaussian.pivot is PivotStatus.ZERO_REDUCED_PIVOT
        assert result.to_dict()["gaussian"]["pivot"] == "zero_reduced_pivot"


# ── Matrix Inversion ─────────────────────────────────────────────────────

class TestInversion:
    def test_concrete_example(self):
        trace = matrix_inversion(Coefficients(**EXAMPLE))
        assert trace.names() == ["det", "adjugate", "inverse", "x", "y"]
        assert trace.value("adjugate") == ((-2, -3), (-1, 2))
        inverse = trace.value("inverse")
        assert inverse[0][0] == pytest.approx(2 / 7)
        assert inverse[0][1] == pytest.approx(3 / 7)
        assert inverse[1][0] == pytest.approx(1 / 7)
        assert inverse[1][1] == pytest.approx(-2 / 7)
        assert trace.solution.x == pytest.approx(17 / 7)
        assert trace.solution.y == pytest.approx(5 / 7)

    def test_singular_stops_after_adjugate(self):
        trace = matrix_inversion((1, 2, 2, 4, 3, 6))
        assert trace.solution is None
        assert trace.names() == ["det", "adjugate"]


# ── solve() ──────────────────────────────────────────────────────────────

class TestSolve:
    def test_concrete_example(self):
        result = solve(**EXAMPLE)
        assert result.determinant == -7
        assert result.status is Status.UNIQUE
        assert result.has_unique_solution
        assert result.solution.x == pytest.approx(2.428571428571)
        assert result.solution.y == pytest.approx(0.714285714286)
        assert result.solution == result.cramers.solution

    def test_singular_system(self):
        result = solve(1, 2, 2, 4, 3, 6)
        assert result.determinant == 0
        assert result.status is Status.SINGULAR
        assert not result.has_unique_solution
        assert result.solution is None
        assert result.cramers is None
        assert result.gaussian is None
        assert result.inversion is None
        assert result.plot_data is None

    def test_degenerate_pivot_still_unique(self):
        result = solve(0, 1, 1, 1, 5, 3)
        assert result.determinant == -1
        assert result.has_unique_solution
        assert result.gaussian.pivot is PivotStatus.ROW_SWAP
        for method in core.METHODS:
            sol = result.trace(method).solution
            assert not math.isnan(sol.x) and not math.isnan(sol.y)
            assert sol.x == pytest.approx(-2)
            assert sol.y == pytest.approx(5)

    @pytest.mark.parametrize("coeffs", _random_systems())
    def test_methods_agree_and_round_trip(self, coeffs):
        a11, a12, a21, a22, b1, b2 = coeffs
        result = solve(*coeffs)
        ref = result.cramers.solution
        for method in ("gaussian", "inversion"):
            sol = result.trace(method).solution
            assert sol.x == pytest.approx(ref.x, rel=1e-9, abs=1e-9)
            assert sol.y == pytest.approx(ref.y, rel=1e-9, abs=1e-9)
        assert a11 * ref.x + a12 * ref.y == pytest.approx(b1, rel=1e-9, abs=1e-9)
        assert a21 * ref.x + a22 * ref.y == pytest.approx(b2, rel=1e-9, abs=1e-9)

    def test_idempotent(self):
        first = solve(**EXAMPLE)
        second = solve(**EXAMPLE)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_nan_input_propagates(self):
        result = solve(float("nan"), 1, 1, 1, 1, 1)
        assert math.isnan(result.determinant)
        assert math.isnan(result.solution.x)

    def test_trace_rejects_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown method"):
            solve(**EXAMPLE).trace("lu")

    def test_to_dict_is_json_ready(self):
        data = solve(0, 1, 1, 1, 5, 3).to_dict()
        assert data["status"] == "unique"
        assert data["has_unique_solution"] is True
        assert data["gaussian"]["pivot"] == "row_swap"
        assert json.loads(json.dumps(data))["solution"] == {"x": -2.0, "y": 5.0}

    def test_singular_to_dict(self):
        data = solve(1, 2, 2, 4, 3, 6).to_dict()
        assert data["status"] == "singular"
        assert data["cramers"] is None and data["plot_data"] is None


# ── Plot data ────────────────────────────────────────────────────────────

class TestPlotData:
    def test_lines_and_vectors(self):
        plot = solve(**EXAMPLE).plot_data
        assert plot.column_vector1 == (2, 1)
        assert plot.column_vector2 == (3, -2)
        assert plot.constant_vector == (7, 1)
        assert plot.line1.slope == pytest.approx(-2 / 3)
        assert plot.line1.intercept == pytest.approx(7 / 3)
        assert plot.line2.slope == pytest.approx(0.5)
        assert plot.line2.intercept == pytest.approx(-0.5)
        assert plot.intersection == plot.solution_vector

    def test_scaled_vectors_sum_to_b(self):
        plot = solve(**EXAMPLE).plot_data
        sx = plot.scaled_vector1[0] + plot.scaled_vector2[0]
        sy = plot.scaled_vector1[1] + plot.scaled_vector2[1]
        assert sx == pytest.approx(7)
        assert sy == pytest.approx(1)

    def test_full_precision_is_kept(self):
        plot = solve(**EXAMPLE).plot_data
        assert plot.solution_vector[0] == 17 / 7

    def test_vertical_line(self):
        plot = solve(1, 0, 0, 1, 3, 4).plot_data
        assert plot.line1.is_vertical
        assert plot.line1.vertical_x == 3
        assert plot.line1.slope is None
        assert not plot.line2.is_vertical
        assert plot.line2.intercept == 4


# ── Singular classification ──────────────────────────────────────────────

@pytest.mark.parametrize(
    "coeffs,expected",
    [
        ((1, 1, 1, 1, 1, 2), "no_solution"),     # parallel lines
        ((1, 2, 2, 4, 3, 6), "infinite"),        # same line
        ((0, 0, 1, 1, 1, 2), "no_solution"),     # 0 = 1
        ((0, 0, 1, 1, 0, 2), "infinite"),        # 0 = 0 plus one line
    ],
)
def test_singular_case(coeffs, expected) -> None:
    assert core.singular_case(coeffs) == expected


def test_method_trace_value_missing_key() -> None:
    trace = cramers_rule(Coefficients(**EXAMPLE))
    with pytest.raises(KeyError):
        trace.value("inverse")
