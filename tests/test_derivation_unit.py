import json

import pytest

from trisolver import derivation
from trisolver.core import Coefficients, gaussian_elimination, solve
from trisolver.derivation import (
    NO_UNIQUE_SOLUTION, ROUNDED_PIVOT_NOTE, build_result, final_answer, format_equation,
    format_fixed, format_value, line_equations, method_steps, methods_agree,
    render_text, verification_steps,
)

EXAMPLE = (2, 3, 1, -2, 7, 1)


@pytest.fixture
def example():
    return solve(*EXAMPLE)


# ── Formatting ──────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "value,expected",
    [
        (7.0, "7"),
        (-17, "-17"),
        (2.5, "2.5"),
        (1 / 3, "0.3333"),
        (-0.00001, "0"),
        (float("nan"), "NaN"),
        (float("inf"), "∞"),
    ],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_value_respects_decimals():
    assert format_value(1 / 3, 2) == "0.33"


@pytest.mark.parametrize(
    "value,expected",
    [(17 / 7, "2.4286"), (5 / 7, "0.7143"), (-0.00001, "0.0000"), (3, "3.0000")],
)
def test_format_fixed(value, expected):
    assert format_fixed(value) == expected


@pytest.mark.parametrize(
    "a,b,rhs,expected",
    [
        (2, 3, 7, "2x + 3y = 7"),
        (1, -2, 1, "x − 2y = 1"),
        (0, -1, 2, "−y = 2"),
        (-1.5, 0, 2, "−1.5x = 2"),
        (0, 0, 3, "0 = 3"),
    ],
)
def test_format_equation(a, b, rhs, expected):
    assert format_equation(a, b, rhs) == expected


# ── Method steps ────────────────────────────────────────────────────────

class TestCramersSteps:
    def test_four_numbered_steps(self, example):
        steps = method_steps(example, "cramers")
        assert [s["step_number"] for s in steps] == [1, 2, 3, 4]
        assert steps[-1]["description"] == "Calculate x and y"

    def test_determinant_latex(self, example):
        first = method_steps(example, "cramers")[0]
        assert "\\begin{vmatrix} 2 & 3 \\\\ 1 & -2 \\end{vmatrix}" in first["latex"]
        assert first["expression"].endswith("= -7")

    def test_quotients(self, example):
        last = method_steps(example, "cramers")[-1]["expression"]
        assert "x = Dx / D = -17 / -7 = 2.4286" in last
        assert "y = Dy / D = -5 / -7 = 0.7143" in last


class TestGaussianSteps:
    def test_regular_elimination(self, example):
        steps = method_steps(example, "gaussian")
        assert steps[0]["description"] == "Start with the augmented matrix"
        assert "[ 2  3  |  7 ]" in steps[0]["expression"]
        assert steps[1]["description"].startswith("Eliminate")
        assert steps[-1]["description"] == "Back-substitution (into R1)"
        assert steps[-1]["expression"].endswith("x = 2.4286")

    def test_row_swap_is_narrated(self):
        steps = method_steps(solve(0, 1, 1, 1, 5, 3), "gaussian")
        assert len(steps) == 5
        assert steps[1]["description"] == "Swap the rows (R1 ↔ R2)"
        assert "[ 1  1  |  3 ]" in steps[1]["expression"]
        assert "nan" not in " ".join(s["expression"] for s in steps).lower()

    def test_degenerate_pivot_step(self):
        trace = gaussian_elimination(Coefficients(0, 1, 1, 1, 5, 3),
                                     allow_row_swap=False)
        steps = derivation._gaussian_steps(trace, Coefficients(0, 1, 1, 1, 5, 3), 4)
        assert len(steps) == 2
        assert steps[1]["expression"] == "a11 = 0"


class TestInversionSteps:
    def test_steps(self, example):
        steps = method_steps(example, "inversion")
        assert len(steps) == 4
        assert steps[1]["description"] == "Form the adjugate of A"
        assert steps[2]["description"] == "Divide by the determinant to get A⁻¹"
        assert "0.2857" in steps[2]["expression"]


class TestVectorSteps:
    def test_steps(self, example):
        steps = method_steps(example, "vectors")
        assert len(steps) == 4
        assert steps[0]["expression"] == "2.4286·(2, 1) + 0.7143·(3, -2) = (7, 1)"
        assert steps[-1]["expression"] == "P = (2.4286, 0.7143)"

    def test_line_equations(self, example):
        assert line_equations(example.plot_data) == [
            "y = (-0.6667)x + 2.3333",
            "y = (0.5000)x + -0.5000",
        ]

    def test_vertical_line_equation(self):
        assert line_equations(solve(1, 0, 0, 1, 3, 4).plot_data) == [
            "x = 3.0000",
            "y = (0.0000)x + 4.0000",
        ]


def test_unknown_method_raises(example):
    with pytest.raises(ValueError, match="Unknown method"):
        method_steps(example, "lu")
    with pytest.raises(ValueError, match="Unknown method"):
        build_result(example, "lu")


# ── Answer and verification ─────────────────────────────────────────────

def test_final_answer(example):
    assert final_answer(example) == "x = 2.4286, y = 0.7143"
    assert final_answer(example, 2) == "x = 2.43, y = 0.71"


def test_verification_residuals(example):
    steps = verification_steps(example)
    assert len(steps) == 2
    for step in steps:
        assert abs(step["residual"]) < 1e-9
        assert "✓" in step["expression"]


def test_methods_agree(example):
    assert methods_agree(example)
    assert not methods_agree(solve(1, 2, 2, 4, 3, 6))


# ── build_result ────────────────────────────────────────────────────────

class TestBuildResult:
    def test_document_shape(self, example):
        doc = build_result(example)
        assert set(doc) == {
            "equation", "given", "method", "determinant", "steps",
            "final_answer", "verification_steps", "summary",
        }
        assert doc["equation"] == "2x + 3y = 7, x − 2y = 1"
        assert doc["method"]["name"] == "Cramer's Rule"
        assert doc["determinant"] == -7
        assert doc["given"]["inputs"]["coefficients"]["a22"] == -2

    def test_summary(self, example):
        summary = build_result(example)["summary"]
        assert summary["case"] == "one_solution"
        assert summary["validation_status"] == "pass"
        assert summary["total_steps"] == 4
        assert summary["verification_steps"] == 2
        assert summary["library"].startswith("NumPy ")

    def test_gaussian_pivot_parameter(self):
        doc = build_result(solve(0, 1, 1, 1, 5, 3), "gaussian")
        assert doc["method"]["parameters"]["pivot"] == "row_swap"
        assert doc["final_answer"] == "x = -2.0000, y = 5.0000"

    def test_no_notes_for_a_clean_solve(self, example):
        assert build_result(example)["summary"]["notes"] == []

    def test_rounded_reduced_pivot_is_explained(self):
        doc = build_result(solve(49, 1, 1, 1 / 49, 1, 2), "gaussian")
        assert doc["method"]["parameters"]["pivot"] == "zero_reduced_pivot"
        assert doc["summary"]["validation_status"] == "fail"
        assert ROUNDED_PIVOT_NOTE in doc["summary"]["notes"]
        assert ROUNDED_PIVOT_NOTE in doc["steps"][-1]["explanation"]
        assert f"Note: {ROUNDED_PIVOT_NOTE}" in render_text(doc)

    def test_singular_infinite(self):
        doc = build_result(solve(1, 2, 2, 4, 3, 6), "inversion")
        assert doc["summary"]["case"] == "infinite"
        assert len(doc["steps"]) == 1
        assert doc["final_answer"] == NO_UNIQUE_SOLUTION
        assert doc["verification_steps"] == []
        assert "coincident" in doc["steps"][0]["explanation"]

    def test_singular_parallel(self):
        doc = build_result(solve(1, 1, 1, 1, 1, 2))
        assert doc["summary"]["case"] == "no_solution"
        assert "parallel" in doc["steps"][0]["explanation"]

    def test_json_serialisable(self, example):
        doc = build_result(example, "vectors")
        assert json.loads(json.dumps(doc, ensure_ascii=False))["final_answer"] == (
            "x = 2.4286, y = 0.7143"
        )


def test_render_text(example):
    text = render_text(build_result(example))
    assert text.startswith("Solve the 2×2 linear system: 2x + 3y = 7, x − 2y = 1")
    assert "Method: Cramer's Rule" in text
    assert "Determinant D of A: -7" in text
    assert "Answer: x = 2.4286, y = 0.7143" in text
    assert "Verification:" in text


def test_render_text_singular():
    text = render_text(build_result(solve(1, 1, 1, 1, 1, 2)))
    assert f"Answer: {NO_UNIQUE_SOLUTION}" in text
    assert "Verification:" not in text
