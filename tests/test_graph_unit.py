import pytest
from matplotlib.figure import Figure

from trisolver import graph
from trisolver.core import solve


def _texts(fig: Figure) -> list:
    return [t.get_text() for ax in fig.axes for t in ax.texts]


def test_palette_and_style_axes() -> None:
    assert graph.palette("light") is graph._LIGHT_GRAPH
    assert graph.palette("dark") is graph._DARK_GRAPH
    assert graph.palette("unknown") is graph._DARK_GRAPH

    fig = Figure(figsize=(4, 2))
    ax = fig.add_subplot(111)
    graph._style_axes(ax, fig, graph._LIGHT_GRAPH)
    assert ax.get_xlabel() == ""
    assert len(ax.lines) == 2


def test_lines_figure_for_unique_solution() -> None:
    fig = graph.build_lines_figure(solve(2, 3, 1, -2, 7, 1))
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert len(ax.lines) == 4
    assert len(ax.collections) == 1
    assert ax.get_title() == "One solution — lines intersect at (2.429, 0.7143)"


def test_lines_figure_with_vertical_line() -> None:
    fig = graph.build_lines_figure(solve(1, 0, 0, 1, 3, 4))
    ax = fig.axes[0]
    assert len(ax.lines) == 4
    assert ax.lines[2].get_xdata()[0] == 3


def test_singular_figures_explain_the_case() -> None:
    parallel = graph.build_lines_figure(solve(1, 1, 1, 1, 1, 2))
    assert "No solution — lines are parallel" in _texts(parallel)

    coincident = graph.build_vectors_figure(solve(1, 2, 2, 4, 3, 6), "light")
    assert "Infinite solutions — lines are coincident" in _texts(coincident)


def test_vectors_figure() -> None:
    fig = graph.build_vectors_figure(solve(2, 3, 1, -2, 7, 1), "light")
    ax = fig.axes[0]
    assert len(ax.collections) == 6
    assert ax.get_title() == "Linear combination: x·v₁ + y·v₂ = b"


def test_build_figure_dispatch() -> None:
    result = solve(2, 3, 1, -2, 7, 1)
    assert len(graph.build_figure(result, "lines").axes[0].lines) == 4
    assert len(graph.build_figure(result, "vectors").axes[0].collections) == 6
    with pytest.raises(ValueError, match="Unknown graph view"):
        graph.build_figure(result, "surface")


def test_each_call_returns_a_new_figure() -> None:
    result = solve(2, 3, 1, -2, 7, 1)
    assert graph.build_figure(result) is not graph.build_figure(result)
