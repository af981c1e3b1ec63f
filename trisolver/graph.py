"""
Graph builder for TriSolver.

Produces matplotlib Figures for embedding in the Tkinter GUI.  Two views:
  - lines   : both equations as lines in the xy-plane and their intersection
  - vectors : the column vectors of A, scaled by x and y and drawn tip to tail,
              reaching the constant vector b

Every call returns a fresh ``Figure`` (no pyplot state); the caller owns it
and discards it when the next result is drawn.
"""

import numpy as np
from matplotlib.figure import Figure

from trisolver.core import SolveResult, singular_case

# ── palettes ───────────────────────────────────────────────────────────────
_DARK_GRAPH = dict(
    C_BG    = "#0f0f0f",
    C_AX    = "#181818",
    C_GRID  = "#252525",
    C_TICK  = "#666666",
    C_SPINE = "#333333",
    C_LINE1 = "#1a8cff",   # equation 1 / column vector 1
    C_LINE2 = "#ff8c42",   # equation 2 / column vector 2
    C_RESULT= "#aaaaaa",   # constant vector b
    C_DOT   = "#4caf50",   # intersection
    C_TEXT  = "#cccccc",
    C_LEGEND= "#1e1e1e",
)

_LIGHT_GRAPH = dict(
    C_BG    = "#ffffff",
    C_AX    = "#f7f9fc",
    C_GRID  = "#dde2ea",
    C_TICK  = "#555555",
    C_SPINE = "#9baabb",
    C_LINE1 = "#0F4C75",
    C_LINE2 = "#e65100",
    C_RESULT= "#444444",
    C_DOT   = "#2e7d32",
    C_TEXT  = "#222222",
    C_LEGEND= "#ffffff",
)

VIEWS = ("lines", "vectors")


def palette(theme: str) -> dict:
    return _LIGHT_GRAPH if theme == "light" else _DARK_GRAPH


def _style_axes(ax, fig, p: dict) -> None:
    fig.patch.set_facecolor(p["C_BG"])
    ax.set_facecolor(p["C_AX"])
    ax.tick_params(colors=p["C_TICK"], labelsize=9)
    ax.xaxis.label.set_color(p["C_TEXT"])
    ax.yaxis.label.set_color(p["C_TEXT"])
    ax.title.set_color(p["C_TEXT"])
    for spine in ax.spines.values():
        spine.set_edgecolor(p["C_SPINE"])
    ax.grid(True, color=p["C_GRID"], linewidth=0.8, linestyle="--", alpha=0.7)
    ax.axhline(0, color=p["C_SPINE"], linewidth=0.8)
    ax.axvline(0, color=p["C_SPINE"], linewidth=0.8)


def _legend(ax, p: dict) -> None:
    ax.legend(fontsize=8, facecolor=p["C_LEGEND"], edgecolor=p["C_SPINE"],
              labelcolor=p["C_TEXT"])


def _text_figure(title: str, message: str, theme: str = "dark") -> Figure:
    """A blank figure carrying an explanation instead of a plot."""
    p = palette(theme)
    fig = Figure(figsize=(7, 3.4), dpi=100)
    fig.patch.set_facecolor(p["C_BG"])
    ax = fig.add_subplot(111)
    ax.set_facecolor(p["C_AX"])
    ax.axis("off")
    ax.text(0.5, 0.62, title, ha="center", va="center",
            fontsize=12, fontweight="bold", color=p["C_TEXT"])
    ax.text(0.5, 0.38, message, ha="center", va="center",
            fontsize=9, color=p["C_TEXT"], wrap=True)
    return fig


def _singular_figure(result: SolveResult, theme: str) -> Figure:
    if singular_case(result.coefficients) == "infinite":
        title = "Infinite solutions — lines are coincident"
    else:
        title = "No solution — lines are parallel"
    return _text_figure(
        title,
        "The determinant is 0: the column vectors are linearly dependent,\n"
        "thus the system has no unique solution.",
        theme,
    )


def _label(a: float, b: float, rhs: float) -> str:
    return f"{a:g}x + {b:g}y = {rhs:g}".replace("+ -", "− ")


# ── Intersecting lines ──────────────────────────────────────────────────────

def build_lines_figure(result: SolveResult, theme: str = "dark") -> Figure:
    """Plot both equations and mark their intersection point."""
    if not result.has_unique_solution:
        return _singular_figure(result, theme)

    p = palette(theme)
    c = result.coefficients
    plot = result.plot_data
    sol_x, sol_y = plot.intersection

    cx = sol_x if np.isfinite(sol_x) else 0.0
    x_range = np.linspace(cx - 8, cx + 8, 400)

    fig = Figure(figsize=(7, 3.8), dpi=100)
    ax = fig.add_subplot(111)
    _style_axes(ax, fig, p)

    y_all = []
    lines = (
        (plot.line1, _label(c.a11, c.a12, c.b1), p["C_LINE1"]),
        (plot.line2, _label(c.a21, c.a22, c.b2), p["C_LINE2"]),
    )
    for line, label, color in lines:
        if line.is_vertical:
            ax.axvline(line.vertical_x, color=color, linewidth=2, label=label)
        else:
            y_vals = line.slope * x_range + line.intercept
            ax.plot(x_range, y_vals, color=color, linewidth=2, label=label)
            y_all.append(y_vals)

    ax.scatter([sol_x], [sol_y], color=p["C_DOT"], s=90, zorder=5,
               label=f"Intersection: ({sol_x:.4g}, {sol_y:.4g})")
    ax.set_title(f"One solution — lines intersect at ({sol_x:.4g}, {sol_y:.4g})",
                 color=p["C_TEXT"], fontsize=9)
    ax.set_xlabel("x", color=p["C_TEXT"])
    ax.set_ylabel("y", color=p["C_TEXT"])

    # Clip y-axis around the intersection to avoid extreme values
    if y_all:
        y_cat = np.concatenate(y_all + [np.array([sol_y])])
        y_finite = y_cat[np.isfinite(y_cat)]
        if len(y_finite):
            ylo, yhi = np.percentile(y_finite, 2), np.percentile(y_finite, 98)
            ylo, yhi = min(ylo, sol_y), max(yhi, sol_y)
            pad = max((yhi - ylo) * 0.2, 1.0)
            ax.set_ylim(ylo - pad, yhi + pad)
    else:
        ax.set_ylim(sol_y - 8, sol_y + 8)

    _legend(ax, p)
    fig.tight_layout(pad=1.2)
    return fig


# ── Linear combination of column vectors ────────────────────────────────────

def _arrow(ax, start, vec, color, label) -> None:
    ax.quiver([start[0]], [start[1]], [vec[0]], [vec[1]],
              angles="xy", scale_units="xy", scale=1,
              color=color, width=0.006, label=label, zorder=4)


def build_vectors_figure(result: SolveResult, theme: str = "dark") -> Figure:
    """Draw x·v₁ then y·v₂ from its tip, ending at b."""
    if not result.has_unique_solution:
        return _singular_figure(result, theme)

    p = palette(theme)
    plot = result.plot_data
    v1, v2 = plot.column_vector1, plot.column_vector2
    s1, s2 = plot.scaled_vector1, plot.scaled_vector2
    b = plot.constant_vector
    x, y = plot.solution_vector

    fig = Figure(figsize=(7, 3.8), dpi=100)
    ax = fig.add_subplot(111)
    _style_axes(ax, fig, p)

    _arrow(ax, (0, 0), v1, p["C_LINE1"], f"v₁ = ({v1[0]:g}, {v1[1]:g})")
    _arrow(ax, (0, 0), v2, p["C_LINE2"], f"v₂ = ({v2[0]:g}, {v2[1]:g})")
    _arrow(ax, (0, 0), s1, p["C_LINE1"], f"x·v₁ (x = {x:.4g})")
    _arrow(ax, s1, s2, p["C_LINE2"], f"y·v₂ (y = {y:.4g})")
    _arrow(ax, (0, 0), b, p["C_RESULT"], f"b = ({b[0]:g}, {b[1]:g})")
    ax.scatter([b[0]], [b[1]], color=p["C_DOT"], s=60, zorder=5)

    pts = np.array([(0, 0), v1, v2, s1, b], dtype=float)
    pts = pts[np.all(np.isfinite(pts), axis=1)]
    lo, hi = pts.min(axis=0), pts.max(axis=0)
    pad = np.maximum((hi - lo) * 0.15, 1.0)
    ax.set_xlim(lo[0] - pad[0], hi[0] + pad[0])
    ax.set_ylim(lo[1] - pad[1], hi[1] + pad[1])
    ax.set_aspect("equal", adjustable="datalim")

    ax.set_title("Linear combination: x·v₁ + y·v₂ = b", color=p["C_TEXT"], fontsize=9)
    _legend(ax, p)
    fig.tight_layout(pad=1.2)
    return fig


def build_figure(result: SolveResult, view: str = "lines", theme: str = "dark") -> Figure:
    """Dispatch to the figure builder for *view* (``"lines"`` or ``"vectors"``)."""
    if view == "lines":
        return build_lines_figure(result, theme)
    if view == "vectors":
        return build_vectors_figure(result, theme)
    raise ValueError(f"Unknown graph view '{view}'. Choose one of: {', '.join(VIEWS)}.")
