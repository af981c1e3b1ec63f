"""
TriSolver — Tkinter GUI

A form-based interface for solving a 2×2 linear system step by step.
Six coefficient fields, a method selector, a scrollable derivation area and
an embedded graph of the intersecting lines or the column vectors.
"""

import logging
import tkinter as tk
from tkinter import ttk, font as tkfont

from trisolver import config
from trisolver.core import solve_coefficients
from trisolver.derivation import METHOD_INFO, build_result, format_value
from trisolver.parsing import FIELD_NAMES, parse_fields

from gui import themes

logger = logging.getLogger("trisolver.gui")

METHOD_LABELS = {key: info["name"] for key, info in METHOD_INFO.items()}

EXAMPLE_FIELDS = {"a11": "2", "a12": "3", "b1": "7", "a21": "1", "a22": "-2", "b2": "1"}


class TriSolverApp(tk.Tk):
    """Main application window."""

    def __init__(self) -> None:
        super().__init__()
        settings = config.get_settings()
        self._theme: str = settings["theme"]
        self._decimals: int = settings["decimals"]
        self._method: str = settings["method"]
        self._graph_view: str = settings["graph_view"]
        self._show_graph: bool = settings["show_graph"]
        themes.apply_theme(self._theme)

        self.title("TriSolver — 2×2 Linear System Solver")
        self.geometry("980x860")
        self.minsize(680, 600)
        self.configure(bg=themes.BG)

        # ── Fonts ────────────────────────────────────────────────────
        self._default = tkfont.Font(family="Segoe UI", size=13)
        self._bold    = tkfont.Font(family="Segoe UI", size=13, weight="bold")
        self._title   = tkfont.Font(family="Segoe UI", size=20, weight="bold")
        self._mono    = tkfont.Font(family="Consolas", size=13)
        self._small   = tkfont.Font(family="Segoe UI", size=11)

        self._entries: dict = {}
        self._graph_panel = None          # (figure, mpl canvas, tk widget)
        self._last_result = None

        self._build_ui()
        self._fill_fields(EXAMPLE_FIELDS)

        self.bind("<Return>", lambda _: self._on_solve())
        self.bind("<Escape>", lambda _: self._clear_all())

    # ── UI construction ─────────────────────────────────────────────────

    def _build_ui(self) -> None:
        # header
        self._header = tk.Frame(self, bg=themes.HEADER_BG, height=64)
        self._header.pack(fill=tk.X)
        self._header.pack_propagate(False)

        self._title_lbl = tk.Label(
            self._header, text="TriSolver", font=self._title,
            bg=themes.HEADER_BG, fg=themes.ACCENT,
        )
        self._title_lbl.pack(side=tk.LEFT, padx=20)

        self._theme_btn = tk.Button(
            self._header, text=self._theme_label(), font=self._small,
            bg=themes.HEADER_BG, fg=themes.TEXT_DIM,
            activebackground=themes.HEADER_BG,
            activeforeground=themes.TEXT_BRIGHT,
            bd=0, padx=12, pady=6, cursor="hand2",
            relief=tk.FLAT, highlightthickness=1,
            highlightbackground=themes.STEP_BORDER,
            command=self._toggle_theme,
        )
        self._theme_btn.pack(side=tk.RIGHT, padx=20)

        # form: a11 x + a12 y = b1 / a21 x + a22 y = b2
        self._form = tk.Frame(self, bg=themes.BG, pady=14)
        self._form.pack(fill=tk.X, padx=20)

        layout = (("a11", "x  +"), ("a12", "y  ="), ("b1", ""),
                  ("a21", "x  +"), ("a22", "y  ="), ("b2", ""))
        self._form_labels = []
        for i, (name, suffix) in enumerate(layout):
            row, col = divmod(i, 3)
            entry = tk.Entry(
                self._form, width=8, font=self._mono, justify=tk.RIGHT,
                bg=themes.INPUT_BG, fg=themes.TEXT_BRIGHT,
                insertbackground=themes.TEXT_BRIGHT,
                highlightbackground=themes.INPUT_BORDER, highlightthickness=1,
                bd=0, relief=tk.FLAT,
            )
            entry.grid(row=row, column=col * 2, padx=(0, 6), pady=4, ipady=4)
            self._entries[name] = entry
            if suffix:
                lbl = tk.Label(self._form, text=suffix, font=self._mono,
                               bg=themes.BG, fg=themes.TEXT)
                lbl.grid(row=row, column=col * 2 + 1, padx=(0, 10))
                self._form_labels.append(lbl)

        # controls
        self._controls = tk.Frame(self, bg=themes.BG)
        self._controls.pack(fill=tk.X, padx=20, pady=(0, 10))

        self._method_var = tk.StringVar(value=METHOD_LABELS[self._method])
        self._method_box = ttk.Combobox(
            self._controls, textvariable=self._method_var, state="readonly",
            values=list(METHOD_LABELS.values()), width=22, font=self._default,
        )
        self._method_box.pack(side=tk.LEFT)
        self._method_box.bind("<<ComboboxSelected>>", self._on_method_change)

        self._solve_btn = tk.Button(
            self._controls, text="Solve ➤", font=self._bold,
            bg=themes.ACCENT, fg="#ffffff",
            activebackground=themes.ACCENT_HOVER, activeforeground="#ffffff",
            bd=0, padx=18, pady=6, cursor="hand2", command=self._on_solve,
        )
        self._solve_btn.pack(side=tk.LEFT, padx=(12, 6))

        self._clear_btn = tk.Button(
            self._controls, text="Clear", font=self._default,
            bg=themes.STEP_BG, fg=themes.TEXT,
            activebackground=themes.STEP_BORDER, activeforeground=themes.TEXT_BRIGHT,
            bd=0, padx=14, pady=6, cursor="hand2", command=self._clear_all,
        )
        self._clear_btn.pack(side=tk.LEFT)

        self._graph_var = tk.BooleanVar(value=self._show_graph)
        self._graph_chk = tk.Checkbutton(
            self._controls, text="Show graph", variable=self._graph_var,
            font=self._small, bg=themes.BG, fg=themes.TEXT,
            selectcolor=themes.INPUT_BG, activebackground=themes.BG,
            command=self._on_graph_toggle,
        )
        self._graph_chk.pack(side=tk.RIGHT)

        # output
        self._body = tk.PanedWindow(self, orient=tk.VERTICAL, bg=themes.BG,
                                    sashwidth=6, bd=0)
        self._body.pack(fill=tk.BOTH, expand=True, padx=20, pady=(0, 16))

        text_frame = tk.Frame(self._body, bg=themes.STEP_BG)
        self._output = tk.Text(
            text_frame, font=self._mono, wrap=tk.WORD,
            bg=themes.STEP_BG, fg=themes.TEXT, bd=0, padx=12, pady=10,
            highlightthickness=1, highlightbackground=themes.STEP_BORDER,
        )
        scrollbar = ttk.Scrollbar(text_frame, orient=tk.VERTICAL,
                                  command=self._output.yview)
        self._output.configure(yscrollcommand=scrollbar.set)
        self._output.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self._body.add(text_frame, minsize=200)

        self._graph_frame = tk.Frame(self._body, bg=themes.STEP_BG)
        self._body.add(self._graph_frame, minsize=220)

        self._configure_tags()
        self._write_welcome()

    def _configure_tags(self) -> None:
        self._output.tag_configure("heading", font=self._bold, foreground=themes.HEADING)
        self._output.tag_configure("det", font=self._bold, foreground=themes.DETERMINANT)
        self._output.tag_configure("answer", font=self._bold, foreground=themes.ANSWER)
        self._output.tag_configure("verify_ok", foreground=themes.VERIFY_OK)
        self._output.tag_configure("verify_fail", foreground=themes.VERIFY_FAIL)
        self._output.tag_configure("note", font=self._small, foreground=themes.NOTE)
        self._output.tag_configure("error", foreground=themes.ERROR)
        self._output.tag_configure("dim", font=self._small, foreground=themes.TEXT_DIM)

    def _theme_label(self) -> str:
        return "🌙 Dark" if self._theme == "light" else "☀ Light"

    # ── Form helpers ────────────────────────────────────────────────────

    def _read_fields(self) -> dict:
        return {name: self._entries[name].get() for name in FIELD_NAMES}

    def _fill_fields(self, values: dict) -> None:
        for name, entry in self._entries.items():
            entry.delete(0, tk.END)
            entry.insert(0, values.get(name, ""))

    def _clear_all(self) -> None:
        self._fill_fields({})
        self._last_result = None
        self._clear_graph()
        self._write_welcome()
        self._entries["a11"].focus_set()

    def _selected_method(self) -> str:
        label = self._method_var.get()
        for key, name in METHOD_LABELS.items():
            if name == label:
                return key
        return "cramers"

    # ── Solve flow ──────────────────────────────────────────────────────

    def _on_solve(self) -> None:
        try:
            coeffs = parse_fields(self._read_fields())
        except ValueError as e:
            logger.info("Rejected input: %s", e)
            self._show_error(self._friendly_error(e))
            return

        result = solve_coefficients(coeffs)
        self._last_result = result
        self._render(result)

    def _render(self, result) -> None:
        document = build_result(result, self._method, self._decimals)
        self._render_document(document)
        if self._show_graph:
            self._render_graph(result)
        else:
            self._clear_graph()

    def _on_method_change(self, _event=None) -> None:
        self._method = self._selected_method()
        self._persist(method=self._method)
        if self._last_result is not None:
            self._render(self._last_result)

    def _on_graph_toggle(self) -> None:
        self._show_graph = bool(self._graph_var.get())
        self._persist(show_graph=self._show_graph)
        if self._last_result is not None:
            self._render(self._last_result)

    def _persist(self, **changes) -> None:
        settings = config.get_settings()
        settings.update(changes)
        try:
            config.save_settings(settings)
        except OSError as e:
            logger.warning("Could not save settings: %s", e)

    # ── Output rendering ────────────────────────────────────────────────

    def _write_welcome(self) -> None:
        self._output.configure(state=tk.NORMAL)
        self._output.delete("1.0", tk.END)
        self._output.insert(tk.END, "Welcome to TriSolver\n", "heading")
        self._output.insert(
            tk.END,
            "Enter the six coefficients of\n\n"
            "    a11·x + a12·y = b1\n"
            "    a21·x + a22·y = b2\n\n"
            "choose a method and press Solve. Fractions such as 1/3 are accepted.\n",
            "dim",
        )
        self._output.configure(state=tk.DISABLED)

    def _render_document(self, document: dict) -> None:
        out = self._output
        out.configure(state=tk.NORMAL)
        out.delete("1.0", tk.END)

        out.insert(tk.END, f"{document['method']['name']}\n", "heading")
        out.insert(tk.END, f"{document['equation']}\n", "dim")
        out.insert(tk.END,
                   f"Determinant D of A: {format_value(document['determinant'], self._decimals)}\n\n",
                   "det")

        for step in document["steps"]:
            out.insert(tk.END, f"{step['step_number']}. {step['description']}\n", "heading")
            for line in step["expression"].split("\n"):
                out.insert(tk.END, f"    {line}\n")
            out.insert(tk.END, f"{step['explanation']}\n\n", "dim")

        tag = "answer" if document["summary"]["case"] == "one_solution" else "error"
        out.insert(tk.END, f"{document['final_answer']}\n", tag)
        for note in document["summary"].get("notes", []):
            out.insert(tk.END, f"{note}\n", "note")

        if document["verification_steps"]:
            out.insert(tk.END, "\nVerification\n", "heading")
            for step in document["verification_steps"]:
                ok = "✓" in step["expression"]
                out.insert(tk.END, f"    {step['expression']}\n",
                           "verify_ok" if ok else "verify_fail")
        out.configure(state=tk.DISABLED)

    def _render_graph(self, result) -> None:
        """Replace the current figure with a new one for *result*."""
        from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
        from trisolver.graph import build_figure

        self._clear_graph()
        view = "vectors" if self._method == "vectors" else self._graph_view
        fig = build_figure(result, view=view, theme=self._theme)
        canvas = FigureCanvasTkAgg(fig, master=self._graph_frame)
        canvas.draw()
        widget = canvas.get_tk_widget()
        widget.configure(bg=themes.STEP_BG)
        widget.pack(fill=tk.BOTH, expand=True)
        self._graph_panel = (fig, canvas, widget)

    def _clear_graph(self) -> None:
        """Release the figure owned by the previous render, if any."""
        if self._graph_panel is None:
            return
        fig, _canvas, widget = self._graph_panel
        self._graph_panel = None
        widget.destroy()
        fig.clear()

    @staticmethod
    def _friendly_error(exc: Exception) -> str:
        msg = str(exc)
        if "empty" in msg:
            return f"Please fill in every coefficient.\n{msg}"
        if "Could not parse" in msg or "Invalid character" in msg:
            return ("Could not understand one of the coefficients. "
                    "Use numbers such as 3, -2.5 or 1/3.\n"
                    f"Details: {msg}")
        if isinstance(exc, ValueError):
            return msg
        return f"TriSolver could not process this input.\nDetails: {msg}"

    def _show_error(self, message: str) -> None:
        self._last_result = None
        self._clear_graph()
        self._output.configure(state=tk.NORMAL)
        self._output.delete("1.0", tk.END)
        self._output.insert(tk.END, "Invalid input\n", "heading")
        self._output.insert(tk.END, f"{message}\n", "error")
        self._output.configure(state=tk.DISABLED)

    # ── Theme ────────────────────────────────────────────────────────────

    def _toggle_theme(self) -> None:
        self._theme = "light" if self._theme == "dark" else "dark"
        self._apply_theme()
        self._persist(theme=self._theme)
        if self._last_result is not None:
            self._render(self._last_result)

    def _apply_theme(self) -> None:
        """Update global colour variables and re-style all static widgets."""
        themes.apply_theme(self._theme)
        p = themes.palette(self._theme)

        self.configure(bg=p["BG"])
        self._header.configure(bg=p["HEADER_BG"])
        self._title_lbl.configure(bg=p["HEADER_BG"], fg=p["ACCENT"])
        self._theme_btn.configure(
            text=self._theme_label(),
            bg=p["HEADER_BG"], fg=p["TEXT_DIM"],
            activebackground=p["HEADER_BG"], activeforeground=p["TEXT_BRIGHT"],
            highlightbackground=p["STEP_BORDER"],
        )
        for frame in (self._form, self._controls, self._body):
            frame.configure(bg=p["BG"])
        for lbl in self._form_labels:
            lbl.configure(bg=p["BG"], fg=p["TEXT"])
        for entry in self._entries.values():
            entry.configure(bg=p["INPUT_BG"], fg=p["TEXT_BRIGHT"],
                            insertbackground=p["TEXT_BRIGHT"],
                            highlightbackground=p["INPUT_BORDER"])
        self._solve_btn.configure(bg=p["ACCENT"], activebackground=p["ACCENT_HOVER"])
        self._clear_btn.configure(bg=p["STEP_BG"], fg=p["TEXT"],
                                  activebackground=p["STEP_BORDER"])
        self._graph_chk.configure(bg=p["BG"], fg=p["TEXT"],
                                  selectcolor=p["INPUT_BG"], activebackground=p["BG"])
        self._output.configure(bg=p["STEP_BG"], fg=p["TEXT"],
                               highlightbackground=p["STEP_BORDER"])
        self._graph_frame.configure(bg=p["STEP_BG"])
        self._configure_tags()
