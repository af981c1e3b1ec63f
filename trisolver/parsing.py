"""
Input parsing for TriSolver.

Turns user text into ``Coefficients`` before the solver is called, either
from the six form fields or from a typed system such as
``"2x + 3y = 7, x - 2y = 1"``.  Every failure is a ``ValueError`` whose
message names the offending field or equation.
"""

import math
import re

from sympy import Symbol, expand, symbols
from sympy.parsing.sympy_parser import (
    parse_expr, standard_transformations, implicit_multiplication_application,
    convert_xor, rationalize,
)

from trisolver.core import Coefficients

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
    rationalize,  # "0.1" -> Rational(1, 10)
)

# Form order: first equation, then second.
FIELD_NAMES = ("a11", "a12", "b1", "a21", "a22", "b2")

_ALLOWED_CHARS = set("abcdefghijklmnopqrstuvwxyz"
                     "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
                     "0123456789"
                     " \t+-*/^=().,;π√")


def _validate_characters(text: str) -> None:
    bad = {ch for ch in text if ch not in _ALLOWED_CHARS}
    if bad:
        raise ValueError(
            f"Invalid character(s): {' '.join(sorted(bad))}\n"
            f"Only letters, numbers, and math symbols "
            f"(+ - * / ^ = ( ) . , ;) are allowed."
        )


def _normalize(text: str) -> str:
    text = text.replace("√", "sqrt")
    text = text.replace("π", "(pi)")
    return text.replace("^", "**")


# ── Single form field ───────────────────────────────────────────────────

def parse_value(name: str, text) -> float:
    """Parse one coefficient field into a finite float.

    Accepts plain numbers as well as exact expressions such as ``1/3``,
    ``-2.5``, ``sqrt(2)`` or ``2pi``.
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        raw = str(text).strip() if text is not None else ""
        if not raw:
            raise ValueError(f"Field '{name}' is empty. Enter a number.")
        _validate_characters(raw)
        if "=" in raw:
            raise ValueError(f"Field '{name}' must be a number, not an equation.")
        try:
            expr = parse_expr(_normalize(raw), transformations=TRANSFORMATIONS)
        except Exception as e:
            raise ValueError(
                f"Could not parse '{raw}' in field '{name}'. Error: {e}"
            ) from e
        if getattr(expr, "free_symbols", None):
            raise ValueError(
                f"Field '{name}' must be a number; found symbol(s) "
                f"{', '.join(sorted(str(s) for s in expr.free_symbols))}."
            )
        try:
            z = complex(expr.evalf())
        except (AttributeError, TypeError, ValueError) as e:
            raise ValueError(f"Field '{name}' is not a number: '{raw}'.") from e
        if z.imag != 0:
            raise ValueError(f"Field '{name}' must be a real number, got {raw}.")
        value = z.real

    if not math.isfinite(value):
        raise ValueError(f"Field '{name}' must be a finite number.")
    return value


def parse_fields(fields: dict) -> Coefficients:
    """Build ``Coefficients`` from a mapping keyed by ``FIELD_NAMES``."""
    missing = [n for n in FIELD_NAMES if n not in fields]
    if missing:
        raise ValueError(f"Missing field(s): {', '.join(missing)}.")
    values = {n: parse_value(n, fields[n]) for n in FIELD_NAMES}
    return Coefficients(**values)


# ── Typed system ────────────────────────────────────────────────────────

def _detect_variables(equations: list) -> list:
    """Return the two unknowns, ``x`` and ``y`` first when present.

    Unknowns are the free symbols of the parsed equations, so function names
    such as ``sqrt``, ``sin`` or ``exp`` and constants like ``pi`` do not count.
    """
    names = set()
    for eq_str in equations:
        for side in eq_str.split("="):
            if side.strip():
                expr = _parse_side(side.strip(), [])
                names.update(s.name for s in expr.free_symbols)
    letters = sorted(names)
    if len(letters) > 2:
        raise ValueError(
            f"A 2×2 system has two unknowns, found {len(letters)}: "
            f"{', '.join(letters)}."
        )
    if set(letters) <= {"x", "y"}:
        return ["x", "y"]
    if len(letters) == 1:
        return letters + (["y"] if letters[0] != "y" else ["x"])
    return letters


def _parse_side(side: str, var_symbols: list):
    local = {s.name: s for s in var_symbols}
    try:
        return parse_expr(_normalize(side), local_dict=local,
                          transformations=TRANSFORMATIONS)
    except Exception as e:
        raise ValueError(f"Could not parse expression: '{side}'. Error: {e}") from e


def _linear_row(eq_str: str, xs: Symbol, ys: Symbol) -> tuple:
    if "=" not in eq_str:
        raise ValueError(f"Each equation must contain '='. Problem: {eq_str}")
    parts = eq_str.split("=")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise ValueError(
            f"Each equation must have exactly one '=' with an expression "
            f"on both sides. Problem: {eq_str}"
        )
    lhs = _parse_side(parts[0].strip(), [xs, ys])
    rhs = _parse_side(parts[1].strip(), [xs, ys])
    combined = expand(lhs - rhs)

    poly = combined.as_poly(xs, ys)
    if poly is None or poly.total_degree() > 1:
        raise ValueError(f"Equation is not linear in {xs}, {ys}: {eq_str}")

    a = combined.coeff(xs)
    b = combined.coeff(ys)
    c = -combined.subs({xs: 0, ys: 0})
    return a, b, c


def parse_system(text: str) -> Coefficients:
    """Parse ``"a11 x + a12 y = b1, a21 x + a22 y = b2"`` into coefficients.

    Equations are separated by ``,`` or ``;``.  Terms may sit on either side
    of ``=``; they are collected as ``a·x + b·y = c``.
    """
    if not text or not text.strip():
        raise ValueError("Enter a system of two equations, e.g. 2x + 3y = 7, x - 2y = 1")
    _validate_characters(text)
    raw_equations = [eq.strip() for eq in re.split(r"\s*[;,]\s*", text) if eq.strip()]
    if len(raw_equations) != 2:
        raise ValueError(
            f"Expected exactly two equations separated by ',' or ';', "
            f"got {len(raw_equations)}."
        )

    xn, yn = _detect_variables(raw_equations)
    xs, ys = symbols(f"{xn} {yn}")
    (a11, a12, b1), (a21, a22, b2) = (
        _linear_row(eq, xs, ys) for eq in raw_equations
    )
    values = {}
    for name, coeff in zip(FIELD_NAMES, (a11, a12, b1, a21, a22, b2)):
        if not coeff.is_number:
            raise ValueError(f"Coefficient {name} is not a number: {coeff}")
        values[name] = parse_value(name, str(coeff))
    return Coefficients(**values)
