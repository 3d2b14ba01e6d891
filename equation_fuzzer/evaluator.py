"""SymPy-backed expression evaluator.

Expressions are parsed once with :func:`sympy.parsing.sympy_parser.parse_expr`
and turned into NumPy callables with :func:`sympy.lambdify`.  A comparison
outside brackets (``<``, ``<=``, ``>``, ``>=``, ``==``, ``=``, ``!=``) makes the
expression a relation which evaluates to ``1.0`` when it holds and ``0.0``
otherwise; bracketed comparisons combine with ``&`` and ``|``.

Expressions are kept exactly as written, with no symbolic simplification, and
evaluation follows IEEE semantics on float64 values: domain errors give NaN and
overflows or divisions by zero give infinities rather than exceptions.
Arithmetic errors between literal constants (``1/0``) give NaN.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

import numpy as np
import sympy as sp
from sympy.logic.boolalg import Boolean
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .assignment import variable_names

__all__ = ["CompileError", "CompiledExpression", "compile_expression", "parse_relation_sides"]

_TRANSFORMATIONS = (*standard_transformations, convert_xor, implicit_multiplication_application)

_RELATION_RE = re.compile(r"(<=|>=|==|!=|=|<|>)")

_RELATIONS: dict[str, Callable[[Any, Any], Any]] = {
    "<": sp.Lt,
    "<=": sp.Le,
    ">": sp.Gt,
    ">=": sp.Ge,
    "==": sp.Eq,
    "=": sp.Eq,
    "!=": sp.Ne,
}


class CompileError(ValueError):
    """Raised when an expression cannot be compiled."""

    def __init__(self, message: str, expression: str) -> None:
        super().__init__(message)
        self.message = message
        self.expression = expression

    def __str__(self) -> str:
        return f"{self.message} (expression: {self.expression})"


def parse_relation_sides(text: str) -> tuple[str, str, str]:
    """Return ``(op, lhs, rhs)`` for the first comparison outside any brackets.

    ``op`` is the empty string when ``text`` has no top-level comparison, in
    which case ``lhs`` is the whole text and ``rhs`` is empty.
    """
    depth = 0
    for i, ch in enumerate(text):
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif depth == 0:
            m = _RELATION_RE.match(text, i)
            if m:
                return m.group(1), text[:i].strip(), text[m.end(1) :].strip()
    return "", text.strip(), ""


# Named constants are placeholder symbols resolved to floats in the lambdify
# namespace; they never share a name with a variable argument.
_CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "E": math.e,
    "inf": math.inf,
    "nan": math.nan,
    "epsilon": float(np.finfo(np.float64).eps),
}
_CONSTANT_SYMBOLS: dict[str, sp.Symbol] = {name: sp.Symbol(f"_const_{name}") for name in _CONSTANTS}
_CONSTANT_NAMESPACE: dict[str, float] = {
    _CONSTANT_SYMBOLS[name].name: value for name, value in _CONSTANTS.items()
}


def _parse_side(text: str, local_dict: dict[str, Any]) -> Any:
    return parse_expr(text, local_dict=dict(local_dict), transformations=_TRANSFORMATIONS, evaluate=False)


def _parse(text: str, local_dict: dict[str, Any]) -> Any:
    """Parse ``text`` without symbolic simplification (``a/a`` stays ``a/a``)."""
    op, lhs, rhs = parse_relation_sides(text)
    if not op:
        return _parse_side(lhs, local_dict)
    if not lhs or not rhs:
        raise SyntaxError(f"missing operand for '{op}'")
    return _RELATIONS[op](_parse_side(lhs, local_dict), _parse_side(rhs, local_dict), evaluate=False)


def _to_float(raw: Any) -> float:
    try:
        out = complex(raw)
    except (TypeError, ValueError):
        return math.nan
    return out.real if out.imag == 0 else math.nan


@dataclass
class CompiledExpression:
    """A parsed expression bound to the variables ``a`` … N-th letter."""

    text: str
    expr: Any
    num_variables: int
    _func: Callable[..., Any] = field(repr=False)

    def evaluate(self, values: Sequence[float]) -> float:
        """Evaluate against ``values`` (one per variable, in order).

        Each call binds its own float64 copies of the values.
        """
        if len(values) != self.num_variables:
            raise ValueError(
                f"expected {self.num_variables} values for '{self.text}', got {len(values)}"
            )
        bound = [np.float64(v) for v in values]
        with np.errstate(all="ignore"):
            try:
                raw = self._func(*bound)
            except (ArithmeticError, ValueError, TypeError):
                return math.nan
        return _to_float(raw)


def compile_expression(text: str, num_variables: int) -> CompiledExpression:
    """Compile ``text`` for an assignment of ``num_variables`` values.

    Raises :class:`CompileError` on syntax errors, unknown symbols, or
    expressions that are not numeric.
    """
    names = variable_names(num_variables)
    symbols = [sp.Symbol(n) for n in names]
    local_dict: dict[str, Any] = dict(_CONSTANT_SYMBOLS)
    local_dict.update(zip(names, symbols))

    if not str(text).strip():
        raise CompileError("empty expression", text)
    try:
        expr = sp.sympify(_parse(str(text), local_dict))
    except Exception as exc:  # parse_expr raises a wide range of exception types
        raise CompileError(f"could not parse: {exc}", text) from exc

    if not isinstance(expr, (sp.Expr, Boolean)):
        raise CompileError(f"not a numeric expression: {expr!r}", text)

    if expr.has(sp.zoo):
        raise CompileError("constant subexpression is complex infinity (zoo)", text)

    allowed = set(symbols) | set(_CONSTANT_SYMBOLS.values())
    unknown = sorted(str(s) for s in expr.free_symbols if s not in allowed)
    if unknown:
        raise CompileError(f"undefined symbol(s): {', '.join(unknown)}", text)

    try:
        func = sp.lambdify(symbols, expr, modules=[_CONSTANT_NAMESPACE, "numpy"])
    except Exception as exc:
        raise CompileError(f"could not compile: {exc}", text) from exc

    compiled = CompiledExpression(text=str(text), expr=expr, num_variables=num_variables, _func=func)

    # Functions without a NumPy translation only fail once called; domain
    # errors at the origin are left to evaluate() to report as NaN.
    try:
        with np.errstate(all="ignore"):
            compiled._func(*[np.float64(0.0)] * num_variables)
    except (NameError, AttributeError, NotImplementedError) as exc:
        raise CompileError(f"could not compile: {exc}", text) from exc
    except (ArithmeticError, ValueError, TypeError):
        pass
    return compiled
