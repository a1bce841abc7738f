"""Numeric literal formatting for generated code.

Rounding is decimal half-up on the shortest repr of a float, so 2.005 at
precision 2 becomes 2.01 (binary rounding would give 2.0).
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Sequence

import numpy as np

Vec3 = tuple[float, float, float]


def round_scalar(value: float, precision: int = 3) -> float:
    """Round half-up to *precision* decimals, folding -0.0 into 0.0."""
    if not math.isfinite(value):
        return float(value)
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # Enough digits for the integer part plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + precision + 2)
        rounded = float(exact.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP))
    return rounded or 0.0


def round_vector(values: Iterable[float], precision: int = 3) -> Vec3:
    """Round a 3-vector component-wise."""
    arr = as_vec3(values)
    return tuple(round_scalar(v, precision) for v in arr.tolist())


def as_vec3(values: Iterable[float]) -> np.ndarray:
    arr = np.asarray(list(values), dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {arr.shape}")
    return arr


def is_neutral(values: Sequence[float], neutral: Sequence[float]) -> bool:
    return bool(np.array_equal(np.asarray(values, dtype=float), np.asarray(neutral, dtype=float)))


def elide_default(value: float, default: float, precision: int = 3) -> float | None:
    """Rounded value, or None when it equals the default after rounding."""
    rounded = round_scalar(value, precision)
    if rounded == round_scalar(default, precision):
        return None
    return rounded


def format_literal(value) -> str:
    """
    Render a Python value as a JavaScript literal.

    Integral floats drop their ".0" (1.0 -> "1"), booleans become
    true/false and sequences render without spaces ("[10,10,5]").
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(format_literal(v) for v in value) + "]"
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        value = float(value)
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value == 0:
            return "0"
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    return str(value)


def color_to_hex(rgb: Sequence[float]) -> str:
    """RGB floats in [0, 1] -> 6 lowercase hex digits ("ff8000")."""
    channels = np.clip(np.asarray(rgb, dtype=float)[:3], 0.0, 1.0)
    return "".join(f"{int(c * 255 + 0.5):02x}" for c in channels.tolist())
