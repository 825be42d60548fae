from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable

import numpy as np


TickFormatter = Callable[[Any], str]

SI_PREFIXES = (
    (1e12, "T"),
    (1e9, "G"),
    (1e6, "M"),
    (1e3, "k"),
    (1.0, ""),
    (1e-3, "m"),
    (1e-6, "μ"),
    (1e-9, "n"),
    (1e-12, "p"),
)


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_float(value: Any) -> bool:
    return isinstance(value, (float, np.floating))


def default_formatter(value: Any) -> str:
    """Integral floats without decimals, other floats to two places, instants as `YYYY-MM-DD`."""

    if _is_integer(value):
        return str(int(value))
    if _is_float(value):
        v = float(value)
        if np.isfinite(v) and v.is_integer():
            return str(int(v))
        return f"{v:.2f}"
    if isinstance(value, (datetime, date)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, str):
        return value
    return str(value)


def number_formatter(precision: int) -> TickFormatter:
    if precision < 0:
        raise ValueError("precision must be >= 0")

    def fmt(value: Any) -> str:
        if _is_integer(value):
            return str(int(value))
        if _is_float(value):
            return f"{float(value):.{precision}f}"
        return str(value)

    return fmt


def time_formatter(fmt: str) -> TickFormatter:
    """Formatter applying a `strftime` pattern to instants; other values use `str`."""

    def format_instant(value: Any) -> str:
        if isinstance(value, (datetime, date)):
            return value.strftime(fmt)
        return str(value)

    return format_instant


def si_formatter(value: Any) -> str:
    if _is_integer(value) or _is_float(value):
        v = float(value)
    else:
        return str(value)
    if v == 0:
        return "0"
    if not np.isfinite(v):
        return str(v)
    magnitude = abs(v)
    for i, (threshold, suffix) in enumerate(SI_PREFIXES):
        if magnitude >= threshold:
            scaled = _scaled(v, threshold)
            if abs(round(scaled, 1)) >= 1000 and i > 0:
                # 999.96 rounds to 1000.0; carry into the next prefix up.
                threshold, suffix = SI_PREFIXES[i - 1]
                scaled = round(_scaled(v, threshold), 1)
            if scaled.is_integer():
                return f"{int(scaled)}{suffix}"
            return f"{scaled:.1f}{suffix}"
    return f"{v:.2e}"


def _scaled(v: float, threshold: float) -> float:
    # 0.003 / 1e-3 lands on 2.9999999999999996 without the snap.
    return float(f"{v / threshold:.12g}")
