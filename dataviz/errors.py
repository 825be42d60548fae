from __future__ import annotations


class ScaleDomainError(ValueError):
    """Raised when a value cannot be mapped by a scale (NaN, non-positive log input, unknown key)."""


class UnitResolutionError(ValueError):
    """Raised when a relative length is resolved without the reference it needs."""


class StyleConfigError(ValueError):
    pass
