from __future__ import annotations

import logging
from typing import Any, Sequence

from dataviz.errors import ScaleDomainError
from dataviz.scales.band import CategoricalScale, _unique_keys
from dataviz.units import ZERO, Length, LengthLike, as_length


LOGGER = logging.getLogger(__name__)


class OrdinalScale(CategoricalScale):
    """Explicit key -> length mapping; values cycle when there are fewer values than keys."""

    kind = "ordinal"

    def __init__(
        self,
        keys: Sequence[str],
        values: Sequence[LengthLike],
        *,
        unknown: LengthLike = ZERO,
    ) -> None:
        # Values need not share a unit or be ordered, so the range check of
        # the base class does not apply here.
        self._keys = _unique_keys(keys)
        self._index = {key: i for i, key in enumerate(self._keys)}
        self._values = tuple(as_length(v) for v in values)
        self._unknown = as_length(unknown)
        if self._values:
            self._range = (self._values[0], self._values[-1])
        else:
            self._range = (ZERO, ZERO)

    @property
    def inverted(self) -> bool:
        return False

    def values(self) -> tuple[Length, ...]:
        return self._values

    def apply(self, value: Any) -> Length:
        if not isinstance(value, str):
            raise ScaleDomainError(f"expected a string key, got {type(value).__name__}")
        idx = self._index.get(value, -1)
        if idx < 0 or not self._values:
            LOGGER.debug("ordinal key %r has no mapping; using %s", value, self._unknown)
            return self._unknown
        return self._values[idx % len(self._values)]

    def invert(self, position: LengthLike) -> str | None:
        target = as_length(position)
        for key in self._keys:
            if self.apply(key) == target:
                return key
        return None


def ordinal_scale(keys: Sequence[str], values: Sequence[LengthLike], *, unknown: LengthLike = ZERO) -> OrdinalScale:
    return OrdinalScale(keys, values, unknown=unknown)
