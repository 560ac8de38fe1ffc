"""Map data values to pixel coordinates.

Two mappers are provided:

* :class:`LinearScale` for continuous values (years, gross, scores).
* :class:`BandScale` for an ordered set of categories (director names).

Both are plain callables with no knowledge of the figure they end up in,
so they can be built and checked without plotly.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

# Thresholds for rounding a raw tick step up to 1, 2, 5 or 10 x 10^k
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


class LinearScale:
    """Affine map from ``[domain_min, domain_max]`` to ``[range_min, range_max]``.

    A single-point domain (``domain_min == domain_max``) sends every value
    to ``range_min``.  Values outside the domain are extrapolated, not
    clamped.
    """

    def __init__(
        self,
        domain_min: float,
        domain_max: float,
        range_min: float,
        range_max: float,
    ) -> None:
        self.domain: Tuple[float, float] = (domain_min, domain_max)
        self.range: Tuple[float, float] = (range_min, range_max)

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1:
            return r0
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self.range})"

    def ticks(self, count: int = 10) -> List[float]:
        """Return roughly ``count`` evenly spaced round values inside the domain."""
        d0, d1 = self.domain
        return nice_ticks(min(d0, d1), max(d0, d1), count)


class BandScale:
    """Split ``[range_min, range_max]`` into equal, padded bands.

    ``padding`` is applied both between bands and at the two outer edges,
    as a fraction of the step between band starts, and the bands are
    centred in the range.  Unknown categories map to ``None``.  With no
    categories every lookup returns ``None`` and ``bandwidth`` is 0.
    """

    def __init__(
        self,
        categories: Sequence[str],
        range_min: float,
        range_max: float,
        padding: float = 0.0,
    ) -> None:
        if not 0.0 <= padding <= 1.0:
            raise ValueError(f"padding must lie in [0, 1], got {padding}")

        self.categories: Tuple[str, ...] = tuple(dict.fromkeys(categories))
        self.range: Tuple[float, float] = (range_min, range_max)
        self.padding = padding

        n = len(self.categories)
        self._positions: Dict[str, float] = {}
        if n == 0:
            self.step = 0.0
            self.bandwidth = 0.0
            return

        span = range_max - range_min
        self.step = span / max(1.0, n - padding + 2 * padding)
        self.bandwidth = self.step * (1 - padding)
        start = range_min + (span - self.step * (n - padding)) * 0.5
        for i, category in enumerate(self.categories):
            self._positions[category] = start + self.step * i

    def __call__(self, category: str) -> Optional[float]:
        return self._positions.get(category)

    def __len__(self) -> int:
        return len(self.categories)

    def __repr__(self) -> str:
        return (
            f"BandScale(categories={list(self.categories)}, range={self.range}, "
            f"padding={self.padding})"
        )

    def centre(self, category: str) -> Optional[float]:
        start = self(category)
        if start is None:
            return None
        return start + self.bandwidth / 2


# ---------------------------------------------------------------------------
# Ticks
# ---------------------------------------------------------------------------


def nice_ticks(start: float, stop: float, count: int = 10) -> List[float]:
    """Round tick values between ``start`` and ``stop`` (inclusive).

    The step is the power of ten times 1, 2 or 5 that gives closest to
    ``count`` ticks.  ``start == stop`` yields ``[start]``; a non-finite
    bound yields no ticks.
    """
    if count <= 0 or not (math.isfinite(start) and math.isfinite(stop)):
        return []
    if start == stop:
        return [start]
    if stop < start:
        return nice_ticks(stop, start, count)[::-1]

    raw_step = (stop - start) / count
    power = math.floor(math.log10(raw_step))
    error = raw_step / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1

    if power < 0:
        # Work in inverted steps to keep decimal ticks exact
        inv = 10 ** (-power) / factor
        i1 = round(start * inv)
        i2 = round(stop * inv)
        if i1 / inv < start:
            i1 += 1
        if i2 / inv > stop:
            i2 -= 1
        return [i / inv for i in range(i1, i2 + 1)]

    inc = 10**power * factor
    i1 = round(start / inc)
    i2 = round(stop / inc)
    if i1 * inc < start:
        i1 += 1
    if i2 * inc > stop:
        i2 -= 1
    return [float(i * inc) for i in range(i1, i2 + 1)]


# ---------------------------------------------------------------------------
# Tick formatters
# ---------------------------------------------------------------------------


def format_year(value: float) -> str:
    return str(int(round(value)))


def format_billions(value: float) -> str:
    """Format a currency amount in billions, e.g. ``1500000000 -> "1.5B"``."""
    return f"{value / 1e9:g}B"


def format_score(value: float) -> str:
    return f"{value:g}"
