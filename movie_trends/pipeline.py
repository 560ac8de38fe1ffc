"""Core pipeline: from movie records to chart-ready data and scales.

The primary entry point is :func:`run_pipeline`, which loads the movie
CSV and hands the records to :func:`build_chart_data`.  The result is a
:class:`ChartData` bundle holding

* the yearly gross totals and the top directors (two DataFrames), and
* the four pixel scales the renderer needs: year -> x, gross -> y,
  director -> x and score -> y.

Nothing here draws anything; see :mod:`movie_trends.plotting`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import pandas as pd

from .aggregate import (
    DirectorAverage,
    YearlyTotal,
    as_director_averages,
    as_yearly_totals,
    gross_by_year,
    top_directors,
)
from .config import (
    DEFAULT_CHART_CONFIG,
    DEFAULT_SEP,
    MOVIES_SOURCE,
    TOP_N_DIRECTORS,
    YEAR_MIN,
    ChartConfig,
)
from .loader import load_movies
from .scales import BandScale, LinearScale

# Module‑level logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartData:
    """Everything the renderer consumes for both charts."""

    yearly: pd.DataFrame
    directors: pd.DataFrame
    x_year: LinearScale
    y_gross: LinearScale
    x_director: BandScale
    y_score: LinearScale

    def yearly_totals(self) -> List[YearlyTotal]:
        return as_yearly_totals(self.yearly)

    def director_averages(self) -> List[DirectorAverage]:
        return as_director_averages(self.directors)


# ---------------------------------------------------------------------------
# Scale builders
# ---------------------------------------------------------------------------


def _column_max(series: pd.Series, default: float) -> float:
    return float(series.max()) if not series.empty else default


def year_scale(
    yearly: pd.DataFrame, config: ChartConfig, *, year_min: int = YEAR_MIN
) -> LinearScale:
    """Years from ``year_min`` to the last year present, across the plot width."""
    last = _column_max(yearly["year"], float(year_min))
    return LinearScale(year_min, last, 0, config.width)


def gross_scale(yearly: pd.DataFrame, config: ChartConfig) -> LinearScale:
    """Zero to the largest yearly total, bottom to top."""
    top = _column_max(yearly["gross_total"], 0.0)
    return LinearScale(0, top, config.height, 0)


def director_scale(directors: pd.DataFrame, config: ChartConfig) -> BandScale:
    return BandScale(
        directors["director"].tolist(), 0, config.width, config.band_padding
    )


def score_scale(directors: pd.DataFrame, config: ChartConfig) -> LinearScale:
    top = _column_max(directors["average_score"], 0.0)
    return LinearScale(0, top, config.height, 0)


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


def build_chart_data(
    movies: pd.DataFrame,
    config: ChartConfig = DEFAULT_CHART_CONFIG,
    *,
    year_min: int = YEAR_MIN,
    top_n: int = TOP_N_DIRECTORS,
) -> ChartData:
    """Aggregate loaded records and size the scales for ``config``.

    Parameters
    ----------
    movies : pd.DataFrame
        Typed records as returned by :func:`movie_trends.loader.load_movies`.
    config : ChartConfig, optional
        Chart dimensions and padding.
    year_min : int, optional
        First year of the revenue window.
    top_n : int, optional
        Number of directors to keep.

    Returns
    -------
    ChartData
        Aggregates and scales.  Empty aggregates produce single-point
        domains rather than errors.
    """
    yearly = gross_by_year(movies, year_min=year_min)
    directors = top_directors(movies, top_n=top_n)
    logger.info(
        "Aggregated %d year(s) of gross revenue and %d director(s)",
        len(yearly),
        len(directors),
    )

    return ChartData(
        yearly=yearly,
        directors=directors,
        x_year=year_scale(yearly, config, year_min=year_min),
        y_gross=gross_scale(yearly, config),
        x_director=director_scale(directors, config),
        y_score=score_scale(directors, config),
    )


def run_pipeline(
    *,
    source: str | Path = MOVIES_SOURCE,
    sep: str = DEFAULT_SEP,
    config: ChartConfig = DEFAULT_CHART_CONFIG,
) -> ChartData:
    """Load the movie CSV, then aggregate and build scales.

    A :class:`~movie_trends.loader.LoadError` from the load step
    propagates before any aggregation runs.
    """
    movies = load_movies(source, sep=sep)
    return build_chart_data(movies, config)
