"""Rollups feeding the two charts.

Both functions take the typed frame produced by
:func:`movie_trends.loader.load_movies` and return a fresh DataFrame; the
input is never modified.

* :func:`gross_by_year` sums gross revenue per release year from
  ``YEAR_MIN`` onwards, ascending by year.
* :func:`top_directors` averages IMDb scores per director and keeps the
  ``TOP_N_DIRECTORS`` best, descending by score.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import pandas as pd

from .config import TOP_N_DIRECTORS, YEAR_MIN

logger = logging.getLogger(__name__)

YEARLY_COLUMNS: List[str] = ["year", "gross_total"]
DIRECTOR_COLUMNS: List[str] = ["director", "average_score"]


@dataclass(frozen=True)
class YearlyTotal:
    year: int
    gross_total: float


@dataclass(frozen=True)
class DirectorAverage:
    director: str
    average_score: float


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------


def gross_by_year(movies: pd.DataFrame, *, year_min: int = YEAR_MIN) -> pd.DataFrame:
    """Total gross revenue per year.

    Parameters
    ----------
    movies : pd.DataFrame
        Records with at least ``year`` and ``gross`` columns.
    year_min : int, optional
        Inclusive lower bound on the release year.

    Returns
    -------
    pd.DataFrame
        Columns ``year`` (int) and ``gross_total`` (float), one row per
        distinct year, ascending.  Empty when no record qualifies.
    """
    mask = movies["gross"].notna() & movies["year"].notna()
    mask &= movies["year"] >= year_min
    clean = movies.loc[mask.fillna(False).astype(bool), ["year", "gross"]]

    if clean.empty:
        logger.info("No records with gross and year >= %d", year_min)
        return pd.DataFrame(
            {
                "year": pd.Series(dtype="int64"),
                "gross_total": pd.Series(dtype="float64"),
            }
        )

    grouped = (
        clean.groupby("year", sort=True, as_index=False)["gross"]
        .sum()
        .rename(columns={"gross": "gross_total"})
    )
    grouped["year"] = grouped["year"].astype("int64")
    grouped["gross_total"] = grouped["gross_total"].astype("float64")
    return grouped[YEARLY_COLUMNS].reset_index(drop=True)


def top_directors(
    movies: pd.DataFrame, *, top_n: int = TOP_N_DIRECTORS
) -> pd.DataFrame:
    """Directors with the highest mean score.

    Rows without a director name or without a score are ignored.  Ties
    on the mean keep the order in which the directors first appear in
    ``movies``.

    Returns
    -------
    pd.DataFrame
        Columns ``director`` and ``average_score``, at most ``top_n`` rows,
        descending by score.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")

    mask = movies["score"].notna() & (movies["director"].fillna("") != "")
    clean = movies.loc[mask.fillna(False).astype(bool), ["director", "score"]]

    if clean.empty:
        logger.info("No records with both a director and a score")
        return pd.DataFrame(
            {
                "director": pd.Series(dtype="object"),
                "average_score": pd.Series(dtype="float64"),
            }
        )

    # sort=False keeps first-appearance order so the stable sort below
    # breaks ties by input order.
    grouped = (
        clean.groupby("director", sort=False, as_index=False)["score"]
        .mean()
        .rename(columns={"score": "average_score"})
    )
    grouped["director"] = grouped["director"].astype("object")
    grouped["average_score"] = grouped["average_score"].astype("float64")
    ranked = grouped.sort_values("average_score", ascending=False, kind="stable")
    return ranked.head(top_n)[DIRECTOR_COLUMNS].reset_index(drop=True)


# ---------------------------------------------------------------------------
# Record views
# ---------------------------------------------------------------------------


def as_yearly_totals(frame: pd.DataFrame) -> List[YearlyTotal]:
    """Rows of a :func:`gross_by_year` frame as :class:`YearlyTotal` records."""
    return [
        YearlyTotal(int(row.year), float(row.gross_total))
        for row in frame.itertuples(index=False)
    ]


def as_director_averages(frame: pd.DataFrame) -> List[DirectorAverage]:
    """Rows of a :func:`top_directors` frame as :class:`DirectorAverage` records."""
    return [
        DirectorAverage(str(row.director), float(row.average_score))
        for row in frame.itertuples(index=False)
    ]
