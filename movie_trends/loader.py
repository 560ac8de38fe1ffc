"""Load the movie metadata table into typed, nullable records.

Each row of the source CSV becomes one record with four fields:
``gross``, ``score``, ``year`` and ``director``.  Numeric fields are
coerced from text; a value that cannot be read as a number (an empty
cell included) becomes ``<NA>`` rather than an error, and the row is
kept.  Only a source that cannot be fetched or parsed at all raises
:class:`LoadError`.
"""

from __future__ import annotations

import logging
import math
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
import requests

from .config import (
    COLUMN_MAP,
    DEFAULT_SEP,
    FETCH_TIMEOUT,
    MOVIES_SOURCE,
    YEAR_LIMITS,
)

logger = logging.getLogger(__name__)

RECORD_COLUMNS: List[str] = ["gross", "score", "year", "director"]
NUMERIC_FIELDS: Dict[str, bool] = {"gross": False, "score": False, "year": True}
FIELD_LIMITS: Dict[str, Tuple[float, float]] = {"year": YEAR_LIMITS}


class LoadError(RuntimeError):
    """The dataset could not be fetched or read as a table."""


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def coerce_numeric(
    series: pd.Series,
    *,
    integer: bool = False,
    limits: Optional[Tuple[float, float]] = None,
) -> pd.Series:
    """Coerce a column to a nullable numeric dtype.

    Text is stripped and parsed with ``pd.to_numeric``.  Anything that does
    not parse, infinities, and values outside ``limits`` become ``<NA>``.

    Parameters
    ----------
    series : pd.Series
        Raw column, typically strings or floats straight from ``read_csv``.
    integer : bool, default False
        If True, return ``Int64`` and treat non-integral values as missing.
        Otherwise return ``Float64``.
    limits : Optional[Tuple[float, float]], optional
        Inclusive bounds on accepted values; ``None`` accepts any finite value.
    """
    if not pd.api.types.is_numeric_dtype(series):
        series = series.astype("string").str.strip()
    numeric = pd.to_numeric(series, errors="coerce").astype("Float64")

    keep = ~numeric.isin([math.inf, -math.inf])
    if limits is not None:
        keep &= numeric.between(*limits)
    if integer:
        keep &= numeric % 1 == 0
    numeric = numeric.where(keep.fillna(False).astype(bool))
    return numeric.astype("Int64") if integer else numeric


def coerce_number(
    value: object,
    *,
    integer: bool = False,
    limits: Optional[Tuple[float, float]] = None,
) -> Optional[float]:
    """Return ``value`` as a number, or ``None`` when it is not readable.

    Applies exactly the rule of :func:`coerce_numeric` to a single value,
    so empty text, ``None``, NaN and infinities all map to ``None``.
    """
    coerced = coerce_numeric(
        pd.Series([value], dtype="object"), integer=integer, limits=limits
    ).iloc[0]
    if pd.isna(coerced):
        return None
    return int(coerced) if integer else float(coerced)


def count_coercion_issues(raw: pd.DataFrame, coerced: pd.DataFrame) -> Dict[str, int]:
    """Count, per numeric field, the non-empty raw values that became missing."""
    issues: Dict[str, int] = {}
    for field in NUMERIC_FIELDS:
        text = raw[field].astype("string").str.strip()
        present = text.notna() & (text != "")
        issues[field] = int((present & coerced[field].isna()).sum())
    return issues


def ensure_columns(df: pd.DataFrame, required: List[str]) -> None:
    """Raise :class:`LoadError` if the DataFrame lacks any required column."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise LoadError(f"Missing expected columns: {missing}")


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


def _resolve_source_stream(source: str | Path) -> BytesIO | Path:
    """
    Return a file-like object (for URLs) or Path (for local files) for the CSV.
    """
    source_str = str(source)
    if source_str.lower().startswith(("http://", "https://")):
        try:
            response = requests.get(source_str, timeout=FETCH_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise LoadError(f"Could not fetch {source_str}: {exc}") from exc
        return BytesIO(response.content)

    path = Path(source)
    if not path.exists():
        raise LoadError(f"Movie data not found at {path}")
    return path


def load_movies_raw(
    source: str | Path = MOVIES_SOURCE, sep: str = DEFAULT_SEP
) -> pd.DataFrame:
    """Read the movie CSV with every column kept as text.

    Raises
    ------
    LoadError
        If the source is unreachable or is not parseable as a table.
    """
    stream = _resolve_source_stream(source)
    try:
        raw = pd.read_csv(stream, sep=sep, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise LoadError(f"Could not parse {source} as a table: {exc}") from exc
    except OSError as exc:
        raise LoadError(f"Could not read {source}: {exc}") from exc
    ensure_columns(raw, list(COLUMN_MAP))
    return raw


def prepare_movies(raw: pd.DataFrame) -> pd.DataFrame:
    """Project raw text columns onto typed record fields.

    The result has exactly the columns ``gross`` (``Float64``), ``score``
    (``Float64``), ``year`` (``Int64``) and ``director`` (``string``, with
    missing names as ``""``).
    """
    renamed = raw[list(COLUMN_MAP)].rename(columns=COLUMN_MAP)

    movies = pd.DataFrame(index=renamed.index)
    for field, integer in NUMERIC_FIELDS.items():
        movies[field] = coerce_numeric(
            renamed[field], integer=integer, limits=FIELD_LIMITS.get(field)
        )
    movies["director"] = renamed["director"].astype("string").fillna("")

    issues = count_coercion_issues(renamed, movies)
    for field, count in issues.items():
        if count:
            logger.warning(
                "%d non-numeric %s value(s) recorded as missing", count, field
            )
    return movies[RECORD_COLUMNS].reset_index(drop=True)


def load_movies(
    source: str | Path = MOVIES_SOURCE, sep: str = DEFAULT_SEP
) -> pd.DataFrame:
    """Load and type the movie dataset.

    Parameters
    ----------
    source : str or Path
        Path or URL to the movie CSV.
    sep : str, optional
        Column delimiter; defaults to ``","``.

    Returns
    -------
    pd.DataFrame
        One row per movie with the columns listed in ``RECORD_COLUMNS``.
    """
    raw = load_movies_raw(source, sep=sep)
    movies = prepare_movies(raw)
    logger.info("Loaded %d movie records from %s", len(movies), source)
    return movies
