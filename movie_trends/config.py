"""
Configuration constants for the movie trends charts.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

# ======================================================
#  DATA SOURCES / CONSTANTS
# ======================================================
MOVIES_SOURCE: str = "movies.csv"

DEFAULT_SEP: str = ","

# Seconds to wait on a remote source before giving up
FETCH_TIMEOUT: int = 30

# Source column -> canonical record field
COLUMN_MAP: Dict[str, str] = {
    "gross": "gross",
    "imdb_score": "score",
    "title_year": "year",
    "director_name": "director",
}

# ======================================================
#  ANALYSIS WINDOW
# ======================================================
YEAR_MIN: int = 2010

# Release years outside this range are treated as unreadable
YEAR_LIMITS: Tuple[int, int] = (0, 9999)
TOP_N_DIRECTORS: int = 6

# ======================================================
#  OUTPUT
# ======================================================
OUTPUT_DIR: Path = Path("output")
LINE_CHART_FILE: str = "gross_by_year.html"
BAR_CHART_FILE: str = "top_directors.html"


@dataclass(frozen=True)
class Margin:
    top: int = 50
    right: int = 30
    bottom: int = 60
    left: int = 70


@dataclass(frozen=True)
class ChartConfig:
    """Layout and labelling shared by both charts.

    ``outer_width`` and ``outer_height`` are the full figure size in
    pixels; the plotting area is what remains after the margins.
    """

    outer_width: int = 800
    outer_height: int = 400
    margin: Margin = Margin()
    band_padding: float = 0.1
    line_color: str = "blue"
    line_width: int = 2
    bar_color: str = "blue"
    line_title: str = "Trends in Total Gross Movie Revenue"
    bar_title: str = "Top 6 Directors' IMDb Scores"
    year_label: str = "Year"
    gross_label: str = "Gross Revenue ($, billions)"
    director_label: str = "Directors"
    score_label: str = "Score"

    @property
    def width(self) -> int:
        return self.outer_width - self.margin.left - self.margin.right

    @property
    def height(self) -> int:
        return self.outer_height - self.margin.top - self.margin.bottom


DEFAULT_CHART_CONFIG: ChartConfig = ChartConfig()
