from pathlib import Path
from typing import List, Optional

import pandas as pd
import pytest

HEADER = "movie_title,director_name,gross,imdb_score,title_year"


def make_movies(rows: List[dict]) -> pd.DataFrame:
    """Build a typed record frame from partial dicts (missing keys -> null)."""
    return pd.DataFrame(
        {
            "gross": pd.array([r.get("gross") for r in rows], dtype="Float64"),
            "score": pd.array([r.get("score") for r in rows], dtype="Float64"),
            "year": pd.array([r.get("year") for r in rows], dtype="Int64"),
            "director": pd.array(
                [r.get("director", "") for r in rows], dtype="string"
            ),
        }
    )


def write_csv(path: Path, lines: List[str], header: Optional[str] = HEADER) -> Path:
    body = ([header] if header is not None else []) + lines
    path.write_text("\n".join(body) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def movies_csv(tmp_path: Path) -> Path:
    return write_csv(
        tmp_path / "movies.csv",
        [
            "Avatar,James Cameron,760505847,7.9,2009",
            "Inception,Christopher Nolan,292568851,8.8,2010",
            "Toy Story 3,Lee Unkrich,414984497,8.3,2010",
            "Interstellar,Christopher Nolan,187991439,8.6,2014",
            "Unknown Gross,Denis Villeneuve,,8.0,2015",
            "Bad Year,Some Director,1000,6.1,n/a",
            "No Director,,5000,7.0,2012",
        ],
    )
