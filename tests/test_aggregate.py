import random

import pandas as pd
import pytest

from conftest import make_movies
from movie_trends.aggregate import (
    DirectorAverage,
    YearlyTotal,
    as_director_averages,
    as_yearly_totals,
    gross_by_year,
    top_directors,
)


def _random_movies(seed: int, n: int = 200) -> pd.DataFrame:
    rng = random.Random(seed)
    rows = []
    for _ in range(n):
        rows.append(
            {
                "gross": rng.choice([None, rng.randint(0, 10**9)]),
                "score": rng.choice([None, round(rng.uniform(1, 10), 1)]),
                "year": rng.choice([None, rng.randint(2000, 2020)]),
                "director": rng.choice(["", "A", "B", "C", "D", "E", "F", "G", "H"]),
            }
        )
    return make_movies(rows)


# ---------------------------------------------------------------------------
# gross_by_year
# ---------------------------------------------------------------------------


def test_gross_by_year_scenario():
    movies = make_movies(
        [
            {"year": 2010, "gross": 100},
            {"year": 2010, "gross": 50},
            {"year": 2011, "gross": None},
        ]
    )
    result = gross_by_year(movies)
    assert as_yearly_totals(result) == [YearlyTotal(2010, 150.0)]


def test_gross_by_year_window_and_gaps():
    movies = make_movies(
        [
            {"year": 2009, "gross": 999},
            {"year": 2014, "gross": 5},
            {"year": None, "gross": 7},
            {"year": 2011, "gross": 3},
            {"year": 2014, "gross": 1},
        ]
    )
    result = gross_by_year(movies)
    assert result.to_dict("records") == [
        {"year": 2011, "gross_total": 3.0},
        {"year": 2014, "gross_total": 6.0},
    ]


def test_gross_by_year_custom_year_min():
    movies = make_movies([{"year": 2009, "gross": 1}, {"year": 2010, "gross": 2}])
    assert gross_by_year(movies, year_min=2000)["year"].tolist() == [2009, 2010]


@pytest.mark.parametrize("seed", range(5))
def test_gross_by_year_properties(seed):
    movies = _random_movies(seed)
    result = gross_by_year(movies)

    years = result["year"].tolist()
    assert years == sorted(set(years))

    qualifying = movies[
        movies["gross"].notna() & movies["year"].notna() & (movies["year"] >= 2010)
    ]
    assert result["gross_total"].sum() == pytest.approx(float(qualifying["gross"].sum()))


def test_gross_by_year_does_not_modify_input():
    movies = _random_movies(1)
    before = movies.copy()
    first = gross_by_year(movies)
    second = gross_by_year(movies)
    pd.testing.assert_frame_equal(first, second)
    pd.testing.assert_frame_equal(movies, before)


# ---------------------------------------------------------------------------
# top_directors
# ---------------------------------------------------------------------------


def test_top_directors_scenario():
    movies = make_movies(
        [
            {"director": "A", "score": 8},
            {"director": "A", "score": 6},
            {"director": "B", "score": 9},
        ]
    )
    result = top_directors(movies)
    assert as_director_averages(result) == [
        DirectorAverage("B", 9.0),
        DirectorAverage("A", 7.0),
    ]


def test_top_directors_skips_unknown_director_and_missing_score():
    movies = make_movies(
        [
            {"director": "", "score": 10},
            {"director": "A", "score": None},
            {"director": "A", "score": 5},
        ]
    )
    assert top_directors(movies).to_dict("records") == [
        {"director": "A", "average_score": 5.0}
    ]


def test_top_directors_truncates_to_six():
    movies = make_movies(
        [{"director": f"D{i}", "score": float(i)} for i in range(10)]
    )
    result = top_directors(movies)
    assert result["director"].tolist() == ["D9", "D8", "D7", "D6", "D5", "D4"]


def test_top_directors_fewer_than_six_not_padded():
    movies = make_movies([{"director": "X", "score": 3}, {"director": "Y", "score": 4}])
    assert len(top_directors(movies)) == 2


def test_top_directors_ties_keep_first_appearance():
    movies = make_movies(
        [
            {"director": "Late", "score": 7},
            {"director": "Top", "score": 9},
            {"director": "Early", "score": 7},
        ]
    )
    assert top_directors(movies)["director"].tolist() == ["Top", "Late", "Early"]


def test_top_directors_is_repeatable_and_does_not_modify_input():
    movies = _random_movies(2)
    before = movies.copy()
    first = top_directors(movies)
    second = top_directors(movies)
    pd.testing.assert_frame_equal(first, second)
    pd.testing.assert_frame_equal(movies, before)


def test_top_directors_rejects_negative_top_n():
    with pytest.raises(ValueError):
        top_directors(make_movies([]), top_n=-1)


@pytest.mark.parametrize("seed", range(5))
def test_top_directors_properties(seed):
    result = top_directors(_random_movies(seed))
    scores = result["average_score"].tolist()
    assert len(result) <= 6
    assert all(a >= b for a, b in zip(scores, scores[1:]))


# ---------------------------------------------------------------------------
# Empty input
# ---------------------------------------------------------------------------


def test_empty_input_gives_empty_results():
    movies = make_movies([])
    yearly = gross_by_year(movies)
    directors = top_directors(movies)

    assert yearly.empty and list(yearly.columns) == ["year", "gross_total"]
    assert directors.empty and list(directors.columns) == ["director", "average_score"]
    assert as_yearly_totals(yearly) == []
    assert as_director_averages(directors) == []
