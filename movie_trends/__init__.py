"""movie_trends package initializer.

This package turns a movie metadata CSV into two static charts: total
gross revenue by year and the top directors by average IMDb score.
Modules cover configuration, data loading, aggregation, pixel scales
and plotly rendering.  See individual module docstrings for details.
"""
