"""
Render both movie charts to static HTML files.

Run with ``python -m movie_trends.main`` from a directory holding
``movies.csv``; the figures are written to ``output/``.  Any failure to
load the data aborts before a file is written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import plotly.graph_objects as go

from .config import (
    BAR_CHART_FILE,
    DEFAULT_CHART_CONFIG,
    DEFAULT_SEP,
    LINE_CHART_FILE,
    MOVIES_SOURCE,
    OUTPUT_DIR,
    ChartConfig,
)
from .pipeline import run_pipeline
from .plotting import create_director_bar_chart, create_gross_line_chart

logger = logging.getLogger(__name__)


def _atomic_write_html(fig: go.Figure, path: Path) -> None:
    """Write a figure to HTML atomically.

    The page is first written to a temporary file in the same directory
    and then renamed to the final location, so an interrupted run never
    leaves a half-written chart behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    fig.write_html(tmp_path, include_plotlyjs="cdn", full_html=True)
    tmp_path.replace(path)


def render_charts(
    *,
    source: str | Path = MOVIES_SOURCE,
    sep: str = DEFAULT_SEP,
    output_dir: str | Path = OUTPUT_DIR,
    config: ChartConfig = DEFAULT_CHART_CONFIG,
) -> Dict[str, Path]:
    """
    Load the data, build both figures and save them.

    Returns
    -------
    Dict[str, Path]
        Paths of the written files keyed by ``"line"`` and ``"bar"``.
    """
    data = run_pipeline(source=source, sep=sep, config=config)

    figures = {
        "line": (create_gross_line_chart(data, config), LINE_CHART_FILE),
        "bar": (create_director_bar_chart(data, config), BAR_CHART_FILE),
    }

    out_dir = Path(output_dir)
    written: Dict[str, Path] = {}
    for key, (fig, filename) in figures.items():
        path = out_dir / filename
        _atomic_write_html(fig, path)
        written[key] = path
        logger.info("Saved %s chart to %s", key, path)
    return written


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    written = render_charts()
    print("\n--- MOVIE CHARTS COMPLETE ---")
    for path in written.values():
        print(f"  - {path}")


if __name__ == "__main__":
    main()
