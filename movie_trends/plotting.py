import plotly.graph_objects as go

from .config import DEFAULT_CHART_CONFIG, ChartConfig
from .pipeline import ChartData
from .scales import format_billions, format_score, format_year


# ============================================================
# Configuration / constants
# ============================================================

HOVER_TEMPLATE_GROSS = (
    "Year: %{customdata[0]}<br>"
    "Total Gross: $%{customdata[1]:,.0f}<extra></extra>"
)

HOVER_TEMPLATE_SCORE = (
    "Director: %{customdata[0]}<br>"
    "Average IMDb Score: %{customdata[1]:.2f}<extra></extra>"
)


# ============================================================
# Helper functions
# ============================================================


def _base_layout(fig: go.Figure, title: str, config: ChartConfig) -> None:
    """
    Apply pixel-space axes, margins and the title shared by both charts.

    Axes run over the plot area in pixels: x from 0 to ``config.width``
    and y from ``config.height`` (bottom) to 0 (top).
    """
    margin = config.margin
    fig.update_layout(
        title=dict(text=f"<b>{title}</b>", x=0.5, xanchor="center"),
        width=config.outer_width,
        height=config.outer_height,
        margin=dict(t=margin.top, r=margin.right, b=margin.bottom, l=margin.left),
        showlegend=False,
        plot_bgcolor="white",
    )
    fig.update_xaxes(
        range=[0, config.width],
        showgrid=False,
        zeroline=False,
        showline=True,
        linecolor="black",
        ticks="outside",
    )
    fig.update_yaxes(
        range=[config.height, 0],
        showgrid=False,
        zeroline=False,
        showline=True,
        linecolor="black",
        ticks="outside",
    )


# ============================================================
# Main plotting functions
# ============================================================


def create_gross_line_chart(
    data: ChartData, config: ChartConfig = DEFAULT_CHART_CONFIG
) -> go.Figure:
    """
    Line chart of total gross revenue per year.

    Parameters
    ----------
    data : ChartData
        Output of :func:`movie_trends.pipeline.build_chart_data`.
    config : ChartConfig, optional
        Must be the config the scales in ``data`` were built with.

    Returns
    -------
    go.Figure
        Year ticks on every integer year present, gross ticks in billions.
        With no yearly data the axes and labels are drawn without a line.
    """
    totals = data.yearly_totals()
    fig = go.Figure()
    _base_layout(fig, config.line_title, config)

    if not totals:
        fig.update_xaxes(title_text=config.year_label)
        fig.update_yaxes(title_text=config.gross_label)
        return fig

    fig.add_trace(
        go.Scatter(
            x=[data.x_year(t.year) for t in totals],
            y=[data.y_gross(t.gross_total) for t in totals],
            mode="lines",
            line=dict(width=config.line_width, color=config.line_color),
            hovertemplate=HOVER_TEMPLATE_GROSS,
            customdata=[(t.year, t.gross_total) for t in totals],
        )
    )

    # One tick per calendar year, including gap years
    years = range(totals[0].year, totals[-1].year + 1)
    fig.update_xaxes(
        title_text=config.year_label,
        tickmode="array",
        tickvals=[data.x_year(year) for year in years],
        ticktext=[format_year(year) for year in years],
    )

    gross_ticks = data.y_gross.ticks()
    fig.update_yaxes(
        title_text=config.gross_label,
        tickmode="array",
        tickvals=[data.y_gross(tick) for tick in gross_ticks],
        ticktext=[format_billions(tick) for tick in gross_ticks],
    )
    return fig


def create_director_bar_chart(
    data: ChartData, config: ChartConfig = DEFAULT_CHART_CONFIG
) -> go.Figure:
    """
    Bar chart of the top directors by average IMDb score.

    Each bar starts at its director's band offset, spans the shared
    bandwidth and rises from the bottom of the plot to the score.
    """
    averages = data.director_averages()
    fig = go.Figure()
    _base_layout(fig, config.bar_title, config)
    fig.update_xaxes(title_text=config.director_label)
    fig.update_yaxes(title_text=config.score_label)

    if not averages:
        return fig

    band = data.x_director
    names = [a.director for a in averages]
    scores = [a.average_score for a in averages]

    fig.add_trace(
        go.Bar(
            x=[band.centre(name) for name in names],
            # Bars grow upward from the plot bottom in pixel space
            y=[data.y_score(score) - config.height for score in scores],
            base=config.height,
            width=band.bandwidth,
            marker_color=config.bar_color,
            hovertemplate=HOVER_TEMPLATE_SCORE,
            customdata=list(zip(names, scores)),
        )
    )

    fig.update_xaxes(
        tickmode="array",
        tickvals=[band.centre(name) for name in names],
        ticktext=names,
    )

    score_ticks = data.y_score.ticks()
    fig.update_yaxes(
        tickmode="array",
        tickvals=[data.y_score(tick) for tick in score_ticks],
        ticktext=[format_score(tick) for tick in score_ticks],
    )
    return fig
