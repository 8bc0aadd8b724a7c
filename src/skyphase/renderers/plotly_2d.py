"""Plotly altitude chart renderer.

Plots sun and moon altitude across the next 24 hours on the observer's wall
clock, with the twilight bands shaded behind the curves.
"""

from datetime import datetime, timedelta

import numpy as np
import plotly.graph_objects as go

from skyphase.clock import local_zone
from skyphase.i18n import phase_name, t
from skyphase.lunar import moon_altitude
from skyphase.models import PhaseLabel, SkyPhaseReport
from skyphase.solar import solar_altitude

_BG = "#050a1a"
_SUN_COLOR = "#f5c451"
_MOON_COLOR = "#c9d6ea"
_GRID_COLOR = "#334466"

# Sky colour per phase, from daylight blue to night navy
PHASE_COLORS: dict[PhaseLabel, str] = {
    PhaseLabel.DAY: "#4f8fd8",
    PhaseLabel.CIVIL_DAWN: "#d98c5f",
    PhaseLabel.CIVIL_TWILIGHT: "#b8607a",
    PhaseLabel.NAUTICAL_DAWN: "#3d4f8f",
    PhaseLabel.NAUTICAL_TWILIGHT: "#3d4f8f",
    PhaseLabel.ASTRONOMICAL_DAWN: "#1c2655",
    PhaseLabel.ASTRONOMICAL_TWILIGHT: "#1c2655",
    PhaseLabel.NIGHT: "#0a1030",
}

# (lower altitude, upper altitude, representative label) for background shading
_BANDS: tuple[tuple[float, float, PhaseLabel], ...] = (
    (0.0, 90.0, PhaseLabel.DAY),
    (-6.0, 0.0, PhaseLabel.CIVIL_TWILIGHT),
    (-12.0, -6.0, PhaseLabel.NAUTICAL_TWILIGHT),
    (-18.0, -12.0, PhaseLabel.ASTRONOMICAL_TWILIGHT),
    (-90.0, -18.0, PhaseLabel.NIGHT),
)


def sample_altitudes(
    report: SkyPhaseReport,
    hours: int = 24,
    step_minutes: int = 10,
) -> tuple[list[datetime], np.ndarray, np.ndarray]:
    """Sun and moon altitude at regular offsets from the report moment.

    Returns:
        (UTC instants, sun altitudes, moon altitudes). Empty when the report
        has no coordinate.
    """
    if report.coordinate is None:
        return [], np.array([]), np.array([])

    offsets = np.arange(0, hours * 60 + step_minutes, step_minutes)
    times = [report.moment + timedelta(minutes=int(m)) for m in offsets]
    sun = np.array([solar_altitude(ts, report.coordinate) for ts in times])
    moon = np.array([moon_altitude(ts, report.coordinate) for ts in times])
    return times, sun, moon


def render_plotly_chart(
    report: SkyPhaseReport,
    utc_offset_minutes: int = 0,
    lang: str = "en",
) -> go.Figure:
    """Render a SkyPhaseReport as a 24-hour altitude chart.

    Args:
        report: Computed report. An awaiting-location report yields an empty chart.
        utc_offset_minutes: Observer's wall-clock offset, for the x axis.
        lang: Language code ('ko' or 'en') for trace names.

    Returns:
        Plotly Figure object.
    """
    zone = local_zone(utc_offset_minutes)
    times, sun, moon = sample_altitudes(report)
    x_vals = [ts.astimezone(zone).replace(tzinfo=None) for ts in times]

    sun_trace = go.Scatter(
        x=x_vals,
        y=list(sun),
        mode="lines",
        line=dict(color=_SUN_COLOR, width=2),
        name=t("chart_sun", lang),
        hovertemplate="%{x|%H:%M} %{y:.1f}°<extra></extra>",
    )
    moon_trace = go.Scatter(
        x=x_vals,
        y=list(moon),
        mode="lines",
        line=dict(color=_MOON_COLOR, width=1.5, dash="dot"),
        name=t("chart_moon", lang),
        hovertemplate="%{x|%H:%M} %{y:.1f}°<extra></extra>",
    )
    fig = go.Figure(data=[sun_trace, moon_trace])

    shapes = [
        dict(
            type="rect",
            xref="paper",
            yref="y",
            x0=0,
            x1=1,
            y0=low,
            y1=high,
            fillcolor=PHASE_COLORS[label],
            opacity=0.35,
            line=dict(width=0),
            layer="below",
        )
        for low, high, label in _BANDS
    ]
    if x_vals:
        shapes.append(
            dict(
                type="line",
                xref="x",
                yref="paper",
                x0=x_vals[0],
                x1=x_vals[0],
                y0=0,
                y1=1,
                line=dict(color="#ffffff", width=1),
            )
        )

    annotations = []
    if report.transition is not None:
        at_local = report.transition.at.astimezone(zone).replace(tzinfo=None)
        shapes.append(
            dict(
                type="line",
                xref="x",
                yref="paper",
                x0=at_local,
                x1=at_local,
                y0=0,
                y1=1,
                line=dict(color=_SUN_COLOR, width=1, dash="dash"),
            )
        )
        annotations.append(
            dict(
                x=at_local,
                y=1,
                xref="x",
                yref="paper",
                text=phase_name(report.transition.label, lang),
                showarrow=False,
                yanchor="bottom",
                font=dict(color=_SUN_COLOR, size=11),
            )
        )

    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        font=dict(color="#aaaaaa"),
        margin=dict(l=40, r=10, t=30, b=30),
        height=320,
        legend=dict(orientation="h", x=0, y=-0.15),
        xaxis=dict(tickformat="%H:%M", gridcolor=_GRID_COLOR, fixedrange=True),
        yaxis=dict(
            range=[-90, 90],
            tickvals=[-90, -18, -12, -6, 0, 30, 60, 90],
            ticksuffix="°",
            gridcolor=_GRID_COLOR,
            fixedrange=True,
        ),
        shapes=shapes,
        annotations=annotations,
    )
    fig._config = {"displayModeBar": False}  # type: ignore[attr-defined]

    return fig
