"""SkyPhase: Streamlit app showing the current sky phase for the viewer's location."""

import html

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import get_geolocation, streamlit_js_eval

load_dotenv()

from skyphase.classify import phase_detail_key  # noqa: E402
from skyphase.clock import TimeSource, browser_offset_to_minutes, system_utc_offset_minutes  # noqa: E402
from skyphase.compute import run  # noqa: E402
from skyphase.config import configure_logging, load_settings  # noqa: E402
from skyphase.formatting import (  # noqa: E402
    format_clock,
    format_coordinate,
    format_countdown,
    format_percent,
    format_utc_offset,
)
from skyphase.i18n import (  # noqa: E402
    location_hint,
    location_status_text,
    moon_phase_name,
    phase_name,
    t,
)
from skyphase.location import GeocodingError, from_browser_payload, from_place  # noqa: E402
from skyphase.models import LocationStatus  # noqa: E402
from skyphase.renderers.plotly_2d import PHASE_COLORS, render_plotly_chart  # noqa: E402

settings = load_settings()
configure_logging(settings.log_level)

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", settings.lang)

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---
if "coordinate" not in st.session_state:
    st.session_state.coordinate = None
if "location_status" not in st.session_state:
    st.session_state.location_status = LocationStatus.PENDING
if "place_display" not in st.session_state:
    st.session_state.place_display = ""
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "utc_offset" not in st.session_state:
    st.session_state.utc_offset = None
if "report" not in st.session_state:
    st.session_state.report = None

# --- Dark theme CSS (static) ---
st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
        color: #e8e8e8;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    .phase-card {
        border-radius: 12px;
        padding: 1.2rem 1.6rem;
        margin-bottom: 0.8rem;
        color: #ffffff;
    }
    .phase-card h2 { margin: 0 0 0.3rem 0; color: #ffffff; }
    .phase-card p  { margin: 0; color: #e8d5a3; }
    .muted { color: #8899aa; font-size: 0.9rem; }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Browser inputs: timezone offset and geolocation ---
if st.session_state.utc_offset is None:
    _js_offset = streamlit_js_eval(
        js_expressions="new Date().getTimezoneOffset()", key="_tz_detect", height=0
    )
    st.session_state.utc_offset = browser_offset_to_minutes(_js_offset)
_utc_offset: int = (
    st.session_state.utc_offset
    if st.session_state.utc_offset is not None
    else system_utc_offset_minutes()
)

if st.session_state.location_status is LocationStatus.PENDING:
    _result = from_browser_payload(get_geolocation())
    if _result.status is not LocationStatus.PENDING:
        st.session_state.location_status = _result.status
        st.session_state.coordinate = _result.coordinate

# --- Header: coordinates and location status ---
st.title(t("page_title", _lang))

_coord = st.session_state.coordinate
col_lat, col_lng = st.columns(2)
col_lat.metric(
    t("label_latitude", _lang),
    format_coordinate(_coord.latitude if _coord else None, "N", "S"),
)
col_lng.metric(
    t("label_longitude", _lang),
    format_coordinate(_coord.longitude if _coord else None, "E", "W"),
)
_status_line = location_status_text(st.session_state.location_status, _lang)
if st.session_state.place_display:
    _status_line += f" {st.session_state.place_display}"
st.markdown(f"<p class='muted'>{html.escape(_status_line)}</p>", unsafe_allow_html=True)

# --- Place fallback when the browser cannot supply coordinates ---
if st.session_state.location_status in (
    LocationStatus.PERMISSION_DENIED,
    LocationStatus.UNAVAILABLE,
    LocationStatus.UNSUPPORTED,
) or st.session_state.place_display:
    _hint = location_hint(st.session_state.location_status, _lang)
    if _hint and _coord is None:
        st.markdown(f"<p class='muted'>{_hint}</p>", unsafe_allow_html=True)
    col_place, col_btn = st.columns([3, 1])
    with col_place:
        place = st.text_input(t("label_place", _lang), key="place_input")
    with col_btn:
        st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
        find = st.button(t("btn_find_place", _lang), key="find_btn")
    if find and place:
        try:
            result, display = from_place(place, settings)
            st.session_state.location_status = result.status
            st.session_state.coordinate = result.coordinate
            st.session_state.place_display = display
            st.session_state.error_msg = None
            st.session_state.report = None
        except GeocodingError as e:
            st.session_state.error_msg = t("error_place", _lang).format(error=html.escape(str(e)))
        st.rerun()

if st.session_state.error_msg:
    st.markdown(
        f"<p style='color:#ff9999'>{st.session_state.error_msg}</p>",
        unsafe_allow_html=True,
    )

# --- Manual time override ---
with st.expander(t("label_override", _lang)):
    _override_on = st.toggle(t("label_override", _lang), key="override_on")
    _override_time = st.time_input(
        t("label_override_time", _lang), key="override_time", step=60
    )
_time_source = TimeSource(
    utc_offset_minutes=_utc_offset,
    override=_override_time if _override_on else None,
)


@st.fragment(run_every=settings.clock_refresh_seconds)
def clock_panel() -> None:
    """Wall clock and countdown; cheap, runs every clock tick."""
    now = _time_source.now()
    st.markdown(
        f"<p class='muted'>{t('label_local_time', _lang)} · "
        f"{format_utc_offset(_utc_offset)}</p>"
        f"<h3 style='margin-top:0'>{format_clock(_time_source.to_local(now))}</h3>",
        unsafe_allow_html=True,
    )
    report = st.session_state.report
    if report is None or report.awaiting_location:
        return
    if report.transition is None:
        st.markdown(f"<p class='muted'>{t('no_transition', _lang)}</p>", unsafe_allow_html=True)
        return
    remaining = report.transition.at - now
    st.markdown(
        "<p>"
        + t("countdown", _lang).format(
            label=phase_name(report.transition.label, _lang),
            remaining=format_countdown(remaining),
        )
        + "</p>",
        unsafe_allow_html=True,
    )


@st.fragment(run_every=settings.phase_refresh_seconds)
def phase_panel() -> None:
    """Sun phase, moon and chart; recomputed on the slower phase cadence."""
    report = run(
        _time_source.now(),
        st.session_state.coordinate,
        horizon_minutes=settings.search_horizon_minutes,
        step_minutes=settings.search_step_minutes,
    )
    st.session_state.report = report

    if report.awaiting_location:
        st.markdown(
            "<div class='phase-card' style='background:#1a2f55'>"
            f"<h2>--</h2><p>{t('awaiting_location', _lang)}</p></div>",
            unsafe_allow_html=True,
        )
        return

    assert report.solar is not None and report.phase is not None
    assert report.moon is not None and report.moon_phase is not None
    st.markdown(
        f"<div class='phase-card' style='background:{PHASE_COLORS[report.phase]}'>"
        f"<span class='muted'>{t('label_current_phase', _lang)}</span>"
        f"<h2>{phase_name(report.phase, _lang)}</h2>"
        f"<p>{t(phase_detail_key(report.solar.altitude_deg), _lang)}</p></div>",
        unsafe_allow_html=True,
    )

    col_sun, col_moon, col_illum = st.columns(3)
    col_sun.metric(t("label_sun_altitude", _lang), f"{report.solar.altitude_deg:.1f}°")
    col_moon.metric(t("label_moon_altitude", _lang), f"{report.moon.altitude_deg:.1f}°")
    col_illum.metric(
        f"{t('label_moon', _lang)} · {moon_phase_name(report.moon_phase, _lang)}",
        format_percent(report.moon.illuminated_fraction),
    )

    fig = render_plotly_chart(report, utc_offset_minutes=_utc_offset, lang=_lang)
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


phase_panel()
clock_panel()
