"""Simple two-language (ko/en) translation helper."""

from skyphase.models import LocationStatus, MoonPhaseLabel, PhaseLabel

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "지금 하늘",
        "en": "SkyPhase",
    },
    "label_latitude": {
        "ko": "위도",
        "en": "Latitude",
    },
    "label_longitude": {
        "ko": "경도",
        "en": "Longitude",
    },
    "label_local_time": {
        "ko": "현재 시각",
        "en": "Local time",
    },
    "label_current_phase": {
        "ko": "지금 하늘",
        "en": "Current phase",
    },
    "label_next_phase": {
        "ko": "다음 단계",
        "en": "Next phase",
    },
    "label_moon": {
        "ko": "달",
        "en": "Moon",
    },
    "label_sun_altitude": {
        "ko": "태양 고도",
        "en": "Sun altitude",
    },
    "label_moon_altitude": {
        "ko": "달 고도",
        "en": "Moon altitude",
    },
    "label_illumination": {
        "ko": "밝기",
        "en": "Illuminated",
    },
    "label_override": {
        "ko": "시각 직접 지정",
        "en": "Preview a time",
    },
    "label_override_time": {
        "ko": "시각",
        "en": "Time",
    },
    "label_place": {
        "ko": "장소",
        "en": "Place",
    },
    "btn_find_place": {
        "ko": "✦ 장소 찾기",
        "en": "✦ Find place",
    },
    "status_pending": {
        "ko": "위치를 확인하는 중…",
        "en": "Locating…",
    },
    "status_locked": {
        "ko": "위치 확인 완료.",
        "en": "Location locked.",
    },
    "status_permission_denied": {
        "ko": "위치를 사용할 수 없어요.",
        "en": "Location unavailable.",
    },
    "status_unavailable": {
        "ko": "위치를 사용할 수 없어요.",
        "en": "Location unavailable.",
    },
    "status_unsupported": {
        "ko": "이 브라우저는 위치 확인을 지원하지 않아요.",
        "en": "Geolocation not supported.",
    },
    "hint_permission_denied": {
        "ko": "현재 하늘 단계를 보려면 위치 접근을 허용하거나 장소를 입력하세요.",
        "en": "Allow location access to see the current sky phase.",
    },
    "hint_unavailable": {
        "ko": "위치를 읽을 수 없었어요. 장소를 입력해보세요.",
        "en": "We could not read your location.",
    },
    "awaiting_location": {
        "ko": "위치 정보를 기다리는 중입니다.",
        "en": "Awaiting location data.",
    },
    "error_place": {
        "ko": "장소를 찾을 수 없어요. ({error})",
        "en": "Place not found. Try a more specific name. ({error})",
    },
    "detail_day": {
        "ko": "해가 지평선 위에 있어요.",
        "en": "The sun is above the horizon.",
    },
    "detail_civil": {
        "ko": "지평선 아래로 부드러운 빛이 남아 있어요.",
        "en": "Soft light still lingers below the horizon.",
    },
    "detail_nautical": {
        "ko": "맨눈으로 지평선이 희미하게 보여요.",
        "en": "The horizon is faintly visible to the naked eye.",
    },
    "detail_astronomical": {
        "ko": "하늘이 거의 어두워졌어요.",
        "en": "The sky is nearly dark with minimal glow.",
    },
    "detail_night": {
        "ko": "해가 지평선 훨씬 아래에 있어요.",
        "en": "The sun is well below the horizon.",
    },
    "no_transition": {
        "ko": "앞으로 24시간 동안 단계 변화가 없어요.",
        "en": "No phase change in the next 24 hours.",
    },
    "countdown": {
        "ko": "{label}까지 {remaining}",
        "en": "{label} in {remaining}",
    },
    "chart_sun": {
        "ko": "태양",
        "en": "Sun",
    },
    "chart_moon": {
        "ko": "달",
        "en": "Moon",
    },
    "chart_now": {
        "ko": "지금",
        "en": "Now",
    },
    # Solar phases, keyed by PhaseLabel.name
    "phase_DAY": {"ko": "낮", "en": "Day"},
    "phase_CIVIL_DAWN": {"ko": "새벽 시민박명", "en": "Civil dawn"},
    "phase_CIVIL_TWILIGHT": {"ko": "저녁 시민박명", "en": "Civil twilight"},
    "phase_NAUTICAL_DAWN": {"ko": "새벽 항해박명", "en": "Nautical dawn"},
    "phase_NAUTICAL_TWILIGHT": {"ko": "저녁 항해박명", "en": "Nautical twilight"},
    "phase_ASTRONOMICAL_DAWN": {"ko": "새벽 천문박명", "en": "Astronomical dawn"},
    "phase_ASTRONOMICAL_TWILIGHT": {"ko": "저녁 천문박명", "en": "Astronomical twilight"},
    "phase_NIGHT": {"ko": "밤", "en": "Night"},
    # Moon phases, keyed by MoonPhaseLabel.name
    "moon_NEW": {"ko": "삭", "en": "New moon"},
    "moon_WAXING_CRESCENT": {"ko": "초승달", "en": "Waxing crescent"},
    "moon_FIRST_QUARTER": {"ko": "상현달", "en": "First quarter"},
    "moon_WAXING_GIBBOUS": {"ko": "차오르는 볼록달", "en": "Waxing gibbous"},
    "moon_FULL": {"ko": "보름달", "en": "Full moon"},
    "moon_WANING_GIBBOUS": {"ko": "기우는 볼록달", "en": "Waning gibbous"},
    "moon_LAST_QUARTER": {"ko": "하현달", "en": "Last quarter"},
    "moon_WANING_CRESCENT": {"ko": "그믐달", "en": "Waning crescent"},
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def phase_name(label: PhaseLabel, lang: str) -> str:
    return t(f"phase_{label.name}", lang)


def moon_phase_name(label: MoonPhaseLabel, lang: str) -> str:
    return t(f"moon_{label.name}", lang)


def location_status_text(status: LocationStatus, lang: str) -> str:
    return t(f"status_{status.value}", lang)


def location_hint(status: LocationStatus, lang: str) -> str | None:
    """Follow-up sentence for a failed lookup; None when there is nothing to add."""
    if status is LocationStatus.PERMISSION_DENIED:
        return t("hint_permission_denied", lang)
    if status in (LocationStatus.UNAVAILABLE, LocationStatus.UNSUPPORTED):
        return t("hint_unavailable", lang)
    return None
