# tests/test_i18n.py

import pytest

from skyphase.i18n import location_hint, location_status_text, moon_phase_name, phase_name, t
from skyphase.models import LocationStatus, MoonPhaseLabel, PhaseLabel


def test_fallbacks():
    assert t("page_title", "fr") == "SkyPhase"
    assert t("no_such_key", "ko") == "no_such_key"


@pytest.mark.parametrize("lang", ["en", "ko"])
def test_every_label_is_translated(lang):
    for label in PhaseLabel:
        assert phase_name(label, lang) != f"phase_{label.name}"
    for label in MoonPhaseLabel:
        assert moon_phase_name(label, lang) != f"moon_{label.name}"
    for status in LocationStatus:
        assert location_status_text(status, lang) != f"status_{status.value}"


def test_english_labels_match_enum_values():
    for label in PhaseLabel:
        assert phase_name(label, "en") == label.value
    for label in MoonPhaseLabel:
        assert moon_phase_name(label, "en") == label.value


def test_location_hint():
    assert location_hint(LocationStatus.PERMISSION_DENIED, "en") == (
        "Allow location access to see the current sky phase."
    )
    assert location_hint(LocationStatus.UNAVAILABLE, "en") == "We could not read your location."
    assert location_hint(LocationStatus.LOCKED, "en") is None
