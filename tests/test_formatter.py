from datetime import datetime, timezone

import pytest

from departures.formatter import (
    Highlight,
    VerdictFormatter,
    format_distance,
    format_verdict,
    html_highlighter,
)
from departures.models import (
    Hurry,
    MissedLongWait,
    MissedMediumWait,
    MissedShortWait,
    NoMoreToday,
    OnTime,
    Verdict,
    WaitTone,
)


@pytest.fixture
def nb():
    return VerdictFormatter()


@pytest.fixture
def en():
    return VerdictFormatter(locale="en")


def long_wait(**overrides):
    values = dict(
        distance=30000,
        driving_time=40,
        missed_by=20,
        show_missed_by=True,
        next_wait=50,
        suggested_start=datetime(2024, 6, 1, 10, 45, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return MissedLongWait(**values)


def test_units():
    assert format_distance(850) == "850 m"
    assert format_distance(12345) == "12.3 km"

    f = VerdictFormatter()
    assert f.duration(1) == "1 minutt"
    assert f.duration(45) == "45 minutter"
    assert f.duration(60) == "1 time"
    assert f.duration(135) == "2 timer og 15 minutter"
    assert f.driving_time(25) == "25 min"
    assert f.driving_time(120) == "2 t"
    assert f.driving_time(70) == "1 t 10 min"

    assert VerdictFormatter(locale="en").duration(61) == "1 hour and 1 minute"


def test_on_time_and_hurry(nb):
    on_time = nb.format(OnTime(distance=12000, driving_time=15, margin=10))
    assert on_time == "Du er 12.0 km unna og det tar ca 15 min å kjøre. Du rekker fergen med 10 minutter."

    hurry = nb.format(Hurry(distance=12000, driving_time=15, margin=2))
    assert "SKYND DEG!" in hurry
    assert hurry.endswith("Du rekker fergen med 2 minutter.")


def test_long_wait_with_suggestion(nb):
    text = nb.format(long_wait())

    assert text == (
        "Du er 30.0 km unna og det tar ca 40 min å kjøre. "
        "Du kommer 20 minutter for sent. "
        "Du må vente i 50 minutter til neste avgang. "
        "Start å kjør kl. 10:45 for å rekke fergen med 5 minutter margin."
    )


def test_suggestion_hidden_while_driving_or_absent(nb):
    assert "10:45" not in nb.format(long_wait(), currently_driving=True)
    assert "Start" not in nb.format(long_wait(suggested_start=None))


def test_short_wait_never_mentions_lateness(en):
    verdict = MissedShortWait(
        distance=5000, driving_time=12, missed_by=3, show_missed_by=False,
        next_wait=4, tone=WaitTone.GREEN,
    )
    text = en.format(verdict)

    assert "late" not in text
    assert "You will have to wait 4 minutes for the next departure." in text


def test_medium_wait_mentions_lateness_in_hours(en):
    verdict = MissedMediumWait(
        distance=90000, driving_time=95, missed_by=75, show_missed_by=True, next_wait=18,
    )
    text = en.format(verdict)

    assert "about 1 h 35 min to drive" in text
    assert "You will be 1 hour and 15 minutes late." in text


def test_zero_wait_and_no_more_departures(nb):
    zero = MissedShortWait(
        distance=5000, driving_time=10, missed_by=0, show_missed_by=False,
        next_wait=0, tone=WaitTone.GREEN,
    )
    assert nb.format(zero).endswith("Fergen går akkurat når du kommer frem.")

    none_left = NoMoreToday(distance=5000, driving_time=30, missed_by=20, show_missed_by=False)
    text = nb.format(none_left)
    assert text.endswith("Ingen flere avganger i dag.")
    assert "for sent" not in text


def test_html_highlighting_follows_tone():
    f = VerdictFormatter(locale="en", highlighter=html_highlighter)

    green = MissedShortWait(distance=500, driving_time=5, missed_by=1, show_missed_by=False,
                            next_wait=3, tone=WaitTone.GREEN)
    amber = MissedShortWait(distance=500, driving_time=5, missed_by=1, show_missed_by=False,
                            next_wait=12, tone=WaitTone.AMBER)

    assert '<span style="color: #16a34a; font-weight: bold;">3 minutes</span>' in f.format(green)
    assert '<span style="color: #f59e0b; font-weight: bold;">12 minutes</span>' in f.format(amber)
    assert '<span style="color: #2563eb; font-weight: bold;">500 m</span>' in f.format(green)
    assert html_highlighter("10:45", Highlight.STRONG) == '<span style="font-weight: bold;">10:45</span>'


def test_degraded_note_and_locale_fallback():
    verdict = OnTime(distance=1000, driving_time=2, margin=30)
    assert format_verdict(verdict, "en", degraded=True).endswith("The driving time is a rough estimate.")
    assert format_verdict(verdict, "sv") == format_verdict(verdict, "nb")


def test_custom_safety_margin_is_rendered():
    text = VerdictFormatter(safety_margin_minutes=10).format(long_wait())
    assert "med 10 minutter margin" in text


def test_unknown_verdict_type_is_rejected(nb):
    with pytest.raises(TypeError):
        nb.format(Verdict(distance=1, driving_time=1))
