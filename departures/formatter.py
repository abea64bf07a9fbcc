"""
Purpose: Turn a Verdict into the sentence shown to the traveller.
What it does:
- Renders distance, driving time, margin / lateness / wait in Norwegian
  (bokmål, the default) or English
- Uses hours + minutes once a magnitude reaches 60 minutes
- Highlights key figures through a pluggable highlighter (HTML spans or none)
- Respects Missed.show_missed_by and the WaitTone hint

Rule: never re-derives categories or margins; everything comes from the Verdict.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

from .models import (
    Hurry,
    Missed,
    MissedLongWait,
    MissedMediumWait,
    MissedShortWait,
    NoMoreToday,
    OnTime,
    Verdict,
    WaitTone,
)


class Highlight(str, Enum):
    INFO = "info"      # distance / driving time
    GOOD = "good"      # margin, short green wait
    WARN = "warn"      # amber waits
    BAD = "bad"        # lateness, "hurry", no more departures
    STRONG = "strong"  # emphasis without colour


Highlighter = Callable[[str, Highlight], str]


def plain_highlighter(text: str, token: Highlight) -> str:
    return text


HTML_COLORS: Dict[Highlight, Optional[str]] = {
    Highlight.INFO: "#2563eb",
    Highlight.GOOD: "#16a34a",
    Highlight.WARN: "#f59e0b",
    Highlight.BAD: "#dc2626",
    Highlight.STRONG: None,
}


def html_highlighter(text: str, token: Highlight) -> str:
    color = HTML_COLORS.get(token)
    if color is None:
        return f'<span style="font-weight: bold;">{text}</span>'
    return f'<span style="color: {color}; font-weight: bold;">{text}</span>'


PHRASES: Dict[str, Dict[str, str]] = {
    "nb": {
        "minute": "minutt",
        "minutes": "minutter",
        "hour": "time",
        "hours": "timer",
        "and": "og",
        "short_hour": "t",
        "intro": "Du er {distance} unna og det tar ca {driving} å kjøre.",
        "hurry": "SKYND DEG!",
        "on_time": "Du rekker fergen med {margin}.",
        "late": "Du kommer {missed} for sent.",
        "wait": "Du må vente i {wait} til neste avgang.",
        "wait_none": "Fergen går akkurat når du kommer frem.",
        "suggest": "Start å kjør kl. {time} for å rekke fergen med {margin} margin.",
        "no_more": "Ingen flere avganger i dag.",
        "estimate": "Kjøretiden er et grovt estimat.",
    },
    "en": {
        "minute": "minute",
        "minutes": "minutes",
        "hour": "hour",
        "hours": "hours",
        "and": "and",
        "short_hour": "h",
        "intro": "You are {distance} away and it takes about {driving} to drive.",
        "hurry": "HURRY!",
        "on_time": "You will catch the ferry with {margin} to spare.",
        "late": "You will be {missed} late.",
        "wait": "You will have to wait {wait} for the next departure.",
        "wait_none": "The ferry leaves just as you arrive.",
        "suggest": "Start driving at {time} to catch the ferry with a {margin} margin.",
        "no_more": "No more departures today.",
        "estimate": "The driving time is a rough estimate.",
    },
}


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{round(meters)} m"
    return f"{meters / 1000:.1f} km"


class VerdictFormatter:
    """
    Renders Verdicts for one locale with one highlighting strategy.

    Unknown locales fall back to "nb".
    """

    def __init__(self, locale: str = "nb", highlighter: Optional[Highlighter] = None,
                 safety_margin_minutes: int = 5):
        self.locale = locale if locale in PHRASES else "nb"
        self.phrases = PHRASES[self.locale]
        self.highlight = highlighter or plain_highlighter
        self.safety_margin_minutes = safety_margin_minutes

    # --- Units ---

    def _unit(self, amount: int, singular: str, plural: str) -> str:
        return self.phrases[singular] if amount == 1 else self.phrases[plural]

    def duration(self, minutes: int) -> str:
        """
        45 -> "45 minutter", 60 -> "1 time", 135 -> "2 timer og 15 minutter"
        """
        if minutes < 60:
            return f"{minutes} {self._unit(minutes, 'minute', 'minutes')}"
        hours, rest = divmod(minutes, 60)
        hour_text = f"{hours} {self._unit(hours, 'hour', 'hours')}"
        if rest == 0:
            return hour_text
        return f"{hour_text} {self.phrases['and']} {rest} {self._unit(rest, 'minute', 'minutes')}"

    def driving_time(self, minutes: int) -> str:
        """Compact form: "25 min", "2 t", "1 t 10 min"."""
        if minutes < 60:
            return f"{minutes} min"
        hours, rest = divmod(minutes, 60)
        if rest == 0:
            return f"{hours} {self.phrases['short_hour']}"
        return f"{hours} {self.phrases['short_hour']} {rest} min"

    # --- Rendering ---

    def format(self, verdict: Verdict, *, currently_driving: bool = False, degraded: bool = False) -> str:
        """
        Args:
            verdict: output of departures.engine.decide
            currently_driving: hide the suggested start time (already on the road)
            degraded: append a note that the driving time is a straight-line estimate
        """
        parts = [self.phrases["intro"].format(
            distance=self.highlight(format_distance(verdict.distance), Highlight.INFO),
            driving=self.highlight(self.driving_time(verdict.driving_time), Highlight.INFO),
        )]

        if isinstance(verdict, Hurry):
            parts.append(self.highlight(self.phrases["hurry"], Highlight.BAD))
            parts.append(self._on_time(verdict.margin))
        elif isinstance(verdict, OnTime):
            parts.append(self._on_time(verdict.margin))
        elif isinstance(verdict, Missed):
            if verdict.show_missed_by:
                parts.append(self.phrases["late"].format(
                    missed=self.highlight(self.duration(verdict.missed_by), Highlight.BAD)
                ))
            parts.append(self._wait(verdict, currently_driving))
        else:
            raise TypeError(f"Unsupported verdict type: {type(verdict).__name__}")

        if degraded:
            parts.append(self.phrases["estimate"])

        return " ".join(parts)

    def _on_time(self, margin: int) -> str:
        return self.phrases["on_time"].format(margin=self.highlight(self.duration(margin), Highlight.GOOD))

    def _wait(self, verdict: Missed, currently_driving: bool) -> str:
        if isinstance(verdict, NoMoreToday):
            return self.highlight(self.phrases["no_more"], Highlight.BAD)

        if isinstance(verdict, MissedShortWait):
            if verdict.next_wait == 0:
                return self.highlight(self.phrases["wait_none"], Highlight.GOOD)
            token = Highlight.GOOD if verdict.tone == WaitTone.GREEN else Highlight.WARN
            return self.phrases["wait"].format(wait=self.highlight(self.duration(verdict.next_wait), token))

        if isinstance(verdict, (MissedMediumWait, MissedLongWait)):
            text = self.phrases["wait"].format(
                wait=self.highlight(self.duration(verdict.next_wait), Highlight.WARN)
            )
            if isinstance(verdict, MissedLongWait) and verdict.suggested_start is not None and not currently_driving:
                text += " " + self.phrases["suggest"].format(
                    time=self.highlight(verdict.suggested_start_text, Highlight.STRONG),
                    margin=self.highlight(self.duration(self.safety_margin_minutes), Highlight.STRONG),
                )
            return text

        raise TypeError(f"Unsupported verdict type: {type(verdict).__name__}")


def format_verdict(
    verdict: Verdict,
    locale: str = "nb",
    highlighter: Optional[Highlighter] = None,
    *,
    currently_driving: bool = False,
    degraded: bool = False,
) -> str:
    """One-shot convenience around VerdictFormatter."""
    return VerdictFormatter(locale, highlighter).format(
        verdict, currently_driving=currently_driving, degraded=degraded
    )
