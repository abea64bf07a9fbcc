"""
Departures domain package.

Public API:
- Models: Departure, Verdict and its variants, VerdictKind, WaitTone
- Decision: decide, minutes_until, next_departure_after, suggest_start
- Rendering: VerdictFormatter, format_verdict
- Pipeline: FerryAssistant, FerryCheck
"""
from .models import (
    Departure,
    Verdict,
    VerdictKind,
    WaitTone,
    OnTime,
    Hurry,
    Missed,
    MissedShortWait,
    MissedMediumWait,
    MissedLongWait,
    NoMoreToday,
    parse_schedule,
)
from .policy import DecisionPolicy, default_decision_policy
from .engine import (
    decide,
    minutes_until,
    sort_departures,
    future_departures,
    next_departure_after,
    later_departures,
    is_departure_missed,
    suggest_start,
)
from .formatter import VerdictFormatter, format_verdict, html_highlighter, plain_highlighter
from .assistant import FerryAssistant, FerryCheck

__all__ = [
    "Departure",
    "Verdict",
    "VerdictKind",
    "WaitTone",
    "OnTime",
    "Hurry",
    "Missed",
    "MissedShortWait",
    "MissedMediumWait",
    "MissedLongWait",
    "NoMoreToday",
    "parse_schedule",
    "DecisionPolicy",
    "default_decision_policy",
    "decide",
    "minutes_until",
    "sort_departures",
    "future_departures",
    "next_departure_after",
    "later_departures",
    "is_departure_missed",
    "suggest_start",
    "VerdictFormatter",
    "format_verdict",
    "html_highlighter",
    "plain_highlighter",
    "FerryAssistant",
    "FerryCheck",
]
