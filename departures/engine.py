"""
Purpose: The ferry-catch decision engine.
What it does:

Given a driving-time estimate, the minutes left until the departure the
traveller is aiming for, the day's schedule and the current time, it
classifies the situation:

- margin >= hurry threshold             -> OnTime
- 0 < margin < hurry threshold          -> Hurry
- missed, next ferry soon               -> MissedShortWait (missed_by hidden)
- missed, next ferry in a while         -> MissedMediumWait
- missed, long wait                     -> MissedLongWait (+ suggested start time)
- missed, nothing after arrival         -> NoMoreToday

Everything here is pure and synchronous: same inputs, same verdict.
It never raises for schedule content; unusable departures are dropped.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Any, Iterable, List, Optional

from routing.models import RouteResult, round_half_up

from .models import (
    Departure,
    Hurry,
    MissedLongWait,
    MissedMediumWait,
    MissedShortWait,
    NoMoreToday,
    OnTime,
    Verdict,
    WaitTone,
    as_aware,
    parse_schedule,
    parse_timestamp,
)
from .policy import DecisionPolicy, default_decision_policy


# ---- Schedule helpers ----

def minutes_until(target: Any, now: datetime) -> int:
    """
    Whole minutes from now until target (datetime or ISO string), never negative.
    An unparseable target counts as already gone (0).
    """
    target_time = parse_timestamp(target)
    if target_time is None:
        return 0
    seconds = (target_time - as_aware(now)).total_seconds()
    return max(0, round_half_up(seconds / 60))


def sort_departures(schedule: Iterable[Any]) -> List[Departure]:
    """Earliest first. Ties keep no particular order."""
    return sorted(parse_schedule(schedule), key=lambda departure: departure.aimed)


def future_departures(schedule: Iterable[Any], now: datetime) -> List[Departure]:
    """Departures strictly after now, earliest first."""
    instant = as_aware(now)
    return [departure for departure in sort_departures(schedule) if departure.aimed > instant]


def next_departure_after(schedule: Iterable[Any], instant: datetime) -> Optional[Departure]:
    upcoming = future_departures(schedule, instant)
    return upcoming[0] if upcoming else None


def later_departures(schedule: Iterable[Any], now: datetime, count: int = 4) -> List[Departure]:
    """The `count` departures after the next one."""
    return future_departures(schedule, now)[1:count + 1]


def is_departure_missed(target: Any, driving_time: int, now: datetime) -> bool:
    """Arriving exactly at departure time counts as missed."""
    return minutes_until(target, now) <= driving_time


def suggest_start(
    next_departure: Departure,
    driving_time: int,
    now: datetime,
    policy: Optional[DecisionPolicy] = None,
    tz: Optional[tzinfo] = None,
) -> Optional[datetime]:
    """
    When to leave to reach `next_departure` with the safety margin to spare.

    Returns None when that moment is not in the future (or is closer than
    policy.min_suggestion_lead_minutes). The result is expressed in `tz`,
    falling back to the zone of `now`.
    """
    policy = policy or default_decision_policy()
    now = as_aware(now)

    target_arrival = next_departure.aimed - timedelta(minutes=policy.safety_margin_minutes)
    start = target_arrival - timedelta(minutes=driving_time)

    if start <= now:
        return None

    lead_minutes = round_half_up((start - now).total_seconds() / 60)
    if lead_minutes < policy.min_suggestion_lead_minutes:
        return None

    return start.astimezone(tz or now.tzinfo)


# ---- The decision ----

def decide(
    route: RouteResult,
    time_to_departure: int,
    schedule: Iterable[Any],
    now: datetime,
    *,
    policy: Optional[DecisionPolicy] = None,
    tz: Optional[tzinfo] = None,
) -> Verdict:
    """
    Classify whether the traveller catches the departure `time_to_departure`
    minutes away, and what happens if not.

    Args:
        route: driving estimate; route.time is minutes, route.distance meters
        time_to_departure: minutes until the departure being aimed for
        schedule: departure records (Departure, mappings or objects with
                  `aimed` / `aimedDepartureTime`), any order
        now: current instant (naive means UTC)
        policy: thresholds, defaults to DecisionPolicy()
        tz: zone for the suggested start time, defaults to now's zone

    Returns:
        One of the Verdict variants in departures.models.
    """
    policy = policy or default_decision_policy()
    now = as_aware(now)
    driving_time = route.time
    distance = route.distance

    # --- Catching it ---
    if time_to_departure > driving_time:
        margin = time_to_departure - driving_time
        if margin < policy.hurry_margin_minutes:
            return Hurry(distance=distance, driving_time=driving_time, margin=margin)
        return OnTime(distance=distance, driving_time=driving_time, margin=margin)

    # --- Missing it: what leaves after we get there? ---
    missed_by = driving_time - time_to_departure
    projected_arrival = now + timedelta(minutes=driving_time)

    next_departure = next_departure_after(schedule, projected_arrival)
    if next_departure is None:
        #no next wait to weigh against, so missed_by is not worth mentioning
        return NoMoreToday(
            distance=distance,
            driving_time=driving_time,
            missed_by=missed_by,
            show_missed_by=False,
        )

    next_wait = max(0, round_half_up((next_departure.aimed - projected_arrival).total_seconds() / 60))

    if next_wait <= policy.short_wait_minutes:
        tone = WaitTone.GREEN if next_wait <= policy.green_wait_minutes else WaitTone.AMBER
        return MissedShortWait(
            distance=distance,
            driving_time=driving_time,
            missed_by=missed_by,
            show_missed_by=False,
            next_wait=next_wait,
            tone=tone,
        )

    if next_wait <= policy.medium_wait_minutes:
        return MissedMediumWait(
            distance=distance,
            driving_time=driving_time,
            missed_by=missed_by,
            show_missed_by=True,
            next_wait=next_wait,
        )

    return MissedLongWait(
        distance=distance,
        driving_time=driving_time,
        missed_by=missed_by,
        show_missed_by=True,
        next_wait=next_wait,
        suggested_start=suggest_start(next_departure, driving_time, now, policy, tz),
    )
