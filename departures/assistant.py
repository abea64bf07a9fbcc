"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Takes a traveller position, a ferry terminal, the departure they are aiming
for and the day's schedule, then:
1. resolves the driving time (routing.Resolver, cached + coalesced)
2. decides whether they make it (departures.engine.decide)
3. renders the verdict (departures.formatter.VerdictFormatter)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any, Iterable, Optional

from routing.models import RouteRequest, RouteResult
from routing.resolver import Resolver, get_default_resolver

from .engine import decide, minutes_until
from .formatter import VerdictFormatter
from .models import Departure, Verdict
from .policy import DecisionPolicy, default_decision_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FerryCheck:
    """
    Everything one check produced, kept together for the caller.
    """
    route: RouteResult
    time_to_departure: int
    verdict: Verdict
    text: str


class FerryAssistant:
    """
    Coordinates one "will I catch this ferry?" question end to end.
    Collaborators are injected; the resolver defaults to the process-wide one.
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        formatter: Optional[VerdictFormatter] = None,
        policy: Optional[DecisionPolicy] = None,
    ):
        self.resolver = resolver or get_default_resolver()
        self.policy = policy or default_decision_policy()
        self.formatter = formatter or VerdictFormatter(safety_margin_minutes=self.policy.safety_margin_minutes)

    def check(
        self,
        start: Any,
        terminal: Any,
        departure: Any,
        schedule: Iterable[Any],
        *,
        now: Optional[datetime] = None,
        road_only: bool = False,
        tz: Optional[tzinfo] = None,
        currently_driving: bool = False,
    ) -> FerryCheck:
        """
        Args:
            start: traveller position (Coordinate, (lat, lng) or {"lat", "lng"})
            terminal: ferry quay position, same shapes as start
            departure: the departure aimed for (datetime, ISO string or departure record)
            schedule: the day's departure records
            now: current instant, defaults to the wall clock (UTC)
            road_only: ask providers to avoid ferries on the way to the terminal
            tz: zone used for the suggested start time
            currently_driving: suppress the suggested start time in the text
        """
        now = now or datetime.now(timezone.utc)
        schedule = list(schedule or [])

        route = self.resolver.resolve(RouteRequest.between(start, terminal, road_only=road_only))
        if route.is_degraded:
            logger.info(f"driving time to terminal is a haversine estimate ({route.time} min)")

        aimed = departure
        if not isinstance(departure, (datetime, str)):
            record = Departure.from_record(departure)
            aimed = record.aimed if record else None
        time_to_departure = minutes_until(aimed, now)

        verdict = decide(route, time_to_departure, schedule, now, policy=self.policy, tz=tz)
        text = self.formatter.format(verdict, currently_driving=currently_driving, degraded=route.is_degraded)

        return FerryCheck(route=route, time_to_departure=time_to_departure, verdict=verdict, text=text)
