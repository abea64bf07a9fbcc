"""
Purpose: Domain models for the ferry-catch decision.
What it does:
- Departure: one scheduled (aimed) ferry departure
- Schedule parsing: turns raw departure records (mappings or objects with
  `aimed` / `aimedDepartureTime`) into Departures, dropping unusable ones
- Verdict variants: the structured answer handed to the formatter
  OnTime | Hurry | MissedShortWait | MissedMediumWait | MissedLongWait | NoMoreToday

Rule: No routing calls, no decision logic. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Iterable, List, Optional

# Field names recognised on raw departure records, in precedence order.
DEPARTURE_TIME_FIELDS = ("aimed", "aimedDepartureTime", "aimed_departure_time")


def as_aware(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    datetime or ISO-8601 string (a trailing "Z" is fine) -> aware datetime.
    Anything else, or an unparseable string, gives None.
    """
    if isinstance(value, datetime):
        return as_aware(value)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            return as_aware(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def departure_time(record: Any) -> Optional[datetime]:
    """
    `aimed` is canonical; `aimedDepartureTime` is only read when `aimed` is absent.
    """
    for name in DEPARTURE_TIME_FIELDS:
        raw = _field(record, name)
        if raw:
            return parse_timestamp(raw)
    return None


@dataclass(frozen=True)
class Departure:
    aimed: datetime

    @classmethod
    def from_record(cls, record: Any) -> Optional[Departure]:
        if isinstance(record, Departure):
            return record
        aimed = departure_time(record)
        if aimed is None:
            return None
        return cls(aimed=aimed)


def parse_schedule(records: Optional[Iterable[Any]]) -> List[Departure]:
    """
    Unordered records -> Departures, silently dropping records without a usable time.
    Order is preserved; sorting happens on demand in the engine.
    """
    departures: List[Departure] = []
    for record in records or []:
        departure = Departure.from_record(record)
        if departure is not None:
            departures.append(departure)
    return departures


class VerdictKind(str, Enum):
    ON_TIME = "on_time"
    HURRY = "hurry"
    MISSED_SHORT_WAIT = "missed_short_wait"
    MISSED_MEDIUM_WAIT = "missed_medium_wait"
    MISSED_LONG_WAIT = "missed_long_wait"
    NO_MORE_TODAY = "no_more_today"


class WaitTone(str, Enum):
    """
    Highlight hint for the wait at the terminal. Formatting only:
    GREEN and AMBER short waits are the same verdict.
    """
    GREEN = "green"
    AMBER = "amber"


@dataclass(frozen=True)
class Verdict:
    """
    Common part of every verdict. distance in meters, driving_time in minutes.
    """
    kind: ClassVar[VerdictKind]

    distance: int
    driving_time: int

    @property
    def catches_ferry(self) -> bool:
        return self.kind in (VerdictKind.ON_TIME, VerdictKind.HURRY)

    def to_dict(self) -> dict:
        data = {"kind": self.kind.value}
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            data[field.name] = value
        return data


@dataclass(frozen=True)
class OnTime(Verdict):
    kind: ClassVar[VerdictKind] = VerdictKind.ON_TIME
    margin: int


@dataclass(frozen=True)
class Hurry(Verdict):
    """On time, but with less than the comfortable margin."""
    kind: ClassVar[VerdictKind] = VerdictKind.HURRY
    margin: int


@dataclass(frozen=True)
class Missed(Verdict):
    """
    Base for every "you will not make this departure" verdict.
    show_missed_by tells the formatter whether to mention missed_by at all.
    """
    missed_by: int
    show_missed_by: bool


@dataclass(frozen=True)
class MissedShortWait(Missed):
    kind: ClassVar[VerdictKind] = VerdictKind.MISSED_SHORT_WAIT
    next_wait: int
    tone: WaitTone


@dataclass(frozen=True)
class MissedMediumWait(Missed):
    kind: ClassVar[VerdictKind] = VerdictKind.MISSED_MEDIUM_WAIT
    next_wait: int


@dataclass(frozen=True)
class MissedLongWait(Missed):
    kind: ClassVar[VerdictKind] = VerdictKind.MISSED_LONG_WAIT
    next_wait: int
    suggested_start: Optional[datetime] = None

    @property
    def suggested_start_text(self) -> Optional[str]:
        """HH:MM in the zone the engine was asked for."""
        if self.suggested_start is None:
            return None
        return self.suggested_start.strftime("%H:%M")


@dataclass(frozen=True)
class NoMoreToday(Missed):
    kind: ClassVar[VerdictKind] = VerdictKind.NO_MORE_TODAY
