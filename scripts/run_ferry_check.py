import logging
from datetime import datetime, timedelta, timezone

from routing import Resolver, build_default_providers
from departures import FerryAssistant, html_highlighter, VerdictFormatter


def main():
    # Reads HERE_API_KEY / GOOGLE_MAPS_API_KEY from .env; without them
    # every answer comes from the haversine estimate.
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s | %(message)s")

    resolver = Resolver(build_default_providers())
    assistant = FerryAssistant(resolver=resolver)

    start = (60.3913, 5.3221)      # Bergen sentrum (lat, lng)
    terminal = (60.1441, 5.4205)   # Halhjem ferjekai (lat, lng)

    now = datetime.now(timezone.utc)
    schedule = [
        {"aimed": (now + timedelta(minutes=20)).isoformat()},
        {"aimedDepartureTime": (now + timedelta(minutes=65)).isoformat()},
        {"aimed": (now + timedelta(minutes=110)).isoformat()},
    ]

    result = assistant.check(start, terminal, schedule[0], schedule, now=now, road_only=True)

    print(f"\nRoute: {result.route.to_dict()}")
    print(f"Departure in {result.time_to_departure} min -> {result.verdict.kind.value}")
    print(f"Verdict: {result.verdict.to_dict()}\n")
    print(result.text)

    # same question again: served from the resolver cache, no HTTP
    html = VerdictFormatter(locale="en", highlighter=html_highlighter)
    again = FerryAssistant(resolver=resolver, formatter=html).check(start, terminal, schedule[0], schedule, now=now, road_only=True)
    print(f"\n{again.text}")


if __name__ == "__main__":
    main()
