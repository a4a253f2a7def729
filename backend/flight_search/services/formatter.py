from typing import Iterable, List

from flight_search.models.flight import Itinerary

NO_FLIGHTS_MESSAGE = "No flights match your selection\n"


def rank_itineraries(itineraries: Iterable[Itinerary]) -> List[Itinerary]:
    """Order by total duration, then first flight id, then second flight id."""
    return sorted(itineraries, key=Itinerary.sort_key)


def format_itineraries(itineraries: Iterable[Itinerary]) -> str:
    ranked = rank_itineraries(itineraries)
    if not ranked:
        return NO_FLIGHTS_MESSAGE

    lines = []
    for i, itinerary in enumerate(ranked):
        flights = itinerary.flights
        lines.append(
            f"Itinerary {i}: {len(flights)} flight(s), {itinerary.total_duration} minutes\n"
        )
        lines.extend(f"{flight}\n" for flight in flights)
    return "".join(lines)
