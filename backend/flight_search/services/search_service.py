import logging
import sqlite3
from typing import List, Optional

from flight_search.models.flight import Flight, Itinerary
from flight_search.services.db_service import DatabaseService, FlightDataSource
from flight_search.services.formatter import format_itineraries, rank_itineraries

logger = logging.getLogger(__name__)

FAILED_SEARCH_MESSAGE = "Failed to search\n"


class SearchError(Exception):
    """Raised when a search cannot be completed; partial results are dropped."""


class FlightSearchService:
    def __init__(self, data_source: Optional[FlightDataSource] = None):
        self.data_source = data_source or DatabaseService()

    def search(
        self,
        origin_city: str,
        destination_city: str,
        direct_only: bool,
        day_of_month: int,
        max_results: int,
    ) -> List[Itinerary]:
        """Find up to ``max_results`` itineraries, direct flights first.

        The one-hop query only fills the slots the direct query left open and
        never runs when ``direct_only`` is set.

        Raises:
            SearchError: on invalid input or any data-access failure.
        """
        if not isinstance(max_results, int) or isinstance(max_results, bool) or max_results < 0:
            raise SearchError(f"number of itineraries must be an integer >= 0, got {max_results}")

        try:
            itineraries = [
                Itinerary.direct(Flight.from_row(row))
                for row in self.data_source.search_direct(
                    origin_city, destination_city, day_of_month, max_results
                )
            ]

            remaining = max_results - len(itineraries)
            if not direct_only and remaining > 0:
                for row in self.data_source.search_one_hop(
                    origin_city, destination_city, day_of_month, remaining
                ):
                    itineraries.append(
                        Itinerary.one_hop(
                            Flight.from_row(row, prefix="f1_"),
                            Flight.from_row(row, prefix="f2_"),
                        )
                    )
        except (sqlite3.Error, KeyError, TypeError, ValueError) as e:
            raise SearchError(f"flight search failed: {e}") from e

        logger.info(
            f"航班搜索 {origin_city} -> {destination_city} (day={day_of_month}): "
            f"{len(itineraries)} 个行程"
        )
        return rank_itineraries(itineraries[:max_results])

    def transaction_search(
        self,
        origin_city: str,
        destination_city: str,
        direct_only: bool,
        day_of_month: int,
        number_of_itineraries: int,
    ) -> str:
        """Search and render the itineraries as text.

        Returns "No flights match your selection\\n" when nothing matches and
        "Failed to search\\n" when the search fails.
        """
        try:
            itineraries = self.search(
                origin_city,
                destination_city,
                direct_only,
                day_of_month,
                number_of_itineraries,
            )
        except SearchError:
            logger.exception("航班搜索失败")
            return FAILED_SEARCH_MESSAGE
        return format_itineraries(itineraries)


def transaction_search(
    origin_city: str,
    destination_city: str,
    direct_only: bool,
    day_of_month: int,
    number_of_itineraries: int,
) -> str:
    return FlightSearchService().transaction_search(
        origin_city, destination_city, direct_only, day_of_month, number_of_itineraries
    )
