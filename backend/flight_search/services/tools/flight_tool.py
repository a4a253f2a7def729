import logging
from typing import Optional

from langchain_core.runnables import RunnableConfig
from langchain_core.tools import tool

from flight_search.core.config import settings
from flight_search.services.db_service import DatabaseService
from flight_search.services.search_service import FlightSearchService

logger = logging.getLogger(__name__)


@tool
def search_flight_itineraries(
    origin_city: str,
    destination_city: str,
    day_of_month: int,
    direct_only: bool = False,
    number_of_itineraries: Optional[int] = None,
    *,
    config: RunnableConfig,
) -> str:
    """Search direct and one-stop flights between two cities on a day of the month.

    Results are ranked by total flight time. Set direct_only to skip
    connecting flights.

    Returns:
        One block per itinerary listing its flights, or a short message when
        nothing matches or the search fails.
    """
    configuration = (config or {}).get("configurable", {})
    db_path = configuration.get("db_path", None)
    if number_of_itineraries is None:
        number_of_itineraries = settings.DEFAULT_ITINERARY_LIMIT

    logger.info(f"工具调用: 搜索 {origin_city} -> {destination_city}, day={day_of_month}")
    service = FlightSearchService(DatabaseService(db_path))
    return service.transaction_search(
        origin_city,
        destination_city,
        direct_only,
        day_of_month,
        number_of_itineraries,
    )
