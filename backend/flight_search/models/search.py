from pydantic import BaseModel, Field
from typing import List

from flight_search.core.config import settings
from flight_search.models.flight import Itinerary


class SearchRequest(BaseModel):
    origin_city: str
    destination_city: str
    direct_only: bool = False
    day_of_month: int = Field(ge=1, le=31)
    number_of_itineraries: int = Field(default=settings.DEFAULT_ITINERARY_LIMIT, ge=0)


class SearchResponse(BaseModel):
    result: str
    itineraries: List[Itinerary] = []


class HealthResponse(BaseModel):
    status: str
