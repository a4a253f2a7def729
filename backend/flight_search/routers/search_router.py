import logging

from fastapi import APIRouter, Depends, HTTPException

from flight_search.models.search import HealthResponse, SearchRequest, SearchResponse
from flight_search.services.db_service import DatabaseService
from flight_search.services.formatter import format_itineraries
from flight_search.services.search_service import (
    FAILED_SEARCH_MESSAGE,
    FlightSearchService,
    SearchError,
)

logger = logging.getLogger(__name__)

# API路由
router = APIRouter()


def get_database_service() -> DatabaseService:
    return DatabaseService()


def get_search_service(
    db: DatabaseService = Depends(get_database_service),
) -> FlightSearchService:
    return FlightSearchService(db)


@router.post("/search", response_model=SearchResponse)
def search(
    request: SearchRequest,
    service: FlightSearchService = Depends(get_search_service),
):
    try:
        itineraries = service.search(
            request.origin_city,
            request.destination_city,
            request.direct_only,
            request.day_of_month,
            request.number_of_itineraries,
        )
    except SearchError as e:
        logger.error(f"搜索接口出错: {str(e)}")
        raise HTTPException(status_code=500, detail=FAILED_SEARCH_MESSAGE)

    return SearchResponse(
        result=format_itineraries(itineraries),
        itineraries=itineraries,
    )


@router.get("/health", response_model=HealthResponse)
def health(db: DatabaseService = Depends(get_database_service)):
    if not db.check_connection():
        raise HTTPException(status_code=503, detail="database unavailable")
    return HealthResponse(status="ok")
