from flight_search.services.tools.flight_tool import search_flight_itineraries


def test_tool_returns_search_text(db_path):
    result = search_flight_itineraries.invoke(
        {
            "origin_city": "A",
            "destination_city": "C",
            "day_of_month": 10,
            "number_of_itineraries": 1,
        },
        config={"configurable": {"db_path": db_path}},
    )

    assert result.startswith("Itinerary 0: 1 flight(s), 100 minutes\n")
    assert "Itinerary 1" not in result


def test_tool_direct_only(db_path):
    result = search_flight_itineraries.invoke(
        {"origin_city": "A", "destination_city": "C", "day_of_month": 10, "direct_only": True},
        config={"configurable": {"db_path": db_path}},
    )

    assert "2 flight(s)" not in result


def test_tool_failure_text(empty_db_path):
    result = search_flight_itineraries.invoke(
        {"origin_city": "A", "destination_city": "C", "day_of_month": 10},
        config={"configurable": {"db_path": empty_db_path}},
    )

    assert result == "Failed to search\n"


def test_tool_schema_hides_config():
    assert "config" not in search_flight_itineraries.args
    assert {"origin_city", "destination_city", "day_of_month"} <= set(search_flight_itineraries.args)
