import pytest
from pydantic import ValidationError

from flight_search.models.flight import Flight, Itinerary
from flight_search.services.formatter import format_itineraries, rank_itineraries
from flight_search.tests.factories import make_flight_row, make_one_hop_row


def flight(fid, minutes, origin="A", dest="C"):
    return Flight.from_row(make_flight_row(fid, origin, dest, minutes))


def test_flight_text():
    f = Flight.from_row(make_flight_row(42, "Seattle WA", "Boston MA", 297, day=3, price=640, capacity=7))

    assert str(f) == (
        "ID: 42 Day: 3 Carrier: AA Number: 1042 Origin: Seattle WA "
        "Dest: Boston MA Duration: 297 Capacity: 7 Price: 640"
    )


def test_flight_from_prefixed_row():
    row = make_one_hop_row(make_flight_row(1, "A", "B", 30), make_flight_row(2, "B", "C", 40))

    assert Flight.from_row(row, prefix="f2_").id == 2
    assert Flight.from_row(row, prefix="f1_").destination_city == "B"


def test_flight_is_immutable():
    f = flight(1, 30)

    with pytest.raises(ValidationError):
        f.price = 1


def test_ranking_breaks_ties_by_flight_ids():
    itineraries = [
        Itinerary.direct(flight(4, 30)),
        Itinerary.one_hop(flight(1, 10, dest="B"), flight(3, 20, origin="B")),
        Itinerary.direct(flight(9, 5)),
        Itinerary.one_hop(flight(1, 10, dest="B"), flight(2, 20, origin="B")),
        Itinerary.direct(flight(0, 30)),
    ]

    ranked = rank_itineraries(itineraries)

    assert [i.sort_key() for i in ranked] == [
        (5, 9),
        (30, 0),
        (30, 1, 2),
        (30, 1, 3),
        (30, 4),
    ]
    assert sorted(itineraries) == ranked


def test_direct_sorts_before_one_hop_sharing_first_flight():
    one_hop = Itinerary.one_hop(flight(1, 10, dest="B"), flight(2, 20, origin="B"))
    direct = Itinerary.direct(flight(1, 30))

    ranked = rank_itineraries([one_hop, direct])

    assert [i.sort_key() for i in ranked] == [(30, 1), (30, 1, 2)]
    assert ranked[0].is_direct


def test_numbering_starts_at_zero_without_gaps():
    text = format_itineraries([Itinerary.direct(flight(fid, 100 + fid)) for fid in (3, 1, 2)])

    headers = [line for line in text.splitlines() if line.startswith("Itinerary")]
    assert headers == [
        "Itinerary 0: 1 flight(s), 101 minutes",
        "Itinerary 1: 1 flight(s), 102 minutes",
        "Itinerary 2: 1 flight(s), 103 minutes",
    ]
    assert text.endswith("\n")


def test_one_hop_block_lists_both_legs():
    text = format_itineraries(
        [Itinerary.one_hop(flight(1, 30, dest="B"), flight(2, 40, origin="B"))]
    )

    lines = text.splitlines()
    assert lines[0] == "Itinerary 0: 2 flight(s), 70 minutes"
    assert lines[1].startswith("ID: 1 ")
    assert lines[2].startswith("ID: 2 ")
    assert len(lines) == 3


def test_itinerary_totals():
    itinerary = Itinerary.one_hop(flight(1, 30, dest="B"), flight(2, 40, origin="B"))

    assert itinerary.total_duration == 70
    assert itinerary.total_price == 200
    assert not itinerary.is_direct


def test_empty():
    assert format_itineraries([]) == "No flights match your selection\n"
