from pydantic import BaseModel, ConfigDict
from typing import Any, List, Mapping, Optional, Tuple

FLIGHT_COLUMNS = (
    "fid",
    "day_of_month",
    "carrier_id",
    "flight_num",
    "origin_city",
    "dest_city",
    "actual_time",
    "capacity",
    "price",
)


class Flight(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    day_of_month: int
    carrier_id: str
    flight_number: str
    origin_city: str
    destination_city: str
    duration_minutes: int
    capacity: int
    price: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any], prefix: str = "") -> "Flight":
        """Build a flight from a query row.

        One-hop rows carry both legs side by side, so ``prefix`` selects the
        ``f1_`` or ``f2_`` half of the row.
        """
        return cls(
            id=row[f"{prefix}fid"],
            day_of_month=row[f"{prefix}day_of_month"],
            carrier_id=str(row[f"{prefix}carrier_id"]),
            flight_number=str(row[f"{prefix}flight_num"]),
            origin_city=row[f"{prefix}origin_city"],
            destination_city=row[f"{prefix}dest_city"],
            duration_minutes=row[f"{prefix}actual_time"],
            capacity=row[f"{prefix}capacity"],
            price=row[f"{prefix}price"],
        )

    def __str__(self) -> str:
        return (
            f"ID: {self.id} Day: {self.day_of_month} Carrier: {self.carrier_id} "
            f"Number: {self.flight_number} Origin: {self.origin_city} "
            f"Dest: {self.destination_city} Duration: {self.duration_minutes} "
            f"Capacity: {self.capacity} Price: {self.price}"
        )


class Itinerary(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_flight: Flight
    second_flight: Optional[Flight] = None
    total_duration: int
    total_price: int

    @classmethod
    def direct(cls, flight: Flight) -> "Itinerary":
        return cls(
            first_flight=flight,
            total_duration=flight.duration_minutes,
            total_price=flight.price,
        )

    @classmethod
    def one_hop(cls, first: Flight, second: Flight) -> "Itinerary":
        return cls(
            first_flight=first,
            second_flight=second,
            total_duration=first.duration_minutes + second.duration_minutes,
            total_price=first.price + second.price,
        )

    @property
    def flights(self) -> List[Flight]:
        if self.second_flight is None:
            return [self.first_flight]
        return [self.first_flight, self.second_flight]

    @property
    def is_direct(self) -> bool:
        return self.second_flight is None

    def sort_key(self) -> Tuple[int, ...]:
        # 总时长 -> 第一航班ID -> 第二航班ID
        key = (self.total_duration, self.first_flight.id)
        if self.second_flight is not None:
            key += (self.second_flight.id,)
        return key

    def __lt__(self, other: "Itinerary") -> bool:
        return self.sort_key() < other.sort_key()
