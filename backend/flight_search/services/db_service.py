from abc import ABC, abstractmethod
import logging
import os
import sqlite3
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from flight_search.core.config import database_url_from_path, settings

logger = logging.getLogger(__name__)

# SQL查询常量
SQL_CREATE_FLIGHTS = """
    CREATE TABLE IF NOT EXISTS Flights (
        fid INTEGER PRIMARY KEY,
        month_id INTEGER,
        day_of_month INTEGER NOT NULL,
        day_of_week_id INTEGER,
        carrier_id TEXT NOT NULL,
        flight_num TEXT NOT NULL,
        origin_city TEXT NOT NULL,
        origin_state TEXT,
        dest_city TEXT NOT NULL,
        dest_state TEXT,
        departure_delay INTEGER,
        taxi_out INTEGER,
        arrival_delay INTEGER,
        canceled INTEGER NOT NULL DEFAULT 0,
        actual_time INTEGER NOT NULL,
        distance INTEGER,
        capacity INTEGER NOT NULL DEFAULT 0,
        price INTEGER NOT NULL DEFAULT 0
    )
"""

SQL_INSERT_FLIGHT = """
    INSERT INTO Flights (
        fid, month_id, day_of_month, day_of_week_id, carrier_id, flight_num,
        origin_city, origin_state, dest_city, dest_state, departure_delay,
        taxi_out, arrival_delay, canceled, actual_time, distance, capacity, price
    ) VALUES (
        :fid, :month_id, :day_of_month, :day_of_week_id, :carrier_id, :flight_num,
        :origin_city, :origin_state, :dest_city, :dest_state, :departure_delay,
        :taxi_out, :arrival_delay, :canceled, :actual_time, :distance, :capacity, :price
    )
"""

SQL_SEARCH_DIRECT = """
    SELECT f.fid, f.day_of_month, f.carrier_id, f.flight_num,
           f.origin_city, f.dest_city, f.actual_time, f.capacity, f.price
    FROM Flights AS f
    WHERE f.origin_city = ?
    AND f.dest_city = ?
    AND f.day_of_month = ?
    AND f.canceled = 0
    ORDER BY f.actual_time ASC, f.fid ASC
    LIMIT ?
"""

SQL_SEARCH_ONE_HOP = """
    SELECT
        f1.fid AS f1_fid, f1.day_of_month AS f1_day_of_month,
        f1.carrier_id AS f1_carrier_id, f1.flight_num AS f1_flight_num,
        f1.origin_city AS f1_origin_city, f1.dest_city AS f1_dest_city,
        f1.actual_time AS f1_actual_time, f1.capacity AS f1_capacity,
        f1.price AS f1_price,
        f2.fid AS f2_fid, f2.day_of_month AS f2_day_of_month,
        f2.carrier_id AS f2_carrier_id, f2.flight_num AS f2_flight_num,
        f2.origin_city AS f2_origin_city, f2.dest_city AS f2_dest_city,
        f2.actual_time AS f2_actual_time, f2.capacity AS f2_capacity,
        f2.price AS f2_price,
        f1.actual_time + f2.actual_time AS actual_time
    FROM Flights AS f1
    JOIN Flights AS f2 ON f1.dest_city = f2.origin_city
    WHERE f1.origin_city = ?
    AND f2.dest_city = ?
    AND f1.day_of_month = ?
    AND f2.day_of_month = ?
    AND f1.canceled = 0
    AND f2.canceled = 0
    ORDER BY actual_time ASC, f1.fid ASC, f2.fid ASC
    LIMIT ?
"""

# 插入时可省略的列
OPTIONAL_FLIGHT_COLUMNS = {
    "month_id": None,
    "day_of_week_id": None,
    "origin_state": None,
    "dest_state": None,
    "departure_delay": None,
    "taxi_out": None,
    "arrival_delay": None,
    "canceled": 0,
    "distance": None,
    "capacity": 0,
    "price": 0,
}


class FlightDataSource(ABC):
    """Read-only access to the flights table.

    Implementations return rows as mappings keyed by column name and raise
    ``sqlite3.Error`` when the store cannot be queried.
    """

    @abstractmethod
    def search_direct(
        self, origin_city: str, dest_city: str, day_of_month: int, limit: int
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def search_one_hop(
        self, origin_city: str, dest_city: str, day_of_month: int, limit: int
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError


class DatabaseService(FlightDataSource):
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = str(db_path or settings.database_path)

    def get_connection(self) -> sqlite3.Connection:
        # 确保数据库目录存在
        db_dir = os.path.dirname(self.db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)
            logger.info(f"创建数据库目录: {db_dir}")
        return sqlite3.connect(self.db_path)

    def _fetch_all(self, query: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            columns = [col[0] for col in cursor.description]
            results = [dict(zip(columns, row)) for row in cursor.fetchall()]
            cursor.close()
            return results
        finally:
            conn.close()

    def search_direct(self, origin_city, dest_city, day_of_month, limit):
        logger.info(
            f"查询直飞航班: {origin_city} -> {dest_city}, day={day_of_month}, limit={limit}"
        )
        rows = self._fetch_all(
            SQL_SEARCH_DIRECT, (origin_city, dest_city, day_of_month, limit)
        )
        logger.debug(f"直飞查询结果行数: {len(rows)}")
        return rows

    def search_one_hop(self, origin_city, dest_city, day_of_month, limit):
        logger.info(
            f"查询中转航班: {origin_city} -> {dest_city}, day={day_of_month}, limit={limit}"
        )
        rows = self._fetch_all(
            SQL_SEARCH_ONE_HOP,
            (origin_city, dest_city, day_of_month, day_of_month, limit),
        )
        logger.debug(f"中转查询结果行数: {len(rows)}")
        return rows

    def create_schema(self) -> None:
        conn = self.get_connection()
        try:
            conn.execute(SQL_CREATE_FLIGHTS)
            conn.commit()
        finally:
            conn.close()

    def insert_flights(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Bulk-load flight rows; omitted optional columns get their defaults."""
        records = [{**OPTIONAL_FLIGHT_COLUMNS, **row} for row in rows]
        conn = self.get_connection()
        try:
            conn.executemany(SQL_INSERT_FLIGHT, records)
            conn.commit()
        finally:
            conn.close()
        logger.info(f"写入航班记录: {len(records)}")
        return len(records)

    def check_connection(self) -> bool:
        engine = create_engine(database_url_from_path(self.db_path))
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                if not inspect(connection).has_table("Flights"):
                    logger.error(f"Flights 表不存在: {self.db_path}")
                    return False
            return True
        except SQLAlchemyError as e:
            logger.error(f"数据库连接失败: {str(e)}")
            return False
        finally:
            engine.dispose()
