import pytest

from flight_search.services.db_service import DatabaseService
from flight_search.tests.factories import SAMPLE_FLIGHTS


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "database" / "flights.sqlite"
    db = DatabaseService(str(path))
    db.create_schema()
    db.insert_flights(SAMPLE_FLIGHTS)
    return str(path)


@pytest.fixture
def db(db_path):
    return DatabaseService(db_path)


@pytest.fixture
def empty_db_path(tmp_path):
    return str(tmp_path / "empty.sqlite")
