import os
import tempfile

import pytest

from tests.factories import make_employee_payload, make_vehicle_payload

# Must be set before hrfleet.config is imported anywhere
_TEST_DB_DIR = tempfile.mkdtemp(prefix="hrfleet-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.sqlite3"


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    import asyncio

    from hrfleet.database import create_tables

    asyncio.run(create_tables())


@pytest.fixture
def employee_payload():
    return make_employee_payload


@pytest.fixture
def vehicle_payload():
    return make_vehicle_payload
