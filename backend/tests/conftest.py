from __future__ import annotations

from datetime import datetime

import pytest
from starlette.testclient import TestClient

from app.core.config import Settings
from app.main import app
from app.models.employee import Employee
from app.services.employee_service import EmployeeService

API_PREFIX = "/api/v1/Employee"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _database_settings(tmp_path):
    from app.core.config import settings

    original_url = settings.DATABASE_URL
    settings.DATABASE_URL = f"sqlite+aiosqlite:///{tmp_path / 'organization.db'}"
    yield
    settings.DATABASE_URL = original_url


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def service(tmp_path):
    svc = EmployeeService()
    await svc.initialize(Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'service.db'}"))
    yield svc
    await svc.close()


@pytest.fixture
def ada():
    return Employee(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@x.com",
        date_of_birth=datetime(1815, 12, 10),
    )


@pytest.fixture
def ada_payload():
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@x.com",
        "dateOfBirth": "1815-12-10T00:00:00",
    }
