# Test configuration
import os
import tempfile

# Set test environment variables BEFORE importing app modules
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="employee-api-tests-")
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-testing-only-32chars"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"  # Lower rounds for faster tests
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from employee_api.api.main import create_app  # noqa: E402
from employee_api.container import build_container  # noqa: E402
from employee_api.db.seed import default_users, sample_employees  # noqa: E402
from employee_api.db.store import InMemoryStore  # noqa: E402
from employee_api.repositories.employees import EmployeeRepository  # noqa: E402
from employee_api.repositories.users import UserRepository  # noqa: E402


def make_employee(**overrides: Any) -> Dict[str, Any]:
    """Valid employee creation data (snake_case, as the repository expects)."""
    data = {
        "full_name": "Test Person",
        "username": "testperson",
        "email": "test.person@company.com",
        "phone": "+1 (555) 000-0000",
        "position": "Accountant",
        "department": "Finance",
    }
    data.update(overrides)
    return data


def employee_body(**overrides: Any) -> Dict[str, Any]:
    """Valid employee request body (camelCase, as clients send it)."""
    body = {
        "fullName": "Test Person",
        "username": "testperson",
        "email": "test.person@company.com",
        "phone": "+1 (555) 000-0000",
        "position": "Accountant",
        "department": "Finance",
    }
    body.update(overrides)
    return body


@pytest.fixture
def employee_repo() -> EmployeeRepository:
    """Employee repository over an empty in-memory store."""
    return EmployeeRepository(InMemoryStore())


@pytest.fixture
def user_repo() -> UserRepository:
    """User repository over an in-memory store holding the two seed users."""
    return UserRepository(InMemoryStore(seed=default_users))


@pytest.fixture
def container():
    """Container with seed users and the twelve sample employees, in memory."""
    return build_container(
        users_store=InMemoryStore(seed=default_users),
        employees_store=InMemoryStore(seed=sample_employees),
    )


@pytest.fixture
def client(container) -> TestClient:
    app = create_app(container=container)
    return TestClient(app)


def _login(client: TestClient, username: str, password: str) -> Dict[str, str]:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


@pytest.fixture
def admin_headers(client) -> Dict[str, str]:
    return _login(client, "admin", "admin123")


@pytest.fixture
def user_headers(client) -> Dict[str, str]:
    return _login(client, "user", "user123")
