import os
import tempfile

_test_dir = tempfile.mkdtemp(prefix="poultry_mitra_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["LOG_DIR"] = os.path.join(_test_dir, "logs")

import pytest
from datetime import date, timedelta
from fastapi import Request
from fastapi.testclient import TestClient

from database import Base, engine
from main import app
from utils.auth_utils import get_current_user

TENANT = "tenant-1"


def fake_current_user(request: Request):
    groups = [g for g in request.headers.get("X-Test-Groups", "").split(",") if g]
    return {"sub": request.headers.get("X-Test-User", "farmer-1"), "cognito:groups": groups}


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    app.dependency_overrides[get_current_user] = fake_current_user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user="farmer-1", groups=(), tenant=TENANT):
    headers = {"X-Tenant-ID": tenant, "X-Test-User": user}
    if groups:
        headers["X-Test-Groups"] = ",".join(groups)
    return headers


@pytest.fixture
def headers():
    return auth_headers()


def days_ago(n):
    return (date.today() - timedelta(days=n)).isoformat()


@pytest.fixture
def batch(client, headers):
    response = client.post("/batches/", json={
        "name": "Flock A",
        "start_date": days_ago(30),
        "initial_bird_count": 1000,
    }, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
