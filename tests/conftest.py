import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="lease-signing-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/test.db"
os.environ["SIGNED_DOCS_DIR"] = os.path.join(_tmp_dir, "signed")
os.environ["SMTP_HOST"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def lease_payload():
    return {
        "landlord_name": "Maple Property Group",
        "landlord_email": "owner@maple.example",
        "tenant_name": "Jane Q Public",
        "tenant_email": "jane@example.com",
        "property_name": "Maple Court",
        "unit_name": "Unit 4B",
        "unit_type": "apartment",
        "start_date": "2026-11-01",
        "end_date": "2027-10-31",
        "rent_amount": 1850,
        "billing_day_of_month": 1,
    }


@pytest.fixture
def lease(client, lease_payload):
    response = client.post("/leases", json=lease_payload)
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def issue_link(client):
    def _issue(lease_id: int, role: str = "tenant") -> str:
        response = client.post(f"/leases/{lease_id}/sign-session", json={"role": role})
        assert response.status_code == 201
        return response.json()["data"]["sign_url"].rsplit("/", 1)[-1]

    return _issue

