"""End-to-end tests of the REST API against a temporary SQLite database."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from unmessy.application.api.rest.app import create_app
from unmessy.config import BatchConfig, CacheConfig, Config, DatabaseConfig


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        database=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'unmessy.db'}"),
        cache=CacheConfig(backend="memory"),
        batch=BatchConfig(max_size=3),
    )


@pytest.fixture
def client(config: Config):
    with TestClient(create_app(config)) as client:
        yield client


class TestValidateEmailRoute:
    def test_normalizes_and_validates(self, client: TestClient):
        response = client.post("/api/v1/validate/email", json={"address": "Test@Gmail.com "})

        assert response.status_code == 200
        body = response.json()
        assert body["current_address"] == "test@gmail.com"
        assert body["was_corrected"] is True
        assert body["status"] == "valid"
        # Oracle is disabled; the allowlist alone is confident
        assert body["recheck_needed"] is False
        assert len(body["check_id"]) == 17
        assert body["email_change_status"] == "Changed"

    def test_bad_format(self, client: TestClient):
        response = client.post("/api/v1/validate/email", json={"address": "not-an-email"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "invalid"
        assert body["sub_status"] == "bad_format"
        assert body["format_valid"] is False

    def test_unknown_domain_without_oracle(self, client: TestClient):
        response = client.post(
            "/api/v1/validate/email", json={"address": "bob@company.io", "tracking_id": "crm-9"}
        )

        body = response.json()
        assert body["status"] == "check_skipped"
        assert body["recheck_needed"] is True
        assert body["tracking_id"] == "crm-9"

    def test_missing_address(self, client: TestClient):
        response = client.post("/api/v1/validate/email", json={})

        assert response.status_code == 422
        assert response.json() == {
            "code": "VALIDATION_ERROR",
            "message": "An email address is required",
            "field": "address",
        }


class TestValidateBatchRoute:
    def test_keeps_input_order(self, client: TestClient):
        addresses = ["me@gmail.com", "nope", "x@mailinator.com"]

        response = client.post("/api/v1/validate/batch", json={"addresses": addresses})

        assert response.status_code == 200
        body = response.json()
        assert [r["original_address"] for r in body] == addresses
        assert [r["status"] for r in body] == ["valid", "invalid", "invalid"]

    def test_blank_entry_keeps_its_position(self, client: TestClient):
        response = client.post(
            "/api/v1/validate/batch", json={"addresses": ["me@gmail.com", ""]}
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 2
        assert body[1]["status"] == "invalid"
        assert body[1]["sub_status"] == "bad_format"

    def test_rejects_oversized_batch(self, client: TestClient):
        response = client.post(
            "/api/v1/validate/batch",
            json={"addresses": ["a@b.io", "c@d.io", "e@f.io", "g@h.io"]},
        )

        assert response.status_code == 422
        assert response.json()["field"] == "addresses"


class TestHealthRoute:
    def test_reports_record_count(self, client: TestClient):
        before = client.get("/api/v1/health").json()
        client.post("/api/v1/validate/email", json={"address": "me@gmail.com"})
        client.post("/api/v1/validate/email", json={"address": " ME@gmail.com"})
        after = client.get("/api/v1/health").json()

        assert before["status"] == "healthy"
        assert before["records"] == 0
        assert after["records"] == 1
        assert after["oracle_enabled"] is False
        assert after["cache_backend"] == "memory"
