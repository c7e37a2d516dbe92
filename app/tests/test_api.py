"""API endpoint tests"""

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_db
from app.main import app
from app.tests.conftest import ALICE, BOB


class TestAPI:
    """Test API endpoints against a seeded database"""

    @pytest.fixture
    def client(self, seeded_db):
        def override_get_db():
            yield seeded_db

        app.dependency_overrides[get_db] = override_get_db
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"database": "ok", "latest_block": 101}

    def test_readiness(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_blocks_newest_first(self, client):
        body = client.get("/blocks?limit=1").json()
        assert body["limit"] == 1
        assert [b["number"] for b in body["data"]] == [101]
        assert "request_id" in body

    def test_block_not_found(self, client):
        assert client.get("/blocks/999").status_code == 404

    def test_limit_is_bounded(self, client):
        assert client.get("/blocks?limit=0").status_code == 422

    def test_events_by_retro_extrinsic_id(self, client):
        body = client.get("/events", params={"extrinsic_id": "0000000100-000001-abcde"}).json()
        assert [e["event_id"] for e in body["data"]] == ["100-1-0", "100-1-1"]

    def test_unknown_retro_extrinsic_id(self, client):
        response = client.get("/events", params={"extrinsic_id": "0000000999-000001-fffff"})
        assert response.status_code == 404

    def test_extrinsic_includes_events(self, client):
        body = client.get("/extrinsics/0000000100-000001-abcde").json()
        assert body["extrinsic_id"] == "100-1"
        assert len(body["events"]) == 2

    def test_tokens_by_type(self, client):
        body = client.get("/tokens", params={"type": "ERC721"}).json()
        assert [t["name"] for t in body["data"]] == ["Root Punks"]

    def test_token_lookup_ignores_case(self, client):
        response = client.get("/tokens/0xcccccccc00000002000000000000000000000000")
        assert response.status_code == 200
        assert response.json()["name"] == "XRP"

    def test_transaction_with_logs(self, client):
        body = client.get("/transactions/0x" + "E" * 64).json()
        assert [e["event_name"] for e in body["events"]] == ["Approval", "Transfer"]

    def test_summary(self, client):
        assert client.get("/summary").json() == {
            "latest_block": 101,
            "signed_extrinsics": 1,
            "evm_transactions": 1,
            "tokens": 3,
        }

    def test_native_transfers(self, client):
        body = client.get(f"/addresses/{ALICE}/native-transfers").json()
        assert [e["event_id"] for e in body["data"]] == ["101-1-0", "101-1-1", "100-1-0"]

    def test_token_transfers(self, client):
        body = client.get(f"/addresses/{BOB}/token-transfers").json()
        assert len(body["data"]) == 1
        assert body["data"][0]["log_index"] == 1

    def test_report(self, client):
        response = client.get(f"/addresses/{ALICE}/report", params={"from": "2024-01-01", "to": "2024-01-31"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.splitlines()
        assert lines[0] == "Date,Tx Hash,Type,Amount,Currency,From,To"
        assert lines[1:] == [
            f"2024-01-15T12:00:04.000Z,101-1,in,1000000000000,ROOT,{BOB},{ALICE}",
            f"2024-01-15T12:00:04.000Z,101-1,out,TokenIds: 4|9,Root Punks,{ALICE},0x3333333333333333333333333333333333333333",
            f"2024-01-15T12:00:00.000Z,100-1,out,2.5,XRP,{ALICE},{BOB}",
            f"2024-01-15T12:00:04.000Z,{'0x' + 'e' * 64},out,1.5,XRP,{ALICE},{BOB}",
        ]

    def test_report_rejects_reversed_range(self, client):
        response = client.get(f"/addresses/{ALICE}/report", params={"from": "2024-02-01", "to": "2024-01-01"})
        assert response.status_code == 400

    def test_report_rejects_bad_address(self, client):
        response = client.get("/addresses/0x123/report", params={"from": "2024-01-01", "to": "2024-01-31"})
        assert response.status_code == 400

    def test_invalid_endpoint(self, client):
        assert client.get("/invalid").status_code == 404
