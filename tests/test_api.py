# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from blockscope.api import create_app
from blockscope.explorer.session import ExplorerSession
from blockscope.monitoring.metrics import MetricsCollector
from tests.conftest import make_transaction

API = "/api/v1/explorer"

class TestExplorerAPI:
    @pytest.fixture
    def metrics(self):
        return MetricsCollector()

    @pytest.fixture
    def client(self, provider, metrics):
        provider.height = 510
        provider.detail_transactions[500] = [
            make_transaction(500, 0, hash="0xabc"),
            make_transaction(500, 1),
        ]
        session = ExplorerSession(provider, metrics=metrics)
        app = create_app(session=session, metrics=metrics)
        with TestClient(app) as client:
            yield client

    def test_view_after_initial_load(self, client):
        response = client.get(f"{API}/view", params={"wait": True})
        assert response.status_code == 200
        data = response.json()
        assert data["screen"] == "block_list"
        assert data["loading"] is False
        assert [b["number"] for b in data["blocks"]] == list(range(510, 490, -1))
        assert data["view"]["tag"] == "div"

    def test_navigation_flow(self, client, provider):
        client.get(f"{API}/view", params={"wait": True})

        data = client.post(f"{API}/blocks/500/select", params={"wait": True}).json()
        assert data["screen"] == "block_detail"
        assert data["selected_block"]["number"] == 500
        assert data["selected_block"]["full_transactions"] is True

        data = client.post(f"{API}/transactions/0xabc/select").json()
        assert data["screen"] == "transaction_detail"
        assert data["selected_transaction"]["hash"] == "0xabc"

        data = client.post(f"{API}/back/transactions").json()
        assert data["screen"] == "block_detail"
        assert data["selected_transaction"] is None

        data = client.post(f"{API}/back/blocks").json()
        assert data["screen"] == "block_list"
        assert data["selected_block"] is None
        assert provider.calls_for("get_block_with_transactions") == [500]

    def test_unknown_block(self, client):
        client.get(f"{API}/view", params={"wait": True})
        response = client.post(f"{API}/blocks/42/select")
        assert response.status_code == 404

    def test_transaction_without_block(self, client):
        client.get(f"{API}/view", params={"wait": True})
        response = client.post(f"{API}/transactions/0xabc/select")
        assert response.status_code == 409

    def test_unknown_transaction(self, client):
        client.get(f"{API}/view", params={"wait": True})
        client.post(f"{API}/blocks/500/select", params={"wait": True})
        response = client.post(f"{API}/transactions/0xdef/select")
        assert response.status_code == 404

    def test_back_to_transactions_needs_transaction(self, client):
        response = client.post(f"{API}/back/transactions")
        assert response.status_code == 409

    def test_html_page_and_forms(self, client):
        client.get(f"{API}/view", params={"wait": True})
        page = client.get("/")
        assert page.status_code == 200
        assert "Recent Blocks" in page.text
        assert 'action="/ui/blocks/500"' in page.text

        response = client.post("/ui/blocks/500", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

        client.get(f"{API}/view", params={"wait": True})
        page = client.get("/")
        assert "Block Details" in page.text
        assert "Transactions (2)" in page.text

        client.post("/ui/transactions/0xabc")
        assert "Transaction Details" in client.get("/").text

        client.post("/ui/back/transactions")
        client.post("/ui/back/blocks")
        assert "Recent Blocks" in client.get("/").text

    def test_metrics(self, client):
        client.get(f"{API}/view", params={"wait": True})
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "blocks_window_size 20.0" in response.text

    def test_metrics_disabled(self, provider):
        app = create_app(session=ExplorerSession(provider))
        with TestClient(app) as client:
            assert client.get("/metrics").status_code == 404
