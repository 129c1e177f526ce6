"""
Integration tests for the Piggy Bank API
Tests end-to-end flows using FastAPI TestClient
"""

import pytest
from fastapi.testclient import TestClient

from piggy_bank.api import app, get_ledger, startup_banner
from piggy_bank.config import PiggyBankConfig
from piggy_bank.ledger import BalanceLedger


@pytest.fixture
def client():
    """Create a test client backed by a fresh ledger"""
    test_ledger = BalanceLedger()
    app.dependency_overrides[get_ledger] = lambda: test_ledger

    yield TestClient(app)

    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Test basic health endpoint"""

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"


class TestBalanceFlow:
    """End-to-end deposit, withdraw and balance tests"""

    def test_initial_balance(self, client):
        r = client.get("/balance")
        assert r.status_code == 200
        assert r.json() == {"balance": "0.00", "message": "Saldo atual: R$ 0.00"}

    def test_deposit(self, client):
        r = client.post("/deposit", json={"amount": "10,50"})
        assert r.status_code == 200
        data = r.json()
        assert data["balance"] == "10.50"
        assert data["message"] == "Depósito realizado com sucesso!"

        r = client.get("/balance")
        assert r.json()["message"] == "Saldo atual: R$ 10.50"

    def test_withdraw_without_fee(self, client):
        client.post("/deposit", json={"amount": "100.00"})

        r = client.post("/withdraw", json={"amount": "50"})
        assert r.status_code == 200
        data = r.json()
        assert data["balance"] == "50.00"
        assert data["fee_applied"] is False
        assert data["fee"] == "0.00"
        assert data["total_cost"] == "50.00"
        assert data["message"] == "Saque realizado com sucesso!"

    def test_withdraw_with_fee(self, client):
        client.post("/deposit", json={"amount": "500"})

        r = client.post("/withdraw", json={"amount": "250.00"})
        assert r.status_code == 200
        data = r.json()
        assert data["balance"] == "247.50"
        assert data["fee_applied"] is True
        assert data["fee"] == "2.50"
        assert data["total_cost"] == "252.50"
        assert data["message"] == "Saque realizado com sucesso! Foi aplicada uma taxa de R$ 2.50."

    def test_threshold_boundary(self, client):
        client.post("/deposit", json={"amount": "202.50"})

        r = client.post("/withdraw", json={"amount": "200.01"})
        assert r.status_code == 409

        r = client.post("/withdraw", json={"amount": "200.00"})
        assert r.status_code == 200
        assert r.json()["balance"] == "2.50"


class TestErrors:
    """Test error mapping"""

    def test_insufficient_funds(self, client):
        client.post("/deposit", json={"amount": "50"})

        r = client.post("/withdraw", json={"amount": "250"})
        assert r.status_code == 409
        assert r.json()["detail"] == {
            "error": "insufficient_funds",
            "message": "Saldo insuficiente para realizar o saque.",
        }
        assert client.get("/balance").json()["balance"] == "50.00"

    def test_deposit_non_positive(self, client):
        r = client.post("/deposit", json={"amount": "-5"})
        assert r.status_code == 400
        assert r.json()["detail"] == {
            "error": "invalid_amount",
            "message": "O valor do depósito deve ser maior que zero.",
        }

    def test_withdraw_zero(self, client):
        r = client.post("/withdraw", json={"amount": "0"})
        assert r.status_code == 400
        assert r.json()["detail"]["error"] == "invalid_amount"
        assert r.json()["detail"]["message"] == "O valor do saque deve ser maior que zero."

    def test_unparsable_amount(self, client):
        r = client.post("/deposit", json={"amount": "dez reais"})
        assert r.status_code == 400
        assert r.json()["detail"]["error"] == "invalid_input"
        assert client.get("/balance").json()["balance"] == "0.00"

    def test_missing_amount(self, client):
        r = client.post("/withdraw", json={})
        assert r.status_code == 422


class TestLargeAmounts:
    """Test amounts at the edge of exact decimal precision"""

    def test_deposit_too_large_rejected(self, client):
        r = client.post("/deposit", json={"amount": "1" + "0" * 27})
        assert r.status_code == 400
        assert r.json()["detail"]["error"] == "invalid_amount"

        r = client.get("/balance")
        assert r.status_code == 200
        assert r.json()["balance"] == "0.00"

    def test_largest_balance_renders(self, client):
        r = client.post("/deposit", json={"amount": "9" * 26})
        assert r.status_code == 200
        assert r.json()["balance"] == "9" * 26 + ".00"

        r = client.post("/deposit", json={"amount": "1"})
        assert r.status_code == 400

        r = client.get("/balance")
        assert r.status_code == 200
        assert r.json()["balance"] == "9" * 26 + ".00"

    def test_text_with_letters_rejected(self, client):
        for text in ("1e3", "12abc34"):
            r = client.post("/deposit", json={"amount": text})
            assert r.status_code == 400
            assert r.json()["detail"]["error"] == "invalid_input"

        assert client.get("/balance").json()["balance"] == "0.00"


class TestStartupBanner:
    """Test the banner printed by run.py"""

    def test_banner_uses_configured_host(self):
        cfg = PiggyBankConfig(_env_file=None, api_host="10.0.0.5", api_port=9000)

        lines = startup_banner(cfg)

        assert "🌐 API available at: http://10.0.0.5:9000" in lines
        assert "📚 Documentation at: http://10.0.0.5:9000/docs" in lines
        assert not any("localhost" in line for line in lines)
