"""
Integration tests for the Bank Ledger API
Tests end-to-end flows using FastAPI TestClient
"""

import pytest
from fastapi.testclient import TestClient

from bank_ledger.api import create_app
from bank_ledger.config import LedgerConfig
from bank_ledger.ledger import Ledger
from bank_ledger.samples import seed_sample_accounts


@pytest.fixture
def ledger():
    ledger = Ledger()
    seed_sample_accounts(ledger)
    return ledger


@pytest.fixture
def client(ledger):
    """Create a test client around a seeded in-memory ledger"""
    return TestClient(create_app(ledger=ledger))


class TestHealthEndpoints:
    """Test basic health and root endpoints"""

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert "accounts" in r.json()["endpoints"]


class TestAppFactory:
    """Test application construction"""

    def test_default_ledger_is_seeded(self):
        client = TestClient(create_app(config=LedgerConfig(seed_sample_accounts=True)))
        numbers = {a["account_number"] for a in client.get("/accounts").json()["accounts"]}
        assert numbers == {"1234567890", "0987654321"}

    def test_seeding_can_be_disabled(self):
        client = TestClient(create_app(config=LedgerConfig(seed_sample_accounts=False)))
        assert client.get("/accounts").json()["accounts"] == []

    def test_apps_do_not_share_ledgers(self):
        config = LedgerConfig(seed_sample_accounts=False)
        first = TestClient(create_app(config=config))
        second = TestClient(create_app(config=config))

        first.post("/accounts", json={"holder_name": "A", "account_type": "Checking"})
        assert len(first.get("/accounts").json()["accounts"]) == 1
        assert second.get("/accounts").json()["accounts"] == []


class TestAccountFlow:
    """End-to-end account management tests"""

    def test_create_account(self, client, ledger):
        r = client.post("/accounts", json={
            "holder_name": "Alice Walker",
            "account_type": "Savings",
            "initial_deposit": "250.75"
        })
        assert r.status_code == 201
        data = r.json()
        assert data["holder_name"] == "Alice Walker"
        assert data["account_type"] == "Savings"
        assert data["balance"] == "250.75"
        assert len(data["account_number"]) == 10
        assert ledger.get_account(data["account_number"]) is not None

    def test_create_account_negative_deposit(self, client):
        r = client.post("/accounts", json={
            "holder_name": "Alice Walker",
            "account_type": "Checking",
            "initial_deposit": "-5"
        })
        assert r.status_code == 400
        assert r.json()["detail"]["code"] == "invalid_amount"

    def test_create_account_unknown_type(self, client):
        r = client.post("/accounts", json={"holder_name": "Alice", "account_type": "Brokerage"})
        assert r.status_code == 400
        assert r.json()["detail"]["code"] == "invalid_account_type"

    def test_list_accounts(self, client):
        r = client.get("/accounts")
        assert r.status_code == 200
        assert len(r.json()["accounts"]) == 2

    def test_get_account(self, client):
        r = client.get("/accounts/1234567890")
        assert r.status_code == 200
        assert r.json()["holder_name"] == "John Doe"
        assert r.json()["balance"] == "5000.00"

    def test_get_unknown_account(self, client):
        r = client.get("/accounts/0000000000")
        assert r.status_code == 404
        assert r.json()["detail"]["code"] == "account_not_found"

    def test_unknown_account_history_is_empty(self, client):
        r = client.get("/accounts/0000000000/transactions")
        assert r.status_code == 200
        assert r.json()["transactions"] == []


class TestTransactionFlow:
    """End-to-end transaction tests"""

    def test_deposit(self, client):
        r = client.post("/transactions/deposit", json={
            "account_number": "1234567890",
            "amount": "250"
        })
        assert r.status_code == 201
        data = r.json()
        assert data["description"] == "Deposit"
        assert data["balance_after"] == "5250.00"
        assert data["direction"] == "credit"

        assert client.get("/accounts/1234567890").json()["balance"] == "5250.00"

    def test_deposit_unknown_account(self, client):
        r = client.post("/transactions/deposit", json={
            "account_number": "0000000000",
            "amount": "10"
        })
        assert r.status_code == 404

    def test_deposit_bad_amount(self, client):
        r = client.post("/transactions/deposit", json={
            "account_number": "1234567890",
            "amount": "lots"
        })
        assert r.status_code == 400
        assert r.json()["detail"]["code"] == "invalid_amount"

    def test_withdraw(self, client):
        r = client.post("/transactions/withdraw", json={
            "account_number": "1234567890",
            "amount": "100.10",
            "description": "ATM"
        })
        assert r.status_code == 201
        data = r.json()
        assert data["description"] == "ATM"
        assert data["balance_after"] == "4899.90"
        assert data["direction"] == "debit"
        assert data["signed_amount"] == "-100.10"

    def test_withdraw_insufficient_funds(self, client):
        r = client.post("/transactions/withdraw", json={
            "account_number": "1234567890",
            "amount": "6000"
        })
        assert r.status_code == 400
        assert r.json()["detail"]["code"] == "insufficient_funds"
        assert client.get("/accounts/1234567890").json()["balance"] == "5000.00"

    def test_transfer(self, client):
        r = client.post("/transactions/transfer", json={
            "from_account_number": "1234567890",
            "to_account_number": "0987654321",
            "amount": "1000",
            "description": "rent"
        })
        assert r.status_code == 201
        data = r.json()
        assert data["from_transaction"]["description"] == "Transfer to 0987654321 - rent"
        assert data["from_transaction"]["direction"] == "debit"
        assert data["to_transaction"]["description"] == "Transfer from 1234567890 - rent"
        assert data["to_transaction"]["direction"] == "credit"

        assert client.get("/accounts/1234567890").json()["balance"] == "4000.00"
        assert client.get("/accounts/0987654321").json()["balance"] == "11000.00"

    def test_transfer_same_account(self, client):
        r = client.post("/transactions/transfer", json={
            "from_account_number": "1234567890",
            "to_account_number": "1234567890",
            "amount": "10"
        })
        assert r.status_code == 400
        assert r.json()["detail"]["code"] == "same_account"

    def test_transfer_unknown_destination(self, client):
        r = client.post("/transactions/transfer", json={
            "from_account_number": "1234567890",
            "to_account_number": "0000000000",
            "amount": "10"
        })
        assert r.status_code == 404

    def test_history(self, client):
        client.post("/transactions/deposit", json={"account_number": "1234567890", "amount": "1"})
        client.post("/transactions/withdraw", json={"account_number": "1234567890", "amount": "2"})

        r = client.get("/accounts/1234567890/transactions")
        assert r.status_code == 200
        descriptions = [t["description"] for t in r.json()["transactions"]]
        assert descriptions == ["Withdrawal", "Deposit", "Initial deposit"]

    def test_all_transactions(self, client):
        client.post("/transactions/transfer", json={
            "from_account_number": "0987654321",
            "to_account_number": "1234567890",
            "amount": "5"
        })

        r = client.get("/transactions")
        assert r.status_code == 200
        transactions = r.json()["transactions"]
        assert len(transactions) == 4
        assert transactions[0]["description"] == "Transfer from 0987654321 - "
