"""
API Tests

Tests for the FastAPI message and merchant endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from api import dependencies
from api.main import app

from conftest import NOW_MILLIS


@pytest.fixture
def client():
    dependencies.reset()
    with TestClient(app) as client:
        yield client
    dependencies.reset()


class TestInfoEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy"}

    def test_api_info(self, client):
        endpoints = client.get("/api").json()["endpoints"]
        assert endpoints["capture"] == "/api/messages/capture"


class TestMessageEndpoints:
    """Tests for /api/messages."""

    def test_validate_accepted(self, client, swiggy_sms):
        """Test a transaction alert passes the gate."""
        response = client.post("/api/messages/validate", json={"text": swiggy_sms})

        assert response.status_code == 200
        assert response.json() == {"accepted": True, "reason": None}

    def test_validate_rejected(self, client):
        """Test the rejection reason is reported."""
        text = "OTP 482910 for your transaction on HDFC card. Valid for 10 minutes"
        response = client.post("/api/messages/validate", json={"text": text})
        assert response.json() == {"accepted": False, "reason": "otp"}

    def test_validate_rejected_without_money_movement(self, client, otp_sms):
        """Test messages with no verb or rail are rejected before the OTP rule."""
        response = client.post("/api/messages/validate", json={"text": otp_sms})
        assert response.json() == {"accepted": False, "reason": "no_money_movement"}

    def test_parse(self, client, swiggy_sms):
        """Test parsing returns the transaction without storing it."""
        response = client.post(
            "/api/messages/parse",
            json={"text": swiggy_sms, "timestamp": NOW_MILLIS, "sender_id": "VM-HDFCBK"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_transaction"] is True
        assert data["transaction"]["amount"] == 250.0
        assert data["transaction"]["direction"] == "debit"
        assert data["transaction"]["status"] == "detected"
        assert data["transaction"]["sender_trust_score"] == 0.95
        assert dependencies.get_store().transactions == {}

    def test_parse_defaults_timestamp(self, client, swiggy_sms):
        """Test a missing timestamp uses the current time."""
        data = client.post("/api/messages/parse", json={"text": swiggy_sms}).json()
        assert data["transaction"]["timestamp"] > NOW_MILLIS

    def test_parse_rejected(self, client, promo_sms):
        """Test non-transactions come back empty."""
        data = client.post("/api/messages/parse", json={"text": promo_sms}).json()
        assert data == {"is_transaction": False, "transaction": None}

    def test_parse_missing_text(self, client):
        """Test request validation."""
        response = client.post("/api/messages/parse", json={"sender_id": "HDFCBK"})
        assert response.status_code == 422

    def test_capture_then_duplicate(self, client, swiggy_sms):
        """Test capture stores once and reports duplicates."""
        body = {"text": swiggy_sms, "timestamp": NOW_MILLIS, "sender_id": "VM-HDFCBK"}

        first = client.post("/api/messages/capture", json=body).json()
        second = client.post("/api/messages/capture", json=body).json()

        assert first["outcome"] == "saved"
        assert first["record_id"] == 1
        assert second["outcome"] == "duplicate"
        assert len(dependencies.get_store().transactions) == 1

    def test_capture_quarantined(self, client):
        """Test low-confidence captures are reported as quarantined."""
        body = {"text": "Rs 500 debited from A/c XX1234", "timestamp": NOW_MILLIS, "sender_id": "JX-DEMO"}
        data = client.post("/api/messages/capture", json=body).json()

        assert data["outcome"] == "quarantined"
        assert len(dependencies.get_store().unverified) == 1

    def test_capture_rejected(self, client, otp_sms):
        """Test rejected captures carry no transaction."""
        data = client.post("/api/messages/capture", json={"text": otp_sms}).json()
        assert data["outcome"] == "rejected"
        assert data["transaction"] is None


class TestMerchantEndpoints:
    """Tests for /api/merchants."""

    def test_resolve_alias(self, client):
        """Test gateway codes resolve to brand names."""
        data = client.post("/api/merchants/resolve", json={"merchant": "zmt*order"}).json()
        assert data == {"raw": "zmt*order", "normalized": "ZMTORDER", "resolved": "Zomato"}

    def test_resolve_blank(self, client):
        """Test blank merchants resolve to Unknown."""
        data = client.post("/api/merchants/resolve", json={"merchant": None}).json()
        assert data["resolved"] == "Unknown"

    def test_resolve_from_captured_history(self, client):
        """Test merchants already captured are matched by spelling."""
        client.post(
            "/api/messages/capture",
            json={"text": "Paid Rs 120 to CHAI POINT via UPI", "timestamp": NOW_MILLIS, "sender_id": "HDFCBK"},
        )
        data = client.post("/api/merchants/resolve", json={"merchant": "chai point via upi"}).json()
        assert data["resolved"] == "CHAI POINT via UPI"

    def test_learn_alias(self, client):
        """Test learned corrections apply to later resolutions."""
        response = client.post(
            "/api/merchants/aliases",
            json={"raw": "ubr*ride", "corrected": "Uber"},
        )
        assert response.json() == {"status": "learned", "alias_count": 1}

        data = client.post("/api/merchants/resolve", json={"merchant": "UBR RIDE"}).json()
        assert data["resolved"] == "UBR RIDE"
        data = client.post("/api/merchants/resolve", json={"merchant": "UBR*RIDE"}).json()
        assert data["resolved"] == "Uber"
