"""Tests for the FastAPI endpoints."""

import pytest
from fastapi.testclient import TestClient

from api.main import app

CSV = (
    "CustomerID,Date,Revenue\n"
    "C1,2024-01-01,100\n"
    "C1,2024-06-01,200\n"
    "C2,2024-06-01,50\n"
)


@pytest.fixture
def client():
    return TestClient(app)


def upload(client, content, **params):
    return client.post(
        "/segment",
        files={"file": ("transactions.csv", content, "text/csv")},
        params=params,
    )


class TestHealth:
    """Test GET /health."""

    def test_health(self, client):
        """Health check reports the package version."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "1.0.0"}


class TestSegmentUpload:
    """Test POST /segment."""

    def test_segment_csv(self, client):
        """Uploaded transactions are segmented."""
        response = upload(client, CSV, reference_date="2024-07-01")
        assert response.status_code == 200

        body = response.json()
        assert body["status"] == "success"
        assert body["file_name"] == "transactions.csv"
        assert body["total_customers"] == 2
        assert body["avg_metrics"] == {"recency": 30, "frequency": 1.5, "monetary": 175}
        assert body["segment_stats"][0]["segment"] == "Loyal Customers"
        assert [c["customer_id"] for c in body["customers"]] == ["C1", "C2"]

    def test_segment_filter(self, client):
        """A segment query parameter restricts the customer list only."""
        response = upload(client, CSV, reference_date="2024-07-01", segment="Champions")
        body = response.json()
        assert body["customers"] == []
        assert body["total_customers"] == 2
        assert body["selected_segment"] == "Champions"

    def test_unknown_segment(self, client):
        """Unknown segment labels are rejected."""
        response = upload(client, CSV, segment="VIP")
        assert response.status_code == 400

    def test_invalid_reference_date(self, client):
        """Unparseable reference dates are rejected."""
        response = upload(client, CSV, reference_date="someday")
        assert response.status_code == 400
        assert "reference_date" in response.json()["detail"]

    def test_missing_identifier_column(self, client):
        """CSVs without an identifier column are rejected."""
        response = upload(client, "Date,Revenue\n2024-01-01,10\n")
        assert response.status_code == 400
        assert "customer identifier" in response.json()["detail"]

    def test_undecodable_upload(self, client):
        """Binary content that is not UTF-8 is rejected."""
        response = upload(client, b"\xff\xfe\x00\x81garbage")
        assert response.status_code == 400

    def test_empty_upload(self, client):
        """An empty file yields an empty segmentation."""
        response = upload(client, "")
        assert response.status_code == 200
        body = response.json()
        assert body["total_customers"] == 0
        assert body["segment_stats"] == []
        assert body["avg_metrics"] == {"recency": 0, "frequency": 0.0, "monetary": 0}


class TestSegmentSample:
    """Test POST /segment/sample."""

    def test_sample(self, client):
        """Sample data covers the eight default customers."""
        response = client.post("/segment/sample", params={"seed": 1, "reference_date": "2024-07-01"})
        assert response.status_code == 200

        body = response.json()
        assert body["file_name"] == "sample-customer-data.csv"
        assert body["total_customers"] == 8
        assert sum(s["count"] for s in body["segment_stats"]) == 8

    def test_sample_reproducible(self, client):
        """Seeded sample runs are identical."""
        params = {"seed": 3, "reference_date": "2024-07-01"}
        first = client.post("/segment/sample", params=params).json()
        second = client.post("/segment/sample", params=params).json()
        assert first == second
