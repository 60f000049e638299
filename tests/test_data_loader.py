"""Tests for DataLoader and settings loading."""

import json

import pandas as pd
import pytest

from rfm_analytics.common import DataLoader, load_settings


@pytest.fixture
def transactions_csv(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(
        "CustomerID,Date,Revenue\n"
        "C1,2024-01-01,100\n"
        "C1,2024-06-01,200\n"
        "C2,2024-06-01,50\n"
    )
    return path


class TestLoad:
    """Test DataLoader file loading."""

    def test_load_csv(self, transactions_csv):
        """CSV rows load in file order."""
        df = DataLoader().load(transactions_csv)
        assert len(df) == 3
        assert list(df.columns) == ["CustomerID", "Date", "Revenue"]

    def test_load_json(self, tmp_path):
        """A JSON array of objects loads as records."""
        path = tmp_path / "transactions.json"
        path.write_text(json.dumps([
            {"Customer": "A", "PurchaseDate": "2024-06-01", "Amount": 10},
            {"Customer": "B", "PurchaseDate": "2024-06-02", "Amount": 20},
        ]))
        df = DataLoader().load(path)
        assert list(df["Customer"]) == ["A", "B"]

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DataLoader().load_csv(tmp_path / "nope.csv")

    def test_unsupported_format(self, tmp_path):
        """Unsupported suffixes raise ValueError."""
        path = tmp_path / "transactions.txt"
        path.write_text("CustomerID\nC1\n")
        with pytest.raises(ValueError, match="Unsupported format"):
            DataLoader().load(path)

    def test_load_csv_bytes(self):
        """Uploaded bytes load like a file."""
        df = DataLoader().load_csv_bytes(b"CustomerID,Date,Revenue\nC1,2024-01-01,5\n")
        assert len(df) == 1
        assert df.iloc[0]["Revenue"] == 5

    def test_load_empty_bytes(self):
        """Empty uploads load as an empty frame."""
        assert DataLoader().load_csv_bytes(b"   ").empty

    def test_to_records(self, transactions_csv):
        """Records keep row order and column names."""
        loader = DataLoader()
        records = loader.to_records(loader.load(transactions_csv))
        assert records[0] == {"CustomerID": "C1", "Date": "2024-01-01", "Revenue": 100}
        assert len(records) == 3


class TestValidateData:
    """Test DataLoader.validate_data."""

    def test_valid_data(self, transactions_csv):
        """Preferred column names are detected."""
        loader = DataLoader()
        is_valid, report = loader.validate_data(loader.load(transactions_csv))

        assert is_valid
        assert report["errors"] == []
        assert report["columns"] == {"customer_id": "CustomerID", "date": "Date", "amount": "Revenue"}
        assert report["statistics"]["n_rows"] == 3

    def test_missing_identifier_is_error(self):
        """No identifier column makes the data invalid."""
        df = pd.DataFrame({"Date": ["2024-01-01"], "Revenue": [1]})
        is_valid, report = DataLoader().validate_data(df)
        assert not is_valid
        assert "customer identifier" in report["errors"][0]

    def test_missing_amount_is_warning(self):
        """No amount column is tolerated with a warning."""
        df = pd.DataFrame({"Customer": ["A"], "PurchaseDate": ["2024-01-01"]})
        is_valid, report = DataLoader().validate_data(df)
        assert is_valid
        assert report["columns"]["customer_id"] == "Customer"
        assert report["columns"]["date"] == "PurchaseDate"
        assert any("amount" in w for w in report["warnings"])

    def test_sparse_column_warning(self):
        """Columns mostly empty are flagged."""
        df = pd.DataFrame({
            "CustomerID": ["A", "B", "C", "D"],
            "Date": ["2024-01-01", None, None, None],
            "Revenue": [1, 2, 3, 4],
        })
        _, report = DataLoader().validate_data(df)
        assert any("High missing ratio in 'Date'" in w for w in report["warnings"])


class TestLoadSettings:
    """Test load_settings."""

    def test_defaults_without_file(self, tmp_path):
        """A missing config file falls back to defaults."""
        config = load_settings(tmp_path / "missing.yaml")
        assert config["output"]["directory"] == "outputs"
        assert config["output"]["formats"] == ["csv", "json", "html"]
        assert config["data"]["missing_value_threshold"] == 0.3

    def test_defaults_not_shared_between_loads(self, tmp_path):
        """Mutating one loaded config leaves later loads untouched."""
        config = load_settings(tmp_path / "missing.yaml")
        config["output"]["formats"].append("xlsx")
        config["data"]["missing_value_threshold"] = 0.9

        fresh = load_settings(tmp_path / "missing.yaml")
        assert fresh["output"]["formats"] == ["csv", "json", "html"]
        assert fresh["data"]["missing_value_threshold"] == 0.3

    def test_yaml_overrides_merge(self, tmp_path):
        """YAML values override defaults section by section."""
        path = tmp_path / "settings.yaml"
        path.write_text("output:\n  formats:\n    - json\n")
        config = load_settings(path)
        assert config["output"]["formats"] == ["json"]
        assert config["output"]["directory"] == "outputs"

    def test_loader_uses_threshold(self, tmp_path):
        """The missing-value threshold comes from configuration."""
        path = tmp_path / "settings.yaml"
        path.write_text("data:\n  missing_value_threshold: 0.9\n")
        df = pd.DataFrame({"CustomerID": ["A", "B"], "Date": ["2024-01-01", None]})
        _, report = DataLoader(config_path=str(path)).validate_data(df)
        assert not any("High missing ratio" in w for w in report["warnings"])
