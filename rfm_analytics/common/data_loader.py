"""
Data Loading and Validation Module
===================================

Loads transaction files into the ordered record sequence consumed by the
segmentation, with a soft validation report for the accepted column names.

Usage:
    from rfm_analytics.common import DataLoader

    loader = DataLoader(config_path="config/settings.yaml")
    df = loader.load("data/sample_customers.csv")

    is_valid, report = loader.validate_data(df)
    records = loader.to_records(df)
"""

import copy
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
import yaml
from loguru import logger

from ..customer_segmentation.transactions import (
    AMOUNT_FIELDS,
    CUSTOMER_ID_FIELDS,
    DATE_FIELDS,
)

DEFAULT_CONFIG = {
    'data': {
        'missing_value_threshold': 0.3,
    },
    'output': {
        'directory': 'outputs',
        'formats': ['csv', 'json', 'html'],
    }
}


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load YAML settings merged over the built-in defaults.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        for section, values in loaded.items():
            if isinstance(values, dict):
                config.setdefault(section, {}).update(values)
            else:
                config[section] = values
        logger.debug(f"Loaded configuration from {config_path}")

    return config


class DataLoader:
    """
    Transaction file loader with validation.

    Attributes:
        config (dict): Configuration dictionary loaded from YAML
        supported_formats (list): List of supported file formats

    Example:
        >>> loader = DataLoader()
        >>> df = loader.load_csv("transactions.csv")
        >>> records = loader.to_records(df)
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize DataLoader with optional configuration.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config = load_settings(config_path)
        self.supported_formats = ['.csv', '.json']
        logger.info("DataLoader initialized")

    def load(self, filepath: Union[str, Path], **kwargs) -> pd.DataFrame:
        """
        Load a transaction file, dispatching on its suffix.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported
        """
        filepath = Path(filepath)
        suffix = filepath.suffix.lower()

        if suffix == '.json':
            return self.load_json(filepath, **kwargs)
        return self.load_csv(filepath, **kwargs)

    def load_csv(
        self,
        filepath: Union[str, Path],
        **kwargs
    ) -> pd.DataFrame:
        """
        Load CSV file.

        Dates are left as text; the segmentation parses them per record so
        that one malformed value does not spoil the whole column.

        Args:
            filepath: Path to CSV file
            **kwargs: Additional arguments passed to pd.read_csv

        Returns:
            DataFrame with loaded data

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported
        """
        filepath = self._check_path(filepath)

        logger.info(f"Loading data from {filepath}")

        read_kwargs = {
            'skip_blank_lines': True,
            'low_memory': False,
            **kwargs
        }
        df = pd.read_csv(filepath, **read_kwargs)

        logger.info(f"Loaded {len(df)} records with {len(df.columns)} columns")
        return df

    def load_json(self, filepath: Union[str, Path], **kwargs) -> pd.DataFrame:
        """
        Load a JSON array of transaction objects.

        Args:
            filepath: Path to JSON file
            **kwargs: Additional arguments passed to pd.read_json

        Returns:
            DataFrame with loaded data
        """
        filepath = self._check_path(filepath)

        logger.info(f"Loading JSON from {filepath}")
        df = pd.read_json(filepath, orient='records', convert_dates=False, **kwargs)
        logger.info(f"Loaded {len(df)} records")
        return df

    def load_csv_bytes(self, contents: bytes, encoding: str = 'utf-8') -> pd.DataFrame:
        """
        Load uploaded CSV content.

        Raises:
            UnicodeDecodeError: If the content is not valid in ``encoding``
            pandas.errors.ParserError: If the content is not CSV
        """
        contents.decode(encoding)
        if not contents.strip():
            return pd.DataFrame()

        df = pd.read_csv(BytesIO(contents), encoding=encoding, skip_blank_lines=True)
        logger.info(f"Loaded {len(df)} uploaded records")
        return df

    def to_records(self, df: pd.DataFrame) -> List[Dict[str, Any]]:
        """Convert a DataFrame to an ordered list of record mappings."""
        return df.to_dict('records')

    def _check_path(self, filepath: Union[str, Path]) -> Path:
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        if filepath.suffix.lower() not in self.supported_formats:
            raise ValueError(f"Unsupported format: {filepath.suffix}")

        return filepath

    def validate_data(self, df: pd.DataFrame) -> Tuple[bool, Dict[str, Any]]:
        """
        Validate a transaction DataFrame and generate a quality report.

        A missing customer identifier column is an error; missing date or
        amount columns and sparse columns are warnings, because the
        segmentation tolerates them.

        Args:
            df: DataFrame to validate

        Returns:
            Tuple of (is_valid, validation_report)

        Example:
            >>> is_valid, report = loader.validate_data(df)
            >>> if not is_valid:
            ...     print(report['errors'])
        """
        report = {
            'is_valid': True,
            'errors': [],
            'warnings': [],
            'columns': {},
            'statistics': {}
        }

        roles = {
            'customer_id': CUSTOMER_ID_FIELDS,
            'date': DATE_FIELDS,
            'amount': AMOUNT_FIELDS,
        }
        for role, fields in roles.items():
            present = [f for f in fields if f in df.columns]
            report['columns'][role] = present[0] if present else None

        if report['columns']['customer_id'] is None:
            report['errors'].append(
                f"Missing customer identifier column, expected one of {list(CUSTOMER_ID_FIELDS)}"
            )
            report['is_valid'] = False
        if report['columns']['date'] is None:
            report['warnings'].append(
                f"No date column found, expected one of {list(DATE_FIELDS)}"
            )
        if report['columns']['amount'] is None:
            report['warnings'].append(
                f"No amount column found, expected one of {list(AMOUNT_FIELDS)}; amounts count as zero"
            )

        missing_threshold = self.config.get('data', {}).get('missing_value_threshold', 0.3)
        if len(df) > 0:
            for col in df.columns:
                missing_ratio = df[col].isna().sum() / len(df)
                if missing_ratio > missing_threshold:
                    report['warnings'].append(
                        f"High missing ratio in '{col}': {missing_ratio:.2%}"
                    )

        report['statistics'] = {
            'n_rows': len(df),
            'n_columns': len(df.columns),
            'missing_values': {k: int(v) for k, v in df.isna().sum().items()},
        }

        for warning in report['warnings']:
            logger.warning(warning)

        return report['is_valid'], report
