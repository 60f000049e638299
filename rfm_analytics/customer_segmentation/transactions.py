"""
Transaction Records Module
==========================

Soft-schema access to raw transaction records. Ingestion layers may name
the same column differently (``CustomerID`` vs ``Customer``, ``Revenue``
vs ``Amount``), so every semantic field is read through an accessor with a
fixed preference order.

Usage:
    from rfm_analytics.customer_segmentation.transactions import normalize_transactions

    df = normalize_transactions(records)
    # columns: customer_id, date, amount
"""

import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Tuple

import numpy as np
import pandas as pd
from loguru import logger

CUSTOMER_ID_FIELDS: Tuple[str, ...] = ('CustomerID', 'Customer', 'customer_id')
DATE_FIELDS: Tuple[str, ...] = ('Date', 'PurchaseDate', 'date')
AMOUNT_FIELDS: Tuple[str, ...] = ('Revenue', 'Amount', 'amount')

NORMALIZED_COLUMNS = ['customer_id', 'date', 'amount']

# pandas resolves these against the wall clock; they are not transaction dates
RELATIVE_DATE_WORDS = frozenset({'now', 'today', 'tomorrow', 'yesterday'})


def _is_present(value: Any) -> bool:
    """True unless the value is missing, NaN/NaT or a blank string."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ''
    try:
        return not pd.isna(value)
    except (TypeError, ValueError):
        # Array-likes are not scalar field values
        return True


def first_present(record: Mapping[str, Any], fields: Iterable[str]) -> Any:
    """Return the first present value among ``fields``, or None."""
    for field in fields:
        value = record.get(field)
        if _is_present(value):
            return value
    return None


def get_customer_id(record: Mapping[str, Any]) -> Optional[str]:
    """
    Read the customer identifier as a string.

    Integral floats (``1001.0``, which pandas produces for numeric ID
    columns containing gaps) are rendered without the decimal part.
    """
    value = first_present(record, CUSTOMER_ID_FIELDS)
    if value is None:
        return None
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value).strip()


def get_transaction_date(record: Mapping[str, Any]) -> Optional[pd.Timestamp]:
    """
    Parse the transaction date.

    Returns None when no date field is present or the value cannot be
    parsed. Timezone-aware values are converted to naive UTC.
    """
    value = first_present(record, DATE_FIELDS)
    if value is None:
        return None

    if isinstance(value, (pd.Timestamp, datetime, date, np.datetime64)):
        parsed = pd.Timestamp(value)
    elif isinstance(value, str):
        text = value.strip()
        if text.lower() in RELATIVE_DATE_WORDS:
            return None
        parsed = pd.to_datetime(text, errors='coerce')
    else:
        return None

    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert('UTC').tz_localize(None)
    return parsed


def get_amount(record: Mapping[str, Any]) -> float:
    """Read the transaction amount; missing or non-numeric amounts count as zero."""
    value = first_present(record, AMOUNT_FIELDS)
    if value is None or isinstance(value, bool):
        return 0.0
    amount = pd.to_numeric(value, errors='coerce')
    if pd.isna(amount) or math.isinf(amount):
        return 0.0
    return float(amount)


def normalize_transactions(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """
    Convert raw records into a normalized transaction frame.

    Rows without a usable customer identifier are dropped. Rows with an
    unparseable date are kept with ``NaT`` so they still count toward
    frequency and monetary value.

    Args:
        records: Ordered sequence of raw transaction mappings

    Returns:
        DataFrame with columns ``customer_id``, ``date``, ``amount`` in
        input order
    """
    rows = []
    n_missing_id = 0
    n_bad_date = 0

    for record in records:
        customer_id = get_customer_id(record)
        if customer_id is None:
            n_missing_id += 1
            continue

        txn_date = get_transaction_date(record)
        if txn_date is None:
            n_bad_date += 1

        rows.append({
            'customer_id': customer_id,
            'date': txn_date if txn_date is not None else pd.NaT,
            'amount': get_amount(record)
        })

    if n_missing_id:
        logger.debug(f"Dropped {n_missing_id} records without a customer identifier")
    if n_bad_date:
        logger.debug(f"{n_bad_date} records have no parseable date")

    df = pd.DataFrame(rows, columns=NORMALIZED_COLUMNS)
    df['date'] = pd.to_datetime(df['date'])
    df['amount'] = df['amount'].astype(float)
    return df
