"""Numeric helpers shared by the segmentation stages."""

import numpy as np
import pandas as pd


def round_half_up(values, decimals: int = 0):
    """
    Round halves toward positive infinity (``2.5 -> 3``, ``-2.5 -> -2``).

    Works on scalars, numpy arrays and pandas Series; Series keep their index.
    """
    factor = 10 ** decimals
    rounded = np.floor(np.asarray(values, dtype=float) * factor + 0.5) / factor
    if isinstance(values, pd.Series):
        return pd.Series(rounded, index=values.index, name=values.name)
    if np.ndim(rounded) == 0:
        return float(rounded)
    return rounded


def to_reference_timestamp(reference_time) -> pd.Timestamp:
    """Coerce a reference time to a naive (UTC) pandas Timestamp."""
    reference = pd.Timestamp(reference_time)
    if reference.tzinfo is not None:
        reference = reference.tz_convert('UTC').tz_localize(None)
    return reference
