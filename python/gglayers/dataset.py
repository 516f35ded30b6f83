from typing import Any

import numpy as np
import pandas as pd

from gglayers.errors import ConfigurationError


def as_dataset(data: Any) -> pd.DataFrame:
    """Coerce ``data`` to a ``DataFrame``.

    DataFrames are returned as they are; anything else the ``DataFrame``
    constructor understands (a dict of columns, a list of records) is
    converted.
    """
    if isinstance(data, pd.DataFrame):
        return data
    try:
        return pd.DataFrame(data)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Cannot use object of type '{type(data).__name__}' as a dataset: {e}") from e


def has_column(data: pd.DataFrame, name: Any) -> bool:
    return isinstance(name, str) and name in data.columns


def column(data: pd.DataFrame, name: str) -> np.ndarray:
    if not has_column(data, name):
        raise ConfigurationError(f"Dataset has no column '{name}'; columns are {list(data.columns)}")
    values = data[name].to_numpy()
    values.flags.writeable = False
    return values
