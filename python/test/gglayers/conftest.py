import pandas as pd
import pytest


@pytest.fixture
def mpg():
    return pd.DataFrame({
        "displ": [1.8, 2.0, 2.8, 3.1, 5.7, 6.2],
        "hwy": [29, 31, 26, 27, 20, 17],
        "cty": [18, 21, 16, 18, 15, 12],
        "cyl": [4, 4, 6, 6, 8, 8],
        "class": ["compact", "compact", "midsize", "midsize", "suv", "2seater"],
    })


@pytest.fixture
def economics():
    return pd.DataFrame({
        "date": pd.date_range("2000-01-01", periods=4, freq="MS"),
        "unemploy": [5700, 5800, 6000, 6100],
    })
