"""Shared fixtures: small synthetic amphibian and seawater tables."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def seawater_df() -> pd.DataFrame:
    """120 samples where oxygen saturation depends linearly on the predictors plus noise."""
    rng = np.random.RandomState(0)
    n = 120
    temp_c = rng.uniform(5, 20, n)
    salinity = rng.uniform(33, 34.5, n)
    phosphate = rng.uniform(0.3, 3.0, n)
    depth_m = rng.uniform(0, 500, n)
    o2sat = 60 + 2.0 * temp_c - 0.5 * salinity - 12.0 * phosphate - 0.01 * depth_m + rng.normal(0, 3, n)
    return pd.DataFrame({
        "temp_c": temp_c,
        "salinity": salinity,
        "phosphate": phosphate,
        "depth_m": depth_m,
        "o2sat": o2sat,
    })


@pytest.fixture
def amphibian_df() -> pd.DataFrame:
    """Survey records for two species across ten lakes and three years."""
    rows = []
    # lake 100 + i gets i + 1 adult RAMU records, so lake 109 is the busiest
    for i in range(10):
        for j in range(i + 1):
            rows.append(("RAMU", 100 + i, f"7/{j % 28 + 1}/{1995 + j % 3}", "Adult"))
    rows += [
        ("RAMU", 100, "8/2/1996", "SubAdult"),
        ("RAMU", 101, "8/3/1996", "SubAdult"),
        ("RAMU", 105, "6/30/1997", "Tadpole"),
        ("RAMU", 105, "6/30/1997", "Tadpole"),
        ("RAMU", 106, "6/30/1997", "EggMass"),
        ("BUCA", 109, "7/1/1995", "Adult"),
        ("BUCA", 109, "7/2/1995", "Tadpole"),
    ]
    return pd.DataFrame(rows, columns=["amphibian_species", "lake_id", "survey_date", "amphibian_life_stage"])
