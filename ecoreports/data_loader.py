"""Data loading, cached readers, and row filters for both survey datasets."""
import logging

import streamlit as st
import pandas as pd

from ecoreports.constants import (
    AMPHIBIAN_COLS, AMPHIBIAN_PATH, DATE_COL, DATE_FORMAT, DEFAULT_SPECIES,
    LIFE_STAGES, NUMBER_COL, SEAWATER_PATH, SEAWATER_RENAME, SPECIES_COL,
    SPECIES_NAMES, STAGE_COL, TOP_N_SITES,
)

logger = logging.getLogger(__name__)


def _require_columns(df, columns, source):
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"{source} is missing required column(s): {', '.join(missing)}")


def read_amphibians(path):
    """Read the amphibian survey CSV, keeping species, site, date, and life stage.

    The per-record ``amphibian_number`` column is kept when the file has one.
    """
    df = pd.read_csv(path)
    _require_columns(df, AMPHIBIAN_COLS, path)
    keep = AMPHIBIAN_COLS + ([NUMBER_COL] if NUMBER_COL in df.columns else [])
    logger.info("Loaded %d amphibian records from %s", len(df), path)
    return df[keep].copy()


def read_seawater(path):
    """Read the seawater CSV and rename its columns to the model variable names."""
    df = pd.read_csv(path)
    _require_columns(df, list(SEAWATER_RENAME), path)
    df = df[list(SEAWATER_RENAME)].rename(columns=SEAWATER_RENAME)
    logger.info("Loaded %d seawater samples from %s", len(df), path)
    return df


@st.cache_data
def load_amphibians():
    """Load the configured amphibian dataset."""
    return read_amphibians(AMPHIBIAN_PATH)


@st.cache_data
def load_seawater():
    """Load the configured seawater dataset."""
    return read_seawater(SEAWATER_PATH)


def filter_species(df, species=DEFAULT_SPECIES):
    """Filter DataFrame to a single species code."""
    return df[df[SPECIES_COL] == species].copy()


def filter_life_stages(df, stages=None):
    """Keep rows whose life stage is one of ``stages`` (default: every known stage)."""
    stages = list(LIFE_STAGES if stages is None else stages)
    unknown = [s for s in stages if s not in LIFE_STAGES]
    if unknown:
        raise ValueError(f"Unknown life stage(s) {unknown}; expected a subset of {LIFE_STAGES}")
    return df[df[STAGE_COL].isin(stages)].copy()


def add_survey_year(df):
    """Parse the M/D/Y survey date and add an integer ``year`` column.

    Malformed dates raise ``ValueError``.
    """
    out = df.copy()
    out[DATE_COL] = pd.to_datetime(out[DATE_COL], format=DATE_FORMAT)
    out["year"] = out[DATE_COL].dt.year.astype(int)
    return out


def sidebar_filters(df):
    """Render sidebar species and top-N controls; return (species, n)."""
    st.sidebar.header("Filters")
    present = sorted(df[SPECIES_COL].dropna().unique())
    options = present or [DEFAULT_SPECIES]
    default_idx = options.index(DEFAULT_SPECIES) if DEFAULT_SPECIES in options else 0
    species = st.sidebar.selectbox(
        "Species", options, index=default_idx,
        format_func=lambda code: f"{code} ({SPECIES_NAMES[code]})" if code in SPECIES_NAMES else code,
        key="species_filter",
    )
    top_n = st.sidebar.slider("Sites to rank", 3, 15, TOP_N_SITES, key="top_n_filter")
    return species, top_n
