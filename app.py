"""Ecology Model Reports -- Main Entry Point."""
import logging

import streamlit as st

from ecoreports.data_loader import load_amphibians, load_seawater
from ecoreports.stats_helpers import descriptive_stats

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

st.set_page_config(
    page_title="Ecology Model Reports",
    page_icon="🐸",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("Ecology Model Reports")
st.subheader("Two short field-data analyses: counting frogs, and modeling the oxygen in seawater")

st.markdown("""
### The Reports

1. **Amphibian Counts** -- mountain yellow-legged frog (*Rana muscosa*) records from high-elevation
   Sierra Nevada lake surveys, counted by year and life stage, plus the eight lakes with the most
   adult and subadult records.
2. **Seawater Oxygen Models** -- CalCOFI bottle samples, with oxygen saturation regressed on
   temperature, salinity, and phosphate, with and without depth. The two models are compared by
   AICc and by 10-fold cross-validation, and the winner is reported in full.

Pick a report from the sidebar. Both read their CSV from the `data/` directory.
""")

st.divider()

st.subheader("Dataset Preview")
tab_amph, tab_sea = st.tabs(["Amphibian surveys", "Seawater samples"])

with tab_amph:
    try:
        amph = load_amphibians()
    except (FileNotFoundError, KeyError) as e:
        st.error(f"Amphibian data unavailable: {e}")
    else:
        st.dataframe(amph.head(20), use_container_width=True)
        col1, col2, col3 = st.columns(3)
        col1.metric("Records", f"{len(amph):,}")
        col2.metric("Species", amph["amphibian_species"].nunique())
        col3.metric("Lakes", amph["lake_id"].nunique())

with tab_sea:
    try:
        sea = load_seawater()
    except (FileNotFoundError, KeyError) as e:
        st.error(f"Seawater data unavailable: {e}")
    else:
        st.dataframe(sea.head(20), use_container_width=True)
        o2 = descriptive_stats(sea["o2sat"])
        col1, col2, col3 = st.columns(3)
        col1.metric("Samples", f"{len(sea):,}")
        col2.metric("Mean O2 saturation", f"{o2['mean']:.1f}%")
        col3.metric("O2 saturation range", f"{o2['min']:.1f}-{o2['max']:.1f}%")
