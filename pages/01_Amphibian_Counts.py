"""Report 1: Amphibian Counts -- yearly life-stage totals and the most-surveyed lakes."""
import streamlit as st

from ecoreports.data_loader import (
    load_amphibians, sidebar_filters, filter_species, filter_life_stages, add_survey_year,
)
from ecoreports.stats_helpers import count_by_year, top_sites_by_stage
from ecoreports.plotting import stacked_bar_chart, ranked_bar_chart
from ecoreports.ui_components import report_header, concept_box, insight_box, takeaways
from ecoreports.constants import (
    LIFE_STAGES, RANKED_STAGES, SITE_COL, SPECIES_NAMES, STAGE_COL,
)

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Amphibian Counts", layout="wide")

try:
    df = load_amphibians()
except (FileNotFoundError, KeyError) as e:
    st.error(f"Could not load the amphibian survey data: {e}")
    st.stop()

species, top_n = sidebar_filters(df)
species_label = SPECIES_NAMES.get(species, species)

report_header(f"{species} Counts in Sierra Lakes", subtitle="Report 1: Amphibian survey wrangling")

concept_box(
    "What We Are Counting",
    f"Each row in the survey is one record of <b>{species_label}</b> at a lake on a given date, "
    "tagged with a life stage. We keep the three life stages that describe animals "
    "(Adult, SubAdult, Tadpole), pull the year out of the survey date, and count records.",
)

try:
    sdf = add_survey_year(filter_life_stages(filter_species(df, species), LIFE_STAGES))
except ValueError as e:
    st.error(f"Survey dates could not be parsed: {e}")
    st.stop()

if sdf.empty:
    st.warning(f"No {species} records with life stage in {LIFE_STAGES}.")
    st.stop()

# ---------------------------------------------------------------------------
# 1. Counts by year
# ---------------------------------------------------------------------------
st.subheader(f"{species} Records per Year, by Life Stage")

yearly = count_by_year(sdf)
fig_year = stacked_bar_chart(
    yearly, x="year", y="count",
    title=f"{species} counts by year",
    labels={"year": "Survey year", "count": "Records", STAGE_COL: "Life stage"},
)
fig_year.update_xaxes(dtick=1)
st.plotly_chart(fig_year, use_container_width=True)

peak = yearly.groupby("year")["count"].sum()
col1, col2, col3 = st.columns(3)
col1.metric("Total Records", f"{int(peak.sum()):,}")
col2.metric("Survey Years", f"{peak.index.min()}-{peak.index.max()}")
col3.metric("Busiest Year", f"{peak.idxmax()} ({int(peak.max()):,})")

with st.expander("Yearly counts table"):
    st.dataframe(yearly, use_container_width=True, hide_index=True)

st.divider()

# ---------------------------------------------------------------------------
# 2. Top lakes
# ---------------------------------------------------------------------------
st.subheader(f"Top {top_n} Lakes for Adult and SubAdult {species}")

grown = filter_life_stages(sdf, RANKED_STAGES)
site_counts, order = top_sites_by_stage(grown, n=top_n)
site_counts[SITE_COL] = site_counts[SITE_COL].astype(str)

if not order:
    st.info(f"No lakes have adult or subadult {species} records.")
else:
    fig_sites = ranked_bar_chart(
        site_counts, order=order,
        title=f"Top {len(order)} lakes by adult and subadult {species} records",
        labels={SITE_COL: "Lake ID", "count": "Records", STAGE_COL: "Life stage"},
    )
    st.plotly_chart(fig_sites, use_container_width=True)

    if len(order) < top_n:
        st.caption(f"Only {len(order)} lakes have adult or subadult records.")

    leader_total = int(site_counts.loc[site_counts[SITE_COL] == str(order[0]), "count"].sum())
    insight_box(
        f"Lake {order[0]} leads with {leader_total:,} records. Counts here are survey "
        "records, so lakes that were visited more often rank higher."
    )

takeaways([
    "Tadpoles are dropped from the lake ranking so it reflects post-metamorphic animals only.",
    "Years are derived from the M/D/Y survey date; a malformed date halts the report.",
    "Ties in lake totals are broken by lake ID, so the ranking is stable between runs.",
])
