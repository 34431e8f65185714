"""Tests for the Plotly chart builders."""

from __future__ import annotations

import pandas as pd
import pytest

from ecoreports.plotting import fold_rmse_chart, ranked_bar_chart, stacked_bar_chart


def _stage_counts():
    return pd.DataFrame({
        "lake_id": ["20", "20", "10"],
        "amphibian_life_stage": ["Adult", "SubAdult", "Adult"],
        "count": [5, 2, 4],
    })


def test_stacked_bar_chart_one_trace_per_stage():
    """Life stages become separate stacked traces with the shared layout."""
    fig = stacked_bar_chart(_stage_counts(), x="lake_id", title="t")
    assert {trace.name for trace in fig.data} == {"Adult", "SubAdult"}
    assert fig.layout.barmode == "stack"
    assert fig.layout.height == 500


def test_ranked_bar_chart_keeps_given_order():
    """The category axis follows the ranking, not alphabetical order."""
    fig = ranked_bar_chart(_stage_counts(), order=[20, 10])
    assert fig.layout.xaxis.type == "category"
    assert list(fig.layout.xaxis.categoryarray) == ["20", "10"]


def test_fold_rmse_chart_groups_models():
    """One bar trace per model, one bar per fold."""
    folds = pd.DataFrame({"Fold": [1, 2, 3], "Model 1": [3.0, 3.2, 2.9], "Model 2": [2.8, 3.0, 2.7]})
    fig = fold_rmse_chart(folds, ["Model 1", "Model 2"])
    assert [trace.name for trace in fig.data] == ["Model 1", "Model 2"]
    assert list(fig.data[0].x) == ["Fold 1", "Fold 2", "Fold 3"]
    assert fig.layout.barmode == "group"


def test_common_layout_places_legend_above_plot():
    """Charts share a left-aligned title and a horizontal legend above the bars."""
    fig = stacked_bar_chart(_stage_counts(), x="lake_id", title="t")
    assert fig.layout.title.x == 0.0
    assert fig.layout.legend.orientation == "h"
    assert fig.layout.legend.y == pytest.approx(1.02)


def test_ranked_bar_chart_defaults_to_row_order():
    """Without an explicit order, lakes keep the order they first appear in."""
    fig = ranked_bar_chart(_stage_counts(), "lake_id", "count", "amphibian_life_stage")
    assert list(fig.layout.xaxis.categoryarray) == ["20", "10"]
