"""Shared Plotly plotting helpers."""
import plotly.express as px
import plotly.graph_objects as go

from ecoreports.constants import MODEL_COLORS, SITE_COL, STAGE_COL, STAGE_COLORS


def apply_common_layout(fig, title=None, height=500):
    """Shared report styling: white template, left title, legend above the plot area."""
    fig.update_layout(
        template="plotly_white",
        height=height,
        title=title,
        title_x=0.0,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1, title_text=""),
        margin=dict(t=80, b=40, l=60, r=20),
    )
    return fig


def stacked_bar_chart(df, x, y="count", color=STAGE_COL, title=None, labels=None, height=500):
    """Create a stacked bar chart colored by life stage."""
    fig = px.bar(df, x=x, y=y, color=color, color_discrete_map=STAGE_COLORS,
                 labels=labels or {}, title=title, barmode="stack")
    return apply_common_layout(fig, title, height)


def ranked_bar_chart(df, x=SITE_COL, y="count", color=STAGE_COL, order=None, title=None, labels=None, height=500):
    """Stacked bar chart with the categorical x axis fixed to ``order``.

    Without ``order`` the categories keep their first appearance in ``df``.
    """
    if order is None:
        order = list(dict.fromkeys(df[x]))
    fig = stacked_bar_chart(df, x=x, y=y, color=color, title=title, labels=labels, height=height)
    fig.update_xaxes(type="category", categoryorder="array", categoryarray=[str(v) for v in order])
    return fig


def fold_rmse_chart(fold_table, model_names, title="RMSE by Fold", height=400):
    """Grouped bars of per-fold RMSE for each model, with a dashed line at each mean."""
    fig = go.Figure()
    for name in model_names:
        color = MODEL_COLORS.get(name)
        fig.add_trace(go.Bar(
            x=[f"Fold {i}" for i in fold_table["Fold"]],
            y=fold_table[name],
            name=name,
            marker_color=color,
        ))
        fig.add_hline(y=fold_table[name].mean(), line_dash="dash", line_color=color,
                      annotation_text=f"{name} mean = {fold_table[name].mean():.3f}")
    fig.update_layout(barmode="group", xaxis_title="Fold", yaxis_title="RMSE")
    return apply_common_layout(fig, title, height)
