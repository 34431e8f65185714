"""Report 2: Seawater Oxygen Models -- AICc and 10-fold cross-validation of two nested OLS models."""
import streamlit as st

from ecoreports.data_loader import load_seawater
from ecoreports.stats_helpers import (
    ModelFitError, fit_ols, aicc_table, choose_best_model, model_report, narrative,
)
from ecoreports.ml_helpers import complete_cases, kfold_cv, summarize_cv, regression_metrics
from ecoreports.plotting import fold_rmse_chart
from ecoreports.ui_components import (
    report_header, concept_box, formula_box, insight_box, warning_box, takeaways,
)
from ecoreports.constants import MODEL_SPECS, N_FOLDS, SEED, SEAWATER_LABELS

# ---------------------------------------------------------------------------
st.set_page_config(page_title="Seawater Oxygen Models", layout="wide")

try:
    df = load_seawater()
except (FileNotFoundError, KeyError) as e:
    st.error(f"Could not load the seawater samples: {e}")
    st.stop()

report_header("Comparing Models of Seawater Oxygen Saturation", subtitle="Report 2: Model selection")

concept_box(
    "Two Nested Models",
    "Oxygen saturation is modeled from temperature, salinity, and phosphate concentration. "
    "The second model adds sample depth. Because Model 1 is nested in Model 2, the larger "
    "model will always fit the data it was trained on at least as well; the question is "
    "whether the extra term earns its keep on data it has <em>not</em> seen.",
)

st.dataframe(
    [{"Model": s.name, "Formula": s.formula} for s in MODEL_SPECS],
    use_container_width=True, hide_index=True,
)
st.caption(" · ".join(f"`{k}`: {v}" for k, v in SEAWATER_LABELS.items()))

# ---------------------------------------------------------------------------
# 1. AICc
# ---------------------------------------------------------------------------
st.subheader("Information Criterion: AICc")

formula_box(
    "Corrected AIC",
    r"\text{AICc} = -2\ln\hat{L} + 2K + \frac{2K(K+1)}{n - K - 1}",
    "K counts every estimated coefficient plus the residual variance. Lower is better; "
    "weights are exp(-ΔAICc/2) normalized to sum to one.",
)

# Both models, the in-sample metrics, and the final report use the same complete rows.
model_data = complete_cases(df, MODEL_SPECS)

try:
    fits = {spec.name: fit_ols(model_data, spec) for spec in MODEL_SPECS}
    aic_tab = aicc_table(fits)
except ModelFitError as e:
    st.error(f"Model fitting failed: {e}")
    st.stop()

st.dataframe(
    aic_tab.style.format({
        "AICc": "{:.2f}", "Delta_AICc": "{:.2f}", "ModelLik": "{:.3f}",
        "AICcWt": "{:.3f}", "LL": "{:.2f}", "Cum.Wt": "{:.3f}",
    }),
    use_container_width=True, hide_index=True,
)

in_sample = {
    spec.name: regression_metrics(fits[spec.name].model.endog, fits[spec.name].fittedvalues)
    for spec in MODEL_SPECS
}
cols = st.columns(len(MODEL_SPECS))
for col, spec in zip(cols, MODEL_SPECS):
    col.metric(f"{spec.name} in-sample RMSE", f"{in_sample[spec.name]['rmse']:.3f}")

st.divider()

# ---------------------------------------------------------------------------
# 2. Cross-validation
# ---------------------------------------------------------------------------
st.subheader(f"{N_FOLDS}-Fold Cross-Validation")

st.markdown(
    f"Every complete sample is assigned to one of {N_FOLDS} folds (seed {SEED}). Each fold "
    "takes a turn as the test set while both models are trained on the rest, and the "
    "root-mean-square error of the held-out predictions is averaged across folds."
)

try:
    with st.spinner(f"Running {N_FOLDS}-fold cross-validation..."):
        folds = kfold_cv(model_data, MODEL_SPECS, k=N_FOLDS, seed=SEED)
except (ModelFitError, ValueError) as e:
    st.error(f"Cross-validation failed: {e}")
    st.stop()

cv_summary = summarize_cv(folds, MODEL_SPECS)

col_a, col_b = st.columns([1, 2])
with col_a:
    st.dataframe(
        cv_summary.style.format({"Mean RMSE": "{:.4f}", "SD RMSE": "{:.4f}"}),
        use_container_width=True, hide_index=True,
    )
with col_b:
    st.plotly_chart(fold_rmse_chart(folds, [s.name for s in MODEL_SPECS]), use_container_width=True)

st.divider()

# ---------------------------------------------------------------------------
# 3. Final model
# ---------------------------------------------------------------------------
best = choose_best_model(aic_tab, cv_summary)
best_spec = next(s for s in MODEL_SPECS if s.name == best["model"])
report = model_report(fits[best_spec.name], best_spec)

st.subheader(f"Final Model: {best_spec.name}")

st.dataframe(
    report["coefficients"].style.format({
        "Estimate": "{:.4f}", "Std. Error": "{:.4f}", "t value": "{:.2f}", "p value": "{:.3g}",
    }),
    use_container_width=True, hide_index=True,
)

met1, met2, met3 = st.columns(3)
met1.metric("Observations", f"{report['nobs']:,}")
met2.metric("R-squared", f"{report['r2']:.4f}")
met3.metric("Adjusted R-squared", f"{report['adj_r2']:.4f}")

formula_box("Model equation", report["equation"])
formula_box("Fitted equation", report["fitted_equation"])

if not best["aicc_agrees"]:
    warning_box("AICc prefers a different model than cross-validation; the final choice follows prediction error.")

insight_box(narrative(best, aic_tab, cv_summary, report))

takeaways([
    "Adding a predictor can only lower in-sample error, so both AICc and held-out RMSE are used to judge it.",
    f"Fold assignment is seeded ({SEED}), so every run of this report produces the same numbers.",
    "A fold whose training rows cannot support a model stops the report rather than being skipped.",
])
