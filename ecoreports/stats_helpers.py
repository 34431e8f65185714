"""Summaries, OLS fitting, AICc model comparison, and regression reporting."""
import logging

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf

from ecoreports.constants import LIFE_STAGES, SITE_COL, STAGE_COL, TOP_N_SITES

logger = logging.getLogger(__name__)


class ModelFitError(ValueError):
    """A linear model could not be estimated from the rows it was given."""


def descriptive_stats(series):
    """Compute basic descriptive statistics for a numeric series."""
    return {
        "count": int(series.count()),
        "mean": series.mean(),
        "median": series.median(),
        "std": series.std(),
        "min": series.min(),
        "max": series.max(),
    }


# ---------------------------------------------------------------------------
# Amphibian counts
# ---------------------------------------------------------------------------

def _stage_counts(df, by, weight=None):
    if weight is None:
        counts = df.groupby(by, observed=True).size()
    else:
        counts = df.groupby(by, observed=True)[weight].sum()
    return counts.rename("count").reset_index()


def count_by_year(df, weight=None):
    """Count records per survey year and life stage.

    Rows are counted unless ``weight`` names a column to sum instead.
    """
    counts = _stage_counts(df, ["year", STAGE_COL], weight)
    counts["_stage_order"] = counts[STAGE_COL].map({s: i for i, s in enumerate(LIFE_STAGES)})
    counts = counts.sort_values(["year", "_stage_order"], kind="mergesort")
    return counts.drop(columns="_stage_order").reset_index(drop=True)


def top_sites(df, n=TOP_N_SITES, weight=None):
    """Return the ``n`` sites with the most records, one row per site, largest first.

    Ties on count are broken by site label so the selection is deterministic.
    """
    totals = _stage_counts(df, [SITE_COL], weight)
    totals = totals.sort_values(["count", SITE_COL], ascending=[False, True], kind="mergesort")
    return totals.head(n).reset_index(drop=True)


def top_sites_by_stage(df, n=TOP_N_SITES, weight=None):
    """Per-life-stage counts for the top ``n`` sites, plus the ranked site order."""
    ranked = top_sites(df, n, weight)
    order = ranked[SITE_COL].tolist()
    subset = df[df[SITE_COL].isin(order)]
    counts = _stage_counts(subset, [SITE_COL, STAGE_COL], weight)
    counts["_rank"] = counts[SITE_COL].map({site: i for i, site in enumerate(order)})
    counts = counts.sort_values(["_rank", STAGE_COL], kind="mergesort")
    return counts.drop(columns="_rank").reset_index(drop=True), order


# ---------------------------------------------------------------------------
# Model fitting & comparison
# ---------------------------------------------------------------------------

def fit_ols(df, spec):
    """Fit ``spec`` by ordinary least squares on the complete cases of ``df``.

    statsmodels silently falls back to a pseudo-inverse for singular designs,
    so a rank-deficient design matrix is rejected here instead.
    """
    data = df[spec.columns].dropna()
    n_params = len(spec.predictors) + 1
    if len(data) <= n_params:
        raise ModelFitError(
            f"{spec.name}: {len(data)} complete rows cannot support {n_params} coefficients"
        )
    results = smf.ols(spec.formula, data=data).fit()
    rank = np.linalg.matrix_rank(results.model.exog)
    if rank < results.model.exog.shape[1]:
        raise ModelFitError(
            f"{spec.name}: design matrix is rank-deficient (rank {rank} < {results.model.exog.shape[1]})"
        )
    logger.debug("Fitted %s on %d rows", spec.formula, int(results.nobs))
    return results


def parameter_count(results):
    """Number of estimated parameters K: the coefficients plus the residual variance."""
    return len(results.params) + 1


def aicc(results):
    """Second-order (small-sample corrected) Akaike Information Criterion."""
    n = results.nobs
    k = parameter_count(results)
    if n - k - 1 <= 0:
        raise ModelFitError(f"AICc undefined: n={int(n)} is too small for K={k}")
    aic = -2 * results.llf + 2 * k
    return aic + (2 * k * (k + 1)) / (n - k - 1)


def aicc_table(fits):
    """Rank fitted models by AICc with deltas and Akaike weights.

    ``fits`` maps model name to a fitted OLS result. Every fit must use the
    same rows, otherwise the log-likelihoods are not comparable. Rows are
    ordered by ascending AICc; exact ties keep the order of ``fits``.
    """
    nobs = {name: int(results.nobs) for name, results in fits.items()}
    if len(set(nobs.values())) > 1:
        raise ModelFitError(f"AICc comparison needs models fitted on the same rows, got nobs {nobs}")
    rows = []
    for name, results in fits.items():
        rows.append({
            "Model": name,
            "K": parameter_count(results),
            "AICc": aicc(results),
            "LL": results.llf,
        })
    table = pd.DataFrame(rows).sort_values("AICc", kind="mergesort").reset_index(drop=True)
    table["Delta_AICc"] = table["AICc"] - table["AICc"].iloc[0]
    table["ModelLik"] = np.exp(-0.5 * table["Delta_AICc"])
    table["AICcWt"] = table["ModelLik"] / table["ModelLik"].sum()
    table["Cum.Wt"] = table["AICcWt"].cumsum()
    return table[["Model", "K", "AICc", "Delta_AICc", "ModelLik", "AICcWt", "LL", "Cum.Wt"]]


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

def choose_best_model(aic_table, cv_summary):
    """Pick the model with the lowest mean cross-validated RMSE.

    Returns the model name and whether AICc ranks the same model first.
    """
    best = cv_summary.iloc[0]["Model"]
    return {"model": best, "aicc_agrees": aic_table.iloc[0]["Model"] == best}


def _format_term(coef, name, first=False, digits=2):
    value = round(float(coef), digits)
    if first:
        return f"{value}{name}"
    sign = "-" if value < 0 else "+"
    return f" {sign} {abs(value)}{name}"


def equation_latex(spec, results=None, digits=2):
    """Render the model as a LaTeX equation.

    Without ``results`` the equation is symbolic in beta; with a fitted result
    the estimated coefficients are substituted into a fitted-value equation.
    """
    names = [rf"(\operatorname{{{p}}})".replace("_", r"\_") for p in spec.predictors]
    response = rf"\operatorname{{{spec.response}}}".replace("_", r"\_")
    if results is None:
        terms = [r"\alpha"] + [rf" + \beta_{{{i}}}{name}" for i, name in enumerate(names, start=1)]
        return f"{response} = {''.join(terms)} + \\epsilon"
    params = results.params
    terms = [_format_term(params["Intercept"], "", first=True, digits=digits)]
    for pred, name in zip(spec.predictors, names):
        terms.append(_format_term(params[pred], name, digits=digits))
    return rf"\widehat{{{response}}} = {''.join(terms)}"


def model_report(results, spec):
    """Summarize a fitted model: coefficient table, fit statistics, and equations."""
    coef_table = pd.DataFrame({
        "Term": results.params.index,
        "Estimate": results.params.values,
        "Std. Error": results.bse.values,
        "t value": results.tvalues.values,
        "p value": results.pvalues.values,
    })
    return {
        "model": spec.name,
        "formula": spec.formula,
        "coefficients": coef_table,
        "nobs": int(results.nobs),
        "r2": results.rsquared,
        "adj_r2": results.rsquared_adj,
        "equation": equation_latex(spec),
        "fitted_equation": equation_latex(spec, results),
    }


def narrative(best, aic_table, cv_summary, report):
    """Concluding paragraph interpolating the comparison statistics."""
    name = best["model"]
    aic_row = aic_table.set_index("Model").loc[name]
    cv_row = cv_summary.set_index("Model").loc[name]
    runner_up = cv_summary[cv_summary["Model"] != name]
    text = (
        f"{name} ({report['formula']}) is the preferred model. "
        f"Its mean cross-validated RMSE is {cv_row['Mean RMSE']:.3f}"
    )
    if not runner_up.empty:
        other = runner_up.iloc[0]
        text += f", compared with {other['Mean RMSE']:.3f} for {other['Model']}"
    text += f". It has an AICc of {aic_row['AICc']:.2f} (ΔAICc = {aic_row['Delta_AICc']:.2f}, weight {aic_row['AICcWt']:.3f})"
    if best["aicc_agrees"]:
        text += ", so both criteria agree."
    else:
        text += ", so AICc and cross-validation disagree and the choice rests on predictive error."
    text += (
        f" Fitted on all {report['nobs']} complete samples, it explains "
        f"{report['adj_r2'] * 100:.1f}% of the variance in oxygen saturation (adjusted R²)."
    )
    return text
