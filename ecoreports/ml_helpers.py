"""K-fold cross-validation of OLS model specifications and regression metrics."""
import logging

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from ecoreports.constants import N_FOLDS, SEED
from ecoreports.stats_helpers import ModelFitError, fit_ols

logger = logging.getLogger(__name__)


def assign_folds(n, k=N_FOLDS, seed=SEED):
    """Assign each of ``n`` rows a fold label in 1..k.

    The repeating sequence 1..k is cut to length ``n`` and shuffled without
    replacement, so fold sizes differ by at most one and the labels are
    reproducible for a given seed.
    """
    if k < 2:
        raise ValueError(f"k-fold cross-validation needs at least 2 folds, got {k}")
    if n < k:
        raise ValueError(f"Cannot split {n} rows into {k} non-empty folds")
    labels = np.resize(np.arange(1, k + 1), n)
    rng = np.random.RandomState(seed)
    return rng.permutation(labels)


def rmse(observed, predicted):
    """Root-mean-square error between observed and predicted values."""
    return float(np.sqrt(mean_squared_error(observed, predicted)))


def regression_metrics(y_true, y_pred):
    """Compute regression metrics."""
    return {
        "mse": mean_squared_error(y_true, y_pred),
        "rmse": rmse(y_true, y_pred),
        "mae": mean_absolute_error(y_true, y_pred),
        "r2": r2_score(y_true, y_pred),
    }


def complete_cases(df, specs):
    """Rows with no missing value in any column used by ``specs``."""
    columns = list(dict.fromkeys(c for spec in specs for c in spec.columns))
    return df[columns].dropna().reset_index(drop=True)


def kfold_cv(df, specs, k=N_FOLDS, seed=SEED):
    """Cross-validate each model spec over the same ``k`` folds.

    Every spec is trained on k-1 folds and scored by RMSE on the held-out
    fold. Returns one row per fold with an RMSE column per spec. A fold whose
    training rows cannot support a model raises ``ModelFitError``.
    """
    data = complete_cases(df, specs)
    folds = assign_folds(len(data), k, seed)
    rows = []
    for i in range(1, k + 1):
        test = data[folds == i]
        train = data[folds != i]
        row = {"Fold": i, "n_test": len(test)}
        for spec in specs:
            try:
                results = fit_ols(train, spec)
            except ModelFitError as e:
                raise ModelFitError(f"Fold {i} of {k}: {e}") from e
            predicted = results.predict(test)
            row[spec.name] = rmse(test[spec.response], predicted)
        logger.debug("Fold %d/%d: %s", i, k, {s.name: row[s.name] for s in specs})
        rows.append(row)
    logger.info("Completed %d-fold cross-validation on %d rows", k, len(data))
    return pd.DataFrame(rows)


def summarize_cv(fold_table, specs):
    """Mean and standard deviation of per-fold RMSE for each spec, best first."""
    summary = pd.DataFrame({
        "Model": [spec.name for spec in specs],
        "Formula": [spec.formula for spec in specs],
        "Mean RMSE": [fold_table[spec.name].mean() for spec in specs],
        "SD RMSE": [fold_table[spec.name].std() for spec in specs],
    })
    return summary.sort_values("Mean RMSE", kind="mergesort").reset_index(drop=True)
