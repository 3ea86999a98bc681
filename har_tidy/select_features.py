"""
select_features.py — Keep only the mean() and std() measurements.

A feature is kept when its name in features.txt contains the literal text
"mean()" or "std()".  The match is a plain case-sensitive substring test, so
"fBodyAcc-meanFreq()-X" and "angle(X,gravityMean)" are dropped.  On the
561-entry dictionary this keeps 66 columns (33 means, 33 standard deviations).

Usage:
    python -m har_tidy.select_features   # from project root
"""

from __future__ import annotations

import pandas as pd

from har_tidy.errors import StructuralMismatchError
from har_tidy.load_data import DATASET_ROOT, load_feature_names

MEAN_STD_TOKENS = ("mean()", "std()")


def mean_std_mask(feature_names: pd.Series) -> pd.Series:
    """Boolean Series, True where the name contains one of MEAN_STD_TOKENS."""
    names = pd.Series(feature_names).astype(str).reset_index(drop=True)
    mask = pd.Series(False, index=names.index)
    for token in MEAN_STD_TOKENS:
        mask |= names.str.contains(token, regex=False)
    return mask


def select_mean_std(
    features: pd.DataFrame,
    feature_names: pd.Series,
) -> pd.DataFrame:
    """Filter *features* to the mean/std columns and label them by name.

    Parameters
    ----------
    features : DataFrame, shape (n, n_features)
        Merged feature matrix, columns in dictionary order.
    feature_names : Series, length n_features
        Output of ``load_feature_names()``.

    Returns
    -------
    DataFrame with the selected columns in dictionary order, renamed to their
    descriptive names.  The row index is left untouched.
    """
    names = pd.Series(feature_names).astype(str).reset_index(drop=True)
    if len(names) != features.shape[1]:
        raise StructuralMismatchError(
            f"[select] feature dictionary has {len(names)} entries but the "
            f"feature matrix has {features.shape[1]} columns"
        )

    mask = mean_std_mask(names).to_numpy()
    selected = features.iloc[:, mask].copy()
    selected.columns = names[mask].tolist()
    return selected


def main() -> None:
    names = load_feature_names(DATASET_ROOT)
    mask = mean_std_mask(names)
    kept = names[mask]
    print(f"Feature dictionary entries : {len(names)}")
    print(f"Selected mean/std features : {len(kept)}")
    for token in MEAN_STD_TOKENS:
        n = int(kept.str.contains(token, regex=False).sum())
        print(f"  containing {token!r:<9}: {n}")
    print(f"First 5 selected : {kept.head().tolist()}")
    print(f"Last  5 selected : {kept.tail().tolist()}")


if __name__ == "__main__":
    main()
