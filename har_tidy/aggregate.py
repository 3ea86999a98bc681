"""
aggregate.py — Average every feature per (subject, activity) and export.

The tidy table has one row per (subject, activity) pair present in the
combined data, columns ``subject, activity, <feature means>...``, sorted by
subject and then by activity code order.  It is written as a comma-separated
file with a header row and no index column.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from har_tidy.activity import ACTIVITY_COL, ACTIVITY_DTYPE
from har_tidy.assemble import SUBJECT_COL
from har_tidy.errors import PipelineIOError, StructuralMismatchError

GROUP_COLS = [SUBJECT_COL, ACTIVITY_COL]
CSV_SEP = ","


def feature_columns(df: pd.DataFrame) -> list[str]:
    return [c for c in df.columns if c not in GROUP_COLS]


def aggregate(combined: pd.DataFrame) -> pd.DataFrame:
    """Group *combined* by (subject, activity) and take column means.

    Parameters
    ----------
    combined : DataFrame
        Output of ``assemble()``: feature columns plus ``activity`` and
        ``subject``.

    Returns
    -------
    tidy : DataFrame
        Columns ``subject, activity, <features in input order>``, RangeIndex.
    """
    missing = [c for c in GROUP_COLS if c not in combined.columns]
    if missing:
        raise StructuralMismatchError(
            f"[aggregate] combined table lacks grouping columns: {missing}"
        )

    feats = feature_columns(combined)
    non_numeric = [
        c for c in feats if not pd.api.types.is_numeric_dtype(combined[c])
    ]
    if non_numeric:
        raise StructuralMismatchError(
            f"[aggregate] non-numeric feature columns: {non_numeric[:5]}"
        )

    for col in GROUP_COLS:
        n_missing = int(combined[col].isna().sum())
        if n_missing:
            raise StructuralMismatchError(
                f"[aggregate] {n_missing} rows have a missing {col!r} value"
            )

    tidy = (
        combined.groupby(GROUP_COLS, sort=True, observed=True, dropna=False)[feats]
        .mean()
        .reset_index()
    )
    return tidy[GROUP_COLS + feats]


def write_tidy(tidy: pd.DataFrame, output_path: Path) -> Path:
    """Write *tidy* as CSV with a header and without the row index."""
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        tidy.to_csv(output_path, sep=CSV_SEP, index=False)
    except OSError as e:
        raise PipelineIOError(
            f"[aggregate] could not write tidy data to {output_path}: {e}"
        ) from e
    return output_path


def read_tidy(path: Path) -> pd.DataFrame:
    """Read a file written by ``write_tidy`` back into a DataFrame."""
    path = Path(path)
    if not path.is_file():
        raise PipelineIOError(f"[aggregate] tidy file not found: {path}")
    tidy = pd.read_csv(path, sep=CSV_SEP)
    missing = [c for c in GROUP_COLS if c not in tidy.columns]
    if missing:
        raise StructuralMismatchError(
            f"[aggregate] {path} lacks grouping columns: {missing}"
        )
    if tidy[ACTIVITY_COL].isin(ACTIVITY_DTYPE.categories).all():
        tidy[ACTIVITY_COL] = tidy[ACTIVITY_COL].astype(ACTIVITY_DTYPE)
    return tidy


def aggregate_and_export(combined: pd.DataFrame, output_path: Path) -> pd.DataFrame:
    """Aggregate *combined*, write the result to *output_path*, return it."""
    tidy = aggregate(combined)
    write_tidy(tidy, output_path)
    print(f"Tidy data saved to: {output_path}  (shape {tidy.shape})")
    return tidy
