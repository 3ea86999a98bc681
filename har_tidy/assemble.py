"""
assemble.py — Put the selected features, activity labels and subject ids
side by side in one table.

The three inputs must describe the same rows: same length and the same
(split, row) index coming out of load_and_merge().
"""

from __future__ import annotations

import pandas as pd

from har_tidy.activity import ACTIVITY_COL
from har_tidy.errors import AlignmentMismatchError, StructuralMismatchError

SUBJECT_COL = "subject"


def assemble(
    filtered_features: pd.DataFrame,
    activity_labels: pd.DataFrame,
    subject_ids: pd.Series | pd.DataFrame,
) -> pd.DataFrame:
    """Return ``[<feature columns>..., activity, subject]`` for every row."""
    if isinstance(subject_ids, pd.DataFrame):
        if subject_ids.shape[1] != 1:
            raise StructuralMismatchError(
                f"[assemble] expected a single subject column, "
                f"got {subject_ids.shape[1]}"
            )
        subject_ids = subject_ids.iloc[:, 0]
    subject = subject_ids.rename(SUBJECT_COL)

    lengths = {
        "features": len(filtered_features),
        "activity": len(activity_labels),
        "subject": len(subject),
    }
    if len(set(lengths.values())) != 1:
        raise AlignmentMismatchError(
            f"[assemble] alignment mismatch, row counts differ: {lengths}"
        )
    if not (filtered_features.index.equals(activity_labels.index)
            and filtered_features.index.equals(subject.index)):
        raise AlignmentMismatchError(
            "[assemble] alignment mismatch, inputs have equal length but "
            "different row indexes"
        )

    clashes = {ACTIVITY_COL, SUBJECT_COL} & set(filtered_features.columns)
    if clashes:
        raise StructuralMismatchError(
            f"[assemble] feature columns clash with reserved names: {sorted(clashes)}"
        )

    return pd.concat(
        [filtered_features, activity_labels[[ACTIVITY_COL]], subject],
        axis=1,
    )
