"""
activity.py — Replace numeric activity codes with descriptive labels.

Codes 1–6 map to the labels in ACTIVITY_LABELS.  Anything else (including a
missing value) raises UnknownActivityError rather than leaking a raw integer
into the string column.
"""

from __future__ import annotations

from types import MappingProxyType

import pandas as pd

from har_tidy.errors import StructuralMismatchError, UnknownActivityError

ACTIVITY_LABELS = MappingProxyType({
    1: "WALKING",
    2: "WALKING_UPSTAIRS",
    3: "WALKING_DOWNSTAIRS",
    4: "SITTING",
    5: "STANDING",
    6: "LAYING",
})

ACTIVITY_COL = "activity"

# Ordered in code order so that sorting by activity follows 1..6.
ACTIVITY_DTYPE = pd.CategoricalDtype(
    categories=list(ACTIVITY_LABELS.values()), ordered=True
)


def map_activity_codes(activity_column: pd.Series | pd.DataFrame) -> pd.DataFrame:
    """Map codes → labels.

    Returns a one-column DataFrame named ``activity`` with the same index as
    the input and an ordered categorical dtype.
    """
    if isinstance(activity_column, pd.DataFrame):
        if activity_column.shape[1] != 1:
            raise StructuralMismatchError(
                f"[activity] expected a single activity column, "
                f"got {activity_column.shape[1]}"
            )
        codes = activity_column.iloc[:, 0]
    else:
        codes = activity_column

    labels = codes.map(dict(ACTIVITY_LABELS))
    unknown = labels.isna()
    if unknown.any():
        bad = sorted(set(codes[unknown].tolist()), key=str)
        raise UnknownActivityError(
            f"[activity] {int(unknown.sum())} rows have unknown activity "
            f"codes {bad}; expected one of {list(ACTIVITY_LABELS)}"
        )

    return labels.astype(ACTIVITY_DTYPE).to_frame(name=ACTIVITY_COL)
