"""
load_data.py — Load and merge the UCI HAR train/test tables.

Reads the six headerless, whitespace-delimited tables under the dataset root

    train/X_train.txt   train/y_train.txt   train/subject_train.txt
    test/X_test.txt     test/y_test.txt     test/subject_test.txt

plus the feature dictionary features.txt, and stacks train rows on top of
test rows.  The three merged frames share a (split, row) MultiIndex so that
later stages can check row identity instead of trusting position.

Usage:
    python -m har_tidy.load_data      # from project root
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from har_tidy.acquire import DATA_DIR, DATASET_FOLDER
from har_tidy.errors import (
    MisalignedSplitError,
    PipelineIOError,
    StructuralMismatchError,
)

# ---------------------------------------------------------------------------
# Paths / dataset constants
# ---------------------------------------------------------------------------
DATASET_ROOT = DATA_DIR / DATASET_FOLDER

SPLITS = ("train", "test")
N_FEATURES = 561
FEATURES_FILE = "features.txt"


# ---------------------------------------------------------------------------
# Core loaders
# ---------------------------------------------------------------------------

def read_table(path: Path) -> pd.DataFrame:
    """Read one headerless whitespace-delimited table.

    Columns are labelled 0..n-1, rows by a RangeIndex.  Every row must have
    the same number of fields and no field may be missing or NaN.
    """
    if not path.is_file():
        raise PipelineIOError(f"[load] input file not found: {path}")
    try:
        df = pd.read_csv(path, sep=r"\s+", header=None)
    except pd.errors.EmptyDataError as e:
        raise PipelineIOError(f"[load] input file is empty: {path}") from e
    except pd.errors.ParserError as e:
        raise StructuralMismatchError(
            f"[load] rows of {path} disagree on field count: {e}"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise PipelineIOError(f"[load] could not read {path}: {e}") from e

    # Short rows are padded with NaN by read_csv.
    bad_rows = df.index[df.isna().any(axis=1)]
    if len(bad_rows):
        lines = (bad_rows + 1).tolist()
        raise StructuralMismatchError(
            f"[load] {path} has {len(lines)} rows with missing or NaN fields "
            f"(expected {df.shape[1]} per row), lines {lines[:10]}"
        )
    return df


def load_feature_names(dataset_root: Path = DATASET_ROOT) -> pd.Series:
    """Read features.txt → Series of feature names in column order."""
    path = dataset_root / FEATURES_FILE
    table = read_table(path)
    if table.shape[1] != 2:
        raise StructuralMismatchError(
            f"[load] {path} should have 2 columns (index, name), "
            f"found {table.shape[1]}"
        )
    table.columns = ["index", "name"]
    return table["name"].astype(str).reset_index(drop=True)


def load_split(
    dataset_root: Path,
    split: str,
) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Load X, y and subject for one split and check they line up.

    Returns
    -------
    X : DataFrame, shape (n, n_features)
    y : DataFrame, shape (n, 1) — integer activity codes
    subject : DataFrame, shape (n, 1) — integer subject ids
    """
    split_dir = dataset_root / split
    X = read_table(split_dir / f"X_{split}.txt")
    y = read_table(split_dir / f"y_{split}.txt")
    subject = read_table(split_dir / f"subject_{split}.txt")

    for name, df in (("y", y), ("subject", subject)):
        if df.shape[1] != 1:
            raise StructuralMismatchError(
                f"[load] {split_dir / f'{name}_{split}.txt'} should have a "
                f"single column, found {df.shape[1]}"
            )

    if not (len(X) == len(y) == len(subject)):
        raise MisalignedSplitError(
            f"[load] misaligned split '{split}': X has {len(X)} rows, "
            f"y has {len(y)} rows, subject has {len(subject)} rows"
        )
    return X, y, subject


def load_and_merge(
    dataset_root: Path = DATASET_ROOT,
) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Stack train rows on top of test rows for X, y and subject.

    Each returned frame is indexed by the same (split, row) MultiIndex,
    train first.
    """
    parts = {split: load_split(dataset_root, split) for split in SPLITS}

    n_cols = {split: parts[split][0].shape[1] for split in SPLITS}
    if len(set(n_cols.values())) != 1:
        raise StructuralMismatchError(
            f"[load] feature matrices disagree on column count: {n_cols}"
        )

    merged = []
    for i in range(3):
        merged.append(
            pd.concat(
                [parts[split][i] for split in SPLITS],
                keys=list(SPLITS),
                names=["split", "row"],
            )
        )
    features, activities, subjects = merged
    return features, activities, subjects


# ---------------------------------------------------------------------------
# Summary statistics
# ---------------------------------------------------------------------------

def print_summary(
    features: pd.DataFrame,
    activities: pd.DataFrame,
    subjects: pd.DataFrame,
) -> None:
    """Print row counts per split and overall shape of the merged data."""
    print("=" * 60)
    print("UCI HAR Dataset — Merged train + test")
    print("=" * 60)
    rows_per_split = features.index.get_level_values("split").value_counts()
    for split in SPLITS:
        print(f"{split + ' rows':<17}: {int(rows_per_split.get(split, 0)):,}")
    print(f"Total rows       : {len(features):,}")
    print(f"Feature columns  : {features.shape[1]}")
    if features.shape[1] != N_FEATURES:
        print(f"[WARNING] Expected {N_FEATURES} feature columns")
    print(f"Unique subjects  : {subjects.iloc[:, 0].nunique()}")
    print(f"Unique activities: {activities.iloc[:, 0].nunique()}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    print(f"Loading data from: {DATASET_ROOT}\n")
    features, activities, subjects = load_and_merge()
    print_summary(features, activities, subjects)


if __name__ == "__main__":
    main()
