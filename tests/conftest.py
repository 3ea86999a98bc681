"""Shared fixtures: a miniature UCI HAR dataset written to a temp directory."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

FEATURE_NAMES = [
    "tBodyAcc-mean()-X",
    "tBodyAcc-std()-X",
    "tBodyAcc-mad()-X",
    "fBodyAcc-meanFreq()-X",
    "fBodyAcc-mean()-Y",
    "angle(X,gravityMean)",
    "tGravityAcc-Mean()-Z",
    "fBodyGyro-std()-Z",
]
SELECTED_NAMES = [
    "tBodyAcc-mean()-X",
    "tBodyAcc-std()-X",
    "fBodyAcc-mean()-Y",
    "fBodyGyro-std()-Z",
]
SELECTED_POSITIONS = [0, 1, 4, 7]

TRAIN_SUBJECTS = [1, 1, 1, 2, 2, 2]
TRAIN_CODES = [1, 1, 2, 1, 2, 2]
TEST_SUBJECTS = [3, 3, 1, 1]
TEST_CODES = [6, 6, 1, 5]


def feature_value(row: int, col: int) -> float:
    """Value stored at global row *row* (train rows first) and column *col*."""
    return float(row * 10 + col)


def write_table(path: Path, rows: list[list[float]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        for row in rows:
            f.write(" " + " ".join(f"{v: .7e}" for v in row) + "\n")


def write_int_column(path: Path, values: list[int]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write("".join(f"{v}\n" for v in values))


def write_dataset(root: Path) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    with open(root / "features.txt", "w") as f:
        for i, name in enumerate(FEATURE_NAMES, start=1):
            f.write(f"{i} {name}\n")

    offset = 0
    for split, subjects, codes in (
        ("train", TRAIN_SUBJECTS, TRAIN_CODES),
        ("test", TEST_SUBJECTS, TEST_CODES),
    ):
        n = len(subjects)
        rows = [
            [feature_value(offset + r, c) for c in range(len(FEATURE_NAMES))]
            for r in range(n)
        ]
        write_table(root / split / f"X_{split}.txt", rows)
        write_int_column(root / split / f"y_{split}.txt", codes)
        write_int_column(root / split / f"subject_{split}.txt", subjects)
        offset += n
    return root


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A data/ directory already holding a complete ``UCI HAR Dataset``."""
    d = tmp_path / "data"
    write_dataset(d / "UCI HAR Dataset")
    return d


@pytest.fixture
def dataset_root(data_dir: Path) -> Path:
    return data_dir / "UCI HAR Dataset"


@pytest.fixture
def synthetic() -> SimpleNamespace:
    """The constants the miniature dataset was built from."""
    return SimpleNamespace(
        feature_names=FEATURE_NAMES,
        selected_names=SELECTED_NAMES,
        selected_positions=SELECTED_POSITIONS,
        train_subjects=TRAIN_SUBJECTS,
        train_codes=TRAIN_CODES,
        test_subjects=TEST_SUBJECTS,
        test_codes=TEST_CODES,
        value=feature_value,
        write_dataset=write_dataset,
    )
