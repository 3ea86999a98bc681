"""
run_analysis.py — Build the UCI HAR tidy data set end to end.

Pipeline:
  0. Download and unpack the UCI HAR archive into data/ if needed
  1. Merge the train and test sets (features, activities, subjects)
  2. Keep only the mean() and std() features, named from features.txt
  3. Replace activity codes with descriptive labels
  4. Combine features, activity and subject into one table
  5. Average every feature per (subject, activity) → UCI_HAR_tidydata.csv
  6. Print a summary and save a sanity-check plot → Results/tidy_overview.png

Usage:
    python -m har_tidy.run_analysis   # from project root
"""

from __future__ import annotations

import time
from pathlib import Path

import matplotlib
matplotlib.use("Agg")                       # headless backend — no display needed
import matplotlib.pyplot as plt
import pandas as pd

from har_tidy.acquire import DATA_DIR, ensure_dataset
from har_tidy.activity import ACTIVITY_COL, ACTIVITY_LABELS, map_activity_codes
from har_tidy.aggregate import aggregate_and_export, feature_columns
from har_tidy.assemble import SUBJECT_COL, assemble
from har_tidy.load_data import load_and_merge, load_feature_names
from har_tidy.select_features import select_mean_std

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
TIDY_CSV = _PROJECT_ROOT / "UCI_HAR_tidydata.csv"
RESULTS_DIR = _PROJECT_ROOT / "Results"
OVERVIEW_PNG = RESULTS_DIR / "tidy_overview.png"

OVERVIEW_FEATURES = ["tBodyAcc-mean()-X", "tBodyAcc-mean()-Y", "tBodyAcc-mean()-Z"]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def build_combined(dataset_root: Path) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Steps 1–4.  Returns (merged feature matrix, combined table)."""
    features, activities, subjects = load_and_merge(dataset_root)
    feature_names = load_feature_names(dataset_root)
    selected = select_mean_std(features, feature_names)
    labels = map_activity_codes(activities)
    combined = assemble(selected, labels, subjects)
    return features, combined


def clean_data(
    data_dir: Path = DATA_DIR,
    output_path: Path = TIDY_CSV,
) -> pd.DataFrame:
    """Run the whole pipeline and return the tidy table written to *output_path*."""
    dataset_root = ensure_dataset(data_dir)
    _, combined = build_combined(dataset_root)
    return aggregate_and_export(combined, output_path)


# ---------------------------------------------------------------------------
# Summary printing
# ---------------------------------------------------------------------------

def print_summary(
    features: pd.DataFrame,
    combined: pd.DataFrame,
    tidy: pd.DataFrame,
) -> None:
    n_subjects = combined[SUBJECT_COL].nunique()
    n_activities = combined[ACTIVITY_COL].nunique()
    feats = feature_columns(tidy)

    print("=" * 60)
    print("Tidy Data Summary")
    print("=" * 60)
    print(f"Merged feature matrix : {features.shape}")
    print(f"Selected features     : {len(feats)}")
    print(f"Combined table        : {combined.shape}")
    print(f"Unique subjects       : {n_subjects}")
    print(f"Unique activities     : {n_activities}")
    print(f"Tidy table            : {tidy.shape}  "
          f"(subject + activity + {len(feats)} feature means)")
    if len(tidy) < n_subjects * len(ACTIVITY_LABELS):
        print(f"[WARNING] {n_subjects * len(ACTIVITY_LABELS) - len(tidy)} "
              f"(subject, activity) pairs have no observations")

    print(f"\n{'Activity':<22} {'Rows':>8} {'Subjects':>9}")
    print("-" * 41)
    per_activity = combined.groupby(ACTIVITY_COL, observed=True)[SUBJECT_COL].agg(
        ["size", "nunique"]
    )
    for activity, row in per_activity.iterrows():
        print(f"{activity:<22} {int(row['size']):>8,} {int(row['nunique']):>9}")

    print(f"\nFirst 5 feature names : {feats[:5]}")
    print(f"Last  5 feature names : {feats[-5:]}")


# ---------------------------------------------------------------------------
# Sanity-check plot
# ---------------------------------------------------------------------------

def plot_tidy_overview(tidy: pd.DataFrame, out_png: Path = OVERVIEW_PNG) -> Path | None:
    """Bar chart of body-acceleration means per activity, averaged over
    subjects, with the subject-to-subject standard deviation as error bars.
    """
    cols = [c for c in OVERVIEW_FEATURES if c in tidy.columns]
    if not cols:
        print(f"[WARNING] None of {OVERVIEW_FEATURES} in tidy data; skipping plot.")
        return None

    stats = tidy.groupby(ACTIVITY_COL, observed=True)[cols].agg(["mean", "std"])
    means = stats.xs("mean", axis=1, level=1)
    stds = stats.xs("std", axis=1, level=1).fillna(0.0)

    fig, ax = plt.subplots(figsize=(12, 5), constrained_layout=True)
    means.plot.bar(yerr=stds, ax=ax, capsize=3, rot=20)
    ax.set_xlabel("Activity")
    ax.set_ylabel("Mean value (normalised units)")
    ax.set_title(f"Per-activity averages over {tidy[SUBJECT_COL].nunique()} subjects")
    ax.axhline(0.0, color="black", linewidth=0.6)
    ax.legend(fontsize=8)

    out_png.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_png, dpi=150)
    plt.close(fig)
    print(f"Sanity-check plot saved to: {out_png}")
    return out_png


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    t0 = time.time()

    print("Checking for raw dataset …")
    dataset_root = ensure_dataset(DATA_DIR)

    print("Merging, selecting and labelling …")
    features, combined = build_combined(dataset_root)

    print("Averaging per subject and activity …")
    tidy = aggregate_and_export(combined, TIDY_CSV)
    print()

    print_summary(features, combined, tidy)

    print("\nGenerating sanity-check plot …")
    plot_tidy_overview(tidy)

    print(f"\n[OK] Finished in {time.time() - t0:.1f} s")


if __name__ == "__main__":
    main()
