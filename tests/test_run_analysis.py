import pandas as pd
import pytest

from har_tidy import acquire
from har_tidy.aggregate import read_tidy
from har_tidy.run_analysis import build_combined, clean_data, plot_tidy_overview, print_summary


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("network used")

    monkeypatch.setattr(acquire.requests, "get", fail)


def test_clean_data_end_to_end(data_dir, tmp_path, synthetic):
    out = tmp_path / "UCI_HAR_tidydata.csv"
    tidy = clean_data(data_dir, out)

    assert out.is_file()
    assert tidy.columns.tolist() == ["subject", "activity"] + synthetic.selected_names
    assert list(zip(tidy["subject"], tidy["activity"].astype(str))) == [
        (1, "WALKING"),
        (1, "WALKING_UPSTAIRS"),
        (1, "STANDING"),
        (2, "WALKING"),
        (2, "WALKING_UPSTAIRS"),
        (3, "LAYING"),
    ]

    # Subject 1 WALKING spans train rows 0, 1 and test row 2 (global row 8).
    first = tidy.iloc[0]
    expected = (synthetic.value(0, 0) + synthetic.value(1, 0) + synthetic.value(8, 0)) / 3
    assert first["tBodyAcc-mean()-X"] == pytest.approx(expected)

    back = read_tidy(out)
    pd.testing.assert_frame_equal(back, tidy, check_exact=False, rtol=1e-12)


def test_misaligned_input_writes_no_output(data_dir, tmp_path):
    from har_tidy.errors import StructuralMismatchError

    y = data_dir / "UCI HAR Dataset" / "test" / "y_test.txt"
    y.write_text(y.read_text() + "1\n")
    out = tmp_path / "UCI_HAR_tidydata.csv"

    with pytest.raises(StructuralMismatchError):
        clean_data(data_dir, out)
    assert not out.exists()


def test_summary_and_plot(dataset_root, tmp_path, capsys):
    features, combined = build_combined(dataset_root)
    tidy = combined.groupby(["subject", "activity"], observed=True).mean().reset_index()

    print_summary(features, combined, tidy)
    out = capsys.readouterr().out
    assert "Selected features     : 4" in out
    assert "Unique subjects       : 3" in out
    assert "LAYING" in out

    png = plot_tidy_overview(tidy, tmp_path / "Results" / "overview.png")
    assert png is not None and png.is_file()


def test_plot_skipped_without_overview_columns(tmp_path):
    tidy = pd.DataFrame({"subject": [1], "activity": ["WALKING"], "x": [0.0]})
    assert plot_tidy_overview(tidy, tmp_path / "p.png") is None
    assert not (tmp_path / "p.png").exists()


def test_output_paths_resolve_from_project_root():
    from pathlib import Path

    from har_tidy import run_analysis

    root = Path(run_analysis.__file__).resolve().parent.parent
    assert run_analysis.TIDY_CSV == root / "UCI_HAR_tidydata.csv"
    assert run_analysis.OVERVIEW_PNG.parent == root / "Results"
