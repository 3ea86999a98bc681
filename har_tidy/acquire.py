"""
acquire.py — Make sure the raw UCI HAR dataset is on local disk.

If ``data/UCI HAR Dataset/`` is missing, the zip archive is downloaded to a
temporary file inside ``data/``, extracted there, and the temporary file is
removed.  Afterwards every file the loader needs must exist, otherwise the
run aborts with DatasetUnavailableError.

Usage:
    python -m har_tidy.acquire        # from project root
"""

from __future__ import annotations

import os
import shutil
import tempfile
import zipfile
from pathlib import Path

import requests
from tqdm import tqdm

from har_tidy.errors import DatasetUnavailableError

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
DATA_DIR = _PROJECT_ROOT / "data"

# ---------------------------------------------------------------------------
# Remote archive
# ---------------------------------------------------------------------------
DATASET_URL = (
    "https://d396qusza40orc.cloudfront.net/"
    "getdata%2Fprojectfiles%2FUCI%20HAR%20Dataset.zip"
)
DATASET_FOLDER = "UCI HAR Dataset"
DOWNLOAD_TIMEOUT_S = 60
CHUNK_BYTES = 1 << 16

# Relative to the dataset root.
REQUIRED_FILES = (
    "features.txt",
    "train/X_train.txt",
    "train/y_train.txt",
    "train/subject_train.txt",
    "test/X_test.txt",
    "test/y_test.txt",
    "test/subject_test.txt",
)


def missing_files(dataset_root: Path) -> list[str]:
    """Return the entries of REQUIRED_FILES not present under *dataset_root*."""
    return [rel for rel in REQUIRED_FILES if not (dataset_root / rel).is_file()]


def download_archive(url: str, dest: Path) -> Path:
    """Stream *url* into *dest*.  Network or HTTP errors propagate."""
    with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT_S) as resp:
        resp.raise_for_status()
        total = int(resp.headers.get("content-length", 0)) or None
        with open(dest, "wb") as f, tqdm(
            total=total, unit="B", unit_scale=True, desc="UCI HAR archive"
        ) as bar:
            for chunk in resp.iter_content(chunk_size=CHUNK_BYTES):
                f.write(chunk)
                bar.update(len(chunk))
    return dest


def extract_archive(archive: Path, target_dir: Path) -> None:
    """Unpack *archive* into *target_dir*.

    On failure the partially written dataset folder is removed so the next
    run starts from scratch.
    """
    try:
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(target_dir)
    except (zipfile.BadZipFile, OSError):
        shutil.rmtree(target_dir / DATASET_FOLDER, ignore_errors=True)
        raise


def ensure_dataset(
    target_dir: Path = DATA_DIR,
    url: str = DATASET_URL,
) -> Path:
    """Return the dataset root, downloading and extracting it if needed.

    Parameters
    ----------
    target_dir : Path
        Directory that holds (or will hold) ``UCI HAR Dataset/``.
    url : str
        Location of the zip archive.

    Raises
    ------
    DatasetUnavailableError
        Download or extraction failed, or expected files are missing.
    """
    target_dir = Path(target_dir)
    dataset_root = target_dir / DATASET_FOLDER

    if dataset_root.is_dir():
        missing = missing_files(dataset_root)
        if missing:
            raise DatasetUnavailableError(
                f"[acquire] {dataset_root} is incomplete, missing: {missing}. "
                f"Delete the folder to download it again."
            )
        print(f"[OK] Dataset already present: {dataset_root}")
        return dataset_root

    print(f"Downloading dataset from: {url}")
    tmp_path: Path | None = None
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(suffix=".zip", dir=target_dir)
        os.close(fd)
        tmp_path = Path(tmp_name)
        download_archive(url, tmp_path)
        extract_archive(tmp_path, target_dir)
    except requests.RequestException as e:
        raise DatasetUnavailableError(
            f"[acquire] dataset unavailable, download failed: {e}"
        ) from e
    except zipfile.BadZipFile as e:
        raise DatasetUnavailableError(
            f"[acquire] dataset unavailable, corrupt archive from {url}: {e}"
        ) from e
    except OSError as e:
        raise DatasetUnavailableError(
            f"[acquire] dataset unavailable, filesystem error: {e}"
        ) from e
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()

    missing = missing_files(dataset_root)
    if missing:
        shutil.rmtree(dataset_root, ignore_errors=True)
        raise DatasetUnavailableError(
            f"[acquire] archive did not contain the expected files, "
            f"missing under {dataset_root}: {missing}"
        )
    print(f"[OK] Dataset extracted to: {dataset_root}")
    return dataset_root


def main() -> None:
    ensure_dataset()


if __name__ == "__main__":
    main()
