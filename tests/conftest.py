from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the repo root (containing `punct_educator/`) is importable when pytest
# picks `tests/` as the rootdir (e.g., single-file runs).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def _no_file_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # Never leave log files behind in the checkout.
    monkeypatch.setenv("PUNCT_EDUCATOR_DISABLE_FILE_LOG", "1")
