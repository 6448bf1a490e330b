from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable, Mapping

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from tests.helpers import dedent
from tikibase.database.tikibase import Tikibase
from tikibase.issue import Issue


@pytest.fixture
def write_files(tmp_path: Path) -> Callable[[Mapping[str, object]], Path]:
    """Writes the given files below tmp_path, dicts are stored as JSON."""

    def _write(files: Mapping[str, object]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                path.write_text(dedent(content), encoding="utf-8")
            else:
                path.write_text(json.dumps(content, indent=2) + "\n", encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def load_tikibase(write_files) -> Callable[[Mapping[str, object]], tuple[Tikibase, list[Issue]]]:
    def _load(files: Mapping[str, object]) -> tuple[Tikibase, list[Issue]]:
        root = write_files(files)
        return Tikibase.load(root)

    return _load
