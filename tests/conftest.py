from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.go_sources import SHAPES_CIRCLE, SHAPES_STRINGER, write_package


@pytest.fixture
def shapes_package(tmp_path: Path) -> Path:
    """Provide a two-file `shapes` package rooted under the pytest tmp_path."""
    return write_package(
        tmp_path / "shapes", {"circle.go": SHAPES_CIRCLE, "stringer.go": SHAPES_STRINGER}
    )
