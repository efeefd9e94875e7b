from collections.abc import Callable
from pathlib import Path

import pytest

from tests.helpers import make_pdf_bytes


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page letter PDF."""
    return make_pdf_bytes(1)


@pytest.fixture()
def five_page_pdf_bytes() -> bytes:
    return make_pdf_bytes(5)


@pytest.fixture()
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Write bytes into the test's temp directory and return the path."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write
