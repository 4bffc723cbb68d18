import os

import pytest

from pkview.table import parse_table


@pytest.fixture(scope="session")
def fpath_test_dir() -> str:
    """
    Path to `tests/data/` folder.
    """
    return os.path.join(os.path.dirname(__file__), "data")


def _read_text(path: str) -> str:
    # newline="" keeps the CRLF endings of pc.csv intact
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


@pytest.fixture(scope="session")
def dm_text(fpath_test_dir: str) -> str:
    """DM export: 4 data rows (one duplicate subject), quoted ARM with a comma, LF endings."""
    return _read_text(os.path.join(fpath_test_dir, "dm.csv"))


@pytest.fixture(scope="session")
def pc_text(fpath_test_dir: str) -> str:
    """PC export with CRLF endings, a '<LLOQ' result, a blank result and a lowercase id."""
    return _read_text(os.path.join(fpath_test_dir, "pc.csv"))


@pytest.fixture
def dm_rows(dm_text: str) -> list[dict[str, str]]:
    return parse_table(dm_text)


@pytest.fixture
def pc_rows(pc_text: str) -> list[dict[str, str]]:
    return parse_table(pc_text)
