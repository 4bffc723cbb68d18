"""
XPT conversion tests. ``pd.read_sas`` is patched so no transport file is needed.
"""

from unittest.mock import patch

import pandas as pd
import pytest

from pkview.projector import project_observations
from pkview.table import parse_table
from pkview.xpt import read_xpt_frame, xpt_to_table_text


def _pc_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "usubjid ": ["S1", "S1"],
            "PCTPT": ["0.5 h", "Dose, oral"],
            "PCTPTNUM": [0.5, float("nan")],
            "PCSTRESN": [12.0, 3.25],
        }
    )


def test_xpt_to_table_text_round_trips_through_parser():
    with patch("pkview.xpt.pd.read_sas", return_value=_pc_frame()):
        text = xpt_to_table_text(b"HEADER RECORD")
    assert text.splitlines()[0] == "USUBJID,PCTPT,PCTPTNUM,PCSTRESN"
    rows = parse_table(text)
    assert rows[0] == {"USUBJID": "S1", "PCTPT": "0.5 h", "PCTPTNUM": "0.5", "PCSTRESN": "12"}
    assert rows[1]["PCTPT"] == "Dose, oral"
    assert rows[1]["PCTPTNUM"] == ""
    assert [o.pcstresn for o in project_observations(rows, "S1")] == [12.0, 3.25]


def test_empty_bytes_rejected():
    with pytest.raises(ValueError, match="empty"):
        read_xpt_frame(b"")


def test_garbage_bytes_rejected():
    with pytest.raises(ValueError):
        read_xpt_frame(b"not a transport file" * 10)


def test_no_rows_rejected():
    empty = pd.DataFrame({"USUBJID": pd.Series([], dtype=object)})
    with patch("pkview.xpt.pd.read_sas", return_value=empty):
        with pytest.raises(ValueError, match="no rows"):
            read_xpt_frame(b"x")


def test_no_variables_rejected():
    with patch("pkview.xpt.pd.read_sas", return_value=pd.DataFrame()):
        with pytest.raises(ValueError, match="no variables"):
            read_xpt_frame(b"x")
