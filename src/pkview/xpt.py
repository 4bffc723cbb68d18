"""
SAS transport (XPT) conversion.

SDTM datasets are usually delivered as ``dm.xpt`` / ``pc.xpt``. This turns
the bytes of such a file into the comma-delimited text ``parse_table`` reads,
so both formats go through the same parser. Reading the file is the caller's job.
"""

import io
import logging

import pandas as pd

logger = logging.getLogger(__name__)


def _format_value(value) -> str:
    if value is None or pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def read_xpt_frame(data: bytes, encoding: str = "latin-1") -> pd.DataFrame:
    """
    Decode XPT bytes into a DataFrame:
      - header names trimmed and uppercased
      - character variables decoded with ``encoding``
    Raises ValueError for empty input, undecodable bytes, or a dataset with
    no variables or no rows.
    """
    if not data:
        raise ValueError("File is empty")
    try:
        df = pd.read_sas(io.BytesIO(data), format="xport", encoding=encoding)
    except (ValueError, UnicodeDecodeError, EOFError, IndexError) as e:
        raise ValueError(f"Failed to parse XPT file: {e}") from e

    # CLEAN & NORMALIZE headers
    df.columns = df.columns.astype(str).str.strip().str.upper()

    if len(df.columns) == 0:
        raise ValueError("Dataset has no variables")
    if len(df) == 0:
        raise ValueError("Dataset has no rows")

    logger.info("Dataset has %d variables and %d rows", len(df.columns), len(df))
    logger.debug("Headers: %s", list(df.columns))
    return df


def xpt_to_table_text(data: bytes, encoding: str = "latin-1") -> str:
    """
    Convert XPT bytes to comma-delimited text with a header line.
    Values holding a comma, quote or line break are quoted (quotes doubled);
    missing numerics become empty fields and whole numbers lose the '.0'.
    """
    df = read_xpt_frame(data, encoding=encoding)
    text_frame = df.apply(lambda column: column.map(_format_value))
    text = text_frame.to_csv(index=False, lineterminator="\n")
    logger.info("Generated CSV with %d rows, %d characters", len(text_frame), len(text))
    return text
