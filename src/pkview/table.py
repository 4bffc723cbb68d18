"""
Tabular parser.

Turns comma-delimited text (the CSV exports of CDISC SDTM domains) into an
ordered list of ``{FIELD: value}`` rows.

Rules:
- lines split on ``\\n`` or ``\\r\\n``; empty and whitespace-only lines are dropped
- the first remaining line is the header; names are trimmed and uppercased
- a field may be wrapped in double quotes, which protects embedded commas
- doubled/escaped quotes are NOT supported; see ``split_fields``
- short rows are padded with "" so every header column is present

The parser never raises. Anything odd it meets is reported on the optional
stairval ``Notepad`` and parsing carries on with a best-effort split.
"""

import logging
import re
import typing

from stairval.notepad import Notepad

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'

_LINE_BREAK = re.compile(r"\r?\n")

# scanner states
_FIELD_START = 0
_UNQUOTED = 1
_QUOTED = 2
_AFTER_QUOTE = 3


class FieldSplit(typing.NamedTuple):
    """Fields of one line plus the quoting problems met while scanning it."""
    fields: list[str]
    embedded_quotes: int
    unterminated: bool


def split_lines(text: str) -> list[str]:
    """Split on either line ending and drop blank lines."""
    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def scan_fields(line: str) -> FieldSplit:
    """
    Character-level scan of one line.

    - FIELD_START: a quote opens a quoted span, a delimiter emits "", anything
      else starts an unquoted span
    - UNQUOTED: runs to the next delimiter
    - QUOTED: runs to the next quote, delimiters included verbatim
    - AFTER_QUOTE: a delimiter (or end of line) closes the field; any other
      character means the quote was embedded, so it is kept literally and the
      quoted span continues
    An unterminated quoted span is re-split from its opening quote as plain
    text, the quote kept literally.
    """
    fields: list[str] = []
    buffer: list[str] = []
    embedded = 0
    state = _FIELD_START
    quote_start = 0

    for index, char in enumerate(line):
        if state == _FIELD_START:
            if char == QUOTE:
                state = _QUOTED
                quote_start = index
            elif char == DELIMITER:
                fields.append("")
            else:
                buffer.append(char)
                state = _UNQUOTED
        elif state == _UNQUOTED:
            if char == DELIMITER:
                fields.append("".join(buffer))
                buffer = []
                state = _FIELD_START
            else:
                buffer.append(char)
        elif state == _QUOTED:
            if char == QUOTE:
                state = _AFTER_QUOTE
            else:
                buffer.append(char)
        else:  # _AFTER_QUOTE
            if char == DELIMITER:
                fields.append("".join(buffer))
                buffer = []
                state = _FIELD_START
            else:
                embedded += 1
                buffer.append(QUOTE)
                if char == QUOTE:
                    # `""` inside a quoted span: the second quote may close it
                    state = _AFTER_QUOTE
                else:
                    buffer.append(char)
                    state = _QUOTED

    if state == _QUOTED:
        fields.extend(line[quote_start:].split(DELIMITER))
        return FieldSplit(fields, embedded, True)

    # a trailing delimiter leaves an empty last field
    if state != _FIELD_START or line.endswith(DELIMITER):
        fields.append("".join(buffer))
    return FieldSplit(fields, embedded, False)


def split_fields(line: str) -> list[str]:
    """Split one delimited line into raw (untrimmed, unquoted) field values."""
    return scan_fields(line).fields


def _strip_quotes(name: str) -> str:
    name = name.strip()
    if len(name) >= 2 and name[0] == QUOTE and name[-1] == QUOTE:
        name = name[1:-1]
    return name.strip()


def _report(notepad: typing.Optional[Notepad], where: str, split: FieldSplit) -> None:
    if notepad is None:
        return
    if split.embedded_quotes:
        notepad.add_warning(
            f"{where}: {split.embedded_quotes} embedded quote character(s) inside a quoted field are not supported; kept literally"
        )
    if split.unterminated:
        notepad.add_warning(f"{where}: unterminated quoted field; split on delimiters instead")


def parse_table(text: str, notepad: typing.Optional[Notepad] = None) -> list[dict[str, str]]:
    """
    Parse delimited text into rows keyed by uppercase header name.

    Returns one dict per non-blank data line, in source order. A header-only
    or blank input yields ``[]``.
    """
    lines = split_lines(text)
    if not lines:
        return []

    header_split = scan_fields(lines[0])
    _report(notepad, "Header", header_split)
    columns = [_strip_quotes(name).upper() for name in header_split.fields]

    rows: list[dict[str, str]] = []
    for line_number, line in enumerate(lines[1:], start=1):
        split = scan_fields(line)
        where = f"Row {line_number}"
        _report(notepad, where, split)
        values = split.fields
        if len(values) > len(columns) and notepad is not None:
            notepad.add_warning(
                f"{where}: {len(values)} values for {len(columns)} columns; extra values ignored"
            )

        row: dict[str, str] = {}
        for position, column in enumerate(columns):
            row[column] = values[position].strip() if position < len(values) else ""
        rows.append(row)

    logger.debug("Parsed %d columns and %d rows", len(columns), len(rows))
    return rows
