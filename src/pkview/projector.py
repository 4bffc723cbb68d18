"""
Clinical row projector.

Projects generic parsed rows (see ``pkview.table.parse_table``) into typed
DM subjects and PC observations, and resolves a numeric nominal time for an
observation. Every function here is pure: same rows in, same records out.
Nothing raises on bad data; problems are written to the optional Notepad.
"""

import logging
import math
import re
import typing

from stairval.notepad import Notepad

from .observation import ObservationRecord
from .subject import SubjectRecord

logger = logging.getLogger(__name__)

Row = typing.Mapping[str, str]

# SDTM variable names
USUBJID = "USUBJID"
ARM = "ARM"
SEX = "SEX"
AGE = "AGE"
PCTPT = "PCTPT"
PCTPTNUM = "PCTPTNUM"
PCDTC = "PCDTC"
PCSTRESN = "PCSTRESN"
PCSTRESU = "PCSTRESU"

# plain decimal literal: sign, digits and/or fraction, optional exponent
_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
# first run of digits/dots in a label like "0.5 h" or "Day 1"
_TIME_IN_LABEL = re.compile(r"[\d.]+")


def to_number(value: typing.Any) -> typing.Optional[float]:
    """
    Parse a trimmed decimal string into a finite float.

    - None, "", whitespace, text, NaN and infinities -> None
    - "5", "-0.25", ".5", "1e3" -> float
    """
    if value is None:
        return None
    s = str(value).strip()
    if not _NUMBER.match(s):
        return None
    number = float(s)
    return number if math.isfinite(number) else None


def project_subjects(
        rows: typing.Iterable[Row], notepad: typing.Optional[Notepad] = None
) -> list[SubjectRecord]:
    """
    Map DM rows to SubjectRecords, one per row, in source order.

    ARM/SEX/AGE are copied verbatim when the column exists and left as None
    otherwise. Duplicated subjects stay duplicated (see ``unique_subjects``).
    A row with no USUBJID column at all cannot be a subject and is skipped.
    """
    subjects: list[SubjectRecord] = []
    for index, row in enumerate(rows):
        if USUBJID not in row:
            if notepad is not None:
                notepad.add_error(f"Row {index}: no {USUBJID} field; subject skipped")
            continue
        subjects.append(
            SubjectRecord(
                usubjid=row[USUBJID],
                arm=row.get(ARM),
                sex=row.get(SEX),
                age=row.get(AGE),
            )
        )
    logger.debug("Projected %d subjects", len(subjects))
    return subjects


def unique_subjects(subjects: typing.Iterable[SubjectRecord]) -> list[SubjectRecord]:
    """Keep the first record seen for each USUBJID, preserving order."""
    seen: set[str] = set()
    unique: list[SubjectRecord] = []
    for subject in subjects:
        if subject.usubjid in seen:
            continue
        seen.add(subject.usubjid)
        unique.append(subject)
    return unique


def project_observations(
        rows: typing.Iterable[Row],
        usubjid: str,
        notepad: typing.Optional[Notepad] = None,
) -> list[ObservationRecord]:
    """
    Select the PC rows of one subject that carry a usable concentration.

    A row is kept only when USUBJID equals ``usubjid`` exactly (no case or
    whitespace folding) AND PCSTRESN parses as a finite number. Source order
    is preserved.
    """
    observations: list[ObservationRecord] = []
    for index, row in enumerate(rows):
        if row.get(USUBJID) != usubjid:
            continue
        concentration = to_number(row.get(PCSTRESN))
        if concentration is None:
            if notepad is not None:
                notepad.add_warning(
                    f"Row {index}: subject {usubjid!r} has no numeric {PCSTRESN} ({row.get(PCSTRESN)!r}); row excluded"
                )
            continue
        observations.append(
            ObservationRecord(
                usubjid=usubjid,
                pcstresn=concentration,
                pctpt=row.get(PCTPT),
                pctptnum=row.get(PCTPTNUM),
                pcdtc=row.get(PCDTC),
                pcstresu=row.get(PCSTRESU),
            )
        )
    logger.debug("Projected %d observations for subject %s", len(observations), usubjid)
    return observations


def resolve_nominal_time(observation: ObservationRecord) -> typing.Optional[float]:
    """
    Numeric nominal time of an observation, or None.

    1) PCTPTNUM, if it parses as a number (no range check)
    2) else the first run of digits/dots in PCTPT, unit text ignored
       ("0.5 h" -> 0.5); a run that is not a number ("." or "1.2.3") -> None
    3) else None
    PCDTC is never used.
    """
    numeric = to_number(observation.pctptnum)
    if numeric is not None:
        return numeric
    if observation.pctpt:
        match = _TIME_IN_LABEL.search(observation.pctpt)
        if match:
            return to_number(match.group(0))
    return None
