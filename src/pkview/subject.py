"""
Subject domain model.

Defines the SubjectRecord dataclass, one row of the SDTM DM (demographics) domain.
"""

import typing
from dataclasses import dataclass


@dataclass(frozen=True)
class SubjectRecord:
    """
    Represents a trial subject as listed in DM.

    Attributes:
        usubjid: Unique subject identifier (USUBJID).
        arm: Planned treatment arm label (ARM), if the column exists.
        sex: Sex code (SEX), e.g. 'M' / 'F' / 'U'.
        age: Age as written in the source (AGE); not converted.

    ``None`` means the column was absent, ``""`` means present but blank.
    """

    usubjid: str
    arm: typing.Optional[str] = None
    sex: typing.Optional[str] = None
    age: typing.Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.usubjid, str):
            raise ValueError(
                f"usubjid must be a string, got {type(self.usubjid).__name__}"
            )
