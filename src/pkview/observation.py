"""
Observation domain model.

Defines the ObservationRecord dataclass, one usable row of the SDTM PC
(pharmacokinetic concentrations) domain.
"""

import math
import typing
from dataclasses import dataclass


@dataclass(frozen=True)
class ObservationRecord:
    """
    Represents a single concentration measurement for a subject.

    Attributes:
        usubjid: Subject identifier (USUBJID).
        pcstresn: Concentration in standard units (PCSTRESN), already numeric.
        pctpt: Nominal time point label (PCTPT), e.g. '0.5 h' or 'PRE-DOSE'.
        pctptnum: Numeric nominal time as written in the source (PCTPTNUM).
        pcdtc: Collection date/time, ISO 8601 (PCDTC). Carried, never parsed.
        pcstresu: Concentration unit (PCSTRESU), e.g. 'ng/mL'.
    """

    usubjid: str
    pcstresn: float
    pctpt: typing.Optional[str] = None
    pctptnum: typing.Optional[str] = None
    pcdtc: typing.Optional[str] = None
    pcstresu: typing.Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.usubjid, str):
            raise ValueError(
                f"usubjid must be a string, got {type(self.usubjid).__name__}"
            )
        if isinstance(self.pcstresn, bool) or not isinstance(self.pcstresn, (int, float)):
            raise ValueError(
                f"pcstresn must be a number, got {type(self.pcstresn).__name__}"
            )
        if not math.isfinite(self.pcstresn):
            raise ValueError(f"pcstresn must be finite, got {self.pcstresn!r}")
