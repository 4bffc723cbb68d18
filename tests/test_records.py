import math

import pytest

from pkview.observation import ObservationRecord
from pkview.subject import SubjectRecord


def test_valid_subject_instantiation():
    """A subject only needs an identifier."""
    s = SubjectRecord(usubjid="PK-101-001")
    assert s.arm is None and s.sex is None and s.age is None


def test_subject_identifier_must_be_string():
    with pytest.raises(ValueError):
        SubjectRecord(usubjid=None)


def test_records_are_frozen():
    s = SubjectRecord(usubjid="S1")
    with pytest.raises(AttributeError):
        s.usubjid = "S2"


@pytest.mark.parametrize("bad", [math.nan, math.inf, "5.2", None, True])
def test_observation_concentration_must_be_finite_number(bad):
    """Only finite numbers are valid concentrations."""
    with pytest.raises(ValueError):
        ObservationRecord(usubjid="S1", pcstresn=bad)
