"""
Concentration-time series for plotting.

Builds the numeric x/y sequences and the axis/layout mapping a plotting
surface (Plotly-style ``data``/``layout``) consumes. Nothing here renders.
"""

import typing
from dataclasses import dataclass, field

import pandas as pd

from .observation import ObservationRecord
from .projector import resolve_nominal_time

FRAME_COLUMNS = ["USUBJID", "TIME", "CONC", "UNIT", "PCTPT", "PCDTC"]


@dataclass
class ConcentrationTrace:
    """
    One plotted series.

    Attributes:
        x: Nominal times, ascending.
        y: Concentrations matching ``x``.
        mode: Display mode, e.g. 'lines+markers'.
        name: Trace name shown in the legend.
    """

    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)
    mode: str = "lines+markers"
    name: str = ""

    def to_dict(self) -> dict[str, typing.Any]:
        return {"x": list(self.x), "y": list(self.y), "mode": self.mode, "name": self.name}


def observations_frame(observations: typing.Sequence[ObservationRecord]) -> pd.DataFrame:
    """
    One row per observation, in input order.
    TIME is the resolved nominal time, NaN when none can be resolved.
    """
    records = [
        {
            "USUBJID": o.usubjid,
            "TIME": resolve_nominal_time(o),
            "CONC": o.pcstresn,
            "UNIT": o.pcstresu,
            "PCTPT": o.pctpt,
            "PCDTC": o.pcdtc,
        }
        for o in observations
    ]
    frame = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    frame["TIME"] = pd.to_numeric(frame["TIME"], errors="coerce").astype(float)
    frame["CONC"] = frame["CONC"].astype(float)
    return frame


def concentration_trace(
        observations: typing.Sequence[ObservationRecord],
        name: typing.Optional[str] = None,
) -> ConcentrationTrace:
    """
    x/y series for one subject. Observations without a resolvable time are
    dropped; the rest are sorted by time, ties kept in source order.
    """
    frame = observations_frame(observations)
    frame = frame.dropna(subset=["TIME"]).sort_values("TIME", kind="stable")
    if name is None:
        name = observations[0].usubjid if observations else ""
    return ConcentrationTrace(
        x=frame["TIME"].tolist(),
        y=frame["CONC"].tolist(),
        name=name,
    )


def concentration_layout(
        usubjid: str, unit: typing.Optional[str] = None, log_scale: bool = False
) -> dict[str, typing.Any]:
    """Title and axes for a concentration-time plot of one subject."""
    y_title = f"Concentration ({unit})" if unit else "Concentration"
    yaxis: dict[str, typing.Any] = {
        "title": y_title,
        "type": "log" if log_scale else "linear",
    }
    if not log_scale:
        yaxis["rangemode"] = "tozero"
    return {
        "title": {"text": f"Concentration-time profile: {usubjid}"},
        "xaxis": {"title": "Nominal time"},
        "yaxis": yaxis,
    }
