from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

PointId = str | int


class LatLng(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


Polygon = list[LatLng]
OutageSet = dict[PointId, Polygon]


class OutagePolygon(BaseModel):
    id: PointId
    coords: Polygon = []


class OutageClassification(BaseModel):
    added: list[OutagePolygon] = []
    ended: list[OutagePolygon] = []
    existing: list[OutagePolygon] = []


@dataclass(frozen=True)
class Baseline:
    """Start-of-day outage snapshot and the local date it was taken."""
    outages: OutageSet
    reset_date: date


class BaselineFile(BaseModel):
    """On-disk shape of the persisted baseline."""
    model_config = ConfigDict(populate_by_name=True)

    initial_outages: list[tuple[PointId, Polygon]] = Field(default=[], alias="initialOutages")
    last_reset_date: str = Field(alias="lastResetDate")
