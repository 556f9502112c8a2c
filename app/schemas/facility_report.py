"""
app/schemas/facility_report.py

GeoJSON FeatureCollection schema of the published facility report.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

CRS84 = "urn:ogc:def:crs:OGC:1.3:CRS84"


class AgeClassStatResponse(BaseModel):
    """
    Latest figures of one age class. "-" marks a kind with no data.
    """

    age_class: str
    acceptance_count: str
    children_count: str
    waiting_count: str


class FacilityProperties(BaseModel):
    id: int
    name: str
    stats: list[AgeClassStatResponse] = Field(default_factory=list)


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(..., min_length=2, max_length=3)


class FacilityFeature(BaseModel):
    type: Literal["Feature"] = "Feature"
    properties: FacilityProperties
    geometry: PointGeometry


class CRSProperties(BaseModel):
    name: str = CRS84


class NamedCRS(BaseModel):
    type: Literal["name"] = "name"
    properties: CRSProperties = Field(default_factory=CRSProperties)


class FacilityFeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    crs: NamedCRS = Field(default_factory=NamedCRS)
    features: list[FacilityFeature] = Field(default_factory=list)
