"""Typed schema models for the /api/graphs payload and derived chart points."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ProposalEvent(BaseModel):
    """Number of proposals in `category` holding a status during month/year."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    category: str
    month: int = Field(ge=1, le=12)
    year: int
    count: int = Field(ge=0)


class ProposalStatusGroup(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    status: str
    proposals: List[ProposalEvent] = Field(default_factory=list, alias="eips")


class SeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    period: str
    value: int = Field(ge=0)


class GraphsDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    schema_version: str = "1.0"
    fetched_at: str = ""
    source_url: str = ""
    groups: List[ProposalStatusGroup] = Field(default_factory=list)
    rejected: List[str] = Field(default_factory=list)
