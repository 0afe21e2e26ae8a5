"""Pydantic schemas for partition catalog responses."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class PartitionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    display_name: str = Field(..., alias="displayName")


class PartitionListResponse(BaseModel):
    partitions: List[PartitionResponse] = Field(default_factory=list)
