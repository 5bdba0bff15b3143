# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str


class DependencyResults(BaseModel):
    cosmos_health: bool = Field(..., description="Products container is readable")
    embedding_health: bool = Field(..., description="Embedding deployment returns vectors of the configured size")


class CheckSummary(BaseModel):
    total: int
    passed: int
    failed: int


class DeepHealthResponse(BaseModel):
    status: Literal["ok", "error"]
    results: DependencyResults
    summary: CheckSummary
