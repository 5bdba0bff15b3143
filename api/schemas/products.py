# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: products.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    path: str
    message: str


class SuccessResponse(BaseModel):
    status: Literal["success"] = "success"
    data: Any = None


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
    errors: Optional[List[FieldError]] = None


# Search request shapes, used for OpenAPI only; handlers validate the raw body

class DescriptionSearchRequest(BaseModel):
    queryDescription: str = Field(..., description="Free text matched against product descriptions")
    top: Optional[int] = Field(None, description="Number of results, defaults to 10")


class TagsSearchRequest(BaseModel):
    queryTags: List[str] = Field(..., description="Tags, joined with a space before embedding")
    top: Optional[int] = Field(None, description="Number of results, defaults to 10")


class FeaturesSearchRequest(BaseModel):
    queryFeatures: List[str] = Field(..., description="Features, joined with a space before embedding")
    top: Optional[int] = Field(None, description="Number of results, defaults to 10")
