# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: ProductValidator
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from product.Product import (
    DescriptionQuery,
    FeaturesQuery,
    Product,
    ProductIdQuery,
    TagsQuery,
    VectorPayload,
)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass
class ValidationResult(Generic[T]):
    """
    Tagged result of a validation call:
      ok=True  -> value holds the normalized value, errors is empty
      ok=False -> value is None, errors lists every violated field
    """
    value: Optional[T] = None
    errors: List[Dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, errors: List[Dict[str, str]]) -> "ValidationResult[T]":
        return cls(errors=errors)


def field_errors(exc: ValidationError, prefix: tuple = ()) -> List[Dict[str, str]]:
    """Flatten a pydantic ValidationError into [{"path", "message"}, ...]."""
    out: List[Dict[str, str]] = []
    for err in exc.errors():
        loc = prefix + tuple(err.get("loc", ()))
        out.append({
            "path": ".".join(str(part) for part in loc),
            "message": err.get("msg", "Invalid value"),
        })
    return out


def _validate(model: Type[M], payload: Any) -> ValidationResult[M]:
    if not isinstance(payload, dict):
        return ValidationResult.failure([{
            "path": "",
            "message": f"Expected object, received {type(payload).__name__}",
        }])
    try:
        return ValidationResult.success(model.model_validate(payload))
    except ValidationError as e:
        return ValidationResult.failure(field_errors(e))


def validate_product(payload: Any) -> ValidationResult[Product]:
    """Validate an inbound product payload, reporting every invalid field."""
    return _validate(Product, payload)


def validate_product_id(value: Any) -> ValidationResult[str]:
    res = _validate(ProductIdQuery, {"id": value})
    if not res.ok:
        return ValidationResult.failure(res.errors)
    return ValidationResult.success(res.value.id)


def validate_query_description(value: Any) -> ValidationResult[str]:
    res = _validate(DescriptionQuery, {"queryDescription": value})
    if not res.ok:
        return ValidationResult.failure(res.errors)
    return ValidationResult.success(res.value.query_description)


def validate_query_tags(value: Any) -> ValidationResult[List[str]]:
    res = _validate(TagsQuery, {"queryTags": value})
    if not res.ok:
        return ValidationResult.failure(res.errors)
    return ValidationResult.success(res.value.query_tags)


def validate_query_features(value: Any) -> ValidationResult[List[str]]:
    res = _validate(FeaturesQuery, {"queryFeatures": value})
    if not res.ok:
        return ValidationResult.failure(res.errors)
    return ValidationResult.success(res.value.query_features)


def validate_vector(value: Any, dimensions: Optional[int] = None) -> ValidationResult[List[float]]:
    res = _validate(VectorPayload, {"vector": value})
    if not res.ok:
        return ValidationResult.failure(res.errors)

    vector = res.value.vector
    if dimensions is not None and len(vector) != dimensions:
        return ValidationResult.failure([{
            "path": "vector",
            "message": f"Expected {dimensions} dimensions, received {len(vector)}",
        }])
    return ValidationResult.success(vector)
