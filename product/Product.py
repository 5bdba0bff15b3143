# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: Product
# -----------------------------------------------------------------------------
from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    PlainValidator,
    StrictStr,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_uuid(value: str) -> str:
    if not UUID_PATTERN.match(value):
        raise PydanticCustomError("uuid", "Invalid uuid")
    return value


def _check_url(value: str) -> str:
    # validate only; the caller's spelling of the URL is what gets stored
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url", "Invalid url") from None
    return value


def _check_number(value: Any) -> Union[int, float]:
    # bool is an int subclass but never a number in a JSON payload
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError(
            "number_type",
            "Expected number, received {received}",
            {"received": type(value).__name__},
        )
    return value


UuidStr = Annotated[StrictStr, AfterValidator(_check_uuid)]
UrlStr = Annotated[StrictStr, AfterValidator(_check_url)]
Number = Annotated[Union[int, float], PlainValidator(_check_number)]
Vector = List[Number]


class VectorField(str, Enum):
    """Vector-indexed fields of a product document and their source text."""

    DESCRIPTION = "descriptionVector"
    TAGS = "tagsVector"
    FEATURES = "featuresVector"

    @property
    def path(self) -> str:
        return f"/{self.value}"


# Fields returned by list and search queries; vectors are deliberately left out
PRODUCT_PROJECTION: List[str] = [
    "id", "name", "brand", "sku", "category", "price", "currency", "stock",
    "description", "features", "rating", "reviewsCount", "tags", "imageUrl",
    "manufacturer", "model", "releaseDate", "warranty", "dimensions",
    "color", "material", "origin",
]


_VECTOR_ATTRS: Dict[VectorField, str] = {
    VectorField.DESCRIPTION: "description_vector",
    VectorField.TAGS: "tags_vector",
    VectorField.FEATURES: "features_vector",
}


class _CamelModel(BaseModel):
    # camelCase only; the Python field names are not accepted as input
    model_config = ConfigDict(alias_generator=to_camel)


class Dimensions(_CamelModel):
    weight: StrictStr
    width: StrictStr
    height: StrictStr
    depth: StrictStr


class Product(_CamelModel):
    """A product record as accepted on create and stored in Cosmos DB."""

    # "model" is a product attribute here, not a pydantic namespace
    model_config = ConfigDict(
        alias_generator=to_camel,
        protected_namespaces=(),
    )

    # may be omitted, but an explicit null is rejected
    id: UuidStr = None
    name: StrictStr
    brand: StrictStr
    sku: StrictStr
    category: StrictStr
    price: Number
    currency: StrictStr
    stock: Number
    description: StrictStr
    features: StrictStr
    rating: Number
    reviews_count: Number
    tags: List[StrictStr]
    image_url: UrlStr
    manufacturer: StrictStr
    model: StrictStr
    release_date: StrictStr
    warranty: StrictStr
    dimensions: Optional[Dimensions] = None
    color: StrictStr
    material: StrictStr
    origin: StrictStr

    description_vector: Optional[Vector] = None
    tags_vector: Optional[Vector] = None
    features_vector: Optional[Vector] = None

    def get_vector(self, vector_field: VectorField) -> Optional[List[float]]:
        return getattr(self, _VECTOR_ATTRS[vector_field])

    def set_vector(self, vector_field: VectorField, vector: List[float]) -> None:
        setattr(self, _VECTOR_ATTRS[vector_field], vector)

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready camelCase document; unset optionals are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProductIdQuery(BaseModel):
    id: UuidStr


class DescriptionQuery(_CamelModel):
    query_description: StrictStr


class TagsQuery(_CamelModel):
    query_tags: List[StrictStr]


class FeaturesQuery(_CamelModel):
    query_features: List[StrictStr]


class VectorPayload(BaseModel):
    vector: Vector
