# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: ProductService.py
# -----------------------------------------------------------------------------
import logging
import uuid
from typing import Any, Dict, List, Optional

from embedding.ProductEmbedder import ProductEmbedder
from product.Product import Product, VectorField
from product.ProductValidator import (
    ValidationResult,
    validate_product,
    validate_product_id,
    validate_query_description,
    validate_query_features,
    validate_query_tags,
    validate_vector,
)
from product.errors import EmbeddingError, ProductNotFoundError, ProductValidationError
from vectorstore.ProductStore import ProductStore

DEFAULT_TOP = 10


def normalize_top(top: Any) -> int:
    """Positive integers pass through verbatim; anything else falls back to 10."""
    if isinstance(top, bool):
        return DEFAULT_TOP
    if isinstance(top, float) and top.is_integer():
        top = int(top)
    if not isinstance(top, int) or top <= 0:
        return DEFAULT_TOP
    return top


class ProductService:
    """
    Product facade used by FastAPI
    - validate inbound payloads
    - generate description/tags/features vectors via ProductEmbedder
    - persist and query via ProductStore (ranking happens in the store)
    """

    def __init__(self,
                 *,
                 store: ProductStore,
                 embedder: ProductEmbedder,
                 dimensions: Optional[int] = None,
                 logger: logging.Logger | None = None, ) -> None:
        self.store = store
        self.embedder = embedder
        # every stored or queried vector must match the container's vector index
        self.dimensions = dimensions or embedder.dimensions

        self.logger = logger or logging.getLogger(__name__)

        self.logger.info("ProductService initialised successfully (store=%s, embedder=%s, dimensions=%d)",
                         type(store).__name__, type(embedder).__name__, self.dimensions)

    @staticmethod
    def _unwrap(result: ValidationResult, message: str):
        if not result.ok:
            raise ProductValidationError(message, errors=result.errors)
        return result.value

    async def _embed(self, text: str) -> List[float]:
        result = validate_vector(await self.embedder.embed(text), self.dimensions)
        if not result.ok:
            raise EmbeddingError(f"Embedding endpoint returned an invalid vector: {result.errors}")
        return result.value

    def _check_supplied_vectors(self, product: Product) -> None:
        errors = []
        for vector_field in VectorField:
            vector = product.get_vector(vector_field)
            if vector is not None and len(vector) != self.dimensions:
                errors.append({
                    "path": vector_field.value,
                    "message": f"Expected {self.dimensions} dimensions, received {len(vector)}",
                })
        if errors:
            raise ProductValidationError("Invalid product payload", errors=errors)

    async def create_product(self, payload: Any) -> Dict[str, Any]:
        product = self._unwrap(validate_product(payload), "Invalid product payload")
        self._check_supplied_vectors(product)

        if not product.id:
            product.id = str(uuid.uuid4())
        self.logger.info("create_product: id='%s' (start)", product.id)

        # sequential; a failed embedding aborts before the store write
        sources = (
            (VectorField.DESCRIPTION, product.description),
            (VectorField.TAGS, " ".join(product.tags)),
            (VectorField.FEATURES, product.features),
        )
        for vector_field, text in sources:
            if text:
                product.set_vector(vector_field, await self._embed(text))

        created = await self.store.create(product.to_document())
        self.logger.info("create_product: id='%s' (done)", product.id)
        return created

    async def list_products(self) -> List[Dict[str, Any]]:
        return await self.store.list_all()

    async def get_product(self, product_id: Any) -> Dict[str, Any]:
        valid_id = self._unwrap(
            validate_product_id(product_id),
            "Invalid product ID, should be a valid UUID",
        )
        product = await self.store.get_by_id(valid_id)
        if product is None:
            raise ProductNotFoundError(valid_id)
        return product

    async def _search(
            self,
            vector_field: VectorField,
            text: str,
            top: Any,
    ) -> List[Dict[str, Any]]:
        query_vector = await self._embed(text)

        top_results = normalize_top(top)
        self.logger.info(
            "search: field='%s' text_len=%d top=%d (start)", vector_field.value, len(text), top_results
        )
        results = await self.store.search_by_vector(vector_field, query_vector, top_results)
        self.logger.info("search: field='%s' -> %d results (done)", vector_field.value, len(results))
        return results

    async def search_by_description(self, body: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Free-text query: {"queryDescription": str, "top"?: int}."""
        description = self._unwrap(
            validate_query_description(body.get("queryDescription")),
            'Invalid description. It should be a string ie "queryDescription" : "item".',
        )
        return await self._search(VectorField.DESCRIPTION, description, body.get("top"))

    async def search_by_tags(self, body: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Token query: {"queryTags": [str, ...], "top"?: int}, joined with a space."""
        tags = self._unwrap(
            validate_query_tags(body.get("queryTags")),
            'Invalid tags. It should be an array of strings ie "queryTags" : ["item","item2"].',
        )
        return await self._search(VectorField.TAGS, " ".join(tags), body.get("top"))

    async def search_by_features(self, body: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Token query: {"queryFeatures": [str, ...], "top"?: int}, joined with a space."""
        features = self._unwrap(
            validate_query_features(body.get("queryFeatures")),
            'Invalid features. It should be an array of strings ie "queryFeatures" : ["item","item2"].',
        )
        return await self._search(VectorField.FEATURES, " ".join(features), body.get("top"))
