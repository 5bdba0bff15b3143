# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: errors.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Dict, List, Optional


class ProductApiError(Exception):
    """Base class for all errors raised by the products API."""


class ProductValidationError(ProductApiError):
    """
    Client input failed validation. Carries every field-level error as
    {"path": "<dotted.path>", "message": "<text>"}.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ProductNotFoundError(ProductApiError):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' not found")
        self.product_id = product_id


class ProductConflictError(ProductApiError):
    """A product with the same id already exists in the store."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' already exists")
        self.product_id = product_id


class EmbeddingError(ProductApiError):
    """The embedding endpoint failed or returned something unusable."""


class StoreNotInitializedError(ProductApiError):
    """A store operation was attempted before initialize() completed."""
