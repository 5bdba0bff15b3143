# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: ProductStore
# -----------------------------------------------------------------------------

from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from product.Product import VectorField


@runtime_checkable
class ProductStore(Protocol):
    async def initialize(self) -> None:
        ...

    async def test_connection(self) -> bool:
        ...

    async def create(self, product: Dict[str, Any]) -> Dict[str, Any]:
        ...

    async def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        ...

    async def list_all(self) -> List[Dict[str, Any]]:
        ...

    async def search_by_vector(
            self,
            vector_field: VectorField,
            query_vector: Sequence[float],
            top: int = 10,
    ) -> List[Dict[str, Any]]:
        ...

    async def close(self) -> None:
        ...
