# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: CosmosProductStore
# -----------------------------------------------------------------------------
import asyncio
from typing import Any, Dict, List, Optional, Sequence

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient
from azure.cosmos.exceptions import (
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from config.Config import Config
from product.Product import PRODUCT_PROJECTION, VectorField
from product.errors import ProductConflictError, StoreNotInitializedError
from utility.logging_utils import get_class_logger
from vectorstore.ProductStore import ProductStore

_PROJECTION_SQL = ", ".join(f"c.{name}" for name in PRODUCT_PROJECTION)


def vector_embedding_policy(dimensions: int) -> Dict[str, Any]:
    return {
        "vectorEmbeddings": [
            {
                "path": f.path,
                "dataType": "float32",
                "dimensions": dimensions,
                "distanceFunction": "cosine",
            }
            for f in VectorField
        ]
    }


def indexing_policy() -> Dict[str, Any]:
    # vector paths stay out of the range index
    return {
        "indexingMode": "consistent",
        "automatic": True,
        "includedPaths": [{"path": "/*"}],
        "excludedPaths": [
            {"path": '/"_etag"/?'},
            *({"path": f"{f.path}/*"} for f in VectorField),
        ],
        "vectorIndexes": [{"path": f.path, "type": "diskANN"} for f in VectorField],
    }


def search_query(vector_field: VectorField) -> str:
    # only the field name is interpolated, and it comes from a closed enum
    field = f"c.{VectorField(vector_field).value}"
    return (
        f"SELECT TOP @top {_PROJECTION_SQL}, "
        f"VectorDistance({field}, @queryVector) AS similarityScore "
        f"FROM c ORDER BY VectorDistance({field}, @queryVector)"
    )


class CosmosProductStore(ProductStore):
    """
    Product documents in an Azure Cosmos DB container with one vector index
    per derived vector field. Ranking is evaluated by Cosmos (VectorDistance);
    this class only builds parameterized queries.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Optional[Any] = None,
            logger=None,
    ) -> None:
        self.cfg = cfg
        self.database_name = cfg.cosmos_database
        self.container_name = cfg.cosmos_container
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info(
            "Initialising Cosmos client (endpoint=%s, database=%s)",
            cfg.cosmos_endpoint,
            cfg.cosmos_database,
        )
        self.client = client or CosmosClient(cfg.cosmos_endpoint, credential=cfg.cosmos_key)

        self._container = None
        self._initializing: Optional[asyncio.Future] = None

    @property
    def initialized(self) -> bool:
        return self._container is not None

    async def initialize(self) -> None:
        """
        Create database and container if missing. Safe to call concurrently:
        every caller awaits the same in-flight initialisation, so the
        container-creation call is issued at most once.
        """
        if self._container is not None:
            return
        if self._initializing is None:
            self._initializing = asyncio.ensure_future(self._init())
        await self._initializing

    async def _init(self) -> None:
        try:
            database = await self.client.create_database_if_not_exists(id=self.database_name)
            container = await database.create_container_if_not_exists(
                id=self.container_name,
                partition_key=PartitionKey(path="/id", kind="Hash", version=2),
                indexing_policy=indexing_policy(),
                vector_embedding_policy=vector_embedding_policy(self.cfg.embedding_dimensions),
            )
        except Exception as e:
            self.logger.error("Error initialising Cosmos DB: %s", e, exc_info=True)
            raise

        self._container = container
        self.logger.info(
            "Cosmos container ready: '%s' (database=%s, dimensions=%d)",
            self.container_name,
            self.database_name,
            self.cfg.embedding_dimensions,
        )

    def _require_container(self):
        if self._container is None:
            raise StoreNotInitializedError(
                "CosmosProductStore has not been initialized. Call initialize() first."
            )
        return self._container

    async def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Cosmos and read our container?
        """
        try:
            await self._require_container().read()
            return True
        except (StoreNotInitializedError, CosmosHttpResponseError) as e:
            self.logger.error("Cosmos connection failed: %s", e)
            return False

    async def create(self, product: Dict[str, Any]) -> Dict[str, Any]:
        container = self._require_container()
        product_id = product.get("id")
        self.logger.info("create: id='%s' (start)", product_id)
        try:
            created = await container.create_item(body=product)
        except CosmosResourceExistsError as e:
            self.logger.warning("create: id='%s' -> conflict", product_id)
            raise ProductConflictError(str(product_id)) from e

        self.logger.info("create: id='%s' (done)", product_id)
        return created

    async def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        container = self._require_container()
        try:
            return await container.read_item(item=product_id, partition_key=product_id)
        except CosmosResourceNotFoundError:
            self.logger.info("get_by_id: id='%s' -> not found", product_id)
            return None

    async def list_all(self) -> List[Dict[str, Any]]:
        container = self._require_container()
        query = f"SELECT {_PROJECTION_SQL} FROM c"
        items = [item async for item in container.query_items(query=query)]
        self.logger.info("list_all: %d products", len(items))
        return items

    async def search_by_vector(
            self,
            vector_field: VectorField,
            query_vector: Sequence[float],
            top: int = 10,
    ) -> List[Dict[str, Any]]:
        container = self._require_container()
        self.logger.info(
            "Vector search on '%s' (top=%d, dim=%d)",
            VectorField(vector_field).value,
            top,
            len(query_vector),
        )
        parameters = [
            {"name": "@queryVector", "value": list(query_vector)},
            {"name": "@top", "value": top},
        ]
        items = [
            item
            async for item in container.query_items(
                query=search_query(vector_field),
                parameters=parameters,
            )
        ]
        self.logger.info(
            "Vector search complete: returned %d results (requested %d)", len(items), top
        )
        return items

    async def close(self) -> None:
        await self.client.close()
