# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from typing import Optional

from config.Config import Config
from embedding.ProductEmbedder import ProductEmbedder
from services.HealthService import HealthService
from services.ProductService import ProductService
from utility.logging_utils import get_class_logger
from vectorstore.CosmosProductStore import CosmosProductStore
from vectorstore.ProductStore import ProductStore


class AppContainer:
    """
    Owns object instantiation and application wiring (composition root).
    Services are handed to route handlers via FastAPI dependencies; the
    store is initialised once by start() before any request is served.
    """

    def __init__(
            self,
            cfg: Optional[Config] = None,
            *,
            store: Optional[ProductStore] = None,
            embedder: Optional[ProductEmbedder] = None,
    ) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration (raises ConfigError on missing/malformed env)
        self.cfg = cfg or Config.from_env()
        self.logger.info("Configuration loaded: %s", self.cfg.summary())

        # Core infrastructure
        self.embedder = embedder or ProductEmbedder(cfg=self.cfg)
        self.store = store or CosmosProductStore(cfg=self.cfg)

        # Return a singleton ProductService instance
        self.product_service = ProductService(
            store=self.store,
            embedder=self.embedder,
            dimensions=self.cfg.embedding_dimensions,
        )

        # Return a singleton HealthService instance
        self.health_service = HealthService(
            store=self.store,
            embedder=self.embedder,
        )

    async def start(self) -> None:
        await self.store.initialize()
        self.logger.info("AppContainer started")

    async def stop(self) -> None:
        await self.store.close()
        await self.embedder.close()
        self.logger.info("AppContainer stopped")
