# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: ProductEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlparse

from openai import AsyncOpenAI, OpenAIError

from config.Config import Config
from product.errors import EmbeddingError
from utility.logging_utils import get_class_logger


def split_deployment_url(endpoint: str) -> Tuple[str, Dict[str, str], str]:
    """
    Split a full Azure OpenAI embeddings URL, e.g.

      https://<res>.openai.azure.com/openai/deployments/<model>/embeddings?api-version=2024-10-21

    into (base_url, default_query, deployment). The SDK appends "/embeddings"
    to base_url itself, so it is stripped here.
    """
    parsed = urlparse(endpoint)
    path = parsed.path.rstrip("/")
    if path.endswith("/embeddings"):
        path = path[: -len("/embeddings")]

    segments = [s for s in path.split("/") if s]
    deployment = ""
    if "deployments" in segments:
        idx = segments.index("deployments")
        if idx + 1 < len(segments):
            deployment = segments[idx + 1]

    base_url = f"{parsed.scheme}://{parsed.netloc}{path}"
    query = dict(parse_qsl(parsed.query))
    return base_url, query, deployment or "text-embedding-3-small"


class ProductEmbedder:
    """
    Thin async pass-through to the Azure OpenAI embeddings deployment.
    One remote call per embed(); no batching, no retry, no cache.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Optional[Any] = None,
            logger=None,
    ):
        self.cfg = cfg
        self.dimensions = cfg.embedding_dimensions
        self.logger = logger or get_class_logger(self.__class__)

        base_url, default_query, self.model = split_deployment_url(cfg.openai_azure_embedding_endpoint)

        # Deployment is encoded in base_url; the key travels in the "api-key" header
        self.client = client or AsyncOpenAI(
            api_key=cfg.openai_azure_api_key,
            base_url=base_url,
            default_headers={"api-key": cfg.openai_azure_api_key},
            default_query=default_query,
            max_retries=0,
        )
        self.logger.info(
            "Azure OpenAI embedder initialised (deployment='%s', dimensions=%d)",
            self.model,
            self.dimensions,
        )

    async def embed(self, text: str) -> List[float]:
        """Return the embedding vector for a single text, verbatim from the endpoint."""
        self.logger.debug("embed: text_len=%d (start)", len(text))
        start = time.perf_counter()
        try:
            resp = await self.client.embeddings.create(model=self.model, input=text)
        except OpenAIError as e:
            self.logger.error("Embedding call failed: %s", e)
            raise EmbeddingError(f"Embedding call failed: {e}") from e

        data = getattr(resp, "data", None)
        if not data or getattr(data[0], "embedding", None) is None:
            self.logger.error("Embedding response contained no data")
            raise EmbeddingError("Embedding response contained no data")

        vector = data[0].embedding
        self.logger.debug(
            "embed: dim=%d in %.1f ms (done)",
            len(vector),
            (time.perf_counter() - start) * 1000.0,
        )
        return vector

    async def test_connection(self) -> bool:
        """
        Smoke test: the call completes and the vector has the dimension the
        container's vector policy was created with.
        """
        try:
            vector = await self.embed("Azure OpenAI embedding healthcheck")
        except EmbeddingError:
            return False

        if len(vector) != self.dimensions:
            self.logger.warning(
                "Dimension mismatch: expected %d, got %d.", self.dimensions, len(vector)
            )
            return False
        return True

    async def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()
