# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: HealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict

from api.schemas.health import CheckSummary, DeepHealthResponse, DependencyResults
from utility.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class HealthService:
    """
    Runs smoke tests against the two cloud dependencies (Cosmos DB and the
    embedding deployment). Returns DeepHealthResponse for API layer
    """

    store: Any
    embedder: Any

    async def deep_health(self) -> DeepHealthResponse:
        results: Dict[str, bool] = {}

        for name, check in (
            ("cosmos_health", self.store.test_connection),
            ("embedding_health", self.embedder.test_connection),
        ):
            try:
                results[name] = bool(await check())
            except Exception as e:
                logger.exception("%s raised an exception: %s", name, e)
                results[name] = False
            logger.info("%s: %s", name, "PASS" if results[name] else "FAIL")

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        return DeepHealthResponse(
            status="ok" if failed == 0 else "error",
            results=DependencyResults(**results),
            summary=CheckSummary(total=total, passed=passed, failed=failed),
        )
