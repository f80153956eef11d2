# shelfcast/services/date_estimator.py
"""
Estimation Orchestrator

Flow:
1. Ask the oracle once
2. On any oracle failure, resolve horizons from the rule table
3. Turn horizons into dates: clamp negatives, cap expiration at
   MAX_SHELF_LIFE_DAYS, restock never later than the capped expiration
"""

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Union

from shelfcast.core.config import settings
from shelfcast.models.estimation import (
    MAX_SHELF_LIFE_DAYS,
    EstimateSource,
    EstimationInput,
    EstimationResult,
)
from shelfcast.services.heuristic_resolver import resolve
from shelfcast.services.oracle_client import OracleClient, OracleEstimate
from shelfcast.services.rule_table import HorizonPair

logger = logging.getLogger(__name__)


def apply_horizon(purchased_at: date, horizon: HorizonPair, source: EstimateSource) -> EstimationResult:
    """Pure date math shared by both estimation paths"""
    # Anything past the cap cannot change the outcome; bounding first
    # keeps absurd oracle values from overflowing date arithmetic.
    shelf_life_days = min(max(horizon.shelf_life_days, 0), MAX_SHELF_LIFE_DAYS)
    restock_days = min(max(horizon.restock_days, 0), MAX_SHELF_LIFE_DAYS)

    raw_expiration = purchased_at + timedelta(days=shelf_life_days)
    raw_restock = purchased_at + timedelta(days=restock_days)
    max_expiration = purchased_at + timedelta(days=MAX_SHELF_LIFE_DAYS)

    final_expiration = min(raw_expiration, max_expiration)
    final_restock = min(final_expiration, raw_restock)

    return EstimationResult(
        estimated_expiration_at=final_expiration,
        estimated_restock_at=final_restock,
        source=source
    )


class DateEstimator:
    """
    Estimates expiration and restock dates for purchased items

    The oracle is optional: with no oracle configured every estimate is
    heuristic.
    """

    def __init__(self, oracle: Optional[OracleClient] = None, max_concurrency: Optional[int] = None):
        self.oracle = oracle if oracle is not None else OracleClient()
        self.max_concurrency = max_concurrency or settings.oracle_max_concurrency

    async def estimate(self, item: EstimationInput) -> EstimationResult:
        oracle_result = await self.oracle.try_external(item)

        if isinstance(oracle_result, OracleEstimate):
            horizon = oracle_result.horizon
            source = EstimateSource.EXTERNAL
        else:
            horizon = resolve(item.name, item.category)
            source = EstimateSource.HEURISTIC
            logger.debug(f"Heuristic fallback for '{item.name}' ({oracle_result.reason})")

        result = apply_horizon(item.purchased_at, horizon, source)
        logger.info(
            f"Estimated '{item.name}' [{item.category}] via {source.value}: "
            f"expires {result.estimated_expiration_at}, restock {result.estimated_restock_at}"
        )
        return result

    async def estimate_batch(self, items: Sequence[EstimationInput]) -> List[EstimationResult]:
        """
        Estimate many items concurrently (e.g. receipt line items).

        Results are returned in input order. Cancelling the batch cancels
        every outstanding oracle call.
        """
        if not items:
            return []

        logger.info(f"Estimating batch of {len(items)} items...")
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(item: EstimationInput) -> EstimationResult:
            async with semaphore:
                return await self.estimate(item)

        results = await asyncio.gather(*(_bounded(item) for item in items))

        external_count = sum(1 for r in results if r.source == EstimateSource.EXTERNAL)
        logger.info(f"Batch done: {external_count} external, {len(results) - external_count} heuristic")
        return list(results)


async def estimate_dates(
    name: str,
    category: str,
    purchased_at: Union[str, date, datetime],
    estimator: Optional[DateEstimator] = None
) -> EstimationResult:
    """
    Convenience function for a single item.

    Raises:
        InvalidEstimationInput: empty name or unparseable purchase date
    """
    item = EstimationInput(name=name, category=category, purchased_at=purchased_at)
    estimator = estimator or DateEstimator()
    return await estimator.estimate(item)
