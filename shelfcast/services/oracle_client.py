"""
External Estimator Client
=========================

Asks the remote estimation oracle for shelf-life / restock horizons.

Exactly one attempt per call, bounded by a timeout. Every failure mode
(not configured, bad status, malformed payload, network error, timeout)
comes back as OracleUnavailable instead of an exception, so the caller
can fall back to heuristics.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from shelfcast.core.config import settings
from shelfcast.models.estimation import EstimationInput
from shelfcast.services.rule_table import HorizonPair

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OracleEstimate:
    horizon: HorizonPair


@dataclass(frozen=True)
class OracleUnavailable:
    reason: str


OracleResult = Union[OracleEstimate, OracleUnavailable]


class MalformedOraclePayload(ValueError):
    pass


def _coerce_days(field: str, value: Any) -> int:
    """Coerce a day count to int; values are NOT clamped here"""
    if isinstance(value, bool):
        raise MalformedOraclePayload(f"'{field}' is a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                raise MalformedOraclePayload(f"'{field}' is not numeric: {value!r}") from None
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedOraclePayload(f"'{field}' is not finite")
        return int(value)
    raise MalformedOraclePayload(f"'{field}' has unsupported type {type(value).__name__}")


def parse_oracle_payload(payload: Any) -> HorizonPair:
    """Map the oracle JSON body onto a HorizonPair"""
    if not isinstance(payload, dict):
        raise MalformedOraclePayload("response body is not a JSON object")

    for field in ("shelfLifeDays", "restockDays"):
        if payload.get(field) is None:
            raise MalformedOraclePayload(f"missing '{field}'")

    return HorizonPair(
        shelf_life_days=_coerce_days("shelfLifeDays", payload["shelfLifeDays"]),
        restock_days=_coerce_days("restockDays", payload["restockDays"])
    )


class OracleClient:
    """
    Thin async client for the estimation oracle

    Usage:
        client = OracleClient(url="https://oracle.example/estimate-dates")
        result = await client.try_external(item)
        if isinstance(result, OracleEstimate):
            ...
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.url = url if url is not None else settings.oracle_url
        self.api_key = api_key if api_key is not None else settings.oracle_api_key
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.oracle_timeout_seconds
        )
        self.http_client = http_client

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def _build_request(self, item: EstimationInput) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        return {
            "headers": headers,
            "json": {
                "name": item.name,
                "category": item.category,
                "purchasedAt": item.purchased_at.isoformat(),
            },
            "timeout": self.timeout_seconds,
        }

    async def _post(self, item: EstimationInput) -> httpx.Response:
        request = self._build_request(item)
        if self.http_client is not None:
            return await self.http_client.post(self.url, **request)

        async with httpx.AsyncClient() as client:
            return await client.post(self.url, **request)

    async def try_external(self, item: EstimationInput) -> OracleResult:
        """Single oracle attempt; never raises for oracle-side failures"""
        if not self.configured:
            logger.debug("Oracle not configured, skipping external estimate")
            return OracleUnavailable(reason="not configured")

        try:
            # httpx timeouts apply per connect/read/write step, not to the whole call
            response = await asyncio.wait_for(self._post(item), timeout=self.timeout_seconds)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning(f"Oracle timed out after {self.timeout_seconds}s for '{item.name}'")
            return OracleUnavailable(reason="timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Oracle request failed for '{item.name}': {e}")
            return OracleUnavailable(reason=f"network error: {e.__class__.__name__}")
        except Exception as e:
            logger.error(f"Unexpected oracle client error for '{item.name}': {e}")
            return OracleUnavailable(reason=f"client error: {e.__class__.__name__}")

        if not response.is_success:
            logger.warning(f"Oracle returned status {response.status_code} for '{item.name}'")
            return OracleUnavailable(reason=f"status {response.status_code}")

        try:
            horizon = parse_oracle_payload(response.json())
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning(f"Oracle payload rejected for '{item.name}': {e}")
            return OracleUnavailable(reason=f"malformed payload: {e}")

        return OracleEstimate(horizon=horizon)
