"""
Gateway Client

Async HTTP client the report console uses to call the report gateway.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from apre.config import get_settings
from apre.database.models import ChannelRatingByMonth, RegionSales, SalespersonFeedback

logger = structlog.get_logger(__name__)

RowT = TypeVar("RowT", bound=BaseModel)


class GatewayError(Exception):
    """A gateway call failed in transport or returned an error envelope."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)


class GatewayClient:
    """
    Client for the report gateway.

    Example:
        async with GatewayClient() as client:
            regions = await client.regions()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.console.api_base_url
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.console.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a gateway path and decode the JSON body.

        Raises:
            GatewayError: On transport failure or a non-2xx response
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("Gateway request failed", path=path, error=str(e))
            raise GatewayError(f"Gateway unreachable: {e}") from e

        if response.is_error:
            message = response.reason_phrase
            try:
                body = response.json()
                if isinstance(body, dict) and body.get("message"):
                    message = body["message"]
            except ValueError:
                pass
            logger.error(
                "Gateway returned an error",
                path=path,
                status=response.status_code,
                error=message,
            )
            raise GatewayError(message, status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error("Gateway returned a non-JSON body", path=path)
            raise GatewayError("Gateway returned a non-JSON body", status=response.status_code) from e

    def _rows(self, model: Type[RowT], data: Any) -> List[RowT]:
        """Validate a report body into typed rows."""
        try:
            return [model.model_validate(row) for row in data]
        except (TypeError, ValidationError) as e:
            logger.error("Unexpected report payload", model=model.__name__, error=str(e))
            raise GatewayError(f"Malformed {model.__name__} payload") from e

    # -------------------------------------------------------------------------
    # Customer feedback
    # -------------------------------------------------------------------------

    async def channel_rating_by_month(self, month: int) -> List[ChannelRatingByMonth]:
        data = await self.get_json(
            "/reports/customer-feedback/channel-rating-by-month",
            params={"month": month},
        )
        return self._rows(ChannelRatingByMonth, data)

    async def feedback_by_salesperson(self, salesperson: str) -> List[SalespersonFeedback]:
        data = await self.get_json(
            f"/reports/customer-feedback/feedback-by-salesperson/{quote(salesperson, safe='')}"
        )
        return self._rows(SalespersonFeedback, data)

    async def feedback_salespeople(self) -> List[str]:
        return await self.get_json("/reports/customer-feedback/salespeople")

    # -------------------------------------------------------------------------
    # Sales
    # -------------------------------------------------------------------------

    async def regions(self) -> List[str]:
        return await self.get_json("/reports/sales/regions")

    async def sales_by_region(self, region: str) -> List[RegionSales]:
        data = await self.get_json(f"/reports/sales/regions/{quote(region, safe='')}")
        return self._rows(RegionSales, data)

    async def sales_salespeople(self) -> List[str]:
        return await self.get_json("/reports/sales/salespeople")
