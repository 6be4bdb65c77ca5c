"""Client for the vecka.nu ISO week number API."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field

from h4bot.domain.shared.constants import ExternalUrls, LimitConstants
from h4bot.domain.shared.exceptions import DomainError
from h4bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class WeekData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    week: int = Field(ge=1, le=53)


class WeekUnavailableError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="WEEK_UNAVAILABLE")


class WeekNumberClient:
    """Looks up the current ISO week. Accepts an ``httpx`` transport for tests."""

    def __init__(
        self,
        *,
        url: str = ExternalUrls.WEEK_NUMBER_API,
        timeout: float = LimitConstants.STATUS_HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def fetch(self) -> WeekData:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._url, headers={"Accept": "application/json"})
                response.raise_for_status()
                data = WeekData.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(LogTemplates.WEEK_FETCH_FAILED, e)
            raise WeekUnavailableError(str(e)) from e

        logger.debug(LogTemplates.WEEK_FETCHED, data.week)
        return data
