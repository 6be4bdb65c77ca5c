"""Client for the public Discord status page API."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ConfigDict

from h4bot.domain.shared.constants import ExternalUrls, LimitConstants
from h4bot.domain.shared.exceptions import DomainError
from h4bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class StatusPage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    url: str
    time_zone: str | None = None
    updated_at: str | None = None


class StatusIndicator(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    indicator: str | None = None
    description: str


class DiscordStatus(BaseModel):
    """Payload of ``/api/v2/status.json``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    page: StatusPage
    status: StatusIndicator

    @property
    def is_operational(self) -> bool:
        return self.status.indicator in (None, "none")


class StatusUnavailableError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="STATUS_UNAVAILABLE")


class DiscordStatusClient:
    """Fetches the platform status summary.

    A transport can be injected for tests (``httpx.MockTransport``).
    """

    def __init__(
        self,
        *,
        url: str = ExternalUrls.DISCORD_STATUS_API,
        timeout: float = LimitConstants.STATUS_HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def fetch(self) -> DiscordStatus:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._url, headers={"Accept": "application/json"})
                response.raise_for_status()
                status = DiscordStatus.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(LogTemplates.STATUS_FETCH_FAILED, e)
            raise StatusUnavailableError(str(e)) from e

        logger.debug(LogTemplates.STATUS_FETCHED, status.status.description)
        return status
