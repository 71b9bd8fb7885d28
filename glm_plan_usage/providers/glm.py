import asyncio
import os
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from ..errors import (
    FetchError,
    InvalidBaseUrlError,
    InvalidCredentialError,
    MalformedResponseError,
    MissingCredentialError,
    ServerRejectedError,
    TransportError,
    UnexpectedStatusError,
    UnknownPlatformError,
)
from ..models import (
    QuotaLimitItem,
    QuotaLimitResponse,
    QuotaLimitStatus,
    QuotaUsage,
    UsageStats,
)
from ..platforms import Platform, detect, monitor_base_url
from .base import BaseProvider

logger = structlog.get_logger()

AUTH_TOKEN_ENV = "ANTHROPIC_AUTH_TOKEN"
BASE_URL_ENV = "ANTHROPIC_BASE_URL"
DEFAULT_BASE_URL = "https://open.bigmodel.cn/api/anthropic"

QUOTA_LIMIT_PATH = "/monitor/usage/quota/limit"

DEFAULT_TIMEOUT = 5.0  # seconds
DEFAULT_RETRY_ATTEMPTS = 2
RETRY_DELAY = 0.1  # seconds

TOKENS_LIMIT = "TOKENS_LIMIT"
TIME_LIMIT = "TIME_LIMIT"


class GlmProvider(BaseProvider):
    """GLM coding plan usage provider (z.ai and ZHIPU bigmodel.cn)."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        platform: Platform,
        timeout: float = DEFAULT_TIMEOUT,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    ):
        super().__init__(api_key, base_url)
        self.platform = platform
        self.timeout = timeout
        self.retry_attempts = retry_attempts

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    ) -> "GlmProvider":
        """Build a provider from ANTHROPIC_AUTH_TOKEN and ANTHROPIC_BASE_URL.

        Raises a ConfigError subclass when the environment is unusable.
        """
        token = os.environ.get(AUTH_TOKEN_ENV)
        if not token:
            raise MissingCredentialError(AUTH_TOKEN_ENV)
        try:
            token.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidCredentialError(AUTH_TOKEN_ENV) from e

        base_url = os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
        platform = detect(base_url)
        if platform is None:
            raise UnknownPlatformError(base_url)

        monitor_url = monitor_base_url(platform, base_url)
        try:
            httpx.URL(f"{monitor_url}{QUOTA_LIMIT_PATH}")
        except httpx.InvalidURL as e:
            raise InvalidBaseUrlError(base_url, str(e)) from e

        provider = cls(
            api_key=token,
            base_url=monitor_url,
            platform=platform,
            timeout=timeout,
            retry_attempts=retry_attempts,
        )
        provider.authenticate()
        return provider

    @property
    def name(self) -> str:
        return "glm"

    @property
    def quota_limit_url(self) -> str:
        return f"{self.base_url}{QUOTA_LIMIT_PATH}"

    def authenticate(self) -> None:
        """Setup bearer token authentication."""
        self._headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def fetch_usage(self) -> UsageStats:
        """Fetch usage, retrying failed attempts with a fixed delay.

        Raises the last FetchError when every attempt fails.
        """
        attempts = max(self.retry_attempts, 0) + 1
        attempt = 1

        while True:
            try:
                return await self._fetch_once()
            except FetchError as e:
                logger.debug(
                    "glm_fetch_attempt_failed",
                    attempt=attempt,
                    attempts=attempts,
                    error=str(e),
                )
                if attempt >= attempts:
                    raise
            attempt += 1
            await self._backoff()

    async def _backoff(self) -> None:
        await asyncio.sleep(RETRY_DELAY)

    async def _fetch_once(self) -> UsageStats:
        logger.debug("glm_fetch_usage", url=self.quota_limit_url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.quota_limit_url, headers=self._headers)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        if response.status_code != 200:
            raise UnexpectedStatusError(response.status_code, response.reason_phrase)

        try:
            raw_data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Failed to parse response: {e}") from e

        return self.parse_usage(raw_data)

    def _to_quota_usage(self, item: QuotaLimitItem, time_window: str) -> QuotaUsage:
        reset_at = None
        if item.next_reset_time is not None:
            reset_at = item.next_reset_time // 1000
        return QuotaUsage(
            used=item.current_value,
            limit=item.usage,
            percentage=item.percentage,
            time_window=time_window,
            reset_at=reset_at,
        )

    def _find_limit(
        self, response: QuotaLimitResponse, quota_type: str
    ) -> QuotaLimitItem | None:
        for item in response.data.limits:
            if item.quota_type == quota_type:
                return item
        return None

    def parse_usage(self, raw_data: dict[str, Any]) -> UsageStats:
        """Parse a quota limit response into UsageStats."""
        try:
            status = QuotaLimitStatus.model_validate(raw_data)
        except ValidationError as e:
            raise MalformedResponseError(f"Failed to parse response: {e}") from e

        # a rejected request carries no usable data, whatever its shape
        if not status.success:
            raise ServerRejectedError(status.msg)

        try:
            response = QuotaLimitResponse.model_validate(raw_data)
        except ValidationError as e:
            raise MalformedResponseError(f"Failed to parse response: {e}") from e

        token_item = self._find_limit(response, TOKENS_LIMIT)
        tool_item = self._find_limit(response, TIME_LIMIT)

        return UsageStats(
            token_usage=self._to_quota_usage(token_item, "5h") if token_item else None,
            tool_usage=self._to_quota_usage(tool_item, "30d") if tool_item else None,
        )
