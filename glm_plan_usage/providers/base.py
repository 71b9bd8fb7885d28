from abc import ABC, abstractmethod
from typing import Any

from ..models import UsageStats


class BaseProvider(ABC):
    """Abstract base class for quota usage providers."""

    def __init__(self, api_key: str, base_url: str):
        self.api_key = api_key
        self.base_url = base_url
        self._headers: dict[str, str] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    def authenticate(self) -> None:
        """Setup authentication headers/credentials."""
        pass

    @abstractmethod
    async def fetch_usage(self) -> UsageStats:
        """Call provider API and return normalized usage."""
        pass

    @abstractmethod
    def parse_usage(self, raw_data: dict[str, Any]) -> UsageStats:
        """Convert raw response to standardized UsageStats model."""
        pass
