import structlog

from ..cache import UsageCache
from ..config import Config
from ..errors import ConfigError, FetchError
from ..formatter import DEFAULT_COLOR, format_stats, usage_color
from ..models import InputData, UsageStats
from ..providers.glm import GlmProvider
from .base import Segment, SegmentData, SegmentStyle

logger = structlog.get_logger()


class GlmUsageSegment(Segment):
    """GLM coding plan usage with in-memory caching."""

    def __init__(self, cache: UsageCache | None = None):
        self.cache = cache if cache is not None else UsageCache()

    @property
    def id(self) -> str:
        return "glm_usage"

    async def get_usage(self, config: Config) -> UsageStats | None:
        """Fresh cache, else live fetch, else stale cache. Never raises."""
        if config.cache.enabled:
            cached = self.cache.read_if_fresh(config.cache.ttl_seconds)
            if cached is not None:
                logger.debug("glm_usage_cache_hit")
                return cached

        try:
            provider = GlmProvider.from_env(
                timeout=config.api.timeout_ms / 1000,
                retry_attempts=config.api.retry_attempts,
            )
            stats = await provider.fetch_usage()
        except ConfigError as e:
            logger.warning("glm_usage_client_unavailable", error=str(e))
        except FetchError as e:
            logger.warning("glm_usage_fetch_failed", error=str(e))
        else:
            if config.cache.enabled:
                self.cache.write(stats)
            return stats

        stale = self.cache.read_stale()
        if stale is not None:
            logger.debug("glm_usage_stale_fallback")
        return stale

    async def collect(self, input_data: InputData, config: Config) -> SegmentData | None:
        stats = await self.get_usage(config)
        if stats is None:
            return None

        text = format_stats(stats)
        if not text:
            return None

        segment = config.segment(self.id)
        base = DEFAULT_COLOR
        bold = True
        if segment is not None:
            base = segment.colors.get("text", DEFAULT_COLOR)
            bold = segment.styles.get("text_bold", True)

        return SegmentData(text=text, style=SegmentStyle(color=usage_color(stats, base), bold=bold))
