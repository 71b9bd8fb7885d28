from enum import Enum


class Platform(Enum):
    """Backend serving the GLM coding plan."""
    ZAI = "zai"
    ZHIPU = "zhipu"


ZAI_MARKER = "api.z.ai"
ZHIPU_MARKERS = ("bigmodel.cn", "zhipu")


def detect(base_url: str) -> Platform | None:
    """Detect the platform from the configured base URL."""
    if ZAI_MARKER in base_url:
        return Platform.ZAI
    if any(marker in base_url for marker in ZHIPU_MARKERS):
        return Platform.ZHIPU
    return None


def monitor_base_url(platform: Platform, base_url: str) -> str:
    """Base URL of the monitor API for the given platform.

    ZHIPU serves the monitor endpoints under /api rather than /api/anthropic.
    """
    if platform is Platform.ZHIPU:
        return base_url.replace("/api/anthropic", "/api").replace("/anthropic", "")
    return base_url
