import pytest

from glm_plan_usage.config import Color256, RgbColor
from glm_plan_usage.formatter import (
    colorize,
    format_countdown,
    format_stats,
    format_tokens,
    usage_color,
)
from glm_plan_usage.models import QuotaUsage, UsageStats


@pytest.mark.parametrize(
    "count, expected",
    [(-1, "N/A"), (999, "999"), (12_500, "12.5K"), (1_250_000, "1.25M")],
)
def test_format_tokens(count, expected):
    assert format_tokens(count) == expected


def test_format_countdown():
    assert format_countdown(1000 + 3 * 3600 + 12 * 60 + 30, now=1000) == "3:12"
    assert format_countdown(1000 + 5 * 60, now=1000) == "0:05"
    assert format_countdown(900, now=1000) == "0:00"


def test_format_stats_with_countdown():
    stats = UsageStats(
        token_usage=QuotaUsage(
            used=0, limit=0, percentage=42, time_window="5h", reset_at=1000 + 7200
        ),
        tool_usage=QuotaUsage(used=92, limit=100, percentage=92, time_window="30d"),
    )
    assert format_stats(stats, now=1000) == "🪙 42% (⌛️ 2:00) · 🌐 92/100"


def test_format_stats_empty():
    assert format_stats(UsageStats()) == ""


def _stats(token_pct: int, tool_pct: int) -> UsageStats:
    return UsageStats(
        token_usage=QuotaUsage(used=0, limit=0, percentage=token_pct, time_window="5h"),
        tool_usage=QuotaUsage(used=0, limit=0, percentage=tool_pct, time_window="30d"),
    )


@pytest.mark.parametrize(
    "token_pct, tool_pct, expected",
    [(10, 79, 109), (80, 0, 226), (0, 94, 226), (95, 10, 196), (100, 100, 196)],
)
def test_usage_color(token_pct, tool_pct, expected):
    assert usage_color(_stats(token_pct, tool_pct)).c256 == expected


def test_usage_color_keeps_base_below_warning():
    base = RgbColor(r=1, g=2, b=3)
    assert usage_color(_stats(10, 10), base) is base


def test_colorize():
    assert colorize("x", Color256(c256=109), bold=True) == "\x1b[38;5;109m\x1b[1mx\x1b[0m"
    assert colorize("x", RgbColor(r=1, g=2, b=3)) == "\x1b[38;2;1;2;3mx\x1b[0m"
    assert colorize("x") == "x\x1b[0m"
