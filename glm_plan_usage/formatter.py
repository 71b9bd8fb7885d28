import time

from .config import AnsiColor, Color256, RgbColor
from .models import UsageStats

DEFAULT_COLOR = Color256(c256=109)
WARNING_COLOR = Color256(c256=226)
CRITICAL_COLOR = Color256(c256=196)

RESET = "\x1b[0m"
BOLD = "\x1b[1m"


def format_tokens(count: int) -> str:
    """Format token count with M/K units."""
    if count < 0:
        return "N/A"
    if count >= 1_000_000:
        return f"{count / 1_000_000:.2f}M"
    if count >= 10_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def format_countdown(reset_at: int, now: float | None = None) -> str:
    """Format time left until reset_at (unix seconds) as H:MM."""
    if now is None:
        now = time.time()
    remaining = int(reset_at - now)
    if remaining <= 0:
        return "0:00"
    hours = remaining // 3600
    minutes = (remaining % 3600) // 60
    return f"{hours}:{minutes:02d}"


def format_stats(stats: UsageStats, now: float | None = None) -> str:
    """Format usage stats for the status line."""
    parts = []

    if stats.token_usage:
        token = stats.token_usage
        countdown = (
            format_countdown(token.reset_at, now) if token.reset_at is not None else "--:--"
        )
        parts.append(f"🪙 {token.percentage}% (⌛️ {countdown})")

    if stats.tool_usage:
        tool = stats.tool_usage
        parts.append(f"🌐 {tool.used}/{tool.limit}")

    return " · ".join(parts)


def usage_color(stats: UsageStats, base: AnsiColor = DEFAULT_COLOR) -> AnsiColor:
    """Pick a color from the highest usage percentage."""
    max_pct = max(
        stats.token_usage.percentage if stats.token_usage else 0,
        stats.tool_usage.percentage if stats.tool_usage else 0,
    )
    if max_pct >= 95:
        return CRITICAL_COLOR
    if max_pct >= 80:
        return WARNING_COLOR
    return base


def colorize(text: str, color: AnsiColor | None = None, bold: bool = False) -> str:
    """Wrap text in ANSI color and bold escapes."""
    prefix = ""
    if isinstance(color, Color256):
        prefix += f"\x1b[38;5;{color.c256}m"
    elif isinstance(color, RgbColor):
        prefix += f"\x1b[38;2;{color.r};{color.g};{color.b}m"
    if bold:
        prefix += BOLD
    return f"{prefix}{text}{RESET}"
