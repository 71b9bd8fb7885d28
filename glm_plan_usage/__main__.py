import argparse
import asyncio
import sys

import structlog
from pydantic import ValidationError

from .config import Config, init_config, load_config
from .errors import ConfigFileError
from .logging import setup_logging
from .models import InputData
from .segments import GlmUsageSegment
from .statusline import StatusLineGenerator

logger = structlog.get_logger()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="glm-plan-usage",
        description="Display GLM plan usage statistics in the coding assistant status bar.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (default: ~/.claude/glm-plan-usage/config.toml)",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Initialize configuration file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Verbose output on stderr",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable cache",
    )
    return parser.parse_args(argv)


def read_input(text: str) -> InputData:
    """Parse session JSON from the host, falling back to empty input."""
    try:
        return InputData.model_validate_json(text)
    except ValidationError as e:
        logger.warning("input_parse_failed", error=str(e))
        return InputData()


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging("debug" if args.verbose else "error")

    if args.init:
        try:
            path = init_config(args.config)
        except ConfigFileError as e:
            print(f"Error initializing config: {e}", file=sys.stderr)
            return 1
        print(f"Initialized config at: {path}", file=sys.stderr)
        return 0

    try:
        config = load_config(args.config)
    except ConfigFileError as e:
        logger.warning("config_load_failed", error=str(e))
        config = Config()

    if args.no_cache:
        config.cache.enabled = False

    try:
        input_text = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("stdin_read_failed", error=str(e))
        return 0

    input_data = read_input(input_text)

    generator = StatusLineGenerator().add_segment(GlmUsageSegment())
    output = await generator.generate(input_data, config)

    if output:
        sys.stdout.write(output)
        sys.stdout.flush()
    return 0


def cli() -> None:
    """Synchronous entry point for CLI."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
