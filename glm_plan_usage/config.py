import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigFileError

DEFAULT_CONFIG_PATH = Path.home() / ".claude" / "glm-plan-usage" / "config.toml"

DEFAULT_CONFIG_TOML = """\
[style]
separator = " | "

[[segments]]
id = "glm_usage"
enabled = true

[segments.colors.text]
c256 = 109

[segments.styles]
text_bold = true

[api]
timeout_ms = 5000
retry_attempts = 2

[cache]
enabled = true
ttl_seconds = 300
"""


class RgbColor(BaseModel):
    r: int
    g: int
    b: int


class Color256(BaseModel):
    c256: int


AnsiColor = RgbColor | Color256


class StyleConfig(BaseModel):
    separator: str = " | "


class SegmentConfig(BaseModel):
    """Per-segment toggle and styling."""
    id: str
    enabled: bool = True
    colors: dict[str, AnsiColor] = Field(default_factory=dict)
    styles: dict[str, bool] = Field(default_factory=dict)


def default_segments() -> list[SegmentConfig]:
    return [
        SegmentConfig(
            id="glm_usage",
            colors={"text": Color256(c256=109)},
            styles={"text_bold": True},
        )
    ]


class ApiConfig(BaseModel):
    timeout_ms: int = Field(default=5000, gt=0)
    retry_attempts: int = Field(default=2, ge=0)


class CacheConfig(BaseModel):
    enabled: bool = True
    ttl_seconds: int = Field(default=300, ge=0)


class Config(BaseModel):
    """Main configuration loaded from TOML file."""
    style: StyleConfig = Field(default_factory=StyleConfig)
    segments: list[SegmentConfig] = Field(default_factory=default_segments)
    api: ApiConfig = Field(default_factory=ApiConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    def segment(self, segment_id: str) -> SegmentConfig | None:
        for segment in self.segments:
            if segment.id == segment_id:
                return segment
        return None


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from TOML file.

    If config_path is not provided, defaults to ~/.claude/glm-plan-usage/config.toml.
    A missing file yields the default configuration.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not path.exists():
        return Config()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(f"Failed to read config file {path}: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigFileError(f"Failed to parse config file {path}: {e}") from e


def init_config(config_path: str | Path | None = None) -> Path:
    """Write the default configuration file and return its path."""
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(f"Failed to write config file {path}: {e}") from e
    return path
