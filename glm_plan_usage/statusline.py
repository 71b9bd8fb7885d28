from .config import Config
from .formatter import colorize
from .models import InputData
from .segments.base import Segment, SegmentData


class StatusLineGenerator:
    """Collects enabled segments and joins them into one line."""

    def __init__(self) -> None:
        self.segments: list[Segment] = []

    def add_segment(self, segment: Segment) -> "StatusLineGenerator":
        self.segments.append(segment)
        return self

    async def generate(self, input_data: InputData, config: Config) -> str:
        parts = []
        for segment in self.segments:
            if not segment.is_enabled(config):
                continue
            data = await segment.collect(input_data, config)
            if data is not None:
                parts.append(self.format_segment(data))
        return config.style.separator.join(parts)

    @staticmethod
    def format_segment(data: SegmentData) -> str:
        return colorize(data.text, data.style.color, data.style.bold)
