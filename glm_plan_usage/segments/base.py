from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..config import AnsiColor, Config
from ..models import InputData


@dataclass
class SegmentStyle:
    color: AnsiColor | None = None
    bold: bool = False


@dataclass
class SegmentData:
    """Rendered text of a segment plus its style."""
    text: str
    style: SegmentStyle = field(default_factory=SegmentStyle)


class Segment(ABC):
    """A single piece of the status line."""

    @property
    @abstractmethod
    def id(self) -> str:
        pass

    def is_enabled(self, config: Config) -> bool:
        segment = config.segment(self.id)
        return segment.enabled if segment is not None else False

    @abstractmethod
    async def collect(self, input_data: InputData, config: Config) -> SegmentData | None:
        """Return data to render, or None to hide the segment."""
        pass
