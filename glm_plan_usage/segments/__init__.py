from .base import Segment, SegmentData, SegmentStyle
from .glm_usage import GlmUsageSegment

__all__ = ["Segment", "SegmentData", "SegmentStyle", "GlmUsageSegment"]
