from .base import BaseProvider
from .glm import GlmProvider

__all__ = ["BaseProvider", "GlmProvider"]
