"""Atlas generation pipeline."""
from .engine import generate

__all__ = ["generate"]
