"""Reference rendering engine and editable document."""

from .document import Document, Edit
from .pattern_engine import PatternEngine

__all__ = ["Document", "Edit", "PatternEngine"]
