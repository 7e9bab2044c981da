"""Textual host adapter for the guide scheduler."""

from .controller import DisplayLines, TextualGuideAdapter, TextualUIHooks

__all__ = ["DisplayLines", "TextualGuideAdapter", "TextualUIHooks"]
