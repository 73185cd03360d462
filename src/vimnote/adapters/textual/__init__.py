"""Textual bindings; the ``app`` module needs the optional ``textual`` extra."""

from .controller import TEXTUAL_KEY_NAMES, TextualUIHooks, TextualVimAdapter, translate_key

__all__ = ["TEXTUAL_KEY_NAMES", "TextualUIHooks", "TextualVimAdapter", "translate_key"]
