"""Textual host for the editing engine."""

from .controller import TextualEditorAdapter, TextualUIHooks, decode_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "decode_key"]
