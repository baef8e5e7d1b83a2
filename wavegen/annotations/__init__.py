"""Annotation language: comment tokenizer and display context."""

from __future__ import annotations

from .context import DEFAULT_VECTOR_TYPES, DisplayContext, is_vector_type
from .tokenizer import parse_comment, parse_format, parse_token, split_head

__all__ = [
    "DEFAULT_VECTOR_TYPES",
    "DisplayContext",
    "is_vector_type",
    "parse_comment",
    "parse_format",
    "parse_token",
    "split_head",
]
