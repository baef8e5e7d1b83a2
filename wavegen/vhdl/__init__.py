"""VHDL front end: lexer and design-unit parser."""

from __future__ import annotations

from .lexer import Token, TokenKind, tokenize
from .parser import TokenStream, VhdlParser, parse_file, parse_source

__all__ = [
    "Token",
    "TokenKind",
    "TokenStream",
    "VhdlParser",
    "parse_file",
    "parse_source",
    "tokenize",
]
