"""Regex-driven VHDL lexer that keeps comments attached to tokens.

A comment that starts on the line where the previous token ends becomes that
token's trailing comment. Every other comment is queued as a leading comment of
the next token; comments after the last token land on the EOF token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..errors import ParseError, UnexpectedEndOfFile


class TokenKind(Enum):
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    LITERAL = "literal"
    DELIMITER = "delimiter"
    EOF = "eof"


RESERVED_WORDS = frozenset(
    """
    abs access after alias all and architecture array assert assume assume_guarantee
    attribute begin block body buffer bus case component configuration constant
    context cover default disconnect downto else elsif end entity exit fairness file
    for force function generate generic group guarded if impure in inertial inout is
    label library linkage literal loop map mod nand new next nor not null of on open
    or others out package parameter port postponed procedure process property
    protected pure range record register reject release rem report restrict
    restrict_guarantee return rol ror select sequence severity shared signal sla sll
    sra srl strong subtype then to transport type unaffected units until use
    variable vmode vprop vunit wait when while with xnor xor
    """.split()
)

_TOKEN_PATTERN = re.compile(
    r"""
      (?P<extended>\\(?:[^\\\n]|\\\\)*\\)
    | (?P<bitstring>(?:\d+)?(?:[uUsS]?[bBoOxX]|[dD])"[^"\n]*")
    | (?P<word>[A-Za-z][A-Za-z0-9_]*)
    | (?P<based>\d[\d_]*\#[0-9A-Fa-f_.]+\#(?:[eE][+-]?\d[\d_]*)?)
    | (?P<number>\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d[\d_]*)?)
    | (?P<string>"(?:[^"\n]|"")*")
    | (?P<delimiter>=>|\*\*|:=|/=|>=|<=|<>|\?\?|\?/=|\?<=|\?>=|\?=|\?<|\?>|<<|>>|[&'()*+,\-./:;<=>`|?\[\]@^])
    """,
    re.VERBOSE,
)

# A tick after one of these is an attribute mark, not a character literal.
_TICK_CONTEXT = {")", "]"}


@dataclass
class Token:
    """Single lexical element with the comments attached to it."""

    kind: TokenKind
    text: str
    line: int
    leading_comments: List[str] = field(default_factory=list)
    trailing_comment: Optional[str] = None

    @property
    def value(self) -> str:
        """Case-folded text; extended identifiers and literals keep their spelling."""
        if self.kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD) and not self.text.startswith("\\"):
            return self.text.lower()
        return self.text

    def is_keyword(self, *words: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.value in words

    def is_delimiter(self, symbol: str) -> bool:
        return self.kind is TokenKind.DELIMITER and self.text == symbol


class Lexer:
    """Splits VHDL source text into tokens."""

    def __init__(self, text: str, *, path: str | None = None) -> None:
        self.text = text
        self.path = path
        self._pos = 0
        self._line = 1
        self._tokens: List[Token] = []
        self._pending: List[str] = []

    def tokenize(self) -> List[Token]:
        text = self.text
        length = len(text)
        while self._pos < length:
            char = text[self._pos]
            if char == "\n":
                self._line += 1
                self._pos += 1
            elif char.isspace():
                self._pos += 1
            elif text.startswith("--", self._pos):
                self._line_comment()
            elif text.startswith("/*", self._pos):
                self._block_comment()
            elif char == "'" and self._is_character_literal():
                self._emit(TokenKind.LITERAL, text[self._pos : self._pos + 3])
                self._pos += 3
            else:
                self._token()
        self._tokens.append(
            Token(kind=TokenKind.EOF, text="", line=self._line, leading_comments=self._pending)
        )
        self._pending = []
        return self._tokens

    def _line_comment(self) -> None:
        end = self.text.find("\n", self._pos)
        if end == -1:
            end = len(self.text)
        self._attach(self.text[self._pos + 2 : end], self._line)
        self._pos = end

    def _block_comment(self) -> None:
        end = self.text.find("*/", self._pos + 2)
        if end == -1:
            raise UnexpectedEndOfFile("unterminated block comment", path=self.path, line=self._line)
        body = self.text[self._pos + 2 : end]
        start_line = self._line
        self._line += body.count("\n")
        self._pos = end + 2
        self._attach(body, start_line)

    def _attach(self, body: str, start_line: int) -> None:
        previous = self._tokens[-1] if self._tokens else None
        if (
            previous is not None
            and not self._pending
            and previous.trailing_comment is None
            and previous.line == start_line
        ):
            previous.trailing_comment = body
        else:
            self._pending.append(body)

    def _is_character_literal(self) -> bool:
        if self._pos + 2 >= len(self.text) or self.text[self._pos + 2] != "'":
            return False
        if not self._tokens:
            return True
        previous = self._tokens[-1]
        if previous.kind is TokenKind.IDENTIFIER or previous.is_keyword("all"):
            return False
        return not (previous.kind is TokenKind.DELIMITER and previous.text in _TICK_CONTEXT)

    def _token(self) -> None:
        match = _TOKEN_PATTERN.match(self.text, self._pos)
        if match is None:
            if self.text[self._pos] == '"':
                raise ParseError("unterminated string literal", path=self.path, line=self._line)
            # Unknown characters are kept so the parser can report them in context.
            self._emit(TokenKind.DELIMITER, self.text[self._pos])
            self._pos += 1
            return
        group = match.lastgroup
        lexeme = match.group()
        if group == "word":
            kind = TokenKind.KEYWORD if lexeme.lower() in RESERVED_WORDS else TokenKind.IDENTIFIER
        elif group == "extended":
            kind = TokenKind.IDENTIFIER
        elif group == "delimiter":
            kind = TokenKind.DELIMITER
        else:
            kind = TokenKind.LITERAL
        self._emit(kind, lexeme)
        self._pos = match.end()

    def _emit(self, kind: TokenKind, lexeme: str) -> None:
        self._tokens.append(
            Token(kind=kind, text=lexeme, line=self._line, leading_comments=self._pending)
        )
        self._pending = []


def tokenize(text: str, *, path: str | None = None) -> List[Token]:
    """Return the tokens of ``text`` followed by a single EOF token."""
    return Lexer(text, path=path).tokenize()


__all__ = ["Lexer", "RESERVED_WORDS", "Token", "TokenKind", "tokenize"]
