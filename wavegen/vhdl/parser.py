"""Extracts entities, architectures and signal declarations from VHDL sources."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..errors import ArchitectureWithoutEntity, ParseError, UnexpectedEndOfFile
from ..logging import get_logger
from ..models import (
    ArchitecturePart,
    CommentPart,
    ParsedArchitecture,
    ParsedEntity,
    ParsedSignal,
    SignalPart,
)
from .lexer import Token, TokenKind, tokenize

_SUBPROGRAM_KEYWORDS = ("function", "procedure", "pure", "impure")
# Declarations whose bodies may mention `signal` or `function` without declaring one.
_SKIPPED_DECLARATIONS = ("attribute", "alias")


class TokenStream:
    """Cursor over a token list that ends with an EOF token."""

    def __init__(self, tokens: List[Token], *, path: str | None = None) -> None:
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("token list must end with an EOF token")
        self._tokens = tokens
        self._index = 0
        self.path = path

    def peek(self, offset: int = 0) -> Token:
        index = min(self._index + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def at_eof(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def advance(self) -> Token:
        """Consume and return the current token; running past the end is an error."""
        token = self.peek()
        if token.kind is TokenKind.EOF:
            raise UnexpectedEndOfFile("unexpected end of file", path=self.path, line=token.line)
        self._index += 1
        return token

    def skip_until(self, predicate: Callable[[Token], bool]) -> Token:
        """Advance to the next token matching ``predicate`` without consuming it."""
        while not predicate(self.peek()):
            self.advance()
        return self.peek()

    def find(self, predicate: Callable[[Token], bool]) -> Optional[Token]:
        """Like :meth:`skip_until` but returns None instead of failing at EOF."""
        while not self.at_eof():
            if predicate(self.peek()):
                return self.peek()
            self._index += 1
        return None

    def expect_keyword(self, word: str) -> Token:
        token = self.advance()
        if not token.is_keyword(word):
            raise self.error(f"expected '{word}', found {token.text!r}", token)
        return token

    def expect_delimiter(self, symbol: str) -> Token:
        token = self.advance()
        if not token.is_delimiter(symbol):
            raise self.error(f"expected '{symbol}', found {token.text!r}", token)
        return token

    def expect_identifier(self) -> str:
        token = self.advance()
        if token.kind is not TokenKind.IDENTIFIER:
            raise self.error(f"expected identifier, found {token.text!r}", token)
        return token.text

    def error(self, message: str, token: Token) -> ParseError:
        return ParseError(message, path=self.path, line=token.line)


class VhdlParser:
    """Reduces one VHDL file to its entities and their architectures.

    Entities and architectures are indexed by entity name during a single
    forward scan and linked once the file is exhausted, so an architecture may
    precede its entity.
    """

    def __init__(self, *, path: str | None = None) -> None:
        self.path = path
        self.logger = get_logger("vhdl")

    def parse(self, text: str) -> List[ParsedEntity]:
        stream = TokenStream(tokenize(text, path=self.path), path=self.path)
        entities: Dict[str, ParsedEntity] = {}
        architectures: Dict[str, ParsedArchitecture] = {}

        while stream.find(lambda t: t.is_keyword("entity", "architecture")) is not None:
            token = stream.peek()
            if token.is_keyword("entity"):
                if not _opens_entity(stream):
                    stream.advance()
                    continue
                entity = self._parse_entity(stream)
                entities[entity.name.lower()] = entity
            else:
                if not _opens_architecture(stream):
                    stream.advance()
                    continue
                architecture = self._parse_architecture(stream)
                key = architecture.entity_name.lower()
                if key in architectures:
                    self.logger.debug(
                        "Architecture %s replaces %s for entity %s",
                        architecture.name,
                        architectures[key].name,
                        architecture.entity_name,
                    )
                architectures[key] = architecture

        for key, architecture in architectures.items():
            entity = entities.get(key)
            if entity is None:
                raise ArchitectureWithoutEntity(
                    f"architecture {architecture.name} of unknown entity {architecture.entity_name}",
                    path=self.path,
                )
            entity.architecture = architecture

        return list(entities.values())

    def _parse_entity(self, stream: TokenStream) -> ParsedEntity:
        stream.expect_keyword("entity")
        name = stream.expect_identifier()
        stream.expect_keyword("is")
        _skip_to_end(stream, "entity", name)
        return ParsedEntity(name=name, path=self.path)

    def _parse_architecture(self, stream: TokenStream) -> ParsedArchitecture:
        stream.expect_keyword("architecture")
        name = stream.expect_identifier()
        stream.expect_keyword("of")
        entity_name = stream.expect_identifier()
        stream.expect_keyword("is")

        parts: List[ArchitecturePart] = []
        while True:
            token = stream.peek()
            if token.kind is TokenKind.EOF:
                raise UnexpectedEndOfFile(
                    f"architecture {name} has no 'begin'", path=self.path, line=token.line
                )
            parts.extend(CommentPart(comment) for comment in token.leading_comments)
            if token.is_keyword(*_SKIPPED_DECLARATIONS):
                stream.skip_until(lambda t: t.is_delimiter(";"))
                stream.advance()
            elif token.is_keyword("signal"):
                parts.append(self._parse_signals(stream))
            elif token.is_keyword("begin"):
                break
            elif token.is_keyword(*_SUBPROGRAM_KEYWORDS):
                _skip_subprogram(stream)
            else:
                stream.advance()

        stream.expect_keyword("begin")
        _skip_to_end(stream, "architecture", name)
        return ParsedArchitecture(name=name, entity_name=entity_name, parts=parts)

    def _parse_signals(self, stream: TokenStream) -> SignalPart:
        stream.expect_keyword("signal")
        names = [stream.expect_identifier()]
        while stream.peek().is_delimiter(","):
            stream.advance()
            names.append(stream.expect_identifier())
        stream.expect_delimiter(":")
        signal_type = _parse_type_mark(stream)
        stream.skip_until(lambda t: t.is_delimiter(";"))
        semicolon = stream.advance()
        comment = semicolon.trailing_comment
        return SignalPart(
            tuple(ParsedSignal(name=name, signal_type=signal_type, comment=comment) for name in names)
        )


def _opens_entity(stream: TokenStream) -> bool:
    return stream.peek(1).kind is TokenKind.IDENTIFIER and stream.peek(2).is_keyword("is")


def _opens_architecture(stream: TokenStream) -> bool:
    return stream.peek(1).kind is TokenKind.IDENTIFIER and stream.peek(2).is_keyword("of")


def _parse_type_mark(stream: TokenStream) -> str:
    segments = [stream.expect_identifier()]
    while stream.peek().is_delimiter(".") and stream.peek(1).kind is TokenKind.IDENTIFIER:
        stream.advance()
        segments.append(stream.expect_identifier())
    return ".".join(segments)


def _same_name(token: Token, name: str) -> bool:
    return token.kind is TokenKind.IDENTIFIER and token.value == name.lower()


def _skip_to_end(stream: TokenStream, unit: str, name: str) -> None:
    """Consume tokens through ``end [unit] [name];``."""
    while True:
        stream.skip_until(lambda t: t.is_keyword("end"))
        stream.advance()
        token = stream.peek()
        if token.is_keyword(unit):
            stream.advance()
            token = stream.peek()
        if _same_name(token, name):
            stream.advance()
            token = stream.peek()
        if token.is_delimiter(";"):
            stream.advance()
            return


def _skip_subprogram(stream: TokenStream) -> None:
    """Consume a subprogram declaration or body, including nested subprograms."""
    depth = 0
    while True:
        token = stream.advance()
        if token.is_delimiter("("):
            depth += 1
        elif token.is_delimiter(")"):
            depth -= 1
        elif depth == 0 and token.is_delimiter(";"):
            return
        elif depth == 0 and token.is_keyword("is"):
            break

    if stream.peek().is_keyword("new"):
        stream.skip_until(lambda t: t.is_delimiter(";"))
        stream.advance()
        return

    while not stream.peek().is_keyword("begin"):
        if stream.peek().is_keyword(*_SUBPROGRAM_KEYWORDS):
            _skip_subprogram(stream)
        else:
            stream.advance()
    stream.advance()

    while True:
        token = stream.advance()
        if not token.is_keyword("end"):
            continue
        following = stream.peek()
        if following.is_keyword("function", "procedure"):
            stream.advance()
            following = stream.peek()
        elif not (
            following.kind in (TokenKind.IDENTIFIER, TokenKind.LITERAL) or following.is_delimiter(";")
        ):
            # end if / end loop / end case
            continue
        if following.kind in (TokenKind.IDENTIFIER, TokenKind.LITERAL):
            stream.advance()
            following = stream.peek()
        if following.is_delimiter(";"):
            stream.advance()
            return


def parse_source(text: str, *, path: str | None = None) -> List[ParsedEntity]:
    """Parse VHDL ``text`` and return its entities in declaration order."""
    return VhdlParser(path=path).parse(text)


def parse_file(path: Path, *, encoding: str = "latin-1") -> List[ParsedEntity]:
    """Read and parse a VHDL file."""
    text = path.read_text(encoding=encoding)
    return parse_source(text, path=str(path))


__all__ = ["TokenStream", "VhdlParser", "parse_file", "parse_source"]
