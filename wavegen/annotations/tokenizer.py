"""Parser for the display annotations embedded in VHDL comments.

An annotation comment holds one or more instructions separated by newlines or
commas::

    -- color red, format hex
    -- add signal dut.state, color green
    -- empty
    -- omit
    -- reset

Unknown instructions are dropped so that a typo loses an effect instead of
aborting script generation.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import (
    AddEmptyRow,
    AddStandaloneSignal,
    Color,
    Format,
    Operation,
    Reset,
    SetColor,
    SetFormat,
    SetOmit,
)

_SEPARATORS = re.compile(r"[\n,]")

_ADD_SIGNAL_PREFIX = "add signal "
_COLOR_PREFIX = "color "
_FORMAT_PREFIX = "format "

# Keywords are matched case-sensitively: "color Indigo" is an unknown word.
_COLORS: Dict[str, Color] = {
    "normal": Color.NORMAL,
    "red": Color.RED,
    "orange": Color.ORANGE,
    "yellow": Color.YELLOW,
    "green": Color.GREEN,
    "blue": Color.BLUE,
    "indigo": Color.INDIGO,
    "violet": Color.VIOLET,
    "cycle": Color.CYCLE,
}

_FORMATS: Dict[str, Format] = {
    "hex": Format.HEX,
    "decimal": Format.DECIMAL,
    "signed decimal": Format.SIGNED_DECIMAL,
    "binary": Format.BINARY,
}

_logger = get_logger("annotations")


def parse_comment(comment: str) -> List[Operation]:
    """Return the operations found in ``comment`` in source order."""
    operations: List[Operation] = []
    for raw_token in _SEPARATORS.split(comment):
        operation = parse_token(raw_token.strip())
        if operation is not None:
            operations.append(operation)
    return operations


def parse_token(token: str) -> Optional[Operation]:
    """Classify a single trimmed token, returning None when it is not an instruction."""
    if not token:
        return None
    if token == "omit":
        return SetOmit(True)
    if token == "reset":
        return Reset()
    if token == "empty":
        return AddEmptyRow()
    if token.startswith(_ADD_SIGNAL_PREFIX):
        return AddStandaloneSignal(token[len(_ADD_SIGNAL_PREFIX) :])
    if token.startswith(_COLOR_PREFIX):
        word = token[len(_COLOR_PREFIX) :]
        color = _COLORS.get(word)
        if color is None:
            _logger.debug("Dropping unknown color %r", word)
            return None
        return SetColor(color)
    if token.startswith(_FORMAT_PREFIX):
        word = token[len(_FORMAT_PREFIX) :]
        return SetFormat(parse_format(word))
    _logger.debug("Ignoring comment token %r", token)
    return None


def parse_format(word: str) -> Format:
    """Map a format word to a Format; unknown words fall back to decimal."""
    return _FORMATS.get(word, Format.DECIMAL)


def split_head(operations: Sequence[Operation]) -> Tuple[Optional[str], List[Operation]]:
    """Split off a leading ``add signal`` instruction.

    Returns ``(name, rest)`` when the comment introduces a standalone signal and
    ``(None, operations)`` otherwise.
    """
    if operations and isinstance(operations[0], AddStandaloneSignal):
        return operations[0].name, list(operations[1:])
    return None, list(operations)


__all__ = ["parse_comment", "parse_format", "parse_token", "split_head"]
