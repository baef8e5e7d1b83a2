"""Exception types raised while locating and parsing design units."""

from __future__ import annotations

from typing import Optional


class WavegenError(RuntimeError):
    """Base class for wavegen failures surfaced to the caller."""


class ParseError(WavegenError):
    """Raised when a VHDL source cannot be reduced to design units."""

    def __init__(self, message: str, *, path: Optional[str] = None, line: Optional[int] = None) -> None:
        self.path = path
        self.line = line
        location = ""
        if path:
            location = f"{path}:{line}: " if line else f"{path}: "
        elif line:
            location = f"line {line}: "
        super().__init__(f"{location}{message}")


class UnexpectedEndOfFile(ParseError):
    """Input ended before an expected token."""


class ArchitectureWithoutEntity(ParseError):
    """An architecture names an entity that the same file never declares."""


class LookupFailure(WavegenError):
    """The requested design unit could not be resolved."""


class MissingArchitecture(LookupFailure):
    """The requested entity exists but has no architecture body."""


class EntityNotFound(LookupFailure):
    """No scanned file declares the requested entity."""


__all__ = [
    "ArchitectureWithoutEntity",
    "EntityNotFound",
    "LookupFailure",
    "MissingArchitecture",
    "ParseError",
    "UnexpectedEndOfFile",
    "WavegenError",
]
