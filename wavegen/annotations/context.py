"""Ambient display settings carried across signal declarations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Collection, Iterable, Optional, Tuple

from ..models import Color, Format, Operation, Reset, SetColor, SetFormat, SetOmit

DEFAULT_VECTOR_TYPES: Tuple[str, ...] = ("std_logic_vector", "std_ulogic_vector")


@dataclass
class DisplayContext:
    """Current color, format and omit flag.

    Unset color and format mean "inherit the default"; ``omit`` is always
    explicit.
    """

    color: Optional[Color] = None
    format: Optional[Format] = None
    omit: bool = False

    def update(self, operations: Iterable[Operation]) -> None:
        """Apply context-changing operations in order; other operations are ignored."""
        for operation in operations:
            if isinstance(operation, Reset):
                self.color = None
                self.format = None
                self.omit = False
            elif isinstance(operation, SetOmit):
                self.omit = operation.omit
            elif isinstance(operation, SetColor):
                self.color = operation.color
            elif isinstance(operation, SetFormat):
                self.format = operation.format

    def fork(self, operations: Iterable[Operation]) -> "DisplayContext":
        """Return a copy with ``operations`` applied, leaving this context untouched."""
        clone = replace(self)
        clone.update(operations)
        return clone

    def resolve(
        self,
        declared_type: Optional[str] = None,
        vector_types: Collection[str] = DEFAULT_VECTOR_TYPES,
    ) -> Tuple[Optional[Color], Format, bool]:
        """Return the effective ``(color, format, omit)`` for a signal of ``declared_type``."""
        fmt = self.format
        if fmt is None:
            fmt = Format.BINARY if is_vector_type(declared_type, vector_types) else Format.DECIMAL
        return self.color, fmt, self.omit


def is_vector_type(declared_type: Optional[str], vector_types: Collection[str]) -> bool:
    """Return True when the type mark (last segment, any case) is a known vector type."""
    if not declared_type:
        return False
    type_mark = declared_type.rsplit(".", 1)[-1].lower()
    return type_mark in {name.lower() for name in vector_types}


__all__ = ["DEFAULT_VECTOR_TYPES", "DisplayContext", "is_vector_type"]
