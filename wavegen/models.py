"""Core data models shared across wavegen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple, Union


class Color(Enum):
    """Trace colors offered by the GTKWave color menu."""

    NORMAL = "Normal"
    RED = "Red"
    ORANGE = "Orange"
    YELLOW = "Yellow"
    GREEN = "Green"
    BLUE = "Blue"
    INDIGO = "Indigo"
    VIOLET = "Violet"
    CYCLE = "Cycle"


class Format(Enum):
    """Numeric data formats offered by the GTKWave data format menu."""

    HEX = "Hex"
    DECIMAL = "Decimal"
    SIGNED_DECIMAL = "SignedDecimal"
    BINARY = "Binary"


# Operations produced by the annotation tokenizer.


@dataclass(frozen=True)
class SetColor:
    color: Optional[Color]


@dataclass(frozen=True)
class SetFormat:
    format: Format


@dataclass(frozen=True)
class SetOmit:
    omit: bool


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class AddEmptyRow:
    pass


@dataclass(frozen=True)
class AddStandaloneSignal:
    name: str


Operation = Union[SetColor, SetFormat, SetOmit, Reset, AddEmptyRow, AddStandaloneSignal]


# Directives produced by the declaration walker.


@dataclass(frozen=True)
class Blank:
    """Visual spacer row."""


@dataclass(frozen=True)
class Show:
    """Display one signal with optional color and format."""

    name: str
    color: Optional[Color] = None
    format: Optional[Format] = None


Directive = Union[Blank, Show]


class _OmitMarker:
    def __repr__(self) -> str:
        return "OMIT"


OMIT = _OmitMarker()


@dataclass(frozen=True)
class Signal:
    """A resolved signal, shown or suppressed."""

    name: str
    declared_type: Optional[str]
    color: Optional[Color]
    format: Optional[Format]
    omit: bool = False
    standalone: bool = False

    @property
    def options(self) -> FrozenSet[object]:
        options: set[object] = set()
        if self.color is not None:
            options.add(self.color)
        if self.format is not None:
            options.add(self.format)
        if self.omit:
            options.add(OMIT)
        return frozenset(options)


@dataclass
class WalkResult:
    """Directives and resolved signals for one architecture body."""

    directives: List[Directive] = field(default_factory=list)
    signals: List[Signal] = field(default_factory=list)

    @property
    def shown(self) -> int:
        return sum(1 for directive in self.directives if isinstance(directive, Show))

    @property
    def suppressed(self) -> int:
        return sum(1 for signal in self.signals if signal.omit and not signal.standalone)


# Parsed VHDL design units.


@dataclass(frozen=True)
class ParsedSignal:
    """One name from a ``signal`` declaration."""

    name: str
    signal_type: str
    comment: Optional[str] = None


@dataclass(frozen=True)
class CommentPart:
    text: str


@dataclass(frozen=True)
class SignalPart:
    """A ``signal`` declaration; several names share one type and comment."""

    signals: Tuple[ParsedSignal, ...]

    @property
    def signal_type(self) -> str:
        return self.signals[0].signal_type

    @property
    def comment(self) -> Optional[str]:
        return self.signals[0].comment


ArchitecturePart = Union[CommentPart, SignalPart]


@dataclass
class ParsedArchitecture:
    """Architecture body reduced to its comments and signal declarations."""

    name: str
    entity_name: str
    parts: List[ArchitecturePart] = field(default_factory=list)

    def signal_names(self) -> List[str]:
        return [
            signal.name
            for part in self.parts
            if isinstance(part, SignalPart)
            for signal in part.signals
        ]


@dataclass
class ParsedEntity:
    """An entity and, once linked, its architecture."""

    name: str
    architecture: Optional[ParsedArchitecture] = None
    path: Optional[str] = None
