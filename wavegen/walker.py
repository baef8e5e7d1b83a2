"""Resolves an architecture's comments and declarations into display directives."""

from __future__ import annotations

from typing import Collection, List, Optional

from .annotations import DEFAULT_VECTOR_TYPES, DisplayContext, parse_comment, split_head
from .logging import get_logger
from .models import (
    AddEmptyRow,
    ArchitecturePart,
    Blank,
    CommentPart,
    ParsedArchitecture,
    Show,
    Signal,
    SignalPart,
    WalkResult,
)


class DeclarationWalker:
    """Walks architecture parts in source order, threading one ambient context.

    A comment part either introduces a standalone signal (when its first
    instruction is ``add signal``) or updates the ambient context for every
    following declaration. A trailing comment on a declaration only affects
    that declaration.
    """

    def __init__(self, vector_types: Collection[str] = DEFAULT_VECTOR_TYPES) -> None:
        self.vector_types = tuple(vector_types)
        self.logger = get_logger("walker")

    def walk(self, architecture: ParsedArchitecture) -> WalkResult:
        return self.walk_parts(architecture.parts)

    def walk_parts(self, parts: List[ArchitecturePart]) -> WalkResult:
        ambient = DisplayContext()
        result = WalkResult()
        for part in parts:
            if isinstance(part, CommentPart):
                self._visit_comment(part, ambient, result)
            elif isinstance(part, SignalPart):
                self._visit_declaration(part, ambient, result)
        self.logger.debug(
            "Resolved %d directives (%d shown, %d suppressed)",
            len(result.directives),
            result.shown,
            result.suppressed,
        )
        return result

    def _visit_comment(self, part: CommentPart, ambient: DisplayContext, result: WalkResult) -> None:
        operations = parse_comment(part.text)
        if not operations:
            return
        name, rest = split_head(operations)
        if name is not None:
            # Injected signals are always shown and never touch the ambient context.
            color, fmt, _ = ambient.fork(rest).resolve(None, self.vector_types)
            result.signals.append(
                Signal(name=name, declared_type=None, color=color, format=fmt, standalone=True)
            )
            result.directives.append(Show(name=name, color=color, format=fmt))
            return

        for operation in rest:
            if isinstance(operation, AddEmptyRow):
                result.directives.append(Blank())
            else:
                ambient.update([operation])

    def _visit_declaration(self, part: SignalPart, ambient: DisplayContext, result: WalkResult) -> None:
        context = ambient
        comment = part.comment
        if comment is not None:
            context = ambient.fork(parse_comment(comment))
        color, fmt, omit = context.resolve(part.signal_type, self.vector_types)

        for declared in part.signals:
            result.signals.append(
                Signal(
                    name=declared.name,
                    declared_type=declared.signal_type,
                    color=color,
                    format=fmt,
                    omit=omit,
                )
            )
            if omit:
                self.logger.debug("Omitting signal %s", declared.name)
                continue
            result.directives.append(Show(name=declared.name, color=color, format=fmt))


def resolve_directives(
    architecture: ParsedArchitecture,
    vector_types: Optional[Collection[str]] = None,
) -> WalkResult:
    """Convenience wrapper around :class:`DeclarationWalker`."""
    walker = DeclarationWalker(vector_types if vector_types is not None else DEFAULT_VECTOR_TYPES)
    return walker.walk(architecture)


__all__ = ["DeclarationWalker", "resolve_directives"]
