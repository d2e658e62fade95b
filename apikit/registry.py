"""Thread-safe registry of directive parsers."""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional

from apikit.directives import (
    CommentGroup,
    Context,
    Directive,
    InvalidTargetError,
    ParseFailureError,
    TagParser,
)


class Registry:
    """Parsers registered per directive, run in registration order."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._parsers: dict[Directive, list[TagParser]] = {}

    def register(self, directive: Directive, parser: TagParser) -> None:
        """Add a parser for a directive."""
        with self._lock:
            self._parsers.setdefault(directive, []).append(parser)

    def unregister(self, directive: Directive, parser_name: str) -> None:
        """Remove the first parser with the given name from a directive."""
        with self._lock:
            parsers = self._parsers.get(directive, [])
            for index, parser in enumerate(parsers):
                if parser.name == parser_name:
                    del parsers[index]
                    return

    def get_parsers(self, directive: Directive) -> list[TagParser]:
        """Return the parsers registered for a directive."""
        with self._lock:
            return list(self._parsers.get(directive, []))

    def parse(
        self,
        directive: Directive,
        comments: Optional[CommentGroup],
        target: Any,
        ctx: Context,
    ) -> None:
        """Run every matching parser of a directive and apply values to the target.

        Parsers whose target type does not fit are skipped silently.
        """
        if comments is None:
            return
        parsers = self.get_parsers(directive)
        if not parsers:
            return

        comment_text = comments.text()
        for parser in parsers:
            if not parser.matches(comment_text, ctx):
                continue
            try:
                value = parser.parse(comments, ctx)
            except Exception as exc:
                raise ParseFailureError(parser.name, ctx, exc) from exc
            try:
                parser.apply(target, value, ctx)
            except InvalidTargetError:
                continue

    def parse_all(
        self,
        directive: Directive,
        comments: Optional[CommentGroup],
        targets: Mapping[Context, Any],
    ) -> None:
        """Run parse for each context with its own target."""
        for ctx, target in targets.items():
            self.parse(directive, comments, target, ctx)

    def names(self) -> dict[Directive, list[str]]:
        """Return the names of the parsers registered for each directive."""
        with self._lock:
            return {
                directive: [parser.name for parser in parsers]
                for directive, parsers in self._parsers.items()
            }

    def clear(self) -> None:
        """Remove every registered parser."""
        with self._lock:
            self._parsers = {}

    def count(self) -> int:
        """Return the total number of registered parsers."""
        with self._lock:
            return sum(len(parsers) for parsers in self._parsers.values())


_GLOBAL_REGISTRY = Registry()


def global_registry() -> Registry:
    """Return the process-wide registry."""
    return _GLOBAL_REGISTRY


def register(directive: Directive, parser: TagParser) -> None:
    """Add a parser to the process-wide registry."""
    _GLOBAL_REGISTRY.register(directive, parser)