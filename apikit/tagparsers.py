"""Generic single-line, multi-line and list parsers for directive comments."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

from apikit.directives import (
    BaseParser,
    CommentGroup,
    Context,
    ParserType,
    Setter,
    TagParser,
)


def _strip_markers(comment: str) -> str:
    text = comment.removeprefix("//")
    text = text.removeprefix("/*")
    text = text.removesuffix("*/")
    return text.strip()


def _prefix_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(r"\s*" + re.escape(prefix) + r"\s*(.*)", re.IGNORECASE)


class SingleLineParser(BaseParser, TagParser):
    """Reads a value that follows a prefix on one line, such as "Summary: text"."""

    def __init__(
        self,
        name: str,
        prefix: str,
        contexts: Optional[Iterable[Context]] = None,
        setters: Optional[Mapping[Context, Setter]] = None,
    ) -> None:
        super().__init__(name, ParserType.SINGLE_LINE, contexts, setters)
        self._pattern = _prefix_pattern(prefix)
        self.prefix = prefix.lower()

    def matches(self, comment: str, ctx: Context) -> bool:
        return self.supports_context(ctx) and self.prefix in comment.lower()

    def parse(self, comments: CommentGroup, ctx: Context) -> str:
        for comment in comments.comments:
            found = self._pattern.fullmatch(_strip_markers(comment))
            if found:
                return found.group(1).strip()
        return ""

    def apply(self, target: Any, value: Any, ctx: Context) -> None:
        if value == "":
            return
        self.apply_with_setter(target, value, ctx)


class MultiLineParser(BaseParser, TagParser):
    """Collects the lines after a prefix up to the next directive line."""

    def __init__(
        self,
        name: str,
        prefix: str,
        contexts: Optional[Iterable[Context]] = None,
        setters: Optional[Mapping[Context, Setter]] = None,
    ) -> None:
        super().__init__(name, ParserType.MULTI_LINE, contexts, setters)
        self.prefix = prefix.lower()

    def matches(self, comment: str, ctx: Context) -> bool:
        return self.supports_context(ctx) and self.prefix in comment.lower()

    def parse(self, comments: CommentGroup, ctx: Context) -> str:
        lines: list[str] = []
        collecting = False
        for comment in comments.comments:
            text = _strip_markers(comment)
            if text.lower().startswith(self.prefix):
                collecting = True
                after = text[len(self.prefix):].strip()
                if after:
                    lines.append(after)
                continue
            if collecting:
                if ":" in text and not text.startswith(" "):
                    break
                lines.append(text)
        return "\n".join(lines)

    def apply(self, target: Any, value: Any, ctx: Context) -> None:
        if value == "":
            return
        self.apply_with_setter(target, value, ctx)


class ListParser(BaseParser, TagParser):
    """Reads a separator-delimited list that follows a prefix."""

    def __init__(
        self,
        name: str,
        prefix: str,
        separator: str,
        contexts: Optional[Iterable[Context]] = None,
        setters: Optional[Mapping[Context, Setter]] = None,
    ) -> None:
        super().__init__(name, ParserType.LIST, contexts, setters)
        self._pattern = _prefix_pattern(prefix)
        self.prefix = prefix.lower()
        self.separator = separator

    def matches(self, comment: str, ctx: Context) -> bool:
        return self.supports_context(ctx) and self.prefix in comment.lower()

    def parse(self, comments: CommentGroup, ctx: Context) -> list[str]:
        for comment in comments.comments:
            text = comment.removeprefix("//").strip()
            found = self._pattern.fullmatch(text)
            if found:
                value = found.group(1).strip()
                items = (item.strip() for item in value.split(self.separator))
                return [item for item in items if item]
        return []

    def apply(self, target: Any, value: Any, ctx: Context) -> None:
        if not isinstance(value, list) or not value:
            return
        self.apply_with_setter(target, value, ctx)