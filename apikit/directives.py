"""Directive contexts, parser errors, comment groups and the parser base classes."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Iterable, Mapping, Optional

Setter = Callable[[Any, Any], None]


class Context(str, Enum):
    """Where a comment is being parsed."""

    META = "meta"
    ROUTE = "route"
    MODEL = "model"
    FIELD = "field"
    PARAMETER = "parameter"
    ENUM = "enum"


class Directive(str, Enum):
    """A swagger directive found in source comments."""

    META = "swagger:meta"
    ROUTE = "swagger:route"
    MODEL = "swagger:model"
    PARAMETERS = "swagger:parameters"
    ENUM = "swagger:enum"
    ALL_OF = "swagger:allOf"
    STR_FMT = "swagger:strfmt"


class ParserType(IntEnum):
    """How a parser reads its comment lines."""

    SINGLE_LINE = 0
    MULTI_LINE = 1
    YAML = 2
    JSON = 3
    LIST = 4
    KEY_VALUE = 5


def _quote(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return json.dumps(str(value), ensure_ascii=False)


class NoSetterForContextError(Exception):
    """A parser has no setter for the requested context."""

    def __init__(self, parser_name: str, context: Context) -> None:
        self.parser_name = parser_name
        self.context = context
        super().__init__(
            f"parser {_quote(parser_name)} has no setter for context {_quote(context)}"
        )


class InvalidTargetError(Exception):
    """The target object is not of the type a parser expects."""

    def __init__(self, parser_name: str, expected_type: str, actual_type: str) -> None:
        self.parser_name = parser_name
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"parser {_quote(parser_name)} expected target of type "
            f"{expected_type}, got {actual_type}"
        )


class ParseFailureError(Exception):
    """A parser failed to read its value."""

    def __init__(self, parser_name: str, context: Context, cause: BaseException) -> None:
        self.parser_name = parser_name
        self.context = context
        self.cause = cause
        super().__init__(
            f"parser {_quote(parser_name)} failed in context {_quote(context)}: {cause}"
        )
        self.__cause__ = cause


class ParserNotFoundError(Exception):
    """No parser is registered for a directive."""

    def __init__(self, directive: Directive) -> None:
        self.directive = directive
        super().__init__(f"no parsers registered for directive {_quote(directive)}")


_DIRECTIVE_RE = re.compile(r"[a-z0-9]+:[a-z0-9]")
_TRAILING_WS = " \t\n\r"


def _is_directive(text: str) -> bool:
    if text.startswith(("line ", "extern ", "export ")):
        return True
    return _DIRECTIVE_RE.match(text) is not None


@dataclass
class CommentGroup:
    """A run of raw source comments, each still carrying its markers."""

    comments: list[str] = field(default_factory=list)

    def text(self) -> str:
        """Return the comment text without markers, tool directives or extra blank lines."""
        raw_lines: list[str] = []
        for comment in self.comments:
            if comment.startswith("//"):
                body = comment[2:]
                if body.startswith(" "):
                    body = body[1:]
                elif _is_directive(body):
                    continue
            elif comment.startswith("/*"):
                body = comment[2:-2]
            else:
                body = comment
            raw_lines.extend(body.split("\n"))

        lines: list[str] = []
        for line in (raw.rstrip(_TRAILING_WS) for raw in raw_lines):
            if not line and (not lines or not lines[-1]):
                continue
            lines.append(line)
        while lines and not lines[-1]:
            lines.pop()
        if not lines:
            return ""
        return "\n".join(lines) + "\n"


class TagParser(ABC):
    """Interface of a parser for one kind of directive line."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the parser."""

    @property
    @abstractmethod
    def contexts(self) -> tuple[Context, ...]:
        """Contexts the parser applies to."""

    @abstractmethod
    def matches(self, comment: str, ctx: Context) -> bool:
        """Whether this parser handles the comment text in the given context."""

    @abstractmethod
    def parse(self, comments: CommentGroup, ctx: Context) -> Any:
        """Extract the parser's value from the comments."""

    @abstractmethod
    def apply(self, target: Any, value: Any, ctx: Context) -> None:
        """Store a parsed value on the target."""


class BaseParser:
    """Name, contexts and per-context setters shared by concrete parsers."""

    def __init__(
        self,
        name: str,
        parser_type: ParserType,
        contexts: Optional[Iterable[Context]] = None,
        setters: Optional[Mapping[Context, Setter]] = None,
    ) -> None:
        self._name = name
        self._parser_type = parser_type
        self._contexts = tuple(contexts or ())
        self._setters = dict(setters or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def contexts(self) -> tuple[Context, ...]:
        return self._contexts

    @property
    def parser_type(self) -> ParserType:
        return self._parser_type

    def supports_context(self, ctx: Context) -> bool:
        return ctx in self._contexts

    def get_setter(self, ctx: Context) -> Optional[Setter]:
        """Return the setter for a context, or None if there is none."""
        return self._setters.get(ctx)

    def apply_with_setter(self, target: Any, value: Any, ctx: Context) -> None:
        """Apply a value through the context's setter."""
        setter = self.get_setter(ctx)
        if setter is None:
            raise NoSetterForContextError(self._name, ctx)
        setter(target, value)