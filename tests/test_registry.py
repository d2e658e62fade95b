import pytest

from apikit.directives import (
    CommentGroup,
    Context,
    Directive,
    InvalidTargetError,
    ParseFailureError,
    TagParser,
)
from apikit.registry import Registry, global_registry, register


class MockParser(TagParser):
    def __init__(
        self,
        name,
        matches=False,
        parse_value=None,
        parse_error=None,
        apply_error=None,
    ):
        self._name = name
        self._matches = matches
        self.parse_value = parse_value
        self.parse_error = parse_error
        self.apply_error = apply_error
        self.apply_called = False
        self.apply_target = None
        self.applied_value = None

    @property
    def name(self):
        return self._name

    @property
    def contexts(self):
        return (Context.ROUTE, Context.MODEL)

    def matches(self, comment, ctx):
        return self._matches

    def parse(self, comments, ctx):
        if self.parse_error is not None:
            raise self.parse_error
        return self.parse_value

    def apply(self, target, value, ctx):
        self.apply_called = True
        self.apply_target = target
        self.applied_value = value
        if self.apply_error is not None:
            raise self.apply_error


def comments():
    return CommentGroup(["// test"])


def test_new_registry_is_empty():
    assert Registry().count() == 0


def test_global_registry_is_shared():
    first = global_registry()
    second = global_registry()
    parser = MockParser("shared-global-parser")
    first.register(Directive.STR_FMT, parser)
    try:
        assert parser in second.get_parsers(Directive.STR_FMT)
        assert "shared-global-parser" in second.names()[Directive.STR_FMT]
    finally:
        first.unregister(Directive.STR_FMT, "shared-global-parser")
    assert parser not in second.get_parsers(Directive.STR_FMT)


def test_register_adds_to_global_registry():
    parser = MockParser("global-test-parser")
    register(Directive.STR_FMT, parser)
    try:
        assert parser in global_registry().get_parsers(Directive.STR_FMT)
    finally:
        global_registry().unregister(Directive.STR_FMT, "global-test-parser")
    assert parser not in global_registry().get_parsers(Directive.STR_FMT)


def test_register_and_get():
    r = Registry()
    r.register(Directive.ROUTE, MockParser("test"))
    parsers = r.get_parsers(Directive.ROUTE)
    assert len(parsers) == 1
    assert parsers[0].name == "test"


def test_unregister():
    r = Registry()
    r.register(Directive.ROUTE, MockParser("test"))
    r.unregister(Directive.ROUTE, "test")
    assert r.get_parsers(Directive.ROUTE) == []


def test_unregister_removes_only_first_with_name():
    r = Registry()
    r.register(Directive.ROUTE, MockParser("a"))
    r.register(Directive.ROUTE, MockParser("b"))
    r.register(Directive.ROUTE, MockParser("a"))
    r.unregister(Directive.ROUTE, "a")
    assert [p.name for p in r.get_parsers(Directive.ROUTE)] == ["b", "a"]


def test_names():
    r = Registry()
    r.register(Directive.ROUTE, MockParser("parser1"))
    r.register(Directive.ROUTE, MockParser("parser2"))
    r.register(Directive.MODEL, MockParser("parser3"))
    assert r.names() == {
        Directive.ROUTE: ["parser1", "parser2"],
        Directive.MODEL: ["parser3"],
    }


def test_count():
    r = Registry()
    r.register(Directive.ROUTE, MockParser("p1"))
    r.register(Directive.ROUTE, MockParser("p2"))
    r.register(Directive.MODEL, MockParser("p3"))
    assert r.count() == 3


def test_clear():
    r = Registry()
    r.register(Directive.ROUTE, MockParser("test"))
    assert r.count() == 1
    r.clear()
    assert r.count() == 0


def test_parse_nil_comments_does_not_call_parsers():
    r = Registry()
    parser = MockParser("test", matches=True)
    r.register(Directive.ROUTE, parser)
    r.parse(Directive.ROUTE, None, None, Context.ROUTE)
    assert parser.apply_called is False


def test_parse_no_parsers_leaves_target_unchanged():
    r = Registry()
    target = {}
    r.parse(Directive.ROUTE, comments(), target, Context.ROUTE)
    assert target == {}


def test_parse_with_matching_parser():
    r = Registry()
    parser = MockParser("test", matches=True, parse_value="parsed-value")
    r.register(Directive.ROUTE, parser)
    target = {}
    r.parse(Directive.ROUTE, comments(), target, Context.ROUTE)
    assert parser.apply_called
    assert parser.apply_target is target
    assert parser.applied_value == "parsed-value"


def test_parse_skips_non_matching_parser():
    r = Registry()
    parser = MockParser("test", matches=False)
    r.register(Directive.ROUTE, parser)
    r.parse(Directive.ROUTE, comments(), {}, Context.ROUTE)
    assert parser.apply_called is False


def test_parse_parser_error():
    r = Registry()
    cause = ValueError("parse error")
    r.register(Directive.ROUTE, MockParser("test", matches=True, parse_error=cause))
    with pytest.raises(ParseFailureError) as info:
        r.parse(Directive.ROUTE, comments(), None, Context.ROUTE)
    assert info.value.cause is cause
    assert info.value.parser_name == "test"


def test_parse_ignores_invalid_target_and_continues():
    r = Registry()
    first = MockParser(
        "first", matches=True, apply_error=InvalidTargetError("first", "X", "Y")
    )
    second = MockParser("second", matches=True, parse_value="v")
    r.register(Directive.ROUTE, first)
    r.register(Directive.ROUTE, second)
    r.parse(Directive.ROUTE, comments(), "target", Context.ROUTE)
    assert first.apply_called
    assert second.applied_value == "v"


def test_parse_propagates_other_apply_errors():
    r = Registry()
    r.register(
        Directive.ROUTE, MockParser("test", matches=True, apply_error=RuntimeError("boom"))
    )
    with pytest.raises(RuntimeError, match="boom"):
        r.parse(Directive.ROUTE, comments(), None, Context.ROUTE)


def test_parse_all():
    r = Registry()
    parser = MockParser("test", matches=True, parse_value="value")
    r.register(Directive.ROUTE, parser)
    target = {}
    r.parse_all(Directive.ROUTE, comments(), {Context.ROUTE: target})
    assert parser.apply_target is target
    assert parser.applied_value == "value"