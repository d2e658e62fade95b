import pytest

from apikit.directives import CommentGroup, Context, NoSetterForContextError, ParserType
from apikit.tagparsers import ListParser, MultiLineParser, SingleLineParser


def group(*comments):
    return CommentGroup(list(comments))


# Single-line parser


def test_single_line_matches():
    p = SingleLineParser("test", "summary:", [Context.ROUTE])
    assert p.matches("Summary: test", Context.ROUTE)
    assert p.matches("summary: test", Context.ROUTE)
    assert not p.matches("description: test", Context.ROUTE)
    assert not p.matches("summary: test", Context.MODEL)


@pytest.mark.parametrize(
    "comments, expected",
    [
        (["// summary: This is a summary"], "This is a summary"),
        (["//   summary:   Trimmed value  "], "Trimmed value"),
        (["// description: Not a summary"], ""),
        (["/* Summary: In a block */"], "In a block"),
        (["// other", "// SUMMARY: second line"], "second line"),
    ],
)
def test_single_line_parse(comments, expected):
    p = SingleLineParser("test", "summary:", [Context.ROUTE])
    assert p.parse(group(*comments), Context.ROUTE) == expected


def test_single_line_type():
    p = SingleLineParser("test", "summary:", [Context.ROUTE])
    assert p.parser_type is ParserType.SINGLE_LINE
    assert p.name == "test"


def test_single_line_apply():
    captured = []
    p = SingleLineParser(
        "test",
        "summary:",
        [Context.ROUTE],
        {Context.ROUTE: lambda target, value: captured.append(value)},
    )
    p.apply(None, "test value", Context.ROUTE)
    assert captured == ["test value"]


def test_single_line_apply_empty_value_skips_setter():
    captured = []
    p = SingleLineParser(
        "test",
        "summary:",
        [Context.ROUTE],
        {Context.ROUTE: lambda target, value: captured.append(value)},
    )
    p.apply(None, "", Context.ROUTE)
    assert captured == []


def test_single_line_apply_without_setter_raises():
    p = SingleLineParser("test", "summary:", [Context.ROUTE])
    with pytest.raises(NoSetterForContextError):
        p.apply(None, "value", Context.ROUTE)


# Multi-line parser


def test_multi_line_matches():
    p = MultiLineParser("test", "description:", [Context.ROUTE])
    assert p.matches("Description: test", Context.ROUTE)
    assert p.matches("description: test", Context.ROUTE)
    assert not p.matches("summary: test", Context.ROUTE)
    assert not p.matches("description: test", Context.MODEL)


@pytest.mark.parametrize(
    "comments, expected",
    [
        (["// description: Single line"], "Single line"),
        (["// description:", "// Line 1", "// Line 2"], "Line 1\nLine 2"),
        (
            ["// description:", "// Line 1", "// summary: Next directive"],
            "Line 1",
        ),
        (["// Description: First", "// Second"], "First\nSecond"),
        (["// nothing here"], ""),
    ],
)
def test_multi_line_parse(comments, expected):
    p = MultiLineParser("test", "description:", [Context.ROUTE])
    assert p.parse(group(*comments), Context.ROUTE) == expected


def test_multi_line_apply():
    captured = []
    p = MultiLineParser(
        "test",
        "description:",
        [Context.ROUTE],
        {Context.ROUTE: lambda target, value: captured.append((target, value))},
    )
    p.apply("target", "text", Context.ROUTE)
    p.apply("target", "", Context.ROUTE)
    assert captured == [("target", "text")]


# List parser


def test_list_matches():
    p = ListParser("test", "tags:", ",", [Context.ROUTE])
    assert p.matches("Tags: a, b", Context.ROUTE)
    assert not p.matches("summary: test", Context.ROUTE)
    assert not p.matches("tags: a", Context.META)


@pytest.mark.parametrize(
    "comments, expected",
    [
        (["// tags: a, b, c"], ["a", "b", "c"]),
        (["// tags:  item1 ,  item2 "], ["item1", "item2"]),
        (["// summary: test"], []),
        (["// tags: a,,b,"], ["a", "b"]),
    ],
)
def test_list_parse(comments, expected):
    p = ListParser("test", "tags:", ",", [Context.ROUTE])
    assert p.parse(group(*comments), Context.ROUTE) == expected


def test_list_parse_space_separator():
    p = ListParser("schemes", "schemes:", " ", [Context.META])
    assert p.parse(group("// Schemes: http  https"), Context.META) == ["http", "https"]


def test_list_apply():
    captured = []
    p = ListParser(
        "test",
        "tags:",
        ",",
        [Context.ROUTE],
        {Context.ROUTE: lambda target, value: captured.append(value)},
    )
    p.apply(None, ["a", "b"], Context.ROUTE)
    assert captured == [["a", "b"]]


def test_list_apply_empty_list_skips_setter():
    captured = []
    p = ListParser(
        "test",
        "tags:",
        ",",
        [Context.ROUTE],
        {Context.ROUTE: lambda target, value: captured.append(value)},
    )
    p.apply(None, [], Context.ROUTE)
    p.apply(None, "not a list", Context.ROUTE)
    assert captured == []