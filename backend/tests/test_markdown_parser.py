"""Test the markdown table parser."""

import pytest

from table_beautifier.services.markdown_parser import (
    generate_sample_markdown,
    is_valid_markdown_table,
    parse_markdown_table,
)


def test_parse_sample_table():
    """The sample table parses into four headers and four rows."""
    table = parse_markdown_table(generate_sample_markdown())

    assert table is not None
    assert table.headers == ["Name", "Age", "City", "Occupation"]
    assert len(table.rows) == 4
    assert table.rows[0] == ["John Doe", "25", "New York", "Designer"]
    assert all(len(row) == len(table.headers) for row in table.rows)


def test_parse_without_outer_pipes():
    """Tables without leading and trailing pipes are accepted."""
    table = parse_markdown_table("a | b\n--- | ---\n1 | 2")

    assert table is not None
    assert table.headers == ["a", "b"]
    assert table.rows == [["1", "2"]]


@pytest.mark.parametrize(
    "markdown",
    [
        "",
        "   ",
        "Just a paragraph of text.",
        "# Heading\n\n- a list item",
        "| a | b |\n| c | d |",
    ],
)
def test_parse_returns_none_without_table(markdown):
    """Input without a table block yields None instead of raising."""
    assert parse_markdown_table(markdown) is None


def test_parse_rejects_short_row():
    """A body row with fewer cells than headers rejects the whole table."""
    markdown = "| a | b | c |\n|---|---|---|\n| 1 | 2 | 3 |\n| 4 | 5 |"

    assert parse_markdown_table(markdown) is None


def test_parse_rejects_long_row():
    """A body row with more cells than headers rejects the whole table."""
    markdown = "| a | b |\n|---|---|\n| 1 | 2 | 3 |"

    assert parse_markdown_table(markdown) is None


def test_parse_uses_first_table_only():
    """Only the first table in the document is parsed."""
    markdown = (
        "| first | table |\n|---|---|\n| 1 | 2 |\n\n"
        "Some text between.\n\n"
        "| second | table | here |\n|---|---|---|\n| x | y | z |"
    )

    table = parse_markdown_table(markdown)

    assert table is not None
    assert table.headers == ["first", "table"]
    assert table.rows == [["1", "2"]]


def test_parse_header_only_table():
    """A table with a separator but no body rows keeps its headers."""
    table = parse_markdown_table("| a | b |\n|---|---|")

    assert table is not None
    assert table.headers == ["a", "b"]
    assert table.rows == []


def test_parse_escaped_pipe_stays_in_cell():
    """An escaped pipe is cell content, not a separator."""
    table = parse_markdown_table("| a | b |\n|---|---|\n| x \\| y | z |")

    assert table is not None
    assert table.rows == [["x | y", "z"]]


def test_parse_table_after_prose():
    """A table preceded by other markdown is still found."""
    markdown = "Intro paragraph.\n\n| h1 | h2 |\n|:---|---:|\n| l | r |"

    table = parse_markdown_table(markdown)

    assert table is not None
    assert table.headers == ["h1", "h2"]
    assert table.rows == [["l", "r"]]


@pytest.mark.parametrize(
    "markdown",
    [
        "> | a | b |\n> |---|---|\n> | 1 | 2 |",
        "> > | a | b |\n> > |---|---|\n> > | 1 | 2 |",
        ">| a | b |\n>|---|---|\n>| 1 | 2 |",
    ],
)
def test_parse_table_in_blockquote(markdown):
    """Quote markers are not counted as cells."""
    table = parse_markdown_table(markdown)

    assert table is not None
    assert table.headers == ["a", "b"]
    assert table.rows == [["1", "2"]]


def test_parse_rejects_ragged_row_in_blockquote():
    """Row width is still checked inside a blockquote."""
    assert parse_markdown_table("> | a | b |\n> |---|---|\n> | 1 | 2 | 3 |") is None


@pytest.mark.parametrize(
    "markdown, expected",
    [
        ("| a | b |\n|---|---|\n| 1 | 2 |", True),
        ("| a | b |\n|:--|--:|", True),
        ("a | b\n--- | ---", True),
        ("| a | b |", False),
        ("| a | b |\n| 1 | 2 |", False),
        ("", False),
    ],
)
def test_is_valid_markdown_table(markdown, expected):
    """The quick check only looks at the separator line."""
    assert is_valid_markdown_table(markdown) is expected
