"""Tests for text pasting and regex extraction."""

import pytest

from tabstat.config import InvalidInputError, opts
from tabstat.table import Table
from tabstat.text import regex, text_paste


def test_paste_builds_a_query() -> None:
    cols = [["age"], ["income"], ["region"]]
    query = text_paste(cols, between=", ", before="select ", after=" from survey")
    assert query == "select age, income, region from survey"


def test_paste_grid_with_row_and_column_separators() -> None:
    grid = Table(text=[["1", "2"], ["3", "4"]])
    assert text_paste(grid, between="\n", between_cols=",") == "1,2\n3,4"
    assert text_paste(grid) == "1 2 3 4"


def test_paste_html_table_body() -> None:
    grid = [["a", "b"], ["c", "d"]]
    body = text_paste(
        grid,
        between="</td></tr>\n<tr><td>",
        between_cols="</td><td>",
        before="<tr><td>",
        after="</td></tr>",
    )
    assert body == "<tr><td>a</td><td>b</td></tr>\n<tr><td>c</td><td>d</td></tr>"


def test_prune_selects_cells() -> None:
    grid = [["1", "2"], ["3", "4"]]
    only_col = text_paste(grid, prune=lambda t, i, j, keep: j == keep, prune_parameter=1)
    assert only_col == "2 4"


def test_prune_drops_empty_rows_with_their_separator() -> None:
    grid = [["", ""], ["x", "y"], ["", "z"]]
    not_blank = text_paste(grid, between="|", between_cols=",",
                           prune=lambda t, i, j, _: t.text[i, j] != "")
    assert not_blank == "x,y|z"


def test_paste_of_nothing() -> None:
    assert text_paste(None, before="<", after=">") == "<>"
    assert text_paste(Table(matrix=[[1.0]])) == ""


def test_paste_echoes_at_high_verbosity(capsys) -> None:
    opts.verbose = 3
    text_paste([["hello"]])
    assert "hello" in capsys.readouterr().err


def test_regex_match_count_without_substrings() -> None:
    assert regex("p values", "p.val") == 1
    assert regex("P value", "p.val") == 1
    assert regex("P value", "p.val", use_case=True) == 0
    assert regex("nothing here", "p.val") == 0


def test_regex_returns_every_match_as_a_row() -> None:
    count, table = regex("a1 b2 c3", "([a-z])([0-9])", substrings=True)
    assert count == 3
    assert table.text.tolist() == [["a", "1"], ["b", "2"], ["c", "3"]]


def test_regex_list_parsing() -> None:
    count, table = regex("apple, banana, cherry", "([a-z]+)", substrings=True)
    assert count == 3
    assert table.text[:, 0].tolist() == ["apple", "banana", "cherry"]


def test_regex_unmatched_group_is_blank() -> None:
    count, table = regex("ab", "(a)(x)?", substrings=True)
    assert count == 1
    assert table.text.tolist() == [["a", ""]]


def test_regex_no_match_gives_empty_table() -> None:
    count, table = regex("xyz", "([0-9])", substrings=True)
    assert count == 0
    assert table.n_rows == 0


def test_regex_none_string_is_no_match() -> None:
    assert regex(None, "a") == 0
    assert regex(None, "a", substrings=True) == (0, None)


def test_regex_bad_pattern(capsys) -> None:
    assert regex("abc", None) == -1
    assert regex("abc", "(unclosed") == -1
    assert regex("abc", "(unclosed", substrings=True) == (-1, None)
    assert "didn't compile" in capsys.readouterr().err


def test_regex_bad_pattern_raises_when_strict() -> None:
    opts.stop_on_warning = True
    with pytest.raises(InvalidInputError):
        regex("abc", "(unclosed")
