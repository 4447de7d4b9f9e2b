"""Text helpers: paste a grid of strings into one string, pull substrings out with a regex."""

import re
from typing import Callable, Optional, Tuple, Union

from tabstat.config import notify, stopif
from tabstat.table import Table

PruneFn = Callable[[Table, int, int, object], bool]


def text_paste(
    strings,
    between: str = " ",
    before: Optional[str] = None,
    after: Optional[str] = None,
    between_cols: Optional[str] = None,
    prune: Optional[PruneFn] = None,
    prune_parameter=None,
) -> str:
    """Join a grid of text into a single string.

    Parameters
    ----------
    strings : Table or 2-D sequence of str
        The text to combine; for a Table its ``text`` part is used.
    between : str
        Put between rows.  Default: a single space.
    before, after : str, optional
        Put at the head / tail of the result.
    between_cols : str, optional
        Put between the cells of one row.  Defaults to *between*.
    prune : callable, optional
        ``prune(table, row, col, prune_parameter)``; a cell is used only
        when this returns true.  A row left with no cells is skipped
        entirely, separator included.
    prune_parameter
        Passed through to *prune*.

    A None table, or one with no text, gives just ``before + after``.

    For example, a query from a list of column names::

        >>> text_paste([["age"], ["income"]], between=", ",
        ...            before="select ", after=" from survey")
        'select age, income from survey'
    """
    if between_cols is None:
        between_cols = between
    if strings is not None and not isinstance(strings, Table):
        strings = Table(text=strings)

    lines = []
    if strings is not None and strings.text is not None:
        n_rows, n_cols = strings.text.shape
        for i in range(n_rows):
            cells = [
                str(strings.text[i, j])
                for j in range(n_cols)
                if prune is None or prune(strings, i, j, prune_parameter)
            ]
            if cells:
                lines.append(between_cols.join(cells))

    out = (before or "") + between.join(lines) + (after or "")
    notify(3, out, where="text_paste")
    return out


def regex(
    string: Optional[str],
    pattern: Optional[str],
    substrings: bool = False,
    use_case: bool = False,
) -> Union[int, Tuple[int, Optional[Table]]]:
    """Search *string* for *pattern*, optionally returning the parenthesized groups.

    Without *substrings* the return is 1 on a match and 0 otherwise.

    With *substrings* the return is ``(count, table)``: every match of the
    pattern, scanning left to right, is one row of ``table.text`` and each
    group is one column.  A group that took part in no match is ``""``.
    No match gives a table with zero rows.  E.g. the pattern
    ``([A-Za-z])([0-9])`` on ``"a1 b2"`` gives rows ``["a", "1"]`` and
    ``["b", "2"]``.

    Matching is case-insensitive unless *use_case* is true.

    A None *string* counts as no match (with a None table).  A None or
    uncompilable *pattern* prints a diagnostic and returns -1.
    """
    if string is None:
        return (0, None) if substrings else 0
    if stopif(pattern is None, 0, "You gave me a None regex.", where="regex"):
        return (-1, None) if substrings else -1
    try:
        compiled = re.compile(pattern, 0 if use_case else re.IGNORECASE)
    except re.error as e:
        stopif(True, 0, f"This regular expression didn't compile: {pattern!r} ({e})",
               where="regex")
        return (-1, None) if substrings else -1

    if not substrings:
        return 1 if compiled.search(string) else 0

    rows = []
    for match in compiled.finditer(string):
        rows.append(["" if g is None else g for g in match.groups()])
        if match.end() == len(string):
            break
    return len(rows), Table(text=rows)
