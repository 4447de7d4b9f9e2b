"""Command-line front end.

Two sub-commands::

    python scripts/run_tabstat.py sort --data survey.csv --key income --descending
    python scripts/run_tabstat.py percentiles --data survey.csv --column age --rounding a

``--key`` / ``--column`` take a numeric column index (0-based among the
numeric columns) or a column name.
"""

import argparse
import sys

from tabstat.loaders import load_table
from tabstat.sorting import data_sort, vector_percentiles
from tabstat.table import Table


def _column_key(table: Table, key: str) -> int:
    try:
        idx = int(key)
    except ValueError:
        if table.colnames and key in table.colnames:
            return table.colnames.index(key)
        print(f"No numeric column named {key!r}.", file=sys.stderr)
        sys.exit(1)
    if not table.has_column(idx):
        print(f"No numeric column {idx} (the table has {table.n_cols}).", file=sys.stderr)
        sys.exit(1)
    return idx


def _load(path: str) -> Table:
    try:
        return load_table(path)
    except (OSError, ValueError) as e:
        print(f"Could not read {path}: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Sort a data table by one column, or report a column's percentiles."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_sort = sub.add_parser("sort", help="Sort all rows by one numeric column")
    p_sort.add_argument("--data", required=True, help="Path to data file (.npy, .csv, .tsv)")
    p_sort.add_argument("--key", default="0", help="Column index or name to sort by (default: 0)")
    p_sort.add_argument("--descending", action="store_true", help="Sort in descending order")
    p_sort.add_argument("--out", default=None, help="Write the sorted table to this CSV file")

    p_pct = sub.add_parser("percentiles", help="Print the 0th..100th percentiles of a column")
    p_pct.add_argument("--data", required=True, help="Path to data file (.npy, .csv, .tsv)")
    p_pct.add_argument("--column", default="0", help="Column index or name (default: 0)")
    p_pct.add_argument(
        "--rounding", choices=["d", "u", "a"], default="d",
        help="Between two observations: round down, up, or average (default: d)",
    )
    args = parser.parse_args(argv)

    table = _load(args.data)

    if args.command == "sort":
        key = _column_key(table, args.key)
        data_sort(table, key, args.descending)
        if args.out:
            table.to_frame().to_csv(args.out, index=table.rownames is not None)
            print(f"Wrote {table.n_rows} sorted rows to {args.out}")
        else:
            print(table.show())
        return

    key = _column_key(table, args.column)
    pctiles = vector_percentiles(table.column(key), args.rounding)
    if pctiles is None:
        print("No values to take percentiles of.", file=sys.stderr)
        sys.exit(1)
    print(f"{'pct':>4s}  {'value':>12s}")
    print("-" * 18)
    for k, value in enumerate(pctiles):
        print(f"{k:4d}  {value:12.6g}")


if __name__ == "__main__":
    main()
