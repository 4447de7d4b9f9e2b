"""Command-line wrapper around tabstat.cli.

Lets ``python scripts/run_tabstat.py`` work from the repository root without
installing the package.

Usage::

    python scripts/run_tabstat.py sort --data data/survey.csv --key 2 --descending
    python scripts/run_tabstat.py percentiles --data data/survey.csv --column income
"""

import os
import sys

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, REPO_ROOT)

from tabstat.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
