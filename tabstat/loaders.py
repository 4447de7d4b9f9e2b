"""Read a data file into a :class:`~tabstat.table.Table`.

``.npy`` files become a matrix-only table.  Everything else is read with
``pandas.read_csv``: numeric columns land in the matrix, the rest in the
text grid (see :meth:`Table.from_frame`).  The separator is taken from the
extension (``.csv`` comma, ``.tsv``/``.tab`` tab) unless given, and left
for pandas to sniff otherwise.

Remote ``http(s)://`` paths are downloaded once into the cache directory
and read from there afterwards.
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import numpy as np
import pandas as pd

from tabstat.config import CACHE_DIR, notify
from tabstat.table import Table
from tabstat.utils import download_if_needed

_SEPARATORS = {".csv": ",", ".tsv": "\t", ".tab": "\t"}


def _localize(path: str, cache_dir: Path) -> Path:
    if not path.startswith(("http://", "https://")):
        return Path(path)
    name = Path(urlparse(path).path).name or "download"
    return download_if_needed(path, str(cache_dir / name))


def load_table(
    path: str,
    *,
    sep: Optional[str] = None,
    index_col=None,
    cache_dir: Optional[Path] = None,
) -> Table:
    """Load *path* (local file or URL) as a Table.

    Parameters
    ----------
    path : str
        File path or http(s) URL.
    sep : str, optional
        Field separator; by default inferred from the extension.
    index_col : int or str, optional
        Column to use as row names (forwarded to ``pandas.read_csv``).
    cache_dir : Path, optional
        Where downloads go; defaults to ``config.CACHE_DIR``.
    """
    local = _localize(str(path), Path(cache_dir) if cache_dir is not None else CACHE_DIR)
    suffix = local.suffix.lower()
    if suffix == ".npy":
        table = Table(matrix=np.load(local))
    else:
        if sep is None:
            sep = _SEPARATORS.get(suffix)
        df = pd.read_csv(local, sep=sep, index_col=index_col,
                         engine="python" if sep is None else "c")
        table = Table.from_frame(df)
    notify(2, f"{local}: {table.n_rows} rows, {table.n_cols} numeric and "
              f"{table.n_text_cols} text columns", where="load_table")
    return table
