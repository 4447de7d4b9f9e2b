"""Small helpers shared across the package: downloads and shell commands."""

import subprocess
from pathlib import Path

import requests

from tabstat.config import notify


def download_if_needed(url: str, local_path: str, *, timeout: int = 120, chunk_mb: int = 4) -> Path:
    """Download a remote file to *local_path* if it does not already exist.

    Streams the response so large files are never held in memory at once.

    Parameters
    ----------
    url : str
        Remote URL to fetch.
    local_path : str
        Local filesystem destination; parent directories are created.
    timeout : int
        Connection timeout in seconds.
    chunk_mb : int
        Download chunk size in megabytes.
    """
    path = Path(local_path)
    if path.exists():
        return path
    path.parent.mkdir(parents=True, exist_ok=True)
    notify(1, f"Downloading {url} -> {local_path}", where="download")
    r = requests.get(url, stream=True, timeout=timeout)
    r.raise_for_status()
    chunk_size = chunk_mb * 1024 * 1024
    # Only a finished download is ever visible at *path*.
    part = path.with_name(path.name + ".part")
    try:
        with open(part, "wb") as f:
            for chunk in r.iter_content(chunk_size=chunk_size):
                if chunk:
                    f.write(chunk)
    except BaseException:
        part.unlink(missing_ok=True)
        raise
    part.replace(path)
    notify(2, "Download complete.", where="download")
    return path


def system(fmt: str, *args) -> int:
    """Run a shell command built printf-style; return its exit status.

    >>> system("ls -l %s", "tabstat/utils.py")  # doctest: +SKIP
    0
    """
    cmd = fmt % args if args else fmt
    return subprocess.call(cmd, shell=True)
