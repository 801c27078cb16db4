"""
Atomic file-write utilities.

Prevents corrupted output when a process is interrupted mid-write by
writing to a temporary file in the same directory and then performing an
atomic ``os.replace()`` (POSIX rename guarantee).
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from typing import IO, Iterator


@contextmanager
def atomic_open(path: str | os.PathLike, newline: str = "\n") -> Iterator[IO[str]]:
    """Open *path* for text writing; the file appears only if the block succeeds.

    Lines are written to a temporary file in the same directory as *path*,
    which is moved into place with ``os.replace()`` when the ``with`` block
    exits normally. On any exception the temporary file is closed and
    removed, the destination is left untouched and the exception propagates.

    Parameters
    ----------
    path:
        Destination file path.
    newline:
        Line terminator translation passed to ``open`` (default ``"\\n"`` so
        output bytes are identical across platforms).
    """
    path = str(path)
    dir_path = os.path.dirname(path) or "."
    tmp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", dir=dir_path, suffix=".tmp", delete=False, newline=newline
        ) as tmp:
            tmp_path = tmp.name
            yield tmp
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
