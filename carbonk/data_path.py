"""Paths relative to the directory of the running program."""

from __future__ import annotations

import functools
import os
import sys


@functools.lru_cache(maxsize=None)
def _program_dir() -> str:
    program = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return os.path.dirname(os.path.abspath(program))


def data_path(suffix: str, base: str | None = None) -> str:
    """Join ``suffix`` onto ``base``, which defaults to the running program's directory."""
    directory = _program_dir() if base is None else str(base)
    return f"{directory}/{suffix}"