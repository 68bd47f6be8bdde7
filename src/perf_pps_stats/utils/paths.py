"""Path utilities.

Helpers to normalize report and output paths given on the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def resolve_cli_path(value: Optional[str], cwd: Path) -> Optional[str]:
    """
    Return an absolute path string for a user-provided path.

    Parameters
    ----------
    value : str or None
        Path value from the command line or config. May be absolute or
        relative. ``None``, empty strings and ``null`` yield ``None``; ``-``
        (stdin) is returned unchanged.
    cwd : pathlib.Path
        Base directory to resolve relative paths against.

    Returns
    -------
    str or None
        Absolute path string if the input was non-empty; otherwise ``None``.
    """

    if value is None:
        return None
    s = str(value).strip()
    if not s or s.lower() == "null":
        return None
    if s == "-":
        return s
    p = Path(s)
    if p.is_absolute():
        return str(p.resolve())
    base = cwd if isinstance(cwd, Path) else Path(str(cwd))
    return str((base / p).resolve())

