"""Location helpers: scheme detection and definition file naming."""

import os
from pathlib import Path
from urllib.parse import urlparse


def is_http(location: str) -> bool:
    """Return True if *location* is an ``http`` or ``https`` URL."""
    return urlparse(location).scheme in ("http", "https")


def to_definition(name: str) -> str:
    """Return the definition file name for dependency *name*.

    Example: ``lodash`` → ``lodash.d.ts``
    """
    if not name or name in (".", "..") or "\\" in name:
        raise ValueError(f"Invalid dependency name: {name!r}")
    if any(part in ("", ".", "..") for part in name.split("/")):
        raise ValueError(f"Invalid dependency name: {name!r}")
    return f"{name}.d.ts"


def to_reference_path(path: str | Path, cwd: str | Path) -> str:
    """Express *path* relative to *cwd* with forward slashes."""
    return os.path.relpath(path, cwd).replace(os.sep, "/")


def resolve_reference_path(reference: str, cwd: str | Path) -> str:
    """Resolve a declared *reference* against *cwd* to an absolute path."""
    return os.path.normpath(os.path.join(os.path.abspath(cwd), reference))
