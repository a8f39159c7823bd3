"""Manifest persistence (read/transform/init)."""

import logging
from pathlib import Path
from typing import Any, Callable

from .constants import CONFIG_FILE, DEFAULT_CONFIG, DEPENDENCY_KEYS
from .errors import StoreError
from .fs import is_file, transform_file
from .jsonio import (
    DEFAULT_INDENT,
    detect_indent,
    parse_json,
    read_json,
    stringify_json,
    strip_bom,
    write_json,
)

log = logging.getLogger("typings_store")


def transform_json(path: str | Path, transform: Callable[[Any], Any]) -> None:
    """Read, transform and rewrite a JSON file under its lock.

    *transform* receives None when the file does not exist or is empty.
    The original indentation and trailing newline are kept; new files get
    two spaces and a trailing newline.
    """
    def update(contents: str | None) -> str:
        text = strip_bom(contents or "")
        if not text:
            indent, newline, value = DEFAULT_INDENT, "\n", None
        else:
            indent = detect_indent(text) or DEFAULT_INDENT
            newline = "\n" if text.endswith("\n") else ""
            value = parse_json(text, str(path))

        return stringify_json(transform(value), indent) + newline

    transform_file(path, update)


def parse_manifest(manifest: Any, source: str) -> dict:
    """Check that *manifest* is a JSON object; its schema is not validated."""
    if not isinstance(manifest, dict):
        raise StoreError(
            "Manifest must be a JSON object",
            context={"source": source, "type": type(manifest).__name__},
        )
    return manifest


def read_manifest(path: str | Path) -> dict:
    """Load a manifest from a local path."""
    return parse_manifest(read_json(path), str(path))


def sort_dependencies(manifest: dict) -> dict:
    """Sort each dependency map present in *manifest* by name."""
    for key in DEPENDENCY_KEYS:
        if isinstance(manifest.get(key), dict):
            manifest[key] = dict(sorted(manifest[key].items()))
    return manifest


def transform_manifest(
    cwd: str | Path,
    transform: Callable[[dict], dict],
) -> None:
    """Read, mutate and rewrite ``typings.json`` in *cwd* under its lock.

    *transform* receives an empty dict when there is no manifest yet.
    """
    path = Path(cwd) / CONFIG_FILE

    def update(manifest: Any) -> dict:
        manifest = parse_manifest({} if manifest is None else manifest, str(path))
        return sort_dependencies(parse_manifest(transform(manifest), str(path)))

    transform_json(path, update)


def init_manifest(cwd: str | Path) -> Path:
    """Create a default ``typings.json`` in *cwd*; refuses to overwrite."""
    path = Path(cwd) / CONFIG_FILE
    if is_file(path):
        raise StoreError(
            f"A {CONFIG_FILE} file already exists", context={"path": str(path)}
        )
    write_json(path, dict(DEFAULT_CONFIG))
    log.info("Created %s", path)
    return path
