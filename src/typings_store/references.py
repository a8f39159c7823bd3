"""Reference-list files: one ``/// <reference path="..." />`` per definition."""

import logging
import re
from pathlib import Path
from typing import Callable

from .fs import transform_file
from .paths import resolve_reference_path, to_reference_path

log = logging.getLogger("typings_store")

REFERENCE_RE = re.compile(
    r"""^///[ \t]*<reference[ \t]+path[ \t]*=[ \t]*(["'])(.*?)\1.*?/>[ \t]*\r?$""",
    re.MULTILINE,
)


def parse_references(contents: str | None, cwd: str | Path) -> list[str]:
    """Return the absolute paths declared in *contents*.

    Lines that are not reference directives are skipped.
    """
    if not contents:
        return []
    return [
        resolve_reference_path(match.group(2), cwd)
        for match in REFERENCE_RE.finditer(contents)
    ]


def stringify_references(paths: list[str], cwd: str | Path) -> str:
    """Render one directive per path, relative to *cwd*, in the given order."""
    return "".join(
        f'/// <reference path="{to_reference_path(path, cwd)}" />\n'
        for path in paths
    )


def transform_references(
    path: str | Path,
    transform: Callable[[list[str]], list[str]],
) -> None:
    """Update the reference list at *path* under its file lock.

    The result of *transform* is deduplicated and sorted before it is
    written, whatever order it comes back in.
    """
    cwd = Path(path).parent

    def update(contents: str | None) -> str:
        references = transform(parse_references(contents, cwd))
        unique = {str(ref) for ref in references}
        log.debug("  %s now declares %d reference(s)", path, len(unique))
        return stringify_references(sorted(unique), cwd)

    transform_file(path, update)
