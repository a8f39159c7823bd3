"""Writing and removing a dependency's definition files."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

from .constants import (
    AMBIENT_BROWSER_TYPINGS_DIR,
    AMBIENT_MAIN_TYPINGS_DIR,
    BROWSER_TYPINGS_DIR,
    DTS_BROWSER_FILE,
    DTS_MAIN_FILE,
    MAIN_TYPINGS_DIR,
    TYPINGS_DIR,
)
from .fs import mkdirp, remove_file, write_file
from .paths import to_definition
from .references import transform_references

log = logging.getLogger("typings_store")


@dataclass(frozen=True)
class DefinitionOptions:
    """Identifies one dependency's installed definitions."""

    cwd: str
    name: str
    ambient: bool = False


@dataclass(frozen=True)
class DependencyContents:
    main: str | None = None
    browser: str | None = None


@dataclass(frozen=True)
class DependencyLocation:
    main_file: str
    browser_file: str
    main_dts_file: str
    browser_dts_file: str


def get_dependency_location(options: DefinitionOptions) -> DependencyLocation:
    """Return where the definitions for *options* live.

    The same name and ambient flag always map to the same files.
    """
    cwd = os.path.abspath(options.cwd)
    typings_dir = os.path.join(cwd, TYPINGS_DIR)
    if options.ambient:
        main_dir, browser_dir = AMBIENT_MAIN_TYPINGS_DIR, AMBIENT_BROWSER_TYPINGS_DIR
    else:
        main_dir, browser_dir = MAIN_TYPINGS_DIR, BROWSER_TYPINGS_DIR
    filename = to_definition(options.name)

    return DependencyLocation(
        main_file=os.path.normpath(os.path.join(cwd, main_dir, filename)),
        browser_file=os.path.normpath(os.path.join(cwd, browser_dir, filename)),
        main_dts_file=os.path.join(typings_dir, DTS_MAIN_FILE),
        browser_dts_file=os.path.join(typings_dir, DTS_BROWSER_FILE),
    )


def _run_both(first: Callable[[], object], second: Callable[[], object]) -> None:
    """Run two independent steps in parallel; re-raise the first failure."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(first), pool.submit(second)]
    for future in futures:
        future.result()


def write_dependency(
    options: DefinitionOptions,
    contents: DependencyContents,
) -> DependencyLocation:
    """Write both definition files and register them in the reference lists.

    Installing the same dependency twice leaves a single reference to it.
    """
    location = get_dependency_location(options)

    mkdirp(os.path.dirname(location.main_file))
    mkdirp(os.path.dirname(location.browser_file))

    _run_both(
        lambda: write_file(location.main_file, contents.main or ""),
        lambda: write_file(location.browser_file, contents.browser or ""),
    )
    _run_both(
        lambda: transform_references(
            location.main_dts_file,
            lambda refs: refs + [location.main_file],
        ),
        lambda: transform_references(
            location.browser_dts_file,
            lambda refs: refs + [location.browser_file],
        ),
    )

    log.info(
        "Installed %s%s", options.name, " (ambient)" if options.ambient else ""
    )
    return location


def remove_dependency(options: DefinitionOptions) -> DependencyLocation:
    """Delete both definition files and drop them from the reference lists.

    Files that are already gone are not an error.
    """
    location = get_dependency_location(options)

    def remove(path: str) -> None:
        if not remove_file(path):
            log.warning("  %s was already removed", path)

    _run_both(
        lambda: remove(location.main_file),
        lambda: remove(location.browser_file),
    )
    _run_both(
        lambda: transform_references(
            location.main_dts_file,
            lambda refs: [ref for ref in refs if ref != location.main_file],
        ),
        lambda: transform_references(
            location.browser_dts_file,
            lambda refs: [ref for ref in refs if ref != location.browser_file],
        ),
    )

    log.info(
        "Removed %s%s", options.name, " (ambient)" if options.ambient else ""
    )
    return location
