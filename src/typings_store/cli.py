"""Command-line interface."""

import argparse
import logging
import os
import sys

from .constants import HTTP_CACHE_DIR, PROJECT_NAME
from .errors import StoreError
from .http import HttpCache, ResourceReader
from .installer import (
    DefinitionOptions,
    DependencyContents,
    remove_dependency,
    write_dependency,
)
from .manifest import init_manifest, transform_manifest
from .paths import is_http

log = logging.getLogger("typings_store")


def _save_key(args: argparse.Namespace) -> str | None:
    if args.save_ambient:
        return "ambientDependencies"
    if args.save_dev:
        return "devDependencies"
    if args.save:
        return "dependencies"
    return None


def _resolve_location(location: str, cwd: str) -> str:
    """Resolve a local *location* against the project directory."""
    if is_http(location):
        return location
    return os.path.join(cwd, location)


def _add_save_flags(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--save", "-S",
        action="store_true",
        help="Record the dependency under 'dependencies'.",
    )
    group.add_argument(
        "--save-dev", "-D",
        action="store_true",
        help="Record the dependency under 'devDependencies'.",
    )
    group.add_argument(
        "--save-ambient", "-A",
        action="store_true",
        help="Record the dependency under 'ambientDependencies'.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"{PROJECT_NAME}-store",
        description="Manage definition files and the typings.json manifest.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log lock, cache and file activity.",
    )
    parser.add_argument(
        "--cwd",
        default=os.getcwd(),
        help="Project directory (default: current directory).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create a typings.json manifest.")

    install = sub.add_parser("install", help="Install a dependency's definitions.")
    install.add_argument("name", help="Dependency name.")
    install.add_argument(
        "--main",
        required=True,
        help="Path or URL of the main definition file.",
    )
    install.add_argument(
        "--browser",
        help="Path or URL of the browser definition file "
        "(defaults to the main definition).",
    )
    install.add_argument(
        "--ambient",
        action="store_true",
        help="Install as an ambient (global) dependency.",
    )
    install.add_argument(
        "--source",
        help="Source specifier to record in the manifest "
        "(defaults to --main).",
    )
    _add_save_flags(install)

    uninstall = sub.add_parser("uninstall", help="Remove a dependency's definitions.")
    uninstall.add_argument("name", help="Dependency name.")
    uninstall.add_argument(
        "--ambient",
        action="store_true",
        help="Remove an ambient (global) dependency.",
    )
    _add_save_flags(uninstall)

    return parser


def run(args: argparse.Namespace, reader: ResourceReader | None = None) -> None:
    """Execute a parsed command."""
    if args.command == "init":
        init_manifest(args.cwd)
        return

    options = DefinitionOptions(cwd=args.cwd, name=args.name, ambient=args.ambient)
    save_key = _save_key(args)

    if args.command == "install":
        reader = reader or ResourceReader(cache=HttpCache(HTTP_CACHE_DIR))
        main = reader.read_from(_resolve_location(args.main, args.cwd))
        browser = (
            reader.read_from(_resolve_location(args.browser, args.cwd))
            if args.browser else main
        )
        write_dependency(options, DependencyContents(main=main, browser=browser))

        if save_key:
            source = args.source or args.main

            def add(manifest: dict) -> dict:
                manifest.setdefault(save_key, {})[args.name] = source
                return manifest

            transform_manifest(args.cwd, add)
            log.info("Saved %s to %s", args.name, save_key)
        return

    if args.command == "uninstall":
        remove_dependency(options)

        if save_key:
            def drop(manifest: dict) -> dict:
                deps = manifest.get(save_key)
                if isinstance(deps, dict):
                    deps.pop(args.name, None)
                return manifest

            transform_manifest(args.cwd, drop)
            log.info("Removed %s from %s", args.name, save_key)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if args.verbose:
        log.setLevel(logging.DEBUG)

    try:
        run(args)
    except (StoreError, ValueError) as exc:
        log.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
