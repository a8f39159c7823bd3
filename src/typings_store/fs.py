"""Locked read-modify-write of files on disk."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

from filelock import SoftFileLock, Timeout

from .constants import LOCK_TIMEOUT
from .errors import IoError, LockError, NotFoundError

log = logging.getLogger("typings_store")

# Receives the current contents (None when the file does not exist yet)
# and returns the replacement contents.
TransformFn = Callable[[str | None], str]


@dataclass(frozen=True)
class Found:
    content: str


@dataclass(frozen=True)
class Absent:
    pass


def read_file_result(path: str | Path) -> Found | Absent:
    """Read *path* as text, reporting a missing file as ``Absent``.

    Any failure other than the file not existing raises ``IoError``.
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return Found(f.read())
    except FileNotFoundError:
        return Absent()
    except (OSError, UnicodeDecodeError) as exc:
        raise IoError(
            f"Unable to read file: {exc}", context={"path": str(path)}
        ) from exc


def read_file(path: str | Path) -> str:
    """Read *path* as text; raises ``NotFoundError`` when it is missing."""
    result = read_file_result(path)
    if isinstance(result, Absent):
        raise NotFoundError(
            "File does not exist", context={"path": str(path)}
        )
    return result.content


def is_file(path: str | Path) -> bool:
    """Return True if *path* exists and is a regular file."""
    try:
        return Path(path).is_file()
    except OSError:
        return False


def mkdirp(path: str | Path) -> None:
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IoError(
            f"Unable to create directory: {exc}", context={"path": str(path)}
        ) from exc


def write_file(path: str | Path, content: str) -> None:
    """Replace the contents of *path* with *content*."""
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as exc:
        raise IoError(
            f"Unable to write file: {exc}", context={"path": str(path)}
        ) from exc
    log.debug("  wrote %s", path)


def remove_file(path: str | Path) -> bool:
    """Delete *path*. Returns False if it was already absent."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise IoError(
            f"Unable to remove file: {exc}", context={"path": str(path)}
        ) from exc
    log.debug("  deleted %s", path)
    return True


@contextmanager
def locked(path: str | Path, timeout: float = LOCK_TIMEOUT) -> Iterator[None]:
    """Hold an exclusive lock on *path* for the ``with`` block.

    The ``<path>.lock`` sentinel is created on acquire and deleted on
    release.
    """
    lock_path = f"{path}.lock"
    lock = SoftFileLock(lock_path, timeout=timeout)
    try:
        lock.acquire()
    except Timeout as exc:
        raise LockError(
            "Timed out waiting for lock", context={"lock": lock_path}
        ) from exc
    except OSError as exc:
        raise LockError(
            f"Unable to acquire lock: {exc}", context={"lock": lock_path}
        ) from exc

    log.debug("Locked %s", lock_path)
    try:
        yield
    finally:
        lock.release()
        log.debug("Unlocked %s", lock_path)


def transform_file(
    path: str | Path,
    transform: TransformFn,
    *,
    timeout: float = LOCK_TIMEOUT,
) -> None:
    """Read, transform and rewrite *path* while holding its lock.

    A missing file is passed to *transform* as ``None``. The lock is
    released on every exit path, including when *transform* or the write
    raises.
    """
    mkdirp(Path(path).parent)

    with locked(path, timeout=timeout):
        result = read_file_result(path)
        current = result.content if isinstance(result, Found) else None
        write_file(path, transform(current))
