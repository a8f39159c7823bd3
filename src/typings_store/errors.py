"""Error types raised by the persistence layer.

Every error carries a ``context`` mapping (path, url, status, ...) that is
rendered under the message so a failure always names the resource it
came from.
"""

from collections.abc import Mapping


class StoreError(Exception):
    """Base error with a message and resource context."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [self.message]
        for key, value in self.context.items():
            if value is not None:
                parts.append(f"  {key}: {value}")
        return "\n".join(parts)


class NotFoundError(StoreError, FileNotFoundError):
    """A local resource does not exist."""


class IoError(StoreError, OSError):
    """A read, write, mkdir or unlink failed for a reason other than absence."""


class LockError(StoreError):
    """The lock guarding a file could not be acquired."""


class HttpStatusError(StoreError):
    """A remote read returned something other than 200."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(
            f"Unexpected HTTP status {status}",
            context={"url": url, "status": status},
        )
        self.url = url
        self.status = status


class ParseError(StoreError, ValueError):
    """Text could not be parsed; carries where it came from."""

    def __init__(
        self,
        message: str,
        *,
        source: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(
            message,
            context={"source": source, "line": line, "column": column},
        )
        self.source = source
        self.line = line
        self.column = column
