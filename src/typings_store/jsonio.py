"""JSON parsing and serialization that keeps a file's formatting."""

import json
from collections import Counter
from pathlib import Path
from typing import Any

from .errors import ParseError
from .fs import read_file, write_file

DEFAULT_INDENT = "  "


def strip_bom(text: str) -> str:
    """Remove a leading UTF-8 byte-order mark, if present."""
    return text[1:] if text.startswith("\ufeff") else text


def parse_json(text: str, source: str) -> Any:
    """Parse *text* as JSON, raising ``ParseError`` tagged with *source*."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON: {exc.msg}",
            source=str(source),
            line=exc.lineno,
            column=exc.colno,
        ) from exc


def detect_indent(text: str) -> str | None:
    """Return the indentation unit used in *text*, or None if there is none.

    Counts the change in leading whitespace between consecutive non-blank
    lines and picks the most frequent step; ties go to the step seen first.
    """
    steps: Counter[str] = Counter()
    prev_char, prev_width = " ", 0

    for line in text.splitlines():
        if not line.strip():
            continue
        char = "\t" if line.startswith("\t") else " "
        width = len(line) - len(line.lstrip(char))
        delta = abs(width - prev_width) if char == prev_char else width
        if delta:
            steps[char * delta] += 1
        prev_char, prev_width = char, width

    if not steps:
        return None
    return steps.most_common(1)[0][0]


def stringify_json(value: Any, indent: str | int = DEFAULT_INDENT) -> str:
    """Serialize *value* the way ``JSON.stringify(value, null, indent)`` does."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def read_json(path: str | Path) -> Any:
    """Read and parse a local JSON file."""
    return parse_json(strip_bom(read_file(path)), str(path))


def write_json(path: str | Path, value: Any, indent: str | int = DEFAULT_INDENT) -> None:
    """Write *value* to *path* as JSON, without taking the file lock."""
    write_file(path, stringify_json(value, indent) + "\n")
