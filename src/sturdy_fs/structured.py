"""Structured data files: Python literals and JSON."""

from __future__ import annotations

import ast
import copy
import json
from pathlib import Path
from typing import Any

from .errors import InvalidArgumentError
from .file_io import read_text, write_text


def write_data(path: Any, value: Any, *, charset: Any = None, atomic: bool = False) -> Path:
    """Write *value* as a Python literal.

    Containers and scalars that ``ast.literal_eval`` understands round-trip,
    including sets and tuples. Anything else (infinities, ``Decimal``,
    ``Fraction``, self-referencing containers) raises InvalidArgumentError
    before the file is touched.
    """
    text = repr(value)
    try:
        parsed = ast.literal_eval(text)
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        raise InvalidArgumentError(
            f"Value is not a readable literal: {text[:80]}", {"type": type(value).__name__}
        ) from None
    if parsed != value:
        raise InvalidArgumentError(
            f"Value does not survive a literal round-trip: {text[:80]}", {"type": type(value).__name__}
        )
    return write_text(path, text + "\n", charset=charset, atomic=atomic)


def read_data(path: Any, charset: Any = None) -> Any:
    return ast.literal_eval(read_text(path, charset).strip())


def write_json(
    path: Any,
    data: Any,
    *,
    charset: Any = None,
    atomic: bool = False,
    indent: int | None = 2,
) -> Path:
    return write_text(
        path,
        json.dumps(data, indent=indent, ensure_ascii=False) + "\n",
        charset=charset,
        atomic=atomic,
    )


def read_json(path: Any, charset: Any = None, default: Any = None) -> Any:
    """Read a JSON document.

    *default* (copied) is returned only when the file does not exist;
    malformed content always raises.
    """
    try:
        text = read_text(path, charset)
    except FileNotFoundError:
        if default is None:
            raise
        return copy.deepcopy(default)
    return json.loads(text)
