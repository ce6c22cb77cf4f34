# utils/io.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

# -------- Path helpers --------
PathLike = Union[str, Path]


def to_path(p: PathLike) -> Path:
    """Convert string-like to pathlib.Path."""
    return p if isinstance(p, Path) else Path(p)


def ensure_parent(path: PathLike) -> Path:
    """Ensure parent directory exists for a file path."""
    p = to_path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


# -------- Text / JSON --------
def read_bytes(path: PathLike) -> bytes:
    """Read a whole file as bytes; decoding is left to the parser."""
    return to_path(path).read_bytes()


def write_text(path: PathLike, text: str, encoding: str = "utf-8") -> Path:
    """Write text atomically (via temp file then replace)."""
    p = ensure_parent(path)
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_text(text, encoding=encoding)
    tmp.replace(p)
    return p


def dump_json(data: Any, indent: int = 2) -> str:
    """Pretty JSON text, non-ASCII kept as is."""
    return json.dumps(data, ensure_ascii=False, indent=indent)


def write_json(path: PathLike, data: Any, indent: int = 2) -> Path:
    """Write JSON atomically, pretty-formatted."""
    return write_text(path, dump_json(data, indent=indent) + "\n")
