"""General-purpose helpers shared across lexnorm modules."""

from __future__ import annotations

import json
from pathlib import Path

from .logging import get_logger

_LOGGER = get_logger(module=__name__)


def to_sentence_case(text: str) -> str:
    """Upper-case the first character and lower-case the rest."""

    if not text:
        return text
    lowered = text.lower()
    return lowered[0].upper() + lowered[1:]


def ensure_directory(path: Path | str) -> Path:
    """Ensure that a directory exists and return the resolved Path."""

    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target.resolve()


def serialize_json(data: object, destination: Path | str, *, indent: int = 2) -> Path:
    """Serialize data to JSON with deterministic ordering."""

    dest_path = Path(destination)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    dest_path.write_text(
        json.dumps(data, indent=indent, sort_keys=True, ensure_ascii=False, default=str) + "\n",
        encoding="utf-8",
    )
    _LOGGER.debug("Serialized JSON", path=str(dest_path), size=dest_path.stat().st_size)
    return dest_path


__all__ = [
    "to_sentence_case",
    "ensure_directory",
    "serialize_json",
]
