#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Sidecar text store for media records.

One UTF-8 file per source file, one ``key: value`` pair per line. The first
line is ``type: image|video``; each tag gets its own ``tag:`` line and unset
fields are left out.
"""

import dataclasses
import logging
import typing
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Type, Union

from ..config import SIDECAR_SUFFIX
from ..errors import SerializationError
from ..models.media_record import MediaKind, MediaRecord, RECORD_TYPES

logger = logging.getLogger(__name__)

TYPE_KEY = "type"
TAG_KEY = "tag"
_SKIPPED_FIELDS = {"tags"}


def sidecar_name(kind: MediaKind, source_name: str) -> str:
    return f"{MediaKind(kind).prefix}_{source_name}{SIDECAR_SUFFIX}"


def sidecar_path(kind: MediaKind, source: Union[str, Path], output_dir: Union[str, Path]) -> Path:
    """Deterministic sidecar location for ``source`` inside ``output_dir``."""
    return Path(output_dir) / sidecar_name(kind, Path(source).name)


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _check_line_value(key: str, text: str) -> str:
    if "\n" in text or "\r" in text:
        raise SerializationError(f"Value for '{key}' contains a line break")
    return text


def serialize(record: MediaRecord) -> str:
    """Render a record as sidecar text."""
    lines = [f"{TYPE_KEY}: {record.kind.value}"]
    for f in dataclasses.fields(record):
        if f.name in _SKIPPED_FIELDS:
            continue
        value = getattr(record, f.name)
        if value is None:
            continue
        lines.append(f"{f.name}: {_check_line_value(f.name, _format_value(value))}")
    for tag in record.tags:
        lines.append(f"{TAG_KEY}: {_check_line_value(TAG_KEY, tag)}")
    return "\n".join(lines) + "\n"


def _converter(hint: Any) -> Callable[[str], Any]:
    """Build a str -> value converter from a dataclass field annotation."""
    args = [a for a in typing.get_args(hint) if a is not type(None)]
    target = args[0] if typing.get_origin(hint) is Union and args else hint
    if isinstance(target, type) and issubclass(target, Enum):
        return target
    if target is int:
        return int
    return str


def _converters(record_type: Type[MediaRecord]) -> Dict[str, Callable[[str], Any]]:
    hints = typing.get_type_hints(record_type)
    return {
        f.name: _converter(hints[f.name])
        for f in dataclasses.fields(record_type)
        if f.name not in _SKIPPED_FIELDS
    }


def deserialize(text: str) -> MediaRecord:
    """Parse sidecar text back into a record. Unknown keys are ignored."""
    values: Dict[str, str] = {}
    tags: List[str] = []
    for lineno, raw in enumerate(text.split("\n"), start=1):
        raw = raw.rstrip("\r")
        if not raw.strip():
            continue
        key, sep, value = raw.partition(":")
        if not sep:
            raise SerializationError(f"Line {lineno} is not a 'key: value' pair: {raw!r}")
        key = key.strip()
        value = value[1:] if value.startswith(" ") else value
        if key == TAG_KEY:
            tags.append(value)
        else:
            values[key] = value

    try:
        kind = MediaKind(values.pop(TYPE_KEY))
    except KeyError:
        raise SerializationError("Sidecar has no 'type' line") from None
    except ValueError as e:
        raise SerializationError(f"Unknown media type: {e}") from e

    record_type = RECORD_TYPES[kind]
    kwargs: Dict[str, Any] = {}
    for name, convert in _converters(record_type).items():
        if name not in values:
            continue
        try:
            kwargs[name] = convert(values[name])
        except ValueError as e:
            raise SerializationError(f"Bad value for '{name}': {values[name]!r}") from e

    if "name" not in kwargs:
        raise SerializationError("Sidecar has no 'name' line")

    record = record_type(**kwargs)
    for tag in tags:
        record.add_tag(tag)
    return record


def write_record(record: MediaRecord, path: Path) -> Path:
    """Write (or overwrite) a sidecar file."""
    text = serialize(record)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise SerializationError(f"Could not write {path}: {e}", path) from e
    logger.debug("Wrote sidecar %s", path)
    return Path(path)


def read_record(path: Path) -> MediaRecord:
    """Load a record from an existing sidecar file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SerializationError(f"Could not read {path}: {e}", path) from e
    try:
        return deserialize(text)
    except SerializationError as e:
        if e.path is None:
            e.path = Path(path)
        raise
