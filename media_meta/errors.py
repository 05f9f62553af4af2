#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exception types for the Media Metadata Tool.

PathError is fatal for a whole batch call. The others are raised while
handling a single file and are collected per entry by the batch pipeline.
"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class MediaMetaError(Exception):
    """Base class for all errors raised by media_meta."""

    def __init__(self, message: str, path: Optional[PathLike] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class PathError(MediaMetaError):
    """Input or output path is missing or of the wrong type."""


class DecodeError(MediaMetaError):
    """A file could not be decoded as its expected media kind."""


class ContainerOpenError(MediaMetaError):
    """A video container could not be opened."""


class SerializationError(MediaMetaError):
    """A sidecar record could not be read or written."""
