#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Decoder capability interfaces.

Extractors only see these types, so any backend (or an in-memory fake in
tests) can stand behind them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from ..models.media_record import ColorSpaceType, Transparency


@dataclass
class ColorModel:
    """Color properties of a decoded raster."""
    num_components: int
    num_color_components: int
    color_space_type: ColorSpaceType
    pixel_size: int  # bits per pixel
    transparency: Transparency


@dataclass
class Raster:
    """A decoded image: dimensions, optional color model and RGB pixels.

    ``pixels`` is array-like with a trailing channel axis, e.g. ``(h, w, 3)``
    or ``(n, 3)``; the first three channels are read as red, green, blue.
    """
    width: int
    height: int
    color_model: Optional[ColorModel] = None
    pixels: Any = None


class StreamKind(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
    OTHER = "other"


@dataclass
class StreamDescriptor:
    kind: StreamKind
    codec_id: Optional[str] = None
    codec_name: Optional[str] = None
    frame_rate: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    sample_rate: Optional[int] = None
    bit_rate: Optional[int] = None


@dataclass
class ContainerInfo:
    """Container-level facts plus one descriptor per stream, in index order.

    A ``None`` entry in ``streams`` means the backend could not describe that
    stream.
    """
    stream_count: int
    duration: Optional[int] = None  # microseconds
    file_size: Optional[int] = None
    bit_rate: Optional[int] = None
    streams: List[Optional[StreamDescriptor]] = field(default_factory=list)


class ImageDecoder(ABC):
    """Turns an image file into a Raster."""

    @abstractmethod
    def decode(self, path: Path) -> Raster:
        """Decode ``path``; raise DecodeError if no raster can be produced."""


class VideoDecoder(ABC):
    """Opens a video container and describes its streams."""

    @abstractmethod
    def open(self, path: Path) -> ContainerInfo:
        """Probe ``path``; raise ContainerOpenError if it cannot be opened."""
