#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data structures for media metadata records.

A record is created empty by ``create_record`` for one source file, filled
in by an extractor and then handed to the sidecar store.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, List, Optional, Tuple, Type, Union

from ..config import IMAGE_PREFIX, VIDEO_PREFIX


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"

    @property
    def prefix(self) -> str:
        return IMAGE_PREFIX if self is MediaKind.IMAGE else VIDEO_PREFIX


class Orientation(str, Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class ColorSpaceType(str, Enum):
    RGB = "rgb"
    GRAY = "gray"
    CMYK = "cmyk"
    YCBCR = "ycbcr"
    LAB = "lab"
    HSV = "hsv"


class Transparency(str, Enum):
    OPAQUE = "opaque"
    BITMASK = "bitmask"
    TRANSLUCENT = "translucent"


class DominantColor(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    GRAYSCALE = "grayscale"

    @property
    def tags(self) -> Tuple[str, ...]:
        """Tags contributed to a record; grayscale images get all three."""
        if self is DominantColor.GRAYSCALE:
            return ("red", "green", "blue")
        return (self.value,)


@dataclass
class MediaRecord:
    """Common part of every record: identity of the source file plus tags."""
    kind: ClassVar[MediaKind]

    name: str
    path: str = ""
    tags: List[str] = field(default_factory=list)

    def add_tag(self, tag: str) -> None:
        """Add a tag, ignoring empty strings and repeats."""
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass
class ImageRecord(MediaRecord):
    kind: ClassVar[MediaKind] = MediaKind.IMAGE

    width: Optional[int] = None
    height: Optional[int] = None
    orientation: Optional[Orientation] = None

    # Color model; left unset when the decoder exposes none
    num_components: Optional[int] = None
    num_color_components: Optional[int] = None
    color_space_type: Optional[ColorSpaceType] = None
    pixel_size: Optional[int] = None
    transparency: Optional[Transparency] = None
    dominant_color: Optional[DominantColor] = None


@dataclass
class VideoRecord(MediaRecord):
    kind: ClassVar[MediaKind] = MediaKind.VIDEO

    # Container level
    duration: Optional[int] = None  # microseconds
    file_size: Optional[int] = None  # bytes
    bit_rate: Optional[int] = None

    # Audio: audio_channels counts audio streams, not channels per stream
    audio_codec_id: Optional[str] = None
    audio_channels: int = 0
    audio_sample_rate: Optional[int] = None
    audio_bit_rate: Optional[int] = None

    # Video
    video_codec_id: Optional[str] = None
    video_codec: Optional[str] = None
    video_frame_rate: Optional[int] = None
    video_width: Optional[int] = None
    video_height: Optional[int] = None
    video_length: Optional[int] = None  # seconds


RECORD_TYPES: Dict[MediaKind, Type[MediaRecord]] = {
    MediaKind.IMAGE: ImageRecord,
    MediaKind.VIDEO: VideoRecord,
}


def create_record(kind: MediaKind, path: Union[str, Path]) -> MediaRecord:
    """Create an empty record of the given kind for a source file."""
    path = Path(path)
    return RECORD_TYPES[MediaKind(kind)](name=path.name, path=str(path))


def kind_for_sidecar(filename: str) -> Optional[MediaKind]:
    """Infer the media kind from a sidecar file name prefix."""
    for kind in MediaKind:
        if filename.startswith(kind.prefix + "_"):
            return kind
    return None
