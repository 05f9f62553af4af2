"""Decoder capabilities and their Pillow / PyAV backends."""

from .base import (
    ColorModel, Raster, StreamKind, StreamDescriptor, ContainerInfo,
    ImageDecoder, VideoDecoder,
)

__all__ = [
    'ColorModel', 'Raster', 'StreamKind', 'StreamDescriptor', 'ContainerInfo',
    'ImageDecoder', 'VideoDecoder',
]
