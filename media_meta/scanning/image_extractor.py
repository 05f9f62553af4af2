#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Image metadata extraction for the Media Metadata Tool.
"""

import logging
from pathlib import Path
from typing import Optional

from ..errors import DecodeError
from ..models.media_record import ImageRecord, MediaKind, Orientation, create_record
from ..decoders.base import ImageDecoder
from .classifier import classify

logger = logging.getLogger(__name__)

IMAGE_TAG = "image"


def extension_tag(filename: str) -> Optional[str]:
    """Text after the last dot, case preserved; None for names like 'a', '.rc' or 'a.'."""
    pos = filename.rfind(".")
    if pos <= 0 or pos == len(filename) - 1:
        return None
    return filename[pos + 1:]


def orientation_for(width: int, height: int) -> Orientation:
    """Square images count as portrait."""
    return Orientation.LANDSCAPE if width > height else Orientation.PORTRAIT


class ImageExtractor:
    """Derives an ImageRecord from one image file."""

    media_kind = MediaKind.IMAGE

    def __init__(self, decoder: Optional[ImageDecoder] = None):
        if decoder is None:
            from ..decoders.pillow_backend import PillowImageDecoder
            decoder = PillowImageDecoder()
        self.decoder = decoder

    def accepts(self, path: Path) -> bool:
        # Any file is attempted; undecodable ones fail in extract()
        return True

    def extract(self, path: Path) -> ImageRecord:
        path = Path(path)
        raster = self.decoder.decode(path)
        if raster is None:
            raise DecodeError(f"No raster decoded from {path}", path)

        record = create_record(MediaKind.IMAGE, path)
        record.width = raster.width
        record.height = raster.height
        record.add_tag(IMAGE_TAG)

        ext = extension_tag(path.name)
        if ext:
            record.add_tag(ext)

        record.orientation = orientation_for(raster.width, raster.height)

        model = raster.color_model
        if model is not None:
            record.num_components = model.num_components
            record.num_color_components = model.num_color_components
            record.color_space_type = model.color_space_type
            record.pixel_size = model.pixel_size
            record.transparency = model.transparency

            if raster.pixels is None:
                raise DecodeError(f"Decoder exposed a color model but no pixels for {path}", path)
            try:
                record.dominant_color = classify(raster.pixels)
            except ValueError as e:
                raise DecodeError(f"Unusable pixel data in {path}: {e}", path) from e
            for tag in record.dominant_color.tags:
                record.add_tag(tag)

        logger.debug("Extracted image metadata for %s: %dx%d %s",
                     path, record.width, record.height, record.orientation.value)
        return record


def extract_image(path: Path, decoder: Optional[ImageDecoder] = None) -> ImageRecord:
    """Convenience wrapper around ImageExtractor.extract."""
    return ImageExtractor(decoder).extract(path)
