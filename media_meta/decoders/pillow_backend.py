#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pillow image decoder.
"""

import logging
import warnings
from pathlib import Path
from typing import Dict, Tuple

import numpy as np
from PIL import Image

from ..errors import DecodeError
from ..models.media_record import ColorSpaceType, Transparency
from .base import ColorModel, ImageDecoder, Raster

logging.getLogger("PIL.TiffImagePlugin").setLevel(logging.WARNING)
logging.getLogger("PIL.PngImagePlugin").setLevel(logging.WARNING)

# Suppress PIL warnings
warnings.filterwarnings("ignore", category=UserWarning,
                        message=".*Palette images with Transparency expressed in bytes.*")

logger = logging.getLogger(__name__)

# mode -> (bits per pixel, color space)
_MODE_INFO: Dict[str, Tuple[int, ColorSpaceType]] = {
    "1": (1, ColorSpaceType.GRAY),
    "L": (8, ColorSpaceType.GRAY),
    "LA": (16, ColorSpaceType.GRAY),
    "La": (16, ColorSpaceType.GRAY),
    "I": (32, ColorSpaceType.GRAY),
    "I;16": (16, ColorSpaceType.GRAY),
    "I;16L": (16, ColorSpaceType.GRAY),
    "I;16B": (16, ColorSpaceType.GRAY),
    "I;16N": (16, ColorSpaceType.GRAY),
    "F": (32, ColorSpaceType.GRAY),
    "P": (8, ColorSpaceType.RGB),
    "PA": (16, ColorSpaceType.RGB),
    "RGB": (24, ColorSpaceType.RGB),
    "RGBA": (32, ColorSpaceType.RGB),
    "RGBa": (32, ColorSpaceType.RGB),
    "RGBX": (32, ColorSpaceType.RGB),
    "CMYK": (32, ColorSpaceType.CMYK),
    "YCbCr": (24, ColorSpaceType.YCBCR),
    "LAB": (24, ColorSpaceType.LAB),
    "HSV": (24, ColorSpaceType.HSV),
}

_ALPHA_BANDS = {"A", "a"}


def color_model_for(img: Image.Image) -> ColorModel:
    """Describe the color model of an opened Pillow image.

    Palette images report the components of their palette; the pixel size
    stays the size of the index.
    """
    mode = img.mode
    if mode not in _MODE_INFO:
        raise DecodeError(f"Unsupported image mode {mode!r}")
    pixel_size, color_space = _MODE_INFO[mode]

    bands = img.getbands()
    if mode in ("P", "PA") and img.palette is not None:
        bands = tuple(img.palette.mode) + (("A",) if mode == "PA" else ())
    bands = tuple(b for b in bands if b != "X")

    has_alpha = any(b in _ALPHA_BANDS for b in bands)
    if has_alpha:
        transparency = Transparency.TRANSLUCENT
    elif "transparency" in img.info:
        transparency = Transparency.BITMASK
    else:
        transparency = Transparency.OPAQUE

    return ColorModel(
        num_components=len(bands),
        num_color_components=len(bands) - (1 if has_alpha else 0),
        color_space_type=color_space,
        pixel_size=pixel_size,
        transparency=transparency,
    )


def rgb_pixels(img: Image.Image) -> np.ndarray:
    """Return an ``(h, w, 3)`` view of the image's red/green/blue values."""
    if len(img.getbands()) == 1 and img.mode != "P":
        # Single band: every pixel is gray, no need to expand through RGB
        gray = np.asarray(img)
        return np.broadcast_to(gray[..., None], gray.shape + (3,))
    return np.asarray(img.convert("RGB"))


class PillowImageDecoder(ImageDecoder):
    """Decode any format Pillow can read."""

    def decode(self, path: Path) -> Raster:
        try:
            with Image.open(path) as img:
                img.load()
                width, height = img.size
                color_model = color_model_for(img)
                pixels = rgb_pixels(img)
        except DecodeError as e:
            e.path = Path(path)
            raise
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            # UnidentifiedImageError is an OSError
            raise DecodeError(f"Cannot decode image {path}: {e}", path) from e

        logger.debug("Decoded %s: %dx%d mode=%s", path, width, height, color_model.color_space_type.value)
        return Raster(width=width, height=height, color_model=color_model, pixels=pixels)
