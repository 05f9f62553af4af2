#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Dominant color classification.

Every pixel casts votes: a gray pixel (r == g == b) votes once for each
channel, any other pixel votes for its largest channel, ties going to red,
then green, then blue. If the three totals end up equal the image is
grayscale; otherwise the largest total wins with the same tie-break.
"""

from typing import Any, Tuple

import numpy as np

from ..models.media_record import DominantColor


def channel_votes(pixels: Any) -> Tuple[int, int, int]:
    """Return the (red, green, blue) vote totals for a raster.

    ``pixels`` is anything numpy can turn into an array whose last axis holds
    at least three channels; extra channels such as alpha are ignored. The
    whole raster is scanned, no sampling.
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        return 0, 0, 0
    if arr.ndim < 2 or arr.shape[-1] < 3:
        raise ValueError(f"Expected pixels with 3+ channels, got shape {arr.shape}")

    rgb = arr.reshape(-1, arr.shape[-1])[:, :3]
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]

    gray = (r == g) & (g == b)
    peak = np.maximum(np.maximum(r, g), b)
    red_wins = ~gray & (r == peak)
    green_wins = ~gray & ~red_wins & (g == peak)
    blue_wins = ~gray & ~red_wins & ~green_wins

    n_gray = int(np.count_nonzero(gray))
    return (
        n_gray + int(np.count_nonzero(red_wins)),
        n_gray + int(np.count_nonzero(green_wins)),
        n_gray + int(np.count_nonzero(blue_wins)),
    )


def classify_votes(red: int, green: int, blue: int) -> DominantColor:
    if red == green == blue:
        return DominantColor.GRAYSCALE
    peak = max(red, green, blue)
    if red == peak:
        return DominantColor.RED
    if green == peak:
        return DominantColor.GREEN
    return DominantColor.BLUE


def classify(pixels: Any) -> DominantColor:
    """Classify a raster as RED, GREEN, BLUE or GRAYSCALE."""
    return classify_votes(*channel_votes(pixels))
