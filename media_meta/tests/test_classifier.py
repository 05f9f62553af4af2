#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for dominant color classification.
"""

import numpy as np
import pytest

from media_meta.models.media_record import DominantColor
from media_meta.scanning.classifier import channel_votes, classify, classify_votes


class TestChannelVotes:

    def test_two_by_two_scenario(self):
        """Two red pixels, one green, one blue."""
        pixels = [[(255, 0, 0), (255, 0, 0)], [(0, 255, 0), (0, 0, 255)]]
        assert channel_votes(pixels) == (2, 1, 1)
        assert classify(pixels) is DominantColor.RED

    def test_gray_pixel_votes_for_every_channel(self):
        assert channel_votes([(7, 7, 7)]) == (1, 1, 1)

    def test_pixel_tie_prefers_red_then_green(self):
        pixels = [(200, 200, 10), (10, 200, 200), (200, 10, 200)]
        # red/green tie -> red, green/blue tie -> green, red/blue tie -> red
        assert channel_votes(pixels) == (2, 1, 0)

    def test_alpha_channel_is_ignored(self):
        pixels = np.array([[[0, 0, 255, 0], [0, 0, 255, 255]]], dtype=np.uint8)
        assert channel_votes(pixels) == (0, 0, 2)

    def test_empty_raster_has_no_votes(self):
        assert channel_votes(np.zeros((0, 0, 3), dtype=np.uint8)) == (0, 0, 0)

    def test_rejects_single_channel_input(self):
        with pytest.raises(ValueError):
            channel_votes(np.zeros((2, 2, 1), dtype=np.uint8))


class TestClassify:

    @pytest.mark.parametrize("value", [0, 1, 128, 255])
    def test_all_gray_is_grayscale(self, value):
        pixels = np.full((5, 7, 3), value, dtype=np.uint8)
        assert classify(pixels) is DominantColor.GRAYSCALE

    @pytest.mark.parametrize("pixel,expected", [
        ((250, 3, 9), DominantColor.RED),
        ((3, 250, 9), DominantColor.GREEN),
        ((3, 9, 250), DominantColor.BLUE),
    ])
    def test_single_dominant_pixel(self, pixel, expected):
        assert classify([pixel]) is expected

    def test_single_colored_pixel_among_gray(self):
        pixels = np.full((3, 3, 3), 90, dtype=np.uint8)
        pixels[1, 1] = (10, 20, 30)
        assert classify(pixels) is DominantColor.BLUE

    def test_equal_votes_without_gray_pixels_is_grayscale(self):
        pixels = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]
        assert classify(pixels) is DominantColor.GRAYSCALE

    def test_aggregate_tie_prefers_red(self):
        pixels = [(255, 0, 0), (0, 255, 0)]
        assert classify(pixels) is DominantColor.RED

    def test_aggregate_tie_green_over_blue(self):
        pixels = [(0, 255, 0), (0, 0, 255)]
        assert classify(pixels) is DominantColor.GREEN

    def test_full_resolution_scan(self):
        """A lone red column decides a wide image only if every pixel is counted."""
        pixels = np.zeros((100, 101, 3), dtype=np.uint8)
        pixels[:, :, 2] = 200   # blue everywhere
        pixels[:, :51, 0] = 255  # red dominates 51 of 101 columns
        assert classify(pixels) is DominantColor.RED

    def test_is_deterministic(self):
        rng = np.random.default_rng(1234)
        pixels = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
        assert classify(pixels) is classify(pixels.copy())


class TestClassifyVotes:

    def test_all_equal(self):
        assert classify_votes(3, 3, 3) is DominantColor.GRAYSCALE

    def test_strict_max(self):
        assert classify_votes(1, 2, 3) is DominantColor.BLUE

    def test_grayscale_tags(self):
        assert DominantColor.GRAYSCALE.tags == ("red", "green", "blue")
        assert DominantColor.GREEN.tags == ("green",)
