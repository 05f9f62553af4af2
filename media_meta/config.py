#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Global configuration and constants for the Media Metadata Tool.
"""

import os
from dataclasses import dataclass
from typing import Set

# Sidecar naming: <prefix>_<original filename><suffix>
IMAGE_PREFIX = "img"
VIDEO_PREFIX = "vid"
SIDECAR_SUFFIX = ".txt"

# Video containers accepted by the video pipeline (matched case-insensitively)
VIDEO_EXT: Set[str] = {"avi", "swf", "asf", "flv", "mp4"}

# Container durations are reported in microseconds
MICROSECONDS_PER_SECOND = 1_000_000

# Processing defaults
DEFAULT_WORKERS = 1
WORKERS_ENV_VAR = "MEDIA_META_WORKERS"


def default_workers() -> int:
    """Worker count from the environment, falling back to DEFAULT_WORKERS."""
    raw = os.getenv(WORKERS_ENV_VAR, "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_WORKERS
    return value if value > 0 else DEFAULT_WORKERS


@dataclass
class PipelineSettings:
    """Knobs for a batch run."""
    overwrite: bool = False
    workers: int = DEFAULT_WORKERS
    show_progress: bool = False

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
