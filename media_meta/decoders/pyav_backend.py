#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PyAV (FFmpeg) video container probe.

Only container and codec headers are read; no frame is decoded.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import av

from ..errors import ContainerOpenError
from .base import ContainerInfo, StreamDescriptor, StreamKind, VideoDecoder

logger = logging.getLogger(__name__)

_KINDS = {"audio": StreamKind.AUDIO, "video": StreamKind.VIDEO}


def _positive(value) -> Optional[int]:
    return int(value) if value else None


def describe_stream(stream) -> Optional[StreamDescriptor]:
    """Build a descriptor from a PyAV stream, or None if it has no codec context."""
    kind = _KINDS.get(stream.type, StreamKind.OTHER)
    if kind is StreamKind.OTHER:
        return StreamDescriptor(kind=kind)

    ctx = stream.codec_context
    if ctx is None:
        return None

    codec = ctx.codec
    descriptor = StreamDescriptor(
        kind=kind,
        codec_id=str(codec.id) if codec is not None else None,
        codec_name=ctx.name,
        bit_rate=_positive(ctx.bit_rate) or _positive(getattr(stream, "bit_rate", None)),
    )
    if kind is StreamKind.VIDEO:
        rate = stream.average_rate or stream.guessed_rate
        descriptor.frame_rate = float(rate) if rate else None
        descriptor.width = _positive(ctx.width)
        descriptor.height = _positive(ctx.height)
    else:
        descriptor.sample_rate = _positive(ctx.sample_rate)
    return descriptor


class PyAVVideoDecoder(VideoDecoder):

    def open(self, path: Path) -> ContainerInfo:
        try:
            container = av.open(str(path))
        except (av.error.FFmpegError, OSError, ValueError) as e:
            raise ContainerOpenError(f"Failed to open media file {path}: {e}", path) from e

        with container:
            streams = list(container.streams)
            size = getattr(container, "size", None)
            if not size or size < 0:
                size = os.path.getsize(path)
            info = ContainerInfo(
                stream_count=len(streams),
                duration=container.duration,
                file_size=size,
                bit_rate=_positive(container.bit_rate),
                streams=[describe_stream(s) for s in streams],
            )

        logger.debug("Opened %s: %d streams, duration=%s us", path, info.stream_count, info.duration)
        return info
