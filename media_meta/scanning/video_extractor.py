#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Video metadata extraction for the Media Metadata Tool.
"""

import logging
from pathlib import Path
from typing import Optional

from ..config import MICROSECONDS_PER_SECOND, VIDEO_EXT
from ..errors import ContainerOpenError, DecodeError
from ..models.media_record import MediaKind, VideoRecord, create_record
from ..decoders.base import ContainerInfo, StreamDescriptor, StreamKind, VideoDecoder

logger = logging.getLogger(__name__)

VIDEO_TAG = "video"


def has_video_extension(path: Path) -> bool:
    name = Path(path).name
    return name.rsplit(".", 1)[-1].lower() in VIDEO_EXT if "." in name else False


def _apply_audio(record: VideoRecord, stream: StreamDescriptor) -> None:
    # Later audio streams overwrite earlier ones; only the counter accumulates
    record.audio_codec_id = stream.codec_id
    record.audio_channels += 1
    record.audio_sample_rate = stream.sample_rate
    record.audio_bit_rate = stream.bit_rate


def _apply_video(record: VideoRecord, stream: StreamDescriptor, info: ContainerInfo) -> None:
    record.video_codec_id = stream.codec_id
    record.video_codec = stream.codec_name
    record.video_frame_rate = round(stream.frame_rate) if stream.frame_rate is not None else None
    record.video_width = stream.width
    record.video_height = stream.height
    if info.duration is not None and info.duration >= 0:
        record.video_length = info.duration // MICROSECONDS_PER_SECOND


class VideoExtractor:
    """Derives a VideoRecord from one video container."""

    media_kind = MediaKind.VIDEO

    def __init__(self, decoder: Optional[VideoDecoder] = None):
        if decoder is None:
            from ..decoders.pyav_backend import PyAVVideoDecoder
            decoder = PyAVVideoDecoder()
        self.decoder = decoder

    def accepts(self, path: Path) -> bool:
        return has_video_extension(path)

    def extract(self, path: Path) -> VideoRecord:
        path = Path(path)
        info = self.decoder.open(path)
        if info is None:
            raise ContainerOpenError(f"Failed to open media file {path}", path)

        record = create_record(MediaKind.VIDEO, path)
        record.duration = info.duration
        record.file_size = info.file_size
        record.bit_rate = info.bit_rate

        for index in range(info.stream_count):
            stream = info.streams[index] if index < len(info.streams) else None
            if stream is None:
                raise DecodeError(f"Missing descriptor for stream {index} in {path}", path)

            if stream.kind is StreamKind.AUDIO:
                _apply_audio(record, stream)
            elif stream.kind is StreamKind.VIDEO:
                if stream.codec_id is None:
                    raise DecodeError(f"Video stream {index} in {path} has no codec id", path)
                _apply_video(record, stream, info)
            else:
                logger.debug("Skipping %s stream %d in %s", stream.kind.value, index, path)

        record.add_tag(VIDEO_TAG)
        logger.debug("Extracted video metadata for %s: %d streams, %d audio",
                     path, info.stream_count, record.audio_channels)
        return record


def extract_video(path: Path, decoder: Optional[VideoDecoder] = None) -> VideoRecord:
    """Convenience wrapper around VideoExtractor.extract."""
    return VideoExtractor(decoder).extract(path)
