"""Data models for the Media Metadata Tool."""

from .media_record import (
    MediaKind, MediaRecord, ImageRecord, VideoRecord,
    Orientation, ColorSpaceType, Transparency, DominantColor,
    create_record, kind_for_sidecar,
)

__all__ = [
    'MediaKind', 'MediaRecord', 'ImageRecord', 'VideoRecord',
    'Orientation', 'ColorSpaceType', 'Transparency', 'DominantColor',
    'create_record', 'kind_for_sidecar',
]
