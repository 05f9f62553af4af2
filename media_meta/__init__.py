"""Media Metadata Tool - sidecar metadata for images and videos."""

__version__ = "1.0.0"
__author__ = "Media Tool Team"

# Import key classes for convenient top-level access
from .errors import MediaMetaError, PathError, DecodeError, ContainerOpenError, SerializationError
from .models import MediaKind, MediaRecord, ImageRecord, VideoRecord, DominantColor
from .scanning import BatchPipeline, BatchResult, ImageExtractor, VideoExtractor, classify, process_batch

__all__ = [
    # Pipeline
    'process_batch',
    'BatchPipeline',
    'BatchResult',
    'ImageExtractor',
    'VideoExtractor',
    'classify',

    # Data models
    'MediaKind',
    'MediaRecord',
    'ImageRecord',
    'VideoRecord',
    'DominantColor',

    # Errors
    'MediaMetaError',
    'PathError',
    'DecodeError',
    'ContainerOpenError',
    'SerializationError',

    # Package metadata
    '__version__',
    '__author__'
]
