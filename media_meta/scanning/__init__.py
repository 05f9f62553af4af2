"""Extraction and batch processing modules for the Media Metadata Tool."""

from .classifier import classify, channel_votes
from .image_extractor import ImageExtractor, extract_image
from .video_extractor import VideoExtractor, extract_video
from .pipeline import BatchPipeline, BatchResult, EntryError, pipeline_for, process_batch

__all__ = [
    'classify',
    'channel_votes',
    'ImageExtractor',
    'VideoExtractor',
    'extract_image',
    'extract_video',
    'BatchPipeline',
    'BatchResult',
    'EntryError',
    'pipeline_for',
    'process_batch'
]
