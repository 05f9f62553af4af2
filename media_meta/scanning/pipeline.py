#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Batch pipeline for the Media Metadata Tool.

Walks a file or the immediate entries of a directory, runs the matching
extractor on each entry and keeps one sidecar per entry in the output
directory. An existing sidecar is reused unless ``overwrite`` is set.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from tqdm import tqdm

from ..config import PipelineSettings
from ..errors import PathError
from ..models.media_record import MediaKind, MediaRecord
from ..storage.sidecar import read_record, sidecar_path, write_record
from .image_extractor import ImageExtractor
from .video_extractor import VideoExtractor

logger = logging.getLogger(__name__)


@dataclass
class EntryError:
    """A failure while processing one batch entry."""
    path: Path
    error: Exception

    @property
    def message(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class BatchResult:
    records: List[MediaRecord] = field(default_factory=list)
    errors: List[EntryError] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    cached: int = 0

    def __iter__(self):
        # Allows ``records, errors = pipeline.process(...)``
        return iter((self.records, self.errors))


def validate_paths(input_path: Path, output_dir: Path) -> None:
    """Raise PathError unless the input exists and output_dir is a directory."""
    if not input_path.exists():
        raise PathError(f"Input file {input_path} was not found!", input_path)
    if not output_dir.exists():
        raise PathError(f"Output directory {output_dir} not found!", output_dir)
    if not output_dir.is_dir():
        raise PathError(f"{output_dir} is not a directory!", output_dir)


def list_entries(input_path: Path) -> List[Path]:
    """The input file itself, or the files directly inside a directory (sorted)."""
    if not input_path.is_dir():
        return [input_path]
    return sorted(p for p in input_path.iterdir() if not p.is_dir())


class BatchPipeline:
    """Runs one extractor over a file or a flat directory."""

    def __init__(self, extractor, settings: Optional[PipelineSettings] = None):
        self.extractor = extractor
        self.settings = settings or PipelineSettings()

    @property
    def kind(self) -> MediaKind:
        return self.extractor.media_kind

    def process_entry(self, path: Path, output_dir: Path, overwrite: bool) -> MediaRecord:
        """Return the record for one file, from its sidecar on a cache hit."""
        target = sidecar_path(self.kind, path, output_dir)
        if target.exists() and not overwrite:
            logger.debug("Cache hit for %s (%s)", path, target.name)
            return read_record(target)

        record = self.extractor.extract(path)
        write_record(record, target)
        return record

    def _safe_entry(self, path: Path, output_dir: Path, overwrite: bool):
        cached = sidecar_path(self.kind, path, output_dir).exists() and not overwrite
        try:
            return self.process_entry(path, output_dir, overwrite), None, cached
        except Exception as e:
            return None, e, cached

    def process(self, input_path: Union[str, Path], output_dir: Union[str, Path],
                overwrite: Optional[bool] = None) -> BatchResult:
        """Process ``input_path`` into sidecars under ``output_dir``.

        Raises PathError before doing any work if a path is bad. Failures of
        single entries are collected in ``BatchResult.errors``.
        """
        input_path = Path(input_path)
        output_dir = Path(output_dir)
        if overwrite is None:
            overwrite = self.settings.overwrite

        validate_paths(input_path, output_dir)

        result = BatchResult()
        entries = []
        for path in list_entries(input_path):
            if self.extractor.accepts(path):
                entries.append(path)
            else:
                result.skipped.append(path)
        if result.skipped:
            logger.debug("Skipped %d entries not handled by the %s extractor",
                         len(result.skipped), self.kind.value)

        logger.info("Processing %d %s file(s) from %s into %s (overwrite=%s, workers=%d)",
                    len(entries), self.kind.value, input_path, output_dir,
                    overwrite, self.settings.workers)

        progress = tqdm(total=len(entries), desc=f"{self.kind.value} metadata",
                        unit="file", disable=not self.settings.show_progress)
        with progress:
            if self.settings.workers > 1 and len(entries) > 1:
                with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
                    futures = [
                        (path, executor.submit(self._safe_entry, path, output_dir, overwrite))
                        for path in entries
                    ]
                    # Collected in submission order on this thread only
                    for path, future in futures:
                        self._collect(result, path, *future.result())
                        progress.update(1)
            else:
                for path in entries:
                    self._collect(result, path, *self._safe_entry(path, output_dir, overwrite))
                    progress.update(1)

        logger.info("Finished %s batch: %d record(s), %d cached, %d error(s), %d skipped",
                    self.kind.value, len(result.records), result.cached,
                    len(result.errors), len(result.skipped))
        return result

    def _collect(self, result: BatchResult, path: Path, record: Optional[MediaRecord],
                 error: Optional[Exception], cached: bool) -> None:
        if error is not None:
            logger.error("Error when creating metadata from file %s: %s", path, error)
            result.errors.append(EntryError(path=path, error=error))
            return
        result.records.append(record)
        if cached:
            result.cached += 1
        else:
            logger.info("Created metadata for file %s", path)


def pipeline_for(kind: MediaKind, settings: Optional[PipelineSettings] = None,
                 decoder=None) -> BatchPipeline:
    """Build a pipeline with the default extractor for ``kind``."""
    kind = MediaKind(kind)
    extractor = ImageExtractor(decoder) if kind is MediaKind.IMAGE else VideoExtractor(decoder)
    return BatchPipeline(extractor, settings)


def process_batch(input_path: Union[str, Path], output_dir: Union[str, Path], overwrite: bool = False,
                  kind: MediaKind = MediaKind.IMAGE, decoder=None,
                  settings: Optional[PipelineSettings] = None) -> BatchResult:
    """Batch entry point: returns records and per-entry errors for ``input_path``."""
    return pipeline_for(kind, settings, decoder).process(input_path, output_dir, overwrite)
