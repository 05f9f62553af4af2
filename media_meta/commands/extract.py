#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Extract command (thin wrapper around the batch pipeline).

- Human-readable summary through logging by default.
- as_json=True writes a single JSON envelope to stdout instead.
"""

import logging
from pathlib import Path

from ..config import PipelineSettings
from ..jsonio import record_to_dict, success
from ..models.media_record import MediaKind
from ..scanning.pipeline import BatchResult, pipeline_for

logger = logging.getLogger(__name__)


def cmd_extract(
    kind: MediaKind,
    source: Path,
    output: Path,
    overwrite: bool = False,
    workers: int = 1,
    show_progress: bool = False,
    as_json: bool = False,
) -> int:
    """Run one batch and report it.

    Returns:
        0 if every entry succeeded, 1 if any entry failed. PathError is not
        handled here and propagates to the caller.
    """
    settings = PipelineSettings(overwrite=overwrite, workers=workers, show_progress=show_progress)
    result: BatchResult = pipeline_for(kind, settings).process(source, output)
    code = 1 if result.errors else 0

    if as_json:
        return success(
            kind.value,
            data={
                "records": [record_to_dict(r) for r in result.records],
                "errors": [{"path": str(e.path), "error": e.message} for e in result.errors],
            },
            meta={
                "cached": result.cached,
                "skipped": [str(p) for p in result.skipped],
                "overwrite": overwrite,
            },
            code=code,
        )

    logger.info("%d record(s) written to %s (%d from cache)", len(result.records), output, result.cached)
    for entry in result.errors:
        logger.warning("  failed: %s (%s)", entry.path, entry.message)
    if result.skipped:
        logger.info("%d entr%s skipped (unsupported extension)",
                    len(result.skipped), "y" if len(result.skipped) == 1 else "ies")
    return code
