#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the batch pipeline: path checks, traversal, caching and error collection.
"""

import os

import pytest

from media_meta.config import PipelineSettings
from media_meta.errors import ContainerOpenError, DecodeError, PathError
from media_meta.models.media_record import DominantColor, ImageRecord, MediaKind, VideoRecord
from media_meta.scanning.image_extractor import ImageExtractor
from media_meta.scanning.pipeline import BatchPipeline, list_entries, process_batch
from media_meta.scanning.video_extractor import VideoExtractor
from media_meta.tests.fixtures.media_fixtures import (
    FakeVideoDecoder, audio_stream, container, video_stream, write_image,
)


@pytest.fixture
def dirs(tmp_path):
    source = tmp_path / "media"
    output = tmp_path / "md"
    source.mkdir()
    output.mkdir()
    return source, output


class TestPathValidation:

    def test_missing_input(self, dirs):
        source, output = dirs
        with pytest.raises(PathError) as exc:
            process_batch(source / "nope.png", output)
        assert exc.value.path == source / "nope.png"
        assert list(output.iterdir()) == []

    def test_missing_output(self, dirs):
        source, output = dirs
        write_image(source / "a.png")
        with pytest.raises(PathError):
            process_batch(source, output / "missing")

    def test_output_is_a_file(self, dirs):
        source, output = dirs
        not_a_dir = output / "file.txt"
        not_a_dir.write_text("x")
        with pytest.raises(PathError):
            process_batch(source, not_a_dir)


class TestImageBatch:

    def test_directory_with_image_and_text(self, dirs):
        source, output = dirs
        write_image(source / "photo.jpg", size=(4, 4), color=(200, 20, 20))
        (source / "readme.txt").write_text("hello")

        records, errors = process_batch(source, output, overwrite=False)

        assert len(records) == 1
        assert records[0].name == "photo.jpg"
        assert len(errors) == 1
        assert errors[0].path == source / "readme.txt"
        assert isinstance(errors[0].error, DecodeError)
        assert sorted(p.name for p in output.iterdir()) == ["img_photo.jpg.txt"]

    def test_single_file_input(self, dirs):
        source, output = dirs
        path = write_image(source / "one.png", size=(3, 3))
        result = process_batch(path, output)
        assert [r.name for r in result.records] == ["one.png"]
        assert (output / "img_one.png.txt").exists()

    def test_subdirectories_are_not_recursed(self, dirs):
        source, output = dirs
        nested = source / "nested"
        nested.mkdir()
        write_image(nested / "deep.png")
        write_image(source / "top.png")
        result = process_batch(source, output)
        assert [r.name for r in result.records] == ["top.png"]
        assert result.errors == []

    def test_all_entries_failing_is_not_an_exception(self, dirs):
        source, output = dirs
        (source / "a.txt").write_text("a")
        (source / "b.txt").write_text("b")
        result = process_batch(source, output)
        assert result.records == []
        assert len(result.errors) == 2

    def test_second_run_loads_identical_records_from_cache(self, dirs):
        source, output = dirs
        write_image(source / "a.png", size=(6, 2), color=(10, 200, 10))
        write_image(source / "b.png", size=(2, 6), color=(80, 80, 80))

        first = process_batch(source, output, overwrite=False)
        second = process_batch(source, output, overwrite=False)

        assert first.cached == 0
        assert second.cached == 2
        assert second.records == first.records

    def test_cache_hit_does_not_touch_source(self, dirs):
        source, output = dirs
        path = write_image(source / "a.png", color=(200, 0, 0))
        process_batch(source, output)

        # Replace the source with something undecodable; the sidecar is still used
        path.write_bytes(b"corrupt")
        result = process_batch(source, output, overwrite=False)
        assert result.errors == []
        assert result.records[0].dominant_color is DominantColor.RED

    def test_overwrite_bypasses_cache(self, dirs):
        source, output = dirs
        path = write_image(source / "a.png", size=(4, 4), color=(200, 0, 0))
        first = process_batch(source, output, overwrite=True)

        write_image(path, size=(8, 2), color=(0, 0, 200))
        second = process_batch(source, output, overwrite=True)

        assert first.records != second.records
        assert second.records[0].dominant_color is DominantColor.BLUE
        assert second.records[0].width == 8
        assert "blue" in (output / "img_a.png.txt").read_text()

    def test_unreadable_sidecar_is_a_per_entry_error(self, dirs):
        source, output = dirs
        write_image(source / "a.png")
        write_image(source / "b.png")
        (output / "img_a.png.txt").write_text("garbage")
        result = process_batch(source, output)
        assert [r.name for r in result.records] == ["b.png"]
        assert len(result.errors) == 1

    def test_parallel_workers_match_sequential(self, dirs, tmp_path):
        source, output = dirs
        for i, color in enumerate([(200, 0, 0), (0, 200, 0), (0, 0, 200), (9, 9, 9)]):
            write_image(source / f"img{i}.png", size=(3 + i, 3), color=color)
        (source / "bad.txt").write_text("x")

        parallel_out = tmp_path / "parallel"
        parallel_out.mkdir()
        sequential = process_batch(source, output)
        parallel = process_batch(source, parallel_out, settings=PipelineSettings(workers=4))

        assert parallel.records == sequential.records
        assert [e.path for e in parallel.errors] == [e.path for e in sequential.errors]
        assert sorted(os.listdir(parallel_out)) == sorted(os.listdir(output))


class TestVideoBatch:

    def _pipeline(self, decoder, **settings):
        return BatchPipeline(VideoExtractor(decoder), PipelineSettings(**settings))

    def test_extension_filter_skips_silently(self, dirs):
        source, output = dirs
        for name in ("clip.MP4", "movie.avi", "notes.txt", "still.png"):
            (source / name).write_bytes(b"\x00")
        decoder = FakeVideoDecoder({
            "clip.MP4": container(video_stream()),
            "movie.avi": container(audio_stream(), video_stream()),
        })

        result = self._pipeline(decoder).process(source, output, overwrite=False)

        assert sorted(r.name for r in result.records) == ["clip.MP4", "movie.avi"]
        assert result.errors == []
        assert sorted(p.name for p in result.skipped) == ["notes.txt", "still.png"]
        assert sorted(p.name for p in decoder.calls) == ["clip.MP4", "movie.avi"]
        assert sorted(p.name for p in output.iterdir()) == ["vid_clip.MP4.txt", "vid_movie.avi.txt"]

    def test_single_non_video_file_is_skipped(self, dirs):
        source, output = dirs
        path = source / "song.mp3"
        path.write_bytes(b"\x00")
        result = self._pipeline(FakeVideoDecoder()).process(path, output, overwrite=False)
        assert result.records == [] and result.errors == []

    def test_open_failure_is_collected(self, dirs):
        source, output = dirs
        (source / "good.flv").write_bytes(b"\x00")
        (source / "bad.asf").write_bytes(b"\x00")
        decoder = FakeVideoDecoder({"good.flv": container(video_stream())})

        result = self._pipeline(decoder).process(source, output, overwrite=False)

        assert [r.name for r in result.records] == ["good.flv"]
        assert isinstance(result.errors[0].error, ContainerOpenError)
        assert not (output / "vid_bad.asf.txt").exists()

    def test_cache_roundtrip(self, dirs):
        source, output = dirs
        (source / "clip.mp4").write_bytes(b"\x00")
        decoder = FakeVideoDecoder({"clip.mp4": container(audio_stream(), video_stream(frame_rate=59.94))})
        pipeline = self._pipeline(decoder)

        first = pipeline.process(source, output, overwrite=False)
        second = pipeline.process(source, output, overwrite=False)

        assert len(decoder.calls) == 1
        assert second.records == first.records
        record = second.records[0]
        assert isinstance(record, VideoRecord)
        assert record.video_frame_rate == 60
        assert record.audio_channels == 1
        assert record.tags == ["video"]

    def test_process_batch_video_kind(self, dirs):
        source, output = dirs
        (source / "x.mp4").write_bytes(b"\x00")
        result = process_batch(source, output, kind=MediaKind.VIDEO,
                               decoder=FakeVideoDecoder({"x.mp4": container(video_stream())}))
        assert result.records[0].kind is MediaKind.VIDEO


class TestHelpers:

    def test_list_entries_is_sorted_and_flat(self, dirs):
        source, _ = dirs
        for name in ("c.png", "a.png", "b.png"):
            (source / name).write_bytes(b"")
        (source / "sub").mkdir()
        assert [p.name for p in list_entries(source)] == ["a.png", "b.png", "c.png"]

    def test_image_extractor_accepts_everything(self, tmp_path):
        assert ImageExtractor().accepts(tmp_path / "whatever.xyz")

    def test_image_records_type(self, dirs):
        source, output = dirs
        write_image(source / "a.png")
        result = process_batch(source, output)
        assert isinstance(result.records[0], ImageRecord)
