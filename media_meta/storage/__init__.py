"""Sidecar storage for media records."""

from .sidecar import serialize, deserialize, write_record, read_record, sidecar_path, sidecar_name

__all__ = ['serialize', 'deserialize', 'write_record', 'read_record', 'sidecar_path', 'sidecar_name']
