"""CLI command implementations for the Media Metadata Tool."""

from .extract import cmd_extract

__all__ = ['cmd_extract']
