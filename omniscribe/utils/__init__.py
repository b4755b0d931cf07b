"""Shared helpers used by every exporter."""

from .filename import sanitize_filename, output_filename

__all__ = ['sanitize_filename', 'output_filename']
