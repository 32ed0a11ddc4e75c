"""Subtitle file writers."""

from .navigable_writer import SUPPORTED_FORMATS, build_navigable_file, export_navigable

__all__ = ["SUPPORTED_FORMATS", "build_navigable_file", "export_navigable"]
