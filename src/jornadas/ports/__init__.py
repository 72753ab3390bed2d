"""Ports - interfaces/protocols for external dependencies."""

from .file_picker import FilePicker

__all__ = [
    "FilePicker",
]
