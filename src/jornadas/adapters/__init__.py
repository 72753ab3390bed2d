"""Adapters - I/O implementations of ports."""

from .download_folder import DownloadFolder
from .prompt_picker import FixedPathPicker, PromptFilePicker

__all__ = [
    "DownloadFolder",
    "FixedPathPicker",
    "PromptFilePicker",
]
