from __future__ import annotations


class ExifPromptError(Exception):
    """Base class for failures local to a single file or folder operation."""


class ExtractionUnavailable(ExifPromptError):
    """ExifTool could not be found, started, or kept alive for a command."""


class PreviewError(ExifPromptError):
    """The image file itself could not be read."""
