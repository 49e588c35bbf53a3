"""
EXIF Prompt Reader

Browse a folder of images and show the AI-generation prompt each one
carries in its metadata. ExifTool reads the metadata; the first of
UserComment, ImageDescription or XPComment that holds a value is shown
as RAW text and, when it can be recovered as JSON, pretty-printed below it.

Structure
- exifprompt/exiftool: ExifTool session and metadata records
- exifprompt/selector: prompt field lookup
- exifprompt/normalize: comma repair and JSON recovery
- exifprompt/scanner: folder listing
- exifprompt/pipeline: per-file extraction
- exifprompt/preview: image read + decode summary
- exifprompt/viewer, exifprompt/ui: interactive terminal viewer
"""
from __future__ import annotations
import sys

from exifprompt.viewer import main


if __name__ == "__main__":
    sys.exit(main())
