"""Building blocks for reading AI prompts out of image metadata.

This package contains the modules used by `main.py`:
- exiftool: stay-open ExifTool session, one per extraction
- selector: pick the prompt field (UserComment, ImageDescription, XPComment)
- normalize: comma repair + JSON pretty-printing
- scanner: list the images of one folder
- pipeline: extractor -> selector -> normalizer for a single file
- preview: read and decode the image for the preview line
- viewer / ui: terminal viewer and standardized prompts
"""
