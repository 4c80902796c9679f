from .image import ImageDimensions
from .file import FileRecord, normalize_tags, format_timestamp, TIMESTAMP_FORMAT
from .upload import (UploadSource, ExistingRecordSource, BinaryHandleSource,
                     UrlSource, RawContentSource, classify_source, is_absolute_url)

__all__ = [
    "ImageDimensions", "FileRecord", "normalize_tags", "format_timestamp", "TIMESTAMP_FORMAT",
    "UploadSource", "ExistingRecordSource", "BinaryHandleSource", "UrlSource", "RawContentSource",
    "classify_source", "is_absolute_url",
]
