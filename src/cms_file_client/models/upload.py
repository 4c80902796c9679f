from __future__ import annotations

import io
import os
from dataclasses import dataclass
from numbers import Number
from typing import Any, BinaryIO, Optional, Union

from pydantic import AnyUrl, TypeAdapter, ValidationError

from cms_file_client.exceptions import InvalidArgumentError
from cms_file_client.models.file import FileRecord

_url_adapter = TypeAdapter(AnyUrl)


@dataclass
class ExistingRecordSource:
    record: FileRecord


@dataclass
class BinaryHandleSource:
    stream: BinaryIO
    filename: Optional[str] = None


@dataclass
class UrlSource:
    url: str


@dataclass
class RawContentSource:
    content: str


UploadSource = Union[ExistingRecordSource, BinaryHandleSource, UrlSource, RawContentSource]
_VARIANTS = (ExistingRecordSource, BinaryHandleSource, UrlSource, RawContentSource)


def is_absolute_url(value: str) -> bool:
    """Абсолютный URL: есть схема и хост, без пробелов."""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        url = _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return bool(url.host)


def _is_string_like(value: Any) -> bool:
    if isinstance(value, str):
        return True
    if isinstance(value, (Number, bytes, bytearray)) or value is None:
        return False
    return type(value).__str__ is not object.__str__


def classify_source(value: Any) -> UploadSource:
    """
    Определяет вариант источника загрузки.
    Порядок важен: запись -> бинарный файл -> строка (URL или base64).
    """
    if isinstance(value, _VARIANTS):
        return value
    if isinstance(value, FileRecord):
        return ExistingRecordSource(value)
    if isinstance(value, io.IOBase) or callable(getattr(value, "read", None)):
        name = getattr(value, "name", None)
        filename = os.path.basename(name) if isinstance(name, str) and name else None
        return BinaryHandleSource(value, filename)
    if _is_string_like(value):
        text = str(value)
        if is_absolute_url(text):
            return UrlSource(text)
        return RawContentSource(text)
    raise InvalidArgumentError("Invalid file type")
