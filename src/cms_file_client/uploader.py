# Файл: src/cms_file_client/uploader.py

import logging
import posixpath
from datetime import datetime
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from cms_file_client.exceptions import InvalidArgumentError
from cms_file_client.models.file import FileRecord, format_timestamp, normalize_tags
from cms_file_client.models.upload import (
    BinaryHandleSource,
    ExistingRecordSource,
    RawContentSource,
    UrlSource,
    classify_source,
)
from cms_file_client.repositories.file_repository import FileRepository

logger = logging.getLogger(__name__)

# Ключ API -> поле FileRecord, которые наследуются от исходной записи при повторной загрузке
INHERITED_ATTRIBUTES = {
    "tags": "tags",
    "description": "description",
    "title": "title",
    "size": "size_bytes",
    "img_width": "image_width",
    "img_height": "image_height",
    "img_artist": "image_artist",
    "img_o_date": "image_original_date",
    "img_desc": "image_description",
}


def encode_value(value: Any) -> Any:
    """Приводит значение атрибута к виду, который понимает API (даты строкой)."""
    if isinstance(value, datetime):
        return format_timestamp(value)
    return value


def encode_form_value(value: Any) -> str:
    """Скалярное представление атрибута для отдельной части multipart."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(encode_value(value))


def filename_from_url(url: str) -> str:
    parts = urlsplit(url)
    return posixpath.basename(parts.path) or parts.hostname or url


class FileUploader:
    """
    Загрузка файлов в папку CMS. По типу источника выбирается один из эндпоинтов:
    multipart (files/folder/{id}/file), ссылка (…/link) или base64 (…/base64).
    """

    def __init__(self, repository: FileRepository):
        self._repo = repository

    def upload(self, source: Any, attributes: Optional[Mapping[str, Any]] = None, folder: Optional[int] = None) -> FileRecord:
        attributes = dict(attributes or {})

        if attributes.get("folder_id") is not None and folder is None:
            folder = attributes["folder_id"]

        source = classify_source(source)

        if isinstance(source, ExistingRecordSource):
            record = source.record
            folder = folder if folder is not None else record.folder_id
            for key, field in INHERITED_ATTRIBUTES.items():
                if attributes.get(key) is None:
                    attributes[key] = getattr(record, field)
            attributes["tags"] = ",".join(normalize_tags(attributes["tags"]))
            # Дальше это обычная загрузка по ссылке на оригинал.
            # Запись может быть не привязана к репозиторию, поэтому ссылку строим сами
            link = self._repo.urls.cdn_url(record.path) if record.path else None
            source = classify_source(link)

        folder = 0 if folder is None else folder
        base_path = f"files/folder/{folder}"

        # Бэкенд при создании ждет имя в поле "filenamename", а не "name"
        if "name" in attributes:
            attributes["filenamename"] = attributes.pop("name")

        if isinstance(source, BinaryHandleSource):
            return self._upload_multipart(f"{base_path}/file", source, attributes)
        if isinstance(source, UrlSource):
            return self._upload_link(f"{base_path}/link", source, attributes)
        if isinstance(source, RawContentSource):
            return self._upload_base64(f"{base_path}/base64", source, attributes)

        raise InvalidArgumentError("Invalid file type")

    def _upload_multipart(self, path: str, source: BinaryHandleSource, attributes: dict) -> FileRecord:
        filename = attributes.get("filename") or source.filename
        if not filename:
            raise InvalidArgumentError("Name is required when uploading a stream without a filename")
        data = {key: encode_form_value(value) for key, value in attributes.items()}
        logger.info(f"Uploading '{filename}' to {path}")
        raw = self._repo.connection.post_multipart(path, files={"file": (filename, source.stream)}, data=data)
        return self._repo.hydrate(raw)

    def _upload_link(self, path: str, source: UrlSource, attributes: dict) -> FileRecord:
        attributes["link"] = source.url
        if attributes.get("filename") is None:
            attributes["filename"] = filename_from_url(source.url)
        logger.info(f"Uploading link {source.url} to {path}")
        raw = self._repo.connection.post(path, self._encode(attributes), unwrap=True)
        return self._repo.hydrate(raw)

    def _upload_base64(self, path: str, source: RawContentSource, attributes: dict) -> FileRecord:
        attributes["file"] = source.content
        if attributes.get("filename") is None:
            raise InvalidArgumentError("Name is required when uploading a base64 encoded file")
        logger.info(f"Uploading base64 content '{attributes['filename']}' to {path}")
        raw = self._repo.connection.post(path, self._encode(attributes), unwrap=True)
        return self._repo.hydrate(raw)

    @staticmethod
    def _encode(attributes: dict) -> dict:
        return {key: encode_value(value) for key, value in attributes.items()}
