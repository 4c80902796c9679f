# Файл: src/cms_file_client/__init__.py

from typing import Optional

import httpx

from .client import FileClient
from .config import get_settings, FileClientConfig, ApiConfig, MediaConfig
from .models import FileRecord, ImageDimensions
from .repositories import ApiConnection, FileRepository, ImageProbe
from .uploader import FileUploader
from .utils.media_urls import MediaUrlBuilder

from .exceptions import *

def create_file_client(
    config: Optional[FileClientConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> FileClient:
    """
    Фабричная функция для создания и конфигурации FileClient.

    :param config: Единый объект с настройками.
                   Если не предоставлен, используются переменные окружения.
    :param transport: Необязательный транспорт httpx (например, MockTransport в тестах).
    :return: Сконфигурированный экземпляр FileClient.
    """
    if config is None:
        s = get_settings()
        config = FileClientConfig(api=s.api, media=s.media)

    connection = ApiConnection(config.api, transport=transport)
    probe = ImageProbe(timeout=config.api.timeout, transport=transport)
    file_repo = FileRepository(connection, MediaUrlBuilder(config.media), probe)

    return FileClient(
        connection=connection,
        file_repo=file_repo,
        uploader=FileUploader(file_repo),
        probe=probe,
    )

__all__ = [
    "FileClient", "create_file_client",
    "FileClientConfig", "ApiConfig", "MediaConfig",
    "FileRecord", "ImageDimensions", "FileRepository", "FileUploader",
    "FileClientError", "ApiError", "NotFoundError", "InvalidArgumentError",
]
