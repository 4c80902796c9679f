# src/cms_file_client/repositories/file_repository.py

import logging
from typing import Any, Optional

from cms_file_client.exceptions import ApiError
from cms_file_client.models.file import FileRecord
from cms_file_client.repositories.api_connection import ApiConnection
from cms_file_client.repositories.image_probe import ImageProbe
from cms_file_client.utils.media_urls import MediaUrlBuilder

logger = logging.getLogger(__name__)

BASE_PATH = "files/file/"
SEARCH_PATH = "search"
RELATION = "file"


class FileRepository:
    """
    Репозиторий файлов: CRUD через REST API + минимальная "query base"
    (гидрация записей, where(), жизненный цикл save/destroy).
    """

    def __init__(
        self,
        connection: ApiConnection,
        urls: MediaUrlBuilder,
        probe: ImageProbe,
        search_size: int = 100,
    ):
        self.connection = connection
        self.urls = urls
        self.probe = probe
        self._search_size = search_size

    # ――― persistence adapter ――― #

    def retrieve(self, key: Any, relation_id: Optional[int] = None) -> Optional[dict]:
        return self.connection.get(f"{BASE_PATH}{key}", unwrap=True)

    def insert(self, attributes: dict[str, Any], relation_id: Optional[int] = None) -> dict:
        return self.connection.post(BASE_PATH, attributes, unwrap=True)

    def update(self, key: Any, attributes: dict[str, Any], relation_id: Optional[int] = None) -> None:
        self.connection.put(f"{BASE_PATH}{key}", attributes)

    def delete(self, key: Any, relation_id: Optional[int] = None) -> bool:
        self.connection.delete(f"{BASE_PATH}{key}")
        return True

    # ――― query base ――― #

    def hydrate(self, raw: dict[str, Any]) -> FileRecord:
        """Создает привязанную, сохраненную и "чистую" запись из ответа API."""
        return FileRecord.model_validate(raw).bind(self, exists=True)

    def new_record(self, **attributes) -> FileRecord:
        return FileRecord(**attributes).bind(self)

    def find(self, key: Any) -> Optional[FileRecord]:
        try:
            raw = self.retrieve(key)
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise
        return self.hydrate(raw) if raw else None

    def where(self, field: str, value: Any) -> list[FileRecord]:
        if field == FileRecord.RESOLVABLE_FIELD:
            found = self.find(value)
            return [found] if found else []

        escaped = str(value).replace('"', '\\"')
        params = {"relation": RELATION, "q": f'{field}:"{escaped}"', "size": self._search_size}
        hits = self.connection.get(SEARCH_PATH, unwrap=True, params=params) or []
        return [self.hydrate(hit) for hit in hits]

    # ――― lifecycle ――― #

    def save(self, record: FileRecord) -> bool:
        if not record.exists:
            raw = self.insert(record.to_payload(exclude_unset=True))
            record.fill_from_backend(raw or {})
            record.bind(self, exists=True)
            logger.info(f"Created file {record.id}")
            # Прогреваем вычисляемое разрешение сразу после создания
            record.resolve_resolution()
            return True

        dirty = record.get_dirty()
        if not dirty:
            return True
        self.update(record.id, dirty)
        record.sync_original()
        logger.info(f"Updated file {record.id}: {', '.join(dirty)}")
        return True

    def destroy(self, record: FileRecord) -> bool:
        deleted = self.delete(record.id)
        logger.info(f"Deleted file {record.id}")
        return deleted
