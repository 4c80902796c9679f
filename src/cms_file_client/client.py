import logging
from typing import Any, Mapping, Optional

from cms_file_client.exceptions import ApiError, NotFoundError
from cms_file_client.models import FileRecord
from cms_file_client.repositories import ApiConnection, FileRepository, ImageProbe
from cms_file_client.uploader import FileUploader

logger = logging.getLogger(__name__)

HEALTH_PATH = "files/folder/0"


class FileClient:
    """
    Единая точка доступа к файлам CMS.
    """

    def __init__(
        self,
        connection: ApiConnection,
        file_repo: FileRepository,
        uploader: FileUploader | None = None,
        probe: ImageProbe | None = None,
    ):
        self.connection = connection
        self.files = file_repo
        self.uploader = uploader or FileUploader(file_repo)
        self._probe = probe

    def __enter__(self) -> "FileClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.connection.close()
        if self._probe is not None:
            self._probe.close()

    def check_connection(self) -> dict[str, str]:
        """
        Проверяет доступность API. Возвращает словарь со статусом.
        """
        try:
            self.connection.get(HEALTH_PATH)
            return {"api": "ok"}
        except ApiError as e:
            return {"api": f"failed: {e}"}

    # ――― files ――― #

    def new_file(self, **attributes) -> FileRecord:
        """Несохраненная запись, привязанная к репозиторию (сохраняется через save())."""
        return self.files.new_record(**attributes)

    def find(self, file_id: int) -> Optional[FileRecord]:
        return self.files.find(file_id)

    def get_file(self, file_id: int) -> FileRecord:
        record = self.files.find(file_id)
        if record is None:
            raise NotFoundError(model=FileRecord, ids=[file_id])
        return record

    def where(self, field: str, value: Any) -> list[FileRecord]:
        return self.files.where(field, value)

    def resolve_route_binding(self, raw_value: Any, field: str | None = None) -> FileRecord:
        return self.files.new_record().resolve_route_binding(raw_value, field)

    def upload(self, source: Any, attributes: Optional[Mapping[str, Any]] = None, folder: Optional[int] = None) -> FileRecord:
        return self.uploader.upload(source, attributes, folder)

    def save(self, record: FileRecord) -> bool:
        return self.files.save(record)

    def delete_file(self, file: FileRecord | int) -> bool:
        if isinstance(file, FileRecord):
            return self.files.destroy(file)
        logger.info(f"Deleting file {file}")
        return self.files.delete(file)

    def resolve_dimensions(self, file_id: int) -> FileRecord:
        """Гарантирует, что у записи заполнены img_width/img_height (с сохранением)."""
        record = self.get_file(file_id)
        record.resolve_image_width()
        record.resolve_image_height()
        return record
