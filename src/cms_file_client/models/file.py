# Файл: cms_file_client/models/file.py

from __future__ import annotations

import logging
import posixpath
from datetime import datetime
from typing import Any, ClassVar, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_serializer, field_validator

from cms_file_client.exceptions import FileClientError, NotFoundError
from cms_file_client.models.image import ImageDimensions

if TYPE_CHECKING:
    from cms_file_client.repositories.file_repository import FileRepository

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
# Так бэкенд отдаёт "пустую" дату
_EMPTY_DATES = {"", "0000-00-00", "0000-00-00 00:00:00"}


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def normalize_tags(tags: Any) -> list[str]:
    """
    Приводит теги к упорядоченному списку без дублей и пустых значений.
    Строка режется по запятым: "a,b,,c" -> ["a", "b", "c"]. Сами сегменты не трогаем,
    " b" остаётся " b".
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    result: list[str] = []
    for tag in tags:
        tag = str(tag)
        if tag and tag not in result:
            result.append(tag)
    return result


class FileRecord(BaseModel):
    """
    Запись о файле в CMS: метаданные + путь к бинарному ассету.

    Поля названы по-питоновски, alias совпадает с ключом в API.
    Запись привязывается к FileRepository при гидрации; через него работают
    save()/delete() и ленивое определение размеров изображения.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",
    )

    RESOLVABLE_FIELD: ClassVar[str] = "id"

    id: Optional[int] = None
    folder_id: Optional[int] = None
    name: Optional[str] = None
    path: Optional[str] = Field(default=None, frozen=True)
    description: Optional[str] = None
    title: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    size_bytes: Optional[int] = Field(default=None, alias="size")
    mime_type: Optional[str] = Field(default=None, alias="type")
    created_at: Optional[datetime] = Field(default=None, alias="created")
    owner_user_id: Optional[int] = Field(default=None, alias="userid")
    is_public: bool = Field(default=False, alias="public")
    related_entry_ids: list[int] = Field(default_factory=list, alias="related_entries")
    related_customer_ids: list[int] = Field(default_factory=list, alias="related_customers")

    image_width: Optional[int] = Field(default=None, alias="img_width")
    image_height: Optional[int] = Field(default=None, alias="img_height")
    image_resolution: Optional[str] = Field(default=None, alias="img_res")
    image_latitude: Optional[float] = Field(default=None, alias="img_lat")
    image_longitude: Optional[float] = Field(default=None, alias="img_lon")
    image_artist: Optional[str] = Field(default=None, alias="img_artist")
    image_description: Optional[str] = Field(default=None, alias="img_desc")
    image_alt: Optional[str] = Field(default=None, alias="img_alt")
    image_original_date: Optional[datetime] = Field(default=None, alias="img_o_date")
    folder_code: Optional[str] = Field(default=None, alias="foldercode")

    _repository: Any = PrivateAttr(default=None)
    _exists: bool = PrivateAttr(default=False)
    _original: dict = PrivateAttr(default_factory=dict)
    # Мемо результата пробы: одна загрузка ассета на экземпляр, даже неудачная
    _dimensions: Optional[ImageDimensions] = PrivateAttr(default=None)
    _dimensions_probed: bool = PrivateAttr(default=False)

    # ――― casts ――― #

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @field_validator("related_entry_ids", "related_customer_ids", mode="before")
    @classmethod
    def _split_ids(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [part for part in value.split(",") if part.strip()]
        return value

    @field_validator("created_at", "image_original_date", mode="before")
    @classmethod
    def _empty_date(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() in _EMPTY_DATES:
            return None
        return value

    @field_validator(
        "image_width", "image_height", "image_latitude", "image_longitude",
        "folder_id", "size_bytes", "owner_user_id",
        mode="before",
    )
    @classmethod
    def _empty_number(cls, value: Any) -> Any:
        if value == "" or value is False:
            return None
        return value

    @field_serializer("created_at", "image_original_date")
    def _dump_date(self, value: Optional[datetime]) -> Optional[str]:
        return format_timestamp(value) if value else None

    @field_serializer("tags")
    def _dump_tags(self, value: list[str]) -> str:
        return ",".join(value)

    # ――― virtual attributes ――― #

    @property
    def width(self) -> Optional[int]:
        return self.image_width

    @width.setter
    def width(self, value: Optional[int]):
        self.image_width = value

    @property
    def height(self) -> Optional[int]:
        return self.image_height

    @height.setter
    def height(self, value: Optional[int]):
        self.image_height = value

    @property
    def extension(self) -> Optional[str]:
        """Расширение с точкой (".jpg") или None, если у пути его нет."""
        if not self.path:
            return None
        basename = posixpath.basename(self.path)
        if "." not in basename:
            return None
        suffix = basename.rsplit(".", 1)[1]
        return f".{suffix}" if suffix else None

    @property
    def resolution(self) -> str:
        """img_res как есть, иначе "{ширина}x{высота}" из текущих значений. Без I/O."""
        if self.image_resolution is not None:
            return self.image_resolution
        width = "" if self.image_width is None else self.image_width
        height = "" if self.image_height is None else self.image_height
        return f"{width}x{height}"

    @property
    def exists(self) -> bool:
        return self._exists

    # ――― binding ――― #

    def _bound(self) -> "FileRepository":
        if self._repository is None:
            raise FileClientError(f"{type(self).__name__} is not bound to a repository.")
        return self._repository

    def bind(self, repository: "FileRepository", exists: bool = False) -> "FileRecord":
        self._repository = repository
        self._exists = exists
        if exists:
            self.sync_original()
        return self

    def url(self, preset: str | None = None) -> Optional[str]:
        if not self.path:
            return None
        urls = self._bound().urls
        if preset:
            return urls.media_url(self.path, preset)
        return urls.cdn_url(self.path)

    # ――― dirty tracking ――― #

    def to_payload(self, exclude_unset: bool = False) -> dict[str, Any]:
        """Плоский словарь с ключами API. id и path бэкенд ведёт сам."""
        return self.model_dump(by_alias=True, exclude={"id", "path"}, exclude_unset=exclude_unset)

    def sync_original(self):
        self._original = self.to_payload()

    def get_dirty(self) -> dict[str, Any]:
        current = self.to_payload()
        return {key: value for key, value in current.items()
                if key not in self._original or self._original[key] != value}

    def is_dirty(self) -> bool:
        return bool(self.get_dirty())

    def fill_from_backend(self, raw: dict[str, Any]):
        """Обновляет запись на месте из ответа API (включая read-only поля id/path)."""
        fresh = type(self).model_validate(raw)
        for name in fresh.__pydantic_fields_set__:
            self.__dict__[name] = fresh.__dict__[name]
        if fresh.__pydantic_extra__:
            self.__pydantic_extra__.update(fresh.__pydantic_extra__)
        self.__pydantic_fields_set__.update(fresh.__pydantic_fields_set__)

    # ――― lifecycle ――― #

    def save(self) -> bool:
        return self._bound().save(self)

    def delete(self) -> bool:
        return self._bound().destroy(self)

    def resolve_route_binding(self, raw_value: Any, field: str | None = None) -> "FileRecord":
        """Находит запись по значению из маршрута; NotFoundError, если совпадений нет."""
        field = field or self.RESOLVABLE_FIELD
        for model in self._bound().where(field, raw_value):
            return model
        raise NotFoundError(model=type(self), ids=[raw_value])

    # ――― image dimensions ――― #

    def resolve_dimensions(self) -> Optional[ImageDimensions]:
        """
        Скачивает ассет и читает его размеры. Результат (в т.ч. неудачный)
        запоминается на экземпляре, поэтому сеть дергается не больше одного раза.
        """
        if not self._dimensions_probed:
            url = self.url()
            logger.debug(f"Probing dimensions of file {self.id} at {url}")
            self._dimensions = self._bound().probe.probe(url) if url else None
            self._dimensions_probed = True
        return self._dimensions

    def resolve_image_width(self) -> Optional[int]:
        """
        Возвращает img_width. Если он пуст и у файла есть path, определяет
        размер по самому ассету, записывает его и сохраняет запись (PUT).
        """
        if self.image_width is None and self.path:
            dimensions = self.resolve_dimensions()
            if dimensions is not None:
                self.image_width = dimensions.width
            self.save()
        return self.image_width

    def resolve_image_height(self) -> Optional[int]:
        if self.image_height is None and self.path:
            dimensions = self.resolve_dimensions()
            if dimensions is not None:
                self.image_height = dimensions.height
            self.save()
        return self.image_height

    def resolve_resolution(self) -> str:
        if self.image_resolution is None:
            self.resolve_image_width()
            self.resolve_image_height()
        return self.resolution
