# Файл: src/cms_file_client/config.py

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

# --- 1. Настройки REST API CMS ---
class ApiConfig(BaseModel):
    base_url: str = "https://api.netflexapp.com/v1/"
    public_key: str | None = None
    private_key: str | None = None
    timeout: float = 30.0

    def get_auth(self) -> tuple[str, str] | None:
        """Пара ключей для basic-auth, если оба ключа заданы."""
        if self.public_key and self.private_key:
            return (self.public_key, self.private_key)
        return None

# --- 2. Хосты для построения ссылок на ассеты ---
class MediaConfig(BaseModel):
    cdn_url: str = Field("https://cdn.netflexapp.com", description="Базовый URL CDN для оригиналов")
    media_url: str = Field("https://media.netflexapp.com", description="Базовый URL для пресетов")

# --- 3. Явная передача конфигурации ---
class FileClientConfig(BaseModel):
    api: ApiConfig = Field(default_factory=ApiConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)

# --- 4. Чтение из .env ---
class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter='__',
        extra='ignore'
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    api: ApiConfig = Field(default_factory=ApiConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)

_cached_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Настройки из окружения и .env. Читаются один раз, при первом обращении (обычно из CLI)."""
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = Settings()
    return _cached_settings
