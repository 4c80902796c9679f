from cms_file_client.config import MediaConfig


class MediaUrlBuilder:
    """Строит публичные ссылки на ассеты: оригинал через CDN или рендер по пресету."""

    def __init__(self, settings: MediaConfig):
        self._cdn = settings.cdn_url.rstrip("/")
        self._media = settings.media_url.rstrip("/")

    def cdn_url(self, path: str) -> str:
        return f"{self._cdn}/{path.lstrip('/')}"

    def media_url(self, path: str, preset: str) -> str:
        return f"{self._media}/media/{preset}/{path.lstrip('/')}"
