import logging
from typing import Any, Mapping

import httpx

from cms_file_client.config import ApiConfig
from cms_file_client.exceptions import ApiError

logger = logging.getLogger(__name__)


class ApiConnection:
    """
    Тонкая синхронная обёртка над httpx.Client для REST API CMS.

    Переводит ответы не-2xx и сетевые ошибки httpx в ApiError, а JSON-конверт
    {"data": ...} снимает при unwrap=True.
    """

    def __init__(self, settings: ApiConfig, transport: httpx.BaseTransport | None = None):
        self._client = httpx.Client(
            base_url=settings.base_url,
            auth=settings.get_auth(),
            timeout=settings.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def close(self):
        self._client.close()

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug(f"{method} {path}")
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(None, str(e), path) from e

        if response.is_error:
            logger.error(f"{method} {path} returned HTTP {response.status_code}")
            raise ApiError(response.status_code, response.text, str(response.url))
        return response

    @staticmethod
    def _decode(response: httpx.Response, unwrap: bool = False) -> Any:
        if not response.content:
            return None
        payload = response.json()
        if unwrap and isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    def get(self, path: str, unwrap: bool = False, params: Mapping[str, Any] | None = None) -> Any:
        return self._decode(self._send("GET", path, params=params), unwrap)

    def post(self, path: str, body: Mapping[str, Any] | None = None, unwrap: bool = False) -> Any:
        return self._decode(self._send("POST", path, json=dict(body or {})), unwrap)

    def put(self, path: str, body: Mapping[str, Any] | None = None) -> None:
        self._send("PUT", path, json=dict(body or {}))

    def delete(self, path: str) -> None:
        self._send("DELETE", path)

    def post_multipart(self, path: str, files: Mapping[str, Any], data: Mapping[str, str] | None = None) -> Any:
        """POST multipart/form-data. Тело ответа декодируется как есть, без снятия конверта."""
        return self._decode(self._send("POST", path, files=files, data=dict(data or {})))
