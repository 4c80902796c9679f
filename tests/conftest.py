import json
from io import BytesIO

import httpx
import pytest
from PIL import Image

from cms_file_client import FileClient, create_file_client
from cms_file_client.config import ApiConfig, FileClientConfig, MediaConfig

API_BASE = "https://api.test/v1/"
CDN_BASE = "https://cdn.test"


def api(path: str) -> str:
    return API_BASE + path


class FakeBackend:
    """
    Подменяет CMS API и CDN: отвечает по заранее заданным маршрутам
    и запоминает все запросы для проверок.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], httpx.Response] = {}

    def add(self, method: str, url: str, json=None, status_code: int = 200, content: bytes | None = None):
        if json is not None:
            response = httpx.Response(status_code, json=json)
        else:
            response = httpx.Response(status_code, content=content or b"")
        self._routes[(method, url)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        response = self._routes.get((request.method, url))
        if response is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(response.status_code, content=response.content, headers=response.headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, url: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and f"{r.url.scheme}://{r.url.host}{r.url.path}" == url
        ]

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content)


@pytest.fixture
def config() -> FileClientConfig:
    return FileClientConfig(
        api=ApiConfig(base_url=API_BASE, timeout=5),
        media=MediaConfig(cdn_url=CDN_BASE, media_url="https://media.test"),
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(config, backend) -> FileClient:
    client = create_file_client(config, transport=backend.transport)
    yield client
    client.close()


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (640, 480), color="red").save(buffer, format="PNG")
    return buffer.getvalue()
