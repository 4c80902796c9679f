class FileClientError(Exception):
    """Base class."""


class ApiError(FileClientError):
    """Ошибка транспорта или ответ API со статусом не 2xx."""

    def __init__(self, status_code: int | None, message: str, url: str):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code:
            return f"HTTP {self.status_code} from {self.url}: {self.message}"
        return f"Connection error for {self.url}: {self.message}"


class NotFoundError(FileClientError):
    def __init__(self, message: str | None = None, model: type | None = None, ids: list | None = None):
        self.model = model
        self.ids = list(ids or [])
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        name = self.model.__name__ if self.model else "record"
        if self.ids:
            return f"No query results for model [{name}] {', '.join(map(str, self.ids))}"
        return f"No query results for model [{name}]."


class InvalidArgumentError(FileClientError, ValueError):
    pass
