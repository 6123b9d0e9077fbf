from __future__ import annotations

BODY_PREVIEW_CHARS = 200


def truncate(text: str | None, limit: int = BODY_PREVIEW_CHARS) -> str:
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


class IdeasPusherError(Exception):
    """Base class for every failure a run can report."""


class ConfigurationError(IdeasPusherError, ValueError):
    pass


class SourceFetchError(IdeasPusherError):
    def __init__(
        self,
        source: str,
        message: str,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        self.source = source
        self.status = status
        self.body = truncate(body)
        detail = f"{source}: {message}"
        if status is not None:
            detail = f"{detail} (status={status})"
        if self.body:
            detail = f"{detail} body={self.body!r}"
        super().__init__(detail)


class AggregateFetchFailure(IdeasPusherError):
    def __init__(self, failures: list[tuple[str, Exception]]) -> None:
        self.failures = list(failures)
        if self.failures:
            name, exc = self.failures[-1]
            detail = f"All {len(self.failures)} ticker sources failed; last error from {name}: {exc}"
        else:
            detail = "No ticker sources configured"
        super().__init__(detail)

    @property
    def last_error(self) -> Exception | None:
        if not self.failures:
            return None
        return self.failures[-1][1]


class PushError(IdeasPusherError):
    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        self.status = status
        self.body = truncate(body)
        detail = message
        if status is not None:
            detail = f"{detail} (status={status})"
        if self.body:
            detail = f"{detail} body={self.body!r}"
        super().__init__(detail)
