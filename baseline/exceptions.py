"""Exception types for pybaseline."""

from __future__ import annotations


class BaselineError(Exception):
    """Base exception for expected application errors."""


class RegistryLoadError(BaselineError):
    """Raised when the feature registry data cannot be read or parsed."""

    def __init__(self, source: str, *, cause: str | None = None) -> None:
        self.source = source
        detail = f"Unable to load Baseline feature data from {source}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class ConfigurationError(BaselineError):
    """Raised when user configuration makes an operation impossible."""


class FileReadError(BaselineError):
    """Raised when a scanned file cannot be read."""

    def __init__(self, path: str, *, cause: str | None = None) -> None:
        self.path = path
        detail = f"Unable to read {path}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class NetworkError(BaselineError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to connect to {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(BaselineError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(BaselineError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(BaselineError):
    """Raised when a response body is invalid or unexpectedly empty."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received empty or malformed content from {url}")
