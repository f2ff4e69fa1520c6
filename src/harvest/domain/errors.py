class HarvestError(Exception):
    """Base class for failures that abort a whole harvest run."""


class FetchError(HarvestError):
    def __init__(self, locator: str, message: str) -> None:
        super().__init__(f"{message} ({locator})")
        self.locator = locator
        self.reason = message


class FetchTimeoutError(FetchError):
    def __init__(self, locator: str, timeout_ms: int) -> None:
        super().__init__(locator, f"Timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class HttpStatusError(FetchError):
    def __init__(self, locator: str, status: int) -> None:
        super().__init__(locator, f"HTTP {status}")
        self.status = status

    @property
    def retryable(self) -> bool:
        return self.status >= 500


class NetworkError(FetchError):
    def __init__(self, locator: str, cause: BaseException) -> None:
        super().__init__(locator, f"{type(cause).__name__}: {cause}")
        self.cause = cause


class RootDiscoveryError(HarvestError):
    """The root document produced nothing to walk."""
