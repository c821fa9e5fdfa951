"""Custom exceptions for record store clients."""


class StoreError(Exception):
    """Base exception for all record store errors.

    Catching this exception catches every failure the retrieval service turns
    into an empty listing or an absent job.
    """

    pass


class StoreHTTPError(StoreError):
    """HTTP request to the record store failed.

    Covers 4xx/5xx responses (invalid token, unknown base, rate limiting) and,
    with ``status_code`` 0, transport failures such as refused connections.
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code, or 0 when no response was received
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class StoreTimeoutError(StoreError):
    """Request to the record store timed out."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class StoreResponseError(StoreError):
    """The store answered, but the body was not the expected JSON shape."""

    pass


class StoreConfigurationError(StoreError):
    """Record store is not configured.

    Raised when credentials or the table name are missing at call time, or
    when an unknown store type is requested.
    """

    pass
