"""Error types raised by the menu pipeline."""


class ChucksError(Exception):
    """Base error for menu fetching and decoding."""


class InvalidRequestError(ChucksError):
    """The menu request could not be constructed."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class NetworkError(ChucksError):
    """Transport failure or a non-200 response from the dining API."""

    def __init__(self, status_code: int | None = None) -> None:
        message = "Network error"
        if status_code is not None:
            message = f"Network error (status={status_code})"
        super().__init__(message)
        self.status_code = status_code


class DecodingError(ChucksError):
    """The response body does not match the menu document shape."""

    def __init__(self, underlying: Exception) -> None:
        super().__init__(f"Failed to parse menu data: {underlying}")
        self.underlying = underlying
