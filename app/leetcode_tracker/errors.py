class FetchError(Exception):
    """
    Base class for every classified failure of a profile lookup.
    ``message`` is safe to show to the end user, ``http_status`` is the status
    the request handler answers with.
    """
    message: str = "Failed to fetch user data. Please try again later."
    http_status: int = 500

    def __init__(self, identifier: str | None = None, detail: str | None = None):
        self.identifier = identifier
        self.detail = detail
        super().__init__(detail or self.message)


class InvalidInput(FetchError):
    message = "A username is required."
    http_status = 400


class NotFound(FetchError):
    message = "User not found. Please check the username and try again."
    http_status = 404


class UpstreamUnavailable(FetchError):
    """Transport failure, non-success status or an unexpected response shape."""
    message = "Failed to fetch user data. Please try again later."
    http_status = 500
