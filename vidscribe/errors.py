"""Exception hierarchy shared by the handlers, gateway and web layer.

Every exception carries the HTTP status the web layer answers with.
"""


class VidscribeError(Exception):
    status_code = 500


class ConfigurationError(VidscribeError):
    """Required configuration (the gateway credential) is missing or malformed."""


class InvalidInput(VidscribeError):
    """The request payload was rejected before any network call."""

    status_code = 400


class GatewayError(VidscribeError):
    """Base class for failures reported by the AI gateway."""


class RateLimited(GatewayError):
    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded. Please try again in a moment."):
        super().__init__(message)


class QuotaExceeded(GatewayError):
    status_code = 402

    def __init__(self, message: str = "AI usage limit reached. Please add credits to continue."):
        super().__init__(message)


class UpstreamError(GatewayError):
    """Any other non-2xx answer from the gateway."""

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"AI Gateway error: {status}")
        self.status = status
        self.body = body


class TransportError(GatewayError):
    """The request never produced an HTTP response."""


class FetchError(VidscribeError):
    """A video URL could not be validated or downloaded."""

    status_code = 400
