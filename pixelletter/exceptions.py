# pixelletter/exceptions.py


class PixelletterError(Exception):
    """Base class for everything this client raises."""


# ---------------- Local input validation ----------------
class OrderValidationError(PixelletterError):
    """The order request was rejected before anything was encoded or sent."""


class NoDeliveryChannelError(OrderValidationError):
    def __init__(self, message: str = "No delivery channel specified: set `letter` and/or `fax`."):
        super().__init__(message)


class AmbiguousContentError(OrderValidationError):
    def __init__(self, message: str = "Ambiguous or missing content: set either `files` or `text`."):
        super().__init__(message)


class EmptyAttachmentsError(OrderValidationError):
    def __init__(self, message: str = "`files` is empty."):
        super().__init__(message)


class InvalidDestinationError(OrderValidationError):
    pass


# ---------------- Wire codec ----------------
class CodecError(PixelletterError):
    pass


class EncodeError(CodecError):
    pass


class DecodeError(CodecError):
    pass


# ---------------- Transport / protocol ----------------
class TransportError(PixelletterError):
    """
    Raised when the HTTP exchange itself fails (network error or non-2xx status).
    Carries the HTTP status and the raw body when there was a response at all.
    """
    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        raw_response_text: str | None = None,
    ):
        super().__init__(message)
        self.http_status = http_status
        self.raw_response_text = raw_response_text


class MalformedResponseError(PixelletterError):
    def __init__(self, message: str, *, raw_response_text: str | None = None):
        super().__init__(message)
        self.raw_response_text = raw_response_text


# ---------------- Gateway business errors ----------------
class GatewayError(PixelletterError):
    """The gateway answered with a result code other than 100."""
    def __init__(self, code: int, message: str, *, gateway_message: str | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.gateway_message = gateway_message


class UnknownGatewayError(GatewayError):
    """Result code not listed in the gateway's error table."""
    def __init__(self, code: int, gateway_message: str | None = None):
        super().__init__(
            code,
            f"Unknown error code {code}: {gateway_message or ''}".rstrip(),
            gateway_message=gateway_message,
        )
