from pixelletter.client import Client, OrderBuilder
from pixelletter.error_codes import ERROR_MESSAGES, error_code_to_msg
from pixelletter.exceptions import (
    AmbiguousContentError,
    DecodeError,
    EmptyAttachmentsError,
    EncodeError,
    GatewayError,
    InvalidDestinationError,
    MalformedResponseError,
    NoDeliveryChannelError,
    OrderValidationError,
    PixelletterError,
    TransportError,
    UnknownGatewayError,
)
from pixelletter.models import (
    ActionType,
    AddOption,
    Attachment,
    Letter,
    Location,
    OrderRequest,
    TextContent,
)

__version__ = "0.1.0"
