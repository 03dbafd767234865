# pixelletter/services/order.py
"""
Order assembly: turn a permissive OrderRequest into a fully determined Envelope.

Nothing here performs I/O; everything either returns wire records or raises an
OrderValidationError before the codec is involved.
"""
from typing import Optional

from pixelletter.config import PROTOCOL_VERSION
from pixelletter.exceptions import (
    AmbiguousContentError,
    EmptyAttachmentsError,
    NoDeliveryChannelError,
)
from pixelletter.models import (
    CONTENT_TYPE_TEXT,
    CONTENT_TYPE_UPLOAD,
    ActionType,
    Auth,
    Command,
    Envelope,
    Letter,
    Options,
    Order,
    OrderRequest,
    Text,
)


def validate_order_request(req: OrderRequest) -> None:
    """First failing rule wins."""
    if req.letter is None and req.fax is None:
        raise NoDeliveryChannelError()

    if (req.files is None) == (req.text is None):
        raise AmbiguousContentError()

    if req.files is not None and len(req.files) == 0:
        raise EmptyAttachmentsError()


def derive_action(letter: Optional[Letter], fax: Optional[str]) -> ActionType:
    if letter is not None and fax is not None:
        return ActionType.LETTER_AND_FAX
    if letter is not None:
        return ActionType.LETTER
    if fax is not None:
        return ActionType.FAX
    raise NoDeliveryChannelError()


def derive_content_type(files: Optional[list], text) -> str:
    if files is not None and text is None:
        return CONTENT_TYPE_UPLOAD
    if text is not None and files is None:
        return CONTENT_TYPE_TEXT
    raise AmbiguousContentError()


def build_options(req: OrderRequest) -> Options:
    letter = req.letter
    text = req.text
    return Options(
        action=derive_action(letter, req.fax),
        transaction=req.transaction,
        control="",
        fax=req.fax,
        location=letter.location if letter else None,
        destination=letter.destination if letter else None,
        addoptions=tuple(letter.services or ()) if letter else (),
        font=text.font if text else None,
        returnaddress=text.return_address if text else "",
    )


def build_order(req: OrderRequest) -> Order:
    validate_order_request(req)

    text = None
    if req.text is not None:
        text = Text(address=req.text.address, message=req.text.message)

    return Order(
        content_type=derive_content_type(req.files, req.text),
        options=build_options(req),
        text=text,
    )


def build_order_envelope(auth: Auth, req: OrderRequest, version: str = PROTOCOL_VERSION) -> Envelope:
    return Envelope(
        version=version,
        auth=auth,
        command=Command(order=build_order(req)),
    )
