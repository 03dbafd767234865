#client.py
from typing import Iterable, Optional

import requests

from pixelletter import config
from pixelletter.api import decode_response, send_post_request
from pixelletter.codec import to_xml
from pixelletter.logger import get_logger
from pixelletter.models import (
    AccountInfo,
    Attachment,
    Auth,
    Command,
    Envelope,
    Info,
    Letter,
    OrderRequest,
    TextContent,
)
from pixelletter.services.order import build_order_envelope
from pixelletter.services.response import interpret_response, require_response

log = get_logger("client")


class Client:
    """
    Holds the (immutable) credentials and the HTTP session. Safe to share
    between callers; every call builds its own envelope.

    Without an explicit `testing_mode` the flag follows `config.TESTMODUS`.
    ENV defaults to TEST, which sends testmodus=true, so nothing is printed or
    posted until ENV=LIVE is set or `testing_mode=False` is passed.
    """

    def __init__(
        self,
        email: str,
        password: str,
        agb: bool,
        widerrufsverzicht: bool,
        testing_mode: Optional[bool] = None,
        reference: Optional[str] = None,
        session: Optional[requests.Session] = None,
        url: Optional[str] = None,
    ):
        self.auth = Auth(
            email=email,
            password=password,
            agb=agb,
            widerrufsverzicht=widerrufsverzicht,
            testmodus=config.TESTMODUS if testing_mode is None else testing_mode,
            ref=reference,
        )
        self.session = session or config.SESSION
        self.url = url or config.API_URL

    @classmethod
    def from_env(cls, **kwargs) -> "Client":
        return cls(
            email=config.EMAIL,
            password=config.PASSWORD,
            agb=config.AGB,
            widerrufsverzicht=config.WIDERRUFSVERZICHT,
            **kwargs,
        )

    def order(self) -> "OrderBuilder":
        return OrderBuilder(self)

    def submit_order(self, req: OrderRequest) -> str:
        """Validate, send and interpret one order. Returns the gateway's confirmation text."""
        envelope = build_order_envelope(self.auth, req)
        order = envelope.command.order
        log.info(
            f"Submitting order type={order.content_type} action={order.options.action.name} "
            f"transaction={order.options.transaction} files={len(req.files or [])}"
        )

        resp = require_response(self._exchange(envelope, req.files))
        log.debug(f"Decoded response: {resp}")
        return interpret_response(resp)

    def account_info(self, info_type: str = "all") -> Envelope:
        envelope = Envelope(
            version=config.PROTOCOL_VERSION,
            auth=self.auth,
            command=Command(info=Info(account_info=AccountInfo(info_type=info_type))),
        )
        log.info(f"Requesting account info type={info_type}")

        decoded = self._exchange(envelope)
        if decoded.response is not None:
            interpret_response(decoded.response)
        return decoded

    def _exchange(self, envelope: Envelope, files: Optional[Iterable[Attachment]] = None) -> Envelope:
        raw = send_post_request(to_xml(envelope), files, session=self.session, url=self.url)
        return decode_response(raw)


class OrderBuilder:
    """
    Collects the optional parts of an order; nothing is checked until submit().

        client.order().letter(Letter("DE")).files([att]).submit()
    """

    def __init__(self, client: Client):
        self._client = client
        self._req = OrderRequest()

    def letter(self, letter: Letter) -> "OrderBuilder":
        self._req.letter = letter
        return self

    def fax(self, number: str) -> "OrderBuilder":
        self._req.fax = number
        return self

    def files(self, files: Iterable[Attachment]) -> "OrderBuilder":
        self._req.files = list(files)
        return self

    def text(self, text: TextContent) -> "OrderBuilder":
        self._req.text = text
        return self

    def transaction(self, transaction_id: str) -> "OrderBuilder":
        self._req.transaction = transaction_id
        return self

    def build(self) -> OrderRequest:
        return self._req

    def submit(self) -> str:
        return self._client.submit_order(self._req)
