#models.py
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from pixelletter.exceptions import InvalidDestinationError


# ---------------- Closed enumerations ----------------
class ActionType(IntEnum):
    LETTER = 1
    FAX = 2
    LETTER_AND_FAX = 3


class Location(IntEnum):
    """Dispatch site for letters."""
    MUNICH = 1
    HAUSLEITEN = 2
    HAMBURG = 3


class AddOption(IntEnum):
    EINSCHREIBEN = 27
    RUECKSCHEIN = 28
    EIGENHAENDIG = 29
    EINSCHREIBEN_EINWURF = 30
    COLOR = 33
    GREEN = 44


CONTENT_TYPE_UPLOAD = "upload"
CONTENT_TYPE_TEXT = "text"


# ---------------- Wire records ----------------
@dataclass(frozen=True)
class Auth:
    email: str
    password: str
    agb: bool                   # ja/nein on the wire
    widerrufsverzicht: bool     # ja/nein on the wire
    testmodus: bool = False     # true/false on the wire
    ref: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"Auth(email={self.email!r}, password='***', agb={self.agb}, "
            f"widerrufsverzicht={self.widerrufsverzicht}, testmodus={self.testmodus}, "
            f"ref={self.ref!r})"
        )


@dataclass(frozen=True)
class Options:
    action: ActionType
    transaction: Optional[str] = None
    control: str = ""           # reserved, always sent empty for now
    fax: Optional[str] = None
    location: Optional[Location] = None
    destination: Optional[str] = None
    addoptions: Tuple[AddOption, ...] = ()
    font: Optional[str] = None
    returnaddress: str = ""


@dataclass(frozen=True)
class Text:
    address: str
    message: str


@dataclass(frozen=True)
class Order:
    content_type: str           # "upload" | "text"
    options: Options
    text: Optional[Text] = None


@dataclass(frozen=True)
class AccountInfo:
    info_type: str


@dataclass(frozen=True)
class Info:
    account_info: AccountInfo


@dataclass(frozen=True)
class Command:
    order: Optional[Order] = None
    info: Optional[Info] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class ResponseResult:
    code: int
    msg: str


@dataclass(frozen=True)
class Response:
    result: ResponseResult
    transaction: Optional[str] = None


@dataclass(frozen=True)
class CustomerData:
    company: Optional[str] = None
    sex: Optional[str] = None
    title: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    street: Optional[str] = None
    pcode: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    tel_prefix: Optional[str] = None
    tel: Optional[str] = None
    fax_prefix: Optional[str] = None
    fax: Optional[str] = None
    mobil_prefix: Optional[str] = None
    mobil: Optional[str] = None
    email: Optional[str] = None
    payment_type: Optional[str] = None


@dataclass(frozen=True)
class CustomerCredit:
    currency: str
    amount: Optional[str] = None


@dataclass(frozen=True)
class Envelope:
    version: str
    auth: Optional[Auth] = None
    command: Optional[Command] = None
    response: Optional[Response] = None
    customer_id: Optional[str] = None
    customer_data: Optional[CustomerData] = None
    customer_credit: Optional[CustomerCredit] = None


# ---------------- Caller-side inputs ----------------
@dataclass(frozen=True)
class Letter:
    destination: str
    location: Optional[Location] = None
    services: Optional[Tuple[AddOption, ...]] = None

    def __post_init__(self):
        dest = (self.destination or "").strip().upper()
        if len(dest) != 2 or not dest.isalpha() or not dest.isascii():
            raise InvalidDestinationError(
                f"Destination must be an ISO 3166 alpha-2 country code, got: {self.destination!r}"
            )
        object.__setattr__(self, "destination", dest)
        if self.services is not None:
            object.__setattr__(self, "services", tuple(self.services))


@dataclass(frozen=True)
class TextContent:
    address: str
    message: str
    return_address: str
    font: Optional[str] = None


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: Optional[str] = None


@dataclass
class OrderRequest:
    """Everything a caller may supply for one order; checked by services.order."""
    letter: Optional[Letter] = None
    fax: Optional[str] = None
    files: Optional[list] = None
    text: Optional[TextContent] = None
    transaction: Optional[str] = None
