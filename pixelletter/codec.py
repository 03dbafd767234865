"""
XML wire codec for the pixelletter gateway.

Every field of the wire model has one encode rule and one decode rule:

* plain text                  -> element text
* ActionType / Location       -> fixed integer, strict both ways
* AddOption list              -> comma-joined integers; unknown tokens dropped on decode
* agb / widerrufsverzicht     -> "ja" / "nein"
* testmodus                   -> "true" / "false"

version, order type, result code, credit currency and account info type are
attributes, everything else is a child element. Optional fields that are None
are never written, and a missing optional element decodes to None.
"""
import xml.etree.ElementTree as ET
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pixelletter.config import XML_HEADER
from pixelletter.exceptions import DecodeError, EncodeError
from pixelletter.models import (
    CONTENT_TYPE_TEXT,
    CONTENT_TYPE_UPLOAD,
    AccountInfo,
    ActionType,
    AddOption,
    Auth,
    Command,
    CustomerCredit,
    CustomerData,
    Envelope,
    Info,
    Location,
    Options,
    Order,
    Response,
    ResponseResult,
    Text,
)

ROOT_TAG = "pixelletter"

# Element name used when *writing* the nested account info. The decoder cannot
# resolve an undeclared "account:" prefix, so it reads plain <info> instead.
ACCOUNT_INFO_TAG_OUT = "account:info"
ACCOUNT_INFO_TAG_IN = "info"

ACTION_CODES: Dict[int, ActionType] = {
    1: ActionType.LETTER,
    2: ActionType.FAX,
    3: ActionType.LETTER_AND_FAX,
}

LOCATION_CODES: Dict[int, Location] = {
    1: Location.MUNICH,
    2: Location.HAUSLEITEN,
    3: Location.HAMBURG,
}

# Not contiguous: 27-30, 33, 44.
ADDOPTION_CODES: Dict[int, AddOption] = {
    27: AddOption.EINSCHREIBEN,
    28: AddOption.RUECKSCHEIN,
    29: AddOption.EIGENHAENDIG,
    30: AddOption.EINSCHREIBEN_EINWURF,
    33: AddOption.COLOR,
    44: AddOption.GREEN,
}

CONTENT_TYPES = (CONTENT_TYPE_UPLOAD, CONTENT_TYPE_TEXT)

_YES = "ja"
_NO = "nein"


# ------------------------------------------------------------
# Field-level rules
# ------------------------------------------------------------
def encode_enum(value: Any, table: Dict[int, Any], field_name: str) -> str:
    for code, member in table.items():
        if value is member:
            return str(code)
    raise EncodeError(f"Invalid value for `{field_name}`: {value!r}")


def _is_unsigned(token: str) -> bool:
    # str.isdigit alone also accepts "²" and other non-ASCII digits
    return token.isascii() and token.isdigit()


def decode_enum(raw: Optional[str], table: Dict[int, Any], field_name: str):
    token = (raw or "").strip()
    if not _is_unsigned(token):
        raise DecodeError(f"Invalid value for `{field_name}`, expected an integer but got: {raw!r}")
    member = table.get(int(token))
    if member is None:
        raise DecodeError(f"Unknown value for `{field_name}`: {token}")
    return member


def encode_yes_no(value: bool) -> str:
    if not isinstance(value, bool):
        raise EncodeError(f"Expected a bool, got: {value!r}")
    return _YES if value else _NO


def decode_yes_no(raw: Optional[str]) -> bool:
    if raw == _YES:
        return True
    if raw == _NO:
        return False
    raise DecodeError(f"Unknown value, expected 'ja' or 'nein', but got: {raw}")


def encode_bool(value: bool) -> str:
    if not isinstance(value, bool):
        raise EncodeError(f"Expected a bool, got: {value!r}")
    return "true" if value else "false"


def decode_bool(raw: Optional[str]) -> bool:
    token = (raw or "").strip()
    if token == "true":
        return True
    if token == "false":
        return False
    raise DecodeError(f"Unknown value, expected 'true' or 'false', but got: {raw}")


def encode_addoptions(values: Iterable[AddOption]) -> str:
    return ",".join(encode_enum(v, ADDOPTION_CODES, "addoption") for v in values)


def decode_addoptions(raw: Optional[str]) -> Tuple[AddOption, ...]:
    out: List[AddOption] = []
    for token in (raw or "").split(","):
        token = token.strip()
        if not _is_unsigned(token):
            continue
        member = ADDOPTION_CODES.get(int(token))
        if member is not None:
            out.append(member)
    return tuple(out)


# ------------------------------------------------------------
# Encode helpers
# ------------------------------------------------------------
def _add(parent: ET.Element, tag: str, text: str) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = text
    return el


def _add_opt(parent: ET.Element, tag: str, text: Optional[str]) -> None:
    if text is not None:
        _add(parent, tag, text)


def _encode_auth(parent: ET.Element, auth: Auth) -> None:
    el = ET.SubElement(parent, "auth")
    _add(el, "email", auth.email)
    _add(el, "password", auth.password)
    _add(el, "agb", encode_yes_no(auth.agb))
    _add(el, "widerrufsverzicht", encode_yes_no(auth.widerrufsverzicht))
    _add(el, "testmodus", encode_bool(auth.testmodus))
    _add_opt(el, "ref", auth.ref)


def _encode_options(parent: ET.Element, opts: Options) -> None:
    el = ET.SubElement(parent, "options")
    _add(el, "action", encode_enum(opts.action, ACTION_CODES, "action"))
    _add_opt(el, "transaction", opts.transaction)
    _add(el, "control", opts.control)
    _add_opt(el, "fax", opts.fax)
    if opts.location is not None:
        _add(el, "location", encode_enum(opts.location, LOCATION_CODES, "location"))
    _add_opt(el, "destination", opts.destination)
    if opts.addoptions:
        _add(el, "addoption", encode_addoptions(opts.addoptions))
    _add_opt(el, "font", opts.font)
    _add(el, "returnaddress", opts.returnaddress)


def _encode_order(parent: ET.Element, order: Order) -> None:
    if order.content_type not in CONTENT_TYPES:
        raise EncodeError(f"Invalid order type: {order.content_type!r}")
    if order.content_type == CONTENT_TYPE_TEXT and order.text is None:
        raise EncodeError("Order of type 'text' needs a text block")
    if order.content_type == CONTENT_TYPE_UPLOAD and order.text is not None:
        raise EncodeError("Order of type 'upload' must not carry a text block")

    el = ET.SubElement(parent, "order", {"type": order.content_type})
    _encode_options(el, order.options)
    if order.text is not None:
        text_el = ET.SubElement(el, "text")
        _add(text_el, "address", order.text.address)
        _add(text_el, "message", order.text.message)


def _encode_command(parent: ET.Element, cmd: Command) -> None:
    el = ET.SubElement(parent, "command")
    if cmd.order is not None:
        _encode_order(el, cmd.order)
    if cmd.info is not None:
        info_el = ET.SubElement(el, "info")
        ET.SubElement(info_el, ACCOUNT_INFO_TAG_OUT, {"type": cmd.info.account_info.info_type})
    _add_opt(el, "id", cmd.id)


def _encode_response(parent: ET.Element, resp: Response) -> None:
    el = ET.SubElement(parent, "response")
    result_el = ET.SubElement(el, "result", {"code": str(int(resp.result.code))})
    _add(result_el, "msg", resp.result.msg)
    _add_opt(el, "transaction", resp.transaction)


def _encode_customer_data(parent: ET.Element, data: CustomerData) -> None:
    el = ET.SubElement(parent, "data")
    for tag in ("company", "sex", "title", "firstname", "lastname",
                "street", "pcode", "city", "country"):
        _add_opt(el, tag, getattr(data, tag))

    # <prefix> always sits directly before the number it belongs to
    for number in ("tel", "fax", "mobil"):
        prefix = getattr(data, f"{number}_prefix")
        value = getattr(data, number)
        if prefix is not None and value is None:
            raise EncodeError(f"`{number}_prefix` given without `{number}`")
        _add_opt(el, "prefix", prefix)
        _add_opt(el, number, value)

    _add_opt(el, "email", data.email)
    _add_opt(el, "type", data.payment_type)


def _encode_customer_credit(parent: ET.Element, credit: CustomerCredit) -> None:
    el = ET.SubElement(parent, "credit", {"currency": credit.currency})
    if credit.amount is not None:
        el.text = credit.amount


def encode_envelope(env: Envelope) -> ET.Element:
    root = ET.Element(ROOT_TAG, {"version": env.version})
    if env.auth is not None:
        _encode_auth(root, env.auth)
    if env.command is not None:
        _encode_command(root, env.command)
    if env.response is not None:
        _encode_response(root, env.response)
    _add_opt(root, "id", env.customer_id)
    if env.customer_data is not None:
        _encode_customer_data(root, env.customer_data)
    if env.customer_credit is not None:
        _encode_customer_credit(root, env.customer_credit)
    return root


def to_xml(env: Envelope) -> str:
    """Full request document: fixed XML declaration followed by the envelope."""
    return XML_HEADER + ET.tostring(encode_envelope(env), encoding="unicode")


# ------------------------------------------------------------
# Decode helpers
# ------------------------------------------------------------
def _child(el: ET.Element, tag: str) -> Optional[ET.Element]:
    return el.find(tag)


def _required_child(el: ET.Element, tag: str) -> ET.Element:
    child = el.find(tag)
    if child is None:
        raise DecodeError(f"Missing <{tag}> in <{el.tag}>")
    return child


def _text(el: ET.Element) -> str:
    return el.text or ""


def _required_text(el: ET.Element, tag: str) -> str:
    return _text(_required_child(el, tag))


def _optional_text(el: ET.Element, tag: str) -> Optional[str]:
    child = _child(el, tag)
    return None if child is None else _text(child)


def _required_attr(el: ET.Element, name: str) -> str:
    value = el.get(name)
    if value is None:
        raise DecodeError(f"Missing attribute `{name}` on <{el.tag}>")
    return value


def _decode_auth(el: ET.Element) -> Auth:
    return Auth(
        email=_required_text(el, "email"),
        password=_required_text(el, "password"),
        agb=decode_yes_no(_required_text(el, "agb")),
        widerrufsverzicht=decode_yes_no(_required_text(el, "widerrufsverzicht")),
        testmodus=decode_bool(_required_text(el, "testmodus")),
        ref=_optional_text(el, "ref"),
    )


def _decode_options(el: ET.Element) -> Options:
    location = _child(el, "location")
    return Options(
        action=decode_enum(_required_text(el, "action"), ACTION_CODES, "action"),
        transaction=_optional_text(el, "transaction"),
        control=_required_text(el, "control"),
        fax=_optional_text(el, "fax"),
        location=None if location is None else decode_enum(location.text, LOCATION_CODES, "location"),
        destination=_optional_text(el, "destination"),
        addoptions=decode_addoptions(_optional_text(el, "addoption")),
        font=_optional_text(el, "font"),
        returnaddress=_required_text(el, "returnaddress"),
    )


def _decode_order(el: ET.Element) -> Order:
    content_type = _required_attr(el, "type")
    if content_type not in CONTENT_TYPES:
        raise DecodeError(f"Unknown order type: {content_type!r}")

    text_el = _child(el, "text")
    text = None
    if text_el is not None:
        text = Text(
            address=_required_text(text_el, "address"),
            message=_required_text(text_el, "message"),
        )

    return Order(
        content_type=content_type,
        options=_decode_options(_required_child(el, "options")),
        text=text,
    )


def _find_account_info(info_el: ET.Element) -> ET.Element:
    for child in info_el:
        if child.tag == ACCOUNT_INFO_TAG_IN or child.tag.endswith("}" + ACCOUNT_INFO_TAG_IN):
            return child
    raise DecodeError("Missing account <info> in <info>")


def _decode_command(el: ET.Element) -> Command:
    order_el = _child(el, "order")
    info_el = _child(el, "info")
    info = None
    if info_el is not None:
        account_el = _find_account_info(info_el)
        info = Info(account_info=AccountInfo(info_type=_required_attr(account_el, "type")))

    return Command(
        order=None if order_el is None else _decode_order(order_el),
        info=info,
        id=_optional_text(el, "id"),
    )


def _decode_response(el: ET.Element) -> Response:
    result_el = _required_child(el, "result")
    raw_code = _required_attr(result_el, "code").strip()
    if not _is_unsigned(raw_code.removeprefix("-")):
        raise DecodeError(f"Result code is not an integer: {raw_code!r}")
    code = int(raw_code)

    return Response(
        result=ResponseResult(code=code, msg=_required_text(result_el, "msg")),
        transaction=_optional_text(el, "transaction"),
    )


def _decode_customer_data(el: ET.Element) -> CustomerData:
    fields: Dict[str, str] = {}
    pending_prefix: Optional[str] = None

    for child in el:
        if child.tag == "prefix":
            pending_prefix = _text(child)
        elif child.tag in ("tel", "fax", "mobil"):
            fields[child.tag] = _text(child)
            if pending_prefix is not None:
                fields[f"{child.tag}_prefix"] = pending_prefix
            pending_prefix = None
        elif child.tag == "type":
            fields["payment_type"] = _text(child)
        elif child.tag in ("company", "sex", "title", "firstname", "lastname",
                           "street", "pcode", "city", "country", "email"):
            fields[child.tag] = _text(child)

    return CustomerData(**fields)


def _decode_customer_credit(el: ET.Element) -> CustomerCredit:
    return CustomerCredit(currency=_required_attr(el, "currency"), amount=el.text)


def decode_envelope(root: ET.Element) -> Envelope:
    if root.tag != ROOT_TAG:
        raise DecodeError(f"Expected <{ROOT_TAG}> root element, got <{root.tag}>")

    auth_el = _child(root, "auth")
    command_el = _child(root, "command")
    response_el = _child(root, "response")
    data_el = _child(root, "data")
    credit_el = _child(root, "credit")

    return Envelope(
        version=_required_attr(root, "version"),
        auth=None if auth_el is None else _decode_auth(auth_el),
        command=None if command_el is None else _decode_command(command_el),
        response=None if response_el is None else _decode_response(response_el),
        customer_id=_optional_text(root, "id"),
        customer_data=None if data_el is None else _decode_customer_data(data_el),
        customer_credit=None if credit_el is None else _decode_customer_credit(credit_el),
    )


def from_xml(raw: Union[str, bytes]) -> Envelope:
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise DecodeError(f"Response is not well-formed XML: {e}") from e
    return decode_envelope(root)
