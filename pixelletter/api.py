#api.py
from typing import List, Optional, Sequence, Tuple

import requests

from pixelletter.codec import from_xml
from pixelletter.config import API_URL, HTTP_TIMEOUT, SESSION
from pixelletter.exceptions import DecodeError, MalformedResponseError, TransportError
from pixelletter.logger import get_logger
from pixelletter.models import Attachment, Envelope

log = get_logger("api")

MultipartPart = Tuple[str, tuple]


def build_multipart(xml_text: str, files: Optional[Sequence[Attachment]] = None) -> List[MultipartPart]:
    """`xml` part first, then uploadfile0, uploadfile1, ... in caller order."""
    parts: List[MultipartPart] = [("xml", (None, xml_text.encode("utf-8")))]
    for index, att in enumerate(files or ()):
        if att.content_type:
            parts.append((f"uploadfile{index}", (att.filename, att.content, att.content_type)))
        else:
            parts.append((f"uploadfile{index}", (att.filename, att.content)))
    return parts


def send_post_request(
    xml_text: str,
    files: Optional[Sequence[Attachment]] = None,
    *,
    session: Optional[requests.Session] = None,
    url: Optional[str] = None,
) -> str:
    session = session or SESSION
    url = url or API_URL
    parts = build_multipart(xml_text, files)

    log.info(f"POST {url} parts={[name for name, _ in parts]}")

    try:
        resp = session.post(url, files=parts, timeout=HTTP_TIMEOUT)
    except requests.RequestException as e:
        log.error(f"HTTP request to {url} failed: {e}")
        raise TransportError(f"HTTP request failed: {e}") from e

    # gateway answers UTF-8 XML, often without a charset in Content-Type
    if "charset" not in (resp.headers.get("Content-Type") or "").lower():
        resp.encoding = "utf-8"

    log.info(f"HTTP status={resp.status_code}")
    log.debug(f"Raw response: {resp.text[:2000]}")

    try:
        resp.raise_for_status()
    except requests.HTTPError as e:
        raise TransportError(
            str(e),
            http_status=resp.status_code,
            raw_response_text=resp.text[:2000],
        ) from e

    return resp.text


def decode_response(raw_text: str) -> Envelope:
    try:
        return from_xml(raw_text)
    except DecodeError as e:
        raise MalformedResponseError(str(e), raw_response_text=raw_text[:2000]) from e
