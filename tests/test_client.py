"""
Tests for the HTTP-facing layer: multipart layout, transport failures,
response decoding and the Client / OrderBuilder call surface.
The requests session is always a mock; nothing goes over the network.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from pixelletter import Client
from pixelletter.api import build_multipart, decode_response, send_post_request
from pixelletter.config import XML_HEADER
from pixelletter.exceptions import (
    EmptyAttachmentsError,
    GatewayError,
    MalformedResponseError,
    NoDeliveryChannelError,
    TransportError,
)
from pixelletter.models import AddOption, Attachment, Letter, Location, OrderRequest, TextContent

URL = "https://gateway.test/xml/index.php"

OK_BODY = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<pixelletter version="1.3"><response><result code="100">'
    '<msg>Auftrag erfolgreich übermittelt</msg></result>'
    '<transaction>tx-1</transaction></response></pixelletter>'
)

PDF = Attachment(filename="brief.pdf", content=b"%PDF-1.4 a", content_type="application/pdf")
PNG = Attachment(filename="anlage.png", content=b"\x89PNG")


def _http_response(body, status=200, content_type="text/xml"):
    resp = requests.Response()
    resp.status_code = status
    resp._content = body.encode("utf-8")
    resp.headers["Content-Type"] = content_type
    resp.url = URL
    resp.reason = "OK" if status < 400 else "Internal Server Error"
    return resp


def _session(body=OK_BODY, status=200):
    session = Mock(spec=requests.Session)
    session.post.return_value = _http_response(body, status)
    return session


def _client(session, **kwargs):
    return Client(
        email="kunde@example.de",
        password="geheim",
        agb=True,
        widerrufsverzicht=True,
        testing_mode=kwargs.pop("testing_mode", False),
        session=session,
        url=URL,
        **kwargs,
    )


def _sent_parts(session):
    return session.post.call_args.kwargs["files"]


def _sent_xml(session):
    name, (filename, payload) = _sent_parts(session)[0]
    assert name == "xml"
    assert filename is None
    return payload.decode("utf-8")


class TestBuildMultipart:
    """Multipart body layout."""

    def test_xml_part_first_then_uploads(self):
        parts = build_multipart("<x/>", [PDF, PNG])
        assert [name for name, _ in parts] == ["xml", "uploadfile0", "uploadfile1"]
        assert parts[1][1] == ("brief.pdf", b"%PDF-1.4 a", "application/pdf")
        assert parts[2][1] == ("anlage.png", b"\x89PNG")

    def test_text_order_has_only_xml(self):
        parts = build_multipart("<x/>", None)
        assert [name for name, _ in parts] == ["xml"]


class TestSendPostRequest:
    """Transport behaviour."""

    def test_returns_body_text(self):
        session = _session()
        text = send_post_request("<x/>", session=session, url=URL)
        assert "Auftrag erfolgreich übermittelt" in text
        assert session.post.call_args.args[0] == URL

    def test_network_error(self):
        session = Mock(spec=requests.Session)
        session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(TransportError) as exc_info:
            send_post_request("<x/>", session=session, url=URL)

        assert exc_info.value.http_status is None
        assert "connection refused" in str(exc_info.value)

    def test_http_error_status(self):
        session = _session(body="Server kaputt", status=500)

        with pytest.raises(TransportError) as exc_info:
            send_post_request("<x/>", session=session, url=URL)

        assert exc_info.value.http_status == 500
        assert exc_info.value.raw_response_text == "Server kaputt"

    def test_uses_shared_session_by_default(self):
        with patch("pixelletter.api.SESSION") as mock_session:
            mock_session.post.return_value = _http_response(OK_BODY)
            send_post_request("<x/>")
            mock_session.post.assert_called_once()


class TestDecodeResponse:
    def test_not_xml(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_response("<html><body>Wartung")
        assert exc_info.value.raw_response_text == "<html><body>Wartung"

    def test_ok(self):
        env = decode_response(OK_BODY)
        assert env.response.result.code == 100


class TestClientOrder:
    """End-to-end order submission against a mocked session."""

    def test_upload_letter(self):
        session = _session()
        client = _client(session)

        msg = (
            client.order()
            .letter(Letter("de", location=Location.MUNICH, services=[AddOption.EINSCHREIBEN, AddOption.COLOR]))
            .files([PDF, PNG])
            .transaction("tx-1")
            .submit()
        )

        assert msg == "Auftrag erfolgreich übermittelt"
        parts = _sent_parts(session)
        assert [name for name, _ in parts] == ["xml", "uploadfile0", "uploadfile1"]

        xml_text = _sent_xml(session)
        assert xml_text.startswith(XML_HEADER)
        assert '<order type="upload">' in xml_text
        assert "<action>1</action>" in xml_text
        assert "<destination>DE</destination>" in xml_text
        assert "<location>1</location>" in xml_text
        assert "<addoption>27,33</addoption>" in xml_text
        assert "<transaction>tx-1</transaction>" in xml_text
        assert "<agb>ja</agb>" in xml_text
        assert "<testmodus>false</testmodus>" in xml_text
        assert "<text>" not in xml_text

    def test_text_fax(self):
        session = _session()
        client = _client(session, testing_mode=True, reference="Mandant 7")
        text = TextContent(address="Firma X\nPostfach 1", message="Bitte zurückrufen", return_address="Ich, Hier 1")

        client.submit_order(OrderRequest(fax="+49301234567", text=text))

        xml_text = _sent_xml(session)
        assert [name for name, _ in _sent_parts(session)] == ["xml"]
        assert '<order type="text">' in xml_text
        assert "<action>2</action>" in xml_text
        assert "<fax>+49301234567</fax>" in xml_text
        assert "<returnaddress>Ich, Hier 1</returnaddress>" in xml_text
        assert "<message>Bitte zurückrufen</message>" in xml_text
        assert "<destination>" not in xml_text
        assert "<testmodus>true</testmodus>" in xml_text
        assert "<ref>Mandant 7</ref>" in xml_text

    def test_validation_error_sends_nothing(self):
        session = _session()
        client = _client(session)

        with pytest.raises(NoDeliveryChannelError):
            client.order().files([PDF]).submit()
        with pytest.raises(EmptyAttachmentsError):
            client.order().letter(Letter("DE")).files([]).submit()

        session.post.assert_not_called()

    def test_gateway_error(self):
        body = (
            '<pixelletter version="1.3"><response><result code="21">'
            '<msg>Guthaben</msg></result></response></pixelletter>'
        )
        client = _client(_session(body))

        with pytest.raises(GatewayError) as exc_info:
            client.order().letter(Letter("DE")).files([PDF]).submit()

        assert exc_info.value.code == 21
        assert str(exc_info.value).startswith("Ihr Guthaben reicht nicht aus.")

    def test_response_without_response_record(self):
        client = _client(_session('<pixelletter version="1.3"/>'))

        with pytest.raises(MalformedResponseError):
            client.order().letter(Letter("DE")).files([PDF]).submit()

    def test_builder_collects_request(self):
        req = _client(_session()).order().fax("+4930").text(
            TextContent(address="a", message="b", return_address="c")
        ).build()
        assert req.fax == "+4930"
        assert req.letter is None
        assert req.files is None


class TestClientAccountInfo:
    def test_account_info(self):
        body = (
            '<pixelletter version="1.3">'
            '<response><result code="100"><msg>OK</msg></result></response>'
            '<id>4711</id><data><firstname>Erika</firstname><lastname>Mustermann</lastname></data>'
            '<credit currency="EUR">25,00</credit></pixelletter>'
        )
        session = _session(body)

        env = _client(session).account_info()

        assert '<info><account:info type="all" /></info>' in _sent_xml(session)
        assert "<order" not in _sent_xml(session)
        assert env.customer_id == "4711"
        assert env.customer_data.lastname == "Mustermann"
        assert env.customer_credit.amount == "25,00"

    def test_account_info_gateway_error(self):
        body = '<pixelletter version="1.3"><response><result code="4"><msg>x</msg></result></response></pixelletter>'
        with pytest.raises(GatewayError) as exc_info:
            _client(_session(body)).account_info()
        assert exc_info.value.code == 4


class TestClientCredentials:
    def test_password_not_in_repr(self):
        client = _client(_session())
        assert "geheim" not in repr(client.auth)

    def test_auth_is_immutable(self):
        client = _client(_session())
        with pytest.raises(Exception):
            client.auth.password = "x"

    def test_from_env(self):
        with patch("pixelletter.client.config") as mock_config:
            mock_config.EMAIL = "env@example.de"
            mock_config.PASSWORD = "envpw"
            mock_config.AGB = True
            mock_config.WIDERRUFSVERZICHT = False
            mock_config.TESTMODUS = True
            mock_config.SESSION = Mock(spec=requests.Session)
            mock_config.API_URL = URL

            client = Client.from_env()

        assert client.auth.email == "env@example.de"
        assert client.auth.agb is True
        assert client.auth.widerrufsverzicht is False
        assert client.auth.testmodus is True
        assert client.url == URL

    def test_testing_mode_follows_config_when_omitted(self):
        with patch("pixelletter.client.config") as mock_config:
            mock_config.TESTMODUS = True
            on = Client("a@example.de", "pw", True, True, session=_session(), url=URL)
            mock_config.TESTMODUS = False
            off = Client("a@example.de", "pw", True, True, session=_session(), url=URL)

        assert on.auth.testmodus is True
        assert off.auth.testmodus is False

    def test_explicit_testing_mode_wins(self):
        with patch("pixelletter.client.config") as mock_config:
            mock_config.TESTMODUS = True
            client = Client("a@example.de", "pw", True, True, testing_mode=False, session=_session(), url=URL)
        assert client.auth.testmodus is False
