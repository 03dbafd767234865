# pixelletter/services/response.py

from pixelletter.error_codes import SUCCESS_CODE, error_code_to_msg
from pixelletter.exceptions import GatewayError, MalformedResponseError, UnknownGatewayError
from pixelletter.models import Envelope, Response


def require_response(env: Envelope) -> Response:
    if env.response is None:
        raise MalformedResponseError("No `response` field")
    return env.response


def interpret_response(resp: Response) -> str:
    """
    Code 100 returns the gateway's own confirmation text.
    Anything else raises: GatewayError with the documented message, or
    UnknownGatewayError carrying the raw code and whatever text the gateway sent.
    """
    code = resp.result.code
    if code == SUCCESS_CODE:
        return resp.result.msg

    msg = error_code_to_msg(code)
    if msg is None:
        raise UnknownGatewayError(code, resp.result.msg)
    raise GatewayError(code, msg, gateway_message=resp.result.msg)
