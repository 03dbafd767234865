import os

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

ENV = os.getenv("ENV", "TEST").upper()

DEFAULTS = {
    "TEST": {
        "API_URL": "https://www.pixelletter.de/xml/index.php",
        "TESTMODUS": True,
    },
    "LIVE": {
        "API_URL": "https://www.pixelletter.de/xml/index.php",
        "TESTMODUS": False,
    }
}

cfg = DEFAULTS["LIVE"] if ENV == "LIVE" else DEFAULTS["TEST"]


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "ja", "on")


API_URL = os.getenv("PIXELLETTER_API_URL", cfg["API_URL"])
TESTMODUS = _env_flag("PIXELLETTER_TESTMODUS", cfg["TESTMODUS"])

# Wire protocol
PROTOCOL_VERSION = os.getenv("PIXELLETTER_PROTOCOL_VERSION", "1.3")
XML_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

# Credentials (only used by Client.from_env)
EMAIL = os.getenv("PIXELLETTER_EMAIL", "")
PASSWORD = os.getenv("PIXELLETTER_PASSWORD", "")
AGB = _env_flag("PIXELLETTER_AGB", False)
WIDERRUFSVERZICHT = _env_flag("PIXELLETTER_WIDERRUFSVERZICHT", False)

# HTTP
HTTP_TIMEOUT = int(os.getenv("PIXELLETTER_HTTP_TIMEOUT", "60"))
HTTP_RETRIES = int(os.getenv("PIXELLETTER_HTTP_RETRIES", "0"))

# Logging (file handler only when LOG_DIR is set)
LOG_DIR = os.getenv("LOG_DIR", "")
LOG_FILE = os.getenv("LOG_FILE", "pixelletter.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# -------------- HTTP Session --------------
def make_session(retries: int = HTTP_RETRIES) -> requests.Session:
    session = requests.Session()
    # connect failures only: a POST that reached the gateway is never resent
    retry = Retry(
        total=retries,
        connect=retries,
        read=0,
        status=0,
        backoff_factor=2.0,
        status_forcelist=[],
        raise_on_status=False,
    )
    session.mount("http://", HTTPAdapter(max_retries=retry))
    session.mount("https://", HTTPAdapter(max_retries=retry))
    return session


SESSION = make_session()
