"""
Tests for the shared HTTP session retry policy.
"""

from pixelletter.config import make_session


def _retry(session):
    return session.get_adapter("https://gateway.test/").max_retries


class TestMakeSession:
    """A POST that reached the gateway must never be sent twice."""

    def test_post_is_not_retried(self):
        retry = _retry(make_session(3))
        assert "POST" not in retry.allowed_methods
        assert not retry.is_retry("POST", 503)

    def test_no_status_or_read_retries(self):
        retry = _retry(make_session(3))
        assert not retry.status_forcelist
        assert retry.read == 0
        assert retry.status == 0

    def test_connect_retries_follow_argument(self):
        retry = _retry(make_session(3))
        assert retry.total == 3
        assert retry.connect == 3

    def test_both_schemes_mounted(self):
        session = make_session(2)
        assert _retry(session).connect == 2
        assert session.get_adapter("http://gateway.test/").max_retries.connect == 2
