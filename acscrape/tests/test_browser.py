"""Tests for browser session creation and the requests-backed session."""

from unittest.mock import MagicMock, patch

import pytest
import requests  # type: ignore[import-untyped]

from acscrape.browser import RequestsSession, create_session, open_session
from acscrape.errors import ConfigurationError, NavigationError

PAGE = (
    b'<html><head><link rel="next" href="?p=2"/></head>'
    b'<body><p class="a b">x</p></body></html>'
)


def _response(content=PAGE, error=None):
    resp = MagicMock()
    resp.content = content
    if error is not None:
        resp.raise_for_status.side_effect = error
    return resp


class TestRequestsSession:
    def test_navigate_and_query(self):
        with patch("acscrape.browser.requests.Session") as session_cls:
            session_cls.return_value.get.return_value = _response()
            session = RequestsSession()
            session.navigate("https://www.climatico.ro/aer-conditionat/vrv")

            link = session.find_single("head > link[rel=next]")

            assert session.current_source() == PAGE
            assert session.attribute(link, "href") == "?p=2"
            assert session.attribute(link, "title") is None
            assert session.find_single("head > link[rel=prev]") is None

    def test_multi_valued_attribute_is_joined(self):
        with patch("acscrape.browser.requests.Session") as session_cls:
            session_cls.return_value.get.return_value = _response()
            session = RequestsSession()
            session.navigate("https://www.climatico.ro/")

            assert session.attribute(session.find_single("p"), "class") == "a b"

    def test_connection_error(self):
        with patch("acscrape.browser.requests.Session") as session_cls:
            session_cls.return_value.get.side_effect = requests.exceptions.ConnectionError("refused")
            session = RequestsSession()

            with pytest.raises(NavigationError) as exc_info:
                session.navigate("https://www.climatico.ro/")

        assert exc_info.value.url == "https://www.climatico.ro/"

    def test_http_error_status(self):
        with patch("acscrape.browser.requests.Session") as session_cls:
            session_cls.return_value.get.return_value = _response(
                error=requests.exceptions.HTTPError("404 Client Error")
            )
            session = RequestsSession()

            with pytest.raises(NavigationError):
                session.navigate("https://www.climatico.ro/missing")

    def test_new_page_replaces_old(self):
        with patch("acscrape.browser.requests.Session") as session_cls:
            session_cls.return_value.get.side_effect = [
                _response(),
                _response(b"<html><head></head><body></body></html>"),
            ]
            session = RequestsSession()
            session.navigate("https://www.climatico.ro/a")
            assert session.find_single("head > link[rel=next]") is not None

            session.navigate("https://www.climatico.ro/b")
            assert session.find_single("head > link[rel=next]") is None


class TestSessionFactory:
    def test_requests_engine(self):
        session = create_session("requests")
        try:
            assert isinstance(session, RequestsSession)
        finally:
            session.close()

    def test_unknown_engine(self):
        with pytest.raises(ConfigurationError):
            create_session("selenium")

    def test_open_session_closes_on_error(self):
        fake = MagicMock()
        with patch("acscrape.browser.create_session", return_value=fake):
            with pytest.raises(RuntimeError):
                with open_session("requests"):
                    raise RuntimeError("boom")

        fake.close.assert_called_once()

    def test_open_session_closes_on_success(self):
        fake = MagicMock()
        with patch("acscrape.browser.create_session", return_value=fake):
            with open_session("requests") as session:
                assert session is fake

        fake.close.assert_called_once()
