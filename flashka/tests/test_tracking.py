"""
Tests for outbound tracking and the SMS composer.
"""

import time

import requests

from ..sms import compose_sms_link
from ..tracking import HttpNotificationSink, NullSink


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Stands in for requests.Session, records posts."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response


class TestHttpNotificationSink:

    def test_posts_json_to_event_endpoint(self):
        session = FakeSession()
        sink = HttpNotificationSink(
            "https://kiosk.example.com/", timeout=2.0, session=session, background=False,
        )

        sink.notify("win", {"attempts": 7})

        assert session.posts == [
            ("https://kiosk.example.com/api/track/win", {"attempts": 7}, 2.0),
        ]

    def test_empty_payload(self):
        session = FakeSession()
        sink = HttpNotificationSink("http://host", session=session, background=False)

        sink.notify("play")

        assert session.posts[0][1] == {}

    def test_network_error_swallowed(self):
        session = FakeSession(error=requests.ConnectionError("unreachable"))
        sink = HttpNotificationSink("http://host", session=session, background=False)

        sink.notify("play")

        assert len(session.posts) == 1

    def test_http_error_swallowed(self):
        session = FakeSession(response=FakeResponse(503))
        sink = HttpNotificationSink("http://host", session=session, background=False)

        sink.notify("win")

    def test_unknown_event_not_sent(self):
        session = FakeSession()
        sink = HttpNotificationSink("http://host", session=session, background=False)

        sink.notify("lose")

        assert session.posts == []

    def test_custom_endpoints(self):
        session = FakeSession()
        sink = HttpNotificationSink(
            "http://host",
            endpoints={"play": "/hooks/start"},
            session=session,
            background=False,
        )

        assert sink.url_for("play") == "http://host/hooks/start"
        assert sink.url_for("win") is None

    def test_null_sink(self):
        NullSink().notify("win", {"attempts": 1})


class SlowFakeSession(FakeSession):
    """Records each post after a delay, like a slow network."""

    def post(self, url, json=None, timeout=None):
        time.sleep(0.2)
        return super().post(url, json=json, timeout=timeout)


class TestBackgroundDelivery:

    def test_close_waits_for_pending_posts(self):
        session = SlowFakeSession()
        sink = HttpNotificationSink("http://host", session=session)

        sink.notify("play")
        sink.notify("win", {"attempts": 4})
        sink.close(timeout=5)

        assert sorted(url for url, _, _ in session.posts) == [
            "http://host/api/track/play",
            "http://host/api/track/win",
        ]

    def test_close_without_pending_posts(self):
        sink = HttpNotificationSink("http://host", session=FakeSession(), background=False)
        sink.notify("play")

        sink.close()

    def test_null_sink_close(self):
        NullSink().close(timeout=1)


class TestSmsLink:

    def test_body_is_encoded(self):
        link = compose_sms_link("I won! 5 attempts & 8 pairs")

        assert link == "sms:?&body=I%20won%21%205%20attempts%20%26%208%20pairs"

    def test_recipient(self):
        assert compose_sms_link("hi", recipient=" +61400000000 ") == "sms:+61400000000?&body=hi"
