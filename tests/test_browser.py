"""Tests for the browser helpers and session lifecycle."""

from playwright.sync_api import Error, TimeoutError
from passkey_crawler.modules.browser.browser import PlaywrightHelper, PlaywrightSession


class WaitingPage:

    def __init__(self, error=None):
        self.error = error
        self.waits = []

    def wait_for_load_state(self, state=None, timeout=None):
        if self.error:
            raise self.error

    def wait_for_timeout(self, ms):
        self.waits.append(ms)

    def title(self):
        raise Error("Target page, context or browser has been closed")


class Closable:

    def __init__(self, error=None):
        self.error = error
        self.calls = 0
        self.handlers = {}

    def on(self, event, handler):
        self.handlers[event] = handler

    def close(self):
        self.calls += 1
        if self.error:
            raise self.error

    def stop(self):
        self.close()


class FakeRequest:

    def __init__(self, url):
        self.url = url


class TestPlaywrightHelper:

    def test_networkidle_timeout_is_tolerated(self):
        page = WaitingPage(TimeoutError("Timeout 8000ms exceeded"))
        PlaywrightHelper.wait_for_page_load(page, {"timeout_networkidle": 8, "sleep_after_navigation": 5})
        assert page.waits == [5000]

    def test_networkidle_error_is_tolerated(self):
        page = WaitingPage(Error("Navigation interrupted"))
        PlaywrightHelper.wait_for_page_load(page, {"wait_for_networkidle": True, "sleep_after_navigation": 0})
        assert page.waits == [0]

    def test_title_of_closed_page(self):
        assert PlaywrightHelper.title(WaitingPage()) == ""

    def test_origin(self):
        assert PlaywrightHelper.origin("https://www.example.com/a/b?c=d") == "https://www.example.com"


class TestPlaywrightSession:

    def test_records_requests(self):
        context = Closable()
        session = PlaywrightSession(Closable(), Closable(), context, page=None)
        context.handlers["request"](FakeRequest("https://www.example.com/webauthn"))
        context.handlers["request"](FakeRequest("https://www.example.com/webauthn"))
        assert session.observed_requests == {"https://www.example.com/webauthn"}

    def test_close_is_idempotent(self):
        playwright, browser, context = Closable(), Closable(), Closable()
        session = PlaywrightSession(playwright, browser, context, page=None)
        session.close()
        session.close()
        assert (playwright.calls, browser.calls, context.calls) == (1, 1, 1)

    def test_close_releases_everything_despite_errors(self):
        playwright, browser = Closable(), Closable()
        context = Closable(Error("Target closed"))
        session = PlaywrightSession(playwright, browser, context, page=None)
        session.close()
        assert (playwright.calls, browser.calls, context.calls) == (1, 1, 1)
