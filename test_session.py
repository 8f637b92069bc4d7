import io
from unittest.mock import patch

from rich.console import Console

from mortgage_agent.core.session import BrowserSession, open_session, print_banner


class Handle:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = 0

    def _close(self):
        self.calls += 1
        if self.fail:
            raise RuntimeError("already gone")

    close = _close
    stop = _close


class FakeContext(Handle):
    def __init__(self, pages=None):
        super().__init__()
        self.pages = pages or []

    def new_page(self):
        page = object()
        self.pages.append(page)
        return page


class FakeBrowser(Handle):
    def __init__(self, contexts=None):
        super().__init__()
        self.contexts = contexts or []

    def new_context(self):
        return FakeContext()


class FakeChromium:
    def __init__(self, browser=None, error=None):
        self.browser = browser
        self.error = error
        self.connected_to = None

    def connect_over_cdp(self, url):
        self.connected_to = url
        if self.error:
            raise self.error
        return self.browser

    def launch(self, headless=True, slow_mo=0):
        if self.error:
            raise self.error
        return self.browser


class FakePlaywright(Handle):
    def __init__(self, chromium):
        super().__init__()
        self.chromium = chromium


class FakeSyncPlaywright:
    def __init__(self, playwright):
        self.playwright = playwright

    def __call__(self):
        return self

    def start(self):
        return self.playwright


def _recording_console():
    return Console(record=True, width=120, file=io.StringIO())


def test_close_is_idempotent():
    context, browser, playwright = Handle(), Handle(), Handle()
    session = BrowserSession(playwright, browser, context, page=object())

    session.close()
    session.close()

    assert (context.calls, browser.calls, playwright.calls) == (1, 1, 1)
    assert session.closed


def test_failing_closer_does_not_block_the_rest():
    context, browser, playwright = Handle(fail=True), Handle(fail=True), Handle()
    session = BrowserSession(playwright, browser, context, page=object())

    session.close()

    assert (context.calls, browser.calls, playwright.calls) == (1, 1, 1)


def test_remote_without_cdp_url_stops_playwright():
    playwright = FakePlaywright(FakeChromium())
    with patch("mortgage_agent.core.session.sync_playwright", FakeSyncPlaywright(playwright)):
        try:
            open_session(env="REMOTE", cdp_url="", view_url=None)
            assert False, "expected RuntimeError"
        except RuntimeError as e:
            assert "CDP_URL" in str(e)
    assert playwright.calls == 1


def test_failed_launch_stops_playwright():
    for env in ("LOCAL", "REMOTE"):
        playwright = FakePlaywright(FakeChromium(error=ConnectionError("no browser")))
        with patch("mortgage_agent.core.session.sync_playwright", FakeSyncPlaywright(playwright)):
            try:
                open_session(env=env, cdp_url="ws://localhost:9222", view_url=None)
                assert False, "expected ConnectionError"
            except ConnectionError:
                pass
        assert playwright.calls == 1, env


def test_remote_session_reuses_page_and_prints_view_url():
    page = object()
    context = FakeContext(pages=[page])
    chromium = FakeChromium(browser=FakeBrowser(contexts=[context]))
    playwright = FakePlaywright(chromium)
    out = _recording_console()
    view_url = "https://browser.example.com/sessions/abc123?view=[live]"

    with patch("mortgage_agent.core.session.sync_playwright", FakeSyncPlaywright(playwright)), \
            patch("mortgage_agent.core.session.console", out):
        session = open_session(env="REMOTE", cdp_url="ws://localhost:9222", view_url=view_url)

    assert chromium.connected_to == "ws://localhost:9222"
    assert session.page is page
    assert session.context is context
    text = out.export_text()
    assert "View this session live in your browser:" in text
    assert view_url in text
    assert playwright.calls == 0


def test_print_banner_boxes_message():
    out = _recording_console()
    with patch("mortgage_agent.core.session.console", out):
        print_banner("Remote session", "line one\nhttps://example.com/view")
    text = out.export_text()
    assert "Remote session" in text
    assert "https://example.com/view" in text
    assert "line one" in text


if __name__ == "__main__":
    test_close_is_idempotent()
    test_failing_closer_does_not_block_the_rest()
    test_remote_without_cdp_url_stops_playwright()
    test_failed_launch_stops_playwright()
    test_remote_session_reuses_page_and_prints_view_url()
    test_print_banner_boxes_message()
    print("Session tests passed!")
