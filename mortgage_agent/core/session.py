from typing import Any, Optional

from playwright.sync_api import sync_playwright
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .config import BROWSER_ENV, CDP_URL, HEADLESS, SESSION_VIEW_URL, SLOW_MO

console = Console()


def print_banner(title: str, message: str) -> None:
    """Print a boxed console message."""
    # Text() so URLs containing brackets are not read as markup
    console.print(Panel(Text(message), title=title, expand=False))


class BrowserSession:
    """Playwright handles owned by one scenario run."""

    def __init__(self, playwright: Any, browser: Any, context: Any, page: Any):
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        for name, closer in (
            ("context", getattr(self.context, "close", None)),
            ("browser", getattr(self.browser, "close", None)),
            ("playwright", getattr(self.playwright, "stop", None)),
        ):
            if closer is None:
                continue
            try:
                closer()
            except Exception as e:
                print(f"[Session] Failed to close {name}: {e}")
        print("[Session] Browser session closed")


def open_session(env: str = BROWSER_ENV, cdp_url: str = CDP_URL, view_url: Optional[str] = SESSION_VIEW_URL) -> BrowserSession:
    """Start Playwright and open a page, locally or over CDP."""
    p = sync_playwright().start()
    try:
        if env == "REMOTE":
            if not cdp_url:
                raise RuntimeError("BROWSER_ENV=REMOTE requires CDP_URL")
            print(f"[Session] Connecting to remote browser at {cdp_url}")
            browser = p.chromium.connect_over_cdp(cdp_url)
            context = browser.contexts[0] if browser.contexts else browser.new_context()
            page = context.pages[0] if context.pages else context.new_page()
            if view_url:
                print_banner(
                    "Remote session",
                    f"View this session live in your browser:\n{view_url}",
                )
        else:
            print("[Session] Launching local Chromium...")
            browser = p.chromium.launch(headless=HEADLESS, slow_mo=SLOW_MO)
            context = browser.new_context()
            page = context.new_page()
    except Exception:
        p.stop()
        raise

    return BrowserSession(p, browser, context, page)
