import time

from .config import ACTION_SETTLE_MS, ACTION_TIMEOUT_MS
from .errors import ActionExecutionError
from .types import ResolvedAction

SUPPORTED_METHODS = {"click", "fill", "press", "select"}


def _get_locator(page, selector: str):
    locator = page.locator(selector)
    try:
        if locator.count() > 1:
            print(
                f"[Executor] Selector matched {locator.count()} elements; using the first.")
    except Exception:
        pass
    return locator.first


def _safe_click(locator, timeout_ms: int):
    locator.wait_for(state="visible", timeout=timeout_ms)
    locator.click(timeout=timeout_ms)


def _safe_fill(locator, text: str, timeout_ms: int):
    locator.wait_for(state="visible", timeout=timeout_ms)
    # Focus first so masked currency inputs accept the value
    locator.click(timeout=timeout_ms)
    locator.fill(text, timeout=timeout_ms)


def _safe_select(locator, option: str, timeout_ms: int):
    locator.wait_for(state="visible", timeout=timeout_ms)
    locator.select_option(label=option, timeout=timeout_ms)


def execute_action(page, action: ResolvedAction, timeout_ms: int = ACTION_TIMEOUT_MS) -> None:
    """Perform one resolved action on the live page.

    Every failure surfaces as ActionExecutionError so callers can tell a
    stale target apart from other errors.
    """
    method = action.get("method") or ""
    selector = action.get("selector") or ""
    arguments = action.get("arguments") or []

    if method not in SUPPORTED_METHODS:
        raise ActionExecutionError(f"Unknown action method: {method!r}")
    if not selector:
        raise ActionExecutionError(f"Action has no selector: {action}")
    if method in ("fill", "press", "select") and not arguments:
        raise ActionExecutionError(f"{method} action missing argument on {selector}")

    print(
        f"[Executor] {method} on {selector} args={arguments} ({action.get('description', '')})")

    start = time.time()
    try:
        locator = _get_locator(page, selector)
        if method == "click":
            _safe_click(locator, timeout_ms)
        elif method == "fill":
            _safe_fill(locator, arguments[0], timeout_ms)
        elif method == "press":
            locator.press(arguments[0], timeout=timeout_ms)
        elif method == "select":
            _safe_select(locator, arguments[0], timeout_ms)
    except Exception as e:
        duration = time.time() - start
        print(f"[Executor] Action failed in {duration:.2f}s: {e}")
        raise ActionExecutionError(
            f"{method} failed on '{selector}': {e}") from e

    duration = time.time() - start
    print(f"[Executor] Action succeeded in {duration:.2f}s")
    # The action already happened; a settle failure must not look like a stale target
    page.wait_for_timeout(ACTION_SETTLE_MS)
