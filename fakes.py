"""In-memory stand-ins for the Playwright page/locator/session used by the tests."""

from typing import Any, Dict, List, Optional, Set

from PIL import Image
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

LOCATION = "Waterloo, ON, Canada"


def role_selector(role: str, name: str) -> str:
    return f'role={role}[name="{name}"]'


def _elem(selector: str, role: str, name: str, dom_id: str = "", y: int = 0) -> Dict[str, Any]:
    return {
        "selector": selector,
        "role": role,
        "name": name,
        "dom_id": dom_id,
        "placeholder": "",
        "value": "",
        "bounding_box": {"x": 20, "y": 40 + y, "width": 200, "height": 30},
    }


def calculator_elements() -> List[Dict[str, Any]]:
    """The interactive controls of the calculator, all steps flattened."""
    return [
        _elem("[id='municipality']", "textbox", "Location", "municipality", 0),
        _elem("[id='house']", "radio", "House", "house", 40),
        _elem("[id='condo']", "radio", "Condo", "condo", 80),
        _elem("[id='annualIncome']", "textbox", "Annual income", "annualIncome", 120),
        _elem("[id='downPayment']", "textbox", "Down payment", "downPayment", 160),
        _elem("[id='monthlyExpenses']", "textbox", "Monthly expenses", "monthlyExpenses", 200),
        _elem("[id='monthlyDebt']", "textbox", "Monthly debt payments", "monthlyDebt", 240),
        _elem(role_selector("button", "Next"), "button", "Next", "", 280),
        _elem(role_selector("button", "See your results"), "button", "See your results", "", 320),
    ]


class FakeClock:
    """Stands in for the `time` module; advanced by FakePage.wait_for_timeout."""

    def __init__(self):
        self.ms = 0.0

    def monotonic(self) -> float:
        return self.ms / 1000

    def advance(self, ms: float) -> None:
        self.ms += ms


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    def nth(self, i: int) -> "FakeLocator":
        return self

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> {selector}")

    def count(self) -> int:
        return 1 if self.page.is_present(self.selector) else 0

    def _require(self, timeout=None) -> None:
        if not self.page.is_present(self.selector):
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for locator('{self.selector}')")

    def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self._require(timeout)

    def is_visible(self) -> bool:
        return self.page.is_present(self.selector)

    def bounding_box(self, timeout: Optional[float] = None) -> Optional[Dict[str, float]]:
        elem = self.page.elements.get(self.selector)
        return dict(elem["bounding_box"]) if elem else None

    def click(self, timeout: Optional[float] = None) -> None:
        self._require(timeout)
        self.page.record("click", self.selector)

    def fill(self, text: str, timeout: Optional[float] = None) -> None:
        self._require(timeout)
        self.page.record("fill", self.selector, text)

    def press(self, key: str, timeout: Optional[float] = None) -> None:
        self._require(timeout)
        self.page.record("press", self.selector, key)

    def select_option(self, label: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self._require(timeout)
        self.page.record("select", self.selector, label)


class FakePage:
    """Simulates the calculator: suggestions appear after typing a location,
    results appear after submitting (unless show_results is False)."""

    def __init__(self, elements: Optional[List[Dict[str, Any]]] = None, show_results: bool = True):
        self.elements: Dict[str, Dict[str, Any]] = {
            e["selector"]: e for e in (elements if elements is not None else calculator_elements())}
        self.extra: Set[str] = set()
        self.show_results = show_results
        self.actions: List[tuple] = []
        self.waits: List[int] = []
        self.evaluated: List[Any] = []
        self.url = ""
        self.body_text = ""
        self.clock = FakeClock()

    # --- test helpers ---
    def is_present(self, selector: str) -> bool:
        return selector in self.elements or selector in self.extra

    def snapshot(self) -> List[Dict[str, Any]]:
        out = []
        for i, e in enumerate(self.elements.values()):
            item = dict(e)
            item["id"] = str(i)
            out.append(item)
        return out

    def record(self, kind: str, selector: str, value: Any = None) -> None:
        self.actions.append((kind, selector, value))
        if kind == "fill" and selector == "[id='municipality']":
            self.extra.add(".pac-container")
            self.extra.add(f".pac-container >> text={value}")
        if kind == "click" and selector == role_selector("button", "See your results") and self.show_results:
            self.extra.add("text=Maximum home price you can afford")
            self.body_text = (
                "Maximum home price you can afford $612,000\n"
                "Purchase price $612,000\nMonthly mortgage payment $3,120\n"
                "Interest rate 4.84%"
            )

    # --- Playwright page surface ---
    def goto(self, url: str) -> None:
        self.url = url

    def wait_for_timeout(self, ms: float) -> None:
        self.waits.append(ms)
        self.clock.advance(ms)

    def wait_for_selector(self, selector: str, timeout: Optional[float] = None) -> None:
        if not self.is_present(selector):
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for selector '{selector}'")

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def get_by_role(self, role: str, name: Optional[str] = None) -> FakeLocator:
        return FakeLocator(self, role_selector(role, name or ""))

    def evaluate(self, expression: str, arg: Any = None) -> None:
        self.evaluated.append((expression, arg))

    def inner_text(self, selector: str) -> str:
        return self.body_text

    def screenshot(self, path: str, **kwargs) -> None:
        Image.new("RGB", (800, 600), color="white").save(path)


class FakeSession:
    def __init__(self, page: FakePage):
        self.page = page
        self.close_count = 0

    def close(self) -> None:
        self.close_count += 1


class FakeExtractor:
    def __init__(self, payload: Optional[Dict[str, Any]] = None):
        self.payload = payload
        self.calls = []

    def extract(self, page, instruction, schema):
        self.calls.append((instruction, dict(schema)))
        return self.payload


class FakeLLMResponse:
    def __init__(self, content):
        self.content = content


class FakeLLM:
    def __init__(self, content):
        self.content = content
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        return FakeLLMResponse(self.content)
