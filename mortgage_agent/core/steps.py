"""
Scenario steps for the mortgage affordability calculator.

Each function is one node of the linear scenario graph. Form fields go
through the action cache; the stable controls (suggestion list, Next and
submit buttons) are driven directly.
"""

import time
from pathlib import Path
from typing import List

from ..agents.extractor import extract_results
from .artifacts import save_results
from .config import (
    ACTION_TIMEOUT_MS,
    CALCULATOR_URL,
    NAVIGATION_SETTLE_MS,
    RESULTS_POLL_MS,
    RESULTS_SELECTORS,
    RESULTS_TIMEOUT_MS,
    SUBMIT_SETTLE_MS,
    SUGGESTION_TIMEOUT_MS,
)
from .errors import WaitTimeoutError
from .history import record_step
from .logger import to_auxiliary
from .types import ScenarioState

LOG_CATEGORY = "mortgage-calculator"
SUGGESTION_CONTAINER = ".pac-container"


def click_button(page, name: str) -> None:
    page.get_by_role("button", name=name).click(timeout=ACTION_TIMEOUT_MS)


def _fill_field(state: ScenarioState, label: str, value: str) -> None:
    cache = state["cache"]
    page = state["page"]
    cache.act(page, f"Click the {label} input field")
    cache.act(page, f"Type '{value}' into the {label} field")


def navigate(state: ScenarioState) -> ScenarioState:
    page = state["page"]
    print(f"[Driver] Navigating to {CALCULATOR_URL}")
    page.goto(CALCULATOR_URL)
    page.wait_for_timeout(NAVIGATION_SETTLE_MS)
    return record_step(state, "navigate", CALCULATOR_URL)


def location_step(state: ScenarioState) -> ScenarioState:
    page = state["page"]
    cache = state["cache"]
    location = state["inputs"]["location"]

    cache.act(page, "Click the location input field")
    cache.act(page, f"Type '{location}' into the location input field")

    page.wait_for_selector(SUGGESTION_CONTAINER, timeout=SUGGESTION_TIMEOUT_MS)
    page.locator(SUGGESTION_CONTAINER).locator(f"text={location}").first.click(
        timeout=ACTION_TIMEOUT_MS)

    click_button(page, "Next")
    return record_step(state, "location", location)


def property_type_step(state: ScenarioState) -> ScenarioState:
    page = state["page"]
    property_type = state["inputs"]["property_type"]
    state["cache"].act(page, f"Click on {property_type}")
    click_button(page, "Next")
    return record_step(state, "property_type", property_type)


def income_step(state: ScenarioState) -> ScenarioState:
    income = state["inputs"]["annual_income"]
    _fill_field(state, "annual income", income)
    click_button(state["page"], "Next")
    return record_step(state, "income", income)


def down_payment_step(state: ScenarioState) -> ScenarioState:
    down_payment = state["inputs"]["down_payment"]
    _fill_field(state, "down payment", down_payment)
    click_button(state["page"], "Next")
    return record_step(state, "down_payment", down_payment)


def expenses_step(state: ScenarioState) -> ScenarioState:
    expenses = state["inputs"]["monthly_expenses"]
    _fill_field(state, "monthly expenses", expenses)
    click_button(state["page"], "Next")
    return record_step(state, "expenses", expenses)


def debt_step(state: ScenarioState) -> ScenarioState:
    debt = state["inputs"]["monthly_debt"]
    _fill_field(state, "monthly debt payments", debt)
    return record_step(state, "debt", debt)


def submit(state: ScenarioState) -> ScenarioState:
    page = state["page"]
    click_button(page, "See your results")
    if SUBMIT_SETTLE_MS:
        page.wait_for_timeout(SUBMIT_SETTLE_MS)
    return record_step(state, "submit")


def wait_for_results(
    page,
    markers: List[str] = RESULTS_SELECTORS,
    timeout_ms: int = RESULTS_TIMEOUT_MS,
    poll_ms: int = RESULTS_POLL_MS,
) -> str:
    """Poll until any results marker is present; returns the marker found."""
    deadline = time.monotonic() + timeout_ms / 1000
    while True:
        for marker in markers:
            try:
                if page.locator(marker).count() > 0:
                    print(f"[Driver] Results marker found: {marker}")
                    return marker
            except Exception as e:
                print(f"[Driver] Marker check failed for {marker}: {e}")
        remaining_ms = int((deadline - time.monotonic()) * 1000)
        if remaining_ms <= 0:
            break
        page.wait_for_timeout(min(poll_ms, remaining_ms))
    raise WaitTimeoutError(f"results marker (one of {markers})", timeout_ms)


def wait_for_results_step(state: ScenarioState) -> ScenarioState:
    marker = wait_for_results(state["page"])
    return record_step(state, "wait_for_results", marker)


def extract(state: ScenarioState) -> ScenarioState:
    results = extract_results(state["page"], state["extractor"])
    state["results"] = results
    return record_step(state, "extract", f"{sum(1 for v in results.values() if v)}/{len(results)} fields")


def log_results(state: ScenarioState) -> ScenarioState:
    results = state.get("results") or {}
    state["logger"].log(
        category=LOG_CATEGORY,
        message="Mortgage Affordability Results",
        auxiliary=to_auxiliary(results),
    )
    if state.get("run_dir"):
        save_results(Path(state["run_dir"]), results)
    state["done"] = True
    return record_step(state, "log_results")
