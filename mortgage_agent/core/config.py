import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Core destinations
CALCULATOR_URL = os.getenv(
    "CALCULATOR_URL", "https://ix0.apps.td.com/mortgage-affordability-calculator/")

# Browser session
BROWSER_ENV = os.getenv("BROWSER_ENV", "LOCAL").upper()  # LOCAL | REMOTE
CDP_URL = os.getenv("CDP_URL", "")
SESSION_VIEW_URL = os.getenv("SESSION_VIEW_URL", "")
HEADLESS = os.getenv("HEADLESS", "false").lower() in ("1", "true", "yes")
SLOW_MO = int(os.getenv("SLOW_MO", "0"))

# Timing (milliseconds)
NAVIGATION_SETTLE_MS = 2000
SUBMIT_SETTLE_MS = int(os.getenv("SUBMIT_SETTLE_MS", "5000"))
RESULTS_TIMEOUT_MS = int(os.getenv("RESULTS_TIMEOUT_MS", "60000"))
RESULTS_POLL_MS = 500
SUGGESTION_TIMEOUT_MS = 10000
ACTION_TIMEOUT_MS = 5000
ACTION_SETTLE_MS = 300
OVERLAY_DISPLAY_MS = 1000

# Language model
MODEL_NAME = os.getenv("MODEL_NAME", "gpt-4o-mini")

# Output paths
OUT_DIR = Path(os.getenv("ARTIFACTS_DIR", "artifacts/mortgage_agent/"))
CACHE_PATH = Path(os.getenv("ACTION_CACHE_PATH", "cache.json"))

# Scenario inputs
DEFAULT_INPUTS = {
    "location": os.getenv("MORTGAGE_LOCATION", "Waterloo, ON, Canada"),
    "property_type": os.getenv("MORTGAGE_PROPERTY_TYPE", "House"),
    "annual_income": os.getenv("MORTGAGE_ANNUAL_INCOME", "120000"),
    "down_payment": os.getenv("MORTGAGE_DOWN_PAYMENT", "50000"),
    "monthly_expenses": os.getenv("MORTGAGE_MONTHLY_EXPENSES", "2000"),
    "monthly_debt": os.getenv("MORTGAGE_MONTHLY_DEBT", "500"),
}

# Results page markers
RESULTS_TEXT = "Maximum home price you can afford"
RESULTS_SELECTORS = [
    f"text={RESULTS_TEXT}",
    '[class*="result"]',
    '[class*="Result"]',
    '[data-testid*="result"]',
]

# Element filtering
CLICKABLE_ROLES = [
    "button",
    "link",
    "checkbox",
    "radio",
    "switch",
    "menuitem",
    "option",
    "tab",
    "textbox",
    "spinbutton",
    "combobox",
]
