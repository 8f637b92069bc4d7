from typing import Any, Dict, List, Optional, TypedDict


class ResolvedAction(TypedDict):
    selector: str
    method: str  # click | fill | press | select
    arguments: List[str]
    description: str


class MortgageResults(TypedDict):
    maxPrice: str
    purchasePrice: str
    monthlyPayment: str
    otherHousingCosts: str
    remainingCash: str
    optionalCP: str
    rate: str


RESULT_FIELDS = [
    "maxPrice",
    "purchasePrice",
    "monthlyPayment",
    "otherHousingCosts",
    "remainingCash",
    "optionalCP",
    "rate",
]


class ScenarioState(TypedDict):
    run_id: str
    run_dir: str
    inputs: Dict[str, str]
    history: List[str]
    step: int
    results: Optional[Dict[str, str]]
    done: bool
    # Live collaborators (kept in-memory for single-run)
    page: Any
    cache: Any
    extractor: Any
    logger: Any
