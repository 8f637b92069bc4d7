import json
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from ..core.config import MODEL_NAME, RESULTS_TEXT
from ..core.types import RESULT_FIELDS, MortgageResults
from .operator import parse_json_object

EXTRACTION_INSTRUCTION = (
    "Extract ALL mortgage calculation results including maximum price, purchase price, "
    "monthly payment, other costs, remaining cash, credit protection, and interest rate"
)

RESULT_SCHEMA: Dict[str, str] = {field: "string" for field in RESULT_FIELDS}

MAX_PAGE_CHARS = 12000


def focus_page_text(page_text: str, anchor: str = RESULTS_TEXT, limit: int = MAX_PAGE_CHARS) -> str:
    """Trim long page text to a window that starts at the results heading."""
    if len(page_text) <= limit:
        return page_text
    idx = page_text.find(anchor)
    if idx == -1:
        print(f"[Extractor] Page text is {len(page_text)} chars and has no '{anchor}'; keeping the first {limit}")
        return page_text[:limit]
    start = max(0, min(idx, len(page_text) - limit))
    print(f"[Extractor] Page text is {len(page_text)} chars; sending {limit} from offset {start}")
    return page_text[start:start + limit]


def normalize_results(raw: Optional[Dict[str, Any]], schema: Dict[str, str] = RESULT_SCHEMA) -> Dict[str, str]:
    """Every schema field becomes a string; anything missing becomes ''."""
    raw = raw if isinstance(raw, dict) else {}
    record: Dict[str, str] = {}
    for field in schema:
        val = raw.get(field)
        if val is None:
            record[field] = ""
        elif isinstance(val, str):
            record[field] = val.strip()
        else:
            record[field] = str(val)
    return record


class LLMExtractor:
    """Reads the visible page text and asks the model for the schema fields."""

    def __init__(self, llm=None):
        self.llm = llm

    def _model(self):
        if self.llm is None:
            self.llm = ChatOpenAI(model=MODEL_NAME, temperature=0.0, timeout=45, max_retries=1)
        return self.llm

    def extract(self, page, instruction: str, schema: Dict[str, str]) -> Dict[str, Any]:
        page_text = focus_page_text(page.inner_text("body"))

        system_msg = SystemMessage(
            content=(
                "You extract structured data from the text of a web page.\n"
                "Respond with a single JSON object whose keys are exactly the schema fields.\n"
                "Copy values as they appear on the page (keep currency symbols and percent signs).\n"
                "Use an empty string for any field you cannot find. Do not add extra keys or text."
            )
        )
        human_msg = HumanMessage(
            content=(
                f"Instruction: {instruction}\n\n"
                f"Schema (field -> type):\n{json.dumps(schema, indent=2)}\n\n"
                f"Page text:\n{page_text}"
            )
        )

        try:
            raw = self._model().invoke([system_msg, human_msg]).content
        except Exception as e:
            print(f"[Extractor] Model call failed: {e}")
            raise

        raw_text = raw if isinstance(raw, str) else str(raw)
        parsed = parse_json_object(raw_text)
        if parsed is None:
            print(f"[Extractor] Model returned non-JSON; using empty record: {raw_text[:200]}")
            return {}
        return parsed


def extract_results(
    page,
    extractor,
    instruction: str = EXTRACTION_INSTRUCTION,
    schema: Dict[str, str] = RESULT_SCHEMA,
) -> MortgageResults:
    """Run the extractor and return a record with all seven fields as strings."""
    raw = extractor.extract(page, instruction, schema)
    record = normalize_results(raw, schema)
    missing = [f for f, v in record.items() if not v]
    if missing:
        print(f"[Extractor] Fields not found (left empty): {missing}")
    return record
