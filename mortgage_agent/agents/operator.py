import json
import re
from typing import Dict, List, Optional, Tuple

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from ..core.config import MODEL_NAME
from ..core.errors import ResolutionError
from ..core.executor import SUPPORTED_METHODS
from ..core.types import ResolvedAction
from ..dom.elements import collect_interactive_elements
from ..dom.scoring import rank_elements

_TYPE_RE = re.compile(r"^\s*(?:type|enter|fill(?: in)?)\s+(['\"])(.*?)\1", re.IGNORECASE)
_SELECT_RE = re.compile(r"^\s*(?:select|choose)\s+(['\"])(.*?)\1", re.IGNORECASE)
_PRESS_RE = re.compile(r"^\s*press\s+(?:the\s+)?(['\"]?)([\w+]+)\1", re.IGNORECASE)


def parse_instruction(instruction: str) -> Tuple[str, List[str]]:
    """Infer the action method and its arguments from the instruction wording."""
    m = _TYPE_RE.match(instruction)
    if m:
        return "fill", [m.group(2)]
    m = _SELECT_RE.match(instruction)
    if m:
        return "select", [m.group(2)]
    m = _PRESS_RE.match(instruction)
    if m:
        return "press", [m.group(2)]
    return "click", []


def format_candidates(candidates: List[dict]) -> str:
    lines = []
    for c in candidates:
        lines.append(
            f"- id={c.get('id')} | role={c.get('role')} | name={c.get('name')} | dom_id={c.get('dom_id')} | placeholder={c.get('placeholder')}"
        )
    return "\n".join(lines)


def _to_action(elem: Dict, method: str, arguments: List[str]) -> ResolvedAction:
    return {
        "selector": elem["selector"],
        "method": method,
        "arguments": list(arguments),
        "description": f"{elem.get('role')} '{elem.get('name') or elem.get('dom_id') or ''}'",
    }


class HeuristicResolver:
    """Resolves instructions by lexical scoring only; no model call."""

    def __init__(self, min_score: float = 4.0, collect=collect_interactive_elements):
        self.min_score = min_score
        self.collect = collect

    def resolve(self, page, instruction: str) -> ResolvedAction:
        method, arguments = parse_instruction(instruction)
        elements = self.collect(page)
        ranked = rank_elements(elements, instruction, method, top_k=1)
        if not ranked or ranked[0]["score"] < self.min_score:
            raise ResolutionError(
                f"No element on the page matches instruction: '{instruction}'")
        best = ranked[0]
        print(
            f"[Operator] Heuristic match for '{instruction}': id={best['id']} {best['role']} '{best['name']}' score={best['score']:.2f}")
        return _to_action(best, method, arguments)


class LLMResolver:
    """Small LLM that maps one instruction onto one of the ranked candidates."""

    def __init__(self, llm=None, top_k: int = 15, collect=collect_interactive_elements):
        self.llm = llm
        self.top_k = top_k
        self.collect = collect

    def _model(self):
        if self.llm is None:
            self.llm = ChatOpenAI(
                model=MODEL_NAME,
                temperature=0.1,
                timeout=30,
                max_retries=1,
            )
        return self.llm

    def resolve(self, page, instruction: str) -> ResolvedAction:
        method_hint, args_hint = parse_instruction(instruction)
        elements = self.collect(page)
        top = rank_elements(elements, instruction, method_hint, top_k=self.top_k)
        if not top:
            raise ResolutionError(
                f"No interactive elements on the page for instruction: '{instruction}'")
        by_id = {str(e["id"]): e for e in top}

        system_msg = SystemMessage(
            content=(
                "You are the UI operator for a web form. You do NOT see screenshots.\n"
                "You receive one instruction and a list of DOM candidates with stable ids, roles and labels.\n"
                "Pick the single candidate the instruction refers to and the action to perform on it.\n"
                "\n"
                "OUTPUT FORMAT (JSON ONLY):\n"
                "{\"target_id\": \"<id>\", \"method\": \"click\" | \"fill\" | \"press\" | \"select\", \"arguments\": [\"...\"]}\n"
                "\n"
                "Arguments:\n"
                "- click:  []\n"
                "- fill:   [\"<text to type>\"]\n"
                "- press:  [\"Enter|Tab|Escape|...\"]\n"
                "- select: [\"<visible option label>\"]\n"
                "\n"
                "Rules:\n"
                "- Use ONLY the provided target_ids. Do not invent ids.\n"
                "- Only textbox, spinbutton, combobox or searchbox candidates may be filled.\n"
                "- If no candidate matches, return {\"target_id\": null}.\n"
                "- Return exactly one JSON object and no extra text.\n"
            )
        )
        human_msg = HumanMessage(
            content=(
                f"Instruction: {instruction}\n"
                f"Suggested method: {method_hint} {args_hint}\n\n"
                "Candidates (id, role, name, dom_id, placeholder):\n"
                f"{format_candidates(top)}\n\n"
                "Return JSON as specified in the system message."
            )
        )

        try:
            raw = self._model().invoke([system_msg, human_msg]).content
        except Exception as e:
            print(f"[Operator] Model call failed: {e}")
            raise

        if isinstance(raw, list):
            raw_text = "".join(
                [r.get("text", "") if isinstance(r, dict) else str(r) for r in raw])
        else:
            raw_text = raw if isinstance(raw, str) else str(raw)

        raw_preview = raw_text if len(raw_text) <= 300 else raw_text[:297] + "..."
        print(f"[Operator] Raw response (truncated): {raw_preview}")

        choice = parse_json_object(raw_text)
        if choice is None:
            raise ResolutionError(f"Operator returned non-JSON for '{instruction}': {raw_text}")

        target_id = choice.get("target_id")
        if target_id is None or str(target_id) not in by_id:
            raise ResolutionError(
                f"Operator found no matching element for '{instruction}' (target_id={target_id!r})")

        if method_hint != "click":
            # Payload comes from the instruction text; the model only picks the target
            method, arguments = method_hint, list(args_hint)
        else:
            method = choice.get("method") or method_hint
            if not isinstance(method, str) or method not in SUPPORTED_METHODS:
                raise ResolutionError(
                    f"Operator returned unsupported method {method!r} for '{instruction}'")
            arguments = choice.get("arguments")
            if not isinstance(arguments, list):
                arguments = [arguments] if arguments else []
            arguments = [str(a) for a in arguments]
            if method != "click" and not arguments:
                raise ResolutionError(
                    f"Operator returned {method} without an argument for '{instruction}'")

        elem = by_id[str(target_id)]
        print(f"[Operator] Resolved '{instruction}' -> {method} on {elem['selector']} {arguments}")
        return _to_action(elem, method, arguments)


def parse_json_object(raw_text: str) -> Optional[dict]:
    text = raw_text.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()
    try:
        parsed = json.loads(text)
    except Exception:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            return None
        try:
            parsed = json.loads(text[start: end + 1])
        except Exception:
            return None
    if isinstance(parsed, list) and len(parsed) == 1:
        parsed = parsed[0]
    return parsed if isinstance(parsed, dict) else None
