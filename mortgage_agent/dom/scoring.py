import re
from typing import Dict, List, Set

# --- Configuration & Constants ---

BASE_ROLE_WEIGHTS = {
    "button": 1.0,
    "textbox": 1.0,
    "spinbutton": 1.0,
    "combobox": 1.0,
    "radio": 1.0,
    "link": 0.6,
    "option": 0.8,
    "menuitem": 0.8,
    "checkbox": 0.8,
    "tab": 0.8,
    "switch": 0.6,
}

INPUT_ROLES = {"textbox", "spinbutton", "combobox", "searchbox"}

# Words that describe the control rather than name it
STOPWORDS = {
    "the", "a", "an", "on", "in", "into", "to", "of", "for", "click", "type",
    "enter", "press", "select", "choose", "field", "input", "box", "button",
}

FIELD_HINTS = {"field", "input", "box"}

DESTRUCTIVE_TOKENS = {"delete", "remove", "reset", "clear", "close", "dismiss"}


def tokenize(text: str) -> List[str]:
    return [t for t in re.findall(r"[a-zA-Z0-9]+", text.lower()) if t]


def target_phrase(instruction: str) -> str:
    """Instruction text with any quoted payload removed."""
    return re.sub(r"(['\"]).*?\1", " ", instruction)


def _score_lexical_match(phrase: str, name: str, phrase_tokens: Set[str], name_tokens: Set[str]) -> float:
    """Layer 1: Lexical Match (Primary Driver)."""
    score = 0.0

    if name and name.lower() in phrase.lower():
        score += 5.0 if len(name) > 3 else 2.0

    overlap = (phrase_tokens - STOPWORDS) & name_tokens
    score += 3.0 * len(overlap)
    return score


def _score_role_bias(role: str, method: str, phrase_tokens: Set[str]) -> float:
    """Layer 2: Method-Aware Role Bias."""
    score = BASE_ROLE_WEIGHTS.get(role, 0.5)

    if method == "fill":
        score += 2.0 if role in INPUT_ROLES else -2.0
    elif method == "select":
        score += 2.0 if role in {"combobox", "option"} else 0.0
    elif method == "click" and phrase_tokens & FIELD_HINTS:
        # "Click the income input field" targets the input, not a button
        if role in INPUT_ROLES:
            score += 1.5
    return score


def _score_negative_signals(name_tokens: Set[str], phrase_tokens: Set[str]) -> float:
    """Layer 3: Negative Signals."""
    penalty = 0.0
    if name_tokens & DESTRUCTIVE_TOKENS and not phrase_tokens & DESTRUCTIVE_TOKENS:
        penalty -= 3.0
    return penalty


def is_garbage_name(name: str) -> bool:
    """Return True if name is likely garbage."""
    if not name:
        return False
    if name.isdigit():
        return True
    if len(name) < 3 and name.lower() not in {"ok", "go", "no"}:
        return True
    return False


def score_element(elem: Dict, instruction: str, method: str = "click") -> float:
    """
    Score an element for an instruction:
    1. Lexical Match (Primary)
    2. Method-Aware Role Bias
    3. Negative Signals
    4. Garbage names
    """
    name = (elem.get("name") or "").strip()
    role = elem.get("role") or ""
    placeholder = (elem.get("placeholder") or "").strip()
    dom_id = (elem.get("dom_id") or "").replace("-", " ").replace("_", " ")

    full_name = " ".join(p for p in (name, placeholder, dom_id) if p)

    phrase = target_phrase(instruction)
    phrase_tokens = set(tokenize(phrase))
    name_tokens = set(tokenize(full_name))

    score = 0.0
    score += _score_lexical_match(phrase, name, phrase_tokens, name_tokens)
    score += _score_role_bias(role, method, phrase_tokens)
    score += _score_negative_signals(name_tokens, phrase_tokens)

    if is_garbage_name(name):
        score -= 5.0

    return score


def rank_elements(elements: List[Dict], instruction: str, method: str = "click", top_k: int = 10) -> List[Dict]:
    """Return the top_k elements by score, each with a 'score' key."""
    scored = []
    for e in elements:
        e_copy = {k: e.get(k) for k in ("id", "role", "name", "dom_id",
                                        "placeholder", "value", "selector", "bounding_box")}
        e_copy["score"] = score_element(e, instruction, method)
        scored.append(e_copy)
    scored.sort(key=lambda x: x["score"], reverse=True)
    return scored[:top_k]
