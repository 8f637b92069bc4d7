from typing import Any, Dict, List

from .accessibility import accessible_name, element_id
from ..core.config import CLICKABLE_ROLES


def build_selector(role: str, name: str, dom_id: str, nth: int) -> str:
    """Playwright selector that re-finds the element on a later visit."""
    if dom_id:
        return f"[id={dom_id!r}]"
    if name:
        escaped = name.replace('"', '\\"')
        return f'role={role}[name="{escaped}"]'
    return f"role={role} >> nth={nth}"


def collect_interactive_elements(page) -> List[Dict[str, Any]]:
    """Return visible interactive elements with bounding boxes and a selector."""
    elements: List[Dict[str, Any]] = []
    idx = 0

    for role in CLICKABLE_ROLES:
        loc = page.get_by_role(role)
        count = loc.count()

        for i in range(count):
            el = loc.nth(i)
            try:
                if not el.is_visible():
                    continue
            except Exception:
                continue

            box = el.bounding_box()
            if not box:
                continue

            area = box["width"] * box["height"]
            if area < 50:
                continue

            name = accessible_name(el)
            dom_id = element_id(el) or ""
            placeholder = el.get_attribute("placeholder") or ""

            value = ""
            if role in ("textbox", "spinbutton", "combobox"):
                try:
                    value = el.input_value()
                except Exception:
                    pass

            elements.append(
                {
                    "id": str(idx),
                    "role": role,
                    "name": name,
                    "dom_id": dom_id,
                    "placeholder": placeholder,
                    "value": value,
                    "bounding_box": box,
                    "selector": build_selector(role, name, dom_id, i),
                }
            )
            idx += 1

    # De-duplication: group by spatial location (rounded to nearest 2px)
    spatial_map: Dict[str, List[Dict[str, Any]]] = {}
    for e in elements:
        box = e["bounding_box"]
        key = f"{round(box['x'] / 2)}_{round(box['y'] / 2)}_{round(box['width'] / 2)}_{round(box['height'] / 2)}"
        spatial_map.setdefault(key, []).append(e)

    unique_elements = []
    for group in spatial_map.values():
        if len(group) == 1:
            unique_elements.append(group[0])
            continue

        # Prefer elements with an id, then a longer name
        def sort_key(x):
            return (bool(x["dom_id"]), bool(x["name"]), len(x["name"] or ""))

        group.sort(key=sort_key, reverse=True)
        unique_elements.append(group[0])

    for i, e in enumerate(unique_elements):
        e["id"] = str(i)

    return unique_elements
