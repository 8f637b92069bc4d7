from typing import Optional


def accessible_name(el) -> str:
    """Best-effort accessible name: aria-label -> title -> aria-labelledby -> label[for] -> inner_text."""
    for attr in ("aria-label", "title"):
        val = el.get_attribute(attr)
        if val:
            return val.strip()

    labelled_by = el.get_attribute("aria-labelledby")
    if labelled_by:
        for id_ in labelled_by.split():
            try:
                labelled_el = el.page.locator(f"[id='{id_}']")
                if labelled_el.count() > 0:
                    txt = labelled_el.first.inner_text().strip()
                    if txt:
                        return txt
            except Exception:
                continue

    # Form inputs are usually named by a <label for=...>
    el_id = el.get_attribute("id")
    if el_id:
        try:
            label = el.page.locator(f"label[for='{el_id}']")
            if label.count() > 0:
                txt = label.first.inner_text().strip()
                if txt:
                    return txt
        except Exception:
            pass

    try:
        txt = el.inner_text().strip()
        if txt:
            return txt
    except Exception:
        pass

    return ""


def element_id(el) -> Optional[str]:
    try:
        val = el.get_attribute("id")
    except Exception:
        return None
    return val or None
