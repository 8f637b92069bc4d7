from pathlib import Path
from typing import Any, Dict, List, Optional

from .imaging import draw_boxes_on_image

OVERLAY_ATTR = "data-mortgage-agent-overlay"

_DRAW_JS = """
(boxes) => {
    for (const b of boxes) {
        const el = document.createElement('div');
        el.setAttribute('%s', '1');
        el.style.position = 'absolute';
        el.style.left = (b.x + window.scrollX) + 'px';
        el.style.top = (b.y + window.scrollY) + 'px';
        el.style.width = b.width + 'px';
        el.style.height = b.height + 'px';
        el.style.backgroundColor = 'rgba(255, 255, 0, 0.3)';
        el.style.border = '2px solid orange';
        el.style.pointerEvents = 'none';
        el.style.zIndex = '10000';
        document.body.appendChild(el);
    }
}
""" % OVERLAY_ATTR

_CLEAR_JS = """
() => {
    document.querySelectorAll('[%s]').forEach((el) => el.remove());
}
""" % OVERLAY_ATTR


class OverlayRenderer:
    """Highlights resolved targets on the page for whoever watches the run.

    Purely cosmetic: nothing here is allowed to abort the scenario.
    """

    def __init__(self, run_dir: Optional[Path] = None):
        self.run_dir = Path(run_dir) if run_dir else None
        self.drawn = 0

    def _boxes(self, page, targets: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        boxed = []
        for target in targets:
            try:
                box = page.locator(target["selector"]).first.bounding_box(timeout=1000)
            except Exception as e:
                print(f"[Overlay] No box for {target.get('selector')}: {e}")
                continue
            if box:
                boxed.append({"bounding_box": box, "description": target.get("description", "")})
        return boxed

    def draw(self, page, targets: List[Dict[str, Any]]) -> int:
        """Draw highlight boxes over targets; returns how many were drawn."""
        try:
            boxed = self._boxes(page, targets)
            if not boxed:
                return 0
            page.evaluate(_DRAW_JS, [b["bounding_box"] for b in boxed])
            self.drawn += 1
            if self.run_dir:
                self._annotate(page, boxed)
            return len(boxed)
        except Exception as e:
            print(f"[Overlay] Draw failed (ignored): {e}")
            return 0

    def _annotate(self, page, boxed: List[Dict[str, Any]]) -> None:
        raw_path = self.run_dir / f"overlay_{self.drawn:02d}_raw.png"
        out_path = self.run_dir / f"overlay_{self.drawn:02d}.png"
        try:
            page.screenshot(path=str(raw_path))
            draw_boxes_on_image(raw_path, boxed, out_path)
            print(f"[Overlay] Annotated screenshot: {out_path}")
        except Exception as e:
            print(f"[Overlay] Failed to annotate screenshot: {e}")

    def clear(self, page) -> None:
        try:
            page.evaluate(_CLEAR_JS)
        except Exception as e:
            print(f"[Overlay] Clear failed (ignored): {e}")
