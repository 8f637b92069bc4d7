from pathlib import Path
from typing import Any, Dict, List

from PIL import Image, ImageDraw, ImageFont


def draw_boxes_on_image(
    screenshot_path: Path,
    targets: List[Dict[str, Any]],
    out_path: Path,
) -> Path:
    """Outline each target's bounding box on the screenshot and label it."""
    img = Image.open(screenshot_path).convert("RGB")
    draw = ImageDraw.Draw(img)

    try:
        font = ImageFont.load_default()
    except Exception:
        font = None

    for idx, target in enumerate(targets):
        box = target.get("bounding_box")
        if not box:
            continue

        x = int(box["x"])
        y = int(box["y"])
        w = int(box["width"])
        h = int(box["height"])

        draw.rectangle([x, y, x + w, y + h], outline=(255, 200, 0), width=3)

        label = target.get("description") or str(idx)
        text_pos = (x + 2, max(y - 12, 0))
        draw.text(text_pos, label[:40], fill=(255, 120, 0), font=font)

    img.save(out_path)
    return out_path
